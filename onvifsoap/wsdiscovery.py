"""
Minimal WS-Discovery probe: find ONVIF devices and their device service XAddrs.
"""

import logging
import socket
import struct
import time
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import local_name

logger = logging.getLogger(__name__)

MULTICAST_GROUP = '239.255.255.250'
DISCOVERY_PORT = 3702

# WS-Discovery 1.0 Probe with ONVIF Types
PROBE_TEMPLATE = '''<?xml version="1.0" encoding="UTF-8"?>
<s:Envelope xmlns:s="http://www.w3.org/2003/05/soap-envelope"
            xmlns:a="http://schemas.xmlsoap.org/ws/2004/08/addressing">
  <s:Header>
    <a:Action s:mustUnderstand="1">http://schemas.xmlsoap.org/ws/2005/04/discovery/Probe</a:Action>
    <a:MessageID>{message_id}</a:MessageID>
    <a:ReplyTo>
      <a:Address>http://schemas.xmlsoap.org/ws/2004/08/addressing/role/anonymous</a:Address>
    </a:ReplyTo>
    <a:To s:mustUnderstand="1">urn:schemas-xmlsoap-org:ws:2005:04:discovery</a:To>
  </s:Header>
  <s:Body>
    <Probe xmlns="http://schemas.xmlsoap.org/ws/2005/04/discovery">
      <Types xmlns:dn="http://www.onvif.org/ver10/network/wsdl">dn:NetworkVideoTransmitter</Types>
    </Probe>
  </s:Body>
</s:Envelope>'''


@dataclass
class ProbeMatch:
    """One device answering a Probe."""
    endpoint_reference: str = ''
    types: List[str] = field(default_factory=list)
    scopes: List[str] = field(default_factory=list)
    xaddrs: List[str] = field(default_factory=list)
    metadata_version: Optional[int] = None
    address: Optional[str] = None


def build_probe(message_id: Optional[str] = None) -> bytes:
    message_id = message_id or f"urn:uuid:{uuid.uuid4()}"
    return PROBE_TEMPLATE.format(message_id=message_id).encode('utf-8')


def _child_text(element: ET.Element, name: str) -> str:
    for child in element.iter():
        if local_name(child.tag) == name and child.text:
            return child.text.strip()
    return ''


def parse_probe_match(response_data: bytes) -> List[ProbeMatch]:
    """Parse a ProbeMatches message; anything unparsable yields no matches."""
    try:
        root = ET.fromstring(response_data)
    except ET.ParseError:
        logger.debug("Ignoring unparsable WS-Discovery response")
        return []

    matches = []
    for element in root.iter():
        if local_name(element.tag) != 'ProbeMatch':
            continue
        version = _child_text(element, 'MetadataVersion')
        matches.append(ProbeMatch(
            endpoint_reference=_child_text(element, 'Address'),
            types=_child_text(element, 'Types').split(),
            scopes=_child_text(element, 'Scopes').split(),
            xaddrs=_child_text(element, 'XAddrs').split(),
            metadata_version=int(version) if version.isdigit() else None,
        ))
    return matches


def send_probe(target: str = MULTICAST_GROUP, timeout: float = 3.0) -> List[Tuple[Tuple[str, int], bytes]]:
    """Send one Probe and collect raw (address, data) responses until timeout."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        if target.startswith('239.'):
            mreq = struct.pack("4sl", socket.inet_aton(MULTICAST_GROUP), socket.INADDR_ANY)
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
        elif target in ('255.255.255.255', '<broadcast>'):
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        sock.sendto(build_probe(), (target, DISCOVERY_PORT))

        sock.settimeout(0.5)
        responses = []
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                data, addr = sock.recvfrom(65535)
            except socket.timeout:
                continue
            responses.append((addr, data))
        return responses
    finally:
        sock.close()


def probe(timeout: float = 3.0, target: str = MULTICAST_GROUP) -> List[ProbeMatch]:
    """Discover ONVIF devices; one entry per endpoint reference."""
    devices = {}
    for addr, data in send_probe(target, timeout):
        for match in parse_probe_match(data):
            match.address = addr[0]
            key = match.endpoint_reference or addr[0]
            if key not in devices:
                devices[key] = match
    logger.info("WS-Discovery found %d devices", len(devices))
    return list(devices.values())
