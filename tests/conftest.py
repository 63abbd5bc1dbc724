"""
Shared fixtures: canned SOAP responses and a transport that never touches the network.
"""

import asyncio
import xml.etree.ElementTree as ET
from typing import Callable, Dict, List, Union

import pytest

from onvifsoap.errors import local_name
from onvifsoap.interfaces import SessionConfig
from onvifsoap.registry import default_registry
from onvifsoap.transport import Transport

SOAP12 = 'http://www.w3.org/2003/05/soap-envelope'
TDS = 'http://www.onvif.org/ver10/device/wsdl'
TRT = 'http://www.onvif.org/ver10/media/wsdl'
TPTZ = 'http://www.onvif.org/ver20/ptz/wsdl'
TT = 'http://www.onvif.org/ver10/schema'


def envelope(body: str) -> bytes:
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<env:Envelope xmlns:env="{SOAP12}" xmlns:tds="{TDS}" xmlns:trt="{TRT}" '
        f'xmlns:tptz="{TPTZ}" xmlns:tt="{TT}" '
        f'xmlns:ter="http://www.onvif.org/ver10/error">'
        f'<env:Body>{body}</env:Body></env:Envelope>'
    ).encode('utf-8')


def fault(subcode: str, reason: str = 'failed', code: str = 'env:Sender') -> bytes:
    return envelope(
        f'<env:Fault><env:Code><env:Value>{code}</env:Value>'
        f'<env:Subcode><env:Value>{subcode}</env:Value></env:Subcode></env:Code>'
        f'<env:Reason><env:Text xml:lang="en">{reason}</env:Text></env:Reason></env:Fault>'
    )


def services_response(*entries) -> bytes:
    services = ''.join(
        f'<tds:Service><tds:Namespace>{namespace}</tds:Namespace><tds:XAddr>{xaddr}</tds:XAddr>'
        f'<tds:Version><tt:Major>2</tt:Major><tt:Minor>60</tt:Minor></tds:Version></tds:Service>'
        for namespace, xaddr in entries
    )
    return envelope(f'<tds:GetServicesResponse>{services}</tds:GetServicesResponse>')


DEFAULT_SERVICES = services_response(
    (TDS, 'http://192.168.1.10/onvif/device_service'),
    (TRT, 'http://192.168.1.10/onvif/media_service'),
    (TPTZ, 'http://192.168.1.10/onvif/ptz_service'),
)

SYSTEM_DATE_AND_TIME = envelope(
    '<tds:GetSystemDateAndTimeResponse><tds:SystemDateAndTime>'
    '<tt:DateTimeType>NTP</tt:DateTimeType><tt:DaylightSavings>false</tt:DaylightSavings>'
    '<tt:TimeZone><tt:TZ>UTC</tt:TZ></tt:TimeZone>'
    '<tt:UTCDateTime><tt:Time><tt:Hour>12</tt:Hour><tt:Minute>0</tt:Minute><tt:Second>0</tt:Second></tt:Time>'
    '<tt:Date><tt:Year>2030</tt:Year><tt:Month>1</tt:Month><tt:Day>1</tt:Day></tt:Date></tt:UTCDateTime>'
    '</tds:SystemDateAndTime></tds:GetSystemDateAndTimeResponse>'
)

Reply = Union[bytes, BaseException, Callable]


class FakeTransport(Transport):
    """
    Answers by operation name from canned replies.

    A reply is bytes, an exception to raise, or a (possibly async) callable
    receiving the recorded call. A list of replies is consumed in order, the
    last one repeating.
    """

    def __init__(self, replies: Dict[str, Union[Reply, List[Reply]]] = None,
                 config: SessionConfig = None):
        super().__init__(config or SessionConfig(retry_backoff=0))
        self.replies = dict(replies or {})
        self.calls: List[dict] = []

    @property
    def operations(self) -> List[str]:
        return [call['operation'] for call in self.calls]

    async def send(self, xaddr, action, payload, credential=None, timeout=None,
                   clock_offset=None, authenticate=True):
        operation = local_name(ET.fromstring(payload).tag)
        call = {
            'operation': operation,
            'xaddr': xaddr,
            'action': action,
            'payload': payload,
            'credential': credential,
            'authenticate': authenticate,
            'clock_offset': clock_offset,
        }
        self.calls.append(call)
        reply = self.replies.get(operation)
        if isinstance(reply, list):
            reply = reply.pop(0) if len(reply) > 1 else reply[0]
        if reply is None:
            raise AssertionError(f"unexpected operation {operation}")
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            reply = reply(call)
            if asyncio.iscoroutine(reply):
                reply = await reply
        return reply

    def close(self):
        pass


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def fake_transport():
    return FakeTransport({
        'GetServices': DEFAULT_SERVICES,
        'GetSystemDateAndTime': SYSTEM_DATE_AND_TIME,
    })
