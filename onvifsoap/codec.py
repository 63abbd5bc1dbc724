"""
Envelope codec: operation arguments to SOAP XML and SOAP responses back to typed dicts.
"""

import io
import logging
import re
import xml.etree.ElementTree as ET
from collections import defaultdict
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from . import xsd
from .errors import (
    InvalidEnumValue, InvalidFieldValue, MalformedResponse, MissingRequiredField, SoapFault,
    local_name,
)
from .registry import ENUM, OPAQUE, PRIMITIVE, STRUCT, FieldDescriptor, OperationDescriptor

logger = logging.getLogger(__name__)

SOAP12_NS = 'http://www.w3.org/2003/05/soap-envelope'
SOAP11_NS = 'http://schemas.xmlsoap.org/soap/envelope/'
WSA_NS = 'http://www.w3.org/2005/08/addressing'
WSSE_NS = 'http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd'
WSU_NS = 'http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'

SOAP_NAMESPACES = {
    '1.2': SOAP12_NS,
    '1.1': SOAP11_NS,
}

CONTENT_TYPES = {
    '1.2': 'application/soap+xml; charset=utf-8',
    '1.1': 'text/xml; charset=utf-8',
}

# SOAP envelope template
SOAP_ENVELOPE = """<?xml version="1.0" encoding="UTF-8"?>
<s:Envelope xmlns:s="{soap_ns}">{header}<s:Body>{body}</s:Body></s:Envelope>"""

SOAP_HEADER = "<s:Header>{headers}</s:Header>"

# Standard fault codes; anything else in a SOAP 1.1 faultcode is a device specific subcode
STANDARD_FAULT_CODES = {
    'sender', 'receiver', 'client', 'server', 'versionmismatch', 'mustunderstand',
    'dataencodingunknown',
}

# namespace URI -> prefix used when serializing
NAMESPACE_PREFIXES: Dict[str, str] = {}


def register_prefix(prefix: str, namespace: str):
    """Serialize elements of namespace with prefix instead of ns0, ns1..."""
    NAMESPACE_PREFIXES[namespace] = prefix
    ET.register_namespace(prefix, namespace)


for _prefix, _namespace in [('s', SOAP12_NS), ('wsa', WSA_NS), ('wsse', WSSE_NS),
                            ('wsu', WSU_NS), ('xsi', XSI_NS)]:
    register_prefix(_prefix, _namespace)


def _qname(namespace: str, name: str) -> str:
    return f'{{{namespace}}}{name}'


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(descriptor: OperationDescriptor, args: Optional[Mapping] = None) -> str:
    """
    Serialize the request element of an operation.

    Raises an ArgumentError subclass when args do not match the descriptor;
    nothing has been sent at that point.
    """
    root = ET.Element(_qname(descriptor.namespace, descriptor.name))
    _encode_fields(root, descriptor.request, args or {}, descriptor.name, descriptor)
    return ET.tostring(root, encoding='unicode')


def wrap_envelope(payload: str, headers: Iterable[str] = (), soap_version: str = '1.2') -> str:
    """Place an encoded operation element (and optional header blocks) into a SOAP envelope."""
    soap_ns = SOAP_NAMESPACES.get(soap_version)
    if soap_ns is None:
        raise ValueError(f"Unsupported SOAP version: {soap_version}")
    headers = ''.join(headers)
    header = SOAP_HEADER.format(headers=headers) if headers else ''
    return SOAP_ENVELOPE.format(soap_ns=soap_ns, header=header, body=payload)


def _encode_fields(parent: ET.Element, fields, value: Any, path: str,
                   descriptor: OperationDescriptor):
    if not isinstance(value, Mapping):
        raise InvalidFieldValue(path, f"expected a mapping, got {type(value).__name__}")

    known = {f.key for f in fields}
    unknown = [key for key in value if key not in known]
    if unknown:
        raise InvalidFieldValue(f"{path}.{unknown[0]}", "unknown field")

    for f in fields:
        field_path = f"{path}.{f.key}"
        item = value.get(f.key)
        if item is None:
            if f.required:
                raise MissingRequiredField(field_path)
            continue

        if f.repeated:
            items = list(item) if isinstance(item, (list, tuple)) else [item]
            for index, entry in enumerate(items):
                _encode_field(parent, f, entry, f"{field_path}[{index}]", descriptor)
        else:
            _encode_field(parent, f, item, field_path, descriptor)


def _encode_field(parent: ET.Element, f: FieldDescriptor, value: Any, path: str,
                  descriptor: OperationDescriptor):
    if f.attribute:
        parent.set(f.name, _encode_simple(f, value, path))
        return

    child = ET.SubElement(parent, _qname(f.namespace, f.name))
    if f.kind == STRUCT:
        _encode_fields(child, descriptor.nested(f).fields, value, path, descriptor)
    elif f.kind == OPAQUE:
        _encode_fragment(child, value, path)
    else:
        child.text = _encode_simple(f, value, path)


def _encode_simple(f: FieldDescriptor, value: Any, path: str) -> str:
    if f.kind == ENUM:
        if not isinstance(value, str) or value not in f.allowed:
            raise InvalidEnumValue(path, value, f.allowed)
        return value
    try:
        return xsd.to_xml(f.type_name, value)
    except xsd.XsdValueError as e:
        raise InvalidFieldValue(path, str(e))


def _encode_fragment(element: ET.Element, value: Any, path: str):
    """Copy a raw XML fragment (or an Element) into element."""
    if isinstance(value, ET.Element):
        element.append(value)
        return
    if not isinstance(value, str):
        raise InvalidFieldValue(path, f"expected an XML fragment, got {type(value).__name__}")
    # declare every known prefix so fragments like '<tt:Item/>' parse on their own
    declarations = ' '.join(f'xmlns:{prefix}="{namespace}"'
                            for namespace, prefix in NAMESPACE_PREFIXES.items())
    try:
        wrapper = ET.fromstring(f'<fragment {declarations}>{value}</fragment>')
    except ET.ParseError as e:
        raise InvalidFieldValue(path, f"invalid XML fragment: {e}")
    element.text = wrapper.text
    for child in wrapper:
        element.append(child)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def parse_envelope(xml: Union[str, bytes]) -> ET.Element:
    """Parse a SOAP envelope and return its Body element."""
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as e:
        raise MalformedResponse(f"Response is not well-formed XML: {e}")
    if local_name(root.tag) != 'Envelope':
        raise MalformedResponse(f"Expected a SOAP Envelope, got {local_name(root.tag)}")
    for child in root:
        if local_name(child.tag) == 'Body':
            return child
    raise MalformedResponse("SOAP Envelope has no Body")


def document_namespaces(xml: Union[str, bytes]) -> Dict[str, str]:
    """
    prefix -> URI for every namespace declared in a well-formed document.

    The outermost binding of a prefix wins; SOAP responses declare their
    prefixes once on the Envelope or the response element.
    """
    data = xml.encode('utf-8') if isinstance(xml, str) else xml
    namespaces: Dict[str, str] = {}
    for _event, (prefix, uri) in ET.iterparse(io.BytesIO(data), events=('start-ns',)):
        if prefix:
            namespaces.setdefault(prefix, uri)
    return namespaces


def is_envelope(xml: Union[str, bytes]) -> bool:
    try:
        parse_envelope(xml)
    except MalformedResponse:
        return False
    return True


def decode(descriptor: OperationDescriptor, xml: Union[str, bytes]) -> Union[Dict[str, Any], SoapFault]:
    """
    Decode a response envelope.

    Returns the response fields as a dict keyed by field key, or a SoapFault
    when the Body carries a Fault. Elements are matched by local name so
    devices using unexpected prefixes or namespaces still decode.
    """
    body = parse_envelope(xml)
    namespaces = document_namespaces(xml)
    for child in body:
        if local_name(child.tag) == 'Fault':
            return parse_fault(child, namespaces)

    for child in body:
        if local_name(child.tag) == descriptor.response_name:
            return _decode_fields(child, descriptor.response, descriptor.response_name,
                                  descriptor, namespaces)

    if not any(f.required for f in descriptor.response):
        logger.debug("%s: no %s element in response body, treating as empty",
                     descriptor.name, descriptor.response_name)
        return {}
    raise MalformedResponse(f"Response has no {descriptor.response_name} element",
                            descriptor.response_name)


def _decode_fields(element: ET.Element, fields, path: str, descriptor: OperationDescriptor,
                   namespaces: Mapping) -> Dict[str, Any]:
    children = defaultdict(list)
    for child in element:
        children[local_name(child.tag)].append(child)
    attributes = {local_name(name): value for name, value in element.attrib.items()}

    result: Dict[str, Any] = {}
    for f in fields:
        field_path = f"{path}.{f.key}"
        if f.attribute:
            if f.name in attributes:
                result[f.key] = _decode_simple(f, attributes[f.name], field_path)
            elif f.required:
                raise MalformedResponse("missing required attribute", field_path)
            continue

        occurrences = children.pop(f.name, [])
        if not occurrences:
            if f.required:
                raise MalformedResponse("missing required element", field_path)
            continue
        if f.repeated:
            result[f.key] = [_decode_element(child, f, f"{field_path}[{index}]", descriptor,
                                             namespaces)
                             for index, child in enumerate(occurrences)]
        else:
            if len(occurrences) > 1:
                logger.debug("%s: %d occurrences of a single-valued element, using the first",
                             field_path, len(occurrences))
            result[f.key] = _decode_element(occurrences[0], f, field_path, descriptor, namespaces)

    if children:
        logger.debug("%s: ignoring unknown elements %s", path, ', '.join(sorted(children)))
    return result


def _decode_element(element: ET.Element, f: FieldDescriptor, path: str,
                    descriptor: OperationDescriptor, namespaces: Mapping) -> Any:
    if f.kind == STRUCT:
        return _decode_fields(element, descriptor.nested(f).fields, path, descriptor, namespaces)
    if f.kind == OPAQUE:
        return inner_xml(element, namespaces)
    return _decode_simple(f, element.text or '', path)


def _decode_simple(f: FieldDescriptor, text: str, path: str) -> Any:
    if f.kind == ENUM:
        value = text.strip()
        if value not in f.allowed:
            logger.warning("%s: value %r is not one of %s, passing it through",
                           path, value, ', '.join(f.allowed))
        return value
    if f.kind != PRIMITIVE:
        raise MalformedResponse(f"unexpected field kind {f.kind}", path)
    if f.type_name != 'string':
        text = text.strip()
    try:
        return xsd.from_xml(f.type_name, text)
    except xsd.XsdValueError as e:
        raise MalformedResponse(str(e), path)


def inner_xml(element: ET.Element, namespaces: Optional[Mapping] = None) -> str:
    """
    Content of element (text and children) as an XML fragment.

    ElementTree only declares the prefixes used in tag and attribute names.
    Prefixes that appear in text or attribute values (topic expressions such
    as 'tns1:RuleEngine/CellMotionDetector/Motion', xsi:type values) are
    declared on each child from namespaces, so the fragment stays
    interpretable on its own.
    """
    parts: List[str] = [element.text or '']
    parts.extend(_serialize(child, namespaces or {}) for child in element)
    return ''.join(parts).strip()


# a QName prefix inside text, e.g. the 'tns1' of 'tns1:RuleEngine' but not the 'http' of a URL
VALUE_PREFIX_RE = re.compile(r'(?<![\w.:/-])([A-Za-z_][\w.-]*):(?=[A-Za-z_*])')


def _value_prefixes(element: ET.Element) -> Set[str]:
    found: Set[str] = set()
    for node in element.iter():
        for value in (node.text, node.tail, *node.attrib.values()):
            if value:
                found.update(VALUE_PREFIX_RE.findall(value))
    return found


def _serialize(element: ET.Element, namespaces: Mapping) -> str:
    text = ET.tostring(element, encoding='unicode')
    missing = sorted(prefix for prefix in _value_prefixes(element)
                     if prefix in namespaces and f'xmlns:{prefix}=' not in text)
    if not missing:
        return text
    clone = ET.Element(element.tag, dict(element.attrib))
    clone.text, clone.tail = element.text, element.tail
    clone.extend(list(element))
    for prefix in missing:
        clone.set(f'xmlns:{prefix}', namespaces[prefix])
    return ET.tostring(clone, encoding='unicode')


def _text(element: Optional[ET.Element]) -> str:
    if element is None or element.text is None:
        return ''
    return element.text.strip()


def _find(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def parse_fault(fault: Union[ET.Element, str, bytes],
                namespaces: Optional[Mapping] = None) -> Optional[SoapFault]:
    """
    Parse a SOAP 1.2 (Code/Subcode/Reason) or SOAP 1.1 (faultcode/faultstring) Fault.

    Accepts the Fault element itself or a whole envelope; returns None when
    the envelope body carries no Fault.
    """
    if not isinstance(fault, ET.Element):
        body = parse_envelope(fault)
        namespaces = document_namespaces(fault)
        fault = _find(body, 'Fault')
        if fault is None:
            return None

    code_elem = _find(fault, 'Code')
    if code_elem is not None:
        code = _text(_find(code_elem, 'Value'))
        subcodes = []
        subcode_elem = _find(code_elem, 'Subcode')
        while subcode_elem is not None:
            value = _text(_find(subcode_elem, 'Value'))
            if value:
                subcodes.append(value)
            subcode_elem = _find(subcode_elem, 'Subcode')
        reason_elem = _find(fault, 'Reason')
        reason = _text(_find(reason_elem, 'Text')) if reason_elem is not None else ''
        detail_elem = _find(fault, 'Detail')
    else:
        code = _text(_find(fault, 'faultcode'))
        subcodes = []
        # 'Client.ActionNotSupported' or a bare 'ter:ActionNotSupported'
        name = local_name(code)
        tail = name.rsplit('.', 1)[-1]
        if code and tail.lower() not in STANDARD_FAULT_CODES:
            subcodes.append(code if tail == name else tail)
        reason = _text(_find(fault, 'faultstring'))
        detail_elem = _find(fault, 'detail')

    detail = inner_xml(detail_elem, namespaces) if detail_elem is not None else ''
    return SoapFault(
        code=code,
        subcode=subcodes[0] if subcodes else None,
        subcodes=tuple(subcodes),
        reason=reason,
        detail=detail,
    )
