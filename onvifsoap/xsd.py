"""
XML Schema primitive types: conversion between Python values and canonical lexical forms.
"""

import base64
import binascii
import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Tuple

DATETIME_RE = re.compile(
    r'^(-?\d{4,})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})?$'
)
DURATION_RE = re.compile(
    r'^-?P(?=\d|T\d)(\d+Y)?(\d+M)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+(\.\d+)?S)?)?$'
)

STRING_TYPES = {'string', 'normalizedString', 'token', 'anyURI', 'QName', 'NCName', 'language'}
INTEGER_TYPES = {
    'int', 'integer', 'long', 'short', 'byte', 'nonNegativeInteger', 'positiveInteger',
    'unsignedInt', 'unsignedLong', 'unsignedShort', 'unsignedByte',
}
FLOAT_TYPES = {'float', 'double', 'decimal'}


class XsdValueError(ValueError):
    """A value does not fit the declared primitive type."""


def _string_to_xml(value: Any) -> str:
    if not isinstance(value, str):
        raise XsdValueError(f"expected str, got {type(value).__name__}")
    return value


def _boolean_to_xml(value: Any) -> str:
    if not isinstance(value, bool):
        raise XsdValueError(f"expected bool, got {type(value).__name__}")
    return 'true' if value else 'false'


def _boolean_from_xml(text: str) -> bool:
    text = text.strip()
    if text in ('true', '1'):
        return True
    if text in ('false', '0'):
        return False
    raise XsdValueError(f"invalid xs:boolean {text!r}")


# (min, max) per integer type, None for unbounded
INTEGER_BOUNDS = {
    'integer': (None, None),
    'long': (-2 ** 63, 2 ** 63 - 1),
    'int': (-2 ** 31, 2 ** 31 - 1),
    'short': (-2 ** 15, 2 ** 15 - 1),
    'byte': (-2 ** 7, 2 ** 7 - 1),
    'nonNegativeInteger': (0, None),
    'positiveInteger': (1, None),
    'unsignedLong': (0, 2 ** 64 - 1),
    'unsignedInt': (0, 2 ** 32 - 1),
    'unsignedShort': (0, 2 ** 16 - 1),
    'unsignedByte': (0, 2 ** 8 - 1),
}


def _integer_to_xml(type_name: str) -> Callable[[Any], str]:
    low, high = INTEGER_BOUNDS[type_name]

    def convert(value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise XsdValueError(f"expected int, got {type(value).__name__}")
        if (low is not None and value < low) or (high is not None and value > high):
            raise XsdValueError(f"{value} is out of range for xs:{type_name}")
        return str(value)
    return convert


def _integer_from_xml(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise XsdValueError(f"invalid xs:integer {text!r}")


def _float_to_xml(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise XsdValueError(f"expected number, got {type(value).__name__}")
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'INF' if value > 0 else '-INF'
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _float_from_xml(text: str) -> float:
    text = text.strip()
    special = {'INF': math.inf, '+INF': math.inf, '-INF': -math.inf, 'NaN': math.nan}
    if text in special:
        return special[text]
    try:
        return float(text)
    except ValueError:
        raise XsdValueError(f"invalid xs:float {text!r}")


def format_datetime(value: datetime) -> str:
    """Render a datetime as xs:dateTime; UTC uses 'Z', naive values carry no zone."""
    text = value.strftime('%Y-%m-%dT%H:%M:%S')
    if value.microsecond:
        text += '.' + f'{value.microsecond:06d}'.rstrip('0')
    offset = value.utcoffset()
    if offset is None:
        return text
    if offset == timedelta(0):
        return text + 'Z'
    minutes = int(offset.total_seconds() // 60)
    sign = '+' if minutes >= 0 else '-'
    hours, minutes = divmod(abs(minutes), 60)
    return f'{text}{sign}{hours:02d}:{minutes:02d}'


def parse_datetime(text: str) -> datetime:
    match = DATETIME_RE.match(text.strip())
    if not match:
        raise XsdValueError(f"invalid xs:dateTime {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    microsecond = int((fraction or '0')[:6].ljust(6, '0'))
    tzinfo = None
    if zone == 'Z':
        tzinfo = timezone.utc
    elif zone:
        sign = 1 if zone[0] == '+' else -1
        tzinfo = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    try:
        # xs:dateTime allows 24:00:00 as the end of a day
        if hour == '24' and minute == '00' and second == '00':
            base = datetime(int(year), int(month), int(day), tzinfo=tzinfo)
            return base + timedelta(days=1)
        return datetime(int(year), int(month), int(day), int(hour), int(minute),
                        int(second), microsecond, tzinfo=tzinfo)
    except ValueError as e:
        raise XsdValueError(f"invalid xs:dateTime {text!r}: {e}")


def _datetime_to_xml(value: Any) -> str:
    if not isinstance(value, datetime):
        raise XsdValueError(f"expected datetime, got {type(value).__name__}")
    return format_datetime(value)


def _date_to_xml(value: Any) -> str:
    if not isinstance(value, date) or isinstance(value, datetime):
        raise XsdValueError(f"expected date, got {type(value).__name__}")
    return value.isoformat()


def _date_from_xml(text: str) -> date:
    try:
        return date.fromisoformat(text.strip().rstrip('Z'))
    except ValueError:
        raise XsdValueError(f"invalid xs:date {text!r}")


def format_duration(value: Any) -> str:
    """Accept a timedelta, a number of seconds or an xs:duration string."""
    if isinstance(value, str):
        if not DURATION_RE.match(value):
            raise XsdValueError(f"invalid xs:duration {value!r}")
        return value
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise XsdValueError(f"expected duration, got {type(value).__name__}")
    sign = '-' if seconds < 0 else ''
    seconds = abs(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, rest = divmod(rest, 60)
    text = sign + 'P'
    if days:
        text += f'{int(days)}D'
    text += 'T'
    if hours:
        text += f'{int(hours)}H'
    if minutes:
        text += f'{int(minutes)}M'
    if rest or text.endswith('T'):
        text += _float_to_xml(round(rest, 6)) + 'S'
    return text


def _duration_from_xml(text: str) -> str:
    text = text.strip()
    if not DURATION_RE.match(text):
        raise XsdValueError(f"invalid xs:duration {text!r}")
    return text


def _base64_to_xml(value: Any) -> str:
    if not isinstance(value, (bytes, bytearray)):
        raise XsdValueError(f"expected bytes, got {type(value).__name__}")
    return base64.b64encode(bytes(value)).decode('ascii')


def _base64_from_xml(text: str) -> bytes:
    try:
        return base64.b64decode(''.join(text.split()), validate=True)
    except binascii.Error:
        raise XsdValueError("invalid xs:base64Binary")


def _hex_to_xml(value: Any) -> str:
    if not isinstance(value, (bytes, bytearray)):
        raise XsdValueError(f"expected bytes, got {type(value).__name__}")
    return bytes(value).hex().upper()


def _hex_from_xml(text: str) -> bytes:
    try:
        return bytes.fromhex(text.strip())
    except ValueError:
        raise XsdValueError(f"invalid xs:hexBinary {text!r}")


Converter = Tuple[Callable[[Any], str], Callable[[str], Any]]

PRIMITIVES: Dict[str, Converter] = {}
for _name in STRING_TYPES:
    PRIMITIVES[_name] = (_string_to_xml, str)
for _name in INTEGER_TYPES:
    PRIMITIVES[_name] = (_integer_to_xml(_name), _integer_from_xml)
for _name in FLOAT_TYPES:
    PRIMITIVES[_name] = (_float_to_xml, _float_from_xml)
PRIMITIVES.update({
    'boolean': (_boolean_to_xml, _boolean_from_xml),
    'dateTime': (_datetime_to_xml, parse_datetime),
    'date': (_date_to_xml, _date_from_xml),
    'duration': (format_duration, _duration_from_xml),
    'base64Binary': (_base64_to_xml, _base64_from_xml),
    'hexBinary': (_hex_to_xml, _hex_from_xml),
})


def is_primitive(type_name: str) -> bool:
    return type_name in PRIMITIVES


def to_xml(type_name: str, value: Any) -> str:
    return PRIMITIVES[type_name][0](value)


def from_xml(type_name: str, text: str) -> Any:
    return PRIMITIVES[type_name][1](text)
