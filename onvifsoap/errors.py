"""
Error taxonomy for ONVIF operations and SOAP fault classification.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


class OnvifSoapError(Exception):
    """Base class for every error raised by onvifsoap."""


class SchemaError(OnvifSoapError):
    """A schema definition could not be registered (unknown type, cyclic base...)."""


class UnknownOperation(OnvifSoapError):
    """The registry has no such (service, operation). Programmer error, never retried."""

    def __init__(self, service: str, operation: Optional[str] = None):
        self.service = service
        self.operation = operation
        if operation is None:
            message = f"Unknown ONVIF service: {service}"
        else:
            message = f"Unknown ONVIF operation: {service}.{operation}"
        super().__init__(message)


class ArgumentError(OnvifSoapError):
    """Caller supplied malformed arguments. Raised before anything is sent."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class MissingRequiredField(ArgumentError):
    def __init__(self, path: str):
        super().__init__(path, "required field is missing")


class InvalidEnumValue(ArgumentError):
    def __init__(self, path: str, value, allowed: Tuple[str, ...]):
        self.value = value
        self.allowed = allowed
        super().__init__(path, f"{value!r} is not one of {', '.join(allowed)}")


class InvalidFieldValue(ArgumentError):
    pass


class TransportError(OnvifSoapError):
    """Network-level failure, distinct from SOAP faults."""

    TIMEOUT = 'timeout'
    CONNECTION_FAILED = 'connection_failed'
    CONNECTION_RESET = 'connection_reset'
    TLS_ERROR = 'tls_error'
    HTTP_STATUS = 'http_status'

    def __init__(self, kind: str, message: str, cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        self.kind = kind
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"{kind}: {message}")

    @property
    def retryable(self) -> bool:
        return self.kind in (self.TIMEOUT, self.CONNECTION_RESET)


class MalformedResponse(OnvifSoapError):
    """The device answered with something that violates its declared schema."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


@dataclass(frozen=True)
class SoapFault:
    """Decoded SOAP Fault: code, first subcode, every nested subcode and reason."""
    code: str
    subcode: Optional[str] = None
    subcodes: Tuple[str, ...] = field(default_factory=tuple)
    reason: str = ''
    detail: str = ''

    @property
    def subcode_names(self) -> Tuple[str, ...]:
        """Subcodes without their QName prefix, e.g. 'ActionNotSupported'."""
        return tuple(local_name(value) for value in self.subcodes)


class OnvifError(OnvifSoapError):
    """A SOAP Fault returned by the device, mapped to a variant."""

    AUTH = 'AuthError'
    INVALID_ARGUMENT = 'InvalidArgument'
    ACTION_NOT_SUPPORTED = 'ActionNotSupported'
    OUT_OF_RANGE = 'OutOfRange'
    GENERIC = 'Generic'

    variant = GENERIC

    def __init__(self, reason: str = '', subcode: Optional[str] = None,
                 fault: Optional[SoapFault] = None):
        self.reason = reason
        self.subcode = subcode
        self.fault = fault
        text = reason or 'SOAP fault'
        if subcode:
            text = f"{text} ({subcode})"
        super().__init__(text)


class AuthError(OnvifError):
    variant = OnvifError.AUTH


class InvalidArgument(OnvifError):
    variant = OnvifError.INVALID_ARGUMENT


class ActionNotSupported(OnvifError):
    variant = OnvifError.ACTION_NOT_SUPPORTED


class OutOfRange(OnvifError):
    variant = OnvifError.OUT_OF_RANGE


# Fault subcodes (lower-cased local names) per variant
AUTH_SUBCODES = {
    'notauthorized', 'unauthorized', 'notauthenticated', 'failedauthentication',
    'invalidsecurity', 'invalidsecuritytoken', 'failedcheck', 'messageexpired',
}
INVALID_ARGUMENT_SUBCODES = {
    'invalidargval', 'invalidargs', 'invalidargument', 'noconfig', 'noprofile',
    'notoken', 'nosource', 'noentity', 'invalidposition', 'invalidtranslation',
    'invalidspeed', 'invalidvelocity', 'invalidnodetoken', 'invalidpresettoken',
}
NOT_SUPPORTED_SUBCODES = {
    'actionnotsupported', 'notsupported', 'servicenotsupported', 'notimplemented',
}
OUT_OF_RANGE_SUBCODES = {'outofrange', 'outofbounds', 'toomanypresets', 'maxpresets'}

# Subcodes telling that the endpoint itself moved or went away
MOVED_SUBCODES = {'endpointunavailable', 'destinationunreachable', 'servicenotsupported'}


def local_name(qname: str) -> str:
    """Strip a namespace prefix or Clark-notation URI from a QName."""
    if qname.startswith('{'):
        return qname.split('}', 1)[1]
    return qname.rsplit(':', 1)[-1]


def classify_fault(fault: SoapFault) -> OnvifError:
    """
    Map a decoded SOAP Fault to an OnvifError subclass.

    Subcodes are checked from the most specific (innermost) outward, then the
    reason text is used the same way a device's wording usually gives it away.
    """
    names = [name.lower() for name in reversed(fault.subcode_names)]
    reason = fault.reason.lower()

    error_class = OnvifError
    for name in names:
        if name in AUTH_SUBCODES:
            error_class = AuthError
        elif name in OUT_OF_RANGE_SUBCODES:
            error_class = OutOfRange
        elif name in NOT_SUPPORTED_SUBCODES:
            error_class = ActionNotSupported
        elif name in INVALID_ARGUMENT_SUBCODES:
            error_class = InvalidArgument
        else:
            continue
        break
    else:
        if any(x in reason for x in ['not authorized', 'unauthorized', 'not authenticated']):
            error_class = AuthError
        elif 'not implemented' in reason or 'not supported' in reason:
            error_class = ActionNotSupported
        elif 'out of range' in reason:
            error_class = OutOfRange
        elif any(x in reason for x in ['invalid argument', 'invalid parameter']):
            error_class = InvalidArgument

    return error_class(fault.reason, fault.subcode, fault)


def is_moved_fault(fault: SoapFault) -> bool:
    return any(name.lower() in MOVED_SUBCODES for name in fault.subcode_names)
