"""
onvifsoap - a schema-driven ONVIF SOAP client runtime.
"""

from .errors import (
    ActionNotSupported, ArgumentError, AuthError, InvalidArgument, InvalidEnumValue,
    InvalidFieldValue, MalformedResponse, MissingRequiredField, OnvifError, OnvifSoapError,
    OutOfRange, SchemaError, SoapFault, TransportError, UnknownOperation,
)
from .interfaces import (
    ActiveSource, ConfigBuilder, Credential, DeviceEndpoint, ServiceEndpoint, SessionConfig,
)
from .registry import SchemaRegistry, default_registry
from .session import Session, create_session, select_active_sources

__version__ = '1.0.0'
