"""
Common data structures and configuration for ONVIF sessions.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Union

from dotenv import load_dotenv

DEFAULT_DEVICE_PATH = '/onvif/device_service'


@dataclass(frozen=True)
class Credential:
    """Username/password for WS-Security, optionally a client certificate for mutual TLS."""
    username: str
    password: str = ''
    client_cert: Optional[Union[str, Tuple[str, str]]] = None

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***', client_cert={self.client_cert!r})"


@dataclass
class SessionConfig:
    """Configuration for a device session."""
    timeout: float = 10.0
    device_path: str = DEFAULT_DEVICE_PATH
    soap_version: str = '1.2'  # '1.2' or '1.1'
    use_ws_security: bool = True
    http_digest: bool = False
    verify: Union[bool, str] = True
    preserve_address: bool = False
    retry_backoff: float = 0.5
    include_capability: bool = False

    def __post_init__(self):
        if self.soap_version not in ('1.2', '1.1'):
            raise ValueError(f"Unsupported SOAP version: {self.soap_version}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")


@dataclass(frozen=True)
class ServiceEndpoint:
    """One service advertised by a device."""
    name: str
    namespace: str
    xaddr: str
    version: Optional[str] = None


@dataclass
class DeviceEndpoint:
    """Snapshot of what a session knows about a device."""
    base_url: str
    device_xaddr: str
    services: Dict[str, ServiceEndpoint] = field(default_factory=dict)
    capabilities: Dict[str, Any] = field(default_factory=dict)

    @property
    def xaddrs(self) -> Dict[str, str]:
        return {name: endpoint.xaddr for name, endpoint in self.services.items()}


@dataclass(frozen=True)
class ActiveSource:
    """A video source paired with the first media profile that encodes it."""
    source_token: str
    profile_token: str
    video_source_configuration_token: str
    encoding: str
    width: int
    height: int
    fps: Optional[int] = None
    bitrate: Optional[int] = None
    ptz: Optional[Dict[str, str]] = None  # {'name': ..., 'token': ...}


def _as_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class ConfigBuilder:
    """Helper class to build SessionConfig and Credential from various sources."""

    ENV_PREFIX = 'ONVIF_'

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SessionConfig:
        """Create SessionConfig from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(SessionConfig)}
        return SessionConfig(**{key: value for key, value in data.items() if key in known})

    @staticmethod
    def from_env(dotenv_path: Optional[str] = None) -> SessionConfig:
        """
        Create SessionConfig from ONVIF_* environment variables.

        A .env file is loaded first (without overriding variables already set).
        """
        load_dotenv(dotenv_path)
        prefix = ConfigBuilder.ENV_PREFIX
        config = SessionConfig()

        timeout = os.getenv(prefix + 'TIMEOUT')
        if timeout:
            config.timeout = float(timeout)
        config.device_path = os.getenv(prefix + 'DEVICE_PATH', config.device_path)
        config.soap_version = os.getenv(prefix + 'SOAP_VERSION', config.soap_version)
        for name in ('use_ws_security', 'http_digest', 'preserve_address', 'include_capability'):
            value = os.getenv(prefix + name.upper())
            if value is not None:
                setattr(config, name, _as_bool(value))

        verify = os.getenv(prefix + 'VERIFY')
        if verify is not None:
            # either a boolean flag or the path of a CA bundle
            lowered = verify.strip().lower()
            config.verify = _as_bool(verify) if lowered in ('1', '0', 'true', 'false', 'yes', 'no', 'on', 'off') else verify
        backoff = os.getenv(prefix + 'RETRY_BACKOFF')
        if backoff:
            config.retry_backoff = float(backoff)

        config.__post_init__()
        return config

    @staticmethod
    def credential_from_env(dotenv_path: Optional[str] = None) -> Optional[Credential]:
        """Create a Credential from ONVIF_USERNAME / ONVIF_PASSWORD / ONVIF_CLIENT_CERT(_KEY)."""
        load_dotenv(dotenv_path)
        prefix = ConfigBuilder.ENV_PREFIX
        username = os.getenv(prefix + 'USERNAME')
        if not username:
            return None
        cert = os.getenv(prefix + 'CLIENT_CERT')
        key = os.getenv(prefix + 'CLIENT_KEY')
        client_cert = (cert, key) if cert and key else cert
        return Credential(username, os.getenv(prefix + 'PASSWORD', ''), client_cert or None)
