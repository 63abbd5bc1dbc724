"""
Device session / capability cache: which XAddr serves which ONVIF service on one device.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Set
from urllib.parse import urlsplit, urlunsplit

from .dispatcher import Dispatcher
from .errors import ActionNotSupported, AuthError, MalformedResponse, OnvifError
from .interfaces import Credential, DeviceEndpoint, ServiceEndpoint, SessionConfig
from .registry import SchemaRegistry

logger = logging.getLogger(__name__)

DEVICE_SERVICE = 'device'


def normalize_base_url(base_url: str) -> str:
    if '://' not in base_url:
        base_url = 'http://' + base_url
    return base_url.rstrip('/')


def service_name_from_namespace(namespace: str) -> Optional[str]:
    """
    Derive a service name from an ONVIF namespace URI.

    'http://www.onvif.org/ver10/deviceIO/wsdl' -> 'deviceIO'; ver20 media is
    'media2' and ptz is upper-cased to 'PTZ'. Non-ONVIF namespaces give None.
    """
    parts = urlsplit(namespace)
    if parts.hostname != 'www.onvif.org':
        return None
    segments = parts.path.strip('/').split('/')
    if len(segments) < 2:
        return None
    version, name = segments[0], segments[1]
    if name == 'media' and version == 'ver20':
        return 'media2'
    if name == 'ptz':
        return 'PTZ'
    return name


def _datetime_from_onvif(value: Dict[str, Any]) -> datetime:
    """tt:DateTime ({'time': {...}, 'date': {...}}) as an aware UTC datetime."""
    try:
        d, t = value['date'], value['time']
        return datetime(d['year'], d['month'], d['day'], t['hour'], t['minute'], t['second'],
                        tzinfo=timezone.utc)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"invalid device date/time: {e}",
                                'GetSystemDateAndTime.systemDateAndTime') from e


class DeviceSession:
    """
    Per-device endpoint cache.

    The first resolve bootstraps the service table with GetServices at the
    well-known device XAddr (GetCapabilities when GetServices faults).
    Concurrent bootstraps share one in-flight task.
    """

    def __init__(self, base_url: str, dispatcher: Dispatcher, registry: SchemaRegistry,
                 credential: Optional[Credential] = None, config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self.base_url = normalize_base_url(base_url)
        parts = urlsplit(self.base_url)
        if parts.path in ('', '/'):
            self.device_xaddr = self.base_url + self.config.device_path
        else:
            self.device_xaddr = self.base_url
        self._netloc = parts.netloc
        self.dispatcher = dispatcher
        self.registry = registry
        self.credential = credential
        self.clock_offset = timedelta(0)

        self._services: Dict[str, ServiceEndpoint] = {}
        self._capabilities: Dict[str, Any] = {}
        self._bootstrapped = False
        self._stale: Set[str] = set()
        self._inflight: Optional[asyncio.Future] = None

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _canonical(self, service: str) -> str:
        if service in self.registry:
            return self.registry.canonical_name(service)
        return service

    async def resolve(self, service: str) -> str:
        """XAddr serving service, bootstrapping the cache when needed."""
        name = self._canonical(service)
        endpoint = self._services.get(name)
        if endpoint is not None:
            return endpoint.xaddr
        if not self._bootstrapped or name in self._stale:
            await self.refresh()
            endpoint = self._services.get(name)
            if endpoint is not None:
                return endpoint.xaddr
        if name == DEVICE_SERVICE:
            return self.device_xaddr
        raise ActionNotSupported(f"Device at {self.base_url} does not advertise the {name} service")

    async def refresh(self):
        """Re-run the bootstrap; callers arriving while one runs wait for the same one."""
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._bootstrap())
            self._inflight.add_done_callback(self._bootstrap_done)
        # one waiter being cancelled must not cancel the shared bootstrap
        await asyncio.shield(self._inflight)

    def _bootstrap_done(self, task: asyncio.Future):
        self._inflight = None
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Bootstrap of %s failed: %s", self.base_url, task.exception())

    async def _bootstrap(self):
        capabilities: Dict[str, Any] = {}
        get_services = self.registry.lookup(DEVICE_SERVICE, 'GetServices')
        try:
            result = await self.dispatcher.invoke(
                self.device_xaddr, get_services,
                {'includeCapability': self.config.include_capability},
                self.credential, clock_offset=self.clock_offset)
            services = self._from_services(result.get('service', []))
        except OnvifError as e:
            logger.info("GetServices failed on %s (%s), falling back to GetCapabilities",
                        self.device_xaddr, e)
            get_capabilities = self.registry.lookup(DEVICE_SERVICE, 'GetCapabilities')
            result = await self.dispatcher.invoke(
                self.device_xaddr, get_capabilities, {'category': ['All']},
                self.credential, clock_offset=self.clock_offset)
            capabilities = result['capabilities']
            services = self._from_capabilities(capabilities)

        self._services = services
        self._capabilities = capabilities
        self._bootstrapped = True
        self._stale.clear()
        logger.info("Resolved %d services on %s: %s", len(services), self.base_url,
                    ', '.join(sorted(services)))

    def _rewrite(self, xaddr: str) -> str:
        """Apply preserve_address: keep the advertised path, use the session's host:port."""
        if not self.config.preserve_address:
            return xaddr
        parts = urlsplit(xaddr)
        if parts.netloc == self._netloc:
            return xaddr
        return urlunsplit((parts.scheme, self._netloc, parts.path, parts.query, parts.fragment))

    def _from_services(self, entries) -> Dict[str, ServiceEndpoint]:
        services: Dict[str, ServiceEndpoint] = {}
        for entry in entries:
            namespace = entry.get('namespace')
            xaddr = entry.get('XAddr')
            if not namespace or not xaddr:
                continue
            name = self.registry.service_for_namespace(namespace) or service_name_from_namespace(namespace)
            if name is None:
                logger.debug("Skipping non-ONVIF service %s at %s", namespace, xaddr)
                continue
            version = entry.get('version')
            services[name] = ServiceEndpoint(
                name=name,
                namespace=namespace,
                xaddr=self._rewrite(xaddr),
                version=f"{version['major']}.{version['minor']}" if version else None,
            )
        return services

    def _from_capabilities(self, capabilities: Dict[str, Any]) -> Dict[str, ServiceEndpoint]:
        found: Dict[str, str] = {}
        for key, value in capabilities.items():
            if key == 'extension':
                for ext_key, ext_value in value.items():
                    if isinstance(ext_value, dict) and ext_value.get('XAddr'):
                        found[ext_key] = ext_value['XAddr']
            elif isinstance(value, dict) and value.get('XAddr'):
                found[key] = value['XAddr']

        # Profile G NVRs advertising replay but not recording
        if 'replay' in found and 'recording' not in found:
            recording = found['replay'].replace('replay', 'recording')
            logger.warning("Adding %s for bad Profile G device %s", recording, self.base_url)
            found['recording'] = recording

        services: Dict[str, ServiceEndpoint] = {}
        for key, xaddr in found.items():
            name = self._canonical(key)
            namespace = self.registry.namespace(name) if name in self.registry else ''
            services[name] = ServiceEndpoint(name, namespace, self._rewrite(xaddr))
        return services

    def invalidate(self, service: Optional[str] = None):
        """Forget one service's XAddr (re-resolved on next use), or everything."""
        if service is None:
            logger.debug("Invalidating all endpoints of %s", self.base_url)
            self._services = {}
            self._capabilities = {}
            self._bootstrapped = False
            self._stale.clear()
            return
        name = self._canonical(service)
        services = dict(self._services)
        services.pop(name, None)
        self._services = services
        self._stale.add(name)
        logger.debug("Invalidated %s endpoint of %s", name, self.base_url)

    # ------------------------------------------------------------------
    # Clock
    # ------------------------------------------------------------------

    async def sync_clock(self) -> timedelta:
        """
        Measure the device clock offset used for WS-Security Created stamps.

        GetSystemDateAndTime is tried without authentication first; some
        devices insist on it, so an AuthError retries with credentials.
        """
        descriptor = self.registry.lookup(DEVICE_SERVICE, 'GetSystemDateAndTime')
        try:
            result = await self.dispatcher.invoke(self.device_xaddr, descriptor, authenticate=False)
        except AuthError:
            logger.debug("Unauthenticated GetSystemDateAndTime refused by %s, retrying with credentials",
                         self.device_xaddr)
            result = await self.dispatcher.invoke(self.device_xaddr, descriptor, credential=self.credential)

        system = result['systemDateAndTime']
        value = system.get('UTCDateTime') or system.get('localDateTime')
        if value is None:
            raise MalformedResponse("no UTCDateTime or LocalDateTime in GetSystemDateAndTime response")
        device_time = _datetime_from_onvif(value)
        self.clock_offset = device_time - datetime.now(timezone.utc)
        logger.info("Clock offset of %s: %.1fs", self.base_url, self.clock_offset.total_seconds())
        return self.clock_offset

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def capabilities(self) -> Dict[str, Any]:
        return self._capabilities

    def snapshot(self) -> DeviceEndpoint:
        return DeviceEndpoint(
            base_url=self.base_url,
            device_xaddr=self.device_xaddr,
            services=dict(self._services),
            capabilities=self._capabilities,
        )
