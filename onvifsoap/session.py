"""
Public entry point: one Session per ONVIF device.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from .cache import DeviceSession
from .dispatcher import Dispatcher
from .errors import MalformedResponse
from .interfaces import ActiveSource, Credential, DeviceEndpoint, SessionConfig
from .registry import SchemaRegistry, default_registry
from .transport import Transport

logger = logging.getLogger(__name__)


class Session:
    """
    A device session: call(service, operation, args) returns the decoded response.

    Usage:
        async with create_session('http://192.168.1.10', Credential('admin', 'secret')) as cam:
            profiles = await cam.call('media', 'GetProfiles')
    """

    def __init__(self, device: DeviceSession, dispatcher: Dispatcher, transport: Transport):
        self.device = device
        self.dispatcher = dispatcher
        self.transport = transport
        self.profiles: List[Dict[str, Any]] = []
        self.video_sources: List[Dict[str, Any]] = []
        self.default_profiles: List[Dict[str, Any]] = []
        self.default_profile: Optional[Dict[str, Any]] = None
        self.active_sources: List[ActiveSource] = []
        self.active_source: Optional[ActiveSource] = None

    async def call(self, service: str, operation: str, args: Optional[Mapping] = None,
                   timeout: Optional[float] = None, xaddr: Optional[str] = None) -> Dict[str, Any]:
        return await self.dispatcher.call(self.device, service, operation, args, timeout, xaddr)

    async def resolve(self, service: str) -> str:
        return await self.device.resolve(service)

    def invalidate(self, service: Optional[str] = None):
        self.device.invalidate(service)

    async def connect(self, sync_clock: bool = True, media: bool = False) -> DeviceEndpoint:
        """
        Measure the clock offset, then bootstrap the service table.

        With media=True also fetch the media profiles and video sources and
        pick, for each video source, the first profile that encodes it
        (see select_active_sources).
        """
        if sync_clock:
            await self.device.sync_clock()
        await self.device.refresh()
        if media:
            await self.load_media()
        return self.device.snapshot()

    async def load_media(self) -> List[ActiveSource]:
        profiles, sources = await asyncio.gather(
            self.call('media', 'GetProfiles'),
            self.call('media', 'GetVideoSources'),
        )
        self.profiles = profiles.get('profiles', [])
        self.video_sources = sources.get('videoSources', [])
        self.default_profiles, self.active_sources = select_active_sources(self.profiles,
                                                                           self.video_sources)
        self.default_profile = self.default_profiles[0] if self.default_profiles else None
        self.active_source = self.active_sources[0] if self.active_sources else None
        logger.debug("%s: %d profiles, %d video sources, %d active",
                     self.device.base_url, len(self.profiles), len(self.video_sources),
                     len(self.active_sources))
        return self.active_sources

    @property
    def endpoint(self) -> DeviceEndpoint:
        return self.device.snapshot()

    @property
    def clock_offset(self):
        return self.device.clock_offset

    def close(self):
        self.transport.close()

    async def __aenter__(self) -> 'Session':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()


def select_active_sources(profiles: List[Dict[str, Any]], video_sources: List[Dict[str, Any]]):
    """
    Pair every video source with the first profile that has a video source
    configuration for it and a video encoder configuration.

    Returns (default_profiles, active_sources), both in video source order.
    A source without such a profile is skipped, except the first one: a
    device whose first video source has no usable profile raises
    MalformedResponse.
    """
    default_profiles = []
    active_sources = []
    for index, source in enumerate(video_sources):
        token = source.get('token')
        profile = next((p for p in profiles
                        if p.get('videoSourceConfiguration', {}).get('sourceToken') == token
                        and 'videoEncoderConfiguration' in p), None)
        if profile is None:
            if index == 0:
                raise MalformedResponse(f"no profile encodes video source {token!r}",
                                        'GetProfiles.profiles')
            logger.debug("Skipping video source %s: no profile encodes it", token)
            continue

        encoder = profile['videoEncoderConfiguration']
        rate_control = encoder.get('rateControl', {})
        ptz = profile.get('PTZConfiguration')
        default_profiles.append(profile)
        active_sources.append(ActiveSource(
            source_token=token,
            profile_token=profile['token'],
            video_source_configuration_token=profile['videoSourceConfiguration']['token'],
            encoding=encoder['encoding'],
            width=encoder['resolution']['width'],
            height=encoder['resolution']['height'],
            fps=rate_control.get('frameRateLimit'),
            bitrate=rate_control.get('bitrateLimit'),
            ptz={'name': ptz['name'], 'token': ptz['token']} if ptz else None,
        ))
    return default_profiles, active_sources


def create_session(base_url: str, credential: Optional[Credential] = None,
                   config: Optional[SessionConfig] = None,
                   registry: Optional[SchemaRegistry] = None,
                   transport: Optional[Transport] = None) -> Session:
    """
    Open a session against the device at base_url ('http://host[:port]' or a full device XAddr).

    Nothing is sent until the first call; use Session.connect() to bootstrap eagerly.
    """
    config = config or SessionConfig()
    registry = registry or default_registry()
    transport = transport or Transport(config)
    dispatcher = Dispatcher(registry, transport, config)
    device = DeviceSession(base_url, dispatcher, registry, credential, config)
    logger.debug("Created session for %s (device service %s)", device.base_url, device.device_xaddr)
    return Session(device, dispatcher, transport)
