"""
Unit tests for the device session: endpoint bootstrap, resolution and clock sync.
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest

from conftest import (
    DEFAULT_SERVICES, SYSTEM_DATE_AND_TIME, TDS, TPTZ, TRT, FakeTransport, envelope, fault,
    services_response,
)
from onvifsoap.cache import normalize_base_url, service_name_from_namespace
from onvifsoap.errors import ActionNotSupported, MalformedResponse, TransportError
from onvifsoap.interfaces import ActiveSource, Credential, SessionConfig
from onvifsoap.session import create_session

BASE = 'http://192.168.1.10'
DEVICE_XADDR = 'http://192.168.1.10/onvif/device_service'
PTZ_XADDR = 'http://192.168.1.10/onvif/ptz_service'

CAPABILITIES = envelope(
    '<tds:GetCapabilitiesResponse><tds:Capabilities>'
    '<tt:Device><tt:XAddr>http://192.168.1.10/onvif/device_service</tt:XAddr></tt:Device>'
    '<tt:Media><tt:XAddr>http://192.168.1.10/onvif/media_service</tt:XAddr></tt:Media>'
    '<tt:Extension><tt:Replay><tt:XAddr>http://192.168.1.10/onvif/replay_service</tt:XAddr>'
    '</tt:Replay></tt:Extension>'
    '</tds:Capabilities></tds:GetCapabilitiesResponse>'
)


def make_session(replies, base_url=BASE, credential=None, **config):
    config.setdefault('retry_backoff', 0)
    transport = FakeTransport(replies, SessionConfig(**config))
    session = create_session(base_url, credential, config=transport.config, transport=transport)
    return session, transport


def delayed(reply, delay=0.05):
    async def answer(call):
        await asyncio.sleep(delay)
        return reply
    return answer


class TestBootstrap:
    """First use fetches the service table exactly once."""

    @pytest.mark.asyncio
    async def test_concurrent_resolves_share_one_bootstrap(self):
        session, transport = make_session({'GetServices': delayed(DEFAULT_SERVICES)})
        results = await asyncio.gather(*[session.resolve('PTZ') for _ in range(5)])
        assert results == [PTZ_XADDR] * 5
        assert transport.operations == ['GetServices']

    @pytest.mark.asyncio
    async def test_first_call_bootstraps_then_sends(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        result = await session.call('device', 'GetSystemDateAndTime')
        assert result['systemDateAndTime']['dateTimeType'] == 'NTP'
        assert fake_transport.operations == ['GetServices', 'GetSystemDateAndTime']
        assert fake_transport.calls[0]['xaddr'] == DEVICE_XADDR
        assert 'IncludeCapability>false<' in fake_transport.calls[0]['payload']

    @pytest.mark.asyncio
    async def test_later_calls_use_the_cache(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        await session.resolve('media')
        await session.resolve('PTZ')
        await session.resolve('device')
        assert fake_transport.operations == ['GetServices']

    @pytest.mark.asyncio
    async def test_service_table(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        endpoint = await session.connect(sync_clock=False)
        assert sorted(endpoint.services) == ['PTZ', 'device', 'media']
        ptz = endpoint.services['PTZ']
        assert ptz.namespace == TPTZ
        assert ptz.version == '2.60'
        assert endpoint.xaddrs['media'] == 'http://192.168.1.10/onvif/media_service'

    @pytest.mark.asyncio
    async def test_foreign_namespaces_skipped(self):
        response = services_response(
            (TDS, DEVICE_XADDR),
            ('http://www.axis.com/vapix/ws/action1', 'http://192.168.1.10/vapix/services'),
            ('http://www.onvif.org/ver10/thermal/wsdl', 'http://192.168.1.10/onvif/thermal'),
        )
        session, transport = make_session({'GetServices': response})
        endpoint = await session.connect(sync_clock=False)
        assert sorted(endpoint.services) == ['device', 'thermal']

    @pytest.mark.asyncio
    async def test_bootstrap_failure_propagates_and_retries(self):
        refused = TransportError(TransportError.CONNECTION_FAILED, 'refused')
        session, transport = make_session({'GetServices': [refused, DEFAULT_SERVICES]})
        with pytest.raises(TransportError):
            await session.resolve('PTZ')
        assert await session.resolve('PTZ') == PTZ_XADDR
        assert transport.operations == ['GetServices', 'GetServices']

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_bootstrap(self):
        session, transport = make_session({'GetServices': delayed(DEFAULT_SERVICES, 0.1)})
        first = asyncio.ensure_future(session.resolve('PTZ'))
        second = asyncio.ensure_future(session.resolve('media'))
        await asyncio.sleep(0.01)
        first.cancel()

        assert await second == 'http://192.168.1.10/onvif/media_service'
        with pytest.raises(asyncio.CancelledError):
            await first
        assert transport.operations == ['GetServices']


class TestCapabilitiesFallback:
    """GetCapabilities is used when GetServices faults."""

    @pytest.mark.asyncio
    async def test_fallback_and_profile_g_recording(self, caplog):
        session, transport = make_session({
            'GetServices': fault('ter:ActionNotSupported'),
            'GetCapabilities': CAPABILITIES,
        })
        with caplog.at_level(logging.WARNING, logger='onvifsoap.cache'):
            endpoint = await session.connect(sync_clock=False)

        assert transport.operations == ['GetServices', 'GetCapabilities']
        assert '>All<' in transport.calls[1]['payload']
        assert sorted(endpoint.services) == ['device', 'media', 'recording', 'replay']
        assert endpoint.xaddrs['recording'] == 'http://192.168.1.10/onvif/recording_service'
        assert endpoint.capabilities['media']['XAddr'] == 'http://192.168.1.10/onvif/media_service'
        assert 'bad Profile G device' in caplog.text

    @pytest.mark.asyncio
    async def test_fallback_namespaces_come_from_registry(self):
        session, transport = make_session({
            'GetServices': fault('ter:ActionNotSupported'),
            'GetCapabilities': CAPABILITIES,
        })
        endpoint = await session.connect(sync_clock=False)
        assert endpoint.services['media'].namespace == TRT
        assert endpoint.services['replay'].namespace == 'http://www.onvif.org/ver10/replay/wsdl'

    @pytest.mark.asyncio
    async def test_get_capabilities_is_stable(self):
        session, transport = make_session({
            'GetServices': DEFAULT_SERVICES,
            'GetCapabilities': CAPABILITIES,
        })
        first = await session.call('device', 'GetCapabilities')
        second = await session.call('device', 'GetCapabilities')
        assert first == second
        assert first['capabilities']['extension']['replay']['XAddr'].endswith('/replay_service')


class TestResolve:
    """Service to XAddr resolution rules."""

    @pytest.mark.asyncio
    async def test_device_falls_back_to_base_xaddr(self):
        response = services_response((TRT, 'http://192.168.1.10/onvif/media_service'))
        session, transport = make_session({'GetServices': response})
        assert await session.resolve('device') == DEVICE_XADDR

    @pytest.mark.asyncio
    async def test_unadvertised_service_not_supported(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        with pytest.raises(ActionNotSupported):
            await session.resolve('imaging')
        with pytest.raises(ActionNotSupported):
            await session.call('imaging', 'GetImagingSettings', {'videoSourceToken': 'VideoSource_1'})
        assert fake_transport.operations == ['GetServices']

    @pytest.mark.asyncio
    async def test_service_names_are_case_insensitive(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        assert await session.resolve('ptz') == PTZ_XADDR

    @pytest.mark.asyncio
    async def test_preserve_address_keeps_session_host(self):
        session, transport = make_session({'GetServices': DEFAULT_SERVICES},
                                          base_url='http://10.0.0.5:8080', preserve_address=True)
        assert await session.resolve('PTZ') == 'http://10.0.0.5:8080/onvif/ptz_service'
        assert transport.calls[0]['xaddr'] == 'http://10.0.0.5:8080/onvif/device_service'

    @pytest.mark.asyncio
    async def test_advertised_host_used_by_default(self):
        session, transport = make_session({'GetServices': DEFAULT_SERVICES},
                                          base_url='http://10.0.0.5:8080')
        assert await session.resolve('PTZ') == PTZ_XADDR

    @pytest.mark.asyncio
    async def test_invalidate_one_service(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        await session.resolve('PTZ')
        session.invalidate('PTZ')
        await session.resolve('media')
        assert fake_transport.operations == ['GetServices']
        await session.resolve('PTZ')
        assert fake_transport.operations == ['GetServices', 'GetServices']

    @pytest.mark.asyncio
    async def test_invalidate_everything(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        await session.resolve('PTZ')
        session.invalidate()
        assert session.endpoint.services == {}
        await session.resolve('media')
        assert fake_transport.operations == ['GetServices', 'GetServices']


class TestBaseUrl:
    """Device service address derived from the base URL."""

    @pytest.mark.parametrize("base_url,device_xaddr", [
        ('http://192.168.1.10', DEVICE_XADDR),
        ('http://192.168.1.10/', DEVICE_XADDR),
        ('192.168.1.10', DEVICE_XADDR),
        ('http://cam:8000/onvif/device_service', 'http://cam:8000/onvif/device_service'),
        ('https://cam/custom/path', 'https://cam/custom/path'),
    ])
    def test_device_xaddr(self, base_url, device_xaddr):
        session = create_session(base_url, transport=FakeTransport())
        assert session.endpoint.device_xaddr == device_xaddr

    def test_normalize_base_url(self):
        assert normalize_base_url('cam.local:8080/') == 'http://cam.local:8080'

    @pytest.mark.parametrize("namespace,name", [
        ('http://www.onvif.org/ver10/device/wsdl', 'device'),
        ('http://www.onvif.org/ver20/media/wsdl', 'media2'),
        ('http://www.onvif.org/ver10/media/wsdl', 'media'),
        ('http://www.onvif.org/ver20/ptz/wsdl', 'PTZ'),
        ('http://www.onvif.org/ver10/deviceIO/wsdl', 'deviceIO'),
        ('http://www.axis.com/vapix/ws/action1', None),
    ])
    def test_service_name_from_namespace(self, namespace, name):
        assert service_name_from_namespace(namespace) == name


class TestClock:
    """Device clock offset for WS-Security timestamps."""

    @pytest.mark.asyncio
    async def test_sync_clock_measures_offset(self, fake_transport):
        session = create_session(BASE, Credential('admin', 'secret'),
                                 transport=fake_transport, config=fake_transport.config)
        offset = await session.device.sync_clock()
        expected = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc) - datetime.now(timezone.utc)
        assert abs(offset - expected) < timedelta(seconds=5)
        assert session.clock_offset == offset
        call = fake_transport.calls[0]
        assert call['xaddr'] == DEVICE_XADDR
        assert call['authenticate'] is False

    @pytest.mark.asyncio
    async def test_sync_clock_retries_with_credentials(self):
        session, transport = make_session({
            'GetSystemDateAndTime': [fault('ter:NotAuthorized', 'Sender not authorized'),
                                     SYSTEM_DATE_AND_TIME],
        }, credential=Credential('admin', 'secret'))
        await session.device.sync_clock()
        assert transport.operations == ['GetSystemDateAndTime', 'GetSystemDateAndTime']
        assert transport.calls[1]['authenticate'] is True
        assert transport.calls[1]['credential'] == Credential('admin', 'secret')

    @pytest.mark.asyncio
    async def test_offset_applied_to_later_requests(self, fake_transport):
        session = create_session(BASE, Credential('admin', 'secret'),
                                 transport=fake_transport, config=fake_transport.config)
        endpoint = await session.connect()
        assert fake_transport.operations == ['GetSystemDateAndTime', 'GetServices']
        assert fake_transport.calls[1]['clock_offset'] == session.clock_offset
        assert 'PTZ' in endpoint.services

    @pytest.mark.asyncio
    async def test_invalid_device_date(self):
        session, _ = make_session({
            'GetSystemDateAndTime': SYSTEM_DATE_AND_TIME.replace(
                b'<tt:Month>1</tt:Month>', b'<tt:Month>0</tt:Month>'),
        })
        with pytest.raises(MalformedResponse) as exc:
            await session.device.sync_clock()
        assert 'invalid device date/time' in str(exc.value)
        assert isinstance(exc.value.__cause__, ValueError)
        assert session.clock_offset == timedelta(0)


def video_source_configuration(token, source_token):
    return (f'<tt:VideoSourceConfiguration token="{token}"><tt:Name>{token}</tt:Name>'
            f'<tt:UseCount>1</tt:UseCount><tt:SourceToken>{source_token}</tt:SourceToken>'
            '<tt:Bounds x="0" y="0" width="1920" height="1080"/></tt:VideoSourceConfiguration>')


def video_encoder_configuration(token, encoding, width, height, rate_control=''):
    return (f'<tt:VideoEncoderConfiguration token="{token}"><tt:Name>{token}</tt:Name>'
            f'<tt:UseCount>1</tt:UseCount><tt:Encoding>{encoding}</tt:Encoding>'
            f'<tt:Resolution><tt:Width>{width}</tt:Width><tt:Height>{height}</tt:Height></tt:Resolution>'
            f'<tt:Quality>5</tt:Quality>{rate_control}'
            '<tt:Multicast><tt:Address><tt:Type>IPv4</tt:Type><tt:IPv4Address>0.0.0.0</tt:IPv4Address>'
            '</tt:Address><tt:Port>0</tt:Port><tt:TTL>1</tt:TTL><tt:AutoStart>false</tt:AutoStart>'
            '</tt:Multicast><tt:SessionTimeout>PT60S</tt:SessionTimeout></tt:VideoEncoderConfiguration>')


def profile(token, *configurations):
    return f'<trt:Profiles token="{token}"><tt:Name>{token}</tt:Name>{"".join(configurations)}</trt:Profiles>'


RATE_CONTROL = ('<tt:RateControl><tt:FrameRateLimit>25</tt:FrameRateLimit>'
                '<tt:EncodingInterval>1</tt:EncodingInterval>'
                '<tt:BitrateLimit>4096</tt:BitrateLimit></tt:RateControl>')
PTZ_CONFIGURATION = ('<tt:PTZConfiguration token="PTZ_1"><tt:Name>PTZ</tt:Name>'
                     '<tt:UseCount>1</tt:UseCount><tt:NodeToken>Node_1</tt:NodeToken></tt:PTZConfiguration>')

PROFILES = envelope(
    '<trt:GetProfilesResponse>'
    + profile('Profile_1', video_source_configuration('VSC_1', 'VS_1'),
              video_encoder_configuration('VEC_1', 'H264', 1920, 1080, RATE_CONTROL), PTZ_CONFIGURATION)
    + profile('Profile_2', video_source_configuration('VSC_1', 'VS_1'),
              video_encoder_configuration('VEC_2', 'JPEG', 640, 360))
    + profile('Profile_3', video_source_configuration('VSC_2', 'VS_2'))
    + profile('Profile_4', video_source_configuration('VSC_3', 'VS_3'),
              video_encoder_configuration('VEC_4', 'MPEG4', 704, 576))
    + '</trt:GetProfilesResponse>'
)


def video_sources(*tokens):
    return envelope(
        '<trt:GetVideoSourcesResponse>'
        + ''.join(f'<trt:VideoSources token="{token}"><tt:Framerate>25</tt:Framerate>'
                  '<tt:Resolution><tt:Width>1920</tt:Width><tt:Height>1080</tt:Height></tt:Resolution>'
                  '</trt:VideoSources>' for token in tokens)
        + '</trt:GetVideoSourcesResponse>'
    )


class TestMedia:
    """connect(media=True): profiles, video sources and the active source per video source."""

    @pytest.mark.asyncio
    async def test_connect_selects_active_sources(self):
        session, transport = make_session({
            'GetServices': DEFAULT_SERVICES,
            'GetProfiles': PROFILES,
            'GetVideoSources': video_sources('VS_1', 'VS_2', 'VS_3'),
        })
        await session.connect(sync_clock=False, media=True)

        assert transport.operations[0] == 'GetServices'
        assert sorted(transport.operations[1:]) == ['GetProfiles', 'GetVideoSources']
        assert {call['xaddr'] for call in transport.calls[1:]} == {'http://192.168.1.10/onvif/media_service'}

        assert [p['token'] for p in session.profiles] == ['Profile_1', 'Profile_2', 'Profile_3', 'Profile_4']
        assert [s['token'] for s in session.video_sources] == ['VS_1', 'VS_2', 'VS_3']
        assert session.default_profile['token'] == 'Profile_1'
        assert [p['token'] for p in session.default_profiles] == ['Profile_1', 'Profile_4']

        assert session.active_source == ActiveSource(
            source_token='VS_1',
            profile_token='Profile_1',
            video_source_configuration_token='VSC_1',
            encoding='H264',
            width=1920,
            height=1080,
            fps=25,
            bitrate=4096,
            ptz={'name': 'PTZ', 'token': 'PTZ_1'},
        )
        assert session.active_sources[1] == ActiveSource('VS_3', 'Profile_4', 'VSC_3', 'MPEG4', 704, 576)

    @pytest.mark.asyncio
    async def test_connect_without_media(self, fake_transport):
        session = create_session(BASE, transport=fake_transport, config=fake_transport.config)
        await session.connect(sync_clock=False)
        assert fake_transport.operations == ['GetServices']
        assert session.active_source is None
        assert session.profiles == []

    @pytest.mark.asyncio
    async def test_first_source_without_profile(self):
        session, _ = make_session({
            'GetServices': DEFAULT_SERVICES,
            'GetProfiles': PROFILES,
            'GetVideoSources': video_sources('VS_2', 'VS_1'),
        })
        with pytest.raises(MalformedResponse) as exc:
            await session.connect(sync_clock=False, media=True)
        assert "'VS_2'" in str(exc.value)
        assert session.active_source is None
