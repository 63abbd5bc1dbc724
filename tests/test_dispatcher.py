"""
Unit tests for the operation dispatcher: retry policy, fault mapping, invalidation.
"""
import pytest

from conftest import DEFAULT_SERVICES, FakeTransport, envelope, fault
from onvifsoap.errors import (
    ActionNotSupported, AuthError, InvalidArgument, InvalidEnumValue, MissingRequiredField,
    OnvifError, OutOfRange, TransportError, UnknownOperation,
)
from onvifsoap.interfaces import Credential, SessionConfig
from onvifsoap.session import create_session

PTZ_XADDR = 'http://192.168.1.10/onvif/ptz_service'

STATUS = envelope(
    '<tptz:GetStatusResponse><tptz:PTZStatus>'
    '<tt:UtcTime>2024-05-01T08:00:00Z</tt:UtcTime>'
    '</tptz:PTZStatus></tptz:GetStatusResponse>'
)


def timeout_error():
    return TransportError(TransportError.TIMEOUT, 'no answer')


def make_session(replies, **config):
    config.setdefault('retry_backoff', 0)
    transport = FakeTransport(dict({'GetServices': DEFAULT_SERVICES}, **replies),
                              SessionConfig(**config))
    session = create_session('http://192.168.1.10', Credential('admin', 'secret'),
                             config=transport.config, transport=transport)
    return session, transport


class TestCall:
    """End to end through a session with a fake transport."""

    @pytest.mark.asyncio
    async def test_call_resolves_and_decodes(self):
        session, transport = make_session({'GetStatus': STATUS})
        result = await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert 'utcTime' in result['PTZStatus']
        assert transport.operations == ['GetServices', 'GetStatus']
        status_call = transport.calls[1]
        assert status_call['xaddr'] == PTZ_XADDR
        assert status_call['action'] == 'http://www.onvif.org/ver20/ptz/wsdl/GetStatus'
        assert status_call['credential'] == Credential('admin', 'secret')

    @pytest.mark.asyncio
    async def test_argument_errors_never_reach_the_network(self):
        session, transport = make_session({})
        with pytest.raises(InvalidEnumValue):
            await session.call('device', 'GetCapabilities', {'category': ['Everything']})
        with pytest.raises(MissingRequiredField):
            await session.call('PTZ', 'ContinuousMove', {'profileToken': 'Profile_1'})
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_unknown_operation(self):
        session, transport = make_session({})
        with pytest.raises(UnknownOperation):
            await session.call('PTZ', 'Teleport')
        assert transport.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("subcode,error_class", [
        ('ter:ActionNotSupported', ActionNotSupported),
        ('ter:NotAuthorized', AuthError),
        ('ter:InvalidArgVal', InvalidArgument),
        ('ter:OutofRange', OutOfRange),
        ('ter:SomethingElse', OnvifError),
    ])
    async def test_faults_are_mapped(self, subcode, error_class):
        session, transport = make_session({'GetStatus': fault(subcode, 'failed')})
        with pytest.raises(error_class) as exc:
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert exc.value.subcode == subcode
        assert exc.value.fault.reason == 'failed'

    @pytest.mark.asyncio
    async def test_explicit_xaddr_skips_resolution(self):
        session, transport = make_session({'PullMessages': envelope(
            '<tev:PullMessagesResponse xmlns:tev="http://www.onvif.org/ver10/events/wsdl">'
            '<tev:CurrentTime>2024-05-01T08:00:00Z</tev:CurrentTime>'
            '<tev:TerminationTime>2024-05-01T08:01:00Z</tev:TerminationTime>'
            '</tev:PullMessagesResponse>'
        )})
        subscription = 'http://192.168.1.10/onvif/subscription?Idx=3'
        result = await session.call('events', 'PullMessages', {'timeout': 'PT5S', 'messageLimit': 10},
                                    xaddr=subscription)
        assert 'notificationMessage' not in result
        assert transport.operations == ['PullMessages']
        assert transport.calls[0]['xaddr'] == subscription
        assert transport.calls[0]['action'].endswith('PullPointSubscription/PullMessagesRequest')


class TestRetry:
    """Only idempotent operations are retried, and only once."""

    @pytest.mark.asyncio
    async def test_get_retried_once_after_timeout(self):
        session, transport = make_session({'GetStatus': [timeout_error(), STATUS]})
        result = await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert 'PTZStatus' in result
        assert transport.operations == ['GetServices', 'GetStatus', 'GetStatus']

    @pytest.mark.asyncio
    async def test_get_gives_up_after_second_failure(self):
        session, transport = make_session({'GetStatus': [timeout_error(), timeout_error()]})
        with pytest.raises(TransportError):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert transport.operations.count('GetStatus') == 2

    @pytest.mark.asyncio
    async def test_connection_reset_is_retried(self):
        reset = TransportError(TransportError.CONNECTION_RESET, 'reset')
        session, transport = make_session({'GetStatus': [reset, STATUS]})
        await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert transport.operations.count('GetStatus') == 2

    @pytest.mark.asyncio
    async def test_connection_failure_not_retried(self):
        refused = TransportError(TransportError.CONNECTION_FAILED, 'refused')
        session, transport = make_session({'GetStatus': [refused, STATUS]})
        with pytest.raises(TransportError):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert transport.operations.count('GetStatus') == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation,args", [
        ('ContinuousMove', {'profileToken': 'Profile_1', 'velocity': {'panTilt': {'x': 0.5, 'y': 0}}}),
        ('SetPreset', {'profileToken': 'Profile_1', 'presetName': 'door'}),
        ('Stop', {'profileToken': 'Profile_1', 'panTilt': True}),
    ])
    async def test_mutating_operations_never_retried(self, operation, args):
        session, transport = make_session({operation: [timeout_error(), envelope('')]})
        with pytest.raises(TransportError):
            await session.call('PTZ', operation, args)
        assert transport.operations.count(operation) == 1

    @pytest.mark.asyncio
    async def test_faults_not_retried(self):
        session, transport = make_session({'GetStatus': [fault('ter:InvalidArgVal'), STATUS]})
        with pytest.raises(InvalidArgument):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert transport.operations.count('GetStatus') == 1


class TestInvalidation:
    """Moved endpoints drop the cached XAddr."""

    @pytest.mark.asyncio
    async def test_moved_fault_invalidates(self):
        session, transport = make_session({
            'GetStatus': [fault('wsa:EndpointUnavailable', 'moved'), STATUS],
        })
        with pytest.raises(OnvifError):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert 'PTZ' not in session.endpoint.services

        await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert transport.operations == ['GetServices', 'GetStatus', 'GetServices', 'GetStatus']

    @pytest.mark.asyncio
    async def test_http_404_invalidates(self):
        not_found = TransportError(TransportError.HTTP_STATUS, 'HTTP 404', status_code=404)
        session, transport = make_session({'GetStatus': [not_found, STATUS]})
        with pytest.raises(TransportError):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert 'PTZ' not in session.endpoint.services
        assert 'media' in session.endpoint.services

    @pytest.mark.asyncio
    async def test_other_faults_keep_the_cache(self):
        session, transport = make_session({'GetStatus': fault('ter:InvalidArgVal')})
        with pytest.raises(InvalidArgument):
            await session.call('PTZ', 'GetStatus', {'profileToken': 'Profile_1'})
        assert session.endpoint.services['PTZ'].xaddr == PTZ_XADDR
