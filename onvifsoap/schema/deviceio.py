"""
Device IO service (http://www.onvif.org/ver10/deviceIO/wsdl).
"""

from ..registry import any_element, element, operation

NAME = 'deviceIO'
NAMESPACE = 'http://www.onvif.org/ver10/deviceIO/wsdl'
PREFIX = 'tmd'

DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetDigitalInputs', [], [
        element('DigitalInputs', 'DigitalInput', repeated=True),
    ]),
    operation('GetRelayOutputs', [], [
        element('RelayOutputs', 'RelayOutput', repeated=True),
    ]),
    operation('SetRelayOutputSettings', [
        element('RelayOutput', 'RelayOutput'),
    ]),
    operation('SetRelayOutputState', [
        element('RelayOutputToken', 'ReferenceToken'),
        element('LogicalState', 'RelayLogicalState'),
    ]),
    operation('GetVideoSources', [], [
        element('Token', 'ReferenceToken', repeated=True),
    ]),
]
