"""
PTZ service (http://www.onvif.org/ver20/ptz/wsdl).
"""

from ..registry import any_element, element, operation

NAME = 'PTZ'
NAMESPACE = 'http://www.onvif.org/ver20/ptz/wsdl'
PREFIX = 'tptz'

DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetNodes', [], [
        element('PTZNode', 'PTZNode', repeated=True),
    ]),
    operation('GetNode', [
        element('NodeToken', 'ReferenceToken'),
    ], [
        element('PTZNode', 'PTZNode'),
    ]),
    operation('GetConfigurations', [], [
        element('PTZConfiguration', 'PTZConfiguration', repeated=True),
    ]),
    operation('GetConfiguration', [
        element('PTZConfigurationToken', 'ReferenceToken'),
    ], [
        element('PTZConfiguration', 'PTZConfiguration'),
    ]),
    operation('SetConfiguration', [
        element('PTZConfiguration', 'PTZConfiguration'),
        element('ForcePersistence', 'boolean'),
    ]),
    operation('GetConfigurationOptions', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        element('PTZConfigurationOptions', 'PTZConfigurationOptions'),
    ]),
    operation('GetPresets', [
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('Preset', 'PTZPreset', repeated=True),
    ]),
    operation('SetPreset', [
        element('ProfileToken', 'ReferenceToken'),
        element('PresetName', optional=True),
        element('PresetToken', 'ReferenceToken', optional=True),
    ], [
        element('PresetToken', 'ReferenceToken'),
    ]),
    operation('RemovePreset', [
        element('ProfileToken', 'ReferenceToken'),
        element('PresetToken', 'ReferenceToken'),
    ]),
    operation('GotoPreset', [
        element('ProfileToken', 'ReferenceToken'),
        element('PresetToken', 'ReferenceToken'),
        element('Speed', 'PTZSpeed', optional=True),
    ]),
    operation('GotoHomePosition', [
        element('ProfileToken', 'ReferenceToken'),
        element('Speed', 'PTZSpeed', optional=True),
    ]),
    operation('SetHomePosition', [
        element('ProfileToken', 'ReferenceToken'),
    ]),
    operation('GetStatus', [
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('PTZStatus', 'PTZStatus'),
    ]),
    operation('AbsoluteMove', [
        element('ProfileToken', 'ReferenceToken'),
        element('Position', 'PTZVector'),
        element('Speed', 'PTZSpeed', optional=True),
    ]),
    operation('RelativeMove', [
        element('ProfileToken', 'ReferenceToken'),
        element('Translation', 'PTZVector'),
        element('Speed', 'PTZSpeed', optional=True),
    ]),
    operation('ContinuousMove', [
        element('ProfileToken', 'ReferenceToken'),
        element('Velocity', 'PTZSpeed'),
        element('Timeout', 'duration', optional=True),
    ]),
    operation('Stop', [
        element('ProfileToken', 'ReferenceToken'),
        element('PanTilt', 'boolean', optional=True),
        element('Zoom', 'boolean', optional=True),
    ]),
    operation('SendAuxiliaryCommand', [
        element('ProfileToken', 'ReferenceToken'),
        element('AuxiliaryData'),
    ], [
        element('AuxiliaryResponse'),
    ]),
]
