"""
Media service, version 2 (http://www.onvif.org/ver20/media/wsdl).
"""

from ..registry import any_element, attribute, complex_type, element, operation

NAME = 'media2'
NAMESPACE = 'http://www.onvif.org/ver20/media/wsdl'
PREFIX = 'tr2'

DEFINITIONS = [
    complex_type('ConfigurationSet', [
        element('VideoSource', 'VideoSourceConfiguration', optional=True),
        element('AudioSource', 'AudioSourceConfiguration', optional=True),
        element('VideoEncoder', 'VideoEncoder2Configuration', optional=True),
        any_element('AudioEncoder'),
        any_element('Analytics'),
        element('PTZ', 'PTZConfiguration', optional=True),
        any_element('Metadata'),
        any_element('AudioOutput'),
        any_element('AudioDecoder'),
        any_element('Receiver'),
        any_element('Extension'),
    ]),
    complex_type('MediaProfile', [
        attribute('token', 'ReferenceToken'),
        attribute('fixed', 'boolean', optional=True),
        element('Name', 'Name'),
        element('Configurations', 'ConfigurationSet', optional=True),
    ]),
    complex_type('ConfigurationRef', [
        element('Type'),
        element('Token', 'ReferenceToken', optional=True),
    ]),

    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetProfiles', [
        element('Token', 'ReferenceToken', optional=True),
        element('Type', repeated=True),
    ], [
        element('Profiles', 'MediaProfile', repeated=True),
    ]),
    operation('CreateProfile', [
        element('Name', 'Name'),
        element('Configuration', 'ConfigurationRef', repeated=True),
    ], [
        element('Token', 'ReferenceToken'),
    ]),
    operation('DeleteProfile', [
        element('Token', 'ReferenceToken'),
    ]),
    operation('GetVideoSourceConfigurations', [
        element('ConfigurationToken', 'ReferenceToken', optional=True),
        element('ProfileToken', 'ReferenceToken', optional=True),
    ], [
        element('Configurations', 'VideoSourceConfiguration', repeated=True),
    ]),
    operation('GetVideoEncoderConfigurations', [
        element('ConfigurationToken', 'ReferenceToken', optional=True),
        element('ProfileToken', 'ReferenceToken', optional=True),
    ], [
        element('Configurations', 'VideoEncoder2Configuration', repeated=True),
    ]),
    operation('GetStreamUri', [
        element('Protocol'),
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('Uri', 'anyURI'),
    ]),
    operation('GetSnapshotUri', [
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('Uri', 'anyURI'),
    ]),
]
