"""
Media service, version 1 (http://www.onvif.org/ver10/media/wsdl).
"""

from ..registry import any_element, element, operation

NAME = 'media'
NAMESPACE = 'http://www.onvif.org/ver10/media/wsdl'
PREFIX = 'trt'

DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetProfiles', [], [
        element('Profiles', 'Profile', repeated=True),
    ]),
    operation('GetProfile', [
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('Profile', 'Profile'),
    ]),
    operation('CreateProfile', [
        element('Name', 'Name'),
        element('Token', 'ReferenceToken', optional=True),
    ], [
        element('Profile', 'Profile'),
    ]),
    operation('DeleteProfile', [
        element('ProfileToken', 'ReferenceToken'),
    ]),
    operation('GetVideoSources', [], [
        element('VideoSources', 'VideoSource', repeated=True),
    ]),
    operation('GetAudioSources', [], [
        element('AudioSources', 'AudioSource', repeated=True),
    ]),
    operation('GetVideoSourceConfigurations', [], [
        element('Configurations', 'VideoSourceConfiguration', repeated=True),
    ]),
    operation('GetVideoEncoderConfigurations', [], [
        element('Configurations', 'VideoEncoderConfiguration', repeated=True),
    ]),
    operation('GetVideoEncoderConfiguration', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        element('Configuration', 'VideoEncoderConfiguration'),
    ]),
    operation('SetVideoEncoderConfiguration', [
        element('Configuration', 'VideoEncoderConfiguration'),
        element('ForcePersistence', 'boolean'),
    ]),
    operation('GetMetadataConfigurations', [], [
        element('Configurations', 'MetadataConfiguration', repeated=True),
    ]),
    operation('AddPTZConfiguration', [
        element('ProfileToken', 'ReferenceToken'),
        element('ConfigurationToken', 'ReferenceToken'),
    ]),
    operation('RemovePTZConfiguration', [
        element('ProfileToken', 'ReferenceToken'),
    ]),
    operation('GetStreamUri', [
        element('StreamSetup', 'StreamSetup'),
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('MediaUri', 'MediaUri'),
    ]),
    operation('GetSnapshotUri', [
        element('ProfileToken', 'ReferenceToken'),
    ], [
        element('MediaUri', 'MediaUri'),
    ]),
]
