"""
Imaging service (http://www.onvif.org/ver20/imaging/wsdl).
"""

from ..registry import any_element, element, operation

NAME = 'imaging'
NAMESPACE = 'http://www.onvif.org/ver20/imaging/wsdl'
PREFIX = 'timg'

DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetImagingSettings', [
        element('VideoSourceToken', 'ReferenceToken'),
    ], [
        element('ImagingSettings', 'ImagingSettings20'),
    ]),
    operation('SetImagingSettings', [
        element('VideoSourceToken', 'ReferenceToken'),
        element('ImagingSettings', 'ImagingSettings20'),
        element('ForcePersistence', 'boolean', optional=True),
    ]),
    operation('GetOptions', [
        element('VideoSourceToken', 'ReferenceToken'),
    ], [
        element('ImagingOptions', 'ImagingOptions20'),
    ]),
    operation('GetMoveOptions', [
        element('VideoSourceToken', 'ReferenceToken'),
    ], [
        any_element('MoveOptions', optional=False),
    ]),
    operation('Move', [
        element('VideoSourceToken', 'ReferenceToken'),
        element('Focus', 'FocusMove'),
    ]),
    operation('Stop', [
        element('VideoSourceToken', 'ReferenceToken'),
    ]),
    operation('GetStatus', [
        element('VideoSourceToken', 'ReferenceToken'),
    ], [
        element('Status', 'ImagingStatus20'),
    ]),
]
