"""
Recording, search and replay services (Profile G).
"""

from ..registry import any_element, complex_type, element, operation
from .common import NAMESPACE as TT_NAMESPACE

NAME = 'recording'
NAMESPACE = 'http://www.onvif.org/ver10/recording/wsdl'
PREFIX = 'trc'

SEARCH_NAME = 'search'
SEARCH_NAMESPACE = 'http://www.onvif.org/ver10/search/wsdl'
SEARCH_PREFIX = 'tse'

REPLAY_NAME = 'replay'
REPLAY_NAMESPACE = 'http://www.onvif.org/ver10/replay/wsdl'
REPLAY_PREFIX = 'trp'

DEFINITIONS = [
    complex_type('GetTracksResponseItem', [
        element('TrackToken', 'ReferenceToken'),
        element('Configuration', 'TrackConfiguration'),
    ], namespace=TT_NAMESPACE),
    complex_type('GetTracksResponseList', [
        element('Track', 'GetTracksResponseItem', repeated=True),
    ], namespace=TT_NAMESPACE),
    complex_type('GetRecordingsResponseItem', [
        element('RecordingToken', 'ReferenceToken'),
        element('Configuration', 'RecordingConfiguration'),
        element('Tracks', 'GetTracksResponseList'),
    ], namespace=TT_NAMESPACE),

    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetRecordings', [], [
        element('RecordingItem', 'GetRecordingsResponseItem', repeated=True),
    ]),
    operation('GetRecordingConfiguration', [
        element('RecordingToken', 'ReferenceToken'),
    ], [
        element('RecordingConfiguration', 'RecordingConfiguration'),
    ]),
    operation('CreateRecording', [
        element('RecordingConfiguration', 'RecordingConfiguration'),
    ], [
        element('RecordingToken', 'ReferenceToken'),
    ]),
    operation('DeleteRecording', [
        element('RecordingToken', 'ReferenceToken'),
    ]),
]

SEARCH_DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetRecordingSummary', [], [
        element('Summary', 'RecordingSummary'),
    ]),
    operation('GetRecordingInformation', [
        element('RecordingToken', 'ReferenceToken'),
    ], [
        element('RecordingInformation', 'RecordingInformation'),
    ]),
    operation('FindRecordings', [
        element('Scope', 'SearchScope'),
        element('MaxMatches', 'int', optional=True),
        element('KeepAliveTime', 'duration'),
    ], [
        element('SearchToken', 'token'),
    ]),
    operation('GetRecordingSearchResults', [
        element('SearchToken', 'token'),
        element('MinResults', 'int', optional=True),
        element('MaxResults', 'int', optional=True),
        element('WaitTime', 'duration', optional=True),
    ], [
        element('ResultList', 'FindRecordingResultList'),
    ], idempotent=False),
    operation('FindEvents', [
        element('StartPoint', 'dateTime'),
        element('EndPoint', 'dateTime', optional=True),
        element('Scope', 'SearchScope'),
        any_element('SearchFilter', optional=False),
        element('IncludeStartState', 'boolean'),
        element('MaxMatches', 'int', optional=True),
        element('KeepAliveTime', 'duration'),
    ], [
        element('SearchToken', 'token'),
    ]),
    operation('GetEventSearchResults', [
        element('SearchToken', 'token'),
        element('MinResults', 'int', optional=True),
        element('MaxResults', 'int', optional=True),
        element('WaitTime', 'duration', optional=True),
    ], [
        element('ResultList', 'FindEventResultList'),
    ], idempotent=False),
    operation('EndSearch', [
        element('SearchToken', 'token'),
    ], [
        element('Endpoint', 'dateTime'),
    ]),
]

REPLAY_DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetReplayUri', [
        element('StreamSetup', 'StreamSetup'),
        element('RecordingToken', 'ReferenceToken'),
    ], [
        element('Uri', 'anyURI'),
    ]),
]
