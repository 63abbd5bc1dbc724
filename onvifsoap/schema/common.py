"""
Shared ONVIF schema types (http://www.onvif.org/ver10/schema, prefix tt).
"""

from ..registry import any_element, attribute, complex_type, element, simple_type

NAMESPACE = 'http://www.onvif.org/ver10/schema'
PREFIX = 'tt'


def tt(name, fields=(), base=None):
    return complex_type(name, fields, base=base, namespace=NAMESPACE)


SIMPLE_TYPES = [
    simple_type('ReferenceToken'),
    simple_type('Name'),
    simple_type('IPv4Address'),
    simple_type('IPv6Address'),
    simple_type('DNSName'),
    simple_type('HwAddress'),
    simple_type('MoveStatus', ['IDLE', 'MOVING', 'UNKNOWN']),
    simple_type('SetDateTimeType', ['Manual', 'NTP']),
    simple_type('NetworkHostType', ['IPv4', 'IPv6', 'DNS']),
    simple_type('IPType', ['IPv4', 'IPv6']),
    simple_type('ScopeDefinition', ['Fixed', 'Configurable']),
    simple_type('UserLevel', ['Administrator', 'Operator', 'User', 'Anonymous', 'Extended']),
    simple_type('NetworkProtocolType', ['HTTP', 'HTTPS', 'RTSP']),
    simple_type('FactoryDefaultType', ['Hard', 'Soft']),
    simple_type('DiscoveryMode', ['Discoverable', 'NonDiscoverable']),
    simple_type('CapabilityCategory', ['All', 'Analytics', 'Device', 'Events', 'Imaging', 'Media', 'PTZ']),
    simple_type('Duplex', ['Full', 'Half']),
    simple_type('StreamType', ['RTP-Unicast', 'RTP-Multicast']),
    simple_type('TransportProtocol', ['UDP', 'TCP', 'RTSP', 'HTTP']),
    simple_type('VideoEncoding', ['JPEG', 'MPEG4', 'H264']),
    simple_type('AudioEncoding', ['G711', 'G726', 'AAC']),
    simple_type('H264Profile', ['Baseline', 'Main', 'Extended', 'High']),
    simple_type('RelayMode', ['Monostable', 'Bistable']),
    simple_type('RelayIdleState', ['closed', 'open']),
    simple_type('RelayLogicalState', ['active', 'inactive']),
    simple_type('DigitalIdleState', ['closed', 'open']),
    simple_type('IrCutFilterMode', ['ON', 'OFF', 'AUTO']),
    simple_type('AutoFocusMode', ['AUTO', 'MANUAL']),
    simple_type('TrackType', ['Video', 'Audio', 'Metadata', 'Extended']),
    simple_type('RecordingStatus', ['Initiated', 'Recording', 'Stopped', 'Removing', 'Removed', 'Unknown']),
    simple_type('SearchState', ['Queued', 'Searching', 'Completed', 'Unknown']),
]

ENTITY_TYPES = [
    tt('DeviceEntity', [
        attribute('token', 'ReferenceToken'),
    ]),
    tt('ConfigurationEntity', [
        attribute('token', 'ReferenceToken'),
        element('Name', 'Name'),
        element('UseCount', 'int', optional=True),
    ]),
    tt('IntRectangle', [
        attribute('x', 'int'),
        attribute('y', 'int'),
        attribute('width', 'int'),
        attribute('height', 'int'),
    ]),
    tt('IntRange', [
        element('Min', 'int'),
        element('Max', 'int'),
    ]),
    tt('FloatRange', [
        element('Min', 'float'),
        element('Max', 'float'),
    ]),
    tt('DurationRange', [
        element('Min', 'duration'),
        element('Max', 'duration'),
    ]),
    tt('ItemList', [
        element('SimpleItem', 'SimpleItem', repeated=True),
        any_element('Extension'),
    ]),
    tt('SimpleItem', [
        attribute('Name'),
        attribute('Value'),
    ]),
    tt('Config', [
        attribute('Name'),
        attribute('Type', 'QName'),
        element('Parameters', 'ItemList'),
    ]),
]

DEVICE_TYPES = [
    tt('OnvifVersion', [
        element('Major', 'int'),
        element('Minor', 'int'),
    ]),
    tt('Date', [
        element('Year', 'int'),
        element('Month', 'int'),
        element('Day', 'int'),
    ]),
    tt('Time', [
        element('Hour', 'int'),
        element('Minute', 'int'),
        element('Second', 'int'),
    ]),
    tt('DateTime', [
        element('Time', 'Time'),
        element('Date', 'Date'),
    ]),
    tt('TimeZone', [
        element('TZ', 'token'),
    ]),
    tt('SystemDateTime', [
        element('DateTimeType', 'SetDateTimeType'),
        element('DaylightSavings', 'boolean'),
        element('TimeZone', 'TimeZone', optional=True),
        element('UTCDateTime', 'DateTime', optional=True),
        element('LocalDateTime', 'DateTime', optional=True),
        any_element('Extension'),
    ]),
    tt('IPAddress', [
        element('Type', 'IPType'),
        element('IPv4Address', 'IPv4Address', optional=True),
        element('IPv6Address', 'IPv6Address', optional=True),
    ]),
    tt('NetworkHost', [
        element('Type', 'NetworkHostType'),
        element('IPv4Address', 'IPv4Address', optional=True),
        element('IPv6Address', 'IPv6Address', optional=True),
        element('DNSname', 'DNSName', optional=True),
        any_element('Extension'),
    ]),
    tt('NTPInformation', [
        element('FromDHCP', 'boolean'),
        element('NTPFromDHCP', 'NetworkHost', repeated=True),
        element('NTPManual', 'NetworkHost', repeated=True),
        any_element('Extension'),
    ]),
    tt('DNSInformation', [
        element('FromDHCP', 'boolean'),
        element('SearchDomain', 'token', repeated=True),
        element('DNSFromDHCP', 'IPAddress', repeated=True),
        element('DNSManual', 'IPAddress', repeated=True),
        any_element('Extension'),
    ]),
    tt('HostnameInformation', [
        element('FromDHCP', 'boolean'),
        element('Name', 'token', optional=True),
        any_element('Extension'),
    ]),
    tt('Scope', [
        element('ScopeDef', 'ScopeDefinition'),
        element('ScopeItem', 'anyURI'),
    ]),
    tt('User', [
        element('Username'),
        element('Password', optional=True),
        element('UserLevel', 'UserLevel'),
        any_element('Extension'),
    ]),
    tt('NetworkProtocol', [
        element('Name', 'NetworkProtocolType'),
        element('Enabled', 'boolean'),
        element('Port', 'int', repeated=True),
        any_element('Extension'),
    ]),
    tt('NetworkInterfaceInfo', [
        element('Name', optional=True),
        element('HwAddress', 'HwAddress'),
        element('MTU', 'int', optional=True),
    ]),
    tt('NetworkInterfaceConnectionSetting', [
        element('AutoNegotiation', 'boolean'),
        element('Speed', 'int'),
        element('Duplex', 'Duplex'),
    ]),
    tt('NetworkInterfaceLink', [
        element('AdminSettings', 'NetworkInterfaceConnectionSetting'),
        element('OperSettings', 'NetworkInterfaceConnectionSetting'),
        element('InterfaceType', 'int'),
    ]),
    tt('PrefixedIPv4Address', [
        element('Address', 'IPv4Address'),
        element('PrefixLength', 'int'),
    ]),
    tt('IPv4Configuration', [
        element('Manual', 'PrefixedIPv4Address', repeated=True),
        element('LinkLocal', 'PrefixedIPv4Address', optional=True),
        element('FromDHCP', 'PrefixedIPv4Address', optional=True),
        element('DHCP', 'boolean'),
        any_element('Extension'),
    ]),
    tt('IPv4NetworkInterface', [
        element('Enabled', 'boolean'),
        element('Config', 'IPv4Configuration'),
    ]),
    tt('NetworkInterface', [
        element('Enabled', 'boolean'),
        element('Info', 'NetworkInterfaceInfo', optional=True),
        element('Link', 'NetworkInterfaceLink', optional=True),
        element('IPv4', 'IPv4NetworkInterface', optional=True),
        any_element('IPv6'),
        any_element('Extension'),
    ], base='DeviceEntity'),
]

CAPABILITY_TYPES = [
    tt('AnalyticsCapabilities', [
        element('XAddr', 'anyURI'),
        element('RuleSupport', 'boolean', optional=True),
        element('AnalyticsModuleSupport', 'boolean', optional=True),
    ]),
    tt('DeviceCapabilities', [
        element('XAddr', 'anyURI'),
        any_element('Network'),
        any_element('System'),
        any_element('IO'),
        any_element('Security'),
        any_element('Extension'),
    ]),
    tt('EventCapabilities', [
        element('XAddr', 'anyURI'),
        element('WSSubscriptionPolicySupport', 'boolean', optional=True),
        element('WSPullPointSupport', 'boolean', optional=True),
        element('WSPausableSubscriptionManagerInterfaceSupport', 'boolean', optional=True),
    ]),
    tt('ImagingCapabilities', [
        element('XAddr', 'anyURI'),
    ]),
    tt('MediaCapabilities', [
        element('XAddr', 'anyURI'),
        any_element('StreamingCapabilities'),
        any_element('Extension'),
    ]),
    tt('PTZCapabilities', [
        element('XAddr', 'anyURI'),
    ]),
    tt('DeviceIOCapabilities', [
        element('XAddr', 'anyURI'),
        element('VideoSources', 'int', optional=True),
        element('VideoOutputs', 'int', optional=True),
        element('AudioSources', 'int', optional=True),
        element('AudioOutputs', 'int', optional=True),
        element('RelayOutputs', 'int', optional=True),
    ]),
    tt('DisplayCapabilities', [
        element('XAddr', 'anyURI'),
        element('FixedLayout', 'boolean', optional=True),
    ]),
    tt('RecordingCapabilities', [
        element('XAddr', 'anyURI'),
        element('ReceiverSource', 'boolean', optional=True),
        element('MediaProfileSource', 'boolean', optional=True),
        element('DynamicRecordings', 'boolean', optional=True),
        element('DynamicTracks', 'boolean', optional=True),
        element('MaxStringLength', 'int', optional=True),
    ]),
    tt('SearchCapabilities', [
        element('XAddr', 'anyURI'),
        element('MetadataSearch', 'boolean', optional=True),
    ]),
    tt('ReplayCapabilities', [
        element('XAddr', 'anyURI'),
    ]),
    tt('ReceiverCapabilities', [
        element('XAddr', 'anyURI'),
        element('RTP_Multicast', 'boolean', optional=True),
        element('RTP_TCP', 'boolean', optional=True),
        element('RTP_RTSP_TCP', 'boolean', optional=True),
        element('SupportedReceivers', 'int', optional=True),
        element('MaximumRTSPURILength', 'int', optional=True),
    ]),
    tt('AnalyticsDeviceCapabilities', [
        element('XAddr', 'anyURI'),
        element('RuleSupport', 'boolean', optional=True),
        any_element('Extension'),
    ]),
    tt('CapabilitiesExtension', [
        element('DeviceIO', 'DeviceIOCapabilities', optional=True),
        element('Display', 'DisplayCapabilities', optional=True),
        element('Recording', 'RecordingCapabilities', optional=True),
        element('Search', 'SearchCapabilities', optional=True),
        element('Replay', 'ReplayCapabilities', optional=True),
        element('Receiver', 'ReceiverCapabilities', optional=True),
        element('AnalyticsDevice', 'AnalyticsDeviceCapabilities', optional=True),
        any_element('Extensions'),
    ]),
    tt('Capabilities', [
        element('Analytics', 'AnalyticsCapabilities', optional=True),
        element('Device', 'DeviceCapabilities', optional=True),
        element('Events', 'EventCapabilities', optional=True),
        element('Imaging', 'ImagingCapabilities', optional=True),
        element('Media', 'MediaCapabilities', optional=True),
        element('PTZ', 'PTZCapabilities', optional=True),
        element('Extension', 'CapabilitiesExtension', optional=True),
    ]),
]

MEDIA_TYPES = [
    tt('VideoResolution', [
        element('Width', 'int'),
        element('Height', 'int'),
    ]),
    tt('VideoRateControl', [
        element('FrameRateLimit', 'int'),
        element('EncodingInterval', 'int'),
        element('BitrateLimit', 'int'),
    ]),
    tt('H264Configuration', [
        element('GovLength', 'int'),
        element('H264Profile', 'H264Profile'),
    ]),
    tt('MulticastConfiguration', [
        element('Address', 'IPAddress'),
        element('Port', 'int'),
        element('TTL', 'int'),
        element('AutoStart', 'boolean'),
    ]),
    tt('VideoSource', [
        element('Framerate', 'float'),
        element('Resolution', 'VideoResolution'),
        any_element('Imaging'),
        any_element('Extension'),
    ], base='DeviceEntity'),
    tt('AudioSource', [
        element('Channels', 'int'),
    ], base='DeviceEntity'),
    tt('VideoSourceConfiguration', [
        attribute('ViewMode', optional=True),
        element('SourceToken', 'ReferenceToken'),
        element('Bounds', 'IntRectangle'),
        any_element('Extension'),
    ], base='ConfigurationEntity'),
    tt('AudioSourceConfiguration', [
        element('SourceToken', 'ReferenceToken'),
    ], base='ConfigurationEntity'),
    tt('VideoEncoderConfiguration', [
        attribute('GuaranteedFrameRate', 'boolean', optional=True),
        element('Encoding', 'VideoEncoding'),
        element('Resolution', 'VideoResolution'),
        element('Quality', 'float'),
        element('RateControl', 'VideoRateControl', optional=True),
        any_element('MPEG4'),
        element('H264', 'H264Configuration', optional=True),
        element('Multicast', 'MulticastConfiguration'),
        element('SessionTimeout', 'duration'),
    ], base='ConfigurationEntity'),
    tt('AudioEncoderConfiguration', [
        element('Encoding', 'AudioEncoding'),
        element('Bitrate', 'int'),
        element('SampleRate', 'int'),
        element('Multicast', 'MulticastConfiguration'),
        element('SessionTimeout', 'duration'),
    ], base='ConfigurationEntity'),
    tt('VideoAnalyticsConfiguration', [
        any_element('AnalyticsEngineConfiguration'),
        any_element('RuleEngineConfiguration'),
    ], base='ConfigurationEntity'),
    tt('MetadataConfiguration', [
        attribute('CompressionType', optional=True),
        any_element('PTZStatus'),
        any_element('Events'),
        element('Analytics', 'boolean', optional=True),
        element('Multicast', 'MulticastConfiguration'),
        element('SessionTimeout', 'duration'),
        any_element('AnalyticsEngineConfiguration'),
        any_element('Extension'),
    ], base='ConfigurationEntity'),
    tt('Profile', [
        attribute('token', 'ReferenceToken'),
        attribute('fixed', 'boolean', optional=True),
        element('Name', 'Name'),
        element('VideoSourceConfiguration', 'VideoSourceConfiguration', optional=True),
        element('AudioSourceConfiguration', 'AudioSourceConfiguration', optional=True),
        element('VideoEncoderConfiguration', 'VideoEncoderConfiguration', optional=True),
        element('AudioEncoderConfiguration', 'AudioEncoderConfiguration', optional=True),
        element('VideoAnalyticsConfiguration', 'VideoAnalyticsConfiguration', optional=True),
        element('PTZConfiguration', 'PTZConfiguration', optional=True),
        element('MetadataConfiguration', 'MetadataConfiguration', optional=True),
        any_element('Extension'),
    ]),
    tt('Transport', [
        element('Protocol', 'TransportProtocol'),
        element('Tunnel', 'Transport', optional=True),
    ]),
    tt('StreamSetup', [
        element('Stream', 'StreamType'),
        element('Transport', 'Transport'),
    ]),
    tt('MediaUri', [
        element('Uri', 'anyURI'),
        element('InvalidAfterConnect', 'boolean'),
        element('InvalidAfterReboot', 'boolean'),
        element('Timeout', 'duration'),
    ]),
    tt('VideoResolution2', [
        element('Width', 'int'),
        element('Height', 'int'),
    ]),
    tt('VideoRateControl2', [
        attribute('ConstantBitRate', 'boolean', optional=True),
        element('FrameRateLimit', 'float'),
        element('BitrateLimit', 'int'),
    ]),
    tt('VideoEncoder2Configuration', [
        attribute('GovLength', 'int', optional=True),
        attribute('Profile', optional=True),
        attribute('GuaranteedFrameRate', 'boolean', optional=True),
        element('Encoding'),
        element('Resolution', 'VideoResolution2'),
        element('RateControl', 'VideoRateControl2', optional=True),
        element('Multicast', 'MulticastConfiguration', optional=True),
        element('Quality', 'float'),
    ], base='ConfigurationEntity'),
]

PTZ_TYPES = [
    tt('Vector2D', [
        attribute('x', 'float'),
        attribute('y', 'float'),
        attribute('space', 'anyURI', optional=True),
    ]),
    tt('Vector1D', [
        attribute('x', 'float'),
        attribute('space', 'anyURI', optional=True),
    ]),
    tt('PTZVector', [
        element('PanTilt', 'Vector2D', optional=True),
        element('Zoom', 'Vector1D', optional=True),
    ]),
    tt('PTZSpeed', [
        element('PanTilt', 'Vector2D', optional=True),
        element('Zoom', 'Vector1D', optional=True),
    ]),
    tt('PTZMoveStatus', [
        element('PanTilt', 'MoveStatus', optional=True),
        element('Zoom', 'MoveStatus', optional=True),
    ]),
    tt('PTZStatus', [
        element('Position', 'PTZVector', optional=True),
        element('MoveStatus', 'PTZMoveStatus', optional=True),
        element('Error', optional=True),
        element('UtcTime', 'dateTime'),
    ]),
    tt('Space2DDescription', [
        element('URI', 'anyURI'),
        element('XRange', 'FloatRange'),
        element('YRange', 'FloatRange'),
    ]),
    tt('Space1DDescription', [
        element('URI', 'anyURI'),
        element('XRange', 'FloatRange'),
    ]),
    tt('PTZSpaces', [
        element('AbsolutePanTiltPositionSpace', 'Space2DDescription', repeated=True),
        element('AbsoluteZoomPositionSpace', 'Space1DDescription', repeated=True),
        element('RelativePanTiltTranslationSpace', 'Space2DDescription', repeated=True),
        element('RelativeZoomTranslationSpace', 'Space1DDescription', repeated=True),
        element('ContinuousPanTiltVelocitySpace', 'Space2DDescription', repeated=True),
        element('ContinuousZoomVelocitySpace', 'Space1DDescription', repeated=True),
        element('PanTiltSpeedSpace', 'Space1DDescription', repeated=True),
        element('ZoomSpeedSpace', 'Space1DDescription', repeated=True),
        any_element('Extension'),
    ]),
    tt('PTZNode', [
        attribute('FixedHomePosition', 'boolean', optional=True),
        attribute('GeoMove', 'boolean', optional=True),
        element('Name', 'Name', optional=True),
        element('SupportedPTZSpaces', 'PTZSpaces'),
        element('MaximumNumberOfPresets', 'int'),
        element('HomeSupported', 'boolean'),
        element('AuxiliaryCommands', repeated=True),
        any_element('Extension'),
    ], base='DeviceEntity'),
    tt('PanTiltLimits', [
        element('Range', 'Space2DDescription'),
    ]),
    tt('ZoomLimits', [
        element('Range', 'Space1DDescription'),
    ]),
    tt('PTZConfiguration', [
        attribute('MoveRamp', 'int', optional=True),
        attribute('PresetRamp', 'int', optional=True),
        attribute('PresetTourRamp', 'int', optional=True),
        element('NodeToken', 'ReferenceToken'),
        element('DefaultAbsolutePantTiltPositionSpace', 'anyURI', optional=True),
        element('DefaultAbsoluteZoomPositionSpace', 'anyURI', optional=True),
        element('DefaultRelativePanTiltTranslationSpace', 'anyURI', optional=True),
        element('DefaultRelativeZoomTranslationSpace', 'anyURI', optional=True),
        element('DefaultContinuousPanTiltVelocitySpace', 'anyURI', optional=True),
        element('DefaultContinuousZoomVelocitySpace', 'anyURI', optional=True),
        element('DefaultPTZSpeed', 'PTZSpeed', optional=True),
        element('DefaultPTZTimeout', 'duration', optional=True),
        element('PanTiltLimits', 'PanTiltLimits', optional=True),
        element('ZoomLimits', 'ZoomLimits', optional=True),
        any_element('Extension'),
    ], base='ConfigurationEntity'),
    tt('PTZConfigurationOptions', [
        attribute('PTZRamps', optional=True),
        element('Spaces', 'PTZSpaces'),
        element('PTZTimeout', 'DurationRange'),
        any_element('PTControlDirection'),
        any_element('Extension'),
    ]),
    tt('PTZPreset', [
        attribute('token', 'ReferenceToken', optional=True),
        element('Name', 'Name', optional=True),
        element('PTZPosition', 'PTZVector', optional=True),
    ]),
]

IMAGING_TYPES = [
    tt('FocusConfiguration20', [
        element('AutoFocusMode', 'AutoFocusMode'),
        element('DefaultSpeed', 'float', optional=True),
        element('NearLimit', 'float', optional=True),
        element('FarLimit', 'float', optional=True),
        any_element('Extension'),
    ]),
    tt('ImagingSettings20', [
        any_element('BacklightCompensation'),
        element('Brightness', 'float', optional=True),
        element('ColorSaturation', 'float', optional=True),
        element('Contrast', 'float', optional=True),
        any_element('Exposure'),
        element('Focus', 'FocusConfiguration20', optional=True),
        element('IrCutFilter', 'IrCutFilterMode', optional=True),
        element('Sharpness', 'float', optional=True),
        any_element('WideDynamicRange'),
        any_element('WhiteBalance'),
        any_element('Extension'),
    ]),
    tt('ImagingOptions20', [
        any_element('BacklightCompensation'),
        element('Brightness', 'FloatRange', optional=True),
        element('ColorSaturation', 'FloatRange', optional=True),
        element('Contrast', 'FloatRange', optional=True),
        any_element('Exposure'),
        any_element('Focus'),
        element('IrCutFilterModes', 'IrCutFilterMode', repeated=True),
        element('Sharpness', 'FloatRange', optional=True),
        any_element('WideDynamicRange'),
        any_element('WhiteBalance'),
        any_element('Extension'),
    ]),
    tt('AbsoluteFocus', [
        element('Position', 'float'),
        element('Speed', 'float', optional=True),
    ]),
    tt('RelativeFocus', [
        element('Distance', 'float'),
        element('Speed', 'float', optional=True),
    ]),
    tt('ContinuousFocus', [
        element('Speed', 'float'),
    ]),
    tt('FocusMove', [
        element('Absolute', 'AbsoluteFocus', optional=True),
        element('Relative', 'RelativeFocus', optional=True),
        element('Continuous', 'ContinuousFocus', optional=True),
    ]),
    tt('FocusStatus20', [
        element('Position', 'float'),
        element('MoveStatus', 'MoveStatus'),
        element('Error', optional=True),
        any_element('Extension'),
    ]),
    tt('ImagingStatus20', [
        element('FocusStatus20', 'FocusStatus20', optional=True),
        any_element('Extension'),
    ]),
]

IO_TYPES = [
    tt('RelayOutputSettings', [
        element('Mode', 'RelayMode'),
        element('DelayTime', 'duration'),
        element('IdleState', 'RelayIdleState'),
    ]),
    tt('RelayOutput', [
        element('Properties', 'RelayOutputSettings'),
    ], base='DeviceEntity'),
    tt('DigitalInput', [
        attribute('IdleState', 'DigitalIdleState', optional=True),
    ], base='DeviceEntity'),
]

RECORDING_TYPES = [
    tt('RecordingSourceInformation', [
        element('SourceId', 'anyURI'),
        element('Name', 'Name'),
        element('Location'),
        element('Description'),
        element('Address', 'anyURI'),
    ]),
    tt('RecordingConfiguration', [
        element('Source', 'RecordingSourceInformation'),
        element('Content'),
        element('MaximumRetentionTime', 'duration'),
    ]),
    tt('TrackConfiguration', [
        element('TrackType', 'TrackType'),
        element('Description'),
    ]),
    tt('SourceReference', [
        attribute('Type', 'anyURI', optional=True),
        element('Token', 'ReferenceToken'),
    ]),
    tt('SearchScope', [
        element('IncludedSources', 'SourceReference', repeated=True),
        element('IncludedRecordings', 'ReferenceToken', repeated=True),
        element('RecordingInformationFilter', optional=True),
        any_element('Extension'),
    ]),
    tt('RecordingSummary', [
        element('DataFrom', 'dateTime'),
        element('DataUntil', 'dateTime'),
        element('NumberRecordings', 'int'),
    ]),
    tt('TrackInformation', [
        element('TrackToken', 'ReferenceToken'),
        element('TrackType', 'TrackType'),
        element('Description'),
        element('DataFrom', 'dateTime'),
        element('DataTo', 'dateTime'),
    ]),
    tt('RecordingInformation', [
        element('RecordingToken', 'ReferenceToken'),
        element('Source', 'RecordingSourceInformation'),
        element('EarliestRecording', 'dateTime', optional=True),
        element('LatestRecording', 'dateTime', optional=True),
        element('Content'),
        element('Track', 'TrackInformation', repeated=True),
        element('RecordingStatus', 'RecordingStatus'),
    ]),
    tt('FindRecordingResultList', [
        element('SearchState', 'SearchState'),
        element('RecordingInformation', 'RecordingInformation', repeated=True),
    ]),
    tt('FindEventResult', [
        element('RecordingToken', 'ReferenceToken'),
        element('TrackToken', 'ReferenceToken'),
        element('Time', 'dateTime'),
        any_element('Event', optional=False),
        element('StartStateEvent', 'boolean'),
    ]),
    tt('FindEventResultList', [
        element('SearchState', 'SearchState'),
        element('Result', 'FindEventResult', repeated=True),
    ]),
]

TYPES = (SIMPLE_TYPES + ENTITY_TYPES + DEVICE_TYPES + CAPABILITY_TYPES + MEDIA_TYPES
         + PTZ_TYPES + IMAGING_TYPES + IO_TYPES + RECORDING_TYPES)
