"""
Device management service (http://www.onvif.org/ver10/device/wsdl).
"""

from ..registry import any_element, complex_type, element, operation, simple_type

NAME = 'device'
NAMESPACE = 'http://www.onvif.org/ver10/device/wsdl'
PREFIX = 'tds'

DEFINITIONS = [
    complex_type('Service', [
        element('Namespace', 'anyURI'),
        element('XAddr', 'anyURI'),
        any_element('Capabilities'),
        element('Version', 'OnvifVersion'),
    ]),
    simple_type('StorageType', ['NFS', 'CIFS', 'CDMI', 'FTP']),

    operation('GetServices', [
        element('IncludeCapability', 'boolean'),
    ], [
        element('Service', 'Service', repeated=True),
    ]),
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetCapabilities', [
        element('Category', 'CapabilityCategory', repeated=True),
    ], [
        element('Capabilities', 'Capabilities'),
    ]),
    operation('GetDeviceInformation', [], [
        element('Manufacturer'),
        element('Model'),
        element('FirmwareVersion'),
        element('SerialNumber'),
        element('HardwareId'),
    ]),
    operation('GetSystemDateAndTime', [], [
        element('SystemDateAndTime', 'SystemDateTime'),
    ]),
    operation('SetSystemDateAndTime', [
        element('DateTimeType', 'SetDateTimeType'),
        element('DaylightSavings', 'boolean'),
        element('TimeZone', 'TimeZone', optional=True),
        element('UTCDateTime', 'DateTime', optional=True),
    ]),
    operation('GetHostname', [], [
        element('HostnameInformation', 'HostnameInformation'),
    ]),
    operation('SetHostname', [
        element('Name', 'token'),
    ]),
    operation('GetScopes', [], [
        element('Scopes', 'Scope', repeated=True),
    ]),
    operation('SetScopes', [
        element('Scopes', 'anyURI', repeated=True),
    ]),
    operation('AddScopes', [
        element('ScopeItem', 'anyURI', repeated=True),
    ]),
    operation('RemoveScopes', [
        element('ScopeItem', 'anyURI', repeated=True),
    ], [
        element('ScopeItem', 'anyURI', repeated=True),
    ]),
    operation('GetDiscoveryMode', [], [
        element('DiscoveryMode', 'DiscoveryMode'),
    ]),
    operation('SetDiscoveryMode', [
        element('DiscoveryMode', 'DiscoveryMode'),
    ]),
    operation('GetNTP', [], [
        element('NTPInformation', 'NTPInformation'),
    ]),
    operation('SetNTP', [
        element('FromDHCP', 'boolean'),
        element('NTPManual', 'NetworkHost', repeated=True),
    ]),
    operation('GetDNS', [], [
        element('DNSInformation', 'DNSInformation'),
    ]),
    operation('SetDNS', [
        element('FromDHCP', 'boolean'),
        element('SearchDomain', 'token', repeated=True),
        element('DNSManual', 'IPAddress', repeated=True),
    ]),
    operation('GetNetworkInterfaces', [], [
        element('NetworkInterfaces', 'NetworkInterface', repeated=True),
    ]),
    operation('GetNetworkProtocols', [], [
        element('NetworkProtocols', 'NetworkProtocol', repeated=True),
    ]),
    operation('SetNetworkProtocols', [
        element('NetworkProtocols', 'NetworkProtocol', repeated=True),
    ]),
    operation('GetUsers', [], [
        element('User', 'User', repeated=True),
    ]),
    operation('CreateUsers', [
        element('User', 'User', repeated=True),
    ]),
    operation('DeleteUsers', [
        element('Username', repeated=True),
    ]),
    operation('SetUser', [
        element('User', 'User', repeated=True),
    ]),
    operation('GetWsdlUrl', [], [
        element('WsdlUrl', 'anyURI'),
    ]),
    operation('SystemReboot', [], [
        element('Message'),
    ]),
    operation('SetSystemFactoryDefault', [
        element('FactoryDefault', 'FactoryDefaultType'),
    ]),
]
