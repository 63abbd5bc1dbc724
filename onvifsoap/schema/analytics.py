"""
Analytics service (http://www.onvif.org/ver20/analytics/wsdl).
"""

from ..registry import any_element, element, operation

NAME = 'analytics'
NAMESPACE = 'http://www.onvif.org/ver20/analytics/wsdl'
PREFIX = 'tan'

DEFINITIONS = [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetSupportedAnalyticsModules', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        any_element('SupportedAnalyticsModules', optional=False),
    ]),
    operation('GetAnalyticsModules', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        element('AnalyticsModule', 'Config', repeated=True),
    ]),
    operation('GetSupportedRules', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        any_element('SupportedRules', optional=False),
    ]),
    operation('GetRules', [
        element('ConfigurationToken', 'ReferenceToken'),
    ], [
        element('Rule', 'Config', repeated=True),
    ]),
]
