"""
Event service (http://www.onvif.org/ver10/events/wsdl) and the WS-BaseNotification
subscription manager operations used on pull-point subscriptions.
"""

from ..registry import any_element, complex_type, element, operation

NAME = 'events'
NAMESPACE = 'http://www.onvif.org/ver10/events/wsdl'
PREFIX = 'tev'

WSA_NAMESPACE = 'http://www.w3.org/2005/08/addressing'
WSNT_NAMESPACE = 'http://docs.oasis-open.org/wsn/b-2'

SUBSCRIPTION_NAME = 'subscription'
SUBSCRIPTION_PREFIX = 'wsnt'
SUBSCRIPTION_ACTION = 'http://docs.oasis-open.org/wsn/bw-2/SubscriptionManager'

ADDRESSING_TYPES = [
    complex_type('EndpointReferenceType', [
        element('Address', 'anyURI'),
        any_element('ReferenceParameters'),
        any_element('Metadata'),
    ], namespace=WSA_NAMESPACE),
]

DEFINITIONS = ADDRESSING_TYPES + [
    operation('GetServiceCapabilities', [], [
        any_element('Capabilities', optional=False),
    ]),
    operation('GetEventProperties', [], [
        element('TopicNamespaceLocation', 'anyURI', repeated=True),
        element('FixedTopicSet', 'boolean'),
        any_element('TopicSet', optional=False),
        element('TopicExpressionDialect', 'anyURI', repeated=True),
        element('MessageContentFilterDialect', 'anyURI', repeated=True),
        element('ProducerPropertiesFilterDialect', 'anyURI', repeated=True),
        element('MessageContentSchemaLocation', 'anyURI', repeated=True),
    ]),
    operation('CreatePullPointSubscription', [
        any_element('Filter'),
        # AbsoluteOrRelativeTimeType: an xs:dateTime or an xs:duration
        element('InitialTerminationTime', optional=True),
        any_element('SubscriptionPolicy'),
    ], [
        element('SubscriptionReference', 'EndpointReferenceType'),
        element('CurrentTime', 'dateTime'),
        element('TerminationTime', 'dateTime'),
    ]),
    operation('PullMessages', [
        element('Timeout', 'duration'),
        element('MessageLimit', 'int'),
    ], [
        element('CurrentTime', 'dateTime'),
        element('TerminationTime', 'dateTime'),
        any_element('NotificationMessage', repeated=True),
    ], action=f'{NAMESPACE}/PullPointSubscription/PullMessagesRequest', idempotent=False),
    operation('SetSynchronizationPoint', [], [],
              action=f'{NAMESPACE}/PullPointSubscription/SetSynchronizationPointRequest'),
]

SUBSCRIPTION_DEFINITIONS = [
    operation('Renew', [
        element('TerminationTime', optional=True),
    ], [
        element('TerminationTime', 'dateTime'),
        element('CurrentTime', 'dateTime', optional=True),
    ], action=f'{SUBSCRIPTION_ACTION}/RenewRequest'),
    operation('Unsubscribe', [], [], action=f'{SUBSCRIPTION_ACTION}/UnsubscribeRequest'),
]
