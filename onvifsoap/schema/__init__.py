"""
Static ONVIF schema dictionary: which services exist and what their operations carry.
"""

import logging

from . import analytics, common, device, deviceio, events, imaging, media, media2, ptz, recording

logger = logging.getLogger(__name__)

# (service name, namespace, prefix, service specific definitions)
SERVICES = [
    (device.NAME, device.NAMESPACE, device.PREFIX, device.DEFINITIONS),
    (media.NAME, media.NAMESPACE, media.PREFIX, media.DEFINITIONS),
    (media2.NAME, media2.NAMESPACE, media2.PREFIX, media2.DEFINITIONS),
    (ptz.NAME, ptz.NAMESPACE, ptz.PREFIX, ptz.DEFINITIONS),
    (imaging.NAME, imaging.NAMESPACE, imaging.PREFIX, imaging.DEFINITIONS),
    (events.NAME, events.NAMESPACE, events.PREFIX, events.DEFINITIONS),
    (events.SUBSCRIPTION_NAME, events.WSNT_NAMESPACE, events.SUBSCRIPTION_PREFIX,
     events.SUBSCRIPTION_DEFINITIONS),
    (deviceio.NAME, deviceio.NAMESPACE, deviceio.PREFIX, deviceio.DEFINITIONS),
    (recording.NAME, recording.NAMESPACE, recording.PREFIX, recording.DEFINITIONS),
    (recording.SEARCH_NAME, recording.SEARCH_NAMESPACE, recording.SEARCH_PREFIX,
     recording.SEARCH_DEFINITIONS),
    (recording.REPLAY_NAME, recording.REPLAY_NAMESPACE, recording.REPLAY_PREFIX,
     recording.REPLAY_DEFINITIONS),
    (analytics.NAME, analytics.NAMESPACE, analytics.PREFIX, analytics.DEFINITIONS),
]


def load(registry):
    """Register every bundled service, each one seeing the shared tt types first."""
    from ..codec import register_prefix
    register_prefix(common.PREFIX, common.NAMESPACE)
    for name, namespace, prefix, definitions in SERVICES:
        registry.register(name, namespace, common.TYPES + definitions, prefix=prefix)
    logger.debug("Loaded %d ONVIF services", len(SERVICES))
