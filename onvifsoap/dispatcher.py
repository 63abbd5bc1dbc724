"""
Operation dispatcher: lookup, encode, resolve, send, decode and fault mapping.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from . import codec
from .errors import OnvifError, SoapFault, TransportError, classify_fault, is_moved_fault
from .interfaces import Credential, SessionConfig
from .registry import OperationDescriptor, SchemaRegistry
from .transport import Transport

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs one ONVIF operation end to end against a device session."""

    def __init__(self, registry: SchemaRegistry, transport: Transport,
                 config: Optional[SessionConfig] = None):
        self.registry = registry
        self.transport = transport
        self.config = config or transport.config

    async def call(self, device, service: str, operation: str, args: Optional[Mapping] = None,
                   timeout: Optional[float] = None, xaddr: Optional[str] = None) -> Dict[str, Any]:
        """
        Invoke service.operation on device.

        Arguments are encoded before the endpoint is resolved, so argument
        errors never cause network traffic. An explicit xaddr (e.g. a
        pull-point subscription address) bypasses endpoint resolution.
        """
        descriptor = self.registry.lookup(service, operation)
        payload = codec.encode(descriptor, args)
        target = xaddr or await device.resolve(descriptor.service)
        try:
            return await self._exchange(target, descriptor, payload, device.credential,
                                        timeout, device.clock_offset)
        except OnvifError as e:
            if xaddr is None and e.fault is not None and is_moved_fault(e.fault):
                logger.info("%s endpoint %s reported %s, invalidating", descriptor.service,
                            target, e.subcode)
                device.invalidate(descriptor.service)
            raise
        except TransportError as e:
            if xaddr is None and e.status_code == 404:
                logger.info("%s endpoint %s returned 404, invalidating", descriptor.service, target)
                device.invalidate(descriptor.service)
            raise

    async def invoke(self, xaddr: str, descriptor: OperationDescriptor,
                     args: Optional[Mapping] = None, credential: Optional[Credential] = None,
                     timeout: Optional[float] = None, authenticate: bool = True,
                     clock_offset: timedelta = timedelta(0)) -> Dict[str, Any]:
        """Run an operation against an explicit address (no resolution, no invalidation)."""
        payload = codec.encode(descriptor, args)
        return await self._exchange(xaddr, descriptor, payload, credential, timeout,
                                    clock_offset, authenticate)

    async def _exchange(self, xaddr: str, descriptor: OperationDescriptor, payload: str,
                        credential: Optional[Credential], timeout: Optional[float],
                        clock_offset: timedelta, authenticate: bool = True) -> Dict[str, Any]:
        attempts = 2 if descriptor.idempotent else 1
        for attempt in range(1, attempts + 1):
            try:
                body = await self.transport.send(xaddr, descriptor.action, payload, credential,
                                                 timeout, clock_offset, authenticate)
                break
            except TransportError as e:
                if attempt < attempts and e.retryable:
                    logger.info("%s.%s failed (%s), retrying in %.1fs", descriptor.service,
                                descriptor.name, e.kind, self.config.retry_backoff)
                    await asyncio.sleep(self.config.retry_backoff)
                    continue
                raise

        result = codec.decode(descriptor, body)
        if isinstance(result, SoapFault):
            error = classify_fault(result)
            logger.debug("%s.%s fault: %s", descriptor.service, descriptor.name, error)
            raise error
        return result
