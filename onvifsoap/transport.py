"""
Transport & auth layer: HTTP POST of SOAP envelopes with WS-Security UsernameToken.
"""

import asyncio
import base64
import functools
import hashlib
import logging
import os
import threading
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from xml.sax.saxutils import escape

import requests
from requests.auth import HTTPDigestAuth

from . import codec
from .errors import AuthError, TransportError
from .interfaces import Credential, SessionConfig

logger = logging.getLogger(__name__)

WSSE_PW_DIGEST_TYPE = (
    "http://docs.oasis-open.org/wss/2004/01/"
    "oasis-200401-wss-username-token-profile-1.0#PasswordDigest"
)
WSSE_BASE64_ENCODING = (
    "http://docs.oasis-open.org/wss/2004/01/"
    "oasis-200401-wss-soap-message-security-1.0#Base64Binary"
)

SECURITY_HEADER = (
    '<wsse:Security s:mustUnderstand="1" xmlns:wsse="{wsse}" xmlns:wsu="{wsu}">'
    '<wsse:UsernameToken>'
    '<wsse:Username>{username}</wsse:Username>'
    '<wsse:Password Type="{digest_type}">{digest}</wsse:Password>'
    '<wsse:Nonce EncodingType="{encoding}">{nonce}</wsse:Nonce>'
    '<wsu:Created>{created}</wsu:Created>'
    '</wsse:UsernameToken>'
    '</wsse:Security>'
)


def password_digest(nonce: bytes, created: str, password: str) -> str:
    """Base64(SHA1(nonce + created + password))"""
    raw = hashlib.sha1(nonce + created.encode('utf-8') + password.encode('utf-8')).digest()
    return base64.b64encode(raw).decode('ascii')


def security_header(credential: Credential, clock_offset: timedelta = timedelta(0),
                    nonce: Optional[bytes] = None, now: Optional[datetime] = None) -> str:
    """
    WS-Security UsernameToken header block.

    Created is the local UTC time shifted by the device clock offset, so a
    device whose clock is off still accepts the token. A fresh nonce is drawn
    for every call unless one is given.
    """
    nonce = os.urandom(16) if nonce is None else nonce
    now = datetime.now(timezone.utc) if now is None else now
    created = (now + clock_offset).strftime('%Y-%m-%dT%H:%M:%SZ')
    return SECURITY_HEADER.format(
        wsse=codec.WSSE_NS,
        wsu=codec.WSU_NS,
        username=escape(credential.username),
        digest_type=WSSE_PW_DIGEST_TYPE,
        digest=password_digest(nonce, created, credential.password),
        encoding=WSSE_BASE64_ENCODING,
        nonce=base64.b64encode(nonce).decode('ascii'),
        created=created,
    )


RESET_MARKERS = ('Connection reset', 'ConnectionResetError', 'RemoteDisconnected', 'Connection aborted')


def _is_connection_reset(error: Optional[BaseException]) -> bool:
    # requests wraps urllib3 errors which wrap the socket error
    for _ in range(8):
        if error is None:
            return False
        if isinstance(error, ConnectionResetError):
            return True
        if any(marker in str(error) for marker in RESET_MARKERS):
            return True
        nested = error.args[0] if error.args and isinstance(error.args[0], BaseException) else None
        error = error.__cause__ or nested
    return False


def classify_request_error(error: requests.RequestException) -> TransportError:
    """Map a requests exception to a TransportError kind."""
    if isinstance(error, requests.Timeout):
        return TransportError(TransportError.TIMEOUT, str(error), error)
    # SSLError is a ConnectionError, check it first
    if isinstance(error, requests.exceptions.SSLError):
        return TransportError(TransportError.TLS_ERROR, str(error), error)
    if _is_connection_reset(error):
        return TransportError(TransportError.CONNECTION_RESET, str(error), error)
    return TransportError(TransportError.CONNECTION_FAILED, str(error), error)


class Transport:
    """
    Sends SOAP envelopes to XAddrs.

    requests is blocking, so each POST runs in the event loop's default
    executor and is bounded by asyncio.wait_for. Cancelling the awaiting task
    abandons the wait only; the device may still act on the request.

    Unless an http_session is passed in, each executor thread uses its own
    requests.Session; close() closes all of them.
    """

    def __init__(self, config: Optional[SessionConfig] = None,
                 http_session: Optional[requests.Session] = None):
        self.config = config or SessionConfig()
        self._shared = http_session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def build_envelope(self, payload: str, credential: Optional[Credential] = None,
                       clock_offset: timedelta = timedelta(0), authenticate: bool = True) -> str:
        headers = []
        if (authenticate and credential is not None and credential.username
                and not credential.client_cert and self.config.use_ws_security):
            headers.append(security_header(credential, clock_offset))
        return codec.wrap_envelope(payload, headers, self.config.soap_version)

    def http_headers(self, action: str) -> dict:
        content_type = codec.CONTENT_TYPES[self.config.soap_version]
        if self.config.soap_version == '1.2':
            content_type = f'{content_type}; action="{action}"'
        return {
            'Content-Type': content_type,
            'SOAPAction': f'"{action}"',
        }

    async def send(self, xaddr: str, action: str, payload: str,
                   credential: Optional[Credential] = None, timeout: Optional[float] = None,
                   clock_offset: timedelta = timedelta(0), authenticate: bool = True) -> bytes:
        """
        POST an encoded operation element and return the raw response body.

        SOAP bodies are returned whatever the HTTP status (faults come back as
        500); non-SOAP error responses raise.
        """
        timeout = timeout or self.config.timeout
        envelope = self.build_envelope(payload, credential, clock_offset, authenticate)
        kwargs = {
            'headers': self.http_headers(action),
            'timeout': timeout,
            'verify': self.config.verify,
        }
        if credential is not None and credential.client_cert:
            kwargs['cert'] = credential.client_cert
        if authenticate and credential is not None and self.config.http_digest:
            kwargs['auth'] = HTTPDigestAuth(credential.username, credential.password)

        logger.debug("POST %s (%s)\n%s", xaddr, action, envelope)
        loop = asyncio.get_running_loop()
        post = functools.partial(self._post, xaddr, envelope.encode('utf-8'), **kwargs)
        try:
            response = await asyncio.wait_for(loop.run_in_executor(None, post), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(TransportError.TIMEOUT, f"no response from {xaddr} within {timeout}s", e)

        content = response.content
        logger.debug("Response %s from %s\n%s", response.status_code, xaddr,
                     content.decode('utf-8', errors='replace'))
        if 200 <= response.status_code < 300 or codec.is_envelope(content):
            return content
        if response.status_code in (401, 403):
            raise AuthError(f"HTTP {response.status_code} from {xaddr}")
        raise TransportError(TransportError.HTTP_STATUS,
                             f"HTTP {response.status_code} from {xaddr}",
                             status_code=response.status_code)

    def _post(self, url: str, data: bytes, **kwargs) -> requests.Response:
        try:
            return self._session().post(url, data=data, **kwargs)
        except requests.RequestException as e:
            raise classify_request_error(e) from e

    def _session(self) -> requests.Session:
        if self._shared is not None:
            return self._shared
        http = getattr(self._local, 'http', None)
        if http is None:
            http = self._local.http = requests.Session()
            with self._lock:
                self._sessions.append(http)
        return http

    def close(self):
        if self._shared is not None:
            self._shared.close()
        with self._lock:
            sessions, self._sessions = self._sessions, []
            self._local = threading.local()
        for http in sessions:
            http.close()
