"""
apod_service.py
Acquisition chain for NASA's Astronomy Picture of the Day.

Sources are tried strictly one after another, first success wins:

1. the managed proxy function (``/.netlify/functions/apod``)
2. the local API proxy (``/api/apod``)
3. a single key-based request straight to api.nasa.gov, using the first
   available of: page-global client key, ``nasa-api-key`` meta tag, the
   fixed fallback key.

Proxy failures of any kind advance the chain. The key-based request is the
last word: its failure is reported as the cause of exhaustion and no other
key is tried, so a bad request never leaks more than one credential.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Optional

import requests

from config import (
    APOD_URL,
    MANAGED_PROXY_PATH,
    LOCAL_PROXY_PATH,
    FALLBACK_API_KEY,
    DEFAULT_TIMEOUT,
)
from errors import ApodError, TransportFailure, UpstreamRejected, MalformedResponse, CredentialMissing

logger = logging.getLogger(__name__)


class MediaType(Enum):
    IMAGE = 'image'
    VIDEO = 'video'
    OTHER = 'other'

    @classmethod
    def parse(cls, value):
        """Map the upstream ``media_type`` string; anything unknown is OTHER."""
        if value == cls.IMAGE.value:
            return cls.IMAGE
        if value == cls.VIDEO.value:
            return cls.VIDEO
        return cls.OTHER


class SourceKind(Enum):
    PROXY_A = 'managed-proxy'
    PROXY_B = 'local-proxy'
    CLIENT_CONFIG_KEY = 'client-config-key'
    META_TAG_KEY = 'meta-tag-key'
    DEMO_KEY = 'demo-key'


def _optional_str(value):
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class ApodRecord:
    title: Optional[str] = None
    explanation: Optional[str] = None
    media_type: MediaType = MediaType.OTHER
    url: Optional[str] = None

    @classmethod
    def from_payload(cls, payload):
        """Build a record from a decoded APOD JSON object.

        Raises
        ------
        MalformedResponse
            If ``payload`` is not a JSON object.
        """
        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"expected a JSON object, got {type(payload).__name__}"
            )
        return cls(
            title=_optional_str(payload.get('title')),
            explanation=_optional_str(payload.get('explanation')),
            media_type=MediaType.parse(payload.get('media_type')),
            url=_optional_str(payload.get('url')),
        )


@dataclass(frozen=True)
class AcquisitionConfig:
    """Read-only inputs of one acquisition run.

    ``base_url`` is the site root the proxy paths are appended to; when it is
    empty both proxy tiers are skipped.
    """
    base_url: Optional[str] = None
    client_key: Optional[str] = None
    meta_key: Optional[str] = None
    fallback_key: str = FALLBACK_API_KEY
    timeout: float = DEFAULT_TIMEOUT
    upstream_url: str = APOD_URL


@dataclass(frozen=True)
class Source:
    kind: SourceKind
    fetch: Callable[[], ApodRecord]


@dataclass(frozen=True)
class AcquisitionResult:
    record: Optional[ApodRecord] = None
    source: Optional[SourceKind] = None
    cause: Optional[Exception] = None

    @property
    def ok(self):
        return self.record is not None

    @classmethod
    def success(cls, record, source):
        return cls(record=record, source=source)

    @classmethod
    def exhausted(cls, cause):
        return cls(cause=cause)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
def _rejection_details(response):
    """Short error summary of a non-2xx response, for log messages."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get('error')
        if isinstance(error, dict):
            # api.nasa.gov nests {"code": ..., "message": ...} under "error"
            error = error.get('message') or error.get('code')
        parts = [str(v) for v in (error, body.get('details')) if v]
        if parts:
            return ': '.join(parts)
    text = (response.text or '').strip()
    return text[:200] or None


def fetch_json(url, session=None, timeout=DEFAULT_TIMEOUT, params=None):
    """GET ``url`` and return the decoded JSON body.

    Raises
    ------
    TransportFailure
        No response was received (connection error, timeout, ...).
    UpstreamRejected
        The response status is not 2xx.
    MalformedResponse
        The body is not valid JSON.
    """
    http = session or requests
    try:
        response = http.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        # The exception text may contain the full query string, key included.
        raise TransportFailure(f"{type(e).__name__} while requesting {url}") from e

    if not 200 <= response.status_code < 300:
        raise UpstreamRejected(
            response.status_code,
            _rejection_details(response),
            body=response.text,
        )

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(f"response from {url} is not JSON") from e


def fetch_record(url, session=None, timeout=DEFAULT_TIMEOUT):
    """Fetch a ready-made APOD record from a proxy endpoint."""
    return ApodRecord.from_payload(fetch_json(url, session=session, timeout=timeout))


def fetch_with_key(api_key, session=None, timeout=DEFAULT_TIMEOUT, upstream_url=APOD_URL):
    """Fetch today's APOD directly from NASA with ``api_key``."""
    if not api_key:
        raise CredentialMissing("no NASA API key available")
    payload = fetch_json(
        upstream_url,
        session=session,
        timeout=timeout,
        params={'api_key': api_key},
    )
    return ApodRecord.from_payload(payload)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------
def select_api_key(client_key=None, meta_key=None, fallback_key=FALLBACK_API_KEY):
    """Pick the key for the direct request and report where it came from.

    Returns
    -------
    tuple of (SourceKind, str)
    """
    if client_key:
        return SourceKind.CLIENT_CONFIG_KEY, client_key
    if meta_key:
        return SourceKind.META_TAG_KEY, meta_key
    return SourceKind.DEMO_KEY, fallback_key


def build_sources(config, session=None):
    """Return the ordered list of sources for one acquisition run.

    The proxy sources (zero or two) come first; the last entry is always the
    single key-based request.
    """
    sources = []
    if config.base_url:
        root = config.base_url.rstrip('/')
        for kind, path in ((SourceKind.PROXY_A, MANAGED_PROXY_PATH),
                           (SourceKind.PROXY_B, LOCAL_PROXY_PATH)):
            sources.append(Source(
                kind=kind,
                fetch=partial(fetch_record, root + path,
                              session=session, timeout=config.timeout),
            ))

    kind, api_key = select_api_key(config.client_key, config.meta_key, config.fallback_key)
    sources.append(Source(
        kind=kind,
        fetch=partial(fetch_with_key, api_key, session=session,
                      timeout=config.timeout, upstream_url=config.upstream_url),
    ))
    return sources


def acquire(config, session=None):
    """Resolve today's APOD record, or report exhaustion. Never raises.

    Parameters
    ----------
    config : AcquisitionConfig
        Inputs of this run.
    session : requests.Session, optional
        HTTP session used for every request; module-level ``requests``
        functions are used when omitted.

    Returns
    -------
    AcquisitionResult
        ``ok`` with the record and the source that produced it, or
        exhausted with the failure that ended the chain as ``cause``.
    """
    *proxies, direct = build_sources(config, session)
    for source in proxies:
        try:
            record = source.fetch()
        except Exception as e:
            if not isinstance(e, ApodError):
                logger.exception(f"Unexpected error from APOD source {source.kind.value}")
            logger.debug(f"APOD source {source.kind.value} not available: {e}")
            continue
        logger.info(f"APOD loaded from {source.kind.value}")
        return AcquisitionResult.success(record, source.kind)

    try:
        record = direct.fetch()
    except Exception as e:
        if not isinstance(e, ApodError):
            logger.exception(f"Unexpected error from APOD source {direct.kind.value}")
        return AcquisitionResult.exhausted(e)
    logger.info(f"APOD loaded from {direct.kind.value}")
    return AcquisitionResult.success(record, direct.kind)
