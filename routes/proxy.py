"""
routes/proxy.py
APOD proxy: forwards one request to api.nasa.gov with the server-held key so
the key never reaches the browser.

The same handler is mounted on the managed-function path and on the local
API path; the widget treats them as two independent sources.
"""

import logging

from flask import Blueprint, jsonify

from apod_service import fetch_json
from config import (
    APOD_URL,
    DEFAULT_TIMEOUT,
    MANAGED_PROXY_PATH,
    LOCAL_PROXY_PATH,
    server_api_key,
    request_timeout,
)
from errors import ApodError, CredentialMissing, MalformedResponse, UpstreamRejected

logger = logging.getLogger(__name__)

proxy_bp = Blueprint('proxy', __name__)


def proxy_apod(api_key, session=None, timeout=DEFAULT_TIMEOUT, upstream_url=APOD_URL):
    """Fetch today's APOD for a client.

    Parameters
    ----------
    api_key : str or None
        Server-held NASA key. When missing no upstream request is made.
    session : requests.Session, optional
        HTTP session for the upstream call.
    timeout : float
        Upstream request timeout in seconds.
    upstream_url : str
        NASA APOD endpoint.

    Returns
    -------
    tuple of (dict, int)
        JSON body and HTTP status. Success forwards the upstream object
        unchanged with 200; failures return ``{"error": ...}`` with 500 (no
        key) or 502 (upstream problem).
    """
    try:
        if not api_key:
            raise CredentialMissing("NASA_API_KEY not configured")
        payload = fetch_json(
            upstream_url,
            session=session,
            timeout=timeout,
            params={'api_key': api_key},
        )
        if not isinstance(payload, dict):
            raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")
    except CredentialMissing as e:
        logger.error(f"apod proxy error: {e}")
        return {"error": str(e)}, 500
    except UpstreamRejected as e:
        logger.error(f"apod proxy upstream rejected: {e.status}")
        body = {"error": "NASA fetch failed"}
        if e.body:
            body["details"] = e.body
        return body, 502
    except ApodError as e:
        logger.error(f"apod proxy error: {e}")
        return {"error": "APOD proxy error"}, 502

    return payload, 200


@proxy_bp.route(MANAGED_PROXY_PATH)
@proxy_bp.route(LOCAL_PROXY_PATH)
def apod_proxy():
    """Return today's APOD JSON, or a JSON error with a non-2xx status."""
    body, status = proxy_apod(server_api_key(), timeout=request_timeout())
    return jsonify(body), status
