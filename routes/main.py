"""
routes/main.py
Core page route: renders the index page and paints the APOD widget into it.
"""

from flask import Blueprint, render_template

from apod_service import AcquisitionConfig
from config import site_url, meta_api_key, client_api_key, request_timeout
from widget import paint_page

main_bp = Blueprint('main', __name__)


def _acquisition_config():
    """Acquisition inputs for the current request.

    The proxy sources are only tried when ``site_url`` is configured. The
    host serving this request is never used: with a single sync worker a
    request to our own proxy routes would block until it times out.
    """
    return AcquisitionConfig(
        base_url=site_url(),
        client_key=client_api_key(),
        timeout=request_timeout(),
    )


@main_bp.route('/')
def index():
    """Serve the main page with today's APOD (or the placeholder) filled in."""
    page = render_template('index.html', meta_api_key=meta_api_key())
    return paint_page(page, _acquisition_config())
