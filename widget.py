"""
widget.py
Paints the APOD widget into a page: finds ``#apod-area``, runs the
acquisition chain once and writes either the rendered record or the error
placeholder into it.
"""

import dataclasses
import logging

from bs4 import BeautifulSoup

from apod_service import acquire
from rendering import render_apod, render_placeholder

logger = logging.getLogger(__name__)

AREA_ID = 'apod-area'
META_KEY_NAME = 'nasa-api-key'


def extract_meta_key(document):
    """Return the ``<meta name="nasa-api-key">`` content of a page, or None."""
    soup = document if isinstance(document, BeautifulSoup) else BeautifulSoup(document, 'html.parser')
    tag = soup.find('meta', attrs={'name': META_KEY_NAME})
    if tag is None:
        return None
    content = (tag.get('content') or '').strip()
    return content or None


def load_apod_markup(config, session=None):
    """Run the acquisition chain and return the markup for the widget area.

    The cause of a failure goes to the log only; the page gets the static
    placeholder.
    """
    try:
        result = acquire(config, session=session)
        if result.ok:
            return render_apod(result.record)
        logger.warning(f"APOD initialization error: {result.cause}")
    except Exception:
        logger.exception("APOD initialization error")
    return render_placeholder()


def paint_page(html, config, session=None):
    """Fill the page's APOD area and return the updated page.

    Pages without an ``#apod-area`` element are returned untouched and no
    request is made. A meta-tag key found in the page is used unless
    ``config`` already carries one.
    """
    soup = BeautifulSoup(html, 'html.parser')
    area = soup.find(id=AREA_ID)
    if area is None:
        return html

    if not config.meta_key:
        meta_key = extract_meta_key(soup)
        if meta_key:
            config = dataclasses.replace(config, meta_key=meta_key)

    markup = load_apod_markup(config, session=session)
    area.clear()
    area.append(BeautifulSoup(markup, 'html.parser'))
    return str(soup)
