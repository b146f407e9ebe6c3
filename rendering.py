"""
rendering.py
Markup for the APOD widget. No network or storage access happens here.
"""

from markupsafe import escape

from apod_service import MediaType
from config import EXPLANATION_MAX_CHARS, DEFAULT_TITLE, PLACEHOLDER_TEXT


def escape_html(value):
    """Escape ``&``, ``<``, ``>`` and both quote characters for HTML output."""
    return str(escape('' if value is None else str(value)))


def render_apod(record):
    """Render an ``ApodRecord`` as widget markup.

    Images get an ``<img>``, videos a link that opens in a new tab, and any
    other media type only the title and explanation. A missing ``url`` drops
    the image or link. The explanation is cut to ``EXPLANATION_MAX_CHARS``
    and always followed by ``...``.
    """
    title = record.title or DEFAULT_TITLE
    parts = [f'<h4>{escape_html(title)}</h4>']

    if record.url and record.media_type is MediaType.IMAGE:
        parts.append(f'<img src="{escape_html(record.url)}" alt="{escape_html(title)}">')
    elif record.url and record.media_type is MediaType.VIDEO:
        parts.append(
            f'<a href="{escape_html(record.url)}" target="_blank" rel="noopener">View video</a>'
        )

    if record.explanation:
        summary = record.explanation[:EXPLANATION_MAX_CHARS]
        parts.append(f'<p class="muted">{escape_html(summary)}...</p>')

    return ''.join(parts)


def render_placeholder():
    """Static message shown when no source produced a record."""
    return f'<p class="muted">{escape_html(PLACEHOLDER_TEXT)}</p>'
