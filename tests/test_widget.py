# tests/test_widget.py

from unittest.mock import patch

from apod_service import AcquisitionConfig, AcquisitionResult, ApodRecord, MediaType, SourceKind
from config import APOD_URL
from errors import UpstreamRejected
from fakes import APOD_PAYLOAD, FakeResponse, FakeSession
from widget import extract_meta_key, load_apod_markup, paint_page

PAGE = """<!DOCTYPE html>
<html><head>{meta}</head>
<body><h1>AstroLens</h1><div id="apod-area"><p>Loading…</p></div></body></html>
"""


def page(meta=""):
    return PAGE.format(meta=meta)


def test_extract_meta_key():
    assert extract_meta_key(page('<meta name="nasa-api-key" content=" meta-key ">')) == "meta-key"
    assert extract_meta_key(page('<meta name="nasa-api-key" content="">')) is None
    assert extract_meta_key(page()) is None


def test_page_without_area_is_untouched():
    html = "<html><body><p>No widget here</p></body></html>"
    session = FakeSession()
    assert paint_page(html, AcquisitionConfig(), session=session) == html
    assert session.calls == []


def test_paint_success():
    session = FakeSession({APOD_URL: FakeResponse(200, APOD_PAYLOAD)})
    html = paint_page(page(), AcquisitionConfig(), session=session)
    assert "The Pillars of Creation" in html
    assert 'src="https://apod.nasa.gov/apod/image/pillars.jpg"' in html
    assert "Loading" not in html
    assert "<h1>AstroLens</h1>" in html
    assert len(session.calls) == 1


def test_paint_escapes_record_fields():
    payload = dict(APOD_PAYLOAD, title="<script>alert(1)</script>")
    session = FakeSession({APOD_URL: FakeResponse(200, payload)})
    html = paint_page(page(), AcquisitionConfig(), session=session)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_paint_uses_meta_tag_key():
    session = FakeSession({APOD_URL: FakeResponse(200, APOD_PAYLOAD)})
    paint_page(page('<meta name="nasa-api-key" content="meta-key">'), AcquisitionConfig(), session=session)
    assert session.calls[-1][1] == {"api_key": "meta-key"}


def test_paint_client_key_beats_meta_tag():
    session = FakeSession({APOD_URL: FakeResponse(200, APOD_PAYLOAD)})
    config = AcquisitionConfig(client_key="client-key")
    paint_page(page('<meta name="nasa-api-key" content="meta-key">'), config, session=session)
    assert session.calls == [(APOD_URL, {"api_key": "client-key"}, config.timeout)]


def test_all_sources_failing_paints_placeholder(caplog):
    session = FakeSession({APOD_URL: FakeResponse(429, {"error": "OVER_RATE_LIMIT"})})
    config = AcquisitionConfig(base_url="http://site.test")
    html = paint_page(page(), config, session=session)
    assert "Unable to load NASA APOD." in html
    assert "OVER_RATE_LIMIT" not in html
    assert "429" not in html
    assert "OVER_RATE_LIMIT" in caplog.text


def test_load_apod_markup_success():
    record = ApodRecord(title="X", media_type=MediaType.IMAGE, url="http://a/b.png")
    with patch("widget.acquire", return_value=AcquisitionResult.success(record, SourceKind.PROXY_A)):
        assert load_apod_markup(AcquisitionConfig()).startswith("<h4>X</h4>")


def test_load_apod_markup_exhausted():
    result = AcquisitionResult.exhausted(UpstreamRejected(500))
    with patch("widget.acquire", return_value=result):
        assert load_apod_markup(AcquisitionConfig()) == '<p class="muted">Unable to load NASA APOD.</p>'


def test_load_apod_markup_contains_unexpected_errors():
    with patch("widget.acquire", side_effect=RuntimeError("boom")):
        assert "Unable to load NASA APOD." in load_apod_markup(AcquisitionConfig())
