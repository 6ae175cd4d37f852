# File: tests/test_html_parser.py
from sitemap_scout.crawler.models import FetchResponse
from sitemap_scout.parser.html_parser import Parser, SeoParser, StatusParser, get_parser


def response(body: str, status: int = 200, final_url: str = "https://example.com/final") -> FetchResponse:
    return FetchResponse(url="https://example.com/req", final_url=final_url, status=status, body=body.encode())


def test_status_parser_ignores_body():
    meta = StatusParser().extract(response("<title>ignored</title>", status=503))
    assert meta.url == "https://example.com/req"
    assert meta.status_code == 503
    assert (meta.title, meta.h1, meta.meta_description) == ("", "", "")


def test_seo_parser_takes_first_elements():
    html = """
    <html><head>
      <title>  First title </title>
      <meta name="description-extra" content="Prefix match wins">
      <meta name="description" content="Second">
    </head><body>
      <h1>Main <span>heading</span></h1><h1>Other</h1>
    </body></html>
    """
    meta = SeoParser().extract(response(html))
    assert meta.title == "First title"
    assert meta.h1 == "Main heading"
    assert meta.meta_description == "Prefix match wins"
    assert meta.url == "https://example.com/final"


def test_seo_parser_missing_elements():
    meta = SeoParser().extract(response("<p>plain</p>", status=404))
    assert (meta.title, meta.h1, meta.meta_description) == ("", "", "")
    assert meta.status_code == 404


def test_seo_parser_falls_back_to_requested_url():
    meta = SeoParser().extract(response("<title>x</title>", final_url=""))
    assert meta.url == "https://example.com/req"


def test_get_parser_and_protocol():
    assert isinstance(get_parser(False), StatusParser)
    assert isinstance(get_parser(True), SeoParser)
    assert isinstance(StatusParser(), Parser)
    assert isinstance(SeoParser(), Parser)
