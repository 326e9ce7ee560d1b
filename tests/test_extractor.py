"""Tests for preview metadata extraction."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from linkpreview.scraper.extractor import extract_preview, meta_lookup, scan_price
from linkpreview.scraper.models import PreviewResult


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_OPENGRAPH_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <title>Document Title</title>
  <meta property="og:title" content="T" />
  <meta property="og:image" content="I" />
  <meta property="og:site_name" content="S" />
  <meta property="product:price:amount" content="29.99" />
  <meta property="product:price:currency" content="USD" />
</head>
<body><h1>Heading</h1><img src="other.jpg"><p>Was $99.00</p></body>
</html>
"""

_FALLBACK_HTML = """\
<html>
<head><title>Fallback Title Only</title></head>
<body>
  <img src="https://example.com/fallback-image.jpg">
  <img src="https://example.com/second.jpg">
</body>
</html>
"""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# meta_lookup
# ---------------------------------------------------------------------------

class TestMetaLookup:
    def test_name_and_property_attributes(self) -> None:
        soup = _soup(
            '<meta name="description" content="Name attribute" />'
            '<meta property="og:description" content="Property attribute" />'
        )
        assert meta_lookup(soup, ["description"]) == "Name attribute"
        assert meta_lookup(soup, ["og:description"]) == "Property attribute"

    def test_itemprop_and_http_equiv(self) -> None:
        soup = _soup(
            '<meta itemprop="price" content="12.00">'
            '<meta http-equiv="content-language" content="en">'
        )
        assert meta_lookup(soup, ["price"]) == "12.00"
        assert meta_lookup(soup, ["content-language"]) == "en"

    def test_value_and_charset_fallbacks(self) -> None:
        soup = _soup('<meta name="a" value=" from value "><meta name="b" charset="utf-8">')
        assert meta_lookup(soup, ["a"]) == "from value"
        assert meta_lookup(soup, ["b"]) == "utf-8"

    def test_blank_content_is_skipped(self) -> None:
        soup = _soup('<meta name="x" content="   "><meta property="x" content="real">')
        assert meta_lookup(soup, ["x"]) == "real"

    def test_candidate_order_wins(self) -> None:
        soup = _soup('<meta name="second" content="2"><meta name="first" content="1">')
        assert meta_lookup(soup, ["first", "second"]) == "1"

    def test_missing_returns_none(self) -> None:
        assert meta_lookup(_soup("<html></html>"), ["nonexistent"]) is None


# ---------------------------------------------------------------------------
# extract_preview
# ---------------------------------------------------------------------------

class TestExtractPreview:
    def test_opengraph_and_product_tags(self) -> None:
        result = extract_preview(_OPENGRAPH_HTML)
        assert result.to_dict() == {
            "title": "T",
            "image": "I",
            "siteName": "S",
            "price": "29.99",
            "currency": "USD",
        }

    def test_title_and_first_image_fallback(self) -> None:
        result = extract_preview(_FALLBACK_HTML)
        assert result.title == "Fallback Title Only"
        assert result.image == "https://example.com/fallback-image.jpg"
        assert result.price is None
        assert result.currency is None
        assert result.site_name is None

    def test_twitter_tags_used_when_og_missing(self) -> None:
        html = (
            '<meta name="twitter:title" content="Tw Title">'
            '<meta name="twitter:image" content="tw.png">'
            '<meta name="twitter:site" content="@shop">'
            "<title>Ignored</title>"
        )
        result = extract_preview(html)
        assert result.title == "Tw Title"
        assert result.image == "tw.png"
        assert result.site_name == "@shop"

    def test_og_beats_twitter(self) -> None:
        html = '<meta name="twitter:title" content="tw"><meta property="og:title" content="og">'
        assert extract_preview(html).title == "og"

    def test_h1_when_no_title(self) -> None:
        html = "<body><h1> Main  Heading </h1><h1>Second</h1></body>"
        assert extract_preview(html).title == "Main  Heading"

    def test_empty_title_falls_through_to_h1(self) -> None:
        html = "<title>   </title><h1>Heading</h1>"
        assert extract_preview(html).title == "Heading"

    def test_site_name_from_source_url(self) -> None:
        result = extract_preview("<title>x</title>", source_url="https://shop.example.com/p/1")
        assert result.site_name == "shop.example.com"
        assert result.source_url == "https://shop.example.com/p/1"

    def test_source_url_copied_verbatim(self) -> None:
        url = "https://Shop.Example.com/p?utm_source=x"
        assert extract_preview("", source_url=url).source_url == url

    def test_meta_price_without_currency(self) -> None:
        html = '<meta property="product:price:amount" content="5.00"><p>$7.00</p>'
        result = extract_preview(html)
        assert result.price == "5.00"
        assert result.currency is None

    def test_text_price_scan(self) -> None:
        html = "<title>Mug</title><p>Only $19.99 today</p>"
        result = extract_preview(html)
        assert result.price == "19.99"
        assert result.currency == "USD"

    def test_price_in_script_is_ignored(self) -> None:
        html = '<script>var price = "$99.99";</script><style>.a:after{content:"$5"}</style><p>No price</p>'
        result = extract_preview(html)
        assert result.price is None

    @pytest.mark.parametrize("html", ["", "<<<>>>", "<meta", "<html><head><title>", "\x00\x01binary"])
    def test_malformed_input_never_raises(self, html: str) -> None:
        result = extract_preview(html)
        assert isinstance(result, PreviewResult)

    def test_empty_document_is_empty_result(self) -> None:
        assert extract_preview("<html></html>").to_dict() == {}


# ---------------------------------------------------------------------------
# scan_price
# ---------------------------------------------------------------------------

class TestScanPrice:
    @pytest.mark.parametrize("text, expected", [
        ("Now $12.50", ("12.50", "USD")),
        ("Price: 40 USD", ("40", "USD")),
        ("Price: 40.00 usd", ("40.00", "USD")),
        ("Costs 15.95 EUR", ("15.95", "EUR")),
        ("Just £8.99", ("8.99", "GBP")),
        ("Nur €3.49", ("3.49", "EUR")),
        ("free", (None, None)),
    ])
    def test_patterns(self, text: str, expected: tuple) -> None:
        assert scan_price(text) == expected

    def test_pattern_order_not_text_order(self) -> None:
        # The euro-symbol appears first in the text but "$" is tried first.
        assert scan_price("€5.00 or $7.00") == ("7.00", "USD")

    def test_first_matching_pattern_stops_scan(self) -> None:
        assert scan_price("12.50 EUR / £10.00") == ("12.50", "EUR")

    def test_thousands_separator_ends_the_amount(self) -> None:
        assert scan_price("Sale $1,299.99") == ("1", "USD")
