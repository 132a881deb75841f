from unittest import mock

import pytest

from htmlharvest import (
    Document,
    FetchConfig,
    FetchError,
    ParseError,
    load,
    parse,
    select_all,
    select_first,
    text,
    texts,
)


def test_parse_inline_markup():
    doc = parse("<h1>Web scraping</h1>")
    assert isinstance(doc, Document)
    assert doc.url is None
    assert text(select_first(doc, "h1")) == "Web scraping"


def test_malformed_markup_is_repaired():
    doc = parse("<div><p>unclosed <b>bold</div><p>next")
    assert text(select_first(doc, "b")) == "bold"
    assert texts(select_all(doc, "p"))[-1] == "next"


def test_title(wiki_doc):
    assert wiki_doc.title == "Web scraping - Wikipedia"
    assert parse("<p>x</p>").title is None


def test_document_is_read_only(wiki_doc):
    with pytest.raises(AttributeError):
        wiki_doc.url = "https://example.com"
    with pytest.raises(AttributeError):
        wiki_doc.extra = 1


def test_parse_bytes_with_declared_charset():
    markup = '<meta charset="utf-8"><p>Català</p>'.encode("utf-8")
    assert text(select_first(parse(markup), "p")) == "Català"


def test_parse_bytes_with_explicit_encoding():
    markup = "<p>Català</p>".encode("latin-1")
    assert text(select_first(parse(markup, from_encoding="latin-1"), "p")) == "Català"


@pytest.mark.parametrize("encoding", ["latin-1", "ISO-8859-1", "latin1", "cp1252"])
def test_parse_bytes_with_encoding_alias(encoding):
    """Charset names as servers spell them in Content-Type are honoured."""
    markup = "<p>Català</p>".encode(encoding)
    assert text(select_first(parse(markup, from_encoding=encoding), "p")) == "Català"


def test_parse_bytes_with_unknown_encoding():
    with pytest.raises(ParseError):
        parse(b"<p>x</p>", from_encoding="no-such-charset")


def test_parse_utf16_with_bom():
    markup = "<p>تقشير</p>".encode("utf-16")
    assert text(select_first(parse(markup), "p")) == "تقشير"


@pytest.mark.parametrize("markup", ["", "   \n", b"", b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"])
def test_non_html_input_raises_parse_error(markup):
    with pytest.raises(ParseError):
        parse(markup)


def test_non_text_input_raises_parse_error():
    with pytest.raises(ParseError):
        parse(42)


def test_unknown_parser_raises_parse_error():
    with pytest.raises(ParseError):
        parse("<p>x</p>", parser="no-such-parser")


def test_load_markup_string():
    doc = load("<ul><li>a</li></ul>")
    assert doc.url is None
    assert text(select_first(doc, "li")) == "a"


def test_load_url_uses_fetcher(stub_fetcher):
    doc = load("https://example.com/ok", fetcher=stub_fetcher)
    assert doc.url == "https://example.com/ok"
    assert stub_fetcher.requested == ["https://example.com/ok"]
    assert text(select_first(doc, "p")) == "ok page"


def test_load_url_failure_propagates(stub_fetcher):
    with pytest.raises(FetchError) as excinfo:
        load("https://example.com/missing", fetcher=stub_fetcher)
    assert excinfo.value.url == "https://example.com/missing"
    assert excinfo.value.status_code == 404


def test_load_url_defaults_to_http_fetcher():
    page = mock.Mock(url="https://example.com/final", content=b"<p>hi</p>", encoding=None)
    with mock.patch("htmlharvest.document.HttpFetcher") as fetcher_cls:
        fetcher_cls.return_value.__enter__.return_value.fetch.return_value = page
        doc = load("https://example.com/start", config=FetchConfig(timeout=5))

    fetcher_cls.return_value.__enter__.return_value.fetch.assert_called_once_with("https://example.com/start")
    assert doc.url == "https://example.com/final"


def test_load_path(tmp_path):
    path = tmp_path / "page.html"
    path.write_text("<p>from disk</p>", encoding="utf-8")
    doc = load(path)
    assert text(select_first(doc, "p")) == "from disk"
    assert doc.url.startswith("file://")


def test_load_missing_path(tmp_path):
    with pytest.raises(FetchError):
        load(tmp_path / "missing.html")
