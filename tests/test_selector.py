import pytest

from htmlharvest import InvalidSelector, parse, select_all, select_first, select_within, text


def test_select_h1_text():
    """A single heading yields exactly its text."""
    doc = parse("<h1>Web scraping</h1>")
    assert [text(node) for node in select_all(doc, "h1")] == ["Web scraping"]


def test_select_all_keeps_document_order():
    """32 paragraphs come back as 32 nodes in source order."""
    markup = "".join(f"<p>paragraph {i}</p>" for i in range(32))
    doc = parse(f"<html><body>{markup}</body></html>")
    nodes = select_all(doc, "p")
    assert len(nodes) == 32
    assert [text(node) for node in nodes] == [f"paragraph {i}" for i in range(32)]


def test_select_all_is_stable(wiki_doc):
    """Repeated selection on the same document gives the same result."""
    first = select_all(wiki_doc, "li")
    second = select_all(wiki_doc, "li")
    assert len(first) == len(second) == 5
    assert all(a is b for a, b in zip(first, second))


def test_select_all_empty_is_not_an_error(wiki_doc):
    assert select_all(wiki_doc, "blockquote") == []


def test_select_all_has_no_duplicates(wiki_doc):
    """Nodes matched by several parts of a selector list appear once."""
    nodes = select_all(wiki_doc, "li, .interlanguage-link")
    assert len(nodes) == len(set(map(id, nodes))) == 5


@pytest.mark.parametrize("selector", ["h1", "p", "#Techniques", "table td", "blockquote", ".nope li"])
def test_select_first_matches_select_all(wiki_doc, selector):
    matches = select_all(wiki_doc, selector)
    first = select_first(wiki_doc, selector)
    if matches:
        assert first is matches[0]
    else:
        assert first is None


def test_select_by_id_class_and_combinators(wiki_doc):
    assert text(select_first(wiki_doc, "#Techniques")) == "Techniques"
    items = select_all(wiki_doc, "#mw-content-text .div-col li")
    assert [text(li) for li in items] == ["Data wrangling", "Importer", "Job wrapping"]


def test_select_nth_child(wiki_doc):
    cells = select_all(wiki_doc, "table tr:nth-child(3) td")
    assert [text(cell) for cell in cells] == ["Beautiful Soup", "Python"]


def test_select_within_only_descendants(wiki_doc):
    div_col = select_first(wiki_doc, ".div-col")
    assert len(select_within(div_col, "li")) == 3
    assert select_within(div_col, "div") == []


def test_select_within_rejects_document(wiki_doc):
    with pytest.raises(TypeError):
        select_within(wiki_doc, "li")


def test_invalid_selector(wiki_doc):
    with pytest.raises(InvalidSelector) as excinfo:
        select_all(wiki_doc, "div[")
    assert excinfo.value.selector == "div["
    assert isinstance(excinfo.value, ValueError)
