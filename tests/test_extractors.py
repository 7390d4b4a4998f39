import pytest

from document import SoupDocument
from errors import DuplicatePublisherError
from extractors import UNSUPPORTED, ExtractorRegistry, meta_scan_extractor, selector_extractor


def _doc(head: str = "", body: str = "") -> SoupDocument:
    return SoupDocument(f"<html><head>{head}</head><body>{body}</body></html>", "https://example.org/a")


def test_meta_scan_groups_repeated_fields_in_order() -> None:
    doc = _doc(
        '<meta name="citation_author" content="A">'
        '<meta name="citation_author" content="B">'
        '<meta name="DC.title" content="T">'
    )

    head_ref = meta_scan_extractor(r"citation_|DC\.", r"citation_|DC\.")(doc)

    assert head_ref == {"author": ["A", "B"], "title": ["T"]}


def test_meta_scan_defaults_skip_citation_reference_and_unrelated_meta() -> None:
    doc = _doc(
        '<meta name="citation_title" content="On Things">'
        '<meta name="citation_reference" content="citation_title=Old">'
        '<meta name="viewport" content="width=device-width">'
        '<meta name="citation_pdf_url">'
    )

    head_ref = meta_scan_extractor()(doc)

    assert head_ref == {"title": ["On Things"], "pdf_url": [""]}


def test_meta_scan_case_sensitivity() -> None:
    doc = _doc('<meta name="dc.Title" content="lower">')

    assert meta_scan_extractor()(doc) == {}
    assert meta_scan_extractor(ignore_case=True)(doc) == {"Title": ["lower"]}


def test_meta_scan_returns_fresh_structure_each_call() -> None:
    doc = _doc('<meta name="citation_title" content="T">')
    extractor = meta_scan_extractor()

    first = extractor(doc)
    first["title"].append("mutated")

    assert extractor(doc) == {"title": ["T"]}


def test_selector_extractor_falls_back_to_next_selector() -> None:
    doc = _doc(body='<div class="ref-cit-blk">One</div><div class="ref-cit-blk">Two <b>x</b></div>')

    refs = selector_extractor('li[id^="B"]', "div.ref-cit-blk")(doc)

    assert refs == ["One", "Two <b>x</b>"]


def test_selector_extractor_first_selector_wins() -> None:
    doc = _doc(body='<ol><li id="B1">first</li></ol><div class="ref-cit-blk">second</div>')

    assert selector_extractor('li[id^="B"]', "div.ref-cit-blk")(doc) == ["first"]


def test_selector_extractor_requires_a_selector() -> None:
    with pytest.raises(ValueError):
        selector_extractor()


def test_registry_returns_unsupported_for_unknown_publisher() -> None:
    registry = ExtractorRegistry()

    assert registry.extract_head("nobody", _doc()) is UNSUPPORTED
    assert registry.extract_cited("nobody", _doc()) is UNSUPPORTED


def test_registry_dispatches_by_name() -> None:
    registry = ExtractorRegistry()
    registry.register_head_extractor("sample", lambda doc: {"title": ["T"]})
    registry.register_cited_extractor("sample", selector_extractor("li"))
    doc = _doc(body="<ul><li>r1</li><li>r2</li></ul>")

    assert registry.extract_head("sample", doc) == {"title": ["T"]}
    assert registry.extract_cited("sample", doc) == ["r1", "r2"]


def test_registry_rejects_second_extractor_for_same_name() -> None:
    registry = ExtractorRegistry()
    registry.register_head_extractor("sample", lambda doc: {})

    with pytest.raises(DuplicatePublisherError):
        registry.register_head_extractor("sample", lambda doc: {})
