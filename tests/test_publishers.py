import pytest

from document import SoupDocument
from errors import DocumentUnavailableError, DuplicatePublisherError
from publishers import (
    PublisherProfile,
    PublisherRegistry,
    attribute_selector,
    meta_equals,
    regex_attribute_detector,
    selector_present,
    title_matches,
)


def _doc(head: str = "", body: str = "") -> SoupDocument:
    return SoupDocument(f"<html><head>{head}</head><body>{body}</body></html>", "https://example.org/a")


def _registry(*profiles: PublisherProfile) -> PublisherRegistry:
    registry = PublisherRegistry()
    for profile in profiles:
        registry.register(profile)
    return registry


def test_first_registered_match_wins() -> None:
    first = PublisherProfile("first", selector_present('meta[name="first"]'))
    second = PublisherProfile("second", selector_present('meta[name="second"]'))
    registry = _registry(first, second)

    assert registry.classify(_doc('<meta name="first">')) == "first"
    assert registry.classify(_doc('<meta name="second">')) == "second"
    both = _doc('<meta name="second"><meta name="first">')
    assert registry.classify(both) == "first"


def test_registration_order_not_document_order_decides() -> None:
    registry = _registry(
        PublisherProfile("second", selector_present('meta[name="second"]')),
        PublisherProfile("first", selector_present('meta[name="first"]')),
    )
    assert registry.classify(_doc('<meta name="first"><meta name="second">')) == "second"


def test_no_match_returns_none() -> None:
    registry = _registry(PublisherProfile("only", meta_equals("citation_publisher", "Only")))
    assert registry.classify(_doc()) is None


def test_raising_predicate_is_treated_as_no_match() -> None:
    def broken(doc):
        raise KeyError("nope")

    registry = _registry(
        PublisherProfile("broken", broken),
        PublisherProfile("fallback", lambda doc: True),
    )
    assert registry.classify(_doc()) == "fallback"


def test_unavailable_document_propagates() -> None:
    doc = _doc('<meta name="x">')
    doc.close()
    registry = _registry(PublisherProfile("x", selector_present("meta")))

    with pytest.raises(DocumentUnavailableError):
        registry.classify(doc)


def test_duplicate_name_rejected() -> None:
    registry = _registry(PublisherProfile("dup", lambda doc: False))

    with pytest.raises(DuplicatePublisherError):
        registry.register(PublisherProfile("dup", lambda doc: True))
    assert registry.names == ["dup"]
    assert "dup" in registry
    assert len(registry) == 1


def test_attribute_selector_cycles_operators() -> None:
    assert attribute_selector("meta") == "meta"
    assert attribute_selector("meta", {"name": "HW.identifier"}) == 'meta[name="HW.identifier"]'
    assert (
        attribute_selector("meta", {"name": "dc.Publisher", "content": "MIT Press"}, ["=", "^="])
        == 'meta[name="dc.Publisher"][content^="MIT Press"]'
    )


def test_meta_equals_requires_exact_content() -> None:
    predicate = meta_equals("citation_publisher", "Frontiers")

    assert predicate(_doc('<meta name="citation_publisher" content="Frontiers">')) is True
    assert predicate(_doc('<meta name="citation_publisher" content="Frontiers Media">')) is False


def test_title_matches_is_case_insensitive_and_tolerates_missing_title() -> None:
    predicate = title_matches("sciencedirect")

    assert predicate(_doc("<title>Article - ScienceDirect</title>")) is True
    assert predicate(_doc("<title>Other</title>")) is False
    assert predicate(_doc()) is False


def test_regex_attribute_detector_needs_all_attributes_on_one_node() -> None:
    predicate = regex_attribute_detector("meta", [("name", r"dc\.publisher"), ("content", r"mit press")])

    assert predicate(_doc('<meta name="DC.Publisher" content="The MIT Press">')) is True
    assert predicate(_doc('<meta name="dc.publisher" content="Elsevier"><meta name="x" content="MIT Press">')) is False
    assert predicate(_doc('<meta content="MIT Press">')) is False
