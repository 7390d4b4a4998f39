"""Classify a document and extract its references into a ScrapedRecord."""

from __future__ import annotations

import logging

from document import Document
from extractors import UNSUPPORTED
from models import ScrapedRecord
from registry import Registry

LOGGER = logging.getLogger(__name__)


def scrape(doc: Document, registry: Registry) -> ScrapedRecord:
    """Run classification then the matching extractors.

    An unclassified document is a valid outcome: it yields a record with
    ``publisher=None`` and empty head/cited fields.
    """
    url = doc.current_url()
    publisher = registry.classify(doc)
    if publisher is None:
        return ScrapedRecord(publisher=None, url=url)

    head_ref = registry.extractors.extract_head(publisher, doc)
    cited_refs = registry.extractors.extract_cited(publisher, doc)
    if head_ref is UNSUPPORTED:
        LOGGER.warning("Publisher %s has no head extractor", publisher)
        head_ref = {}
    if cited_refs is UNSUPPORTED:
        LOGGER.warning("Publisher %s has no cited-reference extractor", publisher)
        cited_refs = []

    LOGGER.info(
        "Scraped url=%s publisher=%s head_fields=%s cited_refs=%s",
        url,
        publisher,
        len(head_ref),
        len(cited_refs),
    )
    return ScrapedRecord(publisher=publisher, url=url, head_ref=head_ref, cited_refs=cited_refs)


def invalid_reason(record: ScrapedRecord) -> str | None:
    """Return why a record cannot be submitted, or None if it can.

    Each condition is checked on its own; any one of them invalidates the
    record.
    """
    if record.publisher is None:
        return "no_publisher"
    if not record.head_ref:
        return "empty_head_ref"
    if not record.cited_refs:
        return "empty_cited_refs"
    return None


def is_valid_record(record: ScrapedRecord) -> bool:
    return invalid_reason(record) is None
