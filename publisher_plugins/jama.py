"""JAMA Network (American Medical Association)."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="jama",
    matches=meta_equals("citation_publisher", "American Medical Association"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("div.referenceSection div.refRow"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
