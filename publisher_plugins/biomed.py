"""BioMed Central."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="biomed",
    matches=meta_equals("citation_publisher", "BioMed Central Ltd"),
    extract_head=meta_scan_extractor(ignore_case=True),
    extract_cited=selector_extractor("ol#references > li"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
