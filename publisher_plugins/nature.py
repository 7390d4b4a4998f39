"""Nature Publishing Group."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="nature",
    matches=meta_equals("DC.publisher", "Nature Publishing Group"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("ol.references > li"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
