"""PLOS journals."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="plos",
    matches=meta_equals("citation_publisher", "Public Library of Science"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("ol.references > li"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
