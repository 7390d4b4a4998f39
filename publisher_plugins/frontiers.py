"""Frontiers journals."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="frontiers",
    matches=meta_equals("citation_publisher", "Frontiers"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("div.References"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
