"""HighWire-hosted journals, recognised by their HW.identifier meta tag."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="highwire",
    matches=meta_equals("HW.identifier"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("ol.cit-list > li"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
