"""Wiley Online Library."""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="wiley",
    matches=meta_equals("citation_publisher", "Wiley Subscription Services, Inc., A Wiley Company"),
    extract_head=meta_scan_extractor(),
    extract_cited=selector_extractor("ul.plain > li"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
