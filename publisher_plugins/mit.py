"""MIT Press Journals.

Publisher meta tags vary in case across MIT Press pages, so detection uses a
case-insensitive pattern rather than an exact selector.
"""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import regex_attribute_detector
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="mit",
    matches=regex_attribute_detector(
        "meta",
        [("name", r"dc\.publisher"), ("content", r"mit press")],
    ),
    extract_head=meta_scan_extractor(ignore_case=True),
    extract_cited=selector_extractor("td.refnumber + td"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
