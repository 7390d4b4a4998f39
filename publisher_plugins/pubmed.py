"""PubMed Central.

Older PMC pages list references as li#B1, li#B2, ...; newer ones use
div.ref-cit-blk blocks.
"""

from __future__ import annotations

from extractors import meta_scan_extractor, selector_extractor
from publishers import meta_equals
from registry import PublisherPlugin, Registry

PLUGIN = PublisherPlugin(
    name="pubmed",
    matches=meta_equals("ncbi_db", "pmc"),
    extract_head=meta_scan_extractor(ignore_case=True),
    extract_cited=selector_extractor('li[id^="B"]', "div.ref-cit-blk"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
