"""ScienceDirect (Elsevier).

ScienceDirect article pages carry little citation meta; the DOI is read from
the ``a#ddDoi`` link instead.
"""

from __future__ import annotations

import re

from document import Document
from extractors import selector_extractor
from models import HeadReference
from publishers import title_matches
from registry import PublisherPlugin, Registry

_DOI_RESOLVER_PREFIX = re.compile(r".*?dx\.doi\.org.*?/")


def extract_head(doc: Document) -> HeadReference:
    links = doc.select("a#ddDoi")
    href = links[0].attr("href") if links else None
    if not href:
        return {}
    return {"doi": [_DOI_RESOLVER_PREFIX.sub("", href, count=1)]}


PLUGIN = PublisherPlugin(
    name="sciencedirect",
    matches=title_matches(r"sciencedirect"),
    extract_head=extract_head,
    extract_cited=selector_extractor("ul.reference"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
