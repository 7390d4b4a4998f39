"""SpringerLink."""

from __future__ import annotations

import re

from document import Document
from extractors import selector_extractor
from models import HeadReference
from publishers import title_matches
from registry import PublisherPlugin, Registry

_ARTICLE = re.compile(r"article", re.IGNORECASE)


def extract_head(doc: Document) -> HeadReference:
    """Context spans (journal, volume, pages, ...) plus the author list.

    Each ``span`` under ``div.ContextInformation`` is keyed by its class name
    with the ``Article`` prefix dropped, e.g. ``ArticleDOI`` -> ``DOI``.
    """
    head_ref: HeadReference = {}
    for span in doc.select("div.ContextInformation > span"):
        key = _ARTICLE.sub("", span.attr("class") or "", count=1).strip()
        if key:
            head_ref[key] = [span.text().strip()]

    authors = [node.text().strip() for node in doc.select("span.AuthorName")]
    if authors:
        head_ref["authors"] = authors
    return head_ref


PLUGIN = PublisherPlugin(
    name="springer",
    matches=title_matches(r"springer"),
    extract_head=extract_head,
    extract_cited=selector_extractor("div.Citation"),
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
