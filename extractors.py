"""Head-metadata and cited-reference extractors keyed by publisher name."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Literal

from document import Document
from errors import DuplicatePublisherError
from models import CitedReferenceList, HeadReference

LOGGER = logging.getLogger(__name__)

HeadExtractor = Callable[[Document], HeadReference]
CitedExtractor = Callable[[Document], CitedReferenceList]

# citation_reference carries the bibliography, not head metadata.
DEFAULT_META_MATCH = r"DC\.|citation_(?!reference)"
DEFAULT_META_STRIP = r"DC\.|citation_"


class _Unsupported(Enum):
    TOKEN = "unsupported"

    def __repr__(self) -> str:
        return "UNSUPPORTED"


# Returned (not raised) when no extractor is registered for a publisher.
UNSUPPORTED: Literal[_Unsupported.TOKEN] = _Unsupported.TOKEN


class ExtractorRegistry:
    """Two parallel mappings: publisher -> head extractor, publisher -> cited extractor.

    Extractors are stateless functions of a document; they must not mutate it.
    """

    def __init__(self) -> None:
        self._head: dict[str, HeadExtractor] = {}
        self._cited: dict[str, CitedExtractor] = {}

    def register_head_extractor(self, name: str, fn: HeadExtractor) -> None:
        if name in self._head:
            raise DuplicatePublisherError(name)
        self._head[name] = fn

    def register_cited_extractor(self, name: str, fn: CitedExtractor) -> None:
        if name in self._cited:
            raise DuplicatePublisherError(name)
        self._cited[name] = fn

    def extract_head(self, name: str, doc: Document) -> HeadReference | Literal[_Unsupported.TOKEN]:
        extractor = self._head.get(name)
        if extractor is None:
            LOGGER.debug("No head extractor registered for %s", name)
            return UNSUPPORTED
        head_ref = extractor(doc)
        LOGGER.debug("Head extractor %s produced %s fields", name, len(head_ref))
        return head_ref

    def extract_cited(self, name: str, doc: Document) -> CitedReferenceList | Literal[_Unsupported.TOKEN]:
        extractor = self._cited.get(name)
        if extractor is None:
            LOGGER.debug("No cited-reference extractor registered for %s", name)
            return UNSUPPORTED
        cited_refs = extractor(doc)
        LOGGER.debug("Cited extractor %s produced %s references", name, len(cited_refs))
        return cited_refs


def meta_scan_extractor(
    match: str | re.Pattern[str] = DEFAULT_META_MATCH,
    strip: str | re.Pattern[str] = DEFAULT_META_STRIP,
    ignore_case: bool = False,
) -> HeadExtractor:
    """Build a head extractor over ``<meta name=... content=...>`` tags.

    Every meta tag whose name matches ``match`` (search) contributes its
    content to the field named by the tag name with the first ``strip``
    match removed. Values keep document order, so repeated tags such as
    ``citation_author`` become a list.
    """
    flags = re.IGNORECASE if ignore_case else 0
    match_re = re.compile(match, flags) if isinstance(match, str) else match
    strip_re = re.compile(strip, flags) if isinstance(strip, str) else strip

    def _extract(doc: Document) -> HeadReference:
        head_ref: HeadReference = {}
        for node in doc.select("meta[name]"):
            name = node.attr("name") or ""
            if not match_re.search(name):
                continue
            key = strip_re.sub("", name, count=1)
            head_ref.setdefault(key, []).append(node.attr("content") or "")
        return head_ref

    return _extract


def selector_extractor(*selectors: str) -> CitedExtractor:
    """Build a cited-reference extractor returning the inner HTML of matches.

    Selectors are tried in order; the first one with any match wins.
    """
    if not selectors:
        raise ValueError("selector_extractor needs at least one selector")

    def _extract(doc: Document) -> CitedReferenceList:
        for selector in selectors:
            nodes = doc.select(selector)
            if nodes:
                return [node.html() for node in nodes]
        return []

    return _extract
