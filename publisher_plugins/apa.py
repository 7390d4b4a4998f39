"""APA PsycNET.

PsycNET exposes no citation meta tags. Record details live in a ``dl`` of
``dt``/``dd`` pairs and the references are plain paragraphs following the
"References" table-of-contents anchor, so every rule here walks the layout.
"""

from __future__ import annotations

import re

from document import Document
from models import CitedReferenceList, HeadReference
from registry import PublisherPlugin, Registry

_APA = re.compile(r"american psychological association", re.IGNORECASE)
_EDGE_COLONS = re.compile(r"^:|:$")
_NOT_A_REFERENCE = (
    re.compile(r"this publication is protected", re.IGNORECASE),
    re.compile(r"submitted.*?revised.*?accepted", re.IGNORECASE),
)


def matches(doc: Document) -> bool:
    for dt in doc.select("dt"):
        if dt.html() != "Publisher:":
            continue
        siblings = dt.next_siblings()
        if siblings and siblings[0].tag_name == "dd" and _APA.search(siblings[0].text()):
            return True
    return False


def extract_head(doc: Document) -> HeadReference:
    dts = doc.select(".citation-wrapping-div dt")
    dds = doc.select(".citation-wrapping-div dd")
    head_ref: HeadReference = {}
    for dt, dd in zip(dts, dds):
        key = _EDGE_COLONS.sub("", dt.html())
        head_ref.setdefault(key, []).append(dd.html())
    return head_ref


def extract_cited(doc: Document) -> CitedReferenceList:
    # Every anchor counts; a paragraph reachable from two anchors is kept once.
    seen = set()
    paragraphs = []
    for link in doc.select('a[title="References"][href="#toc"]'):
        span = link.parent("span")
        if span is None:
            continue
        for paragraph in span.next_siblings("p.body-paragraph"):
            if paragraph not in seen:
                seen.add(paragraph)
                paragraphs.append(paragraph)

    refs: CitedReferenceList = []
    for paragraph in paragraphs:
        fragment = paragraph.html()
        if any(pattern.search(fragment) for pattern in _NOT_A_REFERENCE):
            continue
        refs.append(fragment)
    return refs


PLUGIN = PublisherPlugin(
    name="apa",
    matches=matches,
    extract_head=extract_head,
    extract_cited=extract_cited,
)


def register(registry: Registry) -> None:
    registry.register(PLUGIN)
