"""Document query interface and its BeautifulSoup implementation.

Publisher rules only see the ``Document``/``Node`` protocols below, so any
tree-shaped backend with CSS-style selectors can stand in for the soup one.
"""

from __future__ import annotations

import logging
import os
from typing import Protocol, Sequence

import requests
from bs4 import BeautifulSoup, Tag

from errors import DocumentUnavailableError

FETCH_TIMEOUT_SECONDS = float(os.getenv("CITELET_FETCH_TIMEOUT", "20"))
USER_AGENT = "citelet/0.3"

LOGGER = logging.getLogger(__name__)


class Node(Protocol):
    """One element of a queried document."""

    @property
    def tag_name(self) -> str: ...

    def attr(self, name: str) -> str | None: ...

    def text(self) -> str: ...

    def html(self) -> str: ...

    def select(self, selector: str) -> Sequence[Node]: ...

    def parent(self, selector: str | None = None) -> Node | None: ...

    def next_siblings(self, selector: str | None = None) -> Sequence[Node]: ...


class Document(Protocol):
    """A loaded page that can be queried by selector."""

    def select(self, selector: str) -> Sequence[Node]: ...

    def current_url(self) -> str: ...


class SoupNode:
    """``Node`` backed by a bs4 ``Tag``."""

    __slots__ = ("_tag", "_owner")

    def __init__(self, tag: Tag, owner: SoupDocument) -> None:
        self._tag = tag
        self._owner = owner

    def __repr__(self) -> str:
        return f"SoupNode(<{self._tag.name}>)"

    # Two wrappers are equal when they wrap the same element, not equal markup.
    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and self._tag is other._tag

    def __hash__(self) -> int:
        return id(self._tag)

    @property
    def tag_name(self) -> str:
        return self._tag.name

    def attr(self, name: str) -> str | None:
        self._owner.ensure_open()
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as class into lists.
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        self._owner.ensure_open()
        return self._tag.get_text()

    def html(self) -> str:
        self._owner.ensure_open()
        return self._tag.decode_contents()

    def select(self, selector: str) -> list[SoupNode]:
        self._owner.ensure_open()
        return [SoupNode(tag, self._owner) for tag in self._tag.select(selector)]

    def parent(self, selector: str | None = None) -> SoupNode | None:
        """Immediate parent element, or None if it does not match ``selector``."""
        self._owner.ensure_open()
        parent = self._tag.parent
        if not isinstance(parent, Tag) or parent.name == "[document]":
            return None
        if selector is not None and not parent.css.match(selector):
            return None
        return SoupNode(parent, self._owner)

    def next_siblings(self, selector: str | None = None) -> list[SoupNode]:
        """All following sibling elements, optionally filtered by ``selector``."""
        self._owner.ensure_open()
        siblings = self._tag.find_next_siblings()
        if selector is not None:
            siblings = [tag for tag in siblings if tag.css.match(selector)]
        return [SoupNode(tag, self._owner) for tag in siblings]


class SoupDocument:
    """``Document`` over parsed HTML."""

    def __init__(self, html: str, url: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")
        self._url = url
        self._closed = False

    def select(self, selector: str) -> list[SoupNode]:
        self.ensure_open()
        return [SoupNode(tag, self) for tag in self._soup.select(selector)]

    def current_url(self) -> str:
        self.ensure_open()
        return self._url

    def close(self) -> None:
        """Mark the page as navigated away; later queries fail fast."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def ensure_open(self) -> None:
        if self._closed:
            raise DocumentUnavailableError("Document is no longer available", {"url": self._url})


def fetch_document(url: str, timeout: float | None = None) -> SoupDocument:
    """Download a page and parse it into a ``SoupDocument``.

    The document URL is the final URL after redirects, which is what the
    dedup store is keyed on.
    """
    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout or FETCH_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise DocumentUnavailableError(f"Could not load {url}: {exc}", {"url": url}) from exc

    LOGGER.info("Fetched %s (%s bytes, final_url=%s)", url, len(response.text), response.url)
    return SoupDocument(response.text, response.url or url)
