"""Publisher detection: an ordered registry of named detection predicates."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from document import Document
from errors import DocumentUnavailableError, DuplicatePublisherError

LOGGER = logging.getLogger(__name__)

Predicate = Callable[[Document], bool]


@dataclass(frozen=True, slots=True)
class PublisherProfile:
    """A named detection predicate. Identity is the name."""

    name: str
    matches: Predicate


class PublisherRegistry:
    """Publisher profiles in registration order.

    Profiles need not be mutually exclusive. ``classify`` returns the first
    profile that matches, so registration order is the precedence order.
    """

    def __init__(self) -> None:
        self._profiles: list[PublisherProfile] = []

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, name: object) -> bool:
        return any(profile.name == name for profile in self._profiles)

    @property
    def names(self) -> list[str]:
        return [profile.name for profile in self._profiles]

    def register(self, profile: PublisherProfile) -> None:
        if profile.name in self:
            raise DuplicatePublisherError(profile.name)
        self._profiles.append(profile)
        LOGGER.debug("Registered publisher profile %s (position %s)", profile.name, len(self._profiles))

    def classify(self, doc: Document) -> str | None:
        """Return the name of the first matching profile, or None."""
        for profile in self._profiles:
            try:
                matched = profile.matches(doc)
            except DocumentUnavailableError:
                raise
            except Exception as exc:  # a broken rule is a miss, not a crash
                LOGGER.debug("Publisher rule %s raised, treating as no match: %s", profile.name, exc)
                continue
            if matched:
                LOGGER.info("Classified document as publisher=%s", profile.name)
                return profile.name

        LOGGER.info("No publisher profile matched (%s profiles tried)", len(self._profiles))
        return None


def attribute_selector(
    tag: str,
    attrs: Mapping[str, str] | None = None,
    ops: Sequence[str] = ("=",),
) -> str:
    """Build ``tag[key op "value"]...``, cycling through ``ops`` per attribute.

    >>> attribute_selector("meta", {"name": "dc.Publisher", "content": "MIT"}, ["=", "^="])
    'meta[name="dc.Publisher"][content^="MIT"]'
    """
    selector = tag
    for index, (key, value) in enumerate((attrs or {}).items()):
        op = ops[index % len(ops)]
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        selector += f'[{key}{op}"{escaped}"]'
    return selector


def selector_present(selector: str) -> Predicate:
    """Predicate: the document has at least one node matching ``selector``."""

    def _matches(doc: Document) -> bool:
        return len(doc.select(selector)) > 0

    return _matches


def meta_equals(name: str, content: str | None = None) -> Predicate:
    """Predicate: a ``<meta>`` with this name (and exact content, if given)."""
    attrs = {"name": name}
    if content is not None:
        attrs["content"] = content
    return selector_present(attribute_selector("meta", attrs))


def title_matches(pattern: str | re.Pattern[str]) -> Predicate:
    """Predicate: the page ``<title>`` matches ``pattern`` (search)."""
    regex = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern

    def _matches(doc: Document) -> bool:
        titles = doc.select("title")
        if not titles:
            return False
        return regex.search(titles[0].html()) is not None

    return _matches


def regex_attribute_detector(tag: str, rules: Sequence[tuple[str, str]]) -> Predicate:
    """Predicate: some ``tag`` node whose listed attributes all match.

    Patterns are case-insensitive searches; a missing attribute never matches.
    """
    compiled = [(attr, re.compile(pattern, re.IGNORECASE)) for attr, pattern in rules]

    def _matches(doc: Document) -> bool:
        for node in doc.select(tag):
            if all(
                (value := node.attr(attr)) is not None and regex.search(value)
                for attr, regex in compiled
            ):
                return True
        return False

    return _matches
