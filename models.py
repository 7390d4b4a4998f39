"""Shared typed models for scraping and submission."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Field name -> values in document order (a field may repeat, e.g. authors).
HeadReference = dict[str, list[str]]

# Opaque reference fragments, exactly as found on the page.
CitedReferenceList = list[str]


@dataclass(frozen=True, slots=True)
class ScrapedRecord:
    """Result of classifying and extracting one document.

    ``publisher`` is None when no publisher profile matched. Records hold a
    dict and a list, so they compare by value but are not hashable.
    """

    __hash__ = None  # type: ignore[assignment]

    publisher: str | None
    url: str
    head_ref: HeadReference = field(default_factory=dict)
    cited_refs: CitedReferenceList = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "publisher": self.publisher,
            "url": self.url,
            "head_ref": {key: list(values) for key, values in self.head_ref.items()},
            "cited_refs": list(self.cited_refs),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScrapedRecord:
        head_ref = data.get("head_ref") if isinstance(data.get("head_ref"), dict) else {}
        cited_refs = data.get("cited_refs") if isinstance(data.get("cited_refs"), list) else []
        return cls(
            publisher=data.get("publisher"),
            url=str(data.get("url", "")),
            head_ref={str(key): [str(v) for v in values] for key, values in head_ref.items()},
            cited_refs=[str(ref) for ref in cited_refs],
        )


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """Parsed server response for one submission. Not hashable (``body`` is a dict)."""

    __hash__ = None  # type: ignore[assignment]

    status: str
    message: str = ""
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"
