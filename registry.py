"""Publisher plugin registration.

A plugin bundles everything citelet knows about one content source: how to
recognise its pages and how to pull head metadata and cited references out
of them. Plugins are registered once at start-up on an explicit
``Registry`` instance; registration order is classification precedence.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Iterable

from document import Document
from extractors import CitedExtractor, ExtractorRegistry, HeadExtractor
from publishers import Predicate, PublisherProfile, PublisherRegistry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PublisherPlugin:
    """Detection predicate plus paired extractors for one publisher."""

    name: str
    matches: Predicate
    extract_head: HeadExtractor
    extract_cited: CitedExtractor

    def profile(self) -> PublisherProfile:
        return PublisherProfile(name=self.name, matches=self.matches)


class Registry:
    """Publisher profiles and extractors, owned by one process or session."""

    def __init__(self) -> None:
        self.publishers = PublisherRegistry()
        self.extractors = ExtractorRegistry()

    def register(self, plugin: PublisherPlugin) -> None:
        self.publishers.register(plugin.profile())
        self.extractors.register_head_extractor(plugin.name, plugin.extract_head)
        self.extractors.register_cited_extractor(plugin.name, plugin.extract_cited)

    def classify(self, doc: Document) -> str | None:
        return self.publishers.classify(doc)

    @property
    def names(self) -> list[str]:
        return self.publishers.names


def load_plugins(registry: Registry, modules: Iterable[ModuleType | str]) -> Registry:
    """Let each plugin module register itself, in the given order.

    Modules may be passed as objects or dotted import paths. Each must expose
    ``register(registry)`` and register exactly one publisher.
    """
    for module in modules:
        if isinstance(module, str):
            module = importlib.import_module(module)
        before = len(registry.publishers)
        module.register(registry)
        added = len(registry.publishers) - before
        if added != 1:
            raise RuntimeError(
                f"Plugin module {module.__name__} registered {added} publishers, expected exactly 1"
            )
    LOGGER.info("Loaded %s publisher plugins: %s", len(registry.publishers), ", ".join(registry.names))
    return registry


def build_default_registry() -> Registry:
    """Registry populated with the bundled publisher plugins."""
    from publisher_plugins import PLUGIN_MODULES  # noqa: PLC0415

    return load_plugins(Registry(), PLUGIN_MODULES)
