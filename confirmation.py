"""Confirmation collaborators asked before a record is sent."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

from models import ScrapedRecord

LOGGER = logging.getLogger(__name__)

_YES = frozenset({"y", "yes"})


class Confirmation(Protocol):
    async def request(self, record: ScrapedRecord) -> bool: ...


class StaticConfirmation:
    """Always answers the same way; used for ``--yes`` and in tests."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer

    async def request(self, record: ScrapedRecord) -> bool:
        return self.answer


class PromptConfirmation:
    """Asks on the terminal. Only ``y``/``yes`` confirm."""

    def __init__(self, input_fn: Callable[[str], str] = input) -> None:
        self._input = input_fn

    async def request(self, record: ScrapedRecord) -> bool:
        prompt = (
            f"Send {len(record.cited_refs)} references from {record.publisher} "
            f"({record.url}) to the citelet server? [y/N] "
        )
        try:
            answer = await asyncio.to_thread(self._input, prompt)
        except EOFError:
            LOGGER.info("No answer on stdin, treating as declined")
            return False
        return answer.strip().lower() in _YES
