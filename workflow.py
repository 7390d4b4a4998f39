"""One-shot submission workflow: scrape, validate, dedup, confirm, send, store.

Every run walks the stages below in order. A stage handler returns one of
``Continue``, ``Abort`` or ``Fail``:

* ``Continue(next_stage)`` moves on (``None`` after the last stage).
* ``Abort(reason)`` ends the run quietly. Misses, duplicates, declined
  confirmations and rejected submissions are routine, not errors.
* ``Fail(error)`` ends the run by raising ``error`` to the caller.

The run awaits collaborators at exactly four points: the dedup lookup, the
confirmation, the transport round-trip and the dedup write. There is no
retry anywhere in here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from confirmation import Confirmation
from document import Document
from errors import CiteletError, DocumentUnavailableError
from models import ScrapedRecord, SubmitResult
from pipeline import invalid_reason, scrape
from registry import Registry
from stores import ConfigStore, DedupStore
from transport import Transport

DEFAULT_SOURCE = "citelet-cli"

LOGGER = logging.getLogger(__name__)


class Stage(Enum):
    INIT = "init"
    SCRAPED = "scraped"
    VALIDATED = "validated"
    DEDUPED = "deduped"
    CONFIRMED = "confirmed"
    SENT = "sent"
    STORED = "stored"


@dataclass(frozen=True, slots=True)
class Continue:
    next_stage: Stage | None


@dataclass(frozen=True, slots=True)
class Abort:
    reason: str


@dataclass(frozen=True, slots=True)
class Fail:
    error: Exception


Transition = Continue | Abort | Fail


@dataclass(slots=True)
class WorkflowState:
    """Everything one run learns. Each stage fills in only its own fields."""

    doconfirm: bool = True
    record: ScrapedRecord | None = None
    already_sent: bool = False
    confirmed: bool | None = None
    submission_result: SubmitResult | None = None


@dataclass(frozen=True, slots=True)
class WorkflowOutcome:
    """Where a run ended. ``stage`` is the stage that aborted or ``STORED``."""

    stage: Stage
    state: WorkflowState
    reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self.reason is not None

    @property
    def stored(self) -> bool:
        return self.stage is Stage.STORED and not self.aborted


class SubmissionWorkflow:
    """Drives one document through the stages.

    A workflow object holds only collaborators; per-run data lives in a fresh
    ``WorkflowState``, so one instance can serve several concurrent runs.
    """

    def __init__(
        self,
        registry: Registry,
        dedup: DedupStore,
        config: ConfigStore,
        confirmation: Confirmation,
        transport: Transport,
        source: str | None = None,
    ) -> None:
        self.registry = registry
        self.dedup = dedup
        self.config = config
        self.confirmation = confirmation
        self.transport = transport
        self.source = source or os.getenv("CITELET_SOURCE", DEFAULT_SOURCE)
        self._handlers: dict[Stage, Callable[[Document, WorkflowState], Awaitable[Transition]]] = {
            Stage.INIT: self._init,
            Stage.SCRAPED: self._scrape,
            Stage.VALIDATED: self._validate,
            Stage.DEDUPED: self._dedup,
            Stage.CONFIRMED: self._confirm,
            Stage.SENT: self._send,
            Stage.STORED: self._store,
        }

    async def run(self, doc: Document) -> WorkflowOutcome:
        """Run the workflow once against ``doc``.

        Raises the error carried by a ``Fail`` transition, e.g.
        ``TransportError`` or ``StoreError``.
        """
        state = WorkflowState()
        stage = Stage.INIT

        while True:
            LOGGER.debug("Workflow entering stage=%s", stage.value)
            result = await self._step(stage, doc, state)

            if isinstance(result, Fail):
                LOGGER.error("Workflow failed at stage=%s: %s", stage.value, result.error)
                raise result.error
            if isinstance(result, Abort):
                LOGGER.info("Workflow aborted at stage=%s: %s", stage.value, result.reason)
                return WorkflowOutcome(stage=stage, state=state, reason=result.reason)
            if result.next_stage is None:
                LOGGER.info("Workflow complete for url=%s", state.record.url if state.record else "")
                return WorkflowOutcome(stage=stage, state=state)
            stage = result.next_stage

    async def _step(self, stage: Stage, doc: Document, state: WorkflowState) -> Transition:
        try:
            # Fail fast once the page is gone; the dedup write still runs so a
            # completed send is never forgotten.
            if stage not in (Stage.INIT, Stage.STORED):
                doc.current_url()
            return await self._handlers[stage](doc, state)
        except DocumentUnavailableError as exc:
            LOGGER.info("Document became unavailable during stage=%s: %s", stage.value, exc)
            return Abort("document_unavailable")
        except CiteletError as exc:
            return Fail(exc)

    async def _init(self, doc: Document, state: WorkflowState) -> Transition:
        state.doconfirm = await self.config.get_doconfirm()
        return Continue(Stage.SCRAPED)

    async def _scrape(self, doc: Document, state: WorkflowState) -> Transition:
        state.record = scrape(doc, self.registry)
        return Continue(Stage.VALIDATED)

    async def _validate(self, doc: Document, state: WorkflowState) -> Transition:
        reason = invalid_reason(state.record)
        if reason is not None:
            return Abort(reason)
        return Continue(Stage.DEDUPED)

    async def _dedup(self, doc: Document, state: WorkflowState) -> Transition:
        state.already_sent = await self.dedup.already_sent(state.record.url)
        if state.already_sent:
            return Abort("already_sent")
        return Continue(Stage.CONFIRMED)

    async def _confirm(self, doc: Document, state: WorkflowState) -> Transition:
        if state.doconfirm:
            state.confirmed = bool(await self.confirmation.request(state.record))
        else:
            state.confirmed = True
        if not state.confirmed:
            return Abort("declined")
        return Continue(Stage.SENT)

    async def _send(self, doc: Document, state: WorkflowState) -> Transition:
        result = await self.transport.submit(state.record, {"source": self.source})
        state.submission_result = result
        if result.message:
            LOGGER.info("Server said: %s", result.message)
        if not result.succeeded:
            LOGGER.warning("Submission rejected for url=%s status=%r", state.record.url, result.status)
            return Abort("rejected")
        return Continue(Stage.STORED)

    async def _store(self, doc: Document, state: WorkflowState) -> Transition:
        await self.dedup.record_sent(state.record)
        return Continue(None)
