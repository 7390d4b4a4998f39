"""Persistent stores: sent-record bookkeeping and the confirmation mode flag."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Protocol

from filelock import FileLock
from filelock import Timeout as FileLockTimeout

from errors import ConfigurationError, StoreError
from models import ScrapedRecord

DEFAULT_SENT_PATH = "citelet_sent.json"
DEFAULT_SETTINGS_PATH = "citelet_settings.json"
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0

MODE_KEY = "mode"
MODE_CONFIRM = "confirm"
MODE_NOCONFIRM = "noconfirm"

LOGGER = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...


class JsonFileStore:
    """Key-value store persisted as a single JSON object on disk.

    Each ``get``/``set`` is atomic across threads and processes: the
    read-modify-write runs under a ``<name>.lock`` file lock, and writes go
    through a unique temp file and ``os.replace``. A get-then-set across two
    calls is not atomic.
    """

    def __init__(self, path: str | Path, lock_timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self.lock_timeout = lock_timeout

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"

    def read(self, key: str) -> Any | None:
        with self._locked():
            return self._load().get(key)

    def write(self, key: str, value: Any) -> None:
        with self._locked():
            data = self._load()
            data[key] = value
            self._dump(data)

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self.read, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self.write, key, value)

    @contextmanager
    def _locked(self) -> Iterator[None]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            lock = FileLock(str(self.lock_path), timeout=self.lock_timeout)
            lock.acquire()
        except FileLockTimeout as exc:
            raise StoreError(
                f"Timed out after {self.lock_timeout}s waiting for lock on {self.path}",
                {"path": str(self.path)},
            ) from exc
        except OSError as exc:
            raise StoreError(f"Could not lock store {self.path}: {exc}", {"path": str(self.path)}) from exc
        try:
            yield
        finally:
            lock.release()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StoreError(f"Could not read store {self.path}: {exc}", {"path": str(self.path)}) from exc
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not hold a JSON object", {"path": str(self.path)})
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Could not write store {self.path}: {exc}", {"path": str(self.path)}) from exc


class DedupStore:
    """Records every successfully submitted record, keyed by url."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def already_sent(self, url: str) -> bool:
        return await self.store.get(url) is not None

    async def sent_record(self, url: str) -> ScrapedRecord | None:
        data = await self.store.get(url)
        return ScrapedRecord.from_dict(data) if isinstance(data, dict) else None

    async def record_sent(self, record: ScrapedRecord) -> None:
        await self.store.set(record.url, record.to_dict())
        LOGGER.info("Recorded url=%s as sent", record.url)


class ConfigStore:
    """The persisted confirmation mode (``confirm`` or ``noconfirm``)."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def get_doconfirm(self) -> bool:
        """Return whether submissions need confirmation.

        A missing mode defaults to ``confirm`` and is written back, so later
        runs see an explicit value.
        """
        mode = await self.store.get(MODE_KEY)
        if mode is None:
            LOGGER.info("No confirmation mode stored, defaulting to %s", MODE_CONFIRM)
            await self.store.set(MODE_KEY, MODE_CONFIRM)
            return True
        if mode == MODE_CONFIRM:
            return True
        if mode == MODE_NOCONFIRM:
            return False
        raise ConfigurationError(f"Unknown confirmation mode {mode!r}", {"mode": mode})

    async def set_doconfirm(self, doconfirm: bool) -> None:
        await self.store.set(MODE_KEY, MODE_CONFIRM if doconfirm else MODE_NOCONFIRM)


def default_dedup_store() -> DedupStore:
    return DedupStore(JsonFileStore(os.getenv("CITELET_SENT_PATH", DEFAULT_SENT_PATH)))


def default_config_store() -> ConfigStore:
    return ConfigStore(JsonFileStore(os.getenv("CITELET_SETTINGS_PATH", DEFAULT_SETTINGS_PATH)))
