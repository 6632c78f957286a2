"""In-memory holder for the parsed bundle document."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any

from bundle_viewer.errors import NotLoadedError
from bundle_viewer.types import Document, JsonValue


class ReadWriteLock:
    """Shared/exclusive lock: many readers or one writer.

    A waiting writer blocks new readers so a load is never starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class DocumentStore:
    """Owns the bundle document and exposes read-only access to it.

    The document is written once by `load` before requests are served. Every
    read accessor raises `NotLoadedError` while the store holds no document
    or an empty one.
    """

    def __init__(self, document: Mapping[str, JsonValue] | None = None) -> None:
        self._lock = ReadWriteLock()
        self._document: dict[str, JsonValue] | None = None
        if document is not None:
            self.load(document)

    def load(self, document: Mapping[str, JsonValue]) -> None:
        with self._lock.exclusive():
            self._document = dict(document)

    def is_loaded(self) -> bool:
        with self._lock.shared():
            return bool(self._document)

    @contextmanager
    def read(self) -> Iterator[Document]:
        """Hold the shared lock and yield a read-only view of the document."""
        with self._lock.shared():
            if not self._document:
                raise NotLoadedError()
            yield MappingProxyType(self._document)

    def get(self, key: str) -> tuple[Any, bool]:
        with self.read() as document:
            if key not in document:
                return None, False
            return document[key], True

    def keys(self) -> list[str]:
        with self.read() as document:
            return list(document.keys())

    def __len__(self) -> int:
        with self._lock.shared():
            return len(self._document or {})
