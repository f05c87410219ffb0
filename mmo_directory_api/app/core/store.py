"""
Flat record store for the member collection.

The whole directory lives in a single JSON array on disk.  A store
only knows how to read the complete collection and replace it; there
is no partial read or write API.  ``JsonRecordStore`` is used by the
running service while ``InMemoryRecordStore`` lets tests (or a future
database‑backed replacement) plug in behind the same two methods.

Writes are whole‑collection replaces with no locking: two concurrent
writers race and the last one wins.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class CollectionError(RuntimeError):
    """The backing collection could not be read or written."""


class CollectionDecodeError(CollectionError):
    """The backing collection exists but does not hold a JSON array."""


class RecordStore:
    """Interface shared by every store implementation."""

    def load_all(self) -> List[Record]:
        raise NotImplementedError

    def save_all(self, records: Iterable[Record]) -> None:
        raise NotImplementedError


class JsonRecordStore(RecordStore):
    """Store the collection as a pretty‑printed JSON file.

    A missing or blank file is an empty collection.  Anything else that
    does not decode (as UTF‑8 JSON) to an array of objects raises
    ``CollectionDecodeError``;
    the error is not recovered here.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load_all(self) -> List[Record]:
        if not self.path.exists():
            logger.debug("Collection %s does not exist yet", self.path)
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
            if not raw.strip():
                return []
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CollectionDecodeError(f"Malformed collection {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise CollectionDecodeError(
                f"Malformed collection {self.path}: expected a JSON array, got {type(data).__name__}"
            )
        for position, record in enumerate(data):
            if not isinstance(record, dict):
                raise CollectionDecodeError(
                    f"Malformed collection {self.path}: item {position} is {type(record).__name__}, not an object"
                )
        logger.debug("Loaded %d records from %s", len(data), self.path)
        return data

    def save_all(self, records: Iterable[Record]) -> None:
        records = list(records)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write next to the target and swap it in so readers never see a
        # half written file.
        fd, tmp_name = tempfile.mkstemp(prefix=".users-", suffix=".json", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info("Saved %d records to %s", len(records), self.path)


class InMemoryRecordStore(RecordStore):
    """Keep the collection in a list; used by tests."""

    def __init__(self, records: Optional[Iterable[Record]] = None) -> None:
        self._records: List[Record] = copy.deepcopy(list(records or []))

    def load_all(self) -> List[Record]:
        return copy.deepcopy(self._records)

    def save_all(self, records: Iterable[Record]) -> None:
        self._records = copy.deepcopy(list(records))
