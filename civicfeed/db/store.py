# File: civicfeed/db/store.py
"""In-memory entity store.

One ``MemoryStore`` is built per application (see ``civicfeed.main.create_app``)
and handed to request handlers through ``civicfeed.db.session.get_store``.
Nothing is persisted: a process restart, or ``reset()``, brings back the demo
dataset from ``civicfeed.db.seed``.
"""
from __future__ import annotations

import copy
import threading
import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Any, Callable, Optional


class EntityKind(str, PyEnum):
    user = "user"
    issue = "issue"
    technician = "technician"
    comment = "comment"


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Keyed maps per entity kind plus the per-issue upvote sets.

    Every accessor returns copies, so callers never hold a live reference to a
    stored record. Services wrap each read-modify-write in ``with store.lock:``;
    the lock is re-entrant so the accessors below can take it again.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None, seed: bool = True):
        self.lock = threading.RLock()
        self._clock = clock or utcnow
        self._maps: dict[EntityKind, dict[str, Any]] = {kind: {} for kind in EntityKind}
        # issue id -> set of voter user ids
        self._upvotes: dict[str, set[str]] = {}
        if seed:
            self.reset()
        else:
            self.clear()

    def now(self) -> datetime:
        return self._clock()

    # ---- keyed entity access ----

    def get(self, kind: EntityKind, entity_id: str) -> Any | None:
        with self.lock:
            entity = self._maps[kind].get(entity_id)
            return copy.deepcopy(entity) if entity is not None else None

    def exists(self, kind: EntityKind, entity_id: Optional[str]) -> bool:
        if not entity_id:
            return False
        with self.lock:
            return entity_id in self._maps[kind]

    def put(self, kind: EntityKind, entity: Any) -> Any:
        with self.lock:
            self._maps[kind][entity.id] = copy.deepcopy(entity)
        return entity

    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        with self.lock:
            return self._maps[kind].pop(entity_id, None) is not None

    def list_all(self, kind: EntityKind) -> list[Any]:
        """Snapshot of the current entities, in insertion order."""
        with self.lock:
            return [copy.deepcopy(e) for e in self._maps[kind].values()]

    def find(self, kind: EntityKind, predicate: Callable[[Any], bool]) -> Any | None:
        with self.lock:
            for entity in self._maps[kind].values():
                if predicate(entity):
                    return copy.deepcopy(entity)
        return None

    # ---- upvote relation ----

    def voters(self, issue_id: str) -> set[str]:
        with self.lock:
            return set(self._upvotes.get(issue_id, ()))

    def set_voters(self, issue_id: str, voters: set[str]) -> None:
        with self.lock:
            if voters:
                self._upvotes[issue_id] = set(voters)
            else:
                self._upvotes.pop(issue_id, None)

    def drop_voters(self, issue_id: str) -> None:
        with self.lock:
            self._upvotes.pop(issue_id, None)

    # ---- lifecycle ----

    def clear(self) -> None:
        with self.lock:
            for m in self._maps.values():
                m.clear()
            self._upvotes.clear()

    def reset(self) -> None:
        """Wipe everything and load the fixed demo dataset."""
        from civicfeed.db.seed import load_seed

        with self.lock:
            self.clear()
            load_seed(self)

    def counts(self) -> dict[str, int]:
        with self.lock:
            return {kind.value: len(m) for kind, m in self._maps.items()}
