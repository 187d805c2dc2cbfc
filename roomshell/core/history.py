"""History log: records every entity creation, destruction and mutation."""

from __future__ import annotations
import logging
from typing import Protocol

from roomshell.models import HistoryAction, HistoryEntry

logger = logging.getLogger(__name__)


class HistoryLog(Protocol):
    def record_created(self, entity_id: str, label: str = "") -> None: ...

    def record_destroyed(self, entity_id: str, label: str = "") -> None: ...

    def record_mutation(self, entity_id: str, field: str, label: str = "") -> None: ...


class HistoryJournal:
    """In-memory journal. Entries are appended as they happen, never batched."""

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def record_created(self, entity_id: str, label: str = "") -> None:
        self._append(HistoryAction.CREATED, entity_id, None, label)

    def record_destroyed(self, entity_id: str, label: str = "") -> None:
        self._append(HistoryAction.DESTROYED, entity_id, None, label)

    def record_mutation(self, entity_id: str, field: str, label: str = "") -> None:
        self._append(HistoryAction.MUTATED, entity_id, field, label)

    def entries(self, entity_id: str | None = None) -> list[HistoryEntry]:
        if entity_id is None:
            return list(self._entries)
        return [e for e in self._entries if e.entity_id == entity_id]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _append(
        self,
        action: HistoryAction,
        entity_id: str,
        field: str | None,
        label: str,
    ) -> None:
        entry = HistoryEntry(
            sequence=len(self._entries) + 1,
            action=action,
            entity_id=entity_id,
            field=field,
            label=label,
        )
        self._entries.append(entry)
        logger.debug("history #%d %s %s %s", entry.sequence, action.value, entity_id, field or "")
