"""Undo/redo stacks over whole-trip graph snapshots."""

from __future__ import annotations

from collections import deque

from trip_workflow.domain.models import EditSnapshot


class EditHistory:
    """Two snapshot stacks; every snapshot spans all days of the trip.

    ``limit`` caps the undo stack; the oldest snapshot is evicted first.
    ``None`` keeps everything for the lifetime of the session.
    """

    def __init__(self, limit: int | None = None):
        self._limit = limit if limit and limit > 0 else None
        self._undo: deque[EditSnapshot] = deque(maxlen=self._limit)
        self._redo: deque[EditSnapshot] = deque(maxlen=self._limit)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def record(self, snapshot: EditSnapshot) -> None:
        self._undo.append(snapshot)
        self._redo.clear()

    def undo(self, current: EditSnapshot) -> EditSnapshot | None:
        if not self._undo:
            return None
        previous = self._undo.pop()
        self._redo.append(current)
        return previous

    def redo(self, current: EditSnapshot) -> EditSnapshot | None:
        if not self._redo:
            return None
        following = self._redo.pop()
        self._undo.append(current)
        return following

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


__all__ = ["EditHistory"]
