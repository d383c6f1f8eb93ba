"""Pointer-drag interaction as an explicit state machine.

Pointer moves only update a preview position; the editor sees a single
``move_node`` when the drag is released, so a whole gesture is one history
entry and nothing is committed if the drag is cancelled.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from trip_workflow.application.editor import WorkflowEditor
from trip_workflow.domain.models import Position


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragState(BaseModel):
    phase: DragPhase = DragPhase.IDLE
    node_id: Optional[str] = None
    origin: Optional[Position] = None
    current: Optional[Position] = None


class DragController:
    def __init__(self, editor: WorkflowEditor):
        self._editor = editor
        self._state = DragState()

    @property
    def state(self) -> DragState:
        return self._state.model_copy(deep=True)

    @property
    def is_dragging(self) -> bool:
        return self._state.phase == DragPhase.DRAGGING

    def begin(self, node_id: str) -> bool:
        if self.is_dragging:
            return False
        node = self._editor.node(node_id)
        if node is None:
            return False
        self._state = DragState(
            phase=DragPhase.DRAGGING,
            node_id=node_id,
            origin=node.position,
            current=node.position.model_copy(),
        )
        return True

    def move(self, position: Position | Mapping[str, Any]) -> Position | None:
        if not self.is_dragging:
            return None
        try:
            target = position if isinstance(position, Position) else Position.model_validate(position)
        except ValidationError:
            return None
        self._state.current = target.model_copy()
        return self._state.current.model_copy()

    def release(self) -> bool:
        if not self.is_dragging:
            return False
        state = self._state
        self._state = DragState()
        if state.current is None or state.current == state.origin:
            return False
        return self._editor.move_node(state.node_id, state.current)

    def cancel(self) -> None:
        self._state = DragState()


__all__ = ["DragController", "DragPhase", "DragState"]
