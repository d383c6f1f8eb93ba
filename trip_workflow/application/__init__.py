"""Application layer: editor session, history, drag interaction, reconciliation."""

from trip_workflow.application.drag import DragController, DragPhase, DragState
from trip_workflow.application.editor import ApplyOutcome, WorkflowEditor
from trip_workflow.application.history import EditHistory
from trip_workflow.application.reconcile import PersistedSchedule, reconcile

__all__ = [
    "ApplyOutcome",
    "DragController",
    "DragPhase",
    "DragState",
    "EditHistory",
    "PersistedSchedule",
    "WorkflowEditor",
    "reconcile",
]
