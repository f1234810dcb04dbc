"""
Invitation Dispatch

Tracks the two-step invitation saga: the invitation row is inserted first,
then the invitation email is sent. If the email fails the row is deleted as
the single compensating action.

    pending_unsent --email sent--------> pending_sent
    pending_unsent --row deleted-------> rolled_back
    pending_unsent --delete failed-----> rollback_failed

rollback_failed is a terminal state that leaves an orphaned pending row; it
is surfaced instead of being silently ignored.
"""

from enum import Enum
from typing import Optional


class DispatchState(str, Enum):
    pending_unsent = "pending_unsent"
    pending_sent = "pending_sent"
    rolled_back = "rolled_back"
    rollback_failed = "rollback_failed"


TERMINAL_STATES = frozenset(
    {DispatchState.pending_sent, DispatchState.rolled_back, DispatchState.rollback_failed}
)


class InvalidDispatchTransition(Exception):
    def __init__(self, current: DispatchState, target: DispatchState):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move invitation dispatch from {current.value} to {target.value}")


class InvitationDispatch:
    """State of one invitation's email delivery saga"""

    def __init__(self, invitation_id: int):
        self.invitation_id = invitation_id
        self.state = DispatchState.pending_unsent
        self.failure_reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def _move(self, target: DispatchState) -> None:
        if self.state != DispatchState.pending_unsent:
            raise InvalidDispatchTransition(self.state, target)
        self.state = target

    def mark_sent(self) -> None:
        self._move(DispatchState.pending_sent)

    def mark_rolled_back(self, reason: str) -> None:
        self._move(DispatchState.rolled_back)
        self.failure_reason = reason

    def mark_rollback_failed(self, reason: str) -> None:
        self._move(DispatchState.rollback_failed)
        self.failure_reason = reason

    def __repr__(self) -> str:
        return f"InvitationDispatch(invitation_id={self.invitation_id}, state={self.state.value})"
