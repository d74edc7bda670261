"""
Vending Machine States
The machine is in exactly ONE of these states at any time
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MachineState(str, Enum):
    IDLE = "IDLE"                    # Waiting for a selection
    ITEM_SELECTED = "ITEM_SELECTED"  # Item chosen, waiting for coins
    DISPENSING = "DISPENSING"        # Paid, item on its way
    OUT_OF_ORDER = "OUT_OF_ORDER"    # Out of service (terminal)


class MachineEvent(str, Enum):
    ITEM_SELECTED = "ITEM_SELECTED"
    FUNDS_SUFFICIENT = "FUNDS_SUFFICIENT"
    ITEM_DISPENSED = "ITEM_DISPENSED"
    FAULT = "FAULT"


# Terminal states - once the machine reaches these, it stops moving
TERMINAL_STATES = {
    MachineState.OUT_OF_ORDER,
}

TRANSITIONS = {
    # Purchase cycle
    (MachineState.IDLE, MachineEvent.ITEM_SELECTED): MachineState.ITEM_SELECTED,
    (MachineState.ITEM_SELECTED, MachineEvent.FUNDS_SUFFICIENT): MachineState.DISPENSING,
    (MachineState.DISPENSING, MachineEvent.ITEM_DISPENSED): MachineState.IDLE,

    # Faults, allowed from every non-terminal state
    (MachineState.IDLE, MachineEvent.FAULT): MachineState.OUT_OF_ORDER,
    (MachineState.ITEM_SELECTED, MachineEvent.FAULT): MachineState.OUT_OF_ORDER,
    (MachineState.DISPENSING, MachineEvent.FAULT): MachineState.OUT_OF_ORDER,
}


class OutcomeKind(str, Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED_WRONG_STATE = "REJECTED_WRONG_STATE"
    REJECTED_INSUFFICIENT_FUNDS = "REJECTED_INSUFFICIENT_FUNDS"
    REJECTED_OUT_OF_ORDER = "REJECTED_OUT_OF_ORDER"


@dataclass
class Outcome:
    """What one operation did. Rejections are reported here, never raised."""
    kind: OutcomeKind
    message: str
    from_state: MachineState
    to_state: MachineState
    followed_by: Optional["Outcome"] = None

    @property
    def accepted(self) -> bool:
        return self.kind == OutcomeKind.ACCEPTED

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "followed_by": self.followed_by.to_dict() if self.followed_by else None,
        }


class IllegalTransitionError(ValueError):
    """Raised when a mode asks for a move missing from TRANSITIONS."""
