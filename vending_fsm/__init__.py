"""Single-unit vending machine modelled as a finite-state machine."""

from vending_fsm.core.machine import VendingMachine
from vending_fsm.core.machine_states import MachineEvent, MachineState, OutcomeKind

__all__ = ["VendingMachine", "MachineEvent", "MachineState", "OutcomeKind"]
