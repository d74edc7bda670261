"""
Machine Modes
=============
One policy object per machine state. Modes hold no data of their own:
every handler reads and writes the machine it is given, and moves the
machine on by calling ``machine.set_mode``.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict

from vending_fsm.core.machine_states import MachineEvent, MachineState, Outcome, OutcomeKind

if TYPE_CHECKING:
    from vending_fsm.core.machine import VendingMachine

logger = logging.getLogger(__name__)


class Mode(ABC):
    """Behaviour of the four public operations for one machine state."""

    state: MachineState

    @abstractmethod
    def select_item(self, machine: "VendingMachine", item: str) -> Outcome:
        ...

    @abstractmethod
    def insert_coin(self, machine: "VendingMachine", amount: int) -> Outcome:
        ...

    @abstractmethod
    def dispense_item(self, machine: "VendingMachine") -> Outcome:
        ...

    @abstractmethod
    def set_out_of_order(self, machine: "VendingMachine") -> Outcome:
        ...

    def _reject(self, kind: OutcomeKind, message: str) -> Outcome:
        logger.warning("[%s] %s", self.state.value, message)
        return Outcome(kind=kind, message=message, from_state=self.state, to_state=self.state)

    def _fault(self, machine: "VendingMachine", message: str) -> Outcome:
        logger.info("[%s] %s", self.state.value, message)
        machine.set_mode(OUT_OF_ORDER, MachineEvent.FAULT)
        return Outcome(
            kind=OutcomeKind.ACCEPTED,
            message=message,
            from_state=self.state,
            to_state=machine.state,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IdleMode(Mode):
    state = MachineState.IDLE

    def select_item(self, machine, item):
        message = f"Item selected: {item}"
        logger.info("[%s] %s", self.state.value, message)
        machine.selected_item = item
        machine.item_selected = True
        machine.set_mode(ITEM_SELECTED, MachineEvent.ITEM_SELECTED)
        return Outcome(
            kind=OutcomeKind.ACCEPTED,
            message=message,
            from_state=self.state,
            to_state=machine.state,
        )

    def insert_coin(self, machine, amount):
        return self._reject(
            OutcomeKind.REJECTED_WRONG_STATE,
            "Please select an item before inserting a coin!",
        )

    def dispense_item(self, machine):
        if not machine.item_selected:
            return self._reject(
                OutcomeKind.REJECTED_WRONG_STATE,
                "No item has been chosen! Please select an item first!",
            )
        # Selection flag set without going through select_item
        return self._reject(OutcomeKind.REJECTED_WRONG_STATE, "Nothing to dispense.")

    def set_out_of_order(self, machine):
        return self._fault(machine, "The vending machine is now out of service!")


class ItemSelectedMode(Mode):
    state = MachineState.ITEM_SELECTED

    def select_item(self, machine, item):
        return self._reject(
            OutcomeKind.REJECTED_WRONG_STATE,
            "Item chosen. Please insert the required coins.",
        )

    def insert_coin(self, machine, amount):
        machine.add_balance(amount)
        message = f"Coin accepted. Current balance: {machine.balance}"
        logger.info("[%s] %s", self.state.value, message)

        if machine.balance < machine.item_price:
            return Outcome(
                kind=OutcomeKind.ACCEPTED,
                message=message,
                from_state=self.state,
                to_state=self.state,
            )

        # Paying enough dispenses in the same call
        logger.info("[%s] Sufficient funds detected. Dispensing your item...", self.state.value)
        machine.set_mode(DISPENSING, MachineEvent.FUNDS_SUFFICIENT)
        dispensed = machine.dispense_item()
        return Outcome(
            kind=OutcomeKind.ACCEPTED,
            message=message,
            from_state=self.state,
            to_state=machine.state,
            followed_by=dispensed,
        )

    def dispense_item(self, machine):
        return self._reject(
            OutcomeKind.REJECTED_INSUFFICIENT_FUNDS,
            "Please insert sufficient coins.",
        )

    def set_out_of_order(self, machine):
        return self._fault(machine, "The machine is now out of service.")


class DispensingMode(Mode):
    state = MachineState.DISPENSING

    def select_item(self, machine, item):
        return self._reject(
            OutcomeKind.REJECTED_WRONG_STATE,
            "Currently dispensing an item. Please wait...",
        )

    def insert_coin(self, machine, amount):
        return self._reject(
            OutcomeKind.REJECTED_WRONG_STATE,
            "Processing your request. Please wait...",
        )

    def dispense_item(self, machine):
        machine.decrease_item_stock()
        # Overpayment stays on the machine as credit
        machine.balance = machine.balance - machine.item_price
        machine.clear_selection()

        message = "Your item is ready! Switching back to Idle Mode..."
        logger.info("[%s] %s", self.state.value, message)
        machine.set_mode(IDLE, MachineEvent.ITEM_DISPENSED)
        return Outcome(
            kind=OutcomeKind.ACCEPTED,
            message=message,
            from_state=self.state,
            to_state=machine.state,
        )

    def set_out_of_order(self, machine):
        return self._fault(machine, "The vending machine is now out of service.")


class OutOfOrderMode(Mode):
    state = MachineState.OUT_OF_ORDER

    def select_item(self, machine, item):
        return self._reject(
            OutcomeKind.REJECTED_OUT_OF_ORDER,
            "This vending machine is out of service... Item selection is unavailable.",
        )

    def insert_coin(self, machine, amount):
        return self._reject(
            OutcomeKind.REJECTED_OUT_OF_ORDER,
            "This vending machine is out of service... Coin insertion is unavailable.",
        )

    def dispense_item(self, machine):
        return self._reject(
            OutcomeKind.REJECTED_OUT_OF_ORDER,
            "This vending machine is out of service... Dispensing items is unavailable.",
        )

    def set_out_of_order(self, machine):
        return self._reject(
            OutcomeKind.REJECTED_OUT_OF_ORDER,
            "The vending machine is already out of service.",
        )


# Modes are stateless, so one shared instance per state is enough
IDLE = IdleMode()
ITEM_SELECTED = ItemSelectedMode()
DISPENSING = DispensingMode()
OUT_OF_ORDER = OutOfOrderMode()

MODES: Dict[MachineState, Mode] = {
    mode.state: mode for mode in (IDLE, ITEM_SELECTED, DISPENSING, OUT_OF_ORDER)
}
