"""
Vending Machine
The machine owns the data; the current mode decides what each call does.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from vending_fsm.config import ITEM_PRICE
from vending_fsm.core.machine_states import (
    TRANSITIONS,
    IllegalTransitionError,
    MachineEvent,
    MachineState,
    Outcome,
)
from vending_fsm.core.modes import IDLE, Mode

logger = logging.getLogger(__name__)


@dataclass
class VendingMachine:
    """
    A single vending unit selling every item at one price.
    Mutate it only through the four public operations.
    """
    inventory: int
    balance: int = 0
    item_price: int = ITEM_PRICE
    selected_item: Optional[str] = None
    item_selected: bool = False

    # FSM state
    mode: Mode = IDLE
    history: list = field(default_factory=list)

    def __post_init__(self):
        if self.mode is None:
            raise ValueError("A vending machine always needs a mode")

    @property
    def state(self) -> MachineState:
        return self.mode.state

    # ── Public operations ─────────────────────────────────────────────────────

    def select_item(self, item: str) -> Outcome:
        return self.mode.select_item(self, item)

    def insert_coin(self, amount: int) -> Outcome:
        return self.mode.insert_coin(self, amount)

    def dispense_item(self) -> Outcome:
        return self.mode.dispense_item(self)

    def set_out_of_order(self) -> Outcome:
        return self.mode.set_out_of_order(self)

    # ── Used by modes ─────────────────────────────────────────────────────────

    def add_balance(self, amount: int):
        self.balance += amount

    def decrease_item_stock(self):
        # No floor check, callers only reach this from DISPENSING
        self.inventory -= 1

    def clear_selection(self):
        self.selected_item = None
        self.item_selected = False

    def set_mode(self, mode: Mode, event: MachineEvent):
        """Replace the active mode. Fails if the move is illegal."""
        next_state = TRANSITIONS.get((self.state, event))

        if next_state is None or next_state != mode.state:
            raise IllegalTransitionError(
                f"Illegal transition: {self.state.value} + {event.value} -> {mode.state.value}"
            )

        # Record what happened (audit trail)
        self.history.append({
            "from": self.state.value,
            "event": event.value,
            "to": next_state.value,
            "timestamp": datetime.now().isoformat(),
        })

        old_state = self.state
        self.mode = mode

        logger.debug("%s + %s -> %s", old_state.value, event.value, next_state.value)

    # ── Reporting ─────────────────────────────────────────────────────────────

    def summary(self) -> str:
        return f"Stock remaining: {self.inventory}\nCurrent balance: {self.balance}"

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "inventory": self.inventory,
            "balance": self.balance,
            "item_price": self.item_price,
            "selected_item": self.selected_item,
            "item_selected": self.item_selected,
            "summary": self.summary(),
        }

    def __str__(self) -> str:
        return self.summary()


# Demo: the bundled example sequence
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")

    machine = VendingMachine(inventory=10)
    print(f"🆕 Initial state: {machine.state.value}\n")

    machine.select_item("Soda")
    machine.insert_coin(50)
    machine.dispense_item()
    machine.set_out_of_order()
    machine.select_item("Chips")

    print(f"\n📍 Final state: {machine.state.value}")
    print(machine)

    print(f"\n📜 Full history ({len(machine.history)} steps):")
    for step in machine.history:
        print(f"   {step['from']:15} → {step['to']:15} via {step['event']}")
