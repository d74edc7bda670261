"""
Vending Machine FSM - API
=========================
FastAPI application exposing one vending machine over HTTP
"""

import logging
from contextlib import asynccontextmanager
from threading import Lock
from typing import Callable

from fastapi import Depends, FastAPI
from pydantic import BaseModel

from vending_fsm.config import APP_NAME, APP_VERSION, INITIAL_STOCK, LOG_LEVEL, validate_config
from vending_fsm.core.machine import VendingMachine
from vending_fsm.core.machine_states import Outcome

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class MachineService:
    """One machine plus the lock that serialises requests against it."""

    def __init__(self, machine: VendingMachine):
        self.machine = machine
        self._lock = Lock()

    def run(self, operation: Callable[[VendingMachine], Outcome]) -> dict:
        with self._lock:
            outcome = operation(self.machine)
            return {
                "outcome": outcome.to_dict(),
                "machine": self.machine.snapshot(),
            }

    def snapshot(self) -> dict:
        with self._lock:
            return self.machine.snapshot()

    def history(self) -> dict:
        with self._lock:
            return {
                "current_state": self.machine.state.value,
                "event_count": len(self.machine.history),
                "events": list(self.machine.history),
            }


_service = MachineService(VendingMachine(inventory=INITIAL_STOCK))


def get_service() -> MachineService:
    return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    for error in validate_config():
        logger.error("Config error: %s", error)
    logger.info("%s v%s starting", APP_NAME, APP_VERSION)
    yield


app = FastAPI(
    title=APP_NAME,
    description="FSM-driven single-unit vending machine",
    version=APP_VERSION,
    lifespan=lifespan,
)


# ── Request Models ────────────────────────────────────────────────────────────

class SelectItemRequest(BaseModel):
    item: str


class InsertCoinRequest(BaseModel):
    amount: int


# ── Endpoints ─────────────────────────────────────────────────────────────────

@app.get("/")
def root():
    return {
        "service": APP_NAME,
        "version": APP_VERSION,
        "status": "running"
    }


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/machine")
def get_machine(service: MachineService = Depends(get_service)):
    """Current state, stock and balance"""
    return service.snapshot()


@app.get("/machine/history")
def get_machine_history(service: MachineService = Depends(get_service)):
    """Every mode transition so far (audit trail)"""
    return service.history()


@app.post("/machine/select")
def select_item(request: SelectItemRequest, service: MachineService = Depends(get_service)):
    return service.run(lambda machine: machine.select_item(request.item))


@app.post("/machine/coins")
def insert_coin(request: InsertCoinRequest, service: MachineService = Depends(get_service)):
    """
    Insert coins toward the selected item.

    Reaching the price dispenses immediately; the dispense result is
    nested under ``outcome.followed_by``.
    """
    return service.run(lambda machine: machine.insert_coin(request.amount))


@app.post("/machine/dispense")
def dispense_item(service: MachineService = Depends(get_service)):
    return service.run(VendingMachine.dispense_item)


@app.post("/machine/out-of-order")
def set_out_of_order(service: MachineService = Depends(get_service)):
    return service.run(VendingMachine.set_out_of_order)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
