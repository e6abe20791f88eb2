"""A self-contained runtime bundling system, balances and kitties."""

from __future__ import annotations

import copy
from typing import Any, Dict

from kittyledger.pallet import Balances, Pallet, System
from kittyledger.types import DispatchError

_CALLS = frozenset({"create_kitty", "transfer", "set_price", "buy_kitty"})
_SHARED = ("system", "balances")


class TestRuntime:
    """Holds all ledger state and dispatches calls transactionally."""

    __test__ = False

    def __init__(self) -> None:
        self.system = System()
        self.balances = Balances()
        self.pallet = Pallet(self.system, self.balances)

    def snapshot(self) -> Dict[str, Any]:
        """Return a deep copy of all storage."""
        return {
            "system": copy.deepcopy(vars(self.system)),
            "balances": copy.deepcopy(vars(self.balances)),
            "pallet": copy.deepcopy(
                {k: v for k, v in vars(self.pallet).items() if k not in _SHARED}
            ),
        }

    def restore(self, state: Dict[str, Any]) -> None:
        """Put storage back to a state taken by snapshot."""
        vars(self.system).update(copy.deepcopy(state["system"]))
        vars(self.balances).update(copy.deepcopy(state["balances"]))
        vars(self.pallet).update(copy.deepcopy(state["pallet"]))

    def dispatch(self, call: str, *args) -> None:
        """Run a kitties call; on a dispatch error, storage is rolled back."""
        if call not in _CALLS:
            raise ValueError(f"unknown call {call!r}")
        saved = self.snapshot()
        try:
            getattr(self.pallet, call)(*args)
        except DispatchError:
            self.restore(saved)
            raise


def new_test_ext() -> TestRuntime:
    return TestRuntime()