"""The kitties ledger with its supporting system and balances state."""

from __future__ import annotations

import hashlib
import struct
from dataclasses import replace
from typing import Dict, List, Optional

from kittyledger.types import (
    Created,
    DuplicateKitty,
    Kitty,
    NoKitty,
    NotOwner,
    Origin,
    PriceSet,
    Sold,
    TooManyKitties,
    TooManyOwned,
    TransferToSelf,
    Transferred,
    _as_dna,
)

MAX_OWNED = 100
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


class System:
    """Chain bookkeeping: block number, parent hash, extrinsic index, events."""

    def __init__(self) -> None:
        self.block_number = 0
        self.parent_hash = bytes(32)
        self.extrinsic_index: Optional[int] = None
        self.events: list = []

    def set_block_number(self, number: int) -> None:
        self.block_number = number

    def deposit_event(self, event) -> None:
        """Record an event; nothing is recorded while the block number is zero."""
        if self.block_number == 0:
            return
        self.events.append(event)

    def last_event(self):
        return self.events[-1] if self.events else None

    def note_extrinsic(self) -> int:
        """Advance to the next extrinsic in the block and return its index."""
        self.extrinsic_index = 0 if self.extrinsic_index is None else self.extrinsic_index + 1
        return self.extrinsic_index


class Balances:
    """A minimal fungible balance store."""

    def __init__(self) -> None:
        self._accounts: Dict[int, int] = {}

    def mint_into(self, who: int, amount: int) -> int:
        if amount < 0:
            raise ValueError("amount must not be negative")
        new_balance = self.balance(who) + amount
        if new_balance > U64_MAX:
            raise OverflowError("balance overflow")
        self._accounts[who] = new_balance
        return amount

    def balance(self, who: int) -> int:
        return self._accounts.get(who, 0)


class Pallet:
    """Kitty storage and the calls that change it."""

    def __init__(self, system: Optional[System] = None, balances: Optional[Balances] = None) -> None:
        self.system = system if system is not None else System()
        self.balances = balances if balances is not None else Balances()
        self.count_for_kitties = 0
        self.kitties: Dict[bytes, Kitty] = {}
        self.kitties_owned: Dict[int, List[bytes]] = {}

    def gen_dna(self) -> bytes:
        """Derive fresh DNA from chain state and the current kitty count."""
        index = self.system.extrinsic_index
        payload = (
            self.system.parent_hash
            + struct.pack("<Q", self.system.block_number)
            + (b"\x00" if index is None else b"\x01" + struct.pack("<I", index))
            + struct.pack("<I", self.count_for_kitties)
        )
        return hashlib.blake2b(payload, digest_size=32).digest()

    def owned_by(self, owner: int) -> List[bytes]:
        return list(self.kitties_owned.get(owner, []))

    def kitty(self, kitty_id) -> Optional[Kitty]:
        return self.kitties.get(bytes(kitty_id))

    def mint(self, owner: int, dna) -> None:
        dna = _as_dna(dna)
        if dna in self.kitties:
            raise DuplicateKitty("a kitty with this DNA already exists")
        new_count = self.count_for_kitties + 1
        if new_count > U32_MAX:
            raise TooManyKitties("kitty counter overflow")
        owned = self.owned_by(owner)
        if len(owned) >= MAX_OWNED:
            raise TooManyOwned(f"account {owner} owns too many kitties")
        owned.append(dna)
        self.kitties_owned[owner] = owned
        self.kitties[dna] = Kitty(dna=dna, owner=owner, price=None)
        self.count_for_kitties = new_count
        self.system.deposit_event(Created(owner=owner))

    def do_transfer(self, sender: int, to: int, kitty_id) -> None:
        kitty_id = bytes(kitty_id)
        if sender == to:
            raise TransferToSelf("cannot transfer a kitty to yourself")
        kitty = self.kitties.get(kitty_id)
        if kitty is None:
            raise NoKitty("no such kitty")
        if kitty.owner != sender:
            raise NotOwner("caller does not own this kitty")
        to_owned = self.owned_by(to)
        if len(to_owned) >= MAX_OWNED:
            raise TooManyOwned(f"account {to} owns too many kitties")
        to_owned.append(kitty_id)
        from_owned = self.owned_by(sender)
        try:
            position = from_owned.index(kitty_id)
        except ValueError:
            raise NoKitty("kitty missing from owner's list") from None
        from_owned[position] = from_owned[-1]
        from_owned.pop()

        self.kitties[kitty_id] = replace(kitty, owner=to, price=None)
        self.kitties_owned[to] = to_owned
        self.kitties_owned[sender] = from_owned
        self.system.deposit_event(Transferred(sender=sender, to=to, kitty_id=kitty_id))

    def do_set_price(self, caller: int, kitty_id, new_price: Optional[int]) -> None:
        kitty_id = bytes(kitty_id)
        kitty = self.kitties.get(kitty_id)
        if kitty is None:
            raise NoKitty("no such kitty")
        if kitty.owner != caller:
            raise NotOwner("caller does not own this kitty")
        self.kitties[kitty_id] = replace(kitty, price=new_price)
        self.system.deposit_event(PriceSet(owner=caller, kitty_id=kitty_id, new_price=new_price))

    def do_buy_kitty(self, buyer: int, kitty_id, price: int) -> None:
        self.system.deposit_event(Sold(buyer=buyer, kitty_id=bytes(kitty_id), price=price))

    def create_kitty(self, origin: Origin) -> None:
        who = origin.ensure_signed()
        self.mint(who, self.gen_dna())

    def transfer(self, origin: Origin, to: int, kitty_id) -> None:
        who = origin.ensure_signed()
        self.do_transfer(who, to, kitty_id)

    def set_price(self, origin: Origin, kitty_id, new_price: Optional[int]) -> None:
        who = origin.ensure_signed()
        self.do_set_price(who, kitty_id, new_price)

    def buy_kitty(self, origin: Origin, kitty_id, max_price: int) -> None:
        who = origin.ensure_signed()
        self.do_buy_kitty(who, kitty_id, max_price)