import copy

import pytest

from kittyledger.pallet import MAX_OWNED, U32_MAX, Balances, Pallet, System
from kittyledger.types import (
    BadOrigin,
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
)

ALICE = 1
BOB = 2


@pytest.fixture
def pallet():
    return Pallet()


def _state(p):
    return copy.deepcopy((p.count_for_kitties, p.kitties, p.kitties_owned))


def test_events_need_nonzero_block():
    system = System()
    system.deposit_event(Created(owner=1))
    assert system.last_event() is None
    system.set_block_number(1)
    system.deposit_event(Created(owner=1))
    assert system.last_event() == Created(owner=1)


def test_note_extrinsic_counts_up():
    system = System()
    assert system.note_extrinsic() == 0
    assert system.note_extrinsic() == 1


def test_balances_mint():
    balances = Balances()
    assert balances.mint_into(ALICE, 100) == 100
    balances.mint_into(ALICE, 50)
    assert balances.balance(ALICE) == 150
    assert balances.balance(BOB) == 0


def test_balances_overflow():
    balances = Balances()
    balances.mint_into(ALICE, 2**64 - 1)
    with pytest.raises(OverflowError):
        balances.mint_into(ALICE, 1)


def test_create_kitty_checks_signed(pallet):
    pallet.create_kitty(Origin.signed(ALICE))
    assert pallet.count_for_kitties == 1
    before = _state(pallet)
    with pytest.raises(BadOrigin):
        pallet.create_kitty(Origin.none())
    assert _state(pallet) == before


def test_create_kitty_emits_event(pallet):
    pallet.system.set_block_number(1)
    pallet.create_kitty(Origin.signed(ALICE))
    assert pallet.system.last_event() == Created(owner=1)


def test_mint_increments_count(pallet):
    assert pallet.count_for_kitties == 0
    pallet.create_kitty(Origin.signed(ALICE))
    assert pallet.count_for_kitties == 1


def test_mint_errors_when_overflow(pallet):
    pallet.count_for_kitties = U32_MAX
    before = _state(pallet)
    with pytest.raises(TooManyKitties):
        pallet.create_kitty(Origin.signed(1))
    assert _state(pallet) == before


def test_create_kitty_adds_to_map(pallet):
    pallet.create_kitty(Origin.signed(ALICE))
    assert len(pallet.kitties) == 1


def test_cannot_mint_duplicate(pallet):
    pallet.mint(ALICE, bytes(32))
    before = _state(pallet)
    with pytest.raises(DuplicateKitty):
        pallet.mint(BOB, bytes(32))
    assert _state(pallet) == before


def test_mint_stores_owner(pallet):
    pallet.mint(1337, bytes([42]) * 32)
    kitty = pallet.kitty(bytes([42]) * 32)
    assert kitty.owner == 1337
    assert kitty.dna == bytes([42]) * 32
    assert kitty.price is None


def test_create_kitty_makes_unique_kitties(pallet):
    pallet.create_kitty(Origin.signed(ALICE))
    pallet.create_kitty(Origin.signed(BOB))
    assert pallet.count_for_kitties == 2
    assert len(pallet.kitties) == 2


def test_gen_dna_depends_on_count(pallet):
    first = pallet.gen_dna()
    assert len(first) == 32
    assert pallet.gen_dna() == first
    pallet.count_for_kitties = 5
    assert pallet.gen_dna() != first


def test_kitties_owned(pallet):
    assert pallet.owned_by(ALICE) == []
    pallet.create_kitty(Origin.signed(ALICE))
    pallet.create_kitty(Origin.signed(ALICE))
    assert len(pallet.owned_by(ALICE)) == 2


def test_cannot_own_too_many(pallet):
    for _ in range(MAX_OWNED):
        pallet.create_kitty(Origin.signed(ALICE))
    before = _state(pallet)
    with pytest.raises(TooManyOwned):
        pallet.create_kitty(Origin.signed(ALICE))
    assert _state(pallet) == before


def test_transfer_emits_event(pallet):
    pallet.system.set_block_number(1)
    pallet.create_kitty(Origin.signed(ALICE))
    kitty_id = next(iter(pallet.kitties))
    pallet.transfer(Origin.signed(ALICE), BOB, kitty_id)
    assert pallet.system.last_event() == Transferred(sender=ALICE, to=BOB, kitty_id=kitty_id)


def test_transfer_logic(pallet):
    pallet.create_kitty(Origin.signed(ALICE))
    kitty = next(iter(pallet.kitties.values()))
    kitty_id = kitty.dna
    assert kitty.owner == ALICE
    assert pallet.owned_by(ALICE) == [kitty_id]
    assert pallet.owned_by(BOB) == []
    before = _state(pallet)
    with pytest.raises(TransferToSelf):
        pallet.transfer(Origin.signed(ALICE), ALICE, kitty_id)
    with pytest.raises(NoKitty):
        pallet.transfer(Origin.signed(ALICE), BOB, bytes(32))
    with pytest.raises(NotOwner):
        pallet.transfer(Origin.signed(BOB), ALICE, kitty_id)
    assert _state(pallet) == before
    pallet.transfer(Origin.signed(ALICE), BOB, kitty_id)
    assert pallet.owned_by(ALICE) == []
    assert pallet.owned_by(BOB) == [kitty_id]
    assert pallet.kitty(kitty_id).owner == BOB


def test_transfer_swap_removes(pallet):
    ids = [bytes([n]) * 32 for n in (1, 2, 3)]
    for dna in ids:
        pallet.mint(ALICE, dna)
    pallet.do_transfer(ALICE, BOB, ids[0])
    assert pallet.owned_by(ALICE) == [ids[2], ids[1]]


def test_transfer_clears_price(pallet):
    pallet.mint(ALICE, bytes([9]) * 32)
    pallet.set_price(Origin.signed(ALICE), bytes([9]) * 32, 50)
    assert pallet.kitty(bytes([9]) * 32).price == 50
    pallet.do_transfer(ALICE, BOB, bytes([9]) * 32)
    assert pallet.kitty(bytes([9]) * 32) == Kitty(bytes([9]) * 32, BOB, None)


def test_set_price_rules(pallet):
    pallet.system.set_block_number(1)
    kitty_id = bytes([5]) * 32
    with pytest.raises(NoKitty):
        pallet.set_price(Origin.signed(ALICE), kitty_id, 10)
    pallet.mint(ALICE, kitty_id)
    with pytest.raises(NotOwner):
        pallet.set_price(Origin.signed(BOB), kitty_id, 10)
    pallet.set_price(Origin.signed(ALICE), kitty_id, 10)
    assert pallet.system.last_event() == PriceSet(owner=ALICE, kitty_id=kitty_id, new_price=10)


def test_buy_kitty_emits_sold(pallet):
    pallet.system.set_block_number(1)
    pallet.buy_kitty(Origin.signed(BOB), bytes(32), 99)
    assert pallet.system.last_event() == Sold(buyer=BOB, kitty_id=bytes(32), price=99)