# kittyledger

An in-memory ledger for collectible "kitties". Each kitty has a unique
32-byte DNA, an owner and an optional sale price. Accounts can mint kitties,
transfer them and put a price on them. Changes are recorded as events.

Accounts are plain integers.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `kittyledger.types`: value types.
  - `Kitty(dna, owner, price=None)`: a frozen record. `dna` must be 32 bytes,
    otherwise `ValueError` is raised. `encode()` gives the DNA, the owner as a
    little-endian unsigned 64-bit integer, then a tag byte (`0` for no price,
    `1` followed by the price as a little-endian unsigned 64-bit integer).
    `Kitty.decode(data)` reads that form back and raises `ValueError` on
    malformed input. `Kitty.max_encoded_len()` is 49.
  - `Origin`: who is making a call. `Origin.signed(who)` stands for an
    account; `Origin.none()` is an unsigned call. `ensure_signed()` returns
    the account or raises `BadOrigin`.
  - Events: `Created(owner)`, `Transferred(sender, to, kitty_id)`,
    `PriceSet(owner, kitty_id, new_price)` and `Sold(buyer, kitty_id, price)`.
  - Errors, all subclasses of `DispatchError`: `BadOrigin`, `TooManyKitties`,
    `DuplicateKitty`, `TooManyOwned`, `TransferToSelf`, `NoKitty`, `NotOwner`.
- `kittyledger.pallet`: the ledger itself.
  - `System`: block number, parent hash, extrinsic index and the event list.
    `deposit_event(event)` records nothing while the block number is 0, so
    call `set_block_number(1)` first if you want to see events.
    `last_event()` returns the newest event or `None`. `note_extrinsic()`
    advances the extrinsic index and returns it.
  - `Balances`: `mint_into(who, amount)` adds to an account (negative amounts
    raise `ValueError`, balances above 2**64 - 1 raise `OverflowError`);
    `balance(who)` reads it, 0 for unknown accounts.
  - `Pallet`: kitty storage and calls. `create_kitty(origin)`,
    `transfer(origin, to, kitty_id)`, `set_price(origin, kitty_id, new_price)`
    and `buy_kitty(origin, kitty_id, max_price)` check the origin and hand
    over to `mint`, `do_transfer`, `do_set_price` and `do_buy_kitty`.
    `gen_dna()` derives DNA with BLAKE2b-256 from the parent hash, block
    number, extrinsic index and kitty count. `owned_by(owner)` lists an
    account's kitty ids and `kitty(kitty_id)` looks one up.
- `kittyledger.runtime`: `TestRuntime` bundles a `System`, `Balances` and a
  `Pallet` (as `system`, `balances` and `pallet`); `new_test_ext()` makes a
  fresh one.

## Rules

- Minting fails with `DuplicateKitty` if the DNA is taken, `TooManyKitties`
  if the total count would pass 2**32 - 1, and `TooManyOwned` if the owner
  already has 100 kitties.
- Transferring fails with `TransferToSelf`, `NoKitty`, `NotOwner`, or
  `TooManyOwned` when the receiver is full. A transfer clears the price.
- Setting a price fails with `NoKitty` or `NotOwner`.

## Usage

```python
from kittyledger.runtime import new_test_ext
from kittyledger.types import Origin, Created, Transferred, NotOwner, TransferToSelf

ALICE, BOB = 1, 2

rt = new_test_ext()
rt.system.set_block_number(1)

rt.pallet.create_kitty(Origin.signed(ALICE))
assert rt.system.last_event() == Created(owner=ALICE)

(kitty_id,) = rt.pallet.owned_by(ALICE)
rt.pallet.transfer(Origin.signed(ALICE), BOB, kitty_id)
assert rt.pallet.kitty(kitty_id).owner == BOB
assert rt.system.last_event() == Transferred(sender=ALICE, to=BOB, kitty_id=kitty_id)

try:
    rt.pallet.transfer(Origin.signed(ALICE), BOB, kitty_id)
except NotOwner:
    pass
```

`TestRuntime.dispatch(call, *args)` runs one of `create_kitty`, `transfer`,
`set_price` or `buy_kitty` on the pallet (any other name raises
`ValueError`). If the call raises a `DispatchError`, all storage is put back
as it was before the call and the error is raised again:

```python
try:
    rt.dispatch("transfer", Origin.signed(BOB), BOB, kitty_id)
except TransferToSelf:
    pass
```

`snapshot()` and `restore(state)` expose the same mechanism directly.

```python
rt.balances.mint_into(ALICE, 100)
assert rt.balances.balance(ALICE) == 100
```

## What it does not do

- Everything lives in memory; nothing is saved to disk.
- `buy_kitty` only records a `Sold` event. It does not check the price, move
  balances or change the owner.
- There is no command-line tool or server.