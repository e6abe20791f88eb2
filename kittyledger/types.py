"""Core value types: origins, kitties, events and dispatch errors."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional, Union

DNA_LEN = 32
_U64 = struct.Struct("<Q")


class DispatchError(Exception):
    """Base class for every error a dispatched call can raise."""


class BadOrigin(DispatchError):
    """The call required a signed origin but did not get one."""


class TooManyKitties(DispatchError):
    """The global kitty counter would overflow."""


class DuplicateKitty(DispatchError):
    """A kitty with this DNA already exists."""


class TooManyOwned(DispatchError):
    """The account already owns the maximum number of kitties."""


class TransferToSelf(DispatchError):
    """A kitty cannot be transferred to its current owner."""


class NoKitty(DispatchError):
    """The kitty does not exist."""


class NotOwner(DispatchError):
    """The caller does not own the kitty."""


@dataclass(frozen=True)
class Origin:
    """Where a call comes from: a signing account, or nobody."""

    who: Optional[int] = None

    @classmethod
    def signed(cls, who: int) -> "Origin":
        return cls(who)

    @classmethod
    def none(cls) -> "Origin":
        return cls(None)

    def ensure_signed(self) -> int:
        """Return the signing account, raising BadOrigin if there is none."""
        if self.who is None:
            raise BadOrigin("origin is not signed")
        return self.who


def _as_dna(value: Union[bytes, bytearray, list, tuple]) -> bytes:
    dna = bytes(value)
    if len(dna) != DNA_LEN:
        raise ValueError(f"kitty DNA must be {DNA_LEN} bytes, got {len(dna)}")
    return dna


def _pack_u64(value: int, what: str) -> bytes:
    try:
        return _U64.pack(value)
    except struct.error as exc:
        raise ValueError(f"{what} does not fit in an unsigned 64-bit integer") from exc


@dataclass(frozen=True)
class Kitty:
    """A collectable kitty: its DNA, its owner and an optional sale price."""

    dna: bytes
    owner: int
    price: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "dna", _as_dna(self.dna))

    def encode(self) -> bytes:
        """Serialise as DNA, little-endian owner, and an optional price."""
        out = bytearray(self.dna)
        out += _pack_u64(self.owner, "owner")
        if self.price is None:
            out.append(0)
        else:
            out.append(1)
            out += _pack_u64(self.price, "price")
        return bytes(out)

    @classmethod
    def decode(cls, data: bytes) -> "Kitty":
        """Parse the form written by encode; raise ValueError on malformed input."""
        data = bytes(data)
        head = DNA_LEN + _U64.size
        if len(data) < head + 1:
            raise ValueError("truncated kitty encoding")
        dna = data[:DNA_LEN]
        (owner,) = _U64.unpack_from(data, DNA_LEN)
        tag = data[head]
        rest = data[head + 1:]
        if tag == 0:
            if rest:
                raise ValueError("trailing bytes after kitty encoding")
            return cls(dna, owner, None)
        if tag == 1:
            if len(rest) != _U64.size:
                raise ValueError("malformed price in kitty encoding")
            (price,) = _U64.unpack(rest)
            return cls(dna, owner, price)
        raise ValueError(f"invalid option tag {tag}")

    @classmethod
    def max_encoded_len(cls) -> int:
        return DNA_LEN + _U64.size + 1 + _U64.size


@dataclass(frozen=True)
class Created:
    owner: int


@dataclass(frozen=True)
class Transferred:
    sender: int
    to: int
    kitty_id: bytes


@dataclass(frozen=True)
class PriceSet:
    owner: int
    kitty_id: bytes
    new_price: Optional[int]


@dataclass(frozen=True)
class Sold:
    buyer: int
    kitty_id: bytes
    price: int