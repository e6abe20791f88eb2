"""An in-memory ledger for minting, pricing and transferring collectible kitties."""

__version__ = "0.1.0"
__all__ = ["pallet", "runtime", "types"]