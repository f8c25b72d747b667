"""adledger — marketplace ad and bid ledger."""

__version__ = "0.1.0"
