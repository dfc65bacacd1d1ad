"""Ledger Calc - personal finance dashboard analytics."""

__version__ = "0.3.0"
