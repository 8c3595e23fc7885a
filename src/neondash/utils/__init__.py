"""Utility modules for NEON DASH."""

from .wallet import PurchaseResult, Wallet

__all__ = ["PurchaseResult", "Wallet"]
