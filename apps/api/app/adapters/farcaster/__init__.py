"""Farcaster hub-side adapters."""

from .primary_address import PrimaryAddressClient

__all__ = ["PrimaryAddressClient"]
