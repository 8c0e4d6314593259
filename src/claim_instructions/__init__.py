"""Unsigned claim and transfer instructions for Merkle-distributor airdrops."""

__version__ = "1.0.0"
