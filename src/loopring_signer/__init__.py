"""Signing core for the Loopring L2 exchange."""

__version__ = "0.1.0"
