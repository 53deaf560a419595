"""Hinted GLV and fake-GLV scalar multiplication for arithmetic circuits."""

__version__ = "0.1.0"
