"""RACI reference-data import: validation, reconciliation and commit."""

__version__ = "0.1.0"
