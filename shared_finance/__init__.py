"""Shared Finance: collaborative bank-statement ingestion, categorization, and aggregation."""

__version__ = "1.0.0"
