"""Brokerage back office: balance ledger, approval workflow and quote caching."""

__version__ = "0.1.0"
