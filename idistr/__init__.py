"""IDISTR mini-app core: cart, catalog reconciliation, order submission, receipts."""

__version__ = "1.0.0"
