"""Application layer: ledger, capture entry point, boundaries and hooks."""
