"""Enumerated vocabularies shared across the screener (no internal imports)."""
