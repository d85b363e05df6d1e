"""Analysis and formatting helpers for research data."""
