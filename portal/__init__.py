"""HTTP layer for the finance engine."""
