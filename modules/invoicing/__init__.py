"""Invoice derivation and status transitions."""
