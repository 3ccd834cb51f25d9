"""Regime forfettario: annual revenue ceiling and monthly required-revenue overview."""
