"""Shared building blocks: models, money, periods, config, storage."""
