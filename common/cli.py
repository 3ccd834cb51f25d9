"""Helpers shared by the module CLIs."""
import dataclasses
import json
import logging
import sys
from enum import Enum

from .config import get_config
from .storage import YamlStore


def setup_logging(verbose: bool = False):
    level = 'DEBUG' if verbose else get_config().logging.level
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def open_store(path=None) -> YamlStore:
    return YamlStore(path or get_config().data.path)


def _plain(item):
    if hasattr(item, 'model_dump'):
        return item.model_dump(mode='json')
    if dataclasses.is_dataclass(item):
        return dataclasses.asdict(item)
    return item


def _default(value):
    # Decimal and date from input records
    if isinstance(value, Enum):
        return value.value
    return str(value)


def dump(result) -> str:
    """JSON text for a result model, an input record, or a list of either."""
    if isinstance(result, list):
        data = [_plain(r) for r in result]
    else:
        data = _plain(result)
    return json.dumps(data, indent=2, ensure_ascii=False, default=_default)


def fail(exc: Exception):
    """Report a finance error on stderr and exit 1."""
    print(f'❌ {exc}', file=sys.stderr)
    sys.exit(1)
