"""Data-access layer: in-memory and YAML-file record stores."""

from .backend import RecordStore
from .memory import MemoryStore
from .yaml_store import YamlStore

__all__ = ['RecordStore', 'MemoryStore', 'YamlStore']
