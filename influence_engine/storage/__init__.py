from .base import KeyValueStore
from .json_file_store import JsonFileStore
from .memory_store import InMemoryStore
from .repository import SettingsRepository

__all__ = ["KeyValueStore", "InMemoryStore", "JsonFileStore", "SettingsRepository"]
