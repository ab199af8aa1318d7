from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract string key-value store backing saved settings and results."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key; absent keys are ignored."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...
