"""Secret store backends for the Loggly token."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

from ..errors import SecretStoreError

logger = logging.getLogger(__name__)


class SecretLookup(Protocol):
    """Look up a secret record by bag and item name."""

    def lookup(self, bag_name: str, item_name: str) -> Mapping[str, Any] | None:
        """Return the record, or None when the item does not exist."""
        ...


class DataBagDirectoryLookup:
    """Read data bag items stored as ``<root>/<bag>/<item>.json``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def item_path(self, bag_name: str, item_name: str) -> Path:
        return self.root / bag_name / f"{item_name}.json"

    def lookup(self, bag_name: str, item_name: str) -> Mapping[str, Any] | None:
        path = self.item_path(bag_name, item_name)
        if not path.exists():
            logger.debug(f"Data bag item not found: {path}")
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SecretStoreError(f"Cannot read data bag item {path}: {e}") from e

        if not isinstance(data, dict):
            raise SecretStoreError(f"Data bag item {path} must be a JSON object")

        return data


class MappingLookup:
    """In-memory secret store keyed by ``(bag, item)``."""

    def __init__(self, items: Mapping[tuple[str, str], Mapping[str, Any]] | None = None):
        self.items = dict(items or {})

    def lookup(self, bag_name: str, item_name: str) -> Mapping[str, Any] | None:
        return self.items.get((bag_name, item_name))
