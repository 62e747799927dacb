"""composer.lock reader."""

import json
import os
from typing import Any, Dict, Optional

from cub.errors import CubError, LockDataError
from cub.errors_catalog import actionable_error
from cub.models import LockSnapshot


class LockFile:
    """Reads package entries from a Composer lock file."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as file_obj:
                data = json.load(file_obj)
        except (OSError, json.JSONDecodeError) as exc:
            raise CubError(f"Could not read lock file '{self.path}': {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
            raise LockDataError(actionable_error("lock_data_invalid", path=self.path))
        return data

    def find(self, package_name: str) -> Optional[LockSnapshot]:
        """Return the snapshot for ``package_name`` or None when it is not locked."""
        data = self.load()
        if data is None:
            return None

        for package in data["packages"]:
            if isinstance(package, dict) and package.get("name") == package_name:
                return self.to_snapshot(package)
        return None

    @staticmethod
    def to_snapshot(package: Dict[str, Any]) -> LockSnapshot:
        reference = None
        for key in ("source", "dist"):
            block = package.get(key)
            if isinstance(block, dict) and block.get("reference"):
                reference = block["reference"]
                break

        return LockSnapshot(
            name=package["name"],
            version=package.get("version"),
            source_reference=reference,
        )
