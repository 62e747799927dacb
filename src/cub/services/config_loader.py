"""Configuration loader for cub."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cub.errors import CubError

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off", ""}


class ConfigLoader:
    """Loads a YAML file of CLI defaults and normalizes each value to its key's type."""

    BOOL_KEYS = {"verbose", "prefer_stable"}
    STR_KEYS = {
        "working_dir",
        "composer_json_dir",
        "repo",
        "branch",
        "composer_bin",
        "git_bin",
        "log_file",
    }
    SUPPORTED_KEYS = BOOL_KEYS | STR_KEYS

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise CubError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise CubError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise CubError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(str(key) for key in set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise CubError(f"Unknown configuration keys: {unknown_list}")

        return {key: self._normalize(key, value) for key, value in parsed.items() if value is not None}

    def _normalize(self, key: str, value: Any) -> Any:
        if key in self.BOOL_KEYS:
            return self.to_bool(key, value)

        # branch names such as 2024 are parsed by YAML as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if not isinstance(value, str) or not value.strip():
            raise CubError(f"Configuration key '{key}' must be a non-empty string.")
        return value

    @staticmethod
    def to_bool(key: str, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        raise CubError(
            f"Configuration key '{key}' must be a boolean (true/false, yes/no, on/off), got {value!r}."
        )
