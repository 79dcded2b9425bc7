"""
JSON persistence for the abbreviation table.

File format is a flat object mapping abbreviations to zone identifiers:

{
  "EST": "America/New_York",
  "IST": "Asia/Kolkata"
}
"""

import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from .logger import get_module_logger


class AbbreviationStore:
    """Loads and atomically saves an abbreviation table file."""

    def __init__(self, path: Union[str, Path]):
        self.logger: Any = get_module_logger("abbreviation_store")
        self.path = Path(path)

    def load(self) -> dict[str, str]:
        try:
            if not self.path.exists():
                self.logger.debug(f"No abbreviation file at {self.path}")
                return {}
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (
            PermissionError,
            OSError,
            json.JSONDecodeError,
            UnicodeDecodeError,
        ) as e:
            self.logger.warning(f"Failed to load abbreviation table: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(
                f"Abbreviation file {self.path} does not hold a JSON object"
            )
            return {}

        table = {
            abbr: identifier
            for abbr, identifier in data.items()
            if isinstance(abbr, str) and isinstance(identifier, str)
        }
        dropped = len(data) - len(table)
        if dropped:
            self.logger.warning(f"Dropped {dropped} non-string abbreviation entries")
        self.logger.debug(f"Loaded {len(table)} abbreviations from {self.path}")
        return table

    def save(self, table: Mapping[str, str]) -> bool:
        try:
            # Atomic write: write to temp file then replace
            target_dir = self.path.parent
            target_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix="abbreviations_", suffix=".json", dir=str(target_dir)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    json.dump(dict(table), tmp_file, indent=2, sort_keys=True)
                    tmp_file.flush()
                    os.fsync(tmp_file.fileno())
                os.replace(tmp_path, self.path)
            finally:
                # In case of error before replace
                if os.path.exists(tmp_path):
                    try:
                        os.remove(tmp_path)
                    except OSError:
                        pass
        except (PermissionError, OSError, TypeError) as e:
            self.logger.error(f"Failed to save abbreviation table: {e}")
            return False
        self.logger.debug(f"Saved {len(table)} abbreviations to {self.path}")
        return True
