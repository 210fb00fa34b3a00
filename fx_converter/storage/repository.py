"""
Repository pattern for data access.

Keeps the conversion log as a pretty-printed JSON array on disk.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List

from .models import ConversionRecord

DEFAULT_LOG_PATH = "conversions.json"


class ConversionLogError(Exception):
    """Raised when the persisted conversion log cannot be parsed."""


class ConversionRepository:
    """Append-only store of conversion records.

    Every append reads the whole file and rewrites it. There is no locking,
    so only one process may write to a given log at a time.
    """

    def __init__(self, path: str = DEFAULT_LOG_PATH):
        """Initialize the repository with a log file path.

        Args:
            path: Path to the JSON conversion log
        """
        self.path = Path(path)

    def load_all(self) -> List[ConversionRecord]:
        """Load every record in the log, oldest first.

        Returns:
            List of records, empty if the log does not exist yet

        Raises:
            ConversionLogError: If the file exists but is malformed
        """
        if not self.path.exists():
            return []

        with open(self.path, 'r', encoding='utf-8') as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ConversionLogError(f"Invalid JSON in conversion log {self.path}: {e}")

        if not isinstance(raw, list):
            raise ConversionLogError(f"Conversion log {self.path} must contain a list")

        records = []
        for index, entry in enumerate(raw):
            if not isinstance(entry, dict):
                raise ConversionLogError(f"Entry {index} in {self.path} is not an object")
            try:
                records.append(ConversionRecord.from_dict(entry))
            except ValueError as e:
                raise ConversionLogError(f"Entry {index} in {self.path}: {e}")
        return records

    def append(self, record: ConversionRecord) -> None:
        """Append a record and rewrite the log in full.

        Args:
            record: The conversion to persist
        """
        records = self.load_all()
        records.append(record)
        self._write(records)

    def _write(self, records: List[ConversionRecord]) -> None:
        # Write next to the target so os.replace stays on one filesystem
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(directory), prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump([r.to_dict() for r in records], f, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
