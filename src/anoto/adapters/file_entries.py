"""File-based entry storage adapter."""

import json
import logging
from pathlib import Path

from anoto.core.dates import parse_date_key

logger = logging.getLogger(__name__)


class FileEntryRepository:
    """
    File-based entry storage.

    Implements EntryRepository protocol. Each day gets a JSON file named
    after its date key.
    """

    def __init__(self, entries_dir: Path | str):
        self.entries_dir = Path(entries_dir).expanduser()
        self.entries_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a date key."""
        return self.entries_dir / f"{key}.json"

    def load_all(self) -> list[dict]:
        """Load every entry record. Unreadable files are logged and skipped."""
        records = []
        for path in sorted(self.entries_dir.glob("*.json")):
            try:
                parse_date_key(path.stem)
            except ValueError:
                logger.warning(f"Ignoring unexpected file in entries dir: {path.name}")
                continue
            try:
                records.append(json.loads(path.read_text()))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping unreadable entry {path.name}: {e}")
        return records

    def save(self, record: dict) -> None:
        """Write/overwrite the record for its date."""
        path = self._path_for_key(record["date"])
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(record, indent=2))
        tmp_path.replace(path)
