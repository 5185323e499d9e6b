"""Entry persistence interface."""

from typing import Protocol


class EntryRepository(Protocol):
    """Interface for loading and saving daily entry records."""

    def load_all(self) -> list[dict]:
        """Load every stored entry record. Unreadable records are skipped."""
        ...

    def save(self, record: dict) -> None:
        """Write/overwrite the record for record["date"]."""
        ...
