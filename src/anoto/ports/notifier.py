"""Notification interface."""

from typing import Protocol


class Notifier(Protocol):
    """Interface for delivering reminder notifications."""

    def notify(self, title: str, body: str) -> bool:
        """Deliver a notification. Returns False if delivery failed."""
        ...
