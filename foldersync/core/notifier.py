"""
User-facing notifications (started / synced / nothing to sync / failed)
"""
from dataclasses import dataclass
from typing import Optional
from ..utils.logging import log, warn


class ConsoleNotifier:
    """Prints notifications through the timestamped log helpers."""

    def info(self, message: str, detail: Optional[str] = None):
        log(message)
        if detail:
            for line in detail.splitlines():
                log(f"  {line}")

    def success(self, message: str, detail: Optional[str] = None):
        log(f"✓ {message}")
        if detail:
            log(f"  {detail}")

    def error(self, message: str, detail: Optional[str] = None):
        warn(message)
        if detail:
            warn(f"  {detail}")


@dataclass
class Notification:
    level: str
    message: str
    detail: Optional[str] = None


class RecordingNotifier:
    """Keeps notifications in memory instead of printing them."""

    def __init__(self):
        self.notifications: list[Notification] = []

    def info(self, message: str, detail: Optional[str] = None):
        self.notifications.append(Notification("info", message, detail))

    def success(self, message: str, detail: Optional[str] = None):
        self.notifications.append(Notification("success", message, detail))

    def error(self, message: str, detail: Optional[str] = None):
        self.notifications.append(Notification("error", message, detail))

    def messages(self, level: Optional[str] = None) -> list[str]:
        return [n.message for n in self.notifications if level is None or n.level == level]
