"""
bulk_import/services/notifier.py

Operator-facing notices (toasts in the UI, log lines elsewhere).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class NoticeLevel:
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: str
    message: str
    title: str | None = None


class Notifier(Protocol):
    def info(self, message: str, title: str | None = None) -> None:
        ...

    def success(self, message: str, title: str | None = None) -> None:
        ...

    def error(self, message: str, title: str | None = None) -> None:
        ...


class LoggingNotifier:
    """
    Default notifier: notices become log lines.
    """

    def info(self, message: str, title: str | None = None) -> None:
        logger.info("%s%s", f"{title}: " if title else "", message)

    def success(self, message: str, title: str | None = None) -> None:
        logger.info("%s%s", f"{title}: " if title else "", message)

    def error(self, message: str, title: str | None = None) -> None:
        logger.error("%s%s", f"{title}: " if title else "", message)


class RecordingNotifier:
    """
    Keeps notices until a UI drains them.
    """

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def info(self, message: str, title: str | None = None) -> None:
        self.notices.append(Notice(level=NoticeLevel.INFO, message=message, title=title))

    def success(self, message: str, title: str | None = None) -> None:
        self.notices.append(Notice(level=NoticeLevel.SUCCESS, message=message, title=title))

    def error(self, message: str, title: str | None = None) -> None:
        self.notices.append(Notice(level=NoticeLevel.ERROR, message=message, title=title))

    def drain(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices
