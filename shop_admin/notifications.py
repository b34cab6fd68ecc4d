"""
User-facing notices

Actions report their outcome through a Notifier handed to whatever triggers
them. The API collects notices per request and returns them with the response.
"""

from enum import Enum
from typing import List, Protocol

from pydantic import BaseModel
import structlog

logger = structlog.get_logger(__name__)


class NoticeVariant(str, Enum):
    """Notice display variant"""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notice(BaseModel):
    """Outcome message shown to the dashboard user"""
    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT


class Notifier(Protocol):
    def notify(self, notice: Notice) -> None:
        ...


class LoggingNotifier:
    """Notifier that only writes notices to the log."""

    def notify(self, notice: Notice) -> None:
        if notice.variant == NoticeVariant.DESTRUCTIVE:
            logger.warning("Notice", title=notice.title, description=notice.description)
        else:
            logger.info("Notice", title=notice.title, description=notice.description)


class NoticeCollector(LoggingNotifier):
    """Logs notices and keeps them for the current request."""

    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def notify(self, notice: Notice) -> None:
        super().notify(notice)
        self.notices.append(notice)
