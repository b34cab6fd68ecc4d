"""
Shared plumbing for screen services.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog

from shop_admin.database import DocumentGateway
from shop_admin.errors import DashboardError, TransportError
from shop_admin.notifications import Notice, Notifier

logger = structlog.get_logger(__name__)


class ScreenService:
    """
    Base class for the services behind each dashboard screen.

    Failures are reported through the notifier and re-raised; storage
    failures are replaced by a generic message for the user.
    """

    def __init__(self, gateway: DocumentGateway, notifier: Notifier):
        self.gateway = gateway
        self.notifier = notifier

    @asynccontextmanager
    async def reporting(self, failure: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except TransportError as e:
            logger.error(failure, error=str(e))
            error = TransportError(failure)
            self.notifier.notify(error.to_notice())
            raise error from e
        except DashboardError as e:
            self.notifier.notify(e.to_notice())
            raise

    def succeeded(self, title: str, description: str) -> None:
        self.notifier.notify(Notice(title=title, description=description))
