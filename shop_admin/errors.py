"""
Dashboard error taxonomy

Every failure of a user action maps to one of these. Each carries the notice
shown to the user and the HTTP status the API answers with.
"""

from typing import Optional

from shop_admin.notifications import Notice, NoticeVariant


class DashboardError(Exception):
    """Base class for failures that end a user action"""

    status_code = 500
    default_title = "Error"

    def __init__(self, description: str, title: Optional[str] = None):
        super().__init__(description)
        self.description = description
        self.title = title or self.default_title

    def to_notice(self) -> Notice:
        return Notice(
            title=self.title,
            description=self.description,
            variant=NoticeVariant.DESTRUCTIVE,
        )


class NotFoundError(DashboardError):
    """A requested document does not exist"""

    status_code = 404
    default_title = "Not found"


class TransportError(DashboardError):
    """A read or write against the document store failed"""

    status_code = 502


class ConstraintViolationError(DashboardError):
    """An action was refused because related documents still exist"""

    status_code = 409


class UploadError(DashboardError):
    """The blob store could not store a file"""

    status_code = 502
    default_title = "Upload failed"


class ImageTooLargeError(UploadError):
    status_code = 413
    default_title = "Image too large"
