"""Python client for the Engagespot notification API.

Example::

    client = Engagespot("api_key", "api_secret")
    notification = NotificationBuilder("title", ["foo@bar.com"]).build()
    result = await client.send(notification)
    print(result.unwrap_or_else(lambda err: f"Error: {err}"))
"""

from .client import Engagespot, EngagespotBuilder
from .common import DEFAULT_BASE_URL, EngagespotSettings, get_settings
from .exceptions import EngagespotError, EngagespotRequestError, InvalidHeaderValueError
from .notification import Notification, NotificationBuilder
from .notification_item import NotificationItem
from .result import EngagespotResult, ErrorKind

__all__ = [
    "DEFAULT_BASE_URL",
    "Engagespot",
    "EngagespotBuilder",
    "EngagespotError",
    "EngagespotRequestError",
    "EngagespotResult",
    "EngagespotSettings",
    "ErrorKind",
    "InvalidHeaderValueError",
    "Notification",
    "NotificationBuilder",
    "NotificationItem",
    "get_settings",
]
