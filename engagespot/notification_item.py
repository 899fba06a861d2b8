"""Display content of a single notification."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationItem(BaseModel):
    """Title, message, url and icon shown to the recipient.

    Items are immutable: every ``with_*`` method returns a new item with one
    field replaced. Optional fields that were never set are left out of the
    serialized body entirely.
    """

    title: str
    message: str | None = Field(default=None)
    url: str | None = Field(default=None)
    icon: str | None = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new(cls, title: str) -> NotificationItem:
        """Create an item with only the title set; chain ``with_*`` calls for the rest."""

        return cls(title=title)

    @classmethod
    def with_args(cls, title: str, message: str, url: str, icon: str) -> NotificationItem:
        return cls(title=title, message=message, url=url, icon=icon)

    def with_title(self, title: str) -> NotificationItem:
        return self.model_copy(update={"title": title})

    def with_message(self, message: str) -> NotificationItem:
        return self.model_copy(update={"message": message})

    def with_url(self, url: str) -> NotificationItem:
        return self.model_copy(update={"url": url})

    def with_icon(self, icon: str) -> NotificationItem:
        return self.model_copy(update={"icon": icon})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
