"""Notification envelope and its fluent builder."""

from __future__ import annotations

import copy
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic_core import to_json

from .notification_item import NotificationItem

T = TypeVar("T")


def _recipient_sequence(recipients: Sequence[str]) -> Sequence[str]:
    # a bare string is a Sequence[str] too, but would fan out per character
    if isinstance(recipients, str):
        raise TypeError("recipients must be a sequence of strings, not a single string")
    return recipients


class Notification(BaseModel, Generic[T]):
    """Request body for ``POST /notifications``.

    ``data`` is any JSON-serializable payload (mappings, lists, scalars,
    pydantic models or dataclasses). When ``category`` is absent Engagespot
    delivers to every subscriber of the app.
    """

    notification: NotificationItem
    recipients: tuple[str, ...]
    data: T | None = Field(default=None)
    category: str | None = Field(default=None)

    model_config = ConfigDict(frozen=True)

    @field_serializer("notification")
    def _serialize_item(self, item: NotificationItem) -> dict[str, Any]:
        return item.to_dict()

    def to_dict(self) -> dict[str, Any]:
        exclude = {name for name in ("data", "category") if getattr(self, name) is None}
        return self.model_dump(mode="json", exclude=exclude)

    def to_json(self) -> bytes:
        return to_json(self.to_dict())


class NotificationBuilder(Generic[T]):
    """Fluent helper producing a ``Notification``.

    Every chained call returns a new builder, so a partially configured builder
    can be reused as a template without the branches affecting each other. The
    recipients sequence is only copied when ``build`` is called.

    Example::

        notification = NotificationBuilder("Title", ["foo@bar.com"]).message("Hello").build()
    """

    __slots__ = ("_item", "_recipients", "_data", "_category")

    def __init__(self, title: str, recipients: Sequence[str]) -> None:
        self._item = NotificationItem.new(title)
        self._recipients = _recipient_sequence(recipients)
        self._data: T | None = None
        self._category: str | None = None

    def _evolve(self, **changes: Any) -> NotificationBuilder[T]:
        clone = copy.copy(self)
        for name, value in changes.items():
            setattr(clone, name, value)
        return clone

    def notification_item(self, notification: NotificationItem) -> NotificationBuilder[T]:
        return self._evolve(_item=notification)

    def title(self, title: str) -> NotificationBuilder[T]:
        return self._evolve(_item=self._item.with_title(title))

    def message(self, message: str) -> NotificationBuilder[T]:
        return self._evolve(_item=self._item.with_message(message))

    def url(self, url: str) -> NotificationBuilder[T]:
        return self._evolve(_item=self._item.with_url(url))

    def icon(self, icon: str) -> NotificationBuilder[T]:
        return self._evolve(_item=self._item.with_icon(icon))

    def recipients(self, recipients: Sequence[str]) -> NotificationBuilder[T]:
        return self._evolve(_recipients=_recipient_sequence(recipients))

    def data(self, data: T) -> NotificationBuilder[T]:
        """Attach a JSON-serializable payload to the notification."""

        return self._evolve(_data=data)

    def category(self, category: str) -> NotificationBuilder[T]:
        return self._evolve(_category=category)

    def build(self) -> Notification[T]:
        return Notification(
            notification=self._item,
            recipients=tuple(self._recipients),
            data=self._data,
            category=self._category,
        )
