"""
Collaborators consumed by ProductLinkageViewModel.

The protocols describe what the host environment supplies. The
concrete classes cover the pieces that need no backend: status options
from settings and notifications through the log.
"""

from typing import Optional, Protocol, Union
import structlog

from config.settings import settings
from models.linkage import (
    AccountSnapshot,
    MutationResult,
    Notification,
    NotificationKind,
)

logger = structlog.get_logger(__name__)


class DataSource(Protocol):
    """Supplies the account snapshot. Raises on failure."""

    def fetch(self, account_id: str) -> AccountSnapshot: ...


class LinkService(Protocol):
    """Creates and removes mandatory links; returns the fresh link set."""

    def link(self, account_id: str, status: str, product_ids: list[str]) -> MutationResult: ...

    def unlink(self, account_id: str, link_ids: list[str]) -> MutationResult: ...


class MetadataProvider(Protocol):
    """Supplies the valid mandatory product statuses."""

    def get_status_options(self) -> list[str]: ...


class Notifier(Protocol):
    """One-way toast output."""

    def show(self, kind: NotificationKind, title: str, message: Union[str, list[str]]) -> None: ...


def format_toast_message(message: Union[str, list[str]]) -> str:
    """Join a list of messages one per line; strings pass through."""
    if isinstance(message, (list, tuple)):
        return "".join(f"{m}\n" for m in message)
    return str(message)


class SettingsStatusProvider:
    """Status options from Settings.product_status_options."""

    def __init__(self, options: Optional[list[str]] = None):
        self.options = list(settings.product_status_options if options is None else options)

    def get_status_options(self) -> list[str]:
        return list(self.options)


class LogNotifier:
    """
    Notifier that writes each toast to the log.

    Keeps every notification in history so a host without a toast
    surface (or a test) can read them back.
    """

    def __init__(self):
        self.history: list[Notification] = []

    def show(self, kind: NotificationKind, title: str, message: Union[str, list[str]]) -> None:
        notification = Notification(kind=kind, title=title, message=message)
        self.history.append(notification)

        log = logger.error if kind == NotificationKind.ERROR else logger.info
        log(
            "toast_shown",
            kind=kind.value,
            title=title,
            message=format_toast_message(message)
        )

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
