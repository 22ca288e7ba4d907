"""
Business logic services.

linkage_view holds the pure row functions; linkage_view_model holds the
stateful handler the widget talks to.
"""

from services.linkage_view_model import (
    ProductLinkageViewModel,
    create_linkage_view_model,
)
from services.collaborators import (
    DataSource,
    LinkService,
    MetadataProvider,
    Notifier,
    SettingsStatusProvider,
    LogNotifier,
    format_toast_message,
)

__all__ = [
    "ProductLinkageViewModel",
    "create_linkage_view_model",
    "DataSource",
    "LinkService",
    "MetadataProvider",
    "Notifier",
    "SettingsStatusProvider",
    "LogNotifier",
    "format_toast_message",
]
