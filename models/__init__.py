"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.linkage import (
    ViewMode,
    MutationOutcome,
    NotificationKind,
    Account,
    Product,
    MandatoryLink,
    AccountSnapshot,
    Row,
    ViewState,
    LinkTargets,
    UnlinkTargets,
    MutationResult,
    Notification,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Linkage
    "ViewMode",
    "MutationOutcome",
    "NotificationKind",
    "Account",
    "Product",
    "MandatoryLink",
    "AccountSnapshot",
    "Row",
    "ViewState",
    "LinkTargets",
    "UnlinkTargets",
    "MutationResult",
    "Notification",
]
