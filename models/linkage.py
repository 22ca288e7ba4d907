"""
Mandatory product linkage schemas.

Products and mandatory links arrive from the data source; rows are the
uniform projection handed to the display surface.
"""

from pydantic import BeforeValidator, Field
from typing import Annotated, Optional, Union
from enum import Enum

from models.base import BaseSchema, FrozenSchema


class ViewMode(str, Enum):
    """Which collection the rows are projected from."""
    MANDATORY = "MANDATORY"
    ALL = "ALL"


class MutationOutcome(str, Enum):
    """Outcome reported by the link service."""
    OK = "OK"
    ERROR = "ERROR"


class NotificationKind(str, Enum):
    """Toast variant."""
    SUCCESS = "success"
    ERROR = "error"


def _blank_if_none(v: Optional[str]) -> str:
    return "" if v is None else v


# Source tables send null for unset text columns
Text = Annotated[str, BeforeValidator(_blank_if_none)]


# ===================
# SOURCE RECORDS
# ===================

class Account(FrozenSchema):
    """Account the linkage is edited for."""
    
    id: str = Field(..., description="Account ID")
    name: Text = Field("", description="Account display name")


class Product(FrozenSchema):
    """Catalog product. Read-only here."""
    
    id: str = Field(..., min_length=1, description="Product ID")
    name: str = Field(..., description="Product name")
    brand: Text = Field("", description="Product brand")


class MandatoryLink(FrozenSchema):
    """
    A product designated mandatory for an account.
    
    id is empty for a link that has not been persisted yet.
    """
    
    id: Text = Field("", description="Link ID")
    product_id: str = Field(..., min_length=1, description="Linked product ID")
    product_name: Text = Field("", description="Linked product name")
    status: Text = Field("", description="Mandatory product status")


class AccountSnapshot(FrozenSchema):
    """
    One consistent delivery from the data source.
    
    Always replaced wholesale, never patched.
    """
    
    account: Optional[Account] = None
    products: tuple[Product, ...] = ()
    links: tuple[MandatoryLink, ...] = ()
    
    @classmethod
    def empty(cls) -> "AccountSnapshot":
        """The "no data" state."""
        return cls()
    
    def with_links(self, links) -> "AccountSnapshot":
        """Copy of this snapshot with the link collection replaced."""
        return self.model_copy(update={"links": tuple(links)})


# ===================
# VIEW MODEL
# ===================

class Row(FrozenSchema):
    """Display row, projected from a Product or a MandatoryLink."""
    
    id: str = Field("", description="Link ID, empty for catalog rows")
    name: str = Field(..., description="Product name")
    product_id: str = Field(..., description="Product ID")
    status: str = Field("", description="Status, empty for catalog rows")


class ViewState(FrozenSchema):
    """Active view mode and the status applied to new links."""
    
    mode: ViewMode = Field(ViewMode.ALL, description="Active view mode")
    selected_status: str = Field(..., description="Status used for the next link")


# ===================
# DELTAS
# ===================

class LinkTargets(FrozenSchema):
    """Product IDs to link, with the status to give them."""
    
    product_ids: list[str] = Field(default_factory=list)
    status: str
    
    @property
    def is_empty(self) -> bool:
        return not self.product_ids


class UnlinkTargets(FrozenSchema):
    """Mandatory link IDs to remove."""
    
    link_ids: list[str] = Field(default_factory=list)
    
    @property
    def is_empty(self) -> bool:
        return not self.link_ids


class MutationResult(BaseSchema):
    """
    Response from LinkService.link / LinkService.unlink.
    
    links is the authoritative link collection after the call.
    """
    
    outcome: MutationOutcome = MutationOutcome.OK
    links: list[MandatoryLink] = Field(default_factory=list)
    message: Optional[str] = Field(None, description="Reason when outcome is ERROR")
    
    @property
    def ok(self) -> bool:
        return self.outcome == MutationOutcome.OK


class Notification(BaseSchema):
    """A toast shown to the operator."""
    
    kind: NotificationKind
    title: str
    message: Union[str, list[str]]
