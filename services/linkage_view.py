"""
Pure projection, filtering and delta functions for the linkage view.

Every function here takes immutable snapshots and returns new values;
nothing is mutated and nothing is fetched.
"""

from typing import Iterable, Optional
import structlog

from models.linkage import (
    Product,
    MandatoryLink,
    Row,
    ViewMode,
    LinkTargets,
    UnlinkTargets,
)

logger = structlog.get_logger(__name__)


# ===================
# PROJECTION
# ===================

def to_mandatory_rows(links: Iterable[MandatoryLink]) -> list[Row]:
    """Project mandatory links to rows, preserving order."""
    return [
        Row(
            id=link.id,
            name=link.product_name,
            product_id=link.product_id,
            status=link.status
        )
        for link in links
    ]


def to_catalog_rows(products: Iterable[Product]) -> list[Row]:
    """Project catalog products to rows, preserving order."""
    return [
        Row(id="", name=product.name, product_id=product.id, status="")
        for product in products
    ]


# ===================
# MODE SELECTION
# ===================

def select_initial_mode(links: Iterable[MandatoryLink]) -> ViewMode:
    """
    Mode to open the view in.

    Existing designations are shown first; with none, the catalog is
    shown so the operator can start selecting right away.
    """
    return ViewMode.MANDATORY if any(True for _ in links) else ViewMode.ALL


def build_initial_rows(
    products: Iterable[Product],
    links: Iterable[MandatoryLink]
) -> list[Row]:
    """Rows for the mode chosen by select_initial_mode()."""
    links = list(links)
    if select_initial_mode(links) == ViewMode.MANDATORY:
        return to_mandatory_rows(links)
    # Nothing linked yet, so nothing to exclude
    return to_catalog_rows(products)


# ===================
# FILTERING
# ===================

def build_catalog_view(
    products: Iterable[Product],
    links: Iterable[MandatoryLink]
) -> list[Row]:
    """
    Catalog rows for products not already linked as mandatory.

    Set difference on product ID, linear in products + links.
    """
    linked_ids = {link.product_id for link in links}
    return to_catalog_rows(p for p in products if p.id not in linked_ids)


def build_mandatory_view(links: Iterable[MandatoryLink]) -> list[Row]:
    """Rows for the mandatory view."""
    return to_mandatory_rows(links)


def build_view(
    products: Iterable[Product],
    links: Iterable[MandatoryLink],
    mode: ViewMode
) -> list[Row]:
    """
    Rows for mode, derived from the current collections.

    Used on toggle and after each mutation. Repeated calls with the
    same inputs return equal rows.
    """
    if mode == ViewMode.MANDATORY:
        return build_mandatory_view(links)
    return build_catalog_view(products, links)


def drop_orphan_rows(rows: Iterable[Row], products: Iterable[Product]) -> list[Row]:
    """
    Drop rows whose product is not in the catalog.

    Each dropped row is logged; the rest of the view is kept.
    """
    known_ids = {product.id for product in products}
    kept = []
    for row in rows:
        if row.product_id in known_ids:
            kept.append(row)
            continue
        logger.warning(
            "inconsistent_row_dropped",
            row_id=row.id,
            product_id=row.product_id,
            name=row.name
        )
    return kept


def filter_products_by_brand(
    products: Iterable[Product],
    brand: Optional[str]
) -> list[Product]:
    """Products of one brand; all products when brand is empty."""
    if not brand:
        return list(products)
    return [p for p in products if p.brand == brand]


def list_brands(products: Iterable[Product]) -> list[str]:
    """Distinct non-empty brands, sorted."""
    return sorted({p.brand for p in products if p.brand})


# ===================
# DELTA COMPUTATION
# ===================

def compute_link_targets(selected_rows: Iterable[Row], status: str) -> LinkTargets:
    """
    Product IDs to link from a catalog selection.

    status is passed through as given. An empty selection yields no IDs.
    """
    return LinkTargets(
        product_ids=[row.product_id for row in selected_rows],
        status=status
    )


def compute_unlink_targets(selected_rows: Iterable[Row]) -> UnlinkTargets:
    """
    Link IDs to remove from a mandatory selection.

    Rows without a link ID (never persisted) are skipped.
    """
    return UnlinkTargets(link_ids=[row.id for row in selected_rows if row.id])
