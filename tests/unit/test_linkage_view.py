"""
Unit tests for the pure linkage view functions.

Run: pytest tests/unit/test_linkage_view.py -v
"""

import pytest

from models.linkage import MandatoryLink, Product, Row, ViewMode
from services.linkage_view import (
    build_catalog_view,
    build_initial_rows,
    build_mandatory_view,
    build_view,
    compute_link_targets,
    compute_unlink_targets,
    drop_orphan_rows,
    filter_products_by_brand,
    list_brands,
    select_initial_mode,
    to_catalog_rows,
    to_mandatory_rows,
)


class TestProjection:
    """Tests for to_mandatory_rows() / to_catalog_rows()"""

    def test_mandatory_rows_copy_link_fields(self, sample_links):
        """Should carry id, product name, product id and status."""
        rows = to_mandatory_rows(sample_links)

        assert rows == [Row(id="L1", name="Widget", product_id="P1", status="Mandatory")]

    def test_mandatory_rows_preserve_order(self):
        """Should keep input order."""
        links = [
            MandatoryLink(id="L2", product_id="P2", product_name="Gadget", status="Optional"),
            MandatoryLink(id="L1", product_id="P1", product_name="Widget", status="Mandatory"),
        ]

        rows = to_mandatory_rows(links)

        assert [r.id for r in rows] == ["L2", "L1"]

    def test_catalog_rows_have_blank_id_and_status(self, sample_products):
        """Catalog rows are not links yet."""
        rows = to_catalog_rows(sample_products)

        assert rows == [
            Row(id="", name="Widget", product_id="P1", status=""),
            Row(id="", name="Gadget", product_id="P2", status=""),
        ]

    def test_text_copied_exactly(self):
        """Surrounding whitespace is kept; IDs must match source keys."""
        link = MandatoryLink(id=" L1", product_id="P1 ", product_name="  Widget  ", status="Mandatory ")

        row = to_mandatory_rows([link])[0]

        assert row == Row(id=" L1", name="  Widget  ", product_id="P1 ", status="Mandatory ")
        assert compute_unlink_targets([row]).link_ids == [" L1"]

    def test_null_link_fields_become_blank(self):
        """Unsaved links arrive with a null id."""
        link = MandatoryLink(id=None, product_id="P1", product_name="Widget", status=None)

        assert to_mandatory_rows([link]) == [Row(id="", name="Widget", product_id="P1", status="")]


class TestModeSelection:
    """Tests for select_initial_mode() / build_initial_rows()"""

    def test_links_present_selects_mandatory(self, sample_links):
        assert select_initial_mode(sample_links) == ViewMode.MANDATORY

    def test_no_links_selects_all(self):
        assert select_initial_mode([]) == ViewMode.ALL

    def test_initial_rows_with_links(self, sample_products, sample_links):
        """Should show the mandatory rows."""
        rows = build_initial_rows(sample_products, sample_links)

        assert rows == [Row(id="L1", name="Widget", product_id="P1", status="Mandatory")]

    def test_initial_rows_without_links(self, widget):
        """Should show the whole catalog."""
        rows = build_initial_rows([widget], [])

        assert rows == [Row(id="", name="Widget", product_id="P1", status="")]


class TestFiltering:
    """Tests for build_catalog_view() / build_view()"""

    def test_catalog_view_excludes_linked_products(self, sample_products, sample_links):
        """Widget is linked, so only Gadget remains."""
        rows = build_catalog_view(sample_products, sample_links)

        assert rows == [Row(id="", name="Gadget", product_id="P2", status="")]

    def test_catalog_view_never_contains_linked_ids(self):
        """No row may reference a linked product."""
        products = [Product(id=f"P{i}", name=f"Product {i}") for i in range(50)]
        links = [
            MandatoryLink(id=f"L{i}", product_id=f"P{i}", product_name=f"Product {i}")
            for i in range(0, 50, 3)
        ]

        rows = build_catalog_view(products, links)

        linked = {link.product_id for link in links}
        assert not [r for r in rows if r.product_id in linked]
        assert len(rows) == 50 - len(links)

    def test_catalog_view_keeps_catalog_order(self):
        products = [Product(id=pid, name=pid) for pid in ["C", "A", "B"]]
        links = [MandatoryLink(id="L1", product_id="A")]

        rows = build_catalog_view(products, links)

        assert [r.product_id for r in rows] == ["C", "B"]

    def test_mandatory_view_matches_projection(self, sample_links):
        assert build_mandatory_view(sample_links) == to_mandatory_rows(sample_links)

    def test_build_view_all_is_idempotent(self, sample_products, sample_links):
        """Same inputs, same rows."""
        first = build_view(sample_products, sample_links, ViewMode.ALL)
        second = build_view(sample_products, sample_links, ViewMode.ALL)

        assert first == second

    def test_toggle_round_trip_reproduces_mandatory_rows(self, sample_products, sample_links):
        """MANDATORY -> ALL -> MANDATORY gives the original rows back."""
        original = build_view(sample_products, sample_links, ViewMode.MANDATORY)

        build_view(sample_products, sample_links, ViewMode.ALL)
        restored = build_view(sample_products, sample_links, ViewMode.MANDATORY)

        assert restored == original == to_mandatory_rows(sample_links)

    def test_build_view_does_not_touch_inputs(self, sample_products, sample_links):
        products = list(sample_products)
        links = list(sample_links)

        build_view(products, links, ViewMode.ALL)

        assert products == list(sample_products)
        assert links == list(sample_links)


class TestOrphanRows:
    """Tests for drop_orphan_rows()"""

    def test_drops_rows_with_unknown_product(self, sample_products):
        rows = [
            Row(id="L1", name="Widget", product_id="P1", status="Mandatory"),
            Row(id="L9", name="Ghost", product_id="P9", status="Mandatory"),
        ]

        kept = drop_orphan_rows(rows, sample_products)

        assert [r.id for r in kept] == ["L1"]

    def test_keeps_consistent_rows(self, sample_products, sample_links):
        rows = to_mandatory_rows(sample_links)

        assert drop_orphan_rows(rows, sample_products) == rows


class TestBrands:
    """Tests for filter_products_by_brand() / list_brands()"""

    def test_filter_by_brand(self, sample_products):
        assert [p.id for p in filter_products_by_brand(sample_products, "Globex")] == ["P2"]

    def test_empty_brand_returns_all(self, sample_products):
        assert filter_products_by_brand(sample_products, None) == list(sample_products)

    def test_list_brands_sorted_and_distinct(self):
        products = [
            Product(id="1", name="a", brand="Zeta"),
            Product(id="2", name="b", brand="Acme"),
            Product(id="3", name="c", brand="Zeta"),
            Product(id="4", name="d", brand=None),
        ]

        assert list_brands(products) == ["Acme", "Zeta"]


class TestDeltas:
    """Tests for compute_link_targets() / compute_unlink_targets()"""

    def test_link_targets_collect_product_ids(self, sample_products):
        rows = to_catalog_rows(sample_products)

        targets = compute_link_targets(rows, "Recommended")

        assert targets.product_ids == ["P1", "P2"]
        assert targets.status == "Recommended"

    def test_link_targets_empty_selection(self):
        targets = compute_link_targets([], "Mandatory")

        assert targets.product_ids == []
        assert targets.is_empty

    def test_unlink_targets_collect_link_ids(self, sample_links):
        targets = compute_unlink_targets(to_mandatory_rows(sample_links))

        assert targets.link_ids == ["L1"]

    @pytest.mark.parametrize("blank_id", ["", None])
    def test_unlink_targets_skip_unsaved_rows(self, blank_id):
        rows = [
            Row(id="L1", name="Widget", product_id="P1", status="Mandatory"),
            Row(id=blank_id or "", name="Gadget", product_id="P2", status="Mandatory"),
        ]

        targets = compute_unlink_targets(rows)

        assert targets.link_ids == ["L1"]

    def test_unlink_targets_all_unsaved_is_empty(self):
        rows = [Row(id="", name="Widget", product_id="P1")]

        assert compute_unlink_targets(rows).is_empty
