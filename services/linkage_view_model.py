"""
Mandatory products linkage view model.

Holds the current account snapshot and view state, regenerates the
displayed rows on every transition, and turns collaborator failures
into stored errors plus a toast. Nothing raised by a collaborator
escapes to the display layer.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional
import structlog

from config.settings import settings
from models.linkage import (
    AccountSnapshot,
    MandatoryLink,
    NotificationKind,
    Product,
    Row,
    ViewMode,
    ViewState,
)
from services.collaborators import (
    DataSource,
    LinkService,
    LogNotifier,
    MetadataProvider,
    Notifier,
    SettingsStatusProvider,
)
from services.linkage_view import (
    build_initial_rows,
    build_view,
    compute_link_targets,
    compute_unlink_targets,
    drop_orphan_rows,
    filter_products_by_brand,
    list_brands,
    select_initial_mode,
)
from exceptions import (
    AppError,
    EmptySelectionError,
    InvalidProductStatusError,
    LoadFailureError,
    MutationFailureError,
    SelectionModeError,
)

logger = structlog.get_logger(__name__)

SUCCESS_TITLE = "Success"
ERROR_TITLE = "Warning"
LINKED_MESSAGE = "All products linked"
UNLINKED_MESSAGE = "Selected products removed"


class ProductLinkageViewModel:
    """
    View model behind the "link mandatory products" widget.

    State is three immutable values (snapshot, state, rows) that are
    replaced, never edited. Handlers run one at a time; busy is True
    only while a collaborator call is in flight.
    """

    def __init__(
        self,
        account_id: str,
        data_source: DataSource,
        link_service: LinkService,
        status_provider: Optional[MetadataProvider] = None,
        notifier: Optional[Notifier] = None,
        default_status: Optional[str] = None
    ):
        self.account_id = account_id
        self.data_source = data_source
        self.link_service = link_service
        self.status_provider = status_provider or SettingsStatusProvider()
        self.notifier = notifier or LogNotifier()

        self.snapshot = AccountSnapshot.empty()
        self.state = ViewState(
            mode=ViewMode.ALL,
            selected_status=default_status or settings.default_product_status
        )
        self.rows: list[Row] = []
        self.status_options: list[str] = []
        self.busy = False
        self.error: Optional[AppError] = None

    # ===================
    # READ-ONLY VIEWS
    # ===================

    @property
    def mode(self) -> ViewMode:
        return self.state.mode

    @property
    def selected_status(self) -> str:
        return self.state.selected_status

    @property
    def products(self) -> tuple[Product, ...]:
        return self.snapshot.products

    @property
    def links(self) -> tuple[MandatoryLink, ...]:
        return self.snapshot.links

    @property
    def account_name(self) -> str:
        """Account name, or empty before a successful load."""
        return self.snapshot.account.name if self.snapshot.account else ""

    @property
    def showing_all_products(self) -> bool:
        return self.state.mode == ViewMode.ALL

    def brands(self) -> list[str]:
        """Brands available in the loaded catalog."""
        return list_brands(self.snapshot.products)

    def products_for_brand(self, brand: Optional[str]) -> list[Product]:
        """Catalog products of one brand (all when brand is empty)."""
        return filter_products_by_brand(self.snapshot.products, brand)

    # ===================
    # LOADING
    # ===================

    def load(self) -> list[Row]:
        """
        Fetch a fresh snapshot and reset the view for it.

        Mode is recomputed from the links. On failure the snapshot is
        cleared and no rows are shown.

        Returns:
            The rows now displayed
        """
        logger.info("loading_snapshot", account_id=self.account_id)

        with self._working("load"):
            try:
                snapshot = self.data_source.fetch(self.account_id)
            except Exception as e:
                logger.error(
                    "load_failed",
                    account_id=self.account_id,
                    error=str(e),
                    error_type=type(e).__name__
                )
                self._apply_snapshot(AccountSnapshot.empty())
                self._report(LoadFailureError(self.account_id, _message_for(e)))
                return self.rows

        self._apply_snapshot(snapshot)

        logger.info(
            "snapshot_loaded",
            account_id=self.account_id,
            products=len(snapshot.products),
            links=len(snapshot.links),
            mode=self.state.mode.value
        )

        return self.rows

    def load_status_options(self) -> list[str]:
        """
        Fetch the valid statuses.

        An empty result or a failure leaves the status unconstrained.
        With options known, the selected status is moved to the first
        option if it is not one of them.
        """
        try:
            options = list(self.status_provider.get_status_options() or [])
        except Exception as e:
            logger.warning(
                "status_options_unavailable",
                error=str(e),
                error_type=type(e).__name__
            )
            options = []

        self.status_options = options

        if options and self.state.selected_status not in options:
            logger.info(
                "selected_status_reset",
                previous=self.state.selected_status,
                status=options[0]
            )
            self.state = self.state.model_copy(update={"selected_status": options[0]})

        return self.status_options

    # ===================
    # VIEW STATE
    # ===================

    def set_mode(self, mode: ViewMode) -> list[Row]:
        """
        Switch between the mandatory and the catalog view.

        Only the rows are regenerated; products and links are untouched.
        """
        mode = ViewMode(mode)
        self.state = self.state.model_copy(update={"mode": mode})
        self.rows = self._render()

        logger.debug("mode_changed", mode=mode.value, rows=len(self.rows))

        return self.rows

    def toggle_all_products(self, checked: bool) -> list[Row]:
        """Checkbox handler: checked shows the catalog."""
        return self.set_mode(ViewMode.ALL if checked else ViewMode.MANDATORY)

    def select_status(self, status: str) -> bool:
        """
        Set the status used for the next link.

        Returns:
            True if accepted; False (and reported) if not a known option
        """
        if self.status_options and status not in self.status_options:
            self._report(InvalidProductStatusError(status, self.status_options))
            return False

        self.state = self.state.model_copy(update={"selected_status": status})
        logger.debug("status_selected", status=status)
        return True

    # ===================
    # MUTATIONS
    # ===================

    def link(self, selected_rows: Iterable[Row]) -> bool:
        """
        Link the selected catalog rows with the selected status.

        Returns:
            True if the new links were applied
        """
        if self._in_flight("link"):
            return False

        if self.state.mode != ViewMode.ALL:
            self._report(SelectionModeError("link", self.state.mode.value, ViewMode.ALL.value))
            return False

        targets = compute_link_targets(selected_rows, self.state.selected_status)
        if targets.is_empty:
            self._report(EmptySelectionError("link"))
            return False

        logger.info(
            "linking_products",
            account_id=self.account_id,
            count=len(targets.product_ids),
            status=targets.status
        )

        with self._working("link"):
            try:
                result = self.link_service.link(
                    self.account_id, targets.status, targets.product_ids
                )
            except Exception as e:
                return self._mutation_failed("link", e)

        return self._apply_mutation("link", result, LINKED_MESSAGE)

    def unlink(self, selected_rows: Iterable[Row]) -> bool:
        """
        Remove the selected mandatory links.

        Returns:
            True if the removal was applied
        """
        if self._in_flight("unlink"):
            return False

        if self.state.mode != ViewMode.MANDATORY:
            self._report(SelectionModeError("unlink", self.state.mode.value, ViewMode.MANDATORY.value))
            return False

        targets = compute_unlink_targets(selected_rows)
        if targets.is_empty:
            self._report(EmptySelectionError("unlink"))
            return False

        logger.info(
            "unlinking_products",
            account_id=self.account_id,
            count=len(targets.link_ids)
        )

        with self._working("unlink"):
            try:
                result = self.link_service.unlink(self.account_id, targets.link_ids)
            except Exception as e:
                return self._mutation_failed("unlink", e)

        return self._apply_mutation("unlink", result, UNLINKED_MESSAGE)

    # ===================
    # HELPERS
    # ===================

    @contextmanager
    def _working(self, operation: str) -> Iterator[None]:
        """Hold the busy flag for the duration of a collaborator call."""
        self.busy = True
        logger.debug("operation_start", operation=operation)
        try:
            yield
        finally:
            self.busy = False
            logger.debug("operation_complete", operation=operation)

    def _render(self) -> list[Row]:
        rows = build_view(self.snapshot.products, self.snapshot.links, self.state.mode)
        return drop_orphan_rows(rows, self.snapshot.products)

    def _apply_snapshot(self, snapshot: AccountSnapshot) -> None:
        self.snapshot = snapshot
        self.state = self.state.model_copy(update={"mode": select_initial_mode(snapshot.links)})
        self.rows = drop_orphan_rows(
            build_initial_rows(snapshot.products, snapshot.links),
            snapshot.products
        )
        self.error = None

    def _apply_mutation(self, operation: str, result, success_message: str) -> bool:
        if not result.ok:
            logger.warning(
                f"{operation}_rejected",
                account_id=self.account_id,
                message=result.message
            )
            self._report(MutationFailureError(operation, result.message or "Error"))
            return False

        # Mode is kept; rows are re-derived from the returned links
        self.snapshot = self.snapshot.with_links(result.links)
        self.rows = self._render()
        self.error = None

        logger.info(
            f"{operation}_applied",
            account_id=self.account_id,
            links=len(self.snapshot.links),
            rows=len(self.rows)
        )

        self._notify(NotificationKind.SUCCESS, SUCCESS_TITLE, success_message)
        return True

    def _mutation_failed(self, operation: str, e: Exception) -> bool:
        logger.error(
            f"{operation}_failed",
            account_id=self.account_id,
            error=str(e),
            error_type=type(e).__name__
        )
        self._report(MutationFailureError(operation, _message_for(e)))
        return False

    def _report(self, error: AppError) -> None:
        self.error = error
        self._notify(NotificationKind.ERROR, ERROR_TITLE, error.message)

    def _notify(self, kind: NotificationKind, title: str, message: str) -> None:
        try:
            self.notifier.show(kind, title, message)
        except Exception as e:
            # Fire-and-forget
            logger.error(
                "toast_failed",
                kind=kind.value,
                title=title,
                error=str(e),
                error_type=type(e).__name__
            )

    def _in_flight(self, operation: str) -> bool:
        if not self.busy:
            return False
        logger.warning("request_in_flight", operation=operation, account_id=self.account_id)
        return True


def _message_for(e: Exception) -> str:
    if isinstance(e, AppError):
        return e.message
    return str(e) or type(e).__name__


def create_linkage_view_model(account_id: str, **kwargs) -> ProductLinkageViewModel:
    """
    Build a view model backed by Supabase.

    Keyword arguments are passed through to ProductLinkageViewModel and
    override the defaults.
    """
    from integrations.supabase_linkage import SupabaseLinkageGateway

    gateway = SupabaseLinkageGateway()
    kwargs.setdefault("data_source", gateway)
    kwargs.setdefault("link_service", gateway)
    return ProductLinkageViewModel(account_id, **kwargs)
