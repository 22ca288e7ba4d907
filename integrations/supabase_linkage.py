"""
Supabase-backed data source and link service.

Tables:
    accounts            id, name
    products            id, name, brand, active
    mandatory_products  id, account_id, product_id, product_name, status

Table names come from settings.
"""

import structlog

from config import get_supabase_client
from config.settings import settings
from models.linkage import (
    Account,
    AccountSnapshot,
    MandatoryLink,
    MutationOutcome,
    MutationResult,
    Product,
)
from exceptions import (
    AccountNotFoundError,
    DatabaseError
)

logger = structlog.get_logger(__name__)

LINK_COLUMNS = "id, product_id, product_name, status"


class SupabaseLinkageGateway:
    """
    DataSource and LinkService over one Supabase client.

    Every mutation answers with the fresh link set for the account.
    """

    def __init__(self, client=None):
        self.db = client or get_supabase_client()
        self.accounts_table = settings.accounts_table
        self.products_table = settings.products_table
        self.links_table = settings.mandatory_products_table

    # ===================
    # READ OPERATIONS
    # ===================

    def fetch(self, account_id: str) -> AccountSnapshot:
        """
        Get the account, its active catalog and its mandatory links.

        Args:
            account_id: Account UUID

        Returns:
            AccountSnapshot

        Raises:
            AccountNotFoundError: If the account doesn't exist
            DatabaseError: If a query fails
        """
        logger.info("fetching_linkage_snapshot", account_id=account_id)

        account = self._get_account(account_id)

        try:
            result = (
                self.db.table(self.products_table)
                .select("id, name, brand")
                .eq("active", True)
                .order("name")
                .execute()
            )
            products = tuple(Product(**row) for row in result.data)
        except Exception as e:
            logger.error(
                "get_products_failed",
                account_id=account_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        links = self.get_links(account_id)

        logger.info(
            "linkage_snapshot_fetched",
            account_id=account_id,
            products=len(products),
            links=len(links)
        )

        return AccountSnapshot(account=account, products=products, links=tuple(links))

    def get_links(self, account_id: str) -> list[MandatoryLink]:
        """
        Get the mandatory links of an account, ordered by product name.

        Raises:
            DatabaseError: If the query fails
        """
        logger.debug("getting_mandatory_links", account_id=account_id)

        try:
            result = (
                self.db.table(self.links_table)
                .select(LINK_COLUMNS)
                .eq("account_id", account_id)
                .order("product_name")
                .execute()
            )
            return [MandatoryLink(**row) for row in result.data]

        except Exception as e:
            logger.error(
                "get_mandatory_links_failed",
                account_id=account_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def link(self, account_id: str, status: str, product_ids: list[str]) -> MutationResult:
        """
        Link products to the account as mandatory.

        Products already linked are skipped. If any product ID is unknown
        nothing is inserted and the outcome is ERROR.

        Args:
            account_id: Account UUID
            status: Status for the new links
            product_ids: Products to link

        Returns:
            MutationResult with the fresh links

        Raises:
            DatabaseError: If a query fails
        """
        logger.info(
            "linking_mandatory_products",
            account_id=account_id,
            count=len(product_ids),
            status=status
        )

        linked = {link.product_id for link in self.get_links(account_id)}
        # Dedupe, keep order
        wanted = [pid for pid in dict.fromkeys(product_ids) if pid not in linked]

        if wanted:
            try:
                result = (
                    self.db.table(self.products_table)
                    .select("id, name")
                    .in_("id", wanted)
                    .execute()
                )
                names = {row["id"]: row["name"] for row in result.data}
            except Exception as e:
                logger.error(
                    "link_product_lookup_failed",
                    account_id=account_id,
                    error=str(e)
                )
                raise DatabaseError("select", str(e))

            missing = [pid for pid in wanted if pid not in names]
            if missing:
                logger.warning(
                    "unknown_products_not_linked",
                    account_id=account_id,
                    product_ids=missing
                )
                return MutationResult(
                    outcome=MutationOutcome.ERROR,
                    links=self.get_links(account_id),
                    message=f"Unknown products: {', '.join(missing)}"
                )

            insert_data = [
                {
                    "account_id": account_id,
                    "product_id": pid,
                    "product_name": names[pid],
                    "status": status
                }
                for pid in wanted
            ]

            try:
                self.db.table(self.links_table).insert(insert_data).execute()
            except Exception as e:
                logger.error(
                    "link_mandatory_products_failed",
                    account_id=account_id,
                    error=str(e)
                )
                raise DatabaseError("insert", str(e))

        links = self.get_links(account_id)

        logger.info(
            "mandatory_products_linked",
            account_id=account_id,
            links=len(links)
        )

        return MutationResult(outcome=MutationOutcome.OK, links=links)

    def unlink(self, account_id: str, link_ids: list[str]) -> MutationResult:
        """
        Remove mandatory links from the account.

        Args:
            account_id: Account UUID
            link_ids: Mandatory link IDs to delete

        Returns:
            MutationResult with the fresh links

        Raises:
            DatabaseError: If the delete fails
        """
        logger.info(
            "unlinking_mandatory_products",
            account_id=account_id,
            count=len(link_ids)
        )

        if link_ids:
            try:
                (
                    self.db.table(self.links_table)
                    .delete()
                    .eq("account_id", account_id)
                    .in_("id", list(link_ids))
                    .execute()
                )
            except Exception as e:
                logger.error(
                    "unlink_mandatory_products_failed",
                    account_id=account_id,
                    error=str(e)
                )
                raise DatabaseError("delete", str(e))

        links = self.get_links(account_id)

        logger.info(
            "mandatory_products_unlinked",
            account_id=account_id,
            links=len(links)
        )

        return MutationResult(outcome=MutationOutcome.OK, links=links)

    # ===================
    # HELPERS
    # ===================

    def _get_account(self, account_id: str) -> Account:
        try:
            result = (
                self.db.table(self.accounts_table)
                .select("id, name")
                .eq("id", account_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_account_failed",
                account_id=account_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise AccountNotFoundError(account_id)

        return Account(**result.data[0])
