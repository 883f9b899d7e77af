# sdk/storefront.py
"""The storefront view: catalog and account loading plus the purchase flow.

One ``Storefront`` lives as long as the screen showing it. ``mount`` runs the
two loaders side by side, ``purchase`` can be called any number of times,
even concurrently, and ``unmount`` discards account state so that late
responses have nothing to write to.
"""
import asyncio
import logging
from typing import List, Optional

from sdk.booststore import AsyncStoreClient
from sdk.errors import AccountUnavailable, CatalogUnavailable, PurchaseTransportError
from sdk.models import AccountState, BoostItem, PurchaseAccepted, PurchaseOutcome
from sdk.notifications import NotificationLevel, Notifier
from sdk.state import AccountStore, LoadState, PurchasePatch, ViewPhase

logger = logging.getLogger(__name__)

PURCHASE_SUCCESS_MESSAGE = "Purchase was successful!"
PURCHASE_REJECTED_MESSAGE = "The store declined this purchase."
PURCHASE_TRANSPORT_MESSAGE = "Could not reach the store. Please try again."
CATALOG_ERROR_MESSAGE = "Failed to load boost cards."


class Storefront:
    def __init__(self, client: AsyncStoreClient, notifier: Notifier):
        self.client = client
        self.notifier = notifier
        self.catalog: List[BoostItem] = []
        self.account = AccountStore()
        self.loading = LoadState()
        self.error: Optional[str] = None
        self._mounted = False

    @property
    def phase(self) -> ViewPhase:
        return self.loading.phase

    @property
    def account_state(self) -> Optional[AccountState]:
        return self.account.state

    # ---------------------------
    # Lifecycle
    # ---------------------------
    async def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        await asyncio.gather(self.load_catalog(), self.load_account())

    def unmount(self) -> None:
        self.account.close()

    # ---------------------------
    # Loaders
    # ---------------------------
    async def load_catalog(self) -> None:
        try:
            items = await self.client.fetch_catalog()
        except CatalogUnavailable as e:
            logger.error("Error fetching boost cards: %s", e)
            self.error = CATALOG_ERROR_MESSAGE
            self.loading.catalog_failed()
            return
        logger.info("Fetched %d boost cards", len(items))
        self.catalog = items
        self.loading.catalog_succeeded()

    async def load_account(self) -> None:
        if not self.client.has_session:
            logger.debug("no session; skipping account fetch")
            self.loading.account_done()
            return
        try:
            snapshot = await self.client.fetch_account()
        except AccountUnavailable as e:
            logger.warning("Error fetching user data: %s", e)
        else:
            self.account.load(snapshot)
        self.loading.account_done()

    # ---------------------------
    # Purchase
    # ---------------------------
    def price_of(self, item_id: str) -> int:
        for item in self.catalog:
            if item.id == item_id:
                return item.price
        return 0

    async def purchase(self, item_id: str) -> Optional[PurchaseOutcome]:
        """Buy one unit of ``item_id``.

        Returns the server's verdict, or ``None`` when the request never
        completed. Local state changes only for an accepted purchase.
        """
        try:
            outcome = await self.client.purchase(item_id)
        except PurchaseTransportError as e:
            logger.warning("%s", e)
            self.notifier.notify(PURCHASE_TRANSPORT_MESSAGE, NotificationLevel.WARNING)
            return None

        if isinstance(outcome, PurchaseAccepted):
            # price is read now, after the await, from the latest catalog
            debit = outcome.debited if outcome.debited is not None else self.price_of(item_id)
            self.account.apply(PurchasePatch(item_id=item_id, debit=debit))
            logger.info("purchased %s for %d coins", item_id, debit)
            self.notifier.notify(PURCHASE_SUCCESS_MESSAGE, NotificationLevel.SUCCESS)
        else:
            logger.info("purchase of %s rejected (%d): %s", item_id, outcome.status_code, outcome.reason)
            self.notifier.notify(PURCHASE_REJECTED_MESSAGE, NotificationLevel.ERROR)
        return outcome
