# sdk/state.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from sdk.models import AccountState

logger = logging.getLogger(__name__)


# ---------------------------
# Account state cell
# ---------------------------
@dataclass(frozen=True)
class PurchasePatch:
    item_id: str
    debit: int
    count: int = 1


def reduce_account(state: Optional[AccountState], patch: PurchasePatch) -> Optional[AccountState]:
    """Apply ``patch`` as a delta on top of ``state`` and return the new state.

    With no account data loaded there is nothing to patch, so ``None`` stays
    ``None``. The input is never modified. The cached balance floors at 0: a
    debit larger than the balance means the local copy is stale, and the
    server's figure wins on the next load.
    """
    if state is None:
        return None
    boosts = dict(state.boosts)
    boosts[patch.item_id] = boosts.get(patch.item_id, 0) + patch.count
    coins = state.coins - patch.debit
    if coins < 0:
        logger.warning("debit of %d for %s exceeds cached balance %d; flooring at 0",
                       patch.debit, patch.item_id, state.coins)
        coins = 0
    return AccountState(coins=coins, boosts=boosts)


class AccountStore:
    """The one place account state lives and changes.

    ``load`` replaces the snapshot wholesale and is reserved for the account
    loader. Purchases go through ``apply``, which always reduces against the
    current value, never against a copy taken before an await. Patches that
    arrive before the first snapshot are held and replayed on top of it.
    """

    def __init__(self):
        self._state: Optional[AccountState] = None
        self._pending: List[PurchasePatch] = []
        self._closed = False
        self.revision = 0

    @property
    def state(self) -> Optional[AccountState]:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def load(self, snapshot: AccountState) -> bool:
        if self._closed:
            logger.debug("account snapshot arrived after unmount; dropped")
            return False
        state = snapshot
        for patch in self._pending:
            state = reduce_account(state, patch)
        self._pending.clear()
        self._state = state
        self.revision += 1
        return True

    def apply(self, patch: PurchasePatch) -> bool:
        if self._closed:
            logger.debug("purchase patch for %s arrived after unmount; dropped", patch.item_id)
            return False
        if self._state is None:
            logger.debug("no account snapshot yet; holding patch for %s", patch.item_id)
            self._pending.append(patch)
            return False
        self._state = reduce_account(self._state, patch)
        self.revision += 1
        return True

    def close(self) -> None:
        self._closed = True
        self._state = None
        self._pending.clear()


# ---------------------------
# Loading join
# ---------------------------
class ViewPhase(str, Enum):
    LOADING = "loading"
    ERROR_CATALOG = "error_catalog"
    READY = "ready"


class LoadState:
    # READY needs the catalog loaded and the account side settled;
    # a catalog failure is terminal.

    def __init__(self):
        self.phase = ViewPhase.LOADING
        self.catalog_loaded = False
        self.account_settled = False

    def _advance(self) -> None:
        if self.phase is ViewPhase.LOADING and self.catalog_loaded and self.account_settled:
            self.phase = ViewPhase.READY

    def catalog_succeeded(self) -> None:
        if self.phase is ViewPhase.ERROR_CATALOG:
            return
        self.catalog_loaded = True
        self._advance()

    def catalog_failed(self) -> None:
        self.phase = ViewPhase.ERROR_CATALOG

    def account_done(self) -> None:
        self.account_settled = True
        self._advance()
