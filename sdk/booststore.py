# sdk/booststore.py
import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx
import requests
from pydantic import ValidationError
from rich import print

from sdk.config import settings
from sdk.errors import AccountUnavailable, CatalogUnavailable, PurchaseTransportError
from sdk.models import (
    AccountState, BoostItem, PurchaseAccepted, PurchaseOutcome,
    PurchaseReceipt, PurchaseRejected,
)

logger = logging.getLogger(__name__)


def _make_idempotency_key(provided: Optional[str]) -> str:
    return provided if provided else uuid.uuid4().hex


def _auth_headers(session_token: Optional[str]) -> Dict[str, str]:
    if not session_token:
        return {}
    return {"Authorization": f"Bearer {session_token}"}


def _error_reason(r: httpx.Response) -> Optional[str]:
    # FastAPI error bodies look like {"detail": "..."}; anything else is opaque
    try:
        body = r.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return None


class AsyncStoreClient:
    """Async client used by the storefront view.

    Each call maps onto exactly one HTTP request. Failures are raised as
    :mod:`sdk.errors` exceptions; a purchase the server declines is returned
    as :class:`PurchaseRejected` instead.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.session_token = session_token if session_token is not None else settings.session_token
        self.http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=_auth_headers(self.session_token),
            timeout=timeout if timeout is not None else settings.timeout,
            transport=transport,
        )

    @property
    def has_session(self) -> bool:
        return bool(self.session_token)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "AsyncStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # Catalog
    async def fetch_catalog(self) -> List[BoostItem]:
        try:
            r = await self.http.get("/catalog")
            r.raise_for_status()
            payload = r.json()
        except httpx.HTTPError as e:
            raise CatalogUnavailable(f"catalog request failed: {e}") from e
        except ValueError as e:
            raise CatalogUnavailable("catalog response is not valid JSON") from e

        if not isinstance(payload, list):
            raise CatalogUnavailable("catalog response is not a list")
        try:
            return [BoostItem.model_validate(item) for item in payload]
        except ValidationError as e:
            # never hand back a partially valid catalog
            raise CatalogUnavailable(f"catalog contains an invalid item: {e}") from e

    # Account
    async def fetch_account(self) -> AccountState:
        if not self.has_session:
            raise AccountUnavailable("no session")
        try:
            r = await self.http.get("/account")
            r.raise_for_status()
            return AccountState.model_validate(r.json())
        except httpx.HTTPError as e:
            raise AccountUnavailable(f"account request failed: {e}") from e
        except ValueError as e:
            raise AccountUnavailable(f"account response is malformed: {e}") from e

    # Purchase
    async def purchase(self, item_id: str, idempotency_key: Optional[str] = None) -> PurchaseOutcome:
        headers = {"Idempotency-Key": _make_idempotency_key(idempotency_key)}
        try:
            r = await self.http.post("/purchase", json={"itemId": item_id}, headers=headers)
        except httpx.HTTPError as e:
            raise PurchaseTransportError(item_id, str(e) or type(e).__name__, e) from e

        if not r.is_success:
            return PurchaseRejected(item_id=item_id, status_code=r.status_code, reason=_error_reason(r))

        try:
            body = r.json()
        except ValueError as e:
            raise PurchaseTransportError(item_id, "unreadable purchase receipt", e) from e
        try:
            receipt = PurchaseReceipt.model_validate(body)
        except ValidationError:
            # accepted all the same; the debit falls back to the catalog price
            logger.warning("purchase of %s accepted with an unexpected receipt: %r", item_id, body)
            return PurchaseAccepted(item_id=item_id)
        return PurchaseAccepted(
            item_id=item_id,
            debited=receipt.debited,
            coins=receipt.coins,
            owned=receipt.owned,
        )


class StoreClient:
    """Blocking client for scripts and the command line."""

    def __init__(self, base_url: Optional[str] = None, session_token: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout if timeout is not None else settings.timeout
        token = session_token if session_token is not None else settings.session_token
        self.session.headers.update(_auth_headers(token))

    def reset(self) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/reset", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list_boosts(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/catalog", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def view_account(self) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/account", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def top_up(self, amount: int) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/account/topup", json={"amount": amount}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def buy_boost(self, item_id: str, idempotency_key: Optional[str] = None) -> requests.Response:
        headers = {"Idempotency-Key": _make_idempotency_key(idempotency_key)}
        r = self.session.post(f"{self.base_url}/purchase", json={"itemId": item_id}, headers=headers, timeout=self.timeout)
        # no raise_for_status: callers inspect 402/404 themselves
        return r


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Boost store client")
    parser.add_argument("--base-url", default=None, help="Store API base URL")
    parser.add_argument("--session", default=None, help="Session token")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("catalog", help="List purchasable boosts")
    subparsers.add_parser("account", help="Show coin balance and owned boosts")

    buy = subparsers.add_parser("buy", help="Buy one boost")
    buy.add_argument("--item-id", required=True, help="Boost ID")

    topup = subparsers.add_parser("topup", help="Add coins to the account (demo backend)")
    topup.add_argument("--amount", type=int, required=True, help="Coins to add")

    subparsers.add_parser("reset", help="Re-seed the demo backend")

    args = parser.parse_args()
    c = StoreClient(base_url=args.base_url, session_token=args.session)

    if args.command == "catalog":
        print(c.list_boosts())
    elif args.command == "account":
        print(c.view_account())
    elif args.command == "buy":
        r = c.buy_boost(args.item_id)
        print(r.status_code, r.json())
    elif args.command == "topup":
        print(c.top_up(args.amount))
    elif args.command == "reset":
        print(c.reset())
