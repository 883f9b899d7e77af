# app/main.py
from fastapi import FastAPI, HTTPException, Header
from typing import Optional, Dict, Any, List

from .core import PurchaseRequest, TopupIn, _make_account_dict, _bearer_token
from .database import CATALOG, ACCOUNTS, IDEMPOTENCY, _get_lock, seed

app = FastAPI(title="boost-store (in-memory demo)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Helpers
# ---------------------------
def _require_session(authorization: Optional[str]) -> str:
    token = _bearer_token(authorization)
    if token is None or token not in ACCOUNTS:
        raise HTTPException(status_code=401, detail="not_authenticated")
    return token

def _find_boost(item_id: str) -> Optional[Dict[str, Any]]:
    for b in CATALOG:
        if b["id"] == item_id:
            return b
    return None

# ---------------------------
# Catalog
# ---------------------------
@app.get("/catalog")
async def list_catalog() -> List[Dict[str, Any]]:
    return CATALOG

# ---------------------------
# Account
# ---------------------------
@app.get("/account")
async def get_account(authorization: Optional[str] = Header(None)):
    token = _require_session(authorization)
    account = ACCOUNTS[token]
    return _make_account_dict(account["coins"], account["boosts"])

@app.post("/account/topup")
async def account_topup(payload: TopupIn, authorization: Optional[str] = Header(None)):
    token = _require_session(authorization)
    if payload.amount <= 0:
        raise HTTPException(status_code=400, detail="Amount must be positive")

    lock = _get_lock(f"account:{token}")
    await lock.acquire()

    try:
        account = ACCOUNTS[token]
        account["coins"] += payload.amount
        return _make_account_dict(account["coins"], account["boosts"])
    finally:
        lock.release()

# ---------------------------
# Purchase (single boost)
# ---------------------------
@app.post("/purchase")
async def purchase(
    req: PurchaseRequest,
    authorization: Optional[str] = Header(None),
    idempotency_key: Optional[str] = Header(None),
):
    token = _require_session(authorization)
    boost = _find_boost(req.item_id)
    if not boost:
        raise HTTPException(status_code=404, detail="boost not found")

    lock = _get_lock(f"account:{token}")
    await lock.acquire()

    try:
        # replays are checked under the lock
        replay_key = f"{token}:{idempotency_key}" if idempotency_key else None
        if replay_key is not None:
            prev = IDEMPOTENCY.get(replay_key)
            if prev is not None:
                return prev

        account = ACCOUNTS[token]
        price = boost["price"]
        if account["coins"] < price:
            raise HTTPException(status_code=402, detail="insufficient_funds")

        # Commit
        account["coins"] -= price
        owned = account["boosts"].get(req.item_id, 0) + 1
        account["boosts"][req.item_id] = owned

        receipt = {
            "itemId": req.item_id,
            "debited": price,
            "coins": account["coins"],
            "owned": owned,
        }
        if replay_key is not None:
            IDEMPOTENCY[replay_key] = receipt
        return receipt
    finally:
        lock.release()

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    seed()
    return {"status": "reset"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8085)
