import asyncio
from typing import Dict, Any, List

from .core import BoostIn, _make_boost_dict

# This file holds all the in-memory data stores and concurrency locks.

CATALOG: List[Dict[str, Any]] = []
ACCOUNTS: Dict[str, Dict[str, Any]] = {}
IDEMPOTENCY: Dict[str, Dict[str, Any]] = {}
_LOCKS: Dict[str, asyncio.Lock] = {}

DEMO_SESSION = "demo-session"
DEMO_COINS = 100

SEED_BOOSTS = [
    BoostIn(id="xp-boost", title="Double XP (1h)", image_url="/boosts/xp.png", price=30),
    BoostIn(id="streak-shield", title="Streak Shield", image_url="/boosts/shield.png", price=50),
    BoostIn(id="mining-drill", title="Mining Drill", image_url="/boosts/drill.png", price=120),
]

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]

def seed() -> None:
    CATALOG.clear()
    ACCOUNTS.clear()
    IDEMPOTENCY.clear()
    _LOCKS.clear()
    CATALOG.extend(_make_boost_dict(b) for b in SEED_BOOSTS)
    ACCOUNTS[DEMO_SESSION] = {"coins": DEMO_COINS, "boosts": {}}

seed()
