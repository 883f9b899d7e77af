# sdk/render.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sdk.state import ViewPhase
from sdk.storefront import Storefront


@dataclass(frozen=True)
class MineralCard:
    image_url: str
    owned: int = 1


# Static collectibles; display only, never purchasable.
MINERALS: Tuple[MineralCard, ...] = tuple(
    MineralCard(f"/mineral/{name}.png")
    for name in (
        "c", "au", "as", "ba", "br", "ca", "cs", "fe", "mn-1",
        "p", "pd", "rh", "sb", "sn", "ti", "u", "zr",
    )
)


@dataclass(frozen=True)
class BoostRow:
    id: str
    title: str
    image_url: str
    price: int
    owned: int


@dataclass(frozen=True)
class StorefrontScreen:
    phase: ViewPhase
    error: Optional[str] = None
    coins: Optional[int] = None
    boosts: List[BoostRow] = field(default_factory=list)
    minerals: Tuple[MineralCard, ...] = ()


def render(view: Storefront) -> StorefrontScreen:
    if view.phase is ViewPhase.LOADING:
        return StorefrontScreen(phase=ViewPhase.LOADING)
    if view.phase is ViewPhase.ERROR_CATALOG:
        return StorefrontScreen(phase=ViewPhase.ERROR_CATALOG, error=view.error)

    account = view.account_state
    rows = [
        BoostRow(
            id=item.id,
            title=item.title,
            image_url=item.image_url,
            price=item.price,
            owned=account.owned(item.id) if account is not None else 0,
        )
        for item in view.catalog
    ]
    return StorefrontScreen(
        phase=ViewPhase.READY,
        coins=account.coins if account is not None else None,
        boosts=rows,
        minerals=MINERALS,
    )
