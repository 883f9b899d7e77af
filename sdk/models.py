# sdk/models.py
from dataclasses import dataclass
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BoostItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    image_url: str = Field(alias="imageUrl")
    price: int = Field(ge=0)


class AccountState(BaseModel):
    model_config = ConfigDict(frozen=True)

    coins: int = Field(ge=0)
    boosts: Dict[str, int] = Field(default_factory=dict)

    def owned(self, item_id: str) -> int:
        return self.boosts.get(item_id, 0)


class PurchaseReceipt(BaseModel):
    """Body of a 2xx /purchase response. Every field is optional on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    item_id: Optional[str] = Field(default=None, alias="itemId")
    debited: Optional[int] = Field(default=None, ge=0)
    coins: Optional[int] = None
    owned: Optional[int] = None


@dataclass(frozen=True)
class PurchaseAccepted:
    item_id: str
    debited: Optional[int] = None
    coins: Optional[int] = None
    owned: Optional[int] = None


@dataclass(frozen=True)
class PurchaseRejected:
    item_id: str
    status_code: int
    reason: Optional[str] = None


PurchaseOutcome = Union[PurchaseAccepted, PurchaseRejected]
