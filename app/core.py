from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any

class BoostIn(BaseModel):
    id: str
    title: str
    image_url: str
    price: int = Field(ge=0)

class PurchaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")

class TopupIn(BaseModel):
    amount: int

def _make_boost_dict(b: BoostIn) -> Dict[str, Any]:
    # wire shape of a catalog entry
    return {
        "id": b.id,
        "title": b.title,
        "imageUrl": b.image_url,
        "price": b.price,
    }

def _make_account_dict(coins: int, boosts: Dict[str, int]) -> Dict[str, Any]:
    return {"coins": coins, "boosts": dict(boosts)}

def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
