from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PRODUCT = "ciiready-r01"
DEFAULT_AMOUNT = 1900  # £19 in pence


class CreateIntentRequest(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    product: str = DEFAULT_PRODUCT
    amount: int = DEFAULT_AMOUNT

    @field_validator("product", mode="before")
    @classmethod
    def default_product(cls, value):
        return value or DEFAULT_PRODUCT

    @field_validator("amount", mode="before")
    @classmethod
    def default_amount(cls, value):
        # Only a positive whole number of pence overrides the list price
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        return DEFAULT_AMOUNT


class PaymentSuccessRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_intent_id: Optional[str] = Field(None, alias="paymentIntentId")
    email: Optional[str] = None
    name: Optional[str] = None
    product: str = DEFAULT_PRODUCT

    @field_validator("product", mode="before")
    @classmethod
    def default_product(cls, value):
        return value or DEFAULT_PRODUCT


class PurchaseRecord(BaseModel):
    """Row written to the ``purchases`` table."""

    email: str
    name: Optional[str] = None
    payment_intent_id: str
    product: str
    access_token: str
