"""Payment transaction models."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from .common import AdminModel, QueryFilters, SortOrder

TransactionStatus = Literal["PENDING", "SUCCESS", "FAILED"]
NetworkProvider = Literal["MTN", "VOD", "AIR"]
TransactionSortField = Literal[
    "created_at", "updated_at", "amount", "status", "network", "customer_number"
]


class Transaction(AdminModel):
    transaction_id: str = Field(..., alias="transactionId")
    customer_number: str = Field(..., alias="customerNumber")
    network: NetworkProvider
    amount: float
    payment_status: TransactionStatus = Field(..., alias="paymentStatus")
    date_time: datetime = Field(..., alias="dateTime")


class TransactionFilters(QueryFilters):
    status: Optional[TransactionStatus] = None
    customer_number: Optional[str] = Field(None, alias="customerNumber")
    network: Optional[NetworkProvider] = None
    min_amount: Optional[float] = Field(None, alias="minAmount", ge=0)
    max_amount: Optional[float] = Field(None, alias="maxAmount", ge=0)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    sort_by: Optional[TransactionSortField] = Field(None, alias="sortBy")
    sort_order: Optional[SortOrder] = Field(None, alias="sortOrder")

    @model_validator(mode="after")
    def _check_amount_range(self) -> "TransactionFilters":
        if (
            self.min_amount is not None
            and self.max_amount is not None
            and self.min_amount > self.max_amount
        ):
            raise ValueError("minAmount must not exceed maxAmount")
        return self


__all__ = [
    "NetworkProvider",
    "Transaction",
    "TransactionFilters",
    "TransactionStatus",
]
