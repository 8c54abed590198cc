"""
Pydantic models for audition entries and their list filters.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .common import AdminModel, QueryFilters, SortOrder

PaymentStatus = Literal["PENDING", "PAID", "FAILED", "CANCELLED"]
SmsStatus = Literal["PENDING", "SENT", "DELIVERED", "FAILED"]
EntrySortField = Literal[
    "createdAt", "updatedAt", "name", "age", "region", "status", "msisdn"
]


class Audition(AdminModel):
    """Row of the auditions list."""

    id: str
    customer_number: str = Field(..., alias="customerNumber")
    name: str
    age: int
    region: str
    position: Optional[str] = None
    payment_status: PaymentStatus = Field(..., alias="paymentStatus")
    sms_sent_status: SmsStatus = Field(..., alias="smsSentStatus")
    date_time: datetime = Field(..., alias="dateTime")
    processing_id: Optional[str] = Field(None, alias="processingId")


class AuditionDetails(AdminModel):
    """Single audition including its payment."""

    audition_id: str = Field(..., alias="auditionId")
    name: str
    age: int
    region: str
    position: Optional[str] = None
    number: str = Field(..., description="Participant's mobile number.")
    payment_status: PaymentStatus = Field(..., alias="paymentStatus")
    amount: float
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    sms_status: SmsStatus = Field(..., alias="smsStatus")
    date_time: datetime = Field(..., alias="dateTime")
    processing_id: Optional[str] = Field(None, alias="processingId")


class EntryFilters(QueryFilters):
    status: Optional[PaymentStatus] = None
    sms_status: Optional[SmsStatus] = Field(None, alias="smsStatus")
    customer_number: Optional[str] = Field(None, alias="customerNumber")
    processing_id: Optional[str] = Field(None, alias="processingId")
    position: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    sort_by: Optional[EntrySortField] = Field(None, alias="sortBy")
    sort_order: Optional[SortOrder] = Field(None, alias="sortOrder")


__all__ = [
    "Audition",
    "AuditionDetails",
    "EntryFilters",
    "PaymentStatus",
    "SmsStatus",
]
