"""Dashboard statistics returned by ``/admin/dashboard/stats``."""

from datetime import datetime
from typing import List

from pydantic import Field

from .audition import PaymentStatus
from .common import AdminModel


class CountWithChange(AdminModel):
    count: int
    change: float = Field(0, description="Percentage change against the previous period.")


class RevenueWithChange(AdminModel):
    amount: float
    change: float = 0


class TodayAuditions(CountWithChange):
    yesterday_count: int = Field(0, alias="yesterdayCount")


class DailyCount(AdminModel):
    date: str
    count: int


class TransactionStatusCounts(AdminModel):
    successful: int = 0
    pending: int = 0
    failed: int = 0


class RecentAudition(AdminModel):
    id: str
    name: str
    age: int
    msisdn: str
    status: PaymentStatus
    processing_id: str = Field(..., alias="processingId")
    created_at: datetime = Field(..., alias="createdAt")


class DashboardStats(AdminModel):
    total_auditions: int = Field(..., alias="totalAuditions")
    pending_payments: int = Field(..., alias="pendingPayments")
    successful_transactions: CountWithChange = Field(..., alias="successfulTransactions")
    total_revenue: RevenueWithChange = Field(..., alias="totalRevenue")
    active_users: int = Field(..., alias="activeUsers")
    today_auditions: TodayAuditions = Field(..., alias="todayAuditions")
    weekly_auditions_data: List[DailyCount] = Field(
        default_factory=list, alias="weeklyAuditionsData"
    )
    transaction_status_counts: TransactionStatusCounts = Field(
        default_factory=TransactionStatusCounts, alias="transactionStatusCounts"
    )
    recent_auditions: List[RecentAudition] = Field(
        default_factory=list, alias="recentAuditions"
    )


__all__ = [
    "CountWithChange",
    "DailyCount",
    "DashboardStats",
    "RecentAudition",
    "RevenueWithChange",
    "TodayAuditions",
    "TransactionStatusCounts",
]
