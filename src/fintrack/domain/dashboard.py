"""Dashboard and report view-model composition."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Sequence

from fintrack.database.base import TransactionRepository
from fintrack.domain.aggregation import (
    breakdown_by_category,
    breakdown_items,
    monthly_trend,
    recent_transactions,
    sum_amounts,
)
from fintrack.domain.entities import (
    DashboardSummary,
    ReportSummary,
    Transaction,
    TransactionKind,
)
from fintrack.domain.periods import filter_by_period, month_bounds, select_period
from fintrack.domain.session import Session
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

DASHBOARD_RECENT_LIMIT = 5
REPORT_RECENT_LIMIT = 10
TREND_MONTHS = 6


def _as_date(now: date) -> date:
    return now.date() if isinstance(now, datetime) else now


def build_dashboard(
    expenses: Sequence[Transaction],
    income: Sequence[Transaction],
    now: date,
    recent_limit: int = DASHBOARD_RECENT_LIMIT,
) -> DashboardSummary:
    """Compose the dashboard from fetched expense and income records."""
    now = _as_date(now)
    total_income = sum_amounts(income)
    total_expenses = sum_amounts(expenses)

    month_start, month_end = month_bounds(now)
    monthly_income = sum_amounts(filter_by_period(income, month_start, month_end))
    monthly_expenses = sum_amounts(filter_by_period(expenses, month_start, month_end))

    return DashboardSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        recent=tuple(recent_transactions(expenses, income, recent_limit)),
    )


def build_report(
    expenses: Sequence[Transaction],
    income: Sequence[Transaction],
    period: str,
    now: date,
) -> ReportSummary:
    """Compose the report for a named period.

    Totals, breakdowns and the recent list cover the period only; the trend
    always spans the last six months ending at ``now``.
    """
    now = _as_date(now)
    start, end = select_period(period, now)
    period_expenses = filter_by_period(expenses, start, end)
    period_income = filter_by_period(income, start, end)

    total_income = sum_amounts(period_income)
    total_expenses = sum_amounts(period_expenses)

    return ReportSummary(
        period=period,
        start_date=start,
        end_date=end,
        total_income=total_income,
        total_expenses=total_expenses,
        net=total_income - total_expenses,
        expense_breakdown=tuple(breakdown_items(breakdown_by_category(period_expenses))),
        income_breakdown=tuple(breakdown_items(breakdown_by_category(period_income))),
        trend=tuple(monthly_trend(expenses, income, now, TREND_MONTHS)),
        recent=tuple(
            recent_transactions(period_expenses, period_income, REPORT_RECENT_LIMIT)
        ),
        expense_count=len(period_expenses),
        income_count=len(period_income),
    )


class DashboardService:
    """Loads a user's records and builds dashboard and report view-models."""

    def __init__(self, repository: TransactionRepository, session: Session):
        """Initialize dashboard service.

        Args:
            repository: Record storage
            session: Signed-in user
        """
        self.repository = repository
        self.session = session

    def load_records(self) -> tuple[list[Transaction], list[Transaction]]:
        """Fetch expenses and income concurrently and wait for both.

        A failure in either fetch propagates; no partial result is returned.
        """
        user_id = self.session.user_id
        with ThreadPoolExecutor(max_workers=2) as pool:
            expenses_future = pool.submit(
                self.repository.list_records, user_id, TransactionKind.EXPENSE
            )
            income_future = pool.submit(
                self.repository.list_records, user_id, TransactionKind.INCOME
            )
            expenses = expenses_future.result()
            income = income_future.result()
        logger.debug(
            "Loaded %d expenses and %d income records for %s",
            len(expenses),
            len(income),
            user_id,
        )
        return expenses, income

    def dashboard(self, now: date) -> DashboardSummary:
        """Build the dashboard anchored on ``now``."""
        expenses, income = self.load_records()
        return build_dashboard(expenses, income, now)

    def report(self, period: str, now: date) -> ReportSummary:
        """Build the report for ``period`` anchored on ``now``."""
        # Reject unknown periods before touching the store.
        select_period(period, _as_date(now))
        expenses, income = self.load_records()
        return build_report(expenses, income, period, now)
