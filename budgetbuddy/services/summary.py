from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..records import Expense

MONTHLY_BUDGET = 4000.0
RECENT_COUNT = 3


@dataclass
class DashboardSummary:
    total_monthly: float = 0.0
    budget_remaining: float = MONTHLY_BUDGET
    monthly_budget: float = MONTHLY_BUDGET
    total_expenses: int = 0
    category_totals: Dict[str, float] = field(default_factory=dict)
    recent_transactions: List[Expense] = field(default_factory=list)
    previous_month_total: float = 0.0
    month_over_month_change: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "totalMonthly": round(self.total_monthly, 2),
            "budgetRemaining": round(self.budget_remaining, 2),
            "monthlyBudget": self.monthly_budget,
            "totalExpenses": self.total_expenses,
            "categoryTotals": {k: round(v, 2) for k, v in self.category_totals.items()},
            "recentTransactions": [e.to_dict() for e in self.recent_transactions],
            "previousMonthTotal": round(self.previous_month_total, 2),
            "monthOverMonthChange": (
                round(self.month_over_month_change, 1)
                if self.month_over_month_change is not None
                else None
            ),
        }


def in_month(expense: Expense, year: int, month: int) -> bool:
    return expense.date.year == year and expense.date.month == month


def previous_month(today: date):
    prev_last = today.replace(day=1) - timedelta(days=1)
    return prev_last.year, prev_last.month


def category_totals(expenses: Sequence[Expense]) -> Dict[str, float]:
    totals = defaultdict(float)
    for e in expenses:
        totals[e.category] += e.amount
    return dict(totals)


def summarize(
    expenses: Sequence[Expense],
    today: Optional[date] = None,
    monthly_budget: float = MONTHLY_BUDGET,
) -> DashboardSummary:
    """Dashboard figures for the calendar month containing ``today``.

    Months are matched on the expense's spend date, never its creation
    time. ``expenses`` is expected in storage order (newest created first);
    the recent-transactions list is simply its head.
    """
    today = today or date.today()
    monthly = [e for e in expenses if in_month(e, today.year, today.month)]
    total = sum(e.amount for e in monthly)

    prev_year, prev_month = previous_month(today)
    prev_total = sum(e.amount for e in expenses if in_month(e, prev_year, prev_month))
    change = (total - prev_total) / prev_total * 100 if prev_total else None

    return DashboardSummary(
        total_monthly=total,
        budget_remaining=monthly_budget - total,
        monthly_budget=monthly_budget,
        total_expenses=len(monthly),
        category_totals=category_totals(monthly),
        recent_transactions=list(expenses[:RECENT_COUNT]),
        previous_month_total=prev_total,
        month_over_month_change=change,
    )
