"""
Leave balance projections.

Balances are never stored: they are derived from the starting balances and
the append-only transaction history every time they are needed.
"""
import math
import re
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Tuple

from leave_tracker.core.config import settings
from leave_tracker.core.exceptions import InsufficientBalanceError
from leave_tracker.schemas.leave import EmployeeRecord, LeaveBalances, LeaveCategory, LeaveTransaction

_MM_YY = re.compile(r"^(\d{2})/(\d{2})$")


def default_baseline() -> date:
    return date(settings.leave.baseline_year, settings.leave.baseline_month, 1)


def months_since_baseline(as_of: date, baseline: Optional[date] = None) -> int:
    """Whole calendar months between the baseline month and ``as_of``. May be negative."""
    if baseline is None:
        baseline = default_baseline()
    return (as_of.year - baseline.year) * 12 + (as_of.month - baseline.month)


def parse_mm_yy(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Parse a ``MM/YY`` start label into ``(month, full_year)``.

    Returns None for blank input, any other shape, or a month outside 1-12.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return None
    match = _MM_YY.match(trimmed)
    if not match:
        return None
    month = int(match.group(1))
    if month < 1 or month > 12:
        return None
    return month, 2000 + int(match.group(2))


def _quantity(value) -> float:
    try:
        days = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(days) or math.isinf(days):
        return 0.0
    return days


def _transaction_year(tx: LeaveTransaction, as_of: date) -> Optional[int]:
    if not tx.date_iso:
        return as_of.year
    try:
        return datetime.fromisoformat(tx.date_iso).year
    except (TypeError, ValueError):
        return None


def _round_balance(value: float) -> float:
    # Stored records may carry inf or nan
    if not math.isfinite(value):
        return 0.0
    floored = max(0.0, value)
    return float(Decimal(str(floored)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def get_balances(
    employee: EmployeeRecord,
    as_of: Optional[date] = None,
    baseline: Optional[date] = None,
) -> LeaveBalances:
    """
    Compute the five category balances of ``employee`` at ``as_of``.

    Annual leave is the starting balance plus accrual for every whole month
    since the baseline, minus all annual transactions ever taken. The other
    categories reset each calendar year, so only transactions dated in
    ``as_of``'s year are deducted. Results are floored at zero and rounded
    to one decimal place.
    """
    if as_of is None:
        as_of = date.today()

    months = max(0, months_since_baseline(as_of, baseline))
    accrued = employee.annual_accrual_per_month * months

    taken: Dict[LeaveCategory, float] = {category: 0.0 for category in LeaveCategory}
    for tx in employee.transactions:
        days = _quantity(tx.days)
        if not days:
            continue
        try:
            category = LeaveCategory(tx.type)
        except ValueError:
            continue

        if category is LeaveCategory.ANNUAL:
            taken[category] += days
        elif _transaction_year(tx, as_of) == as_of.year:
            taken[category] += days

    raw = {
        category.value: employee.starting_balance(category) - taken[category]
        for category in LeaveCategory
    }
    raw[LeaveCategory.ANNUAL.value] += accrued

    return LeaveBalances(**{name: _round_balance(value) for name, value in raw.items()})


def ensure_sufficient_balance(
    category: LeaveCategory,
    requested: float,
    available: float,
    tolerance: Optional[float] = None,
) -> None:
    if tolerance is None:
        tolerance = settings.leave.balance_tolerance
    if requested > available + tolerance:
        raise InsufficientBalanceError(category.value, available, requested)


def check_leave_request(
    employee: EmployeeRecord,
    category: LeaveCategory,
    days: float,
    on: date,
) -> LeaveBalances:
    """Reject a request that would overdraw ``category`` as of the request date."""
    balances = get_balances(employee, on)
    ensure_sufficient_balance(category, days, balances.for_category(category))
    return balances
