# livinsalti/core/projection.py
from typing import Any, Dict, List

from livinsalti.core.cadence import check_amount
from livinsalti.core.models import InvalidInputError

DEFAULT_SCENARIOS = (
    ("Conservative", 0.04),
    ("Moderate", 0.07),
    ("Aggressive", 0.10),
)


def _check_rate(annual_rate: float) -> float:
    if isinstance(annual_rate, bool) or not isinstance(annual_rate, (int, float)) or annual_rate <= -1:
        raise InvalidInputError(f"Annual rate must be a number greater than -1, got {annual_rate!r}")
    return float(annual_rate)


def future_value(principal: float, annual_rate: float, years: float) -> float:
    """Compound growth of a one-time amount."""
    principal = check_amount(principal, "Principal")
    years = check_amount(years, "Years")
    annual_rate = _check_rate(annual_rate)
    return principal * (1 + annual_rate) ** years


def future_value_of_recurring(payment: float, periods_per_year: int, annual_rate: float, years: float) -> float:
    """
    Future value of a contribution made at the start of every period (annuity due).
    With a zero rate it is simply payment * number of periods.
    """
    payment = check_amount(payment, "Payment")
    years = check_amount(years, "Years")
    annual_rate = _check_rate(annual_rate)
    if isinstance(periods_per_year, bool) or not isinstance(periods_per_year, (int, float)) or periods_per_year <= 0:
        raise InvalidInputError(f"Periods per year must be positive, got {periods_per_year!r}")

    n = periods_per_year * years
    if annual_rate == 0:
        return payment * n
    r = annual_rate / periods_per_year
    return payment * (((1 + r) ** n - 1) / r) * (1 + r)


def save_impact(amount: float, years: int = 30, annual_rate: float = 0.08) -> int:
    """What a monthly save of `amount` could be worth after `years` ("in 30 years this could be worth...")."""
    amount = check_amount(amount)
    annual_rate = _check_rate(annual_rate)
    yearly = amount * 12
    if annual_rate == 0:
        return round(yearly * years)
    return round(yearly * (((1 + annual_rate) ** years - 1) / annual_rate))


def required_monthly_payment(target_amount: float, years: float, annual_rate: float = 0.08) -> float:
    """Monthly contribution needed to reach target_amount in the given number of years."""
    target_amount = check_amount(target_amount, "Target amount")
    years = check_amount(years, "Years")
    annual_rate = _check_rate(annual_rate)
    total_months = years * 12
    if total_months == 0:
        raise InvalidInputError("Years must be greater than zero")

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return round(target_amount / total_months, 2)
    payment = target_amount * monthly_rate / ((1 + monthly_rate) ** total_months - 1)
    return round(payment, 2)


def _grow_monthly(principal: float, monthly_contribution: float, annual_rate: float, years: int) -> float:
    balance = principal
    monthly_rate = annual_rate / 12
    for _ in range(int(years) * 12):
        balance += monthly_contribution
        balance += balance * monthly_rate
    return balance


def generate_scenarios(principal: float, monthly_contribution: float, years: int) -> List[Dict[str, Any]]:
    """Projects the same plan under conservative, moderate and aggressive growth."""
    principal = check_amount(principal, "Principal")
    monthly_contribution = check_amount(monthly_contribution, "Monthly contribution")
    years = int(check_amount(years, "Years"))

    scenarios = []
    total_contributions = principal + monthly_contribution * years * 12
    for name, rate in DEFAULT_SCENARIOS:
        final_amount = _grow_monthly(principal, monthly_contribution, rate, years)
        scenarios.append({
            "name": name,
            "rate": rate,
            "final_amount": round(final_amount, 2),
            "total_contributions": round(total_contributions, 2),
            "total_growth": round(final_amount - total_contributions, 2),
        })
    return scenarios
