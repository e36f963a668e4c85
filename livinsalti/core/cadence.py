# livinsalti/core/cadence.py
import math
from numbers import Real

from livinsalti.core.models import InvalidInputError

WEEKS_PER_MONTH = 4.345  # average weeks in a calendar month
WEEKS_PER_YEAR = 52

CADENCES = ("weekly", "biweekly", "semimonthly", "monthly", "annual")

# Largest amount accepted anywhere (a trillion). Keeps cents inside the decimal context.
MAX_AMOUNT = 1_000_000_000_000


def normalize_cadence(cadence: str) -> str:
    """Returns the canonical cadence name or raises InvalidInputError."""
    if not isinstance(cadence, str):
        raise InvalidInputError(f"Cadence must be a string, got {cadence!r}")
    c = cadence.strip().lower()
    if c not in CADENCES:
        raise InvalidInputError(f"Unknown cadence '{cadence}'. Use one of: {', '.join(CADENCES)}")
    return c


def check_amount(amount, what: str = "Amount") -> float:
    if isinstance(amount, bool) or not isinstance(amount, Real):
        raise InvalidInputError(f"{what} must be a number, got {amount!r}")
    if not math.isfinite(amount):
        raise InvalidInputError(f"{what} must be finite, got {amount}")
    if amount < 0:
        raise InvalidInputError(f"{what} cannot be negative: {amount}")
    if amount > MAX_AMOUNT:
        raise InvalidInputError(f"{what} is too large: {amount} (max {MAX_AMOUNT:,})")
    return float(amount)


def to_weekly(amount: float, cadence: str) -> float:
    """Converts an amount paid at the given cadence into its weekly equivalent."""
    amount = check_amount(amount)
    c = normalize_cadence(cadence)
    if c == "weekly":
        return amount
    if c == "biweekly":
        return amount / 2
    if c == "semimonthly":
        return (amount * 2) / WEEKS_PER_MONTH
    if c == "monthly":
        return amount / WEEKS_PER_MONTH
    return amount / WEEKS_PER_YEAR
