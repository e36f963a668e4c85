# livinsalti/core/budget.py
"""
Weekly budget engine.

Turns what the user told the wizard (incomes, fixed bills, save rate and
category splits) into one week's plan: how much comes in, how much the bills
take, how much goes to Save n Stack and how the rest splits across the
variable categories. All math after normalization runs in integer cents.
"""
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List, Optional, Tuple, Union

from livinsalti.config import PROJECTION_ANNUAL_RATE, PROJECTION_YEARS
from livinsalti.core.cadence import check_amount, to_weekly
from livinsalti.core.models import (
    DEFAULT_SAVE_RATE,
    DEFAULT_SPLITS,
    STATUS_CRITICAL,
    STATUS_HEALTHY,
    STATUS_WARNING,
    Allocation,
    BudgetInput,
    InvalidInputError,
    VariablePreferences,
    WeeklyBudgetResult,
    WeeklyTotals,
    category_label,
    ordered_categories,
    to_cents,
)
from livinsalti.core.plans import Capabilities, normalize_tier, resolve_plan
from livinsalti.core.projection import future_value_of_recurring

MAX_TIPS = 3


@dataclass(frozen=True)
class BudgetThresholds:
    negligible_save_ratio: float = 0.05   # save_n_stack below this share of income -> warning
    concentration_ratio: float = 0.50     # one category above this share of variable spending
    congrats_save_ratio: float = 0.30     # save_n_stack above this share of income
    projection_years: int = PROJECTION_YEARS
    projection_rate: float = PROJECTION_ANNUAL_RATE


DEFAULT_THRESHOLDS = BudgetThresholds()


# --- Validation ---
def _validate_preferences(preferences: VariablePreferences, what: str) -> None:
    rate = preferences.save_rate
    if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not 0 <= rate <= 1:
        raise InvalidInputError(f"{what} save_rate must be between 0 and 1, got {rate!r}")
    if not isinstance(preferences.splits, dict):
        raise InvalidInputError(f"{what} splits must be a mapping of category to weight")
    for name, weight in preferences.splits.items():
        check_amount(weight, f"{what} split weight for '{name}'")


def validate_budget_input(budget_input: BudgetInput) -> None:
    """Raises InvalidInputError for anything the engine cannot compute with."""
    for income in budget_input.incomes:
        to_weekly(income.amount, income.cadence)
    for expense in budget_input.fixed_expenses:
        to_weekly(expense.amount, expense.cadence)
    _validate_preferences(budget_input.variable_preferences, "variable_preferences")


# --- Steps ---
def effective_preferences(
    preferences: VariablePreferences,
    capabilities: Capabilities,
    default_splits: Optional[VariablePreferences] = None,
) -> VariablePreferences:
    """
    Applies plan gating before any math runs.
    Free users always get the default save rate and the default split table
    (or their profile defaults); nothing they customized is partially applied.
    """
    fallback_splits = dict(default_splits.splits) if default_splits and default_splits.splits else dict(DEFAULT_SPLITS)

    save_rate = preferences.save_rate if capabilities.can_customize_save_rate else DEFAULT_SAVE_RATE
    if capabilities.can_customize_splits and preferences.splits:
        splits = dict(preferences.splits)
    else:
        splits = fallback_splits
    return VariablePreferences(save_rate=save_rate, splits=splits)


def weekly_total_cents(entries, limit: Optional[int]) -> int:
    """Sums the weekly cents of the first `limit` entries (all of them when limit is None)."""
    allowed = entries if limit is None else entries[:limit]
    return sum(to_cents(to_weekly(e.amount, e.cadence)) for e in allowed)


def _exact(value: float) -> Fraction:
    """The decimal the user typed (0.35 is 7/20), not its binary float approximation."""
    return Fraction(repr(value)) if isinstance(value, float) else Fraction(value)


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def allocate_variable(total_cents: int, splits: Dict[str, float]) -> Tuple[Allocation, ...]:
    """
    Splits total_cents across the categories in proportion to their weights.
    Shares are floored, then the leftover cents go to the largest fractional
    parts (ties keep category order), so the allocations add up to total_cents.
    If every weight is zero nothing is allocated.
    """
    names = ordered_categories(splits)
    weights = {name: _exact(splits[name]) for name in names}
    weight_sum = sum(weights.values(), Fraction(0))

    if weight_sum <= 0 or total_cents <= 0:
        return tuple(Allocation(name=name, weekly_cents=0) for name in names)

    exact = {name: total_cents * weights[name] / weight_sum for name in names}
    floors = {name: math.floor(exact[name]) for name in names}
    leftover = total_cents - sum(floors.values())

    by_fraction = sorted(names, key=lambda n: (-(exact[n] - floors[n]), names.index(n)))
    for name in by_fraction[:leftover]:
        floors[name] += 1

    return tuple(Allocation(name=name, weekly_cents=floors[name]) for name in names)


def classify_status(income_cents: int, fixed_cents: int, remainder_before_save_cents: int,
                    save_cents: int, thresholds: BudgetThresholds = DEFAULT_THRESHOLDS) -> str:
    if income_cents <= 0 or income_cents < fixed_cents:
        return STATUS_CRITICAL
    if remainder_before_save_cents > 0 and save_cents < thresholds.negligible_save_ratio * income_cents:
        return STATUS_WARNING
    return STATUS_HEALTHY


def build_tips(weekly: WeeklyTotals, status: str, thresholds: BudgetThresholds = DEFAULT_THRESHOLDS) -> Tuple[str, ...]:
    """Rule-based tips, always in the same order, at most MAX_TIPS."""
    tips: List[str] = []

    if status == STATUS_CRITICAL:
        if weekly.income_cents <= 0:
            tips.append("⚠️ There's no income in this budget yet. Add an income source to build your weekly plan.")
        else:
            tips.append("⚠️ Your fixed expenses exceed your income. Consider reducing bills or increasing income.")
    elif status == STATUS_WARNING:
        tips.append(
            f"💡 You're stacking less than {thresholds.negligible_save_ratio:.0%} of your income. "
            "Even a few dollars more each week adds up."
        )

    if weekly.variable_total_cents > 0:
        for allocation in weekly.allocations:
            if allocation.weekly_cents > thresholds.concentration_ratio * weekly.variable_total_cents:
                tips.append(
                    f"💡 {allocation.label} takes more than {thresholds.concentration_ratio:.0%} of your variable spending "
                    f"(${allocation.weekly_amount:,.2f}/week). Spreading it out lowers the risk of overspending."
                )
                break

    if weekly.income_cents > 0 and weekly.save_n_stack_cents > thresholds.congrats_save_ratio * weekly.income_cents:
        share = weekly.save_n_stack_cents / weekly.income_cents
        tips.append(f"✅ Great job! You're stacking {share:.0%} of your income every week.")

    if weekly.save_n_stack_cents > 0:
        projected = future_value_of_recurring(
            weekly.save_n_stack, 52, thresholds.projection_rate, thresholds.projection_years
        )
        tips.append(
            f"📈 Stacking ${weekly.save_n_stack:,.2f}/week could grow to ${projected:,.0f} "
            f"in {thresholds.projection_years} years at {thresholds.projection_rate:.0%}."
        )

    return tuple(tips[:MAX_TIPS])


# --- Entry point ---
def compute_weekly_budget(
    budget_input: BudgetInput,
    tier: Any,
    default_splits: Union[VariablePreferences, Dict[str, Any], None] = None,
    thresholds: Optional[BudgetThresholds] = None,
) -> WeeklyBudgetResult:
    """
    Computes the weekly budget for one user.

    tier is 'free' or 'pro' (unknown values count as free). default_splits is
    the profile's saved {save_rate, splits}, passed in explicitly so the
    engine never reads user state on its own. Financial trouble (no income,
    bills above income) comes back as a 'critical' status, not an exception;
    InvalidInputError is raised only for malformed input.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    if isinstance(default_splits, dict):
        default_splits = VariablePreferences.from_dict(default_splits)

    validate_budget_input(budget_input)
    if default_splits is not None:
        _validate_preferences(default_splits, "default_splits")

    tier_name = normalize_tier(tier)
    capabilities = resolve_plan(tier_name)
    preferences = effective_preferences(budget_input.variable_preferences, capabilities, default_splits)

    income_cents = weekly_total_cents(list(budget_input.incomes), capabilities.max_incomes)
    fixed_cents = weekly_total_cents(list(budget_input.fixed_expenses), capabilities.max_fixed_expenses)

    remainder_before_save = max(0, income_cents - fixed_cents)
    save_cents = _round_half_up(remainder_before_save * _exact(preferences.save_rate))
    variable_total = remainder_before_save - save_cents

    allocations = allocate_variable(variable_total, preferences.splits)
    unallocated = variable_total - sum(a.weekly_cents for a in allocations)

    weekly = WeeklyTotals(
        income_cents=income_cents,
        fixed_cents=fixed_cents,
        remainder_before_save_cents=remainder_before_save,
        save_n_stack_cents=save_cents,
        variable_total_cents=variable_total,
        remainder_cents=unallocated,
        allocations=allocations,
    )
    status = classify_status(income_cents, fixed_cents, remainder_before_save, save_cents, thresholds)
    tips = build_tips(weekly, status, thresholds)

    return WeeklyBudgetResult(
        weekly=weekly,
        status=status,
        tips=tips,
        tier=tier_name,
        save_rate=float(preferences.save_rate),
    )


def describe_allocations(result: WeeklyBudgetResult) -> List[str]:
    """One display line per variable category, e.g. 'Eating Out: $112.00'."""
    return [f"{category_label(a.name)}: ${a.weekly_amount:,.2f}" for a in result.weekly.allocations]
