# livinsalti/core/plans.py
import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from livinsalti.core.models import BudgetInput

FREE = "free"
PRO = "pro"

# Profile plan names that unlock the pro budgeting features.
PRO_PLAN_NAMES = {"pro", "family"}


@dataclass(frozen=True)
class Capabilities:
    max_incomes: Optional[int]          # None = unbounded
    max_fixed_expenses: Optional[int]
    max_goals: Optional[int]
    can_customize_save_rate: bool
    can_customize_splits: bool
    can_view_history: bool
    can_export: bool


FREE_CAPABILITIES = Capabilities(
    max_incomes=1,
    max_fixed_expenses=4,
    max_goals=1,
    can_customize_save_rate=False,
    can_customize_splits=False,
    can_view_history=False,
    can_export=False,
)

PRO_CAPABILITIES = Capabilities(
    max_incomes=None,
    max_fixed_expenses=None,
    max_goals=None,
    can_customize_save_rate=True,
    can_customize_splits=True,
    can_view_history=True,
    can_export=True,
)

_CAPABILITIES = {FREE: FREE_CAPABILITIES, PRO: PRO_CAPABILITIES}


def normalize_tier(tier: Any) -> str:
    """
    Maps a tier value to 'free' or 'pro'.
    Anything unrecognized falls back to 'free', and the fallback is reported.
    """
    value = getattr(tier, "value", tier)  # accepts Enum members too
    if isinstance(value, str) and value.strip().lower() in _CAPABILITIES:
        return value.strip().lower()
    print(f"WARNING: Unknown plan tier {tier!r}, using '{FREE}' capabilities.")
    return FREE


def resolve_plan(tier: Any) -> Capabilities:
    """Returns the budgeting capabilities for a plan tier."""
    return _CAPABILITIES[normalize_tier(tier)]


def _parse_timestamp(value: Union[str, datetime.datetime, None]) -> Optional[datetime.datetime]:
    if not value:
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    else:
        try:
            parsed = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            print(f"Error parsing access timestamp '{value}', ignoring it.")
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def tier_from_profile(profile: Optional[Dict[str, Any]], now: Optional[datetime.datetime] = None) -> str:
    """
    Works out the effective tier from a stored profile row.
    Pro or Family plans are pro, and so is any unexpired pro/bonus access window.
    """
    if not profile:
        return FREE

    plan = (profile.get("plan") or "").strip().lower()
    if plan in PRO_PLAN_NAMES:
        return PRO

    now = now or datetime.datetime.now(datetime.timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=datetime.timezone.utc)

    for key in ("pro_access_until", "bonus_access_until"):
        until = _parse_timestamp(profile.get(key))
        if until and until > now:
            return PRO
    return FREE


def check_limits(budget_input: BudgetInput, capabilities: Capabilities) -> Optional[str]:
    """Names the first entry limit the input goes over, or None if it fits the plan."""
    if capabilities.max_incomes is not None and len(budget_input.incomes) > capabilities.max_incomes:
        return "INCOME_LIMIT"
    if capabilities.max_fixed_expenses is not None and len(budget_input.fixed_expenses) > capabilities.max_fixed_expenses:
        return "BILL_LIMIT"
    if capabilities.max_goals is not None and len(budget_input.goals) > capabilities.max_goals:
        return "GOAL_LIMIT"
    return None
