# livinsalti/core/db.py
import datetime
from typing import Any, Dict, List, Optional, Union

from supabase import create_client, Client

from livinsalti.config import SUPABASE_URL, SUPABASE_KEY
from livinsalti.core.cadence import check_amount
from livinsalti.core.models import BudgetInput, SaveResult, VariablePreferences, WeeklyBudgetResult, to_cents
from livinsalti.utils.date_utils import get_current_week_start, week_end_for

WEEKLY_BUDGETS_TABLE = "weekly_budgets"
WEEKLY_BUDGET_LINES_TABLE = "weekly_budget_lines"
PROFILES_TABLE = "profiles"

NO_BUDGET_THIS_WEEK = "No budget saved for this week"

# Every money column written here holds integer cents.
WEEKLY_BUDGET_COLUMNS = "id,user_id,week_start_date,week_end_date,income_weekly,fixed_weekly,variable_total,save_n_stack,status,updated_at"


def get_supabase_client() -> Client:
    """Returns a Supabase client instance."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


def _utc_now_iso(now: Optional[datetime.datetime] = None) -> str:
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat()


def weekly_budget_row(user_id: str, week_start_date: str, result: WeeklyBudgetResult,
                      now: Optional[datetime.datetime] = None,
                      budget_input: Optional[BudgetInput] = None) -> Dict[str, Any]:
    """Maps a computed result (and the input it came from) onto the weekly_budgets columns."""
    weekly = result.weekly
    return {
        "user_id": user_id,
        "week_start_date": week_start_date,
        "week_end_date": week_end_for(week_start_date),
        "income_weekly": weekly.income_cents,
        "fixed_weekly": weekly.fixed_cents,
        "variable_total": weekly.variable_total_cents,
        "save_n_stack": weekly.save_n_stack_cents,
        "status": result.status,
        "budget_input": budget_input.to_dict() if budget_input is not None else None,
        "updated_at": _utc_now_iso(now),
    }


def weekly_budget_lines(budget_id: str, result: WeeklyBudgetResult,
                        actuals: Optional[Dict[str, int]] = None) -> List[Dict[str, Any]]:
    """
    One line per variable category plus the Save n Stack line.
    `actuals` carries what was already spent per line name, so re-saving a week keeps it.
    """
    actuals = actuals or {}
    planned = [(allocation.type, allocation.name, allocation.weekly_cents) for allocation in result.weekly.allocations]
    planned.append(("save_n_stack", "save_n_stack", result.weekly.save_n_stack_cents))
    return [
        {
            "weekly_budget_id": budget_id,
            "type": line_type,
            "name": name,
            "weekly_amount": weekly_cents,
            "actual_weekly": actuals.get(name, 0),
        }
        for line_type, name, weekly_cents in planned
    ]


def _spent_by_line(supabase_client: Client, budget_id: str) -> Dict[str, int]:
    response = (
        supabase_client.table(WEEKLY_BUDGET_LINES_TABLE)
        .select("name,actual_weekly")
        .eq("weekly_budget_id", budget_id)
        .execute()
    )
    return {
        line["name"]: line["actual_weekly"]
        for line in response.data or []
        if line.get("name") and line.get("actual_weekly")
    }


# --- Weekly budgets ---
def save_weekly_budget(
    supabase_client: Client,
    user_id: str,
    budget_input: BudgetInput,
    result: WeeklyBudgetResult,
    week_start_date: Optional[str] = None,
    now: Union[datetime.date, datetime.datetime, None] = None,
) -> SaveResult:
    """
    Stores this week's budget, one row per (user_id, week_start_date).
    A second save in the same week overwrites the first (last write wins).
    Failures come back in SaveResult.error instead of being raised.
    """
    week_start_date = week_start_date or get_current_week_start(now)
    try:
        row = weekly_budget_row(
            user_id, week_start_date, result,
            now if isinstance(now, datetime.datetime) else None, budget_input,
        )
        response = (
            supabase_client.table(WEEKLY_BUDGETS_TABLE)
            .upsert(row, on_conflict="user_id,week_start_date")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Upsert returned no weekly budget row")
        budget_id = response.data[0]["id"]

        actuals = _spent_by_line(supabase_client, budget_id)
        supabase_client.table(WEEKLY_BUDGET_LINES_TABLE).delete().eq("weekly_budget_id", budget_id).execute()
        supabase_client.table(WEEKLY_BUDGET_LINES_TABLE).insert(weekly_budget_lines(budget_id, result, actuals)).execute()

        print(f"DEBUG: Weekly budget {budget_id} saved for user {user_id} ({week_start_date}), "
              f"{len(budget_input.incomes)} incomes / {len(budget_input.fixed_expenses)} bills.")
        return SaveResult(success=True, budget_id=budget_id)
    except Exception as e:
        print(f"Error saving weekly budget for user {user_id} ({week_start_date}): {e}")
        return SaveResult(success=False, error=str(e))


def load_current_week_budget(
    supabase_client: Client,
    user_id: str,
    now: Union[datetime.date, datetime.datetime, None] = None,
) -> Optional[Dict[str, Any]]:
    """
    Gets this week's stored budget (with its lines) for the user, or None.
    `budget_input` comes back rebuilt as a BudgetInput (None for rows saved without one).
    """
    week_start_date = get_current_week_start(now)
    try:
        response = (
            supabase_client.table(WEEKLY_BUDGETS_TABLE)
            .select(f"{WEEKLY_BUDGET_COLUMNS},budget_input,"
                    f"weekly_budget_lines(type,name,weekly_amount,actual_weekly)")
            .eq("user_id", user_id)
            .eq("week_start_date", week_start_date)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        budget = dict(response.data[0])
        payload = budget.get("budget_input")
        budget["budget_input"] = BudgetInput.from_dict(payload) if payload else None
        return budget
    except Exception as e:
        print(f"Error loading weekly budget for user {user_id}: {e}")
        return None


def record_spending(
    supabase_client: Client,
    user_id: str,
    category: str,
    amount: float,
    now: Union[datetime.date, datetime.datetime, None] = None,
) -> SaveResult:
    """
    Adds `amount` dollars to what was spent this week on one variable category of the stored budget.
    Raises InvalidInputError for a bad amount; storage problems come back in SaveResult.error.
    """
    amount_cents = to_cents(check_amount(amount, "Spent amount"))
    week_start_date = get_current_week_start(now)
    try:
        response = (
            supabase_client.table(WEEKLY_BUDGETS_TABLE)
            .select("id,weekly_budget_lines(type,name,weekly_amount,actual_weekly)")
            .eq("user_id", user_id)
            .eq("week_start_date", week_start_date)
            .limit(1)
            .execute()
        )
        if not response.data:
            return SaveResult(success=False, error=NO_BUDGET_THIS_WEEK)
        budget = response.data[0]
        budget_id = budget["id"]

        line = next(
            (item for item in budget.get("weekly_budget_lines") or []
             if item.get("type") == "variable" and item.get("name") == category),
            None,
        )
        if line is None:
            return SaveResult(success=False, budget_id=budget_id, error=f"No '{category}' line in this week's budget")

        supabase_client.table(WEEKLY_BUDGET_LINES_TABLE).update({
            "actual_weekly": (line.get("actual_weekly") or 0) + amount_cents,
        }).eq("weekly_budget_id", budget_id).eq("name", category).execute()
        print(f"DEBUG: Recorded {amount_cents} cents on '{category}' for user {user_id} ({week_start_date}).")
        return SaveResult(success=True, budget_id=budget_id)
    except Exception as e:
        print(f"Error recording spending for user {user_id} ({category}): {e}")
        return SaveResult(success=False, error=str(e))


def load_budget_history(supabase_client: Client, user_id: str, limit: int = 8) -> List[Dict[str, Any]]:
    """Gets the user's most recent weekly budgets, newest week first."""
    try:
        response = (
            supabase_client.table(WEEKLY_BUDGETS_TABLE)
            .select(WEEKLY_BUDGET_COLUMNS)
            .eq("user_id", user_id)
            .order("week_start_date", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []
    except Exception as e:
        print(f"Error loading budget history for user {user_id}: {e}")
        return []


# --- Profiles ---
def get_profile(supabase_client: Client, user_id: str) -> Optional[Dict[str, Any]]:
    """Gets the profile fields the budget needs (plan, default splits, access windows)."""
    try:
        response = (
            supabase_client.table(PROFILES_TABLE)
            .select("id,email,plan,default_splits,pro_access_until,bonus_access_until")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
    except Exception as e:
        print(f"Error loading profile {user_id}: {e}")
        return None


def get_default_splits(profile: Optional[Dict[str, Any]]) -> Optional[VariablePreferences]:
    """Reads profiles.default_splits into preferences; None when the user never saved any."""
    if not profile or not profile.get("default_splits"):
        return None
    return VariablePreferences.from_dict(profile["default_splits"])


def update_default_splits(supabase_client: Client, user_id: str, preferences: VariablePreferences) -> bool:
    """Saves a pro user's slider choices as their new default splits."""
    try:
        supabase_client.table(PROFILES_TABLE).update({
            "default_splits": preferences.to_dict(),
            "updated_at": _utc_now_iso(),
        }).eq("id", user_id).execute()
        return True
    except Exception as e:
        print(f"Error updating default splits for user {user_id}: {e}")
        return False
