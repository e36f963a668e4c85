from typing import Optional, Tuple

from supabase import Client
from telegram import Update

from livinsalti.core import db
from livinsalti.core.models import VariablePreferences
from livinsalti.core.plans import Capabilities, resolve_plan, tier_from_profile

LIMIT_MESSAGES = {
    "INCOME_LIMIT": "The free plan budgets 1 income source. Upgrade to Pro to add more. 🔒",
    "BILL_LIMIT": "The free plan budgets up to 4 fixed expenses. Upgrade to Pro for unlimited bills. 🔒",
    "GOAL_LIMIT": "The free plan tracks 1 goal. Upgrade to Pro for unlimited goals. 🔒",
}


def get_user_id(update: Update) -> str:
    """The Telegram user id is the opaque id budgets are stored under."""
    return str(update.effective_user.id)


def load_user_plan(supabase_client: Client, user_id: str) -> Tuple[str, Capabilities, Optional[VariablePreferences]]:
    """Reads the profile once and returns (tier, capabilities, default splits)."""
    profile = db.get_profile(supabase_client, user_id)
    tier = tier_from_profile(profile)
    return tier, resolve_plan(tier), db.get_default_splits(profile)
