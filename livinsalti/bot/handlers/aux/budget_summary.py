from typing import Any, Dict, List, Optional, Sequence

from telegram import Update, ReplyKeyboardMarkup, ReplyKeyboardRemove
from telegram.ext import ContextTypes

from livinsalti.bot.handlers.aux.user_plan import LIMIT_MESSAGES, get_user_id, load_user_plan
from livinsalti.core.budget import compute_weekly_budget, describe_allocations
from livinsalti.core.models import (
    STATUS_CRITICAL,
    STATUS_WARNING,
    BudgetInput,
    Goal,
    InvalidInputError,
    WeeklyBudgetResult,
)
from livinsalti.core.plans import check_limits

STATUS_EMOJI = {STATUS_CRITICAL: "🚨", STATUS_WARNING: "⚠️"}


def format_goal_lines(goals: Sequence[Goal]) -> List[str]:
    if not goals:
        return []
    lines = ["🎯 Goals:"]
    for goal in goals:
        due = f" by {goal.due_date}" if goal.due_date else ""
        lines.append(f"   • {goal.name}: ${goal.target_amount:,.2f}{due}")
    return lines


def format_budget_message(result: WeeklyBudgetResult, goals: Sequence[Goal] = ()) -> str:
    weekly = result.weekly
    lines = [
        f"{STATUS_EMOJI.get(result.status, '✅')} *Your weekly plan* ({result.status})",
        f"💰 Income: *${weekly.income:,.2f}*",
        f"🏠 Fixed: *${weekly.fixed:,.2f}*",
        f"🥞 Save n Stack ({result.save_rate:.0%}): *${weekly.save_n_stack:,.2f}*",
        f"🛒 Variable: *${weekly.variable_total:,.2f}*",
    ]
    lines += [f"   • {line}" for line in describe_allocations(result)]
    lines += format_goal_lines(goals)
    if result.tips:
        lines.append("")
        lines += list(result.tips)
    return "\n".join(lines)


async def send_budget_summary(
    update: Update, context: ContextTypes.DEFAULT_TYPE, pending_budget: Dict[str, Any]
) -> Optional[WeeklyBudgetResult]:
    """
    Computes the pending budget for this user's plan and asks them to confirm it.
    Returns None (after telling the user why) when the input can't be computed.
    """
    supabase_client = context.bot_data["supabase_client"]
    tier, capabilities, default_splits = load_user_plan(supabase_client, get_user_id(update))
    if not pending_budget.get("variable_preferences") and default_splits:
        pending_budget = dict(pending_budget, variable_preferences=default_splits.to_dict())
    budget_input = BudgetInput.from_dict(pending_budget).cleaned()

    if not budget_input.incomes:
        await update.message.reply_text(
            "🤔 I couldn't find any income in there. Try something like `2000 monthly Salary`.",
            parse_mode="Markdown",
        )
        return None

    limit = check_limits(budget_input, capabilities)
    if limit:
        await update.message.reply_text(LIMIT_MESSAGES[limit])

    try:
        result = compute_weekly_budget(budget_input, tier, default_splits)
    except InvalidInputError as e:
        await update.message.reply_text(
            f"❌ Something in your budget doesn't add up: {e}", reply_markup=ReplyKeyboardRemove()
        )
        return None

    goals = budget_input.goals if capabilities.max_goals is None else budget_input.goals[:capabilities.max_goals]
    context.user_data["pending_budget"] = budget_input.to_dict()
    keyboard = [["Yes ✅", "No ❌"]]
    reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
    await update.message.reply_text(
        f"{format_budget_message(result, goals)}\n\n*Save this as your budget for the week?* 🤔",
        reply_markup=reply_markup,
        parse_mode="Markdown",
    )
    return result
