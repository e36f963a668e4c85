from telegram import Update
from telegram.ext import ContextTypes

from livinsalti.bot.handlers.aux.budget_summary import format_goal_lines
from livinsalti.bot.handlers.aux.user_plan import get_user_id, load_user_plan
from livinsalti.core import db
from livinsalti.core.budget import validate_budget_input
from livinsalti.core.models import BudgetInput, InvalidInputError, VariablePreferences, category_label
from livinsalti.core.plans import PRO
from livinsalti.utils.text_utils import parse_spent_args, parse_splits_args

PRO_ONLY_MESSAGE = "🔒 That's a Pro feature. Upgrade to Pro to unlock it."


def _yes_no(flag: bool) -> str:
    return "✅" if flag else "🔒"


def _line_text(line: dict) -> str:
    planned = line["weekly_amount"]
    spent = line.get("actual_weekly") or 0
    text = f"   • {category_label(line['name'])}: ${planned / 100:,.2f}"
    if spent:
        left = planned - spent
        status = f"${left / 100:,.2f} left" if left >= 0 else f"${-left / 100:,.2f} over"
        text += f" (spent ${spent / 100:,.2f}, {status})"
    return text


async def budget_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Shows the budget saved for the current week, with what was spent so far."""
    supabase_client = context.bot_data["supabase_client"]
    budget = db.load_current_week_budget(supabase_client, get_user_id(update))

    if not budget:
        await update.message.reply_text("You don't have a plan for this week yet. Use /wizard to build one! 🧭")
        return

    msg = (
        f"📅 *Week of {budget['week_start_date']}* ({budget.get('status', '')})\n"
        f"💰 Income: ${budget['income_weekly'] / 100:,.2f}\n"
        f"🏠 Fixed: ${budget['fixed_weekly'] / 100:,.2f}\n"
        f"🥞 Save n Stack: ${budget['save_n_stack'] / 100:,.2f}\n"
        f"🛒 Variable: ${budget['variable_total'] / 100:,.2f}\n"
    )
    for line in budget.get("weekly_budget_lines") or []:
        if line.get("type") == "variable":
            msg += _line_text(line) + "\n"
    budget_input = budget.get("budget_input")
    if budget_input and budget_input.goals:
        msg += "\n".join(format_goal_lines(budget_input.goals)) + "\n"
    await update.message.reply_text(msg, parse_mode="Markdown")


async def spent_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Logs spending against one category of this week's plan. Ex: /spent groceries 12.50"""
    parsed = parse_spent_args(context.args)
    if not parsed:
        await update.message.reply_text(
            "Usage: `/spent groceries 12.50` (category, then the amount).",
            parse_mode="Markdown",
        )
        return

    category, amount = parsed
    supabase_client = context.bot_data["supabase_client"]
    try:
        saved = db.record_spending(supabase_client, get_user_id(update), category, amount)
    except InvalidInputError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    if saved.success:
        await update.message.reply_text(
            f"✅ Logged ${amount:,.2f} on {category_label(category)}. Use /budget to see what's left."
        )
    elif saved.error == db.NO_BUDGET_THIS_WEEK:
        await update.message.reply_text("You don't have a plan for this week yet. Use /wizard to build one! 🧭")
    else:
        await update.message.reply_text(f"⚠️ I couldn't log that: {saved.error}")


async def plan_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lists what the user's plan includes."""
    supabase_client = context.bot_data["supabase_client"]
    tier, caps, _ = load_user_plan(supabase_client, get_user_id(update))

    def limit(value):
        return "unlimited" if value is None else str(value)

    await update.message.reply_text(
        f"⭐ *Your plan: {tier.capitalize()}*\n"
        f"- Incomes: {limit(caps.max_incomes)}\n"
        f"- Fixed bills: {limit(caps.max_fixed_expenses)}\n"
        f"- Goals: {limit(caps.max_goals)}\n"
        f"- Custom save rate: {_yes_no(caps.can_customize_save_rate)}\n"
        f"- Custom splits: {_yes_no(caps.can_customize_splits)}\n"
        f"- History: {_yes_no(caps.can_view_history)}\n"
        f"- Export: {_yes_no(caps.can_export)}",
        parse_mode="Markdown",
    )


async def splits_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Saves a Pro user's own save rate and category splits as their defaults."""
    supabase_client = context.bot_data["supabase_client"]
    user_id = get_user_id(update)
    tier, caps, current = load_user_plan(supabase_client, user_id)

    if tier != PRO or not caps.can_customize_splits:
        await update.message.reply_text(PRO_ONLY_MESSAGE)
        return

    args = context.args
    parsed = parse_splits_args(args) if args else None
    if not parsed:
        await update.message.reply_text(
            "Usage: `/splits save=0.3 groceries=0.5 gas=0.2 fun=0.3`\n"
            "Weights don't need to add up to 1, they're used as proportions.",
            parse_mode="Markdown",
        )
        return

    current = current or VariablePreferences()
    preferences = VariablePreferences(
        save_rate=current.save_rate if parsed["save_rate"] is None else parsed["save_rate"],
        splits=parsed["splits"] or dict(current.splits),
    )
    try:
        validate_budget_input(BudgetInput(variable_preferences=preferences))
    except InvalidInputError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    if db.update_default_splits(supabase_client, user_id, preferences):
        splits_msg = ", ".join(f"{category_label(name)} {weight:g}" for name, weight in preferences.splits.items())
        await update.message.reply_text(
            f"✅ Saved! Save n Stack at {preferences.save_rate:.0%}, splits: {splits_msg}.\n"
            "Run /wizard to rebuild this week's plan with them."
        )
    else:
        await update.message.reply_text("⚠️ I couldn't save your splits right now. Please try again.")
