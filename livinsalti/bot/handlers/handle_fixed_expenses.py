from typing import Union

from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler

from livinsalti.bot.handlers.states import ASKING_CONFIRMATION, ASKING_FIXED_EXPENSES
from livinsalti.bot.handlers.aux.budget_summary import send_budget_summary
from livinsalti.utils.text_utils import parse_expense_line

NO_BILLS_ANSWERS = {"none", "no", "nothing", "skip", "0"}


async def handle_fixed_expenses(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Union[int, None]:
    """Reads the fixed bills and shows the computed plan for confirmation."""
    text = update.message.text.strip()
    pending_budget = context.user_data.get("pending_budget")

    if not pending_budget:
        await update.message.reply_text("Oops! 😬 I lost track of your budget. Use /wizard to start again.")
        return ConversationHandler.END

    expenses = []
    if text.lower() not in NO_BILLS_ANSWERS:
        skipped = []
        for line in text.splitlines():
            if not line.strip():
                continue
            expense = parse_expense_line(line)
            if expense and expense["amount"] > 0:
                expenses.append(expense)
            else:
                skipped.append(line.strip())

        if skipped:
            await update.message.reply_text(
                "🤔 I couldn't read: " + ", ".join(skipped) + "\n"
                "Send each bill as name, amount and how often, ex: `Rent 1200 monthly` (or `none`).",
                parse_mode="Markdown",
            )
            return ASKING_FIXED_EXPENSES

    pending_budget["fixed_expenses"] = expenses

    result = await send_budget_summary(update, context, pending_budget)
    if result is None:
        context.user_data.pop("pending_budget", None)
        return ConversationHandler.END
    return ASKING_CONFIRMATION
