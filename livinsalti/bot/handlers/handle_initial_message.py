from typing import Any, Dict, Union

from telegram import Update, ReplyKeyboardRemove
from telegram.ext import ContextTypes, ConversationHandler

from livinsalti.bot.handlers.states import ASKING_CONFIRMATION, ASKING_INCOME
from livinsalti.bot.handlers.aux.budget_summary import send_budget_summary
from livinsalti.core.ai import extract_budget_input


def empty_budget() -> Dict[str, Any]:
    return {"incomes": [], "fixed_expenses": [], "variable_preferences": None, "goals": []}


async def start_wizard(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """/wizard: builds the weekly budget step by step."""
    context.user_data["pending_budget"] = empty_budget()
    await update.message.reply_text(
        "🧭 Let's build your weekly plan!\n\n"
        "*Step 1:* How much money comes in? One income per line, amount and how often.\n"
        "Ex: `2000 monthly Salary` or `450 weekly Side gig`",
        parse_mode="Markdown",
        reply_markup=ReplyKeyboardRemove(),
    )
    return ASKING_INCOME


async def handle_initial_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> Union[int, None]:
    """Free text outside the wizard: let the AI assistant read the budget out of it."""
    user_message = update.message.text
    chat_id = update.message.chat_id

    print(f"Message received from {chat_id}: {user_message}")

    if not user_message or not user_message.strip():
        return ConversationHandler.END

    parsed_budget = extract_budget_input(user_message)
    if not parsed_budget or not parsed_budget.get("incomes"):
        await update.message.reply_text(
            "😕 Sorry, I couldn't build a budget from that. "
            "Tell me what you earn and your bills (ex: 'I make 2000 a month, rent is 1200'), "
            "or use /wizard to go step by step. 💡"
        )
        return ConversationHandler.END

    result = await send_budget_summary(update, context, parsed_budget)
    if result is None:
        return ConversationHandler.END
    return ASKING_CONFIRMATION
