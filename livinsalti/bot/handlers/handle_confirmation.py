from telegram import ReplyKeyboardRemove, Update, ReplyKeyboardMarkup
from telegram.ext import ContextTypes, ConversationHandler

from livinsalti.bot.handlers.states import ASKING_CONFIRMATION
from livinsalti.bot.handlers.aux.user_plan import get_user_id, load_user_plan
from livinsalti.core import db
from livinsalti.core.budget import compute_weekly_budget
from livinsalti.core.models import BudgetInput, InvalidInputError

YES_ANSWERS = {"yes ✅", "yes", "y"}
NO_ANSWERS = {"no ❌", "no", "n"}


async def handle_confirmation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handles the Yes/No on the computed plan. Yes stores it for the current week."""
    supabase_client = context.bot_data["supabase_client"]
    user_response = update.message.text.strip().lower()
    pending_budget = context.user_data.get("pending_budget")

    if not pending_budget:
        await update.message.reply_text(
            "Oops! 😬 I couldn't find a budget waiting for confirmation. Use /wizard to build one. 🔄",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END

    if user_response in YES_ANSWERS:
        user_id = get_user_id(update)
        tier, _, default_splits = load_user_plan(supabase_client, user_id)
        budget_input = BudgetInput.from_dict(pending_budget)
        try:
            result = compute_weekly_budget(budget_input, tier, default_splits)
        except InvalidInputError as e:
            await update.message.reply_text(f"❌ {e}", reply_markup=ReplyKeyboardRemove())
            context.user_data.pop("pending_budget", None)
            return ConversationHandler.END

        saved = db.save_weekly_budget(supabase_client, user_id, budget_input, result)
        if saved.success:
            await update.message.reply_text(
                "🎉 Your weekly plan is saved! Use /budget any time to see it.",
                reply_markup=ReplyKeyboardRemove(),
            )
        else:
            await update.message.reply_text(
                "⚠️ I couldn't save your plan right now. Please try again in a moment.",
                reply_markup=ReplyKeyboardRemove(),
            )
        context.user_data.pop("pending_budget", None)
        return ConversationHandler.END

    elif user_response in NO_ANSWERS:
        context.user_data.pop("pending_budget", None)
        await update.message.reply_text(
            "No problem, nothing was saved. Use /wizard whenever you want to try again. 👍",
            reply_markup=ReplyKeyboardRemove(),
        )
        return ConversationHandler.END

    else:
        keyboard = [["Yes ✅", "No ❌"]]
        reply_markup = ReplyKeyboardMarkup(keyboard, one_time_keyboard=True, resize_keyboard=True)
        await update.message.reply_text(
            "Please answer only 'Yes ✅' or 'No ❌'.",
            reply_markup=reply_markup,
        )
        return ASKING_CONFIRMATION


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """/cancel: drops whatever the wizard was holding."""
    context.user_data.pop("pending_budget", None)
    await update.message.reply_text("Cancelled. 👋", reply_markup=ReplyKeyboardRemove())
    return ConversationHandler.END
