from telegram import Update
from telegram.ext import ContextTypes

from livinsalti.bot.commands.budget import PRO_ONLY_MESSAGE
from livinsalti.bot.handlers.aux.user_plan import get_user_id, load_user_plan
from livinsalti.core import charts, db
from livinsalti.core.export import export_budget_history_csv


async def history_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends the chart of the last weekly budgets (Pro)."""
    supabase_client = context.bot_data["supabase_client"]
    user_id = get_user_id(update)
    _, caps, _ = load_user_plan(supabase_client, user_id)
    if not caps.can_view_history:
        await update.message.reply_text(PRO_ONLY_MESSAGE)
        return

    await update.message.reply_text("Drawing your last weeks, please wait...")
    chart_buffer = charts.generate_budget_history_chart(db.load_budget_history(supabase_client, user_id))
    if chart_buffer:
        chart_buffer.name = "budget_history.png"
        await update.message.reply_photo(photo=chart_buffer, caption="Here are your last weeks:")
    else:
        await update.message.reply_text("No saved weeks yet. Build and save a plan with /wizard first!")


async def export_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends the stored weekly budgets as a CSV file (Pro)."""
    supabase_client = context.bot_data["supabase_client"]
    user_id = get_user_id(update)
    _, caps, _ = load_user_plan(supabase_client, user_id)
    if not caps.can_export:
        await update.message.reply_text(PRO_ONLY_MESSAGE)
        return

    csv_buffer = export_budget_history_csv(db.load_budget_history(supabase_client, user_id, limit=52))
    if csv_buffer:
        await update.message.reply_document(document=csv_buffer, filename="weekly_budgets.csv")
    else:
        await update.message.reply_text("No saved weeks yet. Build and save a plan with /wizard first!")
