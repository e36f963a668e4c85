from telegram import Update
from telegram.ext import ContextTypes

from livinsalti.bot.handlers.states import ASKING_FIXED_EXPENSES, ASKING_INCOME
from livinsalti.utils.text_utils import parse_income_line


async def handle_income(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Reads one income per line, then moves on to the fixed bills."""
    lines = [line for line in update.message.text.splitlines() if line.strip()]
    incomes = []
    skipped = []
    for line in lines:
        income = parse_income_line(line)
        if income and income["amount"] > 0:
            incomes.append(income)
        else:
            skipped.append(line.strip())

    if not incomes:
        await update.message.reply_text(
            "🤔 I couldn't find an amount there. Send something like `2000 monthly Salary`.",
            parse_mode="Markdown",
        )
        return ASKING_INCOME

    pending_budget = context.user_data.setdefault("pending_budget", {})
    pending_budget["incomes"] = incomes

    msg = "\n".join(
        f"💰 {i['source']}: ${i['amount']:,.2f} ({i['cadence']})" for i in incomes
    )
    if skipped:
        msg += "\n\n⚠️ Skipped (no amount): " + ", ".join(skipped)
    msg += (
        "\n\n*Step 2:* Now your fixed bills, one per line. Ex: `Rent 1200 monthly`, `Phone 45 monthly`.\n"
        "No fixed bills? Just send `none`."
    )
    await update.message.reply_text(msg, parse_mode="Markdown")
    return ASKING_FIXED_EXPENSES
