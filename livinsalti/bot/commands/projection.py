from telegram import Update
from telegram.ext import ContextTypes

from livinsalti.config import PROJECTION_ANNUAL_RATE, PROJECTION_YEARS
from livinsalti.core.projection import generate_scenarios, save_impact
from livinsalti.utils.text_utils import parse_money


async def impact_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """/impact 50: what saving that much every month could be worth."""
    amount = parse_money(context.args[0]) if context.args else None
    if amount is None or amount <= 0:
        await update.message.reply_text(
            "Usage: `/impact [amount]` (ex: `/impact 50` for $50 a month).", parse_mode="Markdown"
        )
        return

    impact = save_impact(amount, PROJECTION_YEARS, PROJECTION_ANNUAL_RATE)
    msg = (
        f"📈 Saving ${amount:,.2f} a month could be worth *${impact:,}* "
        f"in {PROJECTION_YEARS} years at {PROJECTION_ANNUAL_RATE:.0%}.\n\n"
    )
    for scenario in generate_scenarios(0, amount, PROJECTION_YEARS):
        msg += (
            f"- {scenario['name']} ({scenario['rate']:.0%}): ${scenario['final_amount']:,.0f} "
            f"(${scenario['total_growth']:,.0f} growth)\n"
        )
    await update.message.reply_text(msg, parse_mode="Markdown")
