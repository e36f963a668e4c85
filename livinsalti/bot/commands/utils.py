from telegram import Update
from telegram.ext import ContextTypes


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends the welcome message for /start."""
    await update.message.reply_text(
        "Hi! I'm your Livin Salti budget buddy. 🥞 I turn what you earn and what you owe into a simple weekly plan, "
        "with a slice set aside for Save n Stack every week.\n\n"
        "Tell me about your money (ex: 'I make 2000 a month, rent is 1200') or use /wizard to go step by step.\n\n"
        "Useful commands:\n"
        "- `/wizard` to build this week's plan.\n"
        "- `/budget` to see the plan saved for this week.\n"
        "- `/spent groceries 12.50` to log what you spent.\n"
        "- `/impact [amount]` to see what saving that every month could become.\n"
        "- `/plan` to see what your plan includes.\n"
        "- `/help` for more.",
        parse_mode="Markdown",
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Sends the command list for /help."""
    await update.message.reply_text(
        "*How it works:*\n"
        "Everything is turned into a weekly amount: monthly bills are divided by 4.345 weeks, "
        "biweekly pay by 2 and yearly amounts by 52. After your fixed bills, a share of what's left "
        "goes to Save n Stack and the rest is split across groceries, gas, eating out, fun and misc.\n\n"
        "*Commands:*\n"
        "- `/wizard`: Build this week's plan step by step.\n"
        "- `/budget`: Show the plan saved for this week and what you've spent.\n"
        "- `/spent [category] [amount]`: Log spending against a category (ex: `/spent eating out 12.50`).\n"
        "- `/impact [amount]`: Growth of a monthly save over 30 years (ex: `/impact 50`).\n"
        "- `/plan`: Show what your plan (Free or Pro) includes.\n"
        "- `/splits save=0.3 groceries=0.5 fun=0.2`: Set your own save rate and splits (Pro).\n"
        "- `/history`: Chart of your last weeks (Pro).\n"
        "- `/export`: Download your weekly budgets as CSV (Pro).\n"
        "- `/cancel`: Stop the wizard.",
        parse_mode="Markdown",
    )
