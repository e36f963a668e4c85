# livinsalti/bot/bot_setup.py
from telegram.ext import Application, MessageHandler, filters, CommandHandler, ConversationHandler

from livinsalti.bot.commands import (
    start_command, help_command, budget_command, spent_command, plan_command, splits_command,
    impact_command, history_command, export_command,
)
from livinsalti.bot.handlers import (
    start_wizard, handle_initial_message, handle_income, handle_fixed_expenses,
    handle_confirmation, cancel,
    ASKING_INCOME, ASKING_FIXED_EXPENSES, ASKING_CONFIRMATION,
)


def build_conversation_handler() -> ConversationHandler:
    """The budget wizard: incomes, then fixed bills, then Yes/No on the computed plan."""
    text_only = filters.TEXT & ~filters.COMMAND
    return ConversationHandler(
        # /wizard asks step by step; free text goes through the AI assistant
        entry_points=[
            CommandHandler("wizard", start_wizard),
            MessageHandler(text_only, handle_initial_message),
        ],
        states={
            ASKING_INCOME: [MessageHandler(text_only, handle_income)],
            ASKING_FIXED_EXPENSES: [MessageHandler(text_only, handle_fixed_expenses)],
            ASKING_CONFIRMATION: [MessageHandler(text_only, handle_confirmation)],
        },
        fallbacks=[CommandHandler("cancel", cancel), CommandHandler("wizard", start_wizard)],
    )


def setup_and_run_bot(config: dict) -> Application:
    """
    Builds the Telegram application (commands and the wizard conversation).
    Returns it ready to be driven by the webhook server.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Handlers and commands reach Supabase through bot_data
    application.bot_data['supabase_client'] = config["SUPABASE_CLIENT"]

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("budget", budget_command))
    application.add_handler(CommandHandler("spent", spent_command))
    application.add_handler(CommandHandler("plan", plan_command))
    application.add_handler(CommandHandler("splits", splits_command))
    application.add_handler(CommandHandler("impact", impact_command))
    application.add_handler(CommandHandler("history", history_command))
    application.add_handler(CommandHandler("export", export_command))

    application.add_handler(build_conversation_handler())

    print("Telegram bot configured for webhooks. Ready to be served by the WSGI app.")
    return application
