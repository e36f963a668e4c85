# livinsalti/main.py
import asyncio
import sys
import traceback

from flask import Flask, request, jsonify
from telegram import Update

from livinsalti import config as settings
from livinsalti.bot.bot_setup import setup_and_run_bot
from livinsalti.core.db import get_supabase_client

print("DEBUG: Starting livinsalti/main.py")

# --- Application setup, runs once when the WSGI server imports the module ---
try:
    supabase_client = get_supabase_client()
    print("DEBUG: Supabase client initialized.")

    config = {
        "TELEGRAM_BOT_TOKEN": settings.TELEGRAM_BOT_TOKEN,
        "SUPABASE_CLIENT": supabase_client,
        "GOOGLE_API_KEY": settings.GOOGLE_API_KEY,
        "GEMINI_MODEL": settings.GEMINI_MODEL,
    }
    print(f"DEBUG: Bot config created: {config.keys()}")

    ptb_application = setup_and_run_bot(config)
    print("DEBUG: python-telegram-bot application configured.")

    # PTB needs initialize() exactly once before process_update()
    try:
        asyncio.run(ptb_application.initialize())
        print("DEBUG: python-telegram-bot application initialized.")
    except RuntimeError as e:
        if "cannot run an event loop while another loop is running" in str(e):
            print("DEBUG: Event loop already running, skipping asyncio.run(initialize()).")
        else:
            raise

    flask_app = Flask(__name__)

    WEBHOOK_PATH_SUFFIX = "/webhook"

    @flask_app.route("/health", methods=['GET'])
    def health():
        return jsonify({"status": "ok"}), 200

    @flask_app.route(WEBHOOK_PATH_SUFFIX, methods=['POST'])
    async def telegram_webhook():
        if not request.is_json:
            print("ERROR: Webhook received non-JSON request.")
            return jsonify({"status": "error", "message": "Request must be JSON"}), 400

        update_json = request.get_json()
        print(f"DEBUG: Webhook received update: {update_json.keys() if update_json else 'None'}")

        try:
            update = Update.de_json(update_json, ptb_application.bot)
            await ptb_application.process_update(update)
            return jsonify({"status": "ok"}), 200
        except Exception as e:
            print(f"ERROR: Failed to process Telegram update: {e}", file=sys.stderr)
            traceback.print_exc(file=sys.stderr)
            return jsonify({"status": "error", "message": "Failed to process update"}), 500

    wsgi_app = flask_app
    print("DEBUG: wsgi_app ready.")

except Exception as e:
    print(f"ERROR: Critical error while starting livinsalti/main.py: {e}", file=sys.stderr)
    traceback.print_exc(file=sys.stderr)
    raise
