# livinsalti/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Gemini API
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

# Long-horizon growth estimates shown in tips and /impact
PROJECTION_ANNUAL_RATE = float(os.getenv("PROJECTION_ANNUAL_RATE", "0.08"))
PROJECTION_YEARS = int(os.getenv("PROJECTION_YEARS", "30"))
