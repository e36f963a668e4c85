# livinsalti/core/ai.py
import json
import datetime
from typing import Any, Dict, Union

import google.generativeai as genai
from google.generativeai.types import HarmCategory, HarmBlockThreshold

from livinsalti.config import GOOGLE_API_KEY, GEMINI_MODEL
from livinsalti.core.models import DEFAULT_SAVE_RATE, DEFAULT_SPLITS
from livinsalti.utils.date_utils import parse_due_date
from livinsalti.utils.text_utils import parse_cadence, parse_money

# Budget descriptions are personal finance talk; nothing here needs filtering.
safety_settings = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}

FALLBACK_REPLY = "Sorry, I couldn't process that right now. The AI model is offline or unavailable."


def ask_gemini(prompt: str, model: str = GEMINI_MODEL) -> str:
    """Sends a prompt to the Gemini model and returns its text reply."""
    try:
        genai.configure(api_key=GOOGLE_API_KEY)
        model_instance = genai.GenerativeModel(
            model_name=model, safety_settings=safety_settings
        )
        response = model_instance.generate_content(prompt)

        if not response.parts:
            print(f"DEBUG Gemini: empty or blocked response. Raw: {response}")
            return "The AI model returned an empty or blocked response."

        return response.text.strip()
    except Exception as e:
        print(f"Error talking to Gemini: {e}")
        if "404" in str(e):
            return "Sorry, the configured AI model was not found. Check the model name."
        return FALLBACK_REPLY


def _to_float(value: Any) -> Union[float, None]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return parse_money(value)
    return None


def _extract_json(response_text: str) -> Union[Dict[str, Any], None]:
    json_start = response_text.find("{")
    json_end = response_text.rfind("}")
    if json_start == -1 or json_end == -1:
        return None
    json_str = response_text[json_start : json_end + 1]
    json_str = "\n".join(
        line for line in json_str.split("\n") if not line.strip().startswith("//")
    )
    data = json.loads(json_str)
    return data if isinstance(data, dict) else None


def clean_budget_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalizes what the model returned into a BudgetInput-shaped dict:
    amounts as floats, missing sections filled with the defaults, goals
    without a usable date dropped.
    """
    incomes = []
    for income in data.get("incomes") or []:
        amount = _to_float(income.get("amount"))
        if amount is None:
            continue
        incomes.append({
            "amount": amount,
            "cadence": parse_cadence(income.get("cadence") or "") or "monthly",
            "source": income.get("source") or "Primary Income",
        })

    fixed_expenses = []
    for expense in data.get("fixed_expenses") or []:
        amount = _to_float(expense.get("amount"))
        if amount is None or not expense.get("name"):
            continue
        fixed_expenses.append({
            "name": expense["name"],
            "amount": amount,
            "cadence": parse_cadence(expense.get("cadence") or "") or "monthly",
        })

    preferences = data.get("variable_preferences") or {}
    save_rate = _to_float(preferences.get("save_rate"))
    splits = {}
    for name, weight in (preferences.get("splits") or {}).items():
        value = _to_float(weight)
        if value is not None:
            splits[name] = value

    goals = []
    for goal in data.get("goals") or []:
        target = _to_float(goal.get("target_amount"))
        if target is None or not goal.get("name") or not parse_due_date(goal.get("due_date")):
            continue
        goals.append({"name": goal["name"], "target_amount": target, "due_date": goal["due_date"]})

    return {
        "incomes": incomes,
        "fixed_expenses": fixed_expenses,
        "variable_preferences": {
            "save_rate": DEFAULT_SAVE_RATE if save_rate is None else save_rate,
            "splits": splits or dict(DEFAULT_SPLITS),
        },
        "goals": goals,
    }


def extract_budget_input(text: str) -> Union[Dict[str, Any], None]:
    """
    Asks Gemini to turn a free-text description of someone's money
    ("I make 2000 a month, rent is 1200...") into a budget input dict.
    """
    today_str = datetime.date.today().strftime("%Y-%m-%d")
    splits_str = ", ".join(f"{name}:{weight}" for name, weight in DEFAULT_SPLITS.items())
    splits_json = json.dumps(DEFAULT_SPLITS)

    prompt = f"""
    You are the Livin Salti Budget Assistant. Your only task is to extract financial information
    from the user's message and return ONLY a JSON object. No explanations, comments or extra formatting.

    Extract:
    1. Incomes (amount and cadence)
    2. Fixed expenses (rent, bills, subscriptions, with amount and cadence)
    3. Variable preferences (save rate and category splits)
    4. Savings goals (target amount and due date)

    Rules:
    - Cadence must be one of: weekly, biweekly, semimonthly, monthly, annual
    - If splits are missing, use the defaults: {splits_str}
    - If save_rate is missing, use {DEFAULT_SAVE_RATE}
    - Amounts are plain numbers in dollars. Infer reasonable cadences but never invent amounts.
    - Due dates must be YYYY-MM-DD. Today is {today_str}.

    JSON format:
    {{
      "incomes": [{{"amount": number, "cadence": string, "source": string}}],
      "fixed_expenses": [{{"name": string, "amount": number, "cadence": string}}],
      "variable_preferences": {{"save_rate": number, "splits": {{"groceries": number, "gas": number, "eating_out": number, "fun": number, "misc": number}}}},
      "goals": [{{"name": string, "target_amount": number, "due_date": string}}]
    }}

    Example:
    User: I get paid 1500 every two weeks, rent is 1100 a month and Netflix is 15.99
    Response: {{"incomes": [{{"amount": 1500, "cadence": "biweekly", "source": "Paycheck"}}], "fixed_expenses": [{{"name": "Rent", "amount": 1100, "cadence": "monthly"}}, {{"name": "Netflix", "amount": 15.99, "cadence": "monthly"}}], "variable_preferences": {{"save_rate": {DEFAULT_SAVE_RATE}, "splits": {splits_json}}}, "goals": []}}

    ---
    User message: {text}
    ---
    Output JSON:
    """
    response_text = ask_gemini(prompt)
    print(f"DEBUG Gemini budget response raw: {response_text}")

    try:
        data = _extract_json(response_text)
        if data is None:
            return None
        return clean_budget_payload(data)
    except (json.JSONDecodeError, ValueError, AttributeError) as e:
        print(f"Error decoding budget JSON from Gemini: {e}. Raw response: {response_text}")
    return None
