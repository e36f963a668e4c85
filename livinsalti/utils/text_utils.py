# livinsalti/utils/text_utils.py
import re
from typing import Any, Dict, Optional, Tuple

from livinsalti.core.cadence import CADENCES

# Words people actually type, mapped to the cadence names the engine accepts.
CADENCE_ALIASES = {
    "week": "weekly",
    "weekly": "weekly",
    "wk": "weekly",
    "biweekly": "biweekly",
    "bi-weekly": "biweekly",
    "fortnightly": "biweekly",
    "semimonthly": "semimonthly",
    "semi-monthly": "semimonthly",
    "month": "monthly",
    "monthly": "monthly",
    "mo": "monthly",
    "annual": "annual",
    "annually": "annual",
    "yearly": "annual",
    "year": "annual",
    "yr": "annual",
}

_AMOUNT_RE = re.compile(r"^\$?\d[\d.,]*$")


def parse_money(text: str) -> Optional[float]:
    """
    Reads a typed amount as dollars.
    Ex: "1200" -> 1200.0, "$1,200.50" -> 1200.5, "18,50" -> 18.5, "4,5" -> 4.5
    """
    if not text:
        return None
    s = text.strip().replace("$", "")
    if not s or not re.fullmatch(r"[\d.,]+", s):
        return None

    if "," in s and "." in s:
        s = s.replace(",", "")  # 1,200.50
    elif "," in s:
        head, _, tail = s.rpartition(",")
        # 18,50 and 4,5 use a decimal comma; 1,200 is a thousands separator
        s = f"{head.replace(',', '')}.{tail}" if len(tail) in (1, 2) else s.replace(",", "")
    try:
        return float(s)
    except ValueError:
        return None


def parse_cadence(word: str) -> Optional[str]:
    c = word.strip().lower().rstrip(".")
    if c in CADENCES:
        return c
    return CADENCE_ALIASES.get(c)


def _split_entry(line: str) -> Optional[Tuple[float, str, str]]:
    """Pulls (amount, cadence, label) out of a free-order line like 'Rent 1200 monthly'."""
    words = line.replace("/", " ").split()
    amount = None
    cadence = None
    label_words = []
    for word in words:
        if amount is None and _AMOUNT_RE.match(word):
            amount = parse_money(word)
            if amount is not None:
                continue
            # not a number after all (ex: "1.2.3"), keep it in the label
        if cadence is None and parse_cadence(word):
            cadence = parse_cadence(word)
            continue
        label_words.append(word)
    if amount is None:
        return None
    return amount, cadence or "", " ".join(label_words).strip()


def parse_income_line(line: str) -> Optional[Dict[str, Any]]:
    """
    "2000 monthly Salary" -> {"amount": 2000.0, "cadence": "monthly", "source": "Salary"}
    Cadence defaults to weekly and the source to "Primary Income".
    """
    parsed = _split_entry(line)
    if not parsed:
        return None
    amount, cadence, label = parsed
    return {"amount": amount, "cadence": cadence or "weekly", "source": label or "Primary Income"}


def parse_expense_line(line: str) -> Optional[Dict[str, Any]]:
    """
    "Rent 1200 monthly" -> {"name": "Rent", "amount": 1200.0, "cadence": "monthly"}
    Bills default to monthly. A line without a name is rejected.
    """
    parsed = _split_entry(line)
    if not parsed:
        return None
    amount, cadence, label = parsed
    if not label:
        return None
    return {"name": label, "amount": amount, "cadence": cadence or "monthly"}


def parse_splits_args(args) -> Optional[Dict[str, Any]]:
    """
    Turns ["save=0.3", "groceries=50%", "fun=0.2"] into
    {"save_rate": 0.3 or None, "splits": {"groceries": 0.5, "fun": 0.2}}.
    Returns None if any pair is malformed.
    """
    save_rate = None
    splits: Dict[str, float] = {}
    for arg in args:
        key, sep, raw = arg.partition("=")
        key = key.strip().lower().replace(" ", "_").replace("-", "_")
        raw = raw.strip()
        if not sep or not key or not raw:
            return None
        percent = raw.endswith("%")
        value = parse_money(raw.rstrip("%"))
        if value is None:
            return None
        if percent:
            value = value / 100
        if key in ("save", "save_rate"):
            save_rate = value
        else:
            splits[key] = value
    return {"save_rate": save_rate, "splits": splits}


def parse_spent_args(args) -> Optional[Tuple[str, float]]:
    """
    ["eating", "out", "12.50"] -> ("eating_out", 12.5)
    The amount is the last argument, everything before it names the category.
    """
    if not args or len(args) < 2:
        return None
    amount = parse_money(args[-1])
    category = "_".join(" ".join(args[:-1]).lower().replace("-", " ").split())
    if amount is None or not category:
        return None
    return category, amount
