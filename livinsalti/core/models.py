# livinsalti/core/models.py
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

# Canonical variable-spending categories, in display order.
CANONICAL_CATEGORIES = ("groceries", "gas", "eating_out", "fun", "misc")

DEFAULT_SPLITS = {
    "groceries": 0.40,
    "gas": 0.20,
    "eating_out": 0.20,
    "fun": 0.15,
    "misc": 0.05,
}
DEFAULT_SAVE_RATE = 0.20

STATUS_HEALTHY = "healthy"
STATUS_WARNING = "warning"
STATUS_CRITICAL = "critical"


class InvalidInputError(ValueError):
    """Structurally invalid input handed to one of the pure budget functions."""


def to_cents(amount: float) -> int:
    """Rounds a dollar amount to integer cents (half up)."""
    return int(Decimal(repr(float(amount))).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def category_label(name: str) -> str:
    """'eating_out' -> 'Eating Out'"""
    return " ".join(word.capitalize() for word in name.replace("_", " ").split())


@dataclass(frozen=True)
class Income:
    amount: float
    cadence: str = "weekly"
    source: str = ""

    def is_valid(self) -> bool:
        return self.amount > 0 and bool(self.source.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Income":
        return cls(
            amount=data.get("amount", 0),
            cadence=data.get("cadence") or "weekly",
            source=data.get("source") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "cadence": self.cadence, "source": self.source}


@dataclass(frozen=True)
class FixedExpense:
    name: str
    amount: float
    cadence: str = "monthly"

    def is_valid(self) -> bool:
        return self.amount > 0 and bool(self.name.strip())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FixedExpense":
        return cls(
            name=data.get("name") or "",
            amount=data.get("amount", 0),
            cadence=data.get("cadence") or "monthly",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "amount": self.amount, "cadence": self.cadence}


@dataclass(frozen=True)
class VariablePreferences:
    save_rate: float = DEFAULT_SAVE_RATE
    splits: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_SPLITS))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "VariablePreferences":
        if not data:
            return cls()
        save_rate = data.get("save_rate")
        return cls(
            save_rate=DEFAULT_SAVE_RATE if save_rate is None else save_rate,
            splits=dict(data.get("splits") or DEFAULT_SPLITS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"save_rate": self.save_rate, "splits": dict(self.splits)}


@dataclass(frozen=True)
class Goal:
    name: str
    target_amount: float
    due_date: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            name=data.get("name") or "",
            target_amount=data.get("target_amount", 0),
            due_date=data.get("due_date") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "target_amount": self.target_amount, "due_date": self.due_date}


@dataclass(frozen=True)
class BudgetInput:
    incomes: Tuple[Income, ...] = ()
    fixed_expenses: Tuple[FixedExpense, ...] = ()
    variable_preferences: VariablePreferences = field(default_factory=VariablePreferences)
    goals: Tuple[Goal, ...] = ()

    def cleaned(self) -> "BudgetInput":
        """Keeps only the incomes and fixed expenses worth computing, in entry order."""
        return BudgetInput(
            incomes=tuple(i for i in self.incomes if i.is_valid()),
            fixed_expenses=tuple(e for e in self.fixed_expenses if e.is_valid()),
            variable_preferences=self.variable_preferences,
            goals=self.goals,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BudgetInput":
        return cls(
            incomes=tuple(Income.from_dict(i) for i in data.get("incomes") or []),
            fixed_expenses=tuple(FixedExpense.from_dict(e) for e in data.get("fixed_expenses") or []),
            variable_preferences=VariablePreferences.from_dict(data.get("variable_preferences")),
            goals=tuple(Goal.from_dict(g) for g in data.get("goals") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "incomes": [i.to_dict() for i in self.incomes],
            "fixed_expenses": [e.to_dict() for e in self.fixed_expenses],
            "variable_preferences": self.variable_preferences.to_dict(),
            "goals": [g.to_dict() for g in self.goals],
        }


@dataclass(frozen=True)
class Allocation:
    name: str
    weekly_cents: int
    type: str = "variable"

    @property
    def label(self) -> str:
        return category_label(self.name)

    @property
    def weekly_amount(self) -> float:
        return self.weekly_cents / 100


@dataclass(frozen=True)
class WeeklyTotals:
    income_cents: int
    fixed_cents: int
    remainder_before_save_cents: int
    save_n_stack_cents: int
    variable_total_cents: int
    remainder_cents: int
    allocations: Tuple[Allocation, ...]

    # Dollar views for display; storage and math stay in cents.
    @property
    def income(self) -> float:
        return self.income_cents / 100

    @property
    def fixed(self) -> float:
        return self.fixed_cents / 100

    @property
    def remainder_before_save(self) -> float:
        return self.remainder_before_save_cents / 100

    @property
    def save_n_stack(self) -> float:
        return self.save_n_stack_cents / 100

    @property
    def variable_total(self) -> float:
        return self.variable_total_cents / 100

    @property
    def remainder(self) -> float:
        return self.remainder_cents / 100

    def allocation(self, name: str) -> Optional[Allocation]:
        return next((a for a in self.allocations if a.name == name), None)


@dataclass(frozen=True)
class WeeklyBudgetResult:
    weekly: WeeklyTotals
    status: str
    tips: Tuple[str, ...]
    tier: str
    save_rate: float

    def to_dict(self) -> Dict[str, Any]:
        w = self.weekly
        return {
            "weekly": {
                "income_cents": w.income_cents,
                "fixed_cents": w.fixed_cents,
                "remainder_before_save_cents": w.remainder_before_save_cents,
                "save_n_stack_cents": w.save_n_stack_cents,
                "variable_total_cents": w.variable_total_cents,
                "remainder_cents": w.remainder_cents,
                "allocations": [
                    {"type": a.type, "name": a.name, "weekly_cents": a.weekly_cents}
                    for a in w.allocations
                ],
            },
            "status": self.status,
            "tips": list(self.tips),
            "tier": self.tier,
            "save_rate": self.save_rate,
        }


@dataclass(frozen=True)
class SaveResult:
    success: bool
    budget_id: Optional[str] = None
    error: Optional[str] = None


def ordered_categories(splits: Dict[str, float]) -> List[str]:
    """Canonical categories first (when present), then custom ones in insertion order."""
    canonical = [name for name in CANONICAL_CATEGORIES if name in splits]
    custom = [name for name in splits if name not in CANONICAL_CATEGORIES]
    return canonical + custom
