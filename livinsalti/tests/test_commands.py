# tests/test_commands.py
import importlib
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from livinsalti.bot.commands import budget_command, impact_command, plan_command, spent_command, splits_command
from livinsalti.core.models import BudgetInput, Goal, InvalidInputError, SaveResult, VariablePreferences
from livinsalti.core.plans import FREE_CAPABILITIES, PRO_CAPABILITIES

budget_module = importlib.import_module("livinsalti.bot.commands.budget")


def make_update(user_id: int = 42) -> MagicMock:
    update = MagicMock()
    update.message.reply_text = AsyncMock()
    update.effective_user.id = user_id
    return update


def make_context(args=None) -> MagicMock:
    context = MagicMock()
    context.args = args or []
    context.bot_data = {"supabase_client": MagicMock()}
    return context


class TestImpactCommand(unittest.IsolatedAsyncioTestCase):
    async def test_impact(self):
        update = make_update()
        await impact_command(update, make_context(["50"]))
        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Saving $50.00 a month could be worth", message)
        self.assertIn("Conservative", message)
        self.assertIn("Aggressive", message)

    async def test_usage(self):
        update = make_update()
        await impact_command(update, make_context(["lots"]))
        self.assertIn("Usage", update.message.reply_text.call_args[0][0])


class TestBudgetCommand(unittest.IsolatedAsyncioTestCase):
    async def test_shows_stored_week(self):
        update = make_update()
        stored = {
            "week_start_date": "2026-10-19", "status": "healthy",
            "income_weekly": 70000, "fixed_weekly": 0, "save_n_stack": 14000, "variable_total": 56000,
            "weekly_budget_lines": [
                {"type": "variable", "name": "eating_out", "weekly_amount": 11200},
                {"type": "save_n_stack", "name": "save_n_stack", "weekly_amount": 14000},
            ],
        }
        with patch.object(budget_module.db, "load_current_week_budget", return_value=stored) as mock_load:
            await budget_command(update, make_context())

        mock_load.assert_called_once()
        self.assertEqual(mock_load.call_args[0][1], "42")
        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Week of 2026-10-19", message)
        self.assertIn("Save n Stack: $140.00", message)
        self.assertIn("Eating Out: $112.00", message)

    async def test_shows_spending_and_goals(self):
        update = make_update()
        stored = {
            "week_start_date": "2026-10-19", "status": "healthy",
            "income_weekly": 70000, "fixed_weekly": 0, "save_n_stack": 14000, "variable_total": 56000,
            "weekly_budget_lines": [
                {"type": "variable", "name": "groceries", "weekly_amount": 22400, "actual_weekly": 1250},
                {"type": "variable", "name": "fun", "weekly_amount": 8400, "actual_weekly": 9000},
            ],
            "budget_input": BudgetInput(goals=(Goal("Car", 5000, "2027-06-01"),)),
        }
        with patch.object(budget_module.db, "load_current_week_budget", return_value=stored):
            await budget_command(update, make_context())

        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Groceries: $224.00 (spent $12.50, $211.50 left)", message)
        self.assertIn("Fun: $84.00 (spent $90.00, $6.00 over)", message)
        self.assertIn("Car: $5,000.00 by 2027-06-01", message)

    async def test_nothing_stored(self):
        update = make_update()
        with patch.object(budget_module.db, "load_current_week_budget", return_value=None):
            await budget_command(update, make_context())
        self.assertIn("/wizard", update.message.reply_text.call_args[0][0])


class TestSpentCommand(unittest.IsolatedAsyncioTestCase):
    async def test_logs_spending(self):
        update = make_update()
        with patch.object(budget_module.db, "record_spending", return_value=SaveResult(success=True, budget_id="b1")) as mock_record:
            await spent_command(update, make_context(["eating", "out", "12,50"]))

        args = mock_record.call_args[0]
        self.assertEqual(args[1:], ("42", "eating_out", 12.5))
        self.assertIn("Logged $12.50 on Eating Out", update.message.reply_text.call_args[0][0])

    async def test_usage(self):
        update = make_update()
        with patch.object(budget_module.db, "record_spending") as mock_record:
            await spent_command(update, make_context(["groceries"]))
        mock_record.assert_not_called()
        self.assertIn("Usage", update.message.reply_text.call_args[0][0])

    async def test_no_plan_this_week(self):
        update = make_update()
        failed = SaveResult(success=False, error=budget_module.db.NO_BUDGET_THIS_WEEK)
        with patch.object(budget_module.db, "record_spending", return_value=failed):
            await spent_command(update, make_context(["groceries", "5"]))
        self.assertIn("/wizard", update.message.reply_text.call_args[0][0])

    async def test_unknown_category(self):
        update = make_update()
        failed = SaveResult(success=False, budget_id="b1", error="No 'vacation' line in this week's budget")
        with patch.object(budget_module.db, "record_spending", return_value=failed):
            await spent_command(update, make_context(["vacation", "5"]))
        self.assertIn("No 'vacation' line", update.message.reply_text.call_args[0][0])

    async def test_amount_too_large(self):
        update = make_update()
        with patch.object(budget_module.db, "record_spending", side_effect=InvalidInputError("Spent amount is too large")):
            await spent_command(update, make_context(["groceries", "1" + "0" * 30]))
        self.assertIn("too large", update.message.reply_text.call_args[0][0])


class TestPlanCommand(
unittest.IsolatedAsyncioTestCase):
    async def test_free_plan(self):
        update = make_update()
        with patch.object(budget_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            await plan_command(update, make_context())
        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Your plan: Free", message)
        self.assertIn("Fixed bills: 4", message)


class TestSplitsCommand(unittest.IsolatedAsyncioTestCase):
    async def test_free_user_sees_paywall(self):
        update = make_update()
        with patch.object(budget_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)), \
                patch.object(budget_module.db, "update_default_splits") as mock_update:
            await splits_command(update, make_context(["save=0.3"]))

        mock_update.assert_not_called()
        self.assertEqual(update.message.reply_text.call_args[0][0], budget_module.PRO_ONLY_MESSAGE)

    async def test_pro_user_saves_splits(self):
        update = make_update()
        current = VariablePreferences(save_rate=0.25, splits={"groceries": 1})
        with patch.object(budget_module, "load_user_plan", return_value=("pro", PRO_CAPABILITIES, current)), \
                patch.object(budget_module.db, "update_default_splits", return_value=True) as mock_update:
            await splits_command(update, make_context(["fun=0.5", "gas=0.5"]))

        saved = mock_update.call_args[0][2]
        self.assertEqual(saved, VariablePreferences(save_rate=0.25, splits={"fun": 0.5, "gas": 0.5}))
        self.assertIn("Saved!", update.message.reply_text.call_args[0][0])

    async def test_invalid_save_rate(self):
        update = make_update()
        with patch.object(budget_module, "load_user_plan", return_value=("pro", PRO_CAPABILITIES, None)), \
                patch.object(budget_module.db, "update_default_splits") as mock_update:
            await splits_command(update, make_context(["save=1.5"]))

        mock_update.assert_not_called()
        self.assertIn("save_rate must be between 0 and 1", update.message.reply_text.call_args[0][0])


if __name__ == '__main__':
    unittest.main()
