# tests/test_handlers.py
import importlib
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from telegram.ext import ConversationHandler

from livinsalti.bot.handlers import (
    ASKING_CONFIRMATION,
    ASKING_FIXED_EXPENSES,
    ASKING_INCOME,
    handle_confirmation,
    handle_fixed_expenses,
    handle_income,
    start_wizard,
)
from livinsalti.core.models import SaveResult, VariablePreferences
from livinsalti.core.plans import FREE_CAPABILITIES, PRO_CAPABILITIES

# Handler modules share their function's name, so fetch the modules themselves for patching.
confirmation_module = importlib.import_module("livinsalti.bot.handlers.handle_confirmation")
fixed_expenses_module = importlib.import_module("livinsalti.bot.handlers.handle_fixed_expenses")
summary_module = importlib.import_module("livinsalti.bot.handlers.aux.budget_summary")


def make_update(text: str, user_id: int = 42) -> MagicMock:
    update = MagicMock()
    update.message.text = text
    update.message.chat_id = user_id
    update.message.reply_text = AsyncMock()
    update.effective_user.id = user_id
    return update


def make_context(user_data=None) -> MagicMock:
    context = MagicMock()
    context.user_data = {} if user_data is None else user_data
    context.bot_data = {"supabase_client": MagicMock()}
    return context


def pending(incomes=None, fixed_expenses=None):
    return {
        "incomes": incomes or [{"amount": 700, "cadence": "weekly", "source": "Job"}],
        "fixed_expenses": fixed_expenses or [],
        "variable_preferences": None,
        "goals": [],
    }


class TestWizard(unittest.IsolatedAsyncioTestCase):
    async def test_start_wizard(self):
        update, context = make_update("/wizard"), make_context()
        state = await start_wizard(update, context)
        self.assertEqual(state, ASKING_INCOME)
        self.assertEqual(context.user_data["pending_budget"]["incomes"], [])

    async def test_income_lines(self):
        update = make_update("2000 monthly Salary\n450 weekly Side gig\nlots of money")
        context = make_context({"pending_budget": pending()})

        state = await handle_income(update, context)

        self.assertEqual(state, ASKING_FIXED_EXPENSES)
        incomes = context.user_data["pending_budget"]["incomes"]
        self.assertEqual([i["source"] for i in incomes], ["Salary", "Side gig"])
        self.assertIn("Skipped", update.message.reply_text.call_args[0][0])

    async def test_income_without_amount_asks_again(self):
        update, context = make_update("a lot"), make_context({"pending_budget": pending()})
        self.assertEqual(await handle_income(update, context), ASKING_INCOME)

    async def test_no_fixed_expenses(self):
        context = make_context({"pending_budget": pending()})
        with patch.object(fixed_expenses_module, "send_budget_summary", AsyncMock(return_value=MagicMock())) as mock_summary:
            state = await handle_fixed_expenses(make_update("none"), context)

        self.assertEqual(state, ASKING_CONFIRMATION)
        self.assertEqual(mock_summary.call_args[0][2]["fixed_expenses"], [])

    async def test_fixed_expenses_are_parsed(self):
        context = make_context({"pending_budget": pending()})
        with patch.object(fixed_expenses_module, "send_budget_summary", AsyncMock(return_value=MagicMock())) as mock_summary:
            await handle_fixed_expenses(make_update("Rent 1200 monthly\nPhone 45"), context)

        expenses = mock_summary.call_args[0][2]["fixed_expenses"]
        self.assertEqual(expenses[0], {"name": "Rent", "amount": 1200.0, "cadence": "monthly"})
        self.assertEqual(expenses[1]["name"], "Phone")

    async def test_unreadable_fixed_expense_asks_again(self):
        context = make_context({"pending_budget": pending()})
        state = await handle_fixed_expenses(make_update("Rent"), context)
        self.assertEqual(state, ASKING_FIXED_EXPENSES)

    async def test_fixed_expenses_without_pending_budget(self):
        state = await handle_fixed_expenses(make_update("none"), make_context())
        self.assertEqual(state, ConversationHandler.END)


class TestBudgetSummary(unittest.IsolatedAsyncioTestCase):
    @patch('builtins.print')
    async def test_summary_for_free_user(self, mock_print):
        update, context = make_update("none"), make_context()
        with patch.object(summary_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            result = await summary_module.send_budget_summary(update, context, pending())

        self.assertEqual(result.weekly.save_n_stack_cents, 14000)
        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Save n Stack (20%): *$140.00*", message)
        self.assertIn("Groceries: $224.00", message)
        self.assertIn("pending_budget", context.user_data)

    @patch('builtins.print')
    async def test_paywall_message(self, mock_print):
        update, context = make_update("none"), make_context()
        two_incomes = pending(incomes=[
            {"amount": 700, "cadence": "weekly", "source": "Job"},
            {"amount": 300, "cadence": "weekly", "source": "Side gig"},
        ])
        with patch.object(summary_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            result = await summary_module.send_budget_summary(update, context, two_incomes)

        first_reply = update.message.reply_text.call_args_list[0][0][0]
        self.assertIn("Upgrade to Pro", first_reply)
        self.assertEqual(result.weekly.income_cents, 70000)

    @patch('builtins.print')
    async def test_pro_user_gets_saved_splits(self, mock_print):
        update, context = make_update("none"), make_context()
        saved = VariablePreferences(save_rate=0.5, splits={"groceries": 1})
        with patch.object(summary_module, "load_user_plan", return_value=("pro", PRO_CAPABILITIES, saved)):
            result = await summary_module.send_budget_summary(update, context, pending())

        self.assertEqual(result.weekly.save_n_stack_cents, 35000)
        self.assertEqual(result.weekly.allocation("groceries").weekly_cents, 35000)

    async def test_no_income(self):
        update, context = make_update("none"), make_context()
        with patch.object(summary_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            result = await summary_module.send_budget_summary(update, context, pending(incomes=[{"amount": 0}]))
        self.assertIsNone(result)

    async def test_huge_income_is_reported(self):
        update, context = make_update("none"), make_context()
        huge = pending(incomes=[{"amount": 1e30, "cadence": "weekly", "source": "Job"}])
        with patch.object(summary_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            result = await summary_module.send_budget_summary(update, context, huge)

        self.assertIsNone(result)
        self.assertIn("too large", update.message.reply_text.call_args[0][0])
        self.assertNotIn("pending_budget", context.user_data)

    async def test_goals_are_listed(self):
        update, context = make_update("none"), make_context()
        budget = dict(pending(), goals=[{"name": "Car", "target_amount": 5000, "due_date": "2027-06-01"}])
        with patch.object(summary_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)):
            await summary_module.send_budget_summary(update, context, budget)

        message = update.message.reply_text.call_args[0][0]
        self.assertIn("Goals", message)
        self.assertIn("Car: $5,000.00 by 2027-06-01", message)


class TestConfirmation(unittest.IsolatedAsyncioTestCase):
    async def test_yes_saves_the_budget(self):
        update = make_update("Yes ✅")
        context = make_context({"pending_budget": pending()})
        with patch.object(confirmation_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)), \
                patch.object(confirmation_module, "db") as mock_db:
            mock_db.save_weekly_budget.return_value = SaveResult(success=True, budget_id="b1")
            state = await handle_confirmation(update, context)

        self.assertEqual(state, ConversationHandler.END)
        args = mock_db.save_weekly_budget.call_args[0]
        self.assertEqual(args[1], "42")
        self.assertEqual(args[3].weekly.save_n_stack_cents, 14000)
        self.assertIn("saved", update.message.reply_text.call_args[0][0])
        self.assertNotIn("pending_budget", context.user_data)

    async def test_save_failure_is_reported(self):
        update = make_update("yes")
        context = make_context({"pending_budget": pending()})
        with patch.object(confirmation_module, "load_user_plan", return_value=("free", FREE_CAPABILITIES, None)), \
                patch.object(confirmation_module, "db") as mock_db:
            mock_db.save_weekly_budget.return_value = SaveResult(success=False, error="timeout")
            await handle_confirmation(update, context)

        self.assertIn("couldn't save", update.message.reply_text.call_args[0][0])

    async def test_no_discards(self):
        update = make_update("No ❌")
        context = make_context({"pending_budget": pending()})
        with patch.object(confirmation_module, "db") as mock_db:
            state = await handle_confirmation(update, context)

        self.assertEqual(state, ConversationHandler.END)
        mock_db.save_weekly_budget.assert_not_called()
        self.assertNotIn("pending_budget", context.user_data)

    async def test_other_answer_asks_again(self):
        update = make_update("maybe")
        context = make_context({"pending_budget": pending()})
        self.assertEqual(await handle_confirmation(update, context), ASKING_CONFIRMATION)

    async def test_nothing_pending(self):
        state = await handle_confirmation(make_update("yes"), make_context())
        self.assertEqual(state, ConversationHandler.END)


if __name__ == '__main__':
    unittest.main()
