# tests/test_text_utils.py
import unittest

from livinsalti.utils.text_utils import (
    parse_cadence,
    parse_expense_line,
    parse_income_line,
    parse_money,
    parse_spent_args,
    parse_splits_args,
)


class TestParseMoney(unittest.TestCase):
    def test_plain_numbers(self):
        self.assertEqual(parse_money("1200"), 1200.0)
        self.assertEqual(parse_money("15.99"), 15.99)

    def test_dollar_sign_and_thousands(self):
        self.assertEqual(parse_money("$1,200.50"), 1200.5)
        self.assertEqual(parse_money("1,200"), 1200.0)

    def test_decimal_comma(self):
        self.assertEqual(parse_money("18,50"), 18.5)
        self.assertEqual(parse_money("1,5"), 1.5)
        self.assertEqual(parse_money("12,5"), 12.5)

    def test_not_money(self):
        self.assertIsNone(parse_money(""))
        self.assertIsNone(parse_money("abc"))
        self.assertIsNone(parse_money("-5"))
        self.assertIsNone(parse_money("1.2.3"))


class TestParseCadence(unittest.TestCase):
    def test_aliases(self):
        self.assertEqual(parse_cadence("Monthly"), "monthly")
        self.assertEqual(parse_cadence("bi-weekly"), "biweekly")
        self.assertEqual(parse_cadence("yearly"), "annual")
        self.assertEqual(parse_cadence("week."), "weekly")
        self.assertIsNone(parse_cadence("daily"))


class TestParseIncomeLine(unittest.TestCase):
    def test_full_line(self):
        self.assertEqual(
            parse_income_line("2000 monthly Salary"),
            {"amount": 2000.0, "cadence": "monthly", "source": "Salary"},
        )

    def test_any_word_order(self):
        self.assertEqual(
            parse_income_line("Side gig $450 weekly"),
            {"amount": 450.0, "cadence": "weekly", "source": "Side gig"},
        )

    def test_defaults(self):
        self.assertEqual(
            parse_income_line("700"),
            {"amount": 700.0, "cadence": "weekly", "source": "Primary Income"},
        )

    def test_no_amount(self):
        self.assertIsNone(parse_income_line("my salary"))


class TestParseExpenseLine(unittest.TestCase):
    def test_full_line(self):
        self.assertEqual(
            parse_expense_line("Rent 1200 monthly"),
            {"name": "Rent", "amount": 1200.0, "cadence": "monthly"},
        )

    def test_defaults_to_monthly(self):
        self.assertEqual(
            parse_expense_line("Car insurance 1,200"),
            {"name": "Car insurance", "amount": 1200.0, "cadence": "monthly"},
        )

    def test_slash_cadence(self):
        self.assertEqual(
            parse_expense_line("Gym 30/week"),
            {"name": "Gym", "amount": 30.0, "cadence": "weekly"},
        )

    def test_decimal_comma_bill(self):
        self.assertEqual(
            parse_expense_line("Coffee 4,5 weekly"),
            {"name": "Coffee", "amount": 4.5, "cadence": "weekly"},
        )

    def test_unreadable_number_stays_in_the_name(self):
        self.assertEqual(
            parse_expense_line("Plan 1.2.3 30 monthly"),
            {"name": "Plan 1.2.3", "amount": 30.0, "cadence": "monthly"},
        )
        self.assertIsNone(parse_income_line("1.2.3 weekly"))

    def test_needs_name_and_amount(self):
        self.assertIsNone(parse_expense_line("1200 monthly"))
        self.assertIsNone(parse_expense_line("Rent"))


class TestParseSplitsArgs(unittest.TestCase):
    def test_save_and_splits(self):
        self.assertEqual(
            parse_splits_args(["save=0.3", "groceries=50%", "Eating-Out=0.2"]),
            {"save_rate": 0.3, "splits": {"groceries": 0.5, "eating_out": 0.2}},
        )

    def test_without_save(self):
        self.assertEqual(
            parse_splits_args(["fun=1"]),
            {"save_rate": None, "splits": {"fun": 1.0}},
        )

    def test_malformed(self):
        self.assertIsNone(parse_splits_args(["groceries"]))
        self.assertIsNone(parse_splits_args(["groceries=lots"]))
        self.assertIsNone(parse_splits_args(["=0.5"]))


class TestParseSpentArgs(unittest.TestCase):
    def test_category_and_amount(self):
        self.assertEqual(parse_spent_args(["groceries", "12.50"]), ("groceries", 12.5))
        self.assertEqual(parse_spent_args(["Eating", "Out", "$8"]), ("eating_out", 8.0))
        self.assertEqual(parse_spent_args(["eating-out", "4,5"]), ("eating_out", 4.5))

    def test_malformed(self):
        self.assertIsNone(parse_spent_args([]))
        self.assertIsNone(parse_spent_args(["12.50"]))
        self.assertIsNone(parse_spent_args(["groceries", "lots"]))


if __name__ == '__main__':
    unittest.main()
