from .states import ASKING_INCOME, ASKING_FIXED_EXPENSES, ASKING_CONFIRMATION
from .handle_initial_message import handle_initial_message, start_wizard
from .handle_income import handle_income
from .handle_fixed_expenses import handle_fixed_expenses
from .handle_confirmation import handle_confirmation, cancel

ALL_HANDLERS = {
    start_wizard,
    handle_initial_message,
    handle_income,
    handle_fixed_expenses,
    handle_confirmation,
    cancel,
}
