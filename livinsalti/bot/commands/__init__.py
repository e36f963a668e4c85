from .utils import start_command, help_command
from .budget import budget_command, plan_command, spent_command, splits_command
from .projection import impact_command
from .history import history_command, export_command

ALL_COMMANDS = [
    start_command,
    help_command,
    budget_command,
    spent_command,
    plan_command,
    splits_command,
    impact_command,
    history_command,
    export_command,
]
