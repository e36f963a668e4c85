# --- Wizard conversation states ---
ASKING_INCOME = 0
ASKING_FIXED_EXPENSES = 1
ASKING_CONFIRMATION = 2
