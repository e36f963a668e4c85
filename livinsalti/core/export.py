# livinsalti/core/export.py
import io
from typing import Any, Dict, List, Union

import pandas as pd

from livinsalti.core.charts import history_dataframe

EXPORT_COLUMNS = ['week_start_date', 'week_end_date', 'income', 'fixed', 'save_n_stack', 'variable_total', 'status']


def export_budget_history_csv(history: List[Dict[str, Any]]) -> Union[io.BytesIO, None]:
    """CSV of the stored weekly budgets (dollars, oldest week first), ready to send as a file."""
    df = history_dataframe(history)
    if df.empty:
        return None

    for column in EXPORT_COLUMNS:
        if column not in df.columns:
            df[column] = None
    df = df[EXPORT_COLUMNS].copy()
    df['week_start_date'] = df['week_start_date'].dt.strftime('%Y-%m-%d')
    if pd.api.types.is_datetime64_any_dtype(df['week_end_date']):
        df['week_end_date'] = df['week_end_date'].dt.strftime('%Y-%m-%d')

    buf = io.BytesIO(df.to_csv(index=False, float_format='%.2f').encode('utf-8'))
    buf.seek(0)
    return buf
