# livinsalti/core/charts.py
import io
from typing import Any, Dict, List, Union

import matplotlib
matplotlib.use("Agg")  # rendered to PNG buffers, never to a window
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['legend.fontsize'] = 10

COLORS = {
    'Fixed': '#dc3545',
    'Save n Stack': '#28a745',
    'Variable': '#007bff',
    'Income': '#343a40',
}

# weekly_budgets column -> dollar column shown in charts and exports
MONEY_COLUMNS = {
    'income_weekly': 'income',
    'fixed_weekly': 'fixed',
    'save_n_stack': 'save_n_stack',
    'variable_total': 'variable_total',
}


def history_dataframe(history: List[Dict[str, Any]]) -> pd.DataFrame:
    """Stored weekly budgets (cents) as a DataFrame in dollars, oldest week first."""
    df = pd.DataFrame(history)
    if df.empty:
        return df

    for column in MONEY_COLUMNS:
        if column not in df.columns:
            df[column] = 0
    df = df.rename(columns=MONEY_COLUMNS)
    for column in MONEY_COLUMNS.values():
        df[column] = pd.to_numeric(df[column], errors='coerce').fillna(0) / 100

    df['week_start_date'] = pd.to_datetime(df['week_start_date'])
    if 'week_end_date' in df.columns:
        df['week_end_date'] = pd.to_datetime(df['week_end_date'])
    if 'status' not in df.columns:
        df['status'] = None
    return df.sort_values('week_start_date').reset_index(drop=True)


def generate_budget_history_chart(history: List[Dict[str, Any]]) -> Union[io.BytesIO, None]:
    """Stacked bars per week (fixed, Save n Stack, variable) with the income line on top."""
    df = history_dataframe(history)
    if df.empty:
        return None

    labels = df['week_start_date'].dt.strftime('%b %d')
    fig, ax = plt.subplots(figsize=(12, 7))

    ax.bar(labels, df['fixed'], color=COLORS['Fixed'], label='Fixed')
    ax.bar(labels, df['save_n_stack'], bottom=df['fixed'], color=COLORS['Save n Stack'], label='Save n Stack')
    ax.bar(labels, df['variable_total'], bottom=df['fixed'] + df['save_n_stack'],
           color=COLORS['Variable'], label='Variable')
    ax.plot(labels, df['income'], color=COLORS['Income'], marker='o', linewidth=2, label='Income')

    ax.set_title('Weekly Budget History', fontsize=16, fontweight='bold')
    ax.set_ylabel('Amount ($)')
    ax.set_xlabel('Week of')
    ax.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.0f}'))
    ax.legend(title='Per week')
    plt.xticks(rotation=45, ha='right')
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format='png')
    buf.seek(0)
    plt.close(fig)
    return buf
