# interface/plotting/plot_expression.py

import pandas as pd
import plotly.express as px
from plotly.graph_objects import Figure
from typing import Optional, Sequence


def build_expression_plot(
    df: pd.DataFrame,
    symbol: str,
    identifier: str,
    group_variable: str = "group",
    groups: Optional[Sequence[str]] = None,
    show_points: bool = True,
    ylabel: str = "Expression (log₂)"
) -> Figure:
    """Box plot of one probe's values, one box per group."""
    order = list(groups) if groups else sorted(df["group"].unique())

    fig = px.box(
        df,
        x="group",
        y="value",
        color="group",
        points="all" if show_points else "outliers",
        hover_data=["sample"],
        labels={"group": group_variable, "value": ylabel},
        category_orders={"group": order},
        title=f"{symbol} ({identifier})"
    )

    fig.update_layout(margin=dict(t=60, b=40), showlegend=False)
    fig.update_xaxes(tickangle=0)
    return fig
