# interface/plotting/utils.py

import streamlit as st

from expression_pipeline.types import GeneComparison


def render_plot_data_tables(comparison: GeneComparison, group_variable: str):
    with st.expander("Show Group Statistics"):
        st.dataframe(
            comparison.box_stats.rename(columns={"group": group_variable}),
            column_config={
                "mean": st.column_config.NumberColumn("Mean", format="%.3f"),
                "sd": st.column_config.NumberColumn("SD", format="%.3f"),
                "median": st.column_config.NumberColumn("Median", format="%.3f"),
            },
            use_container_width=True,
            hide_index=True
        )

    with st.expander("Show Raw Plot Values"):
        df_display = comparison.frame.sort_values(by=["group", "sample"])
        if df_display.empty:
            st.caption("*(empty)*")
            return
        st.dataframe(
            df_display.rename(columns={"group": group_variable, "value": comparison.identifier}),
            use_container_width=True,
            hide_index=True
        )
