# interface/gene_explorer.py

import streamlit as st

from expression_pipeline.errors import DatasetError
from expression_pipeline.state import CompareRequested, ComparisonView, ViewState
from expression_pipeline.summary import format_ttest
from expression_pipeline.types import ExpressionDataset
from interface.backend.config import AppConfig, ConfigError, load_config
from interface.backend.dataset import get_dataset
from interface.backend.session import get_comparison_view
from interface.plotting.plot_expression import build_expression_plot
from interface.plotting.utils import render_plot_data_tables


def _symbol_form(default_symbol: str):
    # a form so that typing does not rerun the comparison; only submitting does
    with st.form("gene_form"):
        col_input, col_button = st.columns([4, 1], vertical_alignment="bottom")
        with col_input:
            symbol = st.text_input("Gene symbol", value=default_symbol, placeholder="e.g., ESR1")
        with col_button:
            submitted = st.form_submit_button("Compare", type="primary", use_container_width=True)
    return symbol if submitted else None


def _render_view(view: ComparisonView, dataset: ExpressionDataset, cfg: AppConfig):
    if view.state == ViewState.IDLE:
        st.info("Enter a gene symbol and press **Compare**.")
        return

    if view.not_found:
        st.warning(f"No probe is annotated with `{view.symbol}`. Symbols are case-sensitive.")
        return

    if view.error:
        st.warning(f"⚠️ Could not compare `{view.symbol}`: {view.error}")
        return

    comparison = view.result
    test = comparison.test

    if len(comparison.candidates) > 1:
        st.caption(
            f"`{comparison.symbol}` maps to {len(comparison.candidates)} probes "
            f"({', '.join(comparison.candidates)}); showing the first, `{comparison.identifier}`."
        )

    col_plot, col_stats = st.columns([3, 2])

    with col_plot:
        fig = build_expression_plot(
            comparison.frame,
            symbol=comparison.symbol,
            identifier=comparison.identifier,
            group_variable=dataset.group_variable,
            groups=test.groups,
            show_points=cfg.ui.show_points
        )
        st.plotly_chart(fig, use_container_width=True)

    with col_stats:
        st.markdown("### Statistical Test")
        label = f"{comparison.symbol} ({comparison.identifier}) by {dataset.group_variable}"
        st.code(format_ttest(test, label=label), language=None)

        if test.pvalue < cfg.analysis.alpha:
            st.success(f"Significant difference between groups at α = {cfg.analysis.alpha:g}.")
        else:
            st.info(f"No significant difference between groups at α = {cfg.analysis.alpha:g}.")

    render_plot_data_tables(comparison, dataset.group_variable)


def run():
    st.title("Gene Explorer")

    try:
        cfg = load_config()
        dataset = get_dataset()
    except (ConfigError, DatasetError) as e:
        st.error(f"❌ Could not load the dataset: {e}")
        return

    st.caption(f"{dataset.name} | comparing groups of `{dataset.group_variable}`")

    view = get_comparison_view()
    symbol = _symbol_form(cfg.ui.default_symbol)
    if symbol is not None:
        view.handle(
            CompareRequested(symbol),
            dataset,
            equal_var=cfg.analysis.equal_var,
            conf_level=cfg.analysis.conf_level
        )

    _render_view(view, dataset, cfg)


run()
