# interface/backend/session_io.py

import json
import streamlit as st

from expression_pipeline.converters import comparison_to_dict
from expression_pipeline.state import ComparisonView
from expression_pipeline.types import ExpressionDataset
from interface.backend.session_schema import SessionExport


def serialize_session(view: ComparisonView, dataset: ExpressionDataset) -> SessionExport:
    """Convert the current comparison view to a JSON-safe dict."""
    return SessionExport(
        dataset=dataset.name,
        group_variable=dataset.group_variable,
        symbol=view.symbol,
        state=view.state.value,
        error=view.error,
        comparison=comparison_to_dict(view.result) if view.result is not None else None,
    )


def session_export_button(view: ComparisonView, dataset: ExpressionDataset):
    if view.result is None:
        st.button("Export", use_container_width=True, disabled=True)
        return

    if st.button("Export", use_container_width=True):
        session_data = serialize_session(view, dataset)
        st.download_button(
            label="Download JSON",
            data=json.dumps(session_data, indent=2),
            file_name=f"{view.result.symbol}_comparison.json",
            mime="application/json",
            use_container_width=True
        )


@st.dialog("Restart Session")
def session_restart_dialog():
    st.error("This will clear the current comparison.")
    if st.button("Confirm Reset", type="primary"):
        st.session_state.clear()
        st.rerun()


def session_restart_button():
    if st.button("", type='primary', icon=":material/restart_alt:", use_container_width=True):
        session_restart_dialog()
