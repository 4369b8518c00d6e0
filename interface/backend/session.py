# interface/backend/session.py

import streamlit as st

from expression_pipeline.state import ComparisonView


def initialize_session_state():
    defaults = {
        "comparison_view": ComparisonView,
    }

    for key, factory in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = factory()


def get_comparison_view() -> ComparisonView:
    initialize_session_state()
    return st.session_state["comparison_view"]
