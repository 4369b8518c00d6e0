import logging

import streamlit as st

from interface.backend.session import initialize_session_state

st.set_page_config(page_title="Expression Explorer", layout="wide")

__VERSION__="1.0.0"
__COMMENT__=""

from expression_pipeline.errors import DatasetError
from interface.backend.config import ConfigError, load_config
from interface.backend.dataset import get_dataset
from interface.backend.session_io import (
    session_export_button,
    session_restart_button
)


def configure_logging():
    try:
        level = load_config().log_level
    except ConfigError:
        level = "INFO"
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def main():
    configure_logging()
    initialize_session_state()

    custom_pages = {"Expression Explorer": []}

    custom_pages["Expression Explorer"].append(
        st.Page("interface/home.py", title="Home", icon=":material/info:")
    )

    custom_pages["Expression Explorer"].append(
        st.Page("interface/gene_explorer.py", title="Gene Explorer", icon=":material/search:")
    )

    custom_pages["Expression Explorer"].append(
        st.Page("interface/dataset_overview.py", title="Dataset", icon=":material/table_chart:")
    )

    page = st.navigation(custom_pages)
    page.run()

    st.divider()

    with st.sidebar:
        st.caption("Session Options")
        col_export, col_del = st.columns([6, 1])

        with col_export:
            try:
                session_export_button(st.session_state["comparison_view"], get_dataset())
            except (ConfigError, DatasetError):
                st.button("Export", use_container_width=True, disabled=True)

        with col_del:
            session_restart_button()

    st.divider()
    st.caption(f"expression-explorer v {__VERSION__}{': ' + __COMMENT__ if __COMMENT__ else ''}")

if __name__ == "__main__":
    main()
