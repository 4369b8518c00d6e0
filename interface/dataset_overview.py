# interface/dataset_overview.py

import pandas as pd
import streamlit as st

from expression_pipeline.errors import DatasetError
from interface.backend.config import ConfigError
from interface.backend.dataset import get_dataset


def run():
    st.title("Dataset Overview")

    try:
        dataset = get_dataset()
    except (ConfigError, DatasetError) as e:
        st.error(f"❌ Could not load the dataset: {e}")
        return

    st.markdown(f"**{dataset.name}**")

    annotated = set(dataset.annotations["identifier"])
    unannotated = [i for i in dataset.identifiers if i not in annotated]

    col1, col2, col3 = st.columns(3)
    col1.metric("Probes", len(dataset.identifiers))
    col2.metric("Samples", len(dataset.samples))
    col3.metric("Unannotated probes", len(unannotated))

    col_groups, col_dupes = st.columns(2)

    with col_groups:
        st.markdown(f"**Samples per `{dataset.group_variable}` group**")
        counts = (
            dataset.group_labels.reindex(dataset.samples)
            .fillna("(missing)")
            .value_counts()
            .rename_axis(dataset.group_variable)
            .reset_index(name="Samples")
        )
        st.dataframe(counts, use_container_width=True, hide_index=True)

    with col_dupes:
        st.markdown("**Symbols measured by several probes**")
        with st.container(height=60, border=False):
            st.text("Only the first probe listed for a symbol is used in comparisons.")
        probes = dataset.annotations.groupby("symbol", sort=False)["identifier"].agg(list)
        dupes = probes[probes.apply(len) > 1]
        st.dataframe(
            pd.DataFrame({"Symbol": dupes.index, "Probes": dupes.values}),
            column_config={"Probes": st.column_config.ListColumn("Probes (in order)")},
            use_container_width=True,
            hide_index=True
        )

    with st.expander("Annotation Table"):
        st.dataframe(dataset.annotations, use_container_width=True, hide_index=True)


run()
