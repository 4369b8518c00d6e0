# interface/home.py

import streamlit as st

def run():
    st.header("Welcome to the Expression Explorer")

    st.markdown(
        """
        This app compares the **expression of a single gene** between two groups of samples
        in a fixed, pre-loaded microarray dataset (e.g., tumours split by ER status).

        **How it works:**
        - Type a gene symbol (case-sensitive, e.g., `ESR1`) and press **Compare**
        - The symbol is matched against the probe annotations; if several probes carry it, the first is used
        - The probe's values are split by group and shown as a box plot
        - A two-sample t-test (Welch by default) reports t, degrees of freedom and p-value

        **Next step:** Go to the **Gene Explorer** page to begin.
        """
    )

run()
