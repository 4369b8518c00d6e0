# interface/backend/dataset.py

import logging

import streamlit as st

from expression_pipeline.converters import load_dataset
from expression_pipeline.demo import make_demo_dataset
from expression_pipeline.types import ExpressionDataset
from interface.backend.config import DatasetConfig, load_config

logger = logging.getLogger(__name__)


def dataset_from_config(cfg: DatasetConfig) -> ExpressionDataset:
    if cfg.source == "demo":
        logger.info("Building demo dataset (seed=%d, n=%d)", cfg.demo_seed, cfg.demo_samples)
        return make_demo_dataset(seed=cfg.demo_seed, n_samples=cfg.demo_samples)

    return load_dataset(
        cfg.measurements_path,
        cfg.annotations_path,
        cfg.samples_path,
        identifier_column=cfg.identifier_column,
        symbol_column=cfg.symbol_column,
        sample_column=cfg.sample_column,
        group_column=cfg.group_column,
        name=cfg.name,
        group_levels=cfg.group_levels,
    )


@st.cache_resource(show_spinner="Loading expression dataset...")
def get_dataset() -> ExpressionDataset:
    """Load the configured dataset once per process."""
    return dataset_from_config(load_config().dataset)
