"""
Pytest configuration and shared fixtures for the test suite.
"""

import pytest
import pandas as pd

from expression_pipeline.converters import build_dataset
from expression_pipeline.demo import make_demo_dataset


@pytest.fixture
def small_measurements():
    """Four probes over six samples."""
    return pd.DataFrame(
        {
            'S1': [10.0, 5.0, 1.0, 3.0],
            'S2': [11.0, 5.5, 1.0, 3.1],
            'S3': [12.0, 4.5, 1.0, 2.9],
            'S4': [4.0, 5.2, 1.0, 3.0],
            'S5': [5.0, 4.8, 1.0, 3.2],
            'S6': [6.0, 5.1, 1.0, 2.8],
        },
        index=pd.Index(['p1', 'p2', 'p3', 'p4'], name='identifier'),
    )


@pytest.fixture
def small_annotations():
    return pd.DataFrame({
        'identifier': ['p2', 'p1', 'p3', 'p4'],
        'symbol': ['GENEA', 'GENEA', 'FLAT', 'GENEB'],
    })


@pytest.fixture
def small_groups():
    return pd.Series(
        ['positive', 'positive', 'positive', 'negative', 'negative', 'negative'],
        index=['S1', 'S2', 'S3', 'S4', 'S5', 'S6'],
        name='er',
    )


@pytest.fixture
def small_dataset(small_measurements, small_annotations, small_groups):
    return build_dataset(
        small_measurements,
        small_annotations,
        small_groups,
        name='small',
        group_variable='er',
    )


@pytest.fixture(scope='session')
def demo_dataset():
    return make_demo_dataset(seed=1, n_samples=120)
