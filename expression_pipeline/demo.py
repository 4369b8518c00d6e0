# expression_pipeline/demo.py

import numpy as np
import pandas as pd

from expression_pipeline.converters import build_dataset
from expression_pipeline.types import ExpressionDataset

# (probe, symbol, baseline log2 expression, sd, shift in ER-positive samples)
DEMO_PROBES = [
    ("205225_at", "ESR1", 8.0, 1.0, 3.0),
    ("211233_x_at", "ESR1", 6.5, 0.8, 1.2),
    ("211234_x_at", "ESR1", 6.2, 0.8, 1.0),
    ("215552_s_at", "ESR1", 5.8, 0.7, 0.6),
    ("209602_s_at", "GATA3", 9.0, 1.0, 2.2),
    ("209603_at", "GATA3", 7.1, 0.9, 1.4),
    ("204667_at", "FOXA1", 7.5, 1.1, 2.5),
    ("208305_at", "PGR", 5.0, 1.2, 1.8),
    ("205009_at", "TFF1", 8.2, 1.5, 2.6),
    ("200670_at", "XBP1", 10.1, 0.8, 1.3),
    ("216836_s_at", "ERBB2", 9.4, 1.2, -0.3),
    ("201291_s_at", "TOP2A", 8.3, 1.0, -0.9),
    ("212022_s_at", "MKI67", 7.0, 0.9, -0.6),
    ("202037_s_at", "SFRP1", 6.8, 1.3, -1.7),
    ("213260_at", "FOXC1", 6.0, 1.1, -1.9),
    ("201820_at", "KRT5", 8.0, 1.6, -1.5),
    ("209351_at", "KRT14", 8.5, 1.7, -1.2),
    ("212586_at", "CAST", 9.2, 0.6, 0.0),
    ("217871_s_at", "MIF", 11.0, 0.5, 0.0),
    ("200801_x_at", "ACTB", 13.5, 0.3, 0.0),
    ("212581_x_at", "GAPDH", 13.0, 0.3, 0.0),
    ("AFFX-BioB-5_at", None, 7.0, 0.4, 0.0),
    ("AFFX-BioC-3_at", None, 8.0, 0.4, 0.0),
]

DEMO_GROUP_VARIABLE = "er"
DEMO_LEVELS = ("positive", "negative")


def make_demo_dataset(seed: int = 1, n_samples: int = 120, positive_fraction: float = 0.6) -> ExpressionDataset:
    """Synthetic breast tumour microarray dataset with ER status labels.

    Deterministic for a given seed. Estrogen-responsive genes are shifted up in
    ER-positive samples; proliferation and basal markers are shifted down;
    housekeeping genes are flat.
    """
    rng = np.random.default_rng(seed)
    samples = [f"TUM{i:03d}" for i in range(1, n_samples + 1)]

    n_pos = int(round(n_samples * positive_fraction))
    status = np.array(["positive"] * n_pos + ["negative"] * (n_samples - n_pos))
    rng.shuffle(status)
    is_pos = status == "positive"

    rows = {}
    for probe, _, base, sd, shift in DEMO_PROBES:
        rows[probe] = np.round(base + shift * is_pos + rng.normal(0.0, sd, n_samples), 3)

    measurements = pd.DataFrame.from_dict(rows, orient="index", columns=samples)
    measurements.index.name = "identifier"

    annotations = pd.DataFrame(
        [(probe, symbol) for probe, symbol, *_ in DEMO_PROBES if symbol],
        columns=["identifier", "symbol"],
    )
    group_labels = pd.Series(status, index=samples, name=DEMO_GROUP_VARIABLE)

    return build_dataset(
        measurements,
        annotations,
        group_labels,
        name=f"Demo breast cancer cohort (n={n_samples})",
        group_variable=DEMO_GROUP_VARIABLE,
        group_levels=DEMO_LEVELS,
    )
