# expression_pipeline/extractor.py

from typing import Optional

import pandas as pd

from expression_pipeline.errors import NotFoundError
from expression_pipeline.types import ExpressionDataset


def extract_values(dataset: ExpressionDataset, identifier: Optional[str]) -> pd.Series:
    """Measurement row for `identifier`, indexed by sample in dataset order."""
    if identifier is None:
        raise NotFoundError("Cannot extract values for an unresolved symbol.")
    if identifier not in dataset.measurements.index:
        raise NotFoundError(f"Identifier '{identifier}' has no measurement row.")

    row = dataset.measurements.loc[identifier]
    values = pd.to_numeric(row, errors="coerce").reindex(dataset.samples)
    values.name = identifier
    values.index.name = "sample"
    return values
