# expression_pipeline/converters.py

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import pandas as pd

from expression_pipeline.errors import DatasetError
from expression_pipeline.types import DEFAULT_GROUP_LEVELS, ExpressionDataset, GeneComparison
from expression_pipeline.validators import validate_dataset

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_table(path: PathLike) -> pd.DataFrame:
    """Read a CSV, TSV or Excel table."""
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in {".xls", ".xlsx"}:
        return pd.read_excel(path)
    if suffix in {".tsv", ".txt"}:
        return pd.read_csv(path, sep="\t")
    if suffix == ".csv":
        return pd.read_csv(path)
    raise DatasetError(f"Unsupported file type '{suffix}' for {path.name}")


def _to_labels(values: pd.Series) -> pd.Series:
    """String labels with missing entries kept; whole-number floats lose their '.0'."""
    if pd.api.types.is_float_dtype(values):
        present = values.dropna()
        if (present == present.round()).all():
            values = values.astype("Int64")
    return values.map(lambda v: v if pd.isna(v) else str(v))


def _require_columns(df: pd.DataFrame, columns: Sequence[str], label: str):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DatasetError(f"{label} table is missing required columns: {missing}")


def build_dataset(
    measurements: pd.DataFrame,
    annotations: pd.DataFrame,
    group_labels: pd.Series,
    name: str = "dataset",
    group_variable: str = "group",
    group_levels: Optional[Sequence[str]] = DEFAULT_GROUP_LEVELS
) -> ExpressionDataset:
    """Validate the three tables and wrap them in an ExpressionDataset."""
    measurements = measurements.copy()
    measurements.index = measurements.index.astype(str)
    measurements.columns = measurements.columns.astype(str)

    annotations = annotations.copy().reset_index(drop=True)
    group_labels = group_labels.copy()
    group_labels.index = group_labels.index.astype(str)

    errors = validate_dataset(measurements, annotations, group_labels)
    if errors:
        raise DatasetError("; ".join(errors))

    levels = tuple(str(level) for level in group_levels) if group_levels else None
    if levels is not None and len(levels) != 2:
        raise DatasetError(f"Exactly two group levels are required, got {list(levels)}")

    return ExpressionDataset(
        measurements=measurements,
        annotations=annotations[["identifier", "symbol"]],
        group_labels=group_labels,
        name=name,
        group_variable=group_variable,
        group_levels=levels,
    )


def load_dataset(
    measurements_path: PathLike,
    annotations_path: PathLike,
    samples_path: PathLike,
    identifier_column: str = "identifier",
    symbol_column: str = "symbol",
    sample_column: str = "sample",
    group_column: str = "group",
    name: Optional[str] = None,
    group_levels: Optional[Sequence[str]] = DEFAULT_GROUP_LEVELS
) -> ExpressionDataset:
    """Load measurements, probe annotations and sample groups from files.

    The measurement table has one row per identifier (in `identifier_column`)
    and one column per sample. Annotation rows with an empty symbol or an
    identifier that has no measurement row are dropped.
    """
    raw = read_table(measurements_path)
    _require_columns(raw, [identifier_column], "Measurement")
    raw[identifier_column] = _to_labels(raw[identifier_column])
    measurements = raw.set_index(identifier_column)
    measurements = measurements.apply(pd.to_numeric, errors="coerce")

    ann = read_table(annotations_path)
    _require_columns(ann, [identifier_column, symbol_column], "Annotation")
    ann = ann[[identifier_column, symbol_column]].rename(
        columns={identifier_column: "identifier", symbol_column: "symbol"}
    )
    ann = ann.dropna(subset=["identifier", "symbol"])
    ann["identifier"] = _to_labels(ann["identifier"])
    ann["symbol"] = ann["symbol"].astype(str).str.strip()
    ann = ann[ann["symbol"] != ""]

    known = ann["identifier"].isin(measurements.index)
    if not known.all():
        logger.warning("Dropping %d annotation row(s) without a measurement row", int((~known).sum()))
        ann = ann[known]

    samples = read_table(samples_path)
    _require_columns(samples, [sample_column, group_column], "Sample")
    samples[sample_column] = _to_labels(samples[sample_column])
    group_labels = _to_labels(samples.set_index(sample_column)[group_column])

    dataset = build_dataset(
        measurements,
        ann,
        group_labels,
        name=name or Path(measurements_path).stem,
        group_variable=group_column,
        group_levels=group_levels,
    )
    logger.info(
        "Loaded dataset %s: %d identifiers x %d samples, %d annotations",
        dataset.name, len(dataset.identifiers), len(dataset.samples), len(dataset.annotations)
    )
    return dataset


def comparison_to_dict(comparison: GeneComparison) -> Dict[str, Any]:
    """JSON-safe representation of a comparison."""
    test = comparison.test
    return {
        "symbol": comparison.symbol,
        "identifier": comparison.identifier,
        "candidates": list(comparison.candidates),
        "test": {
            "method": test.method,
            "statistic": test.statistic,
            "df": test.df,
            "pvalue": test.pvalue,
            "conf_int": list(test.conf_int),
            "conf_level": test.conf_level,
            "groups": list(test.groups),
            "estimates": dict(test.estimates),
        },
        "box_stats": comparison.box_stats.to_dict(orient="records"),
        "values": comparison.frame.to_dict(orient="records"),
    }
