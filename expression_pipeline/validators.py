# expression_pipeline/validators.py
import pandas as pd


def validate_dataset(measurements: pd.DataFrame, annotations: pd.DataFrame, group_labels: pd.Series) -> list[str]:
    errors = []

    if measurements.empty:
        errors.append("Measurement table is empty.")

    if measurements.index.has_duplicates:
        dupes = sorted(set(measurements.index[measurements.index.duplicated()].astype(str)))
        errors.append(f"Duplicate identifiers in measurements: {', '.join(dupes[:5])}")

    non_numeric = [c for c in measurements.columns if not pd.api.types.is_numeric_dtype(measurements[c])]
    if non_numeric:
        errors.append(f"Non-numeric measurement columns: {', '.join(map(str, non_numeric[:5]))}")

    for col in ("identifier", "symbol"):
        if col not in annotations.columns:
            errors.append(f"Annotations are missing the '{col}' column")

    if "identifier" in annotations.columns:
        unknown = set(annotations["identifier"]) - set(measurements.index)
        if unknown:
            errors.append(f"{len(unknown)} annotated identifier(s) have no measurement row")

    if group_labels.index.has_duplicates:
        errors.append("Sample table lists the same sample more than once")

    unlabelled = [s for s in measurements.columns if s not in group_labels.index]
    if unlabelled:
        errors.append(f"Samples without a group label: {', '.join(map(str, unlabelled[:5]))}")

    return errors
