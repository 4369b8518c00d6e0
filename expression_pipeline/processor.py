# expression_pipeline/processor.py

import logging
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from expression_pipeline.errors import InsufficientDataError, SymbolNotFoundError
from expression_pipeline.extractor import extract_values
from expression_pipeline.resolver import find_identifiers
from expression_pipeline.types import ExpressionDataset, GeneComparison, TTestResult

logger = logging.getLogger(__name__)

WELCH_METHOD = "Welch Two Sample t-test"
STUDENT_METHOD = "Two Sample t-test"


def _build_frame(values: pd.Series, group_labels: pd.Series) -> pd.DataFrame:
    df = pd.DataFrame({
        "sample": values.index,
        "group": group_labels.reindex(values.index).values,
        "value": pd.to_numeric(values, errors="coerce").values,
    })

    missing = df["value"].isna() | df["group"].isna()
    if missing.any():
        logger.info("Dropping %d sample(s) with missing value or group label", int(missing.sum()))
    df = df[~missing].copy()
    df["group"] = df["group"].astype(str)
    return df.reset_index(drop=True)


def _select_levels(df: pd.DataFrame, levels: Optional[Sequence[str]]) -> list[str]:
    present = set(df["group"].unique())

    if levels is not None:
        levels = [str(level) for level in levels]
        selected = [level for level in levels if level in present]
    else:
        selected = sorted(present)
        if len(selected) > 2:
            raise InsufficientDataError(
                f"Expected two groups but found {len(selected)}: {', '.join(selected)}"
            )

    if len(selected) < 2:
        raise InsufficientDataError(
            f"Need two distinct groups to compare, found {len(selected)}."
        )
    return selected[:2]


def summarize_groups(df: pd.DataFrame, order: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Per-group box-plot statistics."""
    grouped = df.groupby("group")["value"]
    summary = grouped.agg(
        n="count",
        mean="mean",
        sd="std",
        min="min",
        q1=lambda s: s.quantile(0.25),
        median="median",
        q3=lambda s: s.quantile(0.75),
        max="max",
    )
    if order is not None:
        summary = summary.reindex(list(order))
    return summary.reset_index()


def compare_groups(
    values: pd.Series,
    group_labels: pd.Series,
    levels: Optional[Sequence[str]] = None,
    equal_var: bool = False,
    conf_level: float = 0.95
) -> Tuple[pd.DataFrame, pd.DataFrame, TTestResult]:
    """Split `values` by `group_labels` and run a two-sample t-test.

    Returns the long-form frame that was compared, the per-group box
    statistics and the test result. The difference in means is taken as the
    first group minus the second.
    """
    df = _build_frame(values, group_labels)
    groups = _select_levels(df, levels)
    df = df[df["group"].isin(groups)].reset_index(drop=True)

    samples = [df.loc[df["group"] == g, "value"].to_numpy(dtype=float) for g in groups]
    for group, arr in zip(groups, samples):
        if arr.size < 2:
            raise InsufficientDataError(
                f"Group '{group}' has {arr.size} observation(s); at least 2 are required."
            )

    if all(np.var(arr, ddof=1) == 0 for arr in samples):
        raise InsufficientDataError("Both groups have zero variance; the t statistic is undefined.")

    res = stats.ttest_ind(samples[0], samples[1], equal_var=equal_var)
    if np.isnan(res.statistic) or np.isnan(res.pvalue):
        raise InsufficientDataError("The t-test could not be computed for these values.")

    ci = res.confidence_interval(confidence_level=conf_level)

    result = TTestResult(
        method=STUDENT_METHOD if equal_var else WELCH_METHOD,
        statistic=float(res.statistic),
        df=float(res.df),
        pvalue=float(res.pvalue),
        conf_int=(float(ci.low), float(ci.high)),
        conf_level=conf_level,
        groups=(groups[0], groups[1]),
        estimates={g: float(np.mean(arr)) for g, arr in zip(groups, samples)},
    )
    return df, summarize_groups(df, groups), result


def run_gene_comparison(
    dataset: ExpressionDataset,
    symbol: str,
    equal_var: bool = False,
    conf_level: float = 0.95
) -> GeneComparison:
    """Resolve `symbol`, extract its row and compare it across the dataset's groups."""
    candidates = find_identifiers(dataset, symbol)
    if not candidates:
        raise SymbolNotFoundError(symbol)

    identifier = candidates[0]
    if len(candidates) > 1:
        logger.info("Symbol %r maps to %d identifiers, using %s", symbol, len(candidates), identifier)

    values = extract_values(dataset, identifier)
    frame, box_stats, test = compare_groups(
        values,
        dataset.group_labels,
        levels=dataset.group_levels,
        equal_var=equal_var,
        conf_level=conf_level
    )

    logger.info(
        "Compared %s (%s): t=%.3f, df=%.1f, p=%.3g",
        symbol, identifier, test.statistic, test.df, test.pvalue
    )
    return GeneComparison(
        symbol=symbol,
        identifier=identifier,
        candidates=tuple(candidates),
        frame=frame,
        box_stats=box_stats,
        test=test,
    )
