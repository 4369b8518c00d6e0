# expression_pipeline/types.py

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

DEFAULT_GROUP_LEVELS = ("positive", "negative")


@dataclass(frozen=True)
class ExpressionDataset:
    measurements: pd.DataFrame  # identifiers x samples
    annotations: pd.DataFrame  # columns: identifier, symbol
    group_labels: pd.Series  # sample -> group
    name: str = "dataset"
    group_variable: str = "group"
    group_levels: Optional[Tuple[str, str]] = DEFAULT_GROUP_LEVELS

    @property
    def samples(self) -> List[str]:
        return list(self.measurements.columns)

    @property
    def identifiers(self) -> List[str]:
        return list(self.measurements.index)


@dataclass(frozen=True)
class TTestResult:
    method: str
    statistic: float
    df: float
    pvalue: float
    conf_int: Tuple[float, float]
    conf_level: float
    groups: Tuple[str, str]
    estimates: Dict[str, float] = field(default_factory=dict)


@dataclass
class GeneComparison:
    symbol: str
    identifier: str
    candidates: Tuple[str, ...]
    frame: pd.DataFrame  # sample, group, value
    box_stats: pd.DataFrame
    test: TTestResult
