# expression_pipeline/state.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from expression_pipeline.errors import ExpressionPipelineError, SymbolNotFoundError
from expression_pipeline.processor import run_gene_comparison
from expression_pipeline.types import ExpressionDataset, GeneComparison

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    IDLE = "idle"
    COMPUTED = "computed"


@dataclass(frozen=True)
class CompareRequested:
    """Emitted when the user confirms a symbol (button click)."""
    symbol: str


@dataclass
class ComparisonView:
    """What the explorer page currently shows.

    Starts IDLE; every CompareRequested moves it to COMPUTED with either a
    result or an error message. There is no way back to IDLE.
    """
    state: ViewState = ViewState.IDLE
    symbol: Optional[str] = None
    result: Optional[GeneComparison] = None
    error: Optional[str] = None
    not_found: bool = False
    runs: int = 0

    def handle(
        self,
        event: CompareRequested,
        dataset: ExpressionDataset,
        equal_var: bool = False,
        conf_level: float = 0.95
    ) -> "ComparisonView":
        symbol = event.symbol.strip()
        self.symbol = symbol
        self.runs += 1
        self.result = None
        self.error = None
        self.not_found = False

        try:
            self.result = run_gene_comparison(dataset, symbol, equal_var=equal_var, conf_level=conf_level)
        except SymbolNotFoundError as e:
            logger.info("No identifier for symbol %r", symbol)
            self.not_found = True
            self.error = str(e)
        except ExpressionPipelineError as e:
            logger.warning("Comparison for %r failed: %s", symbol, e)
            self.error = str(e)

        self.state = ViewState.COMPUTED
        return self
