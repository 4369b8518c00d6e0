# expression_pipeline/resolver.py

import logging
from typing import Optional

from expression_pipeline.types import ExpressionDataset

logger = logging.getLogger(__name__)


def find_identifiers(dataset: ExpressionDataset, symbol: str) -> list[str]:
    """All identifiers annotated with `symbol`, in annotation-table order.

    Matching is exact and case-sensitive.
    """
    annotations = dataset.annotations
    matches = annotations.loc[annotations["symbol"] == symbol, "identifier"]
    return [str(i) for i in matches.tolist()]


def resolve_symbol(dataset: ExpressionDataset, symbol: str) -> Optional[str]:
    """Return the first identifier for `symbol`, or None when nothing matches."""
    candidates = find_identifiers(dataset, symbol)
    if not candidates:
        logger.debug("Symbol %r did not resolve", symbol)
        return None

    if len(candidates) > 1:
        logger.info(
            "Symbol %r maps to %d identifiers, using first: %s",
            symbol, len(candidates), candidates[0]
        )
    return candidates[0]
