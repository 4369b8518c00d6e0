# expression_pipeline/errors.py


class ExpressionPipelineError(Exception):
    """Base class for errors raised while comparing gene expression."""


class NotFoundError(ExpressionPipelineError, LookupError):
    """Raised when an identifier has no measurement row."""


class SymbolNotFoundError(NotFoundError):
    """Raised when a gene symbol does not resolve to any identifier."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Gene symbol '{symbol}' was not found in the annotations.")


class InsufficientDataError(ExpressionPipelineError, ValueError):
    """Raised when a two-group comparison cannot be computed."""


class DatasetError(ExpressionPipelineError, ValueError):
    """Raised when dataset tables are missing or inconsistent."""
