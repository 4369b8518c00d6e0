# expression_pipeline/summary.py

from expression_pipeline.types import TTestResult

P_VALUE_FLOOR = 2.2e-16


def format_pvalue(p: float) -> str:
    if p < P_VALUE_FLOOR:
        return f"< {P_VALUE_FLOOR:.1e}"
    return f"= {p:.4g}"


def format_ttest(result: TTestResult, label: str = "value by group") -> str:
    """Plain-text report of a two-sample t-test."""
    g1, g2 = result.groups
    low, high = result.conf_int
    means = "  ".join(f"mean in group {g}: {result.estimates.get(g, float('nan')):.4f}" for g in result.groups)

    lines = [
        result.method,
        "",
        f"data:  {label}",
        f"t = {result.statistic:.4f}, df = {result.df:.2f}, p-value {format_pvalue(result.pvalue)}",
        f"alternative hypothesis: true difference in means between group {g1} and group {g2} is not equal to 0",
        f"{result.conf_level * 100:g} percent confidence interval:",
        f" {low:.4f} {high:.4f}",
        "sample estimates:",
        means,
    ]
    return "\n".join(lines)
