from typing import Dict


def generate_insights(results: Dict) -> str:
    """Return a short plain-language insight about a safe-withdrawal analysis.

    ``results`` is the dict returned by
    :func:`finance_planner.calculators.retirement_income.calculate_safe_withdrawal`.
    """
    success = float(results.get("estimated_success_rate", 0.0))
    actual = float(results.get("actual_rate", 0.0))
    recommended = float(results.get("recommended_rate", 0.0))
    timeline = results.get("timeline", [])
    last_year = timeline[-1]["year"] if timeline else "the end"
    ending = float(timeline[-1]["portfolio_value"]) if timeline else 0.0

    if success >= 90:
        outlook = "high chance of success"
    elif success >= 70:
        outlook = "moderate chance of success"
    else:
        outlook = "plan may be at risk"

    text = (
        f"Your plan has a {outlook}. Withdrawing {actual:.1f}% a year against a "
        f"recommended {recommended:.1f}%"
    )
    if results.get("depleted"):
        return text + f", the portfolio runs out in year {last_year}."
    return text + f", the portfolio is projected at ${ending:,.0f} after year {last_year}."


def buy_vs_rent_insight(comparison: Dict) -> str:
    """One-sentence summary of :func:`calculate_comparison` output."""
    summary = comparison.get("comparison", {})
    advantage = abs(float(summary.get("buying_advantage", 0.0)))
    better = "Buying" if summary.get("better") == "buying" else "Renting and investing"
    break_even = summary.get("break_even_year")
    when = f"Buying pulls ahead in year {break_even}." if break_even else "Buying never pulls ahead."
    return f"{better} comes out ${advantage:,.0f} ahead at the end of the horizon. {when}"


__all__ = ["generate_insights", "buy_vs_rent_insight"]
