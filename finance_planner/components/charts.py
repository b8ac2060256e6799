# components/charts.py
# Plotly chart helpers used across the app.
# All functions return a Plotly Figure that Streamlit can display with st.plotly_chart(...).

from typing import Dict, List, Mapping, Sequence

import plotly.graph_objects as go
import plotly.io as pio

pio.templates.default = "plotly_white"

_MONEY_HOVER = "Year %{x}<br>$%{y:,.0f}<extra></extra>"


def _fit(series, n):
    arr = list(series)
    if len(arr) < n:
        arr += [0.0] * (n - len(arr))
    return arr[:n]


def _layout(fig: go.Figure, title: str, xaxis_title: str = "Year", height: int = 380) -> go.Figure:
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=height,
        margin=dict(l=10, r=10, t=40, b=10),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        xaxis_title=xaxis_title,
        yaxis_title="Dollars (nominal)",
    )
    return fig


# ---------- Balance over time ----------
def balance_chart(rows: Sequence[Mapping],
                  value_key: str = "balance",
                  x_key: str = "year",
                  title: str = "Projected Balance") -> go.Figure:
    """Single line of ``value_key`` against ``x_key`` from timeline rows."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r[x_key] for r in rows],
        y=[r[value_key] for r in rows],
        mode="lines+markers",
        name=value_key.replace("_", " ").title(),
        hovertemplate=_MONEY_HOVER,
    ))
    return _layout(fig, title, xaxis_title=x_key.replace("_", " ").title())


# ---------- Contributions vs growth (stacked) ----------
def growth_breakdown_chart(years: Sequence[int],
                           contributions: Sequence[float],
                           interest: Sequence[float],
                           title: str = "Contributions and Growth") -> go.Figure:
    """Stacked cumulative contributions and cumulative returns."""
    n = len(years)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=years, y=_fit(contributions, n), mode="lines", name="Contributions",
        stackgroup="one", hovertemplate=_MONEY_HOVER,
    ))
    fig.add_trace(go.Scatter(
        x=years, y=_fit(interest, n), mode="lines", name="Growth",
        stackgroup="one", hovertemplate=_MONEY_HOVER,
    ))
    return _layout(fig, title)


# ---------- Loan principal vs interest ----------
def amortization_chart(schedule: Sequence[Mapping], title: str = "Repayments by Year") -> go.Figure:
    years = [r["year"] for r in schedule]
    fig = go.Figure()
    fig.add_bar(x=years, y=[r["principal_payment"] for r in schedule], name="Principal")
    fig.add_bar(x=years, y=[r["interest_payment"] for r in schedule], name="Interest")
    fig.add_trace(go.Scatter(
        x=years, y=[r["remaining_balance"] for r in schedule], mode="lines",
        name="Remaining balance", yaxis="y2", hovertemplate=_MONEY_HOVER,
    ))
    fig.update_layout(
        barmode="stack",
        yaxis2=dict(overlaying="y", side="right", showgrid=False),
    )
    return _layout(fig, title)


# ---------- Buy vs rent ----------
def buy_vs_rent_chart(buying: Sequence[Mapping],
                      renting: Sequence[Mapping],
                      title: str = "Net Position: Buying vs Renting") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r["year"] for r in buying], y=[r["net_position"] for r in buying],
        mode="lines", name="Buying", hovertemplate=_MONEY_HOVER,
    ))
    fig.add_trace(go.Scatter(
        x=[r["year"] for r in renting], y=[r["net_position"] for r in renting],
        mode="lines", name="Renting", hovertemplate=_MONEY_HOVER,
    ))
    return _layout(fig, title)


# ---------- Success gauge ----------
def success_gauge(success_pct: float) -> go.Figure:
    pct = max(0.0, min(100.0, float(success_pct)))  # clamp 0–100
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=round(pct, 1),
        number={"suffix": "%"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"thickness": 0.35},
            "steps": [
                {"range": [0, 60],  "color": "#ef4444"},  # red-500
                {"range": [60, 80], "color": "#f59e0b"},  # amber-500
                {"range": [80, 100], "color": "#22c55e"},  # green-500
            ],
        }
    ))
    fig.update_layout(template="plotly_white", height=220, margin=dict(l=10, r=10, t=10, b=10))
    return fig


# ---------- Composition (income sources, assets, tax) ----------
def breakdown_chart(parts: Mapping[str, float], title: str = "Breakdown") -> go.Figure:
    """Donut of the positive parts of a breakdown dict."""
    labels: List[str] = []
    values: List[float] = []
    for key, value in parts.items():
        if value and value > 0:
            labels.append(key.replace("_", " ").title())
            values.append(value)
    fig = go.Figure(go.Pie(
        labels=labels, values=values, hole=0.45,
        hovertemplate="%{label}<br>$%{value:,.0f} (%{percent})<extra></extra>",
    ))
    fig.update_layout(title=title, template="plotly_white", height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


# ---------- Tax by salary (stacked bars) ----------
def tax_chart(salaries: Sequence[float],
              taxes_dict: Dict[str, Sequence[float]],
              title: str = "Tax by Salary") -> go.Figure:
    """
    Stacked bars for tax components.
    Accepts any of: 'income_tax', 'medicare_levy', 'net' (lists per salary).
    Missing keys are treated as zeros. Lists are padded/trimmed to salaries length.
    """
    n = len(salaries)
    labels = [f"${s:,.0f}" for s in salaries]
    fig = go.Figure()
    fig.add_bar(x=labels, y=_fit(taxes_dict.get("income_tax", []), n), name="Income tax")
    fig.add_bar(x=labels, y=_fit(taxes_dict.get("medicare_levy", []), n), name="Medicare levy")
    fig.add_bar(x=labels, y=_fit(taxes_dict.get("net", []), n), name="Take-home")
    fig.update_layout(barmode="stack")
    return _layout(fig, title, xaxis_title="Gross salary")


__all__ = [
    "balance_chart",
    "growth_breakdown_chart",
    "amortization_chart",
    "buy_vs_rent_chart",
    "success_gauge",
    "breakdown_chart",
    "tax_chart",
]
