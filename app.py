# app.py
import logging

import pandas as pd
import streamlit as st

from finance_planner import InvalidParameterError
from finance_planner.config import percent_to_fraction
from finance_planner.calculators import (
    fire,
    loan,
    mortgage_vs_rent,
    net_worth,
    portfolio,
    retirement_income,
    savings,
    superannuation,
    taxes,
)
from finance_planner.components import forms
from finance_planner.components.charts import (
    amortization_chart,
    balance_chart,
    breakdown_chart,
    buy_vs_rent_chart,
    growth_breakdown_chart,
    success_gauge,
    tax_chart,
)
from finance_planner.components.insights import buy_vs_rent_insight, generate_insights
from finance_planner.components.report import build_pdf

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ---------- Page config ----------
st.set_page_config(
    page_title="Finance Planner",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.session_state.setdefault("form_defaults", {})

st.title("Finance Planner")
st.caption("Savings, loans, super, tax, retirement income, property and portfolio projections (2024-25 rules).")

# Keys holding long per-year lists; left out of the PDF results table.
_TIMELINE_KEYS = ("timeline", "yearly_data", "schedule")


def _summary(result: dict) -> dict:
    return {k: v for k, v in result.items() if k not in _TIMELINE_KEYS}


def _ledger(rows, name: str):
    """Show timeline rows as a table with a CSV download."""
    df = pd.json_normalize(rows)
    st.dataframe(df, use_container_width=True, height=350)
    st.download_button(
        "⬇️ CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=f"{name}.csv",
        mime="text/csv",
        key=f"csv_{name}",
    )


def _pdf_button(title: str, name: str, inputs: dict, result: dict, timeline=None):
    pdf = build_pdf(title, inputs, summary=_summary(result), timeline=timeline)
    st.download_button(
        "⬇️ PDF report",
        data=pdf,
        file_name=f"{name}.pdf",
        mime="application/pdf",
        key=f"pdf_{name}",
    )


tabs = st.tabs([
    "Savings", "Loan", "Super", "Tax", "Retirement", "Buy vs Rent", "Portfolio", "Net Worth", "FIRE",
])

# ====== SAVINGS ======
with tabs[0]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.savings_form()
    target = inputs.pop("target_amount")
    try:
        result = savings.calculate_savings_growth(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2, c3 = st.columns(3)
            c1.metric("Final balance", f"${result['final_balance']:,.0f}")
            c2.metric("Contributions", f"${result['total_contributions']:,.0f}")
            c3.metric("Interest", f"${result['total_interest']:,.0f}")
            rows = result["yearly_data"]
            st.plotly_chart(growth_breakdown_chart(
                [r["year"] for r in rows],
                [inputs["initial_balance"] + r["total_contributions"] for r in rows],
                [r["total_interest"] for r in rows],
            ), use_container_width=True)
            goal = savings.calculate_time_to_goal(
                inputs["initial_balance"], target, inputs["monthly_contribution"], inputs["annual_interest_rate"],
            )
            if goal["achieved"]:
                st.info(f"Goal of ${target:,.0f} reached in {goal['months']} months ({goal['years']} years).")
            else:
                st.warning(goal["message"])
            _ledger(rows, "savings")
            _pdf_button("Savings Projection", "savings", inputs, result, rows)

# ====== LOAN ======
with tabs[1]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.loan_form()
    extra = inputs.pop("extra_payment")
    try:
        result = loan.calculate_loan_repayment(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2, c3 = st.columns(3)
            c1.metric(f"{inputs['payment_frequency'].title()} payment", f"${result['payment']:,.2f}")
            c2.metric("Total interest", f"${result['total_interest']:,.0f}")
            c3.metric("Payments", f"{result['total_payments']:,}")
            st.plotly_chart(amortization_chart(result["schedule"]), use_container_width=True)
            if extra > 0:
                impact = loan.calculate_extra_payment_impact(extra_payment=extra, **inputs)
                st.info(
                    f"Paying ${extra:,.0f} extra saves ${impact['savings']['interest_saved']:,.0f} "
                    f"in interest and {impact['savings']['time_saved']} years."
                )
            _ledger(result["schedule"], "amortization")
            _pdf_button("Loan Repayment", "loan", inputs, result, result["schedule"])

# ====== SUPER ======
with tabs[2]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.super_form()
    target = inputs.pop("target_balance")
    try:
        result = superannuation.calculate_retirement_balance(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2 = st.columns(2)
            c1.metric("Balance at retirement", f"${result['final_balance']:,.0f}")
            c2.metric("Total contributions", f"${result['total_contributions']:,.0f}")
            st.plotly_chart(balance_chart(result["yearly_data"], x_key="age", title="Super Balance"),
                            use_container_width=True)
            if target > 0:
                rate = superannuation.calculate_required_contributions(
                    inputs["current_age"], inputs["retirement_age"], inputs["current_super"],
                    target, inputs["annual_income"], return_rate=inputs["return_rate"],
                    employer_contribution_rate=inputs["employer_contribution_rate"],
                    inflation_rate=inputs["inflation_rate"], fee_rate=inputs["fee_rate"],
                )
                st.info(f"A personal contribution of {rate:.2f}% of salary reaches ${target:,.0f}.")
            _ledger(result["yearly_data"], "super")
            _pdf_button("Superannuation Projection", "super", inputs, result, result["yearly_data"])

# ====== TAX ======
with tabs[3]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.tax_form()
    target = inputs.pop("target_take_home")
    result = taxes.calculate_net_salary(**inputs)
    with right:
        c1, c2, c3 = st.columns(3)
        c1.metric("Take-home (year)", f"${result['net']['annual_income']:,.0f}")
        c2.metric("Total tax", f"${result['tax']['total_tax']:,.0f}")
        c3.metric("Marginal rate", f"{result['tax']['marginal_rate']:.1f}%")
        salaries = [inputs["annual_salary"] * f for f in (0.5, 0.75, 1.0, 1.25, 1.5)]
        compared = taxes.compare_salaries(salaries)
        st.plotly_chart(tax_chart(salaries, {
            "income_tax": [max(0, c["tax"]["income_tax"] - c["tax"]["lito"]) for c in compared],
            "medicare_levy": [c["tax"]["medicare_levy"] for c in compared],
            "net": [c["net"]["annual_income"] for c in compared],
        }), use_container_width=True)
        if target > 0:
            needed = taxes.required_gross_salary(target)
            st.info(f"A take-home of ${target:,.0f} needs a gross salary of ${needed['required_gross_salary']:,.0f}.")
        _pdf_button("Net Salary", "tax", inputs, result)

# ====== RETIREMENT ======
with tabs[4]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.retirement_form()
    pension_inputs = {k: inputs.pop(k) for k in ("age", "is_couple", "is_homeowner", "assessable_assets", "annual_income")}
    try:
        result = retirement_income.calculate_safe_withdrawal(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2 = st.columns(2)
            with c1:
                st.plotly_chart(success_gauge(result["estimated_success_rate"]), use_container_width=True)
            c2.metric("Withdrawal rate", f"{result['actual_rate']:.1f}%")
            c2.metric("Recommended", f"${result['dynamic_safe_withdrawal']:,.0f} / yr")
            st.info(generate_insights(result))
            st.plotly_chart(balance_chart(result["timeline"], value_key="portfolio_value", title="Portfolio in Retirement"),
                            use_container_width=True)
            pension = retirement_income.calculate_age_pension(**pension_inputs)
            if pension["eligible"]:
                st.success(
                    f"Age pension: ${pension['fortnightly_amount']:,.2f} per fortnight "
                    f"(${pension['annual_amount']:,.0f} a year, {pension['reduction_reason']} test)."
                )
            elif "years_until_eligible" in pension:
                st.warning(f"{pension['reason']}; eligible in {pension['years_until_eligible']} years.")
            else:
                st.warning("No age pension under the means tests.")
            _ledger(result["timeline"], "drawdown")
            _pdf_button("Retirement Drawdown", "retirement", {**inputs, **pension_inputs}, result, result["timeline"])

# ====== BUY VS RENT ======
with tabs[5]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.mortgage_form()
    try:
        result = mortgage_vs_rent.calculate_comparison(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2, c3 = st.columns(3)
            c1.metric("Monthly repayment", f"${result['buying']['monthly_payment']:,.0f}")
            c2.metric("Stamp duty", f"${result['buying']['stamp_duty']:,.0f}")
            c3.metric("Break-even year", result["comparison"]["break_even_year"] or "never")
            st.info(buy_vs_rent_insight(result))
            st.plotly_chart(buy_vs_rent_chart(result["buying"]["timeline"], result["renting"]["timeline"]),
                            use_container_width=True)
            rows = [
                {**{f"buy_{k}": v for k, v in b.items() if k != "year"},
                 **{f"rent_{k}": v for k, v in r.items() if k != "year"},
                 "year": b["year"]}
                for b, r in zip(result["buying"]["timeline"], result["renting"]["timeline"])
            ]
            _ledger(rows, "buy_vs_rent")
            _pdf_button("Buy vs Rent", "buy_vs_rent", inputs,
                        {"buying": _summary(result["buying"]), "renting": _summary(result["renting"]),
                         "comparison": result["comparison"]})

# ====== PORTFOLIO ======
with tabs[6]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.portfolio_form()
    total_weight = sum(inputs["allocation"].values())
    if abs(total_weight - 1.0) > 1e-6:
        st.warning(f"Weights add up to {total_weight * 100:.1f}%, not 100%.")
    try:
        result = portfolio.calculate_portfolio_growth(**inputs)
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        with right:
            c1, c2, c3 = st.columns(3)
            c1.metric("Final value", f"${result['final_value']:,.0f}")
            c2.metric("In today's dollars", f"${result['real_value']:,.0f}")
            c3.metric("Weighted return", f"{result['weighted_return']:.2f}%")
            st.plotly_chart(balance_chart(result["timeline"], value_key="portfolio_value", title="Portfolio Value"),
                            use_container_width=True)
            st.plotly_chart(breakdown_chart(result["timeline"][-1]["breakdown"], title="Final Allocation"),
                            use_container_width=True)
            _ledger(result["timeline"], "portfolio")
            _pdf_button("Portfolio Projection", "portfolio", inputs, result, result["timeline"])

# ====== NET WORTH ======
with tabs[7]:
    left, right = st.columns([1, 2])
    with left:
        inputs = forms.net_worth_form()
    snapshot = net_worth.calculate_net_worth(inputs["assets"], inputs["liabilities"])
    with right:
        c1, c2, c3 = st.columns(3)
        c1.metric("Net worth", f"${snapshot['net_worth']:,.0f}")
        c2.metric("Debt to assets", f"{snapshot['debt_to_asset_ratio']:.1f}%")
        c3.metric("Liquidity", f"{snapshot['liquidity_ratio']:.1f}%")
        if snapshot["asset_breakdown"]:
            st.plotly_chart(breakdown_chart(
                {k: v["amount"] for k, v in snapshot["asset_breakdown"].items()}, title="Assets",
            ), use_container_width=True)
        projection = net_worth.project_net_worth_growth(
            snapshot["net_worth"], inputs["monthly_savings"], inputs["investment_return"], inputs["years"],
        )
        st.plotly_chart(balance_chart(projection, value_key="net_worth", title="Projected Net Worth"),
                        use_container_width=True)
        _ledger(projection, "net_worth")
        _pdf_button("Net Worth", "net_worth", inputs, snapshot, projection)

# ====== FIRE ======
with tabs[8]:
    c1, c2 = st.columns(2)
    monthly_expenses = c1.number_input("Monthly expenses", min_value=0.0, value=4000.0, step=100.0)
    rate_pct = c2.number_input("Withdrawal rate (%)", min_value=0.1, max_value=20.0, value=4.0, step=0.1)
    try:
        goal = fire.calculate_savings_goal(monthly_expenses, percent_to_fraction(rate_pct))
    except InvalidParameterError as exc:
        st.error(str(exc))
    else:
        st.metric("Savings goal", f"${goal:,.0f}")
