"""Streamlit input forms, one per calculator.

Each form renders its widgets inside the current container and returns the
keyword arguments for the matching calculator.  Rates are entered as whole
percentages and converted to fractions here.
"""

import streamlit as st

from ..config import COMPOUNDING_FREQUENCIES, DEFAULTS, PAYMENT_FREQUENCIES, percent_to_fraction
from ..calculators.net_worth import ASSET_CATEGORIES, LIABILITY_CATEGORIES
from ..calculators.portfolio import ASSET_CLASSES, DEFAULT_ALLOCATION, DEFAULT_RETURNS


def _d(key, fallback):
    return st.session_state.get("form_defaults", {}).get(key, fallback)


def _pct(label, key, default_fraction, help=None, max_value=100.0):
    """Percent input returning a fraction."""
    value = st.number_input(
        f"{label} (%)", min_value=0.0, max_value=max_value, step=0.1,
        value=_d(key, round(default_fraction * 100, 2)), key=f"in_{key}", help=help,
    )
    return percent_to_fraction(value, default_fraction)


def _money(label, key, default, help=None, min_value=0.0):
    return float(st.number_input(
        label, min_value=min_value, step=100.0,
        value=float(_d(key, default)), key=f"in_{key}", help=help,
    ))


def savings_form():
    initial = _money("Initial balance", "sv_initial", 10000.0)
    monthly = _money("Monthly contribution", "sv_monthly", 500.0)
    rate = _pct("Interest rate", "sv_rate", DEFAULTS["savings_rate"])
    years = st.number_input("Years", min_value=1, max_value=100, value=_d("sv_years", 10), key="in_sv_years")
    options = list(COMPOUNDING_FREQUENCIES)
    frequency = st.selectbox(
        "Compounding", options, index=options.index(DEFAULTS["compounding_frequency"]), key="in_sv_freq",
    )
    target = _money("Savings goal", "sv_target", 100000.0, help="Used for the time-to-goal estimate.")
    return {
        "initial_balance": initial,
        "monthly_contribution": monthly,
        "annual_interest_rate": rate,
        "years": int(years),
        "compounding_frequency": frequency,
        "target_amount": target,
    }


def loan_form():
    amount = _money("Loan amount", "ln_amount", 300000.0)
    rate = _pct("Interest rate", "ln_rate", DEFAULTS["loan_rate"])
    term = st.number_input("Term (years)", min_value=1, max_value=40, value=_d("ln_term", 30), key="in_ln_term")
    options = list(PAYMENT_FREQUENCIES)
    frequency = st.selectbox(
        "Payment frequency", options, index=options.index(DEFAULTS["payment_frequency"]), key="in_ln_freq",
    )
    extra = _money("Extra payment per period", "ln_extra", 0.0)
    return {
        "loan_amount": amount,
        "annual_interest_rate": rate,
        "loan_term_years": int(term),
        "payment_frequency": frequency,
        "extra_payment": extra,
    }


def super_form():
    c1, c2 = st.columns(2)
    current_age = c1.number_input("Current age", min_value=15, max_value=100, value=_d("sp_age", 30), key="in_sp_age")
    retirement_age = c2.number_input(
        "Retirement age", min_value=16, max_value=100, value=_d("sp_retire", 67), key="in_sp_retire",
    )
    balance = _money("Current super balance", "sp_balance", 50000.0)
    income = _money("Annual income", "sp_income", 90000.0)
    employer = _pct("Employer contribution", "sp_employer", DEFAULTS["super_guarantee_rate"])
    personal = _pct("Personal contribution", "sp_personal", 0.0, max_value=50.0)
    with st.expander("Assumptions", expanded=False):
        return_rate = _pct("Investment return", "sp_return", DEFAULTS["return_rate"])
        inflation = _pct("Wage growth (inflation)", "sp_inflation", DEFAULTS["inflation_rate"])
        fees = _pct("Fees", "sp_fees", DEFAULTS["fee_rate"])
        contributions_tax = _pct(
            "Contributions tax", "sp_contrib_tax", 0.0, help="15% in a taxed fund; 0 ignores it.",
        )
        earnings_tax = _pct("Earnings tax", "sp_earnings_tax", 0.0)
    target = _money("Target balance", "sp_target", 0.0, help="Solve for the personal contribution rate.")
    return {
        "current_age": int(current_age),
        "retirement_age": int(retirement_age),
        "current_super": balance,
        "annual_income": income,
        "employer_contribution_rate": employer,
        "personal_contribution_rate": personal,
        "return_rate": return_rate,
        "inflation_rate": inflation,
        "fee_rate": fees,
        "contributions_tax_rate": contributions_tax,
        "earnings_tax_rate": earnings_tax,
        "target_balance": target,
    }


def tax_form():
    salary = _money("Annual salary", "tx_salary", 100000.0)
    include_super = st.checkbox(
        "Salary includes super", value=_d("tx_package", False), key="in_tx_package",
        help="Tick when the amount is a total package including superannuation.",
    )
    pre_tax = _money("Pre-tax deductions", "tx_pre", 0.0, help="Salary sacrifice.")
    post_tax = _money("Post-tax deductions", "tx_post", 0.0)
    target = _money("Target take-home pay", "tx_target", 0.0, help="Solve for the gross salary.")
    return {
        "annual_salary": salary,
        "include_super_in_package": bool(include_super),
        "pre_tax_deductions": pre_tax,
        "post_tax_deductions": post_tax,
        "target_take_home": target,
    }


def retirement_form():
    portfolio = _money("Portfolio value", "rt_portfolio", 1000000.0)
    expenses = _money("Annual expenses", "rt_expenses", 50000.0)
    years = st.number_input(
        "Years in retirement", min_value=1, max_value=60,
        value=_d("rt_years", DEFAULTS["years_in_retirement"]), key="in_rt_years",
    )
    expected_return = _pct("Expected return", "rt_return", DEFAULTS["return_rate"])
    inflation = _pct("Inflation", "rt_inflation", DEFAULTS["inflation_rate"])
    st.markdown("**Age pension**")
    c1, c2 = st.columns(2)
    age = c1.number_input("Age", min_value=18, max_value=120, value=_d("rt_age", 67), key="in_rt_age")
    is_couple = c2.checkbox("Couple", value=_d("rt_couple", False), key="in_rt_couple")
    is_homeowner = c2.checkbox("Homeowner", value=_d("rt_home", True), key="in_rt_home")
    assets = _money("Assessable assets", "rt_assets", 300000.0)
    income = _money("Assessable annual income", "rt_income", 0.0)
    return {
        "portfolio_value": portfolio,
        "annual_expenses": expenses,
        "years_in_retirement": int(years),
        "expected_return": expected_return,
        "inflation_rate": inflation,
        "age": int(age),
        "is_couple": bool(is_couple),
        "is_homeowner": bool(is_homeowner),
        "assessable_assets": assets,
        "annual_income": income,
    }


def mortgage_form():
    price = _money("Property price", "mr_price", 800000.0)
    deposit = _money("Deposit", "mr_deposit", 160000.0)
    rate = _pct("Mortgage rate", "mr_rate", 0.06)
    term = st.number_input("Mortgage term (years)", min_value=1, max_value=40, value=_d("mr_term", 30), key="in_mr_term")
    rent = _money("Monthly rent", "mr_rent", 2500.0)
    with st.expander("Assumptions", expanded=False):
        rent_increase = _pct("Rent increase", "mr_rent_inc", DEFAULTS["rent_increase_rate"])
        appreciation = _pct("Property growth", "mr_growth", DEFAULTS["property_appreciation_rate"])
        invest_return = _pct("Investment return", "mr_invest", DEFAULTS["investment_return_rate"])
        years = st.number_input("Compare over (years)", min_value=1, max_value=50, value=_d("mr_years", 30), key="in_mr_years")
    return {
        "property_price": price,
        "deposit": deposit,
        "mortgage_rate": rate,
        "mortgage_term": int(term),
        "monthly_rent": rent,
        "rent_increase_rate": rent_increase,
        "property_appreciation_rate": appreciation,
        "investment_return_rate": invest_return,
        "years": int(years),
    }


def portfolio_form():
    initial = _money("Initial investment", "pf_initial", 50000.0)
    monthly = _money("Monthly contribution", "pf_monthly", 1000.0)
    years = st.number_input("Years", min_value=1, max_value=60, value=_d("pf_years", 30), key="in_pf_years")
    allocation = {}
    returns = {}
    cols = st.columns(len(ASSET_CLASSES))
    for col, asset in zip(cols, ASSET_CLASSES):
        with col:
            st.markdown(f"**{asset.title()}**")
            allocation[asset] = _pct("Weight", f"pf_w_{asset}", DEFAULT_ALLOCATION[asset])
            returns[asset] = _pct("Return", f"pf_r_{asset}", DEFAULT_RETURNS[asset])
    inflation = _pct("Inflation", "pf_inflation", DEFAULTS["inflation_rate"])
    return {
        "initial_investment": initial,
        "monthly_contribution": monthly,
        "allocation": allocation,
        "expected_returns": returns,
        "years": int(years),
        "inflation_rate": inflation,
    }


def net_worth_form():
    c1, c2 = st.columns(2)
    assets = {}
    liabilities = {}
    with c1:
        st.markdown("**Assets**")
        for category in ASSET_CATEGORIES:
            assets[category] = _money(category, f"nw_a_{category}", 0.0)
    with c2:
        st.markdown("**Liabilities**")
        for category in LIABILITY_CATEGORIES:
            liabilities[category] = _money(category, f"nw_l_{category}", 0.0)
    monthly = _money("Monthly savings", "nw_monthly", 1000.0)
    investment_return = _pct("Investment return", "nw_return", DEFAULTS["return_rate"])
    years = st.number_input("Project over (years)", min_value=1, max_value=60, value=_d("nw_years", 10), key="in_nw_years")
    return {
        "assets": assets,
        "liabilities": liabilities,
        "monthly_savings": monthly,
        "investment_return": investment_return,
        "years": int(years),
    }


__all__ = [
    "savings_form",
    "loan_form",
    "super_form",
    "tax_form",
    "retirement_form",
    "mortgage_form",
    "portfolio_form",
    "net_worth_form",
]
