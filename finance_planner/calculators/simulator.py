"""Time-stepped balance simulator.

Every projection in the package is the same loop: take a balance, advance it
one period at a time and record what happened.  What differs between
calculators is the order of operations inside a period, so that is supplied
by a *step policy*:

* :class:`Accumulation` – contribute, then compound (savings, super, net worth).
* :class:`Amortization` – charge interest, repay principal with a fixed payment.
* :class:`Decumulation` – withdraw, then compound the remainder (drawdown).

:func:`simulate_offset` runs an amortizing mortgage and an accumulating
investment side by side for the buy-versus-rent comparison.

Every fine-grained step is always executed.  With ``compact=True`` only one
:class:`PeriodRecord` per elapsed year (plus the final period) is emitted and
the per-period amounts are summed into it.

Example
-------

>>> scenario = Scenario(principal=1000.0, flow=100.0, annual_rate=0.12,
...                     periods=12, periods_per_year=12)
>>> result = simulate(scenario, Accumulation())
>>> len(result.timeline)
12
>>> round(result.final_balance, 2)
2407.76
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple

from ..errors import InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """Inputs for one simulation run.  Rates are annual fractions."""

    principal: float
    flow: float = 0.0  # contribution, payment or withdrawal per period
    annual_rate: float = 0.0
    periods: int = 12
    periods_per_year: int = 12
    fee_rate: float = 0.0
    contributions_tax_rate: float = 0.0
    earnings_tax_rate: float = 0.0
    escalation_rate: float = 0.0  # applied to ``flow`` once per year

    @property
    def period_rate(self) -> float:
        return self.annual_rate / self.periods_per_year

    @property
    def period_fee_rate(self) -> float:
        return self.fee_rate / self.periods_per_year


@dataclass(frozen=True)
class PeriodRecord:
    index: int
    year: int
    balance: float
    flow: float
    interest: float
    fees: float = 0.0
    tax: float = 0.0
    principal: float = 0.0
    cumulative_flow: float = 0.0
    cumulative_interest: float = 0.0
    cumulative_principal: float = 0.0


Timeline = Tuple[PeriodRecord, ...]


class StepState(NamedTuple):
    balance: float
    flow: float  # current (escalated) periodic amount


class Flows(NamedTuple):
    flow: float
    interest: float
    fees: float = 0.0
    tax: float = 0.0
    principal: float = 0.0


NO_FLOWS = Flows(0.0, 0.0)


class SimulationResult(NamedTuple):
    final_balance: float
    timeline: Timeline


def _validate(scenario: Scenario) -> None:
    if int(scenario.periods) != scenario.periods or scenario.periods <= 0:
        raise InvalidParameterError(
            f"Number of periods must be a positive whole number, got {scenario.periods}."
        )
    if scenario.periods_per_year <= 0:
        raise InvalidParameterError(
            f"Periods per year must be greater than zero, got {scenario.periods_per_year}."
        )


def _escalated(flow: float, scenario: Scenario, period: int) -> float:
    """Raise ``flow`` at the first period of every year after the first."""
    if period > 1 and (period - 1) % scenario.periods_per_year == 0:
        return flow * (1.0 + scenario.escalation_rate)
    return flow


def _net_return(base: float, scenario: Scenario) -> Tuple[float, float, float]:
    """Return ``(interest, fees, earnings_tax)`` for one period on ``base``."""
    gross = base * scenario.period_rate
    fees = base * scenario.period_fee_rate
    earnings = gross - fees
    earnings_tax = max(0.0, earnings) * scenario.earnings_tax_rate
    return earnings - earnings_tax, fees, earnings_tax


def annuity_payment(principal: float, period_rate: float, periods: int) -> float:
    """Level payment that repays ``principal`` over ``periods``.

    ``P·r·(1+r)^n / ((1+r)^n − 1)``, or ``P / n`` when the rate is zero.
    """
    if period_rate == 0:
        return principal / periods
    growth = (1.0 + period_rate) ** periods
    return principal * period_rate * growth / (growth - 1.0)


def annuity_principal(payment: float, period_rate: float, periods: int) -> float:
    """Principal that a level ``payment`` repays over ``periods`` (inverse of :func:`annuity_payment`)."""
    if period_rate == 0:
        return payment * periods
    growth = (1.0 + period_rate) ** periods
    return payment * (growth - 1.0) / (period_rate * growth)


def period_count(years: float, periods_per_year: int) -> int:
    """Whole periods needed to cover ``years``; a part period counts as a full one.

    >>> period_count(1.3, 12), period_count(2.5, 365), period_count(30, 12)
    (16, 913, 360)
    """
    return math.ceil(round(years * periods_per_year, 6))


class Accumulation:
    """Contribute then compound.

    ``contribution_timing="start"`` adds the contribution before the period
    return is applied; ``"end"`` applies the return to the opening balance and
    adds the contribution afterwards.  Contributions are taxed at
    ``contributions_tax_rate`` and positive earnings at ``earnings_tax_rate``.
    """

    def __init__(self, contribution_timing: str = "start"):
        if contribution_timing not in ("start", "end"):
            raise InvalidParameterError(
                f"Unknown contribution timing {contribution_timing!r}; use 'start' or 'end'."
            )
        self.contribution_timing = contribution_timing

    def start(self, scenario: Scenario) -> StepState:
        return StepState(scenario.principal, scenario.flow)

    def advance(self, scenario: Scenario, state: StepState, period: int) -> Tuple[StepState, Flows]:
        flow = _escalated(state.flow, scenario, period)
        contributions_tax = max(0.0, flow) * scenario.contributions_tax_rate
        net_contribution = flow - contributions_tax
        base = state.balance + net_contribution if self.contribution_timing == "start" else state.balance
        interest, fees, earnings_tax = _net_return(base, scenario)
        balance = state.balance + net_contribution + interest
        return StepState(balance, flow), Flows(flow, interest, fees, contributions_tax + earnings_tax)


class Amortization:
    """Fixed-payment loan repayment.

    The payment is computed once from the closed-form annuity formula unless
    ``payment`` is given (e.g. to model extra repayments).  Principal repaid
    in a period never exceeds the outstanding balance.
    """

    def __init__(self, payment: Optional[float] = None):
        self.payment = payment

    def start(self, scenario: Scenario) -> StepState:
        payment = self.payment
        if payment is None:
            payment = annuity_payment(scenario.principal, scenario.period_rate, scenario.periods)
        return StepState(scenario.principal, payment)

    def advance(self, scenario: Scenario, state: StepState, period: int) -> Tuple[StepState, Flows]:
        if state.balance <= 0:
            return StepState(0.0, state.flow), NO_FLOWS
        interest = state.balance * scenario.period_rate
        principal = min(state.flow - interest, state.balance)
        balance = state.balance - principal
        return StepState(balance, state.flow), Flows(interest + principal, interest, principal=principal)


class Decumulation:
    """Withdraw then compound the remainder.

    Withdraws ``fraction`` of the balance each period when given, otherwise
    the scenario's ``flow`` escalated once a year.  The balance is clamped at
    zero; once exhausted nothing further is withdrawn or earned.
    """

    def __init__(self, fraction: Optional[float] = None):
        if fraction is not None and not 0 < fraction <= 1:
            raise InvalidParameterError(
                f"Withdrawal fraction must be in (0, 1], got {fraction}."
            )
        self.fraction = fraction

    def start(self, scenario: Scenario) -> StepState:
        return StepState(max(0.0, scenario.principal), scenario.flow)

    def advance(self, scenario: Scenario, state: StepState, period: int) -> Tuple[StepState, Flows]:
        flow = _escalated(state.flow, scenario, period)
        if state.balance <= 0:
            return StepState(0.0, flow), NO_FLOWS
        requested = state.balance * self.fraction if self.fraction is not None else flow
        withdrawal = min(max(0.0, requested), state.balance)
        remainder = state.balance - withdrawal
        interest, fees, tax = _net_return(remainder, scenario)
        balance = max(0.0, remainder + interest)
        return StepState(balance, flow), Flows(withdrawal, interest, fees, tax)


class _TimelineBuilder:
    """Append-only collector of period records with optional yearly compaction."""

    def __init__(self, periods_per_year: int, compact: bool):
        self.periods_per_year = periods_per_year
        self.compact = compact
        self._records: List[PeriodRecord] = []
        self._window = [0.0] * 5
        self._totals = [0.0] * 3

    def add(self, period: int, balance: float, flows: Flows, final: bool) -> None:
        self._window = [w + f for w, f in zip(self._window, flows)]
        self._totals[0] += flows.flow
        self._totals[1] += flows.interest
        self._totals[2] += flows.principal
        year_end = period % self.periods_per_year == 0
        if self.compact and not (year_end or final):
            return
        flow, interest, fees, tax, principal = self._window
        self._records.append(PeriodRecord(
            index=period,
            year=-(-period // self.periods_per_year),
            balance=balance,
            flow=flow,
            interest=interest,
            fees=fees,
            tax=tax,
            principal=principal,
            cumulative_flow=self._totals[0],
            cumulative_interest=self._totals[1],
            cumulative_principal=self._totals[2],
        ))
        self._window = [0.0] * 5

    def timeline(self) -> Timeline:
        return tuple(self._records)


def iter_periods(scenario: Scenario, policy) -> Iterator[Tuple[int, StepState, Flows]]:
    """Yield ``(period, state, flows)`` for every period of ``scenario``.

    Useful for open-ended searches that stop as soon as a condition is met.
    """
    _validate(scenario)
    state = policy.start(scenario)
    for period in range(1, int(scenario.periods) + 1):
        state, flows = policy.advance(scenario, state, period)
        yield period, state, flows


def simulate(scenario: Scenario, policy, compact: bool = False) -> SimulationResult:
    """Run ``scenario`` under ``policy`` and return the final balance and timeline."""
    builder = _TimelineBuilder(scenario.periods_per_year, compact)
    state = None
    for period, state, flows in iter_periods(scenario, policy):
        builder.add(period, state.balance, flows, final=period == scenario.periods)
    logger.debug(
        "%s over %d periods: %.2f -> %.2f",
        type(policy).__name__, scenario.periods, scenario.principal, state.balance,
    )
    return SimulationResult(state.balance, builder.timeline())


@dataclass(frozen=True)
class OffsetResult:
    """Yearly paired timelines of a mortgage and an invested alternative."""

    buying: Timeline
    renting: Timeline
    property_values: Tuple[float, ...]
    annual_rents: Tuple[float, ...]
    monthly_payment: float


def simulate_offset(
    mortgage: Scenario,
    investment: Scenario,
    monthly_rent: float,
    rent_increase_rate: float,
    property_value: float,
    appreciation_rate: float,
) -> OffsetResult:
    """Run a mortgage and an investment month by month over ``investment.periods``.

    The mortgage amortizes over its own term and stops charging once repaid.
    Each month the investment receives the mortgage outflow minus the rent
    (negative when rent is higher) and then compounds.  Rent rises and the
    property appreciates once per year.
    """
    _validate(mortgage)
    _validate(investment)
    if mortgage.periods_per_year != 12 or investment.periods_per_year != 12:
        raise InvalidParameterError("Mortgage-versus-rent runs on monthly periods.")

    amortization = Amortization()
    accumulation = Accumulation("start")
    loan = amortization.start(mortgage)
    invested = accumulation.start(investment)

    buying = _TimelineBuilder(12, compact=True)
    renting = _TimelineBuilder(12, compact=True)
    property_values: List[float] = []
    annual_rents: List[float] = []
    rent = monthly_rent

    for month in range(1, investment.periods + 1):
        if month <= mortgage.periods:
            loan, paid = amortization.advance(mortgage, loan, month)
        else:
            paid = NO_FLOWS
        invested, grown = accumulation.advance(
            investment, invested._replace(flow=paid.flow - rent), month
        )
        final = month == investment.periods
        buying.add(month, loan.balance, paid, final)
        renting.add(month, invested.balance, grown, final)
        if month % 12 == 0 or final:
            property_value *= 1.0 + appreciation_rate
            property_values.append(property_value)
            annual_rents.append(rent * 12)
            rent *= 1.0 + rent_increase_rate

    return OffsetResult(
        buying=buying.timeline(),
        renting=renting.timeline(),
        property_values=tuple(property_values),
        annual_rents=tuple(annual_rents),
        monthly_payment=loan.flow,
    )


__all__ = [
    "Scenario",
    "PeriodRecord",
    "Timeline",
    "StepState",
    "Flows",
    "SimulationResult",
    "OffsetResult",
    "Accumulation",
    "Amortization",
    "Decumulation",
    "annuity_payment",
    "annuity_principal",
    "period_count",
    "iter_periods",
    "simulate",
    "simulate_offset",
]
