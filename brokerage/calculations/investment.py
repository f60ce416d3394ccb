"""
Investment Metrics

Cap rate, debt service, DSCR and cash-on-cash return for a listing given
its NOI, price and the buyer's financing assumptions.

The engine never raises: missing loans and missing equity produce 0 for the
ratios that would otherwise divide by zero, and bad inputs flow through as
NaN or negative values for the caller to display.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from brokerage.calculations.amortization import calculate_payment, calculate_dscr

INVESTMENT_AMORTIZATION_YEARS = 25


@dataclass(frozen=True)
class InvestmentSummary:
    """Computed metrics for one set of financing inputs."""

    noi: float
    price: float
    cap_rate_percent: float
    down_payment: float
    loan_amount: float
    interest_rate_percent: float
    annual_debt_service: float
    dscr: float
    coc_return_percent: float
    roi_percent: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def annual_debt_service(loan_amount: float, interest_rate_percent: float) -> float:
    """
    Annual principal and interest on a 25-year fully amortizing loan.

    Args:
        loan_amount: Amount financed
        interest_rate_percent: Nominal annual rate as a percent (7 for 7%)

    Returns:
        Twelve monthly payments; 0 when there is no loan
    """
    if loan_amount <= 0:
        return 0.0

    monthly_payment = calculate_payment(
        loan_amount,
        interest_rate_percent / 100,
        INVESTMENT_AMORTIZATION_YEARS * 12,
    )
    return monthly_payment * 12


def compute_investment_summary(
    noi: float,
    price: float,
    cap_rate: float,
    down_payment: float,
    interest_rate_percent: float,
) -> InvestmentSummary:
    """
    Compute investment metrics from NOI, price and financing inputs.

    Args:
        noi: Annual net operating income
        price: Purchase price
        cap_rate: Cap rate as decimal (0.08 for 8%). Taken as given, not
            recomputed from noi / price, so callers can show an override.
        down_payment: Cash down; clamped to [0, price], NaN passed through
        interest_rate_percent: Nominal annual rate as a percent

    Returns:
        InvestmentSummary
    """
    # NaN is passed through rather than clamped
    down = down_payment if math.isnan(down_payment) else max(0, min(price, down_payment))
    loan_amount = price - down
    debt_service = annual_debt_service(loan_amount, interest_rate_percent)
    cash_flow = noi - debt_service

    dscr = calculate_dscr(noi, debt_service)
    coc_return_percent = (cash_flow / down) * 100 if down > 0 else 0.0
    # ROI is reported as the unlevered cap rate
    roi_percent = cap_rate * 100

    return InvestmentSummary(
        noi=noi,
        price=price,
        cap_rate_percent=cap_rate * 100,
        down_payment=down,
        loan_amount=loan_amount,
        interest_rate_percent=interest_rate_percent,
        annual_debt_service=debt_service,
        dscr=dscr,
        coc_return_percent=coc_return_percent,
        roi_percent=roi_percent,
    )


def should_show_investment_metrics(
    noi: Optional[float], price: Optional[float], cap_rate: Optional[float]
) -> bool:
    """Listings only get the metrics block when all three figures are stored."""
    return noi is not None and price is not None and cap_rate is not None
