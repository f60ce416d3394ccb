"""
Calculator API endpoints.

Back the interactive calculators on listing pages. Inputs arrive as the raw
text the visitor typed; each field is parsed and clamped here so a half-typed
or garbled value falls back to a sensible default instead of failing.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from brokerage.calculations.amortization import (
    MORTGAGE_AMORTIZATION_YEARS,
    mortgage_monthly_payment,
)
from brokerage.calculations.investment import (
    INVESTMENT_AMORTIZATION_YEARS,
    compute_investment_summary,
)
from brokerage.calculations.rent import monthly_rent
from brokerage.formatting import parse_num, stringify_num

router = APIRouter()

MAX_PRICE = 1e9
MAX_INTEREST_RATE = 20.0
DEFAULT_INTEREST_RATE = 7.0
MAX_BASE_RENT_PER_SF = 1000.0


class InvestmentCalculatorInput(BaseModel):
    """Investment calculator fields."""

    noi: float
    listing_price: float
    price: Optional[str] = None
    down_payment: Optional[str] = None
    interest_rate: Optional[str] = None
    # Typed cap rate override in percent; otherwise NOI / price
    cap_rate: Optional[str] = None


class InvestmentCalculatorResponse(BaseModel):
    """Investment summary plus display strings."""

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
    amortization_years: int
    display: dict


class MortgageCalculatorInput(BaseModel):
    """Mortgage calculator fields."""

    listing_price: float
    price: Optional[str] = None
    down_payment: Optional[str] = None
    interest_rate: Optional[str] = None


class MortgageCalculatorResponse(BaseModel):
    price: float
    down_payment: float
    principal: float
    interest_rate_percent: float
    monthly_payment: float
    amortization_years: int


class MonthlyRentInput(BaseModel):
    """Monthly rent calculator fields."""

    base_rent_per_sf: float
    nnn_charges_per_sf: float = 0.0
    square_feet: float
    base_rent: Optional[str] = None
    square_feet_input: Optional[str] = None


class MonthlyRentResponse(BaseModel):
    base_rent_per_sf: float
    nnn_charges_per_sf: float
    square_feet: float
    monthly_rent: float


def _field(raw: Optional[str]) -> str:
    return raw if raw is not None else ""


@router.post("/investment", response_model=InvestmentCalculatorResponse)
async def calculate_investment(inputs: InvestmentCalculatorInput):
    """Recompute investment metrics for the current calculator fields."""
    price = parse_num(_field(inputs.price), 1, MAX_PRICE, inputs.listing_price)
    down_payment = parse_num(
        _field(inputs.down_payment), 0, price, round(price * 0.3)
    )
    rate = parse_num(
        _field(inputs.interest_rate), 0, MAX_INTEREST_RATE, DEFAULT_INTEREST_RATE
    )

    # The automatic cap rate follows NOI and price; a typed override wins
    cap_rate = inputs.noi / price if price else 0.0
    if inputs.cap_rate is not None and inputs.cap_rate.strip():
        cap_rate = parse_num(inputs.cap_rate, 0, 100, cap_rate * 100) / 100

    summary = compute_investment_summary(inputs.noi, price, cap_rate, down_payment, rate)

    return InvestmentCalculatorResponse(
        **summary.to_dict(),
        amortization_years=INVESTMENT_AMORTIZATION_YEARS,
        display={
            "price": stringify_num(summary.price),
            "down_payment": stringify_num(summary.down_payment),
            "annual_debt_service": stringify_num(summary.annual_debt_service),
            "cap_rate": f"{summary.cap_rate_percent:.1f}%",
            "dscr": f"{summary.dscr:.2f}",
            "coc_return": f"{summary.coc_return_percent:.1f}%",
            "roi": f"{summary.roi_percent:.1f}%",
        },
    )


@router.post("/mortgage", response_model=MortgageCalculatorResponse)
async def calculate_mortgage(inputs: MortgageCalculatorInput):
    """Estimated monthly payment on a 30-year schedule."""
    price = parse_num(_field(inputs.price), 1, MAX_PRICE, inputs.listing_price)
    default_down = round(inputs.listing_price * 0.2)
    down_payment = parse_num(_field(inputs.down_payment), 0, price, default_down)
    rate = parse_num(
        _field(inputs.interest_rate), 0, MAX_INTEREST_RATE, DEFAULT_INTEREST_RATE
    )

    principal = max(0.0, price - down_payment)

    return MortgageCalculatorResponse(
        price=price,
        down_payment=down_payment,
        principal=principal,
        interest_rate_percent=rate,
        monthly_payment=mortgage_monthly_payment(principal, rate),
        amortization_years=MORTGAGE_AMORTIZATION_YEARS,
    )


@router.post("/monthly-rent", response_model=MonthlyRentResponse)
async def calculate_monthly_rent(inputs: MonthlyRentInput):
    """Monthly rent from base rent, NNN charges and square footage."""
    base_rent = parse_num(
        _field(inputs.base_rent), 0, MAX_BASE_RENT_PER_SF, inputs.base_rent_per_sf
    )
    square_feet = parse_num(
        _field(inputs.square_feet_input).replace(",", ""),
        1,
        MAX_PRICE,
        inputs.square_feet,
    )

    return MonthlyRentResponse(
        base_rent_per_sf=base_rent,
        nnn_charges_per_sf=inputs.nnn_charges_per_sf,
        square_feet=square_feet,
        monthly_rent=monthly_rent(base_rent, inputs.nnn_charges_per_sf, square_feet),
    )
