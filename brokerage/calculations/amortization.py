"""
Loan Payment Calculations

Fixed-rate loan payment helpers shared by the investment engine and the
mortgage estimate shown on listing pages.
"""

MORTGAGE_AMORTIZATION_YEARS = 30


def calculate_payment(
    principal: float, annual_rate: float, amortization_months: int
) -> float:
    """
    Calculate monthly loan payment.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.05 for 5%)
        amortization_months: Total amortization period in months

    Returns:
        Monthly payment amount (positive number)
    """
    if principal <= 0:
        return 0.0
    if amortization_months <= 0:
        return 0.0

    monthly_rate = annual_rate / 12

    if monthly_rate == 0:
        return principal / amortization_months

    payment = (
        principal
        * monthly_rate
        * ((1 + monthly_rate) ** amortization_months)
        / (((1 + monthly_rate) ** amortization_months) - 1)
    )

    return payment


def mortgage_monthly_payment(principal: float, interest_rate_percent: float) -> float:
    """
    Estimated monthly payment for the listing-page mortgage calculator.

    Args:
        principal: Amount financed (price less down payment)
        interest_rate_percent: Nominal annual rate as a percent (7 for 7%)

    Returns:
        Monthly payment on a 30-year schedule
    """
    return calculate_payment(
        principal, interest_rate_percent / 100, MORTGAGE_AMORTIZATION_YEARS * 12
    )


def calculate_dscr(noi: float, debt_service: float) -> float:
    """
    Calculate Debt Service Coverage Ratio (DSCR).

    Returns 0 rather than infinity when there is no debt service so the
    value is always displayable.
    """
    if debt_service > 0:
        return noi / debt_service
    return 0.0
