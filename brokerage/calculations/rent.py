"""
Lease Rent Calculations

Monthly rent estimate for lease listings quoted in $/SF/year.
"""


def monthly_rent(
    base_rent_per_sf: float, nnn_charges_per_sf: float, square_feet: float
) -> float:
    """
    Estimate monthly rent including triple-net charges.

    Args:
        base_rent_per_sf: Base rent in $/SF/year
        nnn_charges_per_sf: NNN (CAM, taxes, insurance) in $/SF/year
        square_feet: Leased area

    Returns:
        Monthly rent
    """
    total_per_sf_per_year = base_rent_per_sf + nnn_charges_per_sf
    return (total_per_sf_per_year * square_feet) / 12
