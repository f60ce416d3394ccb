"""
Calculation Engine

Investment, loan and lease-rent estimates shown on listing pages.
Every function here is pure and never raises on numeric input.
"""

from brokerage.calculations import amortization, investment, rent

__all__ = ["amortization", "investment", "rent"]
