"""
Commercial real estate brokerage back end.
"""
