"""Duration helpers for presenting period counts and fractional years"""

import math


def periods_to_years(periods: int, periods_per_year: int = 12) -> float:
    """Convert a count of payment periods to years"""
    return periods / periods_per_year


def format_years_and_months(years: float) -> str:
    """
    Render fractional years as "X years and Y months".

    Months round half up; 12 rounded months roll into the next year.
    Examples: 5.0 -> "5 years", 5.5 -> "5 years and 6 months", 0.25 -> "3 months"
    """
    whole_years = int(years)
    months = math.floor((years - whole_years) * 12 + 0.5)

    if months >= 12:
        whole_years += 1
        months = 0

    if whole_years == 0:
        return f"{months} months"
    if months == 0:
        return f"{whole_years} years"
    return f"{whole_years} years and {months} months"
