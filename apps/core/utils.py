"""
Core utility functions for the EMI Calculator service.

Contains the EMI formula and the display helpers used across the application.
Calculations run in double precision; rounding happens only when an amount
is formatted for display.
"""

import math
import time
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

TWO_PLACES = Decimal('0.01')

# Wide enough for any finite double written out in full
DISPLAY_CONTEXT = Context(prec=400)

_started_at = None


@dataclass(frozen=True)
class EMIResult:
    """Unrounded outcome of a single EMI calculation."""

    emi: float
    total_payment: float
    total_interest: float


def calculate_emi(
    principal: float,
    annual_rate: float,
    tenure_years: float,
) -> EMIResult:
    """
    Calculate EMI using the standard amortization formula.

    EMI = P × r × (1+r)^n / ((1+r)^n - 1)

    Where:
        P = principal (loan amount)
        r = monthly interest rate (annual_rate / 12 / 100)
        n = tenure in months (tenure_years * 12)

    Very small positive rates are accepted as-is; there is no
    simple-interest fallback.

    Args:
        principal: Loan amount (must be > 0).
        annual_rate: Annual interest rate as percentage (e.g., 8.5 for 8.5%).
        tenure_years: Repayment duration in years (must be > 0).

    Returns:
        EMIResult holding the monthly installment, total payment and
        total interest at full precision.

    Raises:
        ValueError: If any input is not a positive finite number, or the
            formula overflows or divides by zero for these inputs.
    """
    principal = float(principal)
    annual_rate = float(annual_rate)
    tenure_years = float(tenure_years)

    for name, value in (
        ('Principal', principal),
        ('Interest rate', annual_rate),
        ('Tenure', tenure_years),
    ):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number.")
        if value <= 0:
            raise ValueError(f"{name} must be greater than 0.")

    monthly_rate = annual_rate / 12 / 100
    months = tenure_years * 12

    try:
        power_term = math.pow(1 + monthly_rate, months)
        emi = principal * monthly_rate * power_term / (power_term - 1)
    except (OverflowError, ZeroDivisionError) as e:
        raise ValueError(f"EMI is not computable for these inputs: {e}") from e

    total_payment = emi * months
    total_interest = total_payment - principal

    if not all(map(math.isfinite, (emi, total_payment, total_interest))):
        raise ValueError("EMI is not computable for these inputs.")

    return EMIResult(
        emi=emi,
        total_payment=total_payment,
        total_interest=total_interest,
    )


def format_amount(value: float) -> str:
    """
    Format an amount as a fixed-point string with 2 decimal places.

    Uses traditional rounding (half rounds away from zero).

    Examples:
        format_amount(43391.154) → '43391.15'
        format_amount(0.125) → '0.13'
        format_amount(5000000) → '5000000.00'
    """
    return str(
        Decimal(str(value)).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP, context=DISPLAY_CONTEXT,
        )
    )


def mark_started():
    """Record the moment the service finished starting up."""
    global _started_at
    _started_at = time.monotonic()


def uptime_seconds() -> float:
    """Seconds elapsed since the service started."""
    if _started_at is None:
        mark_started()
    return time.monotonic() - _started_at
