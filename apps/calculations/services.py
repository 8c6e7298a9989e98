"""
Calculation service layer.

Runs the EMI formula and records results in the calculation history.
Views delegate to this service; the history store is always passed in
by the caller.
"""

import logging
import math
from typing import List, Optional

from apps.calculations.history import (
    CalculationRecord,
    HistoryStats,
    HistoryStore,
    HistoryStoreError,
)
from apps.core.exceptions import InvalidInputError, StorageFailureError
from apps.core.utils import calculate_emi

logger = logging.getLogger(__name__)


class CalculationService:
    """Service class for EMI calculations and their history."""

    @staticmethod
    def calculate(
        store: HistoryStore,
        loan_amount: float,
        interest_rate: float,
        tenure_years,
        loan_type: Optional[str] = None,
    ) -> CalculationRecord:
        """
        Compute the EMI for a loan and append it to the history.

        Args:
            store: History the result is recorded in.
            loan_amount: Principal (> 0).
            interest_rate: Annual rate in percent (> 0).
            tenure_years: Tenure in years (> 0).
            loan_type: Optional free-form label.

        Returns:
            The stored CalculationRecord, carrying its assigned id.

        Raises:
            InvalidInputError: If the formula has no finite result, or the
                amounts are too large to total over a full history.
            StorageFailureError: If the history rejects the record.
        """
        try:
            result = calculate_emi(loan_amount, interest_rate, tenure_years)
        except ValueError as e:
            logger.warning("Rejected calculation: %s", e)
            raise InvalidInputError() from e

        # A full history of records this size must still sum to a finite total
        if not math.isfinite(max(loan_amount, result.total_payment) * store.capacity):
            logger.warning("Rejected calculation: amount %s out of range", loan_amount)
            raise InvalidInputError()

        try:
            record = store.append(
                loan_amount=loan_amount,
                interest_rate=interest_rate,
                tenure_years=tenure_years,
                tenure_months=tenure_years * 12,
                emi=result.emi,
                total_interest=result.total_interest,
                total_payment=result.total_payment,
                loan_type=loan_type,
            )
        except HistoryStoreError as e:
            logger.error("History save error: %s", e)
            raise StorageFailureError() from e

        logger.info(
            "Calculation #%d: amount=%s rate=%s%% tenure=%sy -> emi=%.2f",
            record.id,
            loan_amount,
            interest_rate,
            tenure_years,
            result.emi,
        )
        return record

    @staticmethod
    def history(store: HistoryStore) -> List[CalculationRecord]:
        """Return the retained calculations, newest first."""
        try:
            return store.list()
        except HistoryStoreError as e:
            logger.error("History read error: %s", e)
            raise StorageFailureError() from e

    @staticmethod
    def stats(store: HistoryStore) -> HistoryStats:
        """Return count and total loan amount of the retained calculations."""
        try:
            return store.stats()
        except HistoryStoreError as e:
            logger.error("History stats error: %s", e)
            raise StorageFailureError() from e
