"""
In-memory calculation history.

Keeps the most recent calculations, newest first, in a fixed-capacity
deque. Ids come from a monotonic counter and are never reused, even
after the records holding them are evicted.
"""

import itertools
import logging
import math
import threading
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Union

from django.utils import timezone

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10

Number = Union[int, float]


class HistoryStoreError(Exception):
    """Raised when the history cannot be read or updated."""

    pass


@dataclass(frozen=True)
class CalculationRecord:
    """One completed EMI calculation, stored at full precision."""

    id: int
    loan_amount: float
    interest_rate: float
    tenure_years: Number
    tenure_months: Number
    emi: float
    total_interest: float
    total_payment: float
    loan_type: Optional[str]
    timestamp: str


@dataclass(frozen=True)
class HistoryStats:
    """Aggregates over the records currently retained."""

    count: int
    total_loan_amount: float


class HistoryStore:
    """
    Bounded, newest-first collection of CalculationRecord.

    append() and the read snapshots run under a single lock, so one
    store can be shared by the worker threads of a WSGI server.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1.")
        self.capacity = capacity
        self._records = deque(maxlen=capacity)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._records)

    def append(
        self,
        loan_amount: float,
        interest_rate: float,
        tenure_years: Number,
        tenure_months: Number,
        emi: float,
        total_interest: float,
        total_payment: float,
        loan_type: Optional[str] = None,
    ) -> CalculationRecord:
        """
        Store a new calculation at the front of the history.

        Assigns the next id and the creation timestamp. When the store
        is full the oldest record is evicted.
        """
        with self._lock:
            record = CalculationRecord(
                id=next(self._ids),
                loan_amount=loan_amount,
                interest_rate=interest_rate,
                tenure_years=tenure_years,
                tenure_months=tenure_months,
                emi=emi,
                total_interest=total_interest,
                total_payment=total_payment,
                loan_type=loan_type,
                timestamp=timezone.now().isoformat(),
            )
            if len(self._records) == self.capacity:
                evicted = self._records[-1]
                logger.debug("Evicting calculation #%d from history", evicted.id)
            # deque(maxlen) drops from the right when appending on the left
            self._records.appendleft(record)

        return record

    def list(self) -> List[CalculationRecord]:
        """Return the retained records, newest first."""
        with self._lock:
            return list(self._records)

    def stats(self) -> HistoryStats:
        """
        Count and summed loan amount of the retained records.

        Raises:
            HistoryStoreError: If the total is too large to represent.
        """
        with self._lock:
            records = list(self._records)

        try:
            total = math.fsum(r.loan_amount for r in records)
        except OverflowError as e:
            raise HistoryStoreError(f"Loan amount total overflowed: {e}") from e
        if not math.isfinite(total):
            raise HistoryStoreError("Loan amount total is not finite.")

        return HistoryStats(count=len(records), total_loan_amount=total)

    def seed_sample(self) -> CalculationRecord:
        """Pre-populate the history with the bundled sample home loan."""
        return self.append(
            loan_amount=5000000,
            interest_rate=8.5,
            tenure_years=20,
            tenure_months=240,
            emi=43406,
            total_interest=5417440,
            total_payment=10417440,
            loan_type='home',
        )
