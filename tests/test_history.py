"""
Tests for the in-memory calculation history.
"""

import threading

from django.test import SimpleTestCase

from apps.calculations.history import (
    CalculationRecord,
    HistoryStore,
    HistoryStoreError,
)


def make_fields(loan_amount=100000, **overrides):
    fields = {
        'loan_amount': loan_amount,
        'interest_rate': 10.0,
        'tenure_years': 1,
        'tenure_months': 12,
        'emi': 8791.59,
        'total_interest': 5499.08,
        'total_payment': 105499.08,
        'loan_type': 'car',
    }
    fields.update(overrides)
    return fields


class HistoryStoreTests(SimpleTestCase):
    """Test bounded insertion, ordering and id assignment."""

    def setUp(self):
        self.store = HistoryStore()

    def test_starts_empty(self):
        self.assertEqual(self.store.list(), [])
        self.assertEqual(len(self.store), 0)

    def test_append_returns_record_with_id(self):
        record = self.store.append(**make_fields())
        self.assertIsInstance(record, CalculationRecord)
        self.assertEqual(record.id, 1)
        self.assertEqual(record.loan_type, 'car')
        self.assertTrue(record.timestamp)

    def test_newest_first(self):
        for amount in (100, 200, 300):
            self.store.append(**make_fields(loan_amount=amount))
        amounts = [r.loan_amount for r in self.store.list()]
        self.assertEqual(amounts, [300, 200, 100])

    def test_capacity_is_ten(self):
        for amount in range(1, 26):
            self.store.append(**make_fields(loan_amount=amount))
            self.assertLessEqual(len(self.store), 10)

        records = self.store.list()
        self.assertEqual(len(records), 10)
        self.assertEqual(
            [r.loan_amount for r in records],
            list(range(25, 15, -1)),
        )

    def test_ids_keep_increasing_after_eviction(self):
        ids = [self.store.append(**make_fields()).id for _ in range(15)]
        self.assertEqual(ids, list(range(1, 16)))
        self.assertEqual(
            [r.id for r in self.store.list()],
            list(range(15, 5, -1)),
        )

    def test_custom_capacity(self):
        store = HistoryStore(capacity=3)
        for amount in (1, 2, 3, 4):
            store.append(**make_fields(loan_amount=amount))
        self.assertEqual([r.loan_amount for r in store.list()], [4, 3, 2])

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            HistoryStore(capacity=0)

    def test_list_is_a_snapshot(self):
        self.store.append(**make_fields())
        snapshot = self.store.list()
        self.store.append(**make_fields())
        self.assertEqual(len(snapshot), 1)

    def test_missing_loan_type_is_none(self):
        fields = make_fields()
        del fields['loan_type']
        record = self.store.append(**fields)
        self.assertIsNone(record.loan_type)

    def test_concurrent_appends(self):
        """Appends from many threads get unique ids and respect capacity."""
        results = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                record = self.store.append(**make_fields())
                with lock:
                    results.append(record.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(sorted(results), list(range(1, 401)))
        self.assertEqual(len(self.store), 10)
        self.assertEqual(
            [r.id for r in self.store.list()],
            list(range(400, 390, -1)),
        )


class HistoryStatsTests(SimpleTestCase):
    """Tests for aggregates over the retained records."""

    def test_empty(self):
        stats = HistoryStore().stats()
        self.assertEqual(stats.count, 0)
        self.assertEqual(stats.total_loan_amount, 0)

    def test_sum_of_retained(self):
        store = HistoryStore()
        for amount in (100, 200, 300):
            store.append(**make_fields(loan_amount=amount))
        stats = store.stats()
        self.assertEqual(stats.count, 3)
        self.assertEqual(stats.total_loan_amount, 600)

    def test_evicted_amounts_are_dropped(self):
        store = HistoryStore(capacity=2)
        for amount in (100, 200, 300):
            store.append(**make_fields(loan_amount=amount))
        stats = store.stats()
        self.assertEqual(stats.count, 2)
        self.assertEqual(stats.total_loan_amount, 500)


class HistoryCapacityTests(SimpleTestCase):

    def test_default_capacity_is_ten(self):
        self.assertEqual(HistoryStore().capacity, 10)

    def test_overflowing_total_raises(self):
        store = HistoryStore()
        for _ in range(2):
            store.append(**make_fields(loan_amount=1.7e308))
        with self.assertRaises(HistoryStoreError):
            store.stats()


class SeedSampleTests(SimpleTestCase):
    """Tests for the bundled sample record."""

    def test_seed_sample(self):
        store = HistoryStore()
        record = store.seed_sample()
        self.assertEqual(record.id, 1)
        self.assertEqual(record.loan_amount, 5000000)
        self.assertEqual(record.tenure_months, 240)
        self.assertEqual(record.loan_type, 'home')
        self.assertEqual(record.total_payment, record.emi * record.tenure_months)
        self.assertEqual(
            record.total_interest, record.total_payment - record.loan_amount,
        )

    def test_seed_counts_towards_ids(self):
        store = HistoryStore()
        store.seed_sample()
        record = store.append(**make_fields())
        self.assertEqual(record.id, 2)
