"""Unit tests for the expense statistics engine."""

import pytest
from unittest.mock import Mock, patch
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from expenses.statistics import (
    ExpenseStatisticsService,
    compute_statistics,
    percentage_of,
    recent_window_start
)
from shared.dates import to_iso_timestamp
from shared.exceptions import AuthenticationError, DatabaseError

NOW = datetime(2025, 1, 25, 12, 30, 15, 250000, tzinfo=timezone.utc)


def make_expense(amount, category_id, date, user_id='user123'):
    return {
        'user_id': user_id,
        'amount': amount,
        'category_id': category_id,
        'date': date,
        'description': 'test'
    }


@pytest.fixture
def categories():
    return [
        {'user_id': 'user123', 'category_id': 1, 'name': 'Food'},
        {'user_id': 'user123', 'category_id': 2, 'name': 'Transport'},
        {'user_id': 'user123', 'category_id': 5, 'name': 'Bills'},
    ]


@pytest.fixture
def ledger():
    return [
        make_expense(Decimal('85.50'), 1, '2024-11-02T00:00:00.000Z'),
        make_expense(Decimal('32.00'), 1, '2024-11-08T00:00:00.000Z'),
        make_expense(Decimal('42.00'), 2, '2024-11-12T00:00:00.000Z'),
        make_expense(Decimal('1200'), 5, '2024-12-01T00:00:00.000Z'),
        make_expense(Decimal('28.50'), 1, '2025-01-04T00:00:00.000Z'),
        make_expense(Decimal('90.00'), 2, '2025-01-08T00:00:00.000Z'),
    ]


class TestComputeStatistics:
    """Test cases for compute_statistics."""

    def test_empty_ledger(self, categories):
        """Test that an owner without expenses gets zeros and empty breakdowns."""
        stats = compute_statistics([], categories, now=NOW)

        assert stats.total == 0
        assert stats.recent_30_days == 0
        assert stats.by_category == []
        assert stats.by_month == []

    def test_total(self, ledger, categories):
        """Test the running total."""
        stats = compute_statistics(ledger, categories, now=NOW)

        assert stats.total == Decimal('1478.00')

    def test_total_is_exact(self, categories):
        """Test that float amounts are summed without binary rounding drift."""
        expenses = [
            make_expense(0.1, 1, '2025-01-01'),
            make_expense(0.2, 1, '2025-01-02'),
        ]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert stats.total == Decimal('0.3')

    def test_recent_window_boundary(self, categories):
        """Test that 30 days back is included and 31 days back is not."""
        expenses = [
            make_expense(Decimal('10'), 1, to_iso_timestamp(NOW - timedelta(days=30))),
            make_expense(Decimal('20'), 1, to_iso_timestamp(NOW - timedelta(days=31))),
            make_expense(Decimal('5'), 1, to_iso_timestamp(NOW)),
        ]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert stats.recent_30_days == Decimal('15')
        assert stats.total == Decimal('35')

    def test_recent_window_uses_string_comparison(self, categories):
        """Test that a date-only value on the cutoff day sorts before the cutoff timestamp."""
        expenses = [make_expense(Decimal('10'), 1, '2024-12-26')]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert recent_window_start(NOW) == '2024-12-26T12:30:15.250Z'
        assert stats.recent_30_days == 0

    def test_recent_window_empty(self, ledger, categories):
        """Test recent total when nothing falls in the window."""
        later = NOW + timedelta(days=365)

        stats = compute_statistics(ledger, categories, now=later)

        assert stats.recent_30_days == 0

    def test_by_category(self, ledger, categories):
        """Test category totals, counts and percentages."""
        stats = compute_statistics(ledger, categories, now=NOW)

        by_id = {entry.category_id: entry for entry in stats.by_category}
        assert by_id[1].category_name == 'Food'
        assert by_id[1].total_amount == Decimal('146.00')
        assert by_id[1].count == 3
        assert by_id[1].percentage == Decimal('9.88')
        assert by_id[2].total_amount == Decimal('132.00')
        assert by_id[5].percentage == Decimal('81.19')

    def test_by_category_sorted_by_id(self, ledger, categories):
        """Test that category entries come back in ascending categoryId order."""
        stats = compute_statistics(list(reversed(ledger)), categories, now=NOW)

        assert [entry.category_id for entry in stats.by_category] == [1, 2, 5]

    def test_orphaned_expense_excluded_from_breakdown(self, ledger, categories):
        """Test that expenses of deleted categories only count toward totals."""
        ledger.append(make_expense(Decimal('22.00'), 99, '2025-01-20T00:00:00.000Z'))

        stats = compute_statistics(ledger, categories, now=NOW)

        assert 99 not in [entry.category_id for entry in stats.by_category]
        category_sum = sum(entry.total_amount for entry in stats.by_category)
        assert stats.total == category_sum + Decimal('22.00')

    def test_percentages_sum_to_100(self, categories):
        """Test percentage normalization within rounding tolerance."""
        expenses = [
            make_expense(Decimal('1'), 1, '2025-01-01'),
            make_expense(Decimal('1'), 2, '2025-01-02'),
            make_expense(Decimal('1'), 5, '2025-01-03'),
        ]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert [entry.percentage for entry in stats.by_category] == [Decimal('33.33')] * 3
        total_pct = sum(entry.percentage for entry in stats.by_category)
        assert abs(total_pct - 100) <= Decimal('0.02') * len(stats.by_category)

    def test_by_month_grouping(self, categories):
        """Test that expenses in the same YYYY-MM collapse into one entry."""
        expenses = [
            make_expense(Decimal('85.50'), 1, '2024-11-02'),
            make_expense(Decimal('32.00'), 1, '2024-11-08'),
            make_expense(Decimal('89.99'), 2, '2024-11-12'),
        ]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert len(stats.by_month) == 1
        assert stats.by_month[0].month == '2024-11'
        assert stats.by_month[0].count == 3
        assert stats.by_month[0].total_amount == Decimal('207.49')

    def test_by_month_descending(self, ledger, categories):
        """Test that months are returned newest first."""
        stats = compute_statistics(ledger, categories, now=NOW)

        assert [entry.month for entry in stats.by_month] == ['2025-01', '2024-12', '2024-11']

    def test_by_month_is_lexical(self, categories):
        """Test that non-ISO dates are grouped by their raw prefix."""
        expenses = [make_expense(Decimal('5'), 1, '11/02/2024')]

        stats = compute_statistics(expenses, categories, now=NOW)

        assert stats.by_month[0].month == '11/02/2'

    def test_serializes_with_api_field_names(self, ledger, categories):
        """Test the camelCase response shape."""
        data = compute_statistics(ledger, categories, now=NOW).model_dump(by_alias=True)

        assert set(data) == {'total', 'recent30Days', 'byCategory', 'byMonth'}
        assert set(data['byCategory'][0]) == {
            'categoryId', 'categoryName', 'totalAmount', 'count', 'percentage'
        }
        assert set(data['byMonth'][0]) == {'month', 'totalAmount', 'count'}


class TestPercentageOf:
    """Test cases for percentage_of."""

    def test_zero_total(self):
        assert percentage_of(Decimal('0'), Decimal('0')) == 0

    def test_rounds_half_up(self):
        assert percentage_of(Decimal('1'), Decimal('8')) == Decimal('12.50')
        assert percentage_of(Decimal('1'), Decimal('16')) == Decimal('6.25')
        assert percentage_of(Decimal('2'), Decimal('3')) == Decimal('66.67')


class TestExpenseStatisticsService:
    """Test cases for ExpenseStatisticsService."""

    @pytest.fixture
    def statistics_service(self):
        """Create statistics service instance with mocked DynamoDB."""
        with patch('expenses.statistics.DynamoDBClient'):
            service = ExpenseStatisticsService()
            service.expenses_table = Mock()
            service.categories_table = Mock()
            return service

    def test_get_statistics(self, statistics_service, ledger, categories):
        """Test that the service aggregates the owner's partitions."""
        statistics_service.expenses_table.query_all.return_value = ledger
        statistics_service.categories_table.query_all.return_value = categories

        stats = statistics_service.get_statistics('user123', now=NOW)

        assert stats.total == Decimal('1478.00')
        assert len(stats.by_category) == 3
        statistics_service.expenses_table.query_all.assert_called_once()
        statistics_service.categories_table.query_all.assert_called_once()

    def test_get_statistics_requires_owner(self, statistics_service):
        """Test that aggregation never runs without a caller."""
        with pytest.raises(AuthenticationError):
            statistics_service.get_statistics('')

        statistics_service.expenses_table.query_all.assert_not_called()

    def test_storage_failure_fails_whole_response(self, statistics_service, ledger):
        """Test that a failed read is propagated instead of returning partial views."""
        statistics_service.expenses_table.query_all.return_value = ledger
        statistics_service.categories_table.query_all.side_effect = DatabaseError("boom")

        with pytest.raises(DatabaseError):
            statistics_service.get_statistics('user123', now=NOW)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
