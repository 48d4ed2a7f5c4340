"""Tests for spendtrack.domain.expenses pure functions."""

from datetime import date

import pytest

from spendtrack.domain.expenses import (
    calculate_category_breakdown,
    calculate_category_shares,
    calculate_histogram_bar_length,
    calculate_summary,
    export_filename,
    export_to_csv,
    filter_expenses,
    find_top_category,
    format_currency,
    sort_by_date,
)
from spendtrack.domain.models import (
    ALL_CATEGORIES,
    Amount,
    Category,
    Description,
    Expense,
    ExpenseFilters,
    ExpenseId,
    TopCategory,
)

TODAY = date(2025, 3, 20)


def make_expense(
    expense_id: str = "1",
    day: str = "2025-03-10",
    amount: float = 10.0,
    category: Category = Category.FOOD,
    description: str = "Lunch",
) -> Expense:
    return Expense(
        id=ExpenseId(expense_id),
        date=day,
        amount=Amount(amount),
        category=category,
        description=Description(description),
        created_at="2025-03-10T12:00:00.000Z",
        updated_at="2025-03-10T12:00:00.000Z",
    )


@pytest.fixture
def expenses() -> list[Expense]:
    return [
        make_expense("1", "2025-03-01", 12.5, Category.FOOD, "Coffee and bagel"),
        make_expense("2", "2025-03-05", 40.0, Category.TRANSPORTATION, "Train ticket"),
        make_expense("3", "2025-03-15", 15.0, Category.ENTERTAINMENT, "Cinema"),
        make_expense("4", "2025-02-20", 80.0, Category.BILLS, "Electricity"),
        make_expense("5", "2025-03-18", 25.0, Category.FOOD, "Groceries"),
    ]


class TestFilterExpenses:
    """Tests for filter_expenses."""

    def test_no_filters_keeps_everything(self, expenses: list[Expense]) -> None:
        """Should keep every expense when no filter is set."""
        assert filter_expenses(expenses, ExpenseFilters()) == expenses

    def test_all_category_is_no_restriction(self, expenses: list[Expense]) -> None:
        """Should treat 'All' as no category restriction."""
        assert filter_expenses(expenses, ExpenseFilters(category=ALL_CATEGORIES)) == expenses

    def test_category_filter(self, expenses: list[Expense]) -> None:
        """Should keep exactly the expenses in the category."""
        result = filter_expenses(expenses, ExpenseFilters(category=Category.FOOD))

        assert [e.id for e in result] == ["1", "5"]

    def test_date_range_is_inclusive(self, expenses: list[Expense]) -> None:
        """Should include expenses on both range endpoints."""
        result = filter_expenses(expenses, ExpenseFilters(start_date="2025-03-01", end_date="2025-03-15"))

        assert [e.id for e in result] == ["1", "2", "3"]

    def test_date_range_needs_both_ends(self, expenses: list[Expense]) -> None:
        """Should ignore a half-open date range."""
        assert filter_expenses(expenses, ExpenseFilters(start_date="2025-03-10")) == expenses
        assert filter_expenses(expenses, ExpenseFilters(end_date="2025-03-01")) == expenses

    def test_search_matches_description_case_insensitive(self, expenses: list[Expense]) -> None:
        """Should match description substrings regardless of case."""
        result = filter_expenses(expenses, ExpenseFilters(search_term="COFFEE"))

        assert [e.id for e in result] == ["1"]

    def test_search_matches_category_name(self, expenses: list[Expense]) -> None:
        """Should match against the category name too."""
        result = filter_expenses(expenses, ExpenseFilters(search_term="transport"))

        assert [e.id for e in result] == ["2"]

    def test_empty_search_term_is_no_restriction(self, expenses: list[Expense]) -> None:
        """Should ignore an empty search term."""
        assert filter_expenses(expenses, ExpenseFilters(search_term="")) == expenses

    def test_category_checked_before_search(self, expenses: list[Expense]) -> None:
        """Should drop category mismatches before the search term is consulted."""
        result = filter_expenses(expenses, ExpenseFilters(category=Category.FOOD, search_term="cinema"))

        assert result == []

    def test_search_decides_after_category_passes(self, expenses: list[Expense]) -> None:
        """Should let the search term decide for expenses in the category."""
        result = filter_expenses(expenses, ExpenseFilters(category=Category.FOOD, search_term="groc"))

        assert [e.id for e in result] == ["5"]

    def test_date_range_combines_with_search(self, expenses: list[Expense]) -> None:
        """Should drop out-of-range expenses even if the search matches."""
        filters = ExpenseFilters(start_date="2025-03-10", end_date="2025-03-31", search_term="o")

        assert [e.id for e in filter_expenses(expenses, filters)] == ["5"]

    def test_preserves_input_order(self) -> None:
        """Should not reorder expenses."""
        unordered = [make_expense("b", "2025-03-09"), make_expense("a", "2025-03-01")]

        assert filter_expenses(unordered, ExpenseFilters()) == unordered


class TestCalculateCategoryBreakdown:
    """Tests for calculate_category_breakdown."""

    def test_all_categories_present_when_empty(self) -> None:
        """Should include every category at zero."""
        breakdown = calculate_category_breakdown([])

        assert list(breakdown) == list(Category)
        assert all(amount == 0 for amount in breakdown.values())

    def test_sums_per_category(self, expenses: list[Expense]) -> None:
        """Should sum amounts per category."""
        breakdown = calculate_category_breakdown(expenses)

        assert breakdown[Category.FOOD] == 37.5
        assert breakdown[Category.BILLS] == 80.0
        assert breakdown[Category.SHOPPING] == 0


class TestFindTopCategory:
    """Tests for find_top_category."""

    def test_none_when_all_zero(self) -> None:
        """Should return None when nothing was spent."""
        assert find_top_category(calculate_category_breakdown([])) is None

    def test_picks_largest(self, expenses: list[Expense]) -> None:
        """Should pick the category with the largest total."""
        top = find_top_category(calculate_category_breakdown(expenses))

        assert top == TopCategory(category=Category.BILLS, amount=Amount(80.0))

    def test_tie_goes_to_first_category(self) -> None:
        """Should break ties in enumeration order."""
        tied = [
            make_expense("1", amount=20, category=Category.SHOPPING),
            make_expense("2", amount=20, category=Category.TRANSPORTATION),
        ]

        top = find_top_category(calculate_category_breakdown(tied))

        assert top is not None
        assert top.category == Category.TRANSPORTATION


class TestCalculateSummary:
    """Tests for calculate_summary."""

    def test_empty_collection(self) -> None:
        """Should return zeros and no top category."""
        summary = calculate_summary([], TODAY)

        assert summary.total_spending == 0
        assert summary.monthly_spending == 0
        assert summary.top_category is None
        assert summary.average_daily_spending == 0
        assert set(summary.category_breakdown) == set(Category)

    def test_single_expense(self) -> None:
        """Should summarize a single Food expense."""
        single = [make_expense("1", "2024-01-15", 50, Category.FOOD, "Lunch")]

        summary = calculate_summary(single, TODAY)

        assert summary.total_spending == 50
        assert summary.category_breakdown[Category.FOOD] == 50
        assert all(amount == 0 for cat, amount in summary.category_breakdown.items() if cat != Category.FOOD)
        assert summary.top_category == TopCategory(category=Category.FOOD, amount=Amount(50))

    def test_monthly_spending_only_counts_current_month(self) -> None:
        """Should exclude prior months from monthly but not total spending."""
        mixed = [
            make_expense("1", "2025-03-02", 20),
            make_expense("2", "2025-03-31", 30),
            make_expense("3", "2025-02-28", 100),
        ]

        summary = calculate_summary(mixed, TODAY)

        assert summary.monthly_spending == 50
        assert summary.total_spending == 150

    def test_breakdown_sums_to_total(self, expenses: list[Expense]) -> None:
        """Should have a breakdown that adds up to the total."""
        summary = calculate_summary(expenses, TODAY)

        assert sum(summary.category_breakdown.values()) == pytest.approx(summary.total_spending)
        assert all(amount >= 0 for amount in summary.category_breakdown.values())

    def test_average_divides_by_thirty(self) -> None:
        """Should divide the trailing 30-day total by 30, not by active days."""
        recent = [make_expense("1", "2025-03-19", 60)]

        summary = calculate_summary(recent, TODAY)

        assert summary.average_daily_spending == pytest.approx(2.0)

    def test_average_window_boundaries(self) -> None:
        """Should include the last 29 days and today but not 30 days ago."""
        boundary = [
            make_expense("1", "2025-02-18", 300),  # exactly 30 days ago
            make_expense("2", "2025-02-19", 30),
            make_expense("3", "2025-03-20", 30),
        ]

        summary = calculate_summary(boundary, TODAY)

        assert summary.average_daily_spending == pytest.approx(2.0)

    def test_defaults_to_today(self) -> None:
        """Should use today's date when none is given."""
        today_expense = [make_expense("1", date.today().isoformat(), 30)]

        summary = calculate_summary(today_expense)

        assert summary.monthly_spending == 30
        assert summary.average_daily_spending == pytest.approx(1.0)


class TestSortByDate:
    """Tests for sort_by_date."""

    def test_newest_first_by_default(self, expenses: list[Expense]) -> None:
        """Should sort most recent first."""
        assert [e.id for e in sort_by_date(expenses)] == ["5", "3", "2", "1", "4"]

    def test_oldest_first(self, expenses: list[Expense]) -> None:
        """Should sort oldest first when asked."""
        assert [e.id for e in sort_by_date(expenses, newest_first=False)] == ["4", "1", "2", "3", "5"]

    def test_does_not_mutate_input(self, expenses: list[Expense]) -> None:
        """Should return a new list."""
        original = list(expenses)
        sort_by_date(expenses)

        assert expenses == original


class TestCalculateCategoryShares:
    """Tests for calculate_category_shares."""

    def test_skips_zero_categories(self, expenses: list[Expense]) -> None:
        """Should only include categories with spending."""
        shares = calculate_category_shares(calculate_category_breakdown(expenses))

        assert [s.category for s in shares] == [
            Category.FOOD,
            Category.TRANSPORTATION,
            Category.ENTERTAINMENT,
            Category.BILLS,
        ]

    def test_percentages_sum_to_hundred(self, expenses: list[Expense]) -> None:
        """Should produce percentages that sum to 100."""
        shares = calculate_category_shares(calculate_category_breakdown(expenses))

        assert sum(s.percentage for s in shares) == pytest.approx(100.0)

    def test_empty_breakdown(self) -> None:
        """Should return no slices when nothing was spent."""
        assert calculate_category_shares(calculate_category_breakdown([])) == []


class TestCalculateHistogramBarLength:
    """Tests for calculate_histogram_bar_length."""

    def test_scales_to_width(self) -> None:
        """Should scale linearly against the maximum."""
        assert calculate_histogram_bar_length(Amount(50), Amount(100), 30) == 15

    def test_zero_max(self) -> None:
        """Should return 0 when the maximum is zero."""
        assert calculate_histogram_bar_length(Amount(0), Amount(0), 30) == 0


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_two_decimals_and_grouping(self) -> None:
        """Should show two decimals and thousands separators."""
        assert format_currency(1234.5) == "$1,234.50"

    def test_custom_symbol(self) -> None:
        """Should use the given currency symbol."""
        assert format_currency(3, "£") == "£3.00"

    def test_negative(self) -> None:
        """Should put the sign before the symbol."""
        assert format_currency(-3) == "-$3.00"


class TestExportToCsv:
    """Tests for export_to_csv."""

    def test_single_expense(self) -> None:
        """Should quote every field and format the amount to two decimals."""
        csv_text = export_to_csv([make_expense("1", "2024-01-15", 12.5, Category.FOOD, "Lunch")])

        assert csv_text == 'Date,Category,Description,Amount\n"2024-01-15","Food","Lunch","12.50"'

    def test_header_only_for_empty(self) -> None:
        """Should produce just the header for no expenses."""
        assert export_to_csv([]) == "Date,Category,Description,Amount"

    def test_embedded_quotes_and_commas_are_wrapped_verbatim(self) -> None:
        """Should wrap fields without escaping embedded characters."""
        csv_text = export_to_csv([make_expense(description='Say "hi", ok')])

        assert csv_text.splitlines()[1] == '"2025-03-10","Food","Say "hi", ok","10.00"'

    def test_rows_in_input_order(self, expenses: list[Expense]) -> None:
        """Should emit one row per expense in input order without a trailing newline."""
        lines = export_to_csv(expenses).split("\n")

        assert len(lines) == len(expenses) + 1
        assert lines[-1] == '"2025-03-18","Food","Groceries","25.00"'


class TestExportFilename:
    """Tests for export_filename."""

    def test_includes_date(self) -> None:
        """Should embed the ISO date."""
        assert export_filename(date(2025, 3, 20)) == "expenses-2025-03-20.csv"
