import pytest

from library_app.errors import ValidationError
from library_app.policy import DEFAULT_POLICY, FineStrategy, ItemType, LibraryPolicy


def test_daily_rates_per_type():
    assert DEFAULT_POLICY.strategy_for(ItemType.BOOK).daily_rate == 10
    assert DEFAULT_POLICY.strategy_for(ItemType.CD).daily_rate == 20
    assert DEFAULT_POLICY.strategy_for(ItemType.JOURNAL).daily_rate == 15


def test_rates_are_ordered_cd_journal_book():
    rate = lambda t: DEFAULT_POLICY.strategy_for(t).daily_rate
    assert rate(ItemType.CD) > rate(ItemType.JOURNAL) > rate(ItemType.BOOK)


@pytest.mark.parametrize("item_type", list(ItemType))
def test_fine_is_linear_in_overdue_days(item_type):
    strategy = DEFAULT_POLICY.strategy_for(item_type)
    for days in range(1, 40):
        assert strategy.calculate_fine(days) == days * strategy.daily_rate


@pytest.mark.parametrize("days", [0, -1, -30])
def test_no_fine_for_non_positive_days(days):
    assert DEFAULT_POLICY.strategy_for(ItemType.CD).calculate_fine(days) == 0


def test_strategy_accepts_tag_names():
    assert DEFAULT_POLICY.strategy_for("cd") == FineStrategy(ItemType.CD, 20)
    assert DEFAULT_POLICY.strategy_for(" Journal ").item_type is ItemType.JOURNAL


@pytest.mark.parametrize("tag", [None, "", "DVD", "magazine"])
def test_unknown_item_type_is_rejected(tag):
    with pytest.raises(ValidationError):
        DEFAULT_POLICY.strategy_for(tag)


def test_loan_periods():
    assert DEFAULT_POLICY.loan_period_for(ItemType.BOOK) == 28
    assert DEFAULT_POLICY.loan_period_for(ItemType.CD) == 7
    assert DEFAULT_POLICY.loan_period_for("JOURNAL") == 14


def test_policy_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_POLICY.daily_rates[ItemType.BOOK] = 1
    with pytest.raises(AttributeError):
        DEFAULT_POLICY.loan_periods = {}


def test_custom_policy_missing_type():
    policy = LibraryPolicy(loan_periods={"BOOK": 21}, daily_rates={"BOOK": 5})
    assert policy.strategy_for("BOOK").calculate_fine(3) == 15
    with pytest.raises(ValidationError):
        policy.strategy_for(ItemType.CD)
    with pytest.raises(ValidationError):
        policy.loan_period_for(ItemType.CD)
