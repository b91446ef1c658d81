"""
Lending rules per item type.

Every rule that depends on the kind of item (how long it may be kept, what a
late day costs) is a lookup keyed by ``ItemType``. The tables live in an
immutable ``LibraryPolicy`` which the app stores in
``app.config["LIBRARY_POLICY"]`` and hands to the services that need it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from library_app.errors import ValidationError


class ItemType(str, Enum):
    BOOK = "BOOK"
    CD = "CD"
    JOURNAL = "JOURNAL"

    @classmethod
    def parse(cls, value) -> "ItemType":
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValidationError("Item type cannot be empty")
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValidationError(f"Unknown item type: {value}") from None


@dataclass(frozen=True)
class FineStrategy:
    item_type: ItemType
    daily_rate: int

    def calculate_fine(self, overdue_days: int) -> int:
        if overdue_days <= 0:
            return 0
        return overdue_days * self.daily_rate


def _frozen(mapping) -> Mapping[ItemType, int]:
    return MappingProxyType({ItemType.parse(k): int(v) for k, v in dict(mapping).items()})


DEFAULT_LOAN_PERIODS = {
    ItemType.BOOK: 28,
    ItemType.CD: 7,
    ItemType.JOURNAL: 14,
}

DEFAULT_DAILY_RATES = {
    ItemType.BOOK: 10,
    ItemType.CD: 20,
    ItemType.JOURNAL: 15,
}


@dataclass(frozen=True)
class LibraryPolicy:
    loan_periods: Mapping[ItemType, int] = field(default_factory=lambda: DEFAULT_LOAN_PERIODS)
    daily_rates: Mapping[ItemType, int] = field(default_factory=lambda: DEFAULT_DAILY_RATES)

    def __post_init__(self):
        # read-only copies so a shared policy cannot be changed behind a service
        object.__setattr__(self, "loan_periods", _frozen(self.loan_periods))
        object.__setattr__(self, "daily_rates", _frozen(self.daily_rates))

    def loan_period_for(self, item_type) -> int:
        item_type = ItemType.parse(item_type)
        try:
            return self.loan_periods[item_type]
        except KeyError:
            raise ValidationError(f"No loan period configured for {item_type.name}") from None

    def strategy_for(self, item_type) -> FineStrategy:
        item_type = ItemType.parse(item_type)
        try:
            return FineStrategy(item_type, self.daily_rates[item_type])
        except KeyError:
            raise ValidationError(f"No fine rate configured for {item_type.name}") from None


DEFAULT_POLICY = LibraryPolicy()


def current_policy() -> LibraryPolicy:
    from flask import current_app

    return current_app.config.get("LIBRARY_POLICY") or DEFAULT_POLICY
