"""Transaction records, listing options and helpers that work on them."""

from __future__ import annotations

import dataclasses
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .service import Tag

DEFAULT_LIST_LIMIT = 100

_OPTIONAL_BOOL_FILTERS = (
    ("needs_review", "needsReview"),
    ("has_notes", "hasNotes"),
    ("is_split", "isSplit"),
    ("is_recurring", "isRecurring"),
    ("pending", "isPending"),
    ("hide_from_reports", "hideFromReports"),
)


@dataclass
class TransactionCategoryGroup:
    """The group a transaction's category belongs to."""

    id: str = ""
    name: str = ""
    type: str = ""


@dataclass
class TransactionGoal:
    """The goal a transaction is linked to."""

    id: str = ""
    name: str = ""


@dataclass
class Transaction:
    """A single transaction as the client presents it."""

    id: str = ""
    date: str = ""
    amount: float = 0.0
    merchant: str = ""
    category: str = ""
    category_group: TransactionCategoryGroup = field(default_factory=TransactionCategoryGroup)
    notes: str = ""
    tags: list[Tag] = field(default_factory=list)
    goal: TransactionGoal = field(default_factory=TransactionGoal)
    pending: bool = False
    hide_from_reports: bool = False
    plaid_name: str = ""
    data_provider_description: str = ""
    is_recurring: bool = False
    review_status: str = ""
    needs_review: bool = False
    is_split_transaction: bool = False
    created_at: str = ""
    updated_at: str = ""
    account_id: str = ""
    account_order: int = 0
    account_type_group: str = ""
    owner_display_name: str = ""


@dataclass
class TransactionSplit:
    """One part of a split transaction."""

    id: str = ""
    amount: float = 0.0
    category: str = ""
    merchant: str = ""
    notes: str = ""


@dataclass
class SplitInput:
    """One part requested when splitting a transaction."""

    amount: float = 0.0
    category_id: str = ""
    merchant_name: str = ""
    notes: str = ""

    def to_variables(self) -> dict[str, Any]:
        """Return the split as mutation input, leaving out empty fields."""
        data: dict[str, Any] = {"amount": self.amount}
        if self.category_id:
            data["categoryId"] = self.category_id
        if self.merchant_name:
            data["merchantName"] = self.merchant_name
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass
class TransactionSummaryResult:
    """Aggregate figures over a set of transactions."""

    avg: float = 0.0
    count: int = 0
    max: float = 0.0
    max_expense: float = 0.0
    sum: float = 0.0
    sum_income: float = 0.0
    sum_expense: float = 0.0
    first: str = ""
    last: str = ""


@dataclass
class ListTransactionsOptions:
    """Paging and filtering for a transaction listing."""

    limit: int = 0
    offset: int = 0
    search: str = ""
    start_date: str = ""
    end_date: str = ""
    category_ids: list[str] = field(default_factory=list)
    account_ids: list[str] = field(default_factory=list)
    tag_ids: list[str] = field(default_factory=list)
    goal_ids: list[str] = field(default_factory=list)
    needs_review: bool | None = None
    has_notes: bool | None = None
    is_split: bool | None = None
    is_recurring: bool | None = None
    pending: bool | None = None
    hide_from_reports: bool | None = None

    def normalized(self) -> ListTransactionsOptions:
        """Return a copy with a positive limit and a non-negative offset."""
        return dataclasses.replace(
            self,
            limit=self.limit if self.limit > 0 else DEFAULT_LIST_LIMIT,
            offset=max(self.offset, 0),
        )


def build_list_transactions_filters(options: ListTransactionsOptions) -> dict[str, Any]:
    """Build the GraphQL filter object for a transaction listing."""
    filters: dict[str, Any] = {
        "search": options.search,
        "categories": list(options.category_ids or []),
        "accounts": list(options.account_ids or []),
        "tags": list(options.tag_ids or []),
    }
    if options.start_date:
        filters["startDate"] = options.start_date
    if options.end_date:
        filters["endDate"] = options.end_date
    for attribute, key in _OPTIONAL_BOOL_FILTERS:
        value = getattr(options, attribute)
        if value is not None:
            filters[key] = value
    if options.goal_ids:
        filters["goals"] = list(options.goal_ids)
    return filters


def duplicate_transaction_key(transaction: Transaction) -> str:
    """Return the key under which two transactions count as duplicates."""
    return "|".join(
        (
            transaction.date,
            f"{transaction.amount:.2f}",
            transaction.plaid_name,
            transaction.account_id,
        )
    )


def find_duplicates(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return, in their original order, the transactions whose key occurs more than once."""
    items = list(transactions)
    counts = Counter(duplicate_transaction_key(tx) for tx in items)
    return [tx for tx in items if counts[duplicate_transaction_key(tx)] > 1]