"""Reading and changing transactions through the GraphQL service."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any

from . import queries
from .errors import ErrorCategory, ErrorCode, MonarchError
from .service import Service, Tag
from .transaction_models import (
    ListTransactionsOptions,
    SplitInput,
    Transaction,
    TransactionCategoryGroup,
    TransactionGoal,
    TransactionSplit,
    TransactionSummaryResult,
    build_list_transactions_filters,
    find_duplicates,
)

GET_TRANSACTIONS_QUERY = queries.get("transactions/list.graphql")
GET_TRANSACTION_QUERY = queries.get("transactions/show.graphql")
GET_TRANSACTIONS_SUMMARY_QUERY = queries.get("transactions/summary.graphql")
UPDATE_TRANSACTION_MUTATION = queries.get("transactions/update.graphql")
DELETE_TRANSACTION_MUTATION = queries.get("transactions/delete.graphql")
CREATE_TRANSACTION_MUTATION = queries.get("transactions/create.graphql")
SET_TRANSACTION_TAGS_MUTATION = queries.get("transactions/set_tags.graphql")
GET_TRANSACTION_SPLITS_QUERY = queries.get("transactions/get_splits.graphql")
UPDATE_TRANSACTION_SPLITS_MUTATION = queries.get("transactions/update_splits.graphql")

DUPLICATE_PAGE_SIZE = 1000
LIST_ALL_DEFAULT_LIMIT = 1000


def _obj(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _bool(data: dict[str, Any], key: str) -> bool:
    return data.get(key) is True


def _float(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _name_of(data: dict[str, Any], key: str) -> str:
    return _str(_obj(data.get(key)), "name")


def _tags(values: Any) -> list[Tag]:
    tags = []
    for item in _list(values):
        item = _obj(item)
        tags.append(Tag(id=_str(item, "id"), name=_str(item, "name"), color=_str(item, "color")))
    return tags


def _empty_filters() -> dict[str, Any]:
    return {"search": "", "categories": [], "accounts": [], "tags": []}


def _listed_transaction(row: Any) -> Transaction:
    row = _obj(row)
    category = _obj(row.get("category"))
    group = _obj(category.get("group"))
    account = _obj(row.get("account"))
    goal = _obj(row.get("goal"))
    return Transaction(
        id=_str(row, "id"),
        date=_str(row, "date"),
        amount=_float(row, "amount"),
        merchant=_name_of(row, "merchant"),
        category=_str(category, "name"),
        category_group=TransactionCategoryGroup(
            id=_str(group, "id"), name=_str(group, "name"), type=_str(group, "type")
        ),
        notes=_str(row, "notes"),
        tags=_tags(row.get("tags")),
        goal=TransactionGoal(id=_str(goal, "id"), name=_str(goal, "name")),
        pending=_bool(row, "pending"),
        hide_from_reports=_bool(row, "hideFromReports"),
        plaid_name=_str(row, "plaidName"),
        data_provider_description=_str(row, "dataProviderDescription"),
        is_recurring=_bool(row, "isRecurring"),
        review_status=_str(row, "reviewStatus"),
        needs_review=_bool(row, "needsReview"),
        is_split_transaction=_bool(row, "isSplitTransaction"),
        created_at=_str(row, "createdAt"),
        updated_at=_str(row, "updatedAt"),
        account_id=_str(account, "id"),
        account_order=_int(account, "order"),
        account_type_group=_str(_obj(account.get("type")), "group"),
        owner_display_name=_str(_obj(row.get("ownedByUser")), "displayName"),
    )


class TransactionService(Service):
    """Transaction operations on top of the GraphQL service."""

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Fetch one transaction by id."""
        resp = self._do("GetTransaction", GET_TRANSACTION_QUERY, {"id": transaction_id})
        tx = _obj(resp.get("getTransaction"))
        return Transaction(
            id=_str(tx, "id"),
            date=_str(tx, "date"),
            amount=_float(tx, "amount"),
            merchant=_name_of(tx, "merchant"),
            category=_name_of(tx, "category"),
            notes=_str(tx, "notes"),
            pending=_bool(tx, "pending"),
            hide_from_reports=_bool(tx, "hideFromReports"),
            plaid_name=_str(tx, "plaidName"),
            is_recurring=_bool(tx, "isRecurring"),
            review_status=_str(tx, "reviewStatus"),
            needs_review=_bool(tx, "needsReview"),
            is_split_transaction=_bool(tx, "isSplitTransaction"),
            created_at=_str(tx, "createdAt"),
            updated_at=_str(tx, "updatedAt"),
            account_id=_str(_obj(tx.get("account")), "id"),
            tags=_tags(tx.get("tags")),
        )

    def get_transactions_summary(self, start_date: str, end_date: str) -> TransactionSummaryResult:
        """Fetch aggregate figures for transactions in a date range."""
        filters = _empty_filters()
        if start_date:
            filters["startDate"] = start_date
        if end_date:
            filters["endDate"] = end_date
        resp = self._do("GetTransactionsPage", GET_TRANSACTIONS_SUMMARY_QUERY, {"filters": filters})
        aggregates = _list(resp.get("aggregates"))
        if not aggregates:
            return TransactionSummaryResult()
        summary = _obj(_obj(aggregates[0]).get("summary"))
        return TransactionSummaryResult(
            avg=_float(summary, "avg"),
            count=_int(summary, "count"),
            max=_float(summary, "max"),
            max_expense=_float(summary, "maxExpense"),
            sum=_float(summary, "sum"),
            sum_income=_float(summary, "sumIncome"),
            sum_expense=_float(summary, "sumExpense"),
            first=_str(summary, "first"),
            last=_str(summary, "last"),
        )

    def get_duplicate_transactions(self, start_date: str, end_date: str) -> list[Transaction]:
        """Fetch every transaction in the range and return those that look duplicated."""
        everything: list[Transaction] = []
        offset = 0
        while True:
            page, total = self.list_transactions(
                ListTransactionsOptions(
                    limit=DUPLICATE_PAGE_SIZE,
                    offset=offset,
                    start_date=start_date,
                    end_date=end_date,
                )
            )
            everything.extend(page)
            if not page or offset + len(page) >= total:
                break
            offset += DUPLICATE_PAGE_SIZE
        return find_duplicates(everything)

    def get_transaction_splits(self, transaction_id: str) -> list[TransactionSplit]:
        """Fetch the parts of a split transaction."""
        resp = self._do("TransactionSplitQuery", GET_TRANSACTION_SPLITS_QUERY, {"id": transaction_id})
        tx = _obj(resp.get("getTransaction"))
        splits = []
        for item in _list(tx.get("splitTransactions")):
            item = _obj(item)
            splits.append(
                TransactionSplit(
                    id=_str(item, "id"),
                    amount=_float(item, "amount"),
                    category=_name_of(item, "category"),
                    merchant=_name_of(item, "merchant"),
                    notes=_str(item, "notes"),
                )
            )
        return splits

    def update_transaction(
        self,
        transaction_id: str,
        *,
        notes: str | None = None,
        category_id: str | None = None,
        amount: float | None = None,
        date: str | None = None,
        merchant_name: str | None = None,
        hide_from_reports: bool | None = None,
        needs_review: bool | None = None,
    ) -> Transaction:
        """Change the given fields of a transaction; fields left as None are untouched."""
        changes = {
            "notes": notes,
            "category": category_id,
            "amount": amount,
            "date": date,
            "name": merchant_name,
            "hideFromReports": hide_from_reports,
            "needsReview": needs_review,
        }
        payload: dict[str, Any] = {"id": transaction_id}
        payload.update({key: value for key, value in changes.items() if value is not None})
        resp = self._do(
            "Web_TransactionDrawerUpdateTransaction",
            UPDATE_TRANSACTION_MUTATION,
            {"input": payload},
        )
        tx = _obj(_obj(resp.get("updateTransaction")).get("transaction"))
        return Transaction(
            id=_str(tx, "id"),
            amount=_float(tx, "amount"),
            date=_str(tx, "date"),
            notes=_str(tx, "notes"),
            category=_name_of(tx, "category"),
            merchant=_name_of(tx, "merchant"),
            hide_from_reports=_bool(tx, "hideFromReports"),
            needs_review=_bool(tx, "needsReview"),
        )

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        self._do(
            "Common_DeleteTransactionMutation",
            DELETE_TRANSACTION_MUTATION,
            {"input": {"transactionId": transaction_id}},
        )

    def update_transaction_splits(self, transaction_id: str, splits: Iterable[SplitInput]) -> None:
        """Replace the splits of a transaction; raise MonarchError if the service rejects them."""
        split_data = [split.to_variables() for split in splits]
        resp = self._do(
            "Common_SplitTransactionMutation",
            UPDATE_TRANSACTION_SPLITS_MUTATION,
            {"input": {"transactionId": transaction_id, "splitData": split_data}},
        )
        errors = _list(_obj(resp.get("updateTransactionSplit")).get("errors"))
        if errors:
            raise MonarchError(
                ErrorCode.API_ERROR,
                _str(_obj(errors[0]), "message"),
                ErrorCategory.API,
            )

    def create_transaction(
        self,
        amount: float,
        merchant_name: str,
        date: str,
        category_id: str,
        account_id: str,
        notes: str,
    ) -> Transaction:
        """Create a manual transaction without changing the account balance."""
        payload = {
            "date": date,
            "accountId": account_id,
            "amount": amount,
            "merchantName": merchant_name,
            "categoryId": category_id,
            "notes": notes,
            "shouldUpdateBalance": False,
        }
        resp = self._do("Common_CreateTransactionMutation", CREATE_TRANSACTION_MUTATION, {"input": payload})
        tx = _obj(_obj(resp.get("createTransaction")).get("transaction"))
        return Transaction(
            id=_str(tx, "id"),
            amount=_float(tx, "amount"),
            date=_str(tx, "date"),
            merchant=_name_of(tx, "merchant"),
        )

    def set_transaction_tags(self, transaction_id: str, tag_ids: Iterable[str]) -> None:
        """Replace the tags on a transaction."""
        self._do(
            "Web_SetTransactionTags",
            SET_TRANSACTION_TAGS_MUTATION,
            {"input": {"transactionId": transaction_id, "tagIds": list(tag_ids)}},
        )

    def list_transactions(self, options: ListTransactionsOptions) -> tuple[list[Transaction], int]:
        """Fetch one page of transactions and the total number that match."""
        options = options.normalized()
        variables = {
            "offset": options.offset,
            "limit": options.limit,
            "filters": build_list_transactions_filters(options),
        }
        resp = self._do("GetTransactionsList", GET_TRANSACTIONS_QUERY, variables)
        listing = _obj(resp.get("allTransactions"))
        transactions = [_listed_transaction(row) for row in _list(listing.get("results"))]
        return transactions, _int(listing, "totalCount")

    def list_all_transactions(self, options: ListTransactionsOptions) -> list[Transaction]:
        """Fetch pages until every matching transaction has been read."""
        options = dataclasses.replace(
            options,
            limit=options.limit if options.limit > 0 else LIST_ALL_DEFAULT_LIMIT,
            offset=max(options.offset, 0),
        )
        everything: list[Transaction] = []
        while True:
            page, total = self.list_transactions(options)
            everything.extend(page)
            if not page or options.offset + len(page) >= total:
                break
            options = dataclasses.replace(options, offset=options.offset + len(page))
        return everything