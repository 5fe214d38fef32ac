# monarchcli

`monarchcli` is the core of a command-line client for Monarch Money. It gives you:

- `monarchcli.service.Service`, which runs GraphQL operations through a client
  you provide, for subscription details and household tags;
- `monarchcli.transactions.TransactionService`, which extends `Service` with
  listing, paging, summarising, duplicate detection, creating, updating,
  splitting, tagging and deleting transactions;
- `monarchcli.safety`, the guard that decides whether a remote write may run,
  and `Plan`, a record of the changes a dry run would make;
- `monarchcli.output`, the JSON success and error envelopes and the `Renderer`
  that writes them;
- `monarchcli.errors.MonarchError`, the structured error raised throughout.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Bringing your own GraphQL client

The service opens no connections itself. Give it any object that follows the
`GraphQLClient` protocol: `do(request)` takes a `GraphQLRequest`
(`operation_name`, `query`, `variables`) and returns the decoded `data`
object as a dictionary, and `token_value()` returns the session token.
Any exception your `do` raises passes straight through the service methods.

```python
from monarchcli.service import GraphQLRequest, Service

class MyClient:
    def do(self, request: GraphQLRequest) -> dict:
        ...  # send request.operation_name, request.query, request.variables

    def token_value(self) -> str:
        return "token"

service = Service(MyClient())
for tag in service.list_tags():
    print(tag.id, tag.name, tag.color)

new_tag = service.create_tag("Trip", "blue")
subscription = service.get_subscription_details()
```

Fields missing from a response come back as empty strings, zeros or `False`.

## Transactions

```python
from monarchcli.transaction_models import ListTransactionsOptions, SplitInput
from monarchcli.transactions import TransactionService

transactions = TransactionService(MyClient())

page, total = transactions.list_transactions(
    ListTransactionsOptions(limit=50, start_date="2026-05-01", end_date="2026-05-31")
)
everything = transactions.list_all_transactions(ListTransactionsOptions(search="coffee"))
duplicates = transactions.get_duplicate_transactions("2026-05-01", "2026-05-31")
summary = transactions.get_transactions_summary("2026-05-01", "2026-05-31")

transactions.update_transaction("tx-1", notes="lunch", needs_review=False)
transactions.update_transaction_splits(
    "tx-1", [SplitInput(amount=-60, category_id="cat-1"), SplitInput(amount=-40)]
)
transactions.set_transaction_tags("tx-1", ["tag-1", "tag-2"])
```

- A limit of zero or less means 100 for `list_transactions` and 1000 per page
  for `list_all_transactions`; a negative offset is treated as zero.
- `list_all_transactions` keeps requesting pages until a page is empty or the
  reported total has been reached.
- Two transactions count as duplicates when they share date, amount to the
  cent, original statement name and account
  (`transaction_models.duplicate_transaction_key`); `find_duplicates` returns
  every such transaction in its original order.
- `update_transaction` sends only the fields you pass; `None` leaves a field
  untouched.
- `update_transaction_splits` raises `MonarchError` with code `API_ERROR` when
  the response carries errors.
- `create_transaction` never changes the account balance.

## Guarding writes

```python
from monarchcli.safety import OperationTier, Plan, check

check(OperationTier.MUTATION, read_only=False, dry_run=False, confirmed=True)

plan = Plan()
plan.add("update", "tx-1", {"notes": "old"}, {"notes": "new"})
print(plan.to_dict())
```

`check` raises `MonarchError` with code `READ_ONLY_VIOLATION` when read-only
mode blocks a write, and `CONFIRMATION_REQUIRED` when confirmation is missing.
Reads are always allowed. A dry run lets a write through because it makes no
remote changes, but read-only mode still wins over a dry run.

## Output envelopes

```python
from datetime import timedelta
from monarchcli.output import SCHEMA_VERSION, Renderer, new_envelope

renderer = Renderer(json_mode=True, pretty=True)
envelope = new_envelope("tags list", "default", SCHEMA_VERSION, "req-1",
                        {"count": 3}, timedelta(milliseconds=12))
renderer.render_success(envelope)
```

Every JSON reply has `ok`, `data` (or `error`) and a `meta` block with the
command, profile, duration in milliseconds and schema version, plus the
request id and warnings when present. In text mode `render_success` writes
nothing, errors go to standard error as `Error: <message>`, and
`print_diagnostic` writes a line to standard error.

`monarchcli.version.version_info()` returns the version, commit, build date
and builder as a dictionary.

## What this package does not do

- It ships no GraphQL documents. `monarchcli.queries.get(path)` reads them from
  a `graphql` directory next to the package's modules and returns an empty
  string for any file that is not there, so the operations are sent with an
  empty query text until you place the documents in that directory.
- It has no HTTP transport, login or session storage; you supply the
  `GraphQLClient`.
- It installs no command; it is a library for building one.
- Accounts, budgets, cash flow, categories, goals, investments, recurring
  items and rules are not covered.