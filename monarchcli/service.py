"""Client-facing service for subscription and tag data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from . import queries

GET_SUBSCRIPTION_QUERY = queries.get("subscription/show.graphql")
GET_TAGS_QUERY = queries.get("tags/list.graphql")
CREATE_TAG_MUTATION = queries.get("tags/create.graphql")


@dataclass
class GraphQLRequest:
    """A GraphQL operation to send."""

    operation_name: str
    query: str
    variables: dict[str, Any] | None = None


class GraphQLClient(Protocol):
    """What the service needs from a GraphQL transport."""

    def do(self, request: GraphQLRequest) -> dict[str, Any] | None:
        """Send the request and return the decoded response data."""
        ...

    def token_value(self) -> str:
        """Return the current session token."""
        ...


@dataclass
class Subscription:
    """Subscription details of the account."""

    id: str = ""
    payment_source: str = ""
    referral_code: str = ""
    is_on_free_trial: bool = False
    has_premium_entitlement: bool = False


@dataclass
class Tag:
    """A household transaction tag."""

    id: str = ""
    name: str = ""
    color: str = ""


def _obj(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _bool(data: dict[str, Any], key: str) -> bool:
    return bool(data.get(key) or False)


def _tag(data: Any) -> Tag:
    data = _obj(data)
    return Tag(id=_str(data, "id"), name=_str(data, "name"), color=_str(data, "color"))


@dataclass
class Service:
    """Access to account data through a GraphQL client."""

    client: GraphQLClient

    def _do(self, operation_name: str, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        return _obj(self.client.do(GraphQLRequest(operation_name, query, variables)))

    def get_subscription_details(self) -> Subscription:
        """Fetch the subscription details."""
        resp = self._do("GetSubscriptionDetails", GET_SUBSCRIPTION_QUERY)
        sub = _obj(resp.get("subscription"))
        return Subscription(
            id=_str(sub, "id"),
            payment_source=_str(sub, "paymentSource"),
            referral_code=_str(sub, "referralCode"),
            is_on_free_trial=_bool(sub, "isOnFreeTrial"),
            has_premium_entitlement=_bool(sub, "hasPremiumEntitlement"),
        )

    def list_tags(self) -> list[Tag]:
        """Fetch all household transaction tags."""
        resp = self._do("GetTags", GET_TAGS_QUERY)
        return [_tag(t) for t in resp.get("householdTransactionTags") or []]

    def create_tag(self, name: str, color: str) -> Tag:
        """Create a tag and return it."""
        resp = self._do("CreateTag", CREATE_TAG_MUTATION, {"name": name, "color": color})
        return _tag(_obj(resp.get("createHouseholdTransactionTag")).get("tag"))