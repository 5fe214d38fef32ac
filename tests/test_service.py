import json

import pytest

from monarchcli.service import GraphQLRequest, Service, Subscription, Tag


class FakeClient:
    def __init__(self, token="token", handler=None):
        self.token = token
        self.handler = handler
        self.requests = []

    def do(self, request):
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return {}

    def token_value(self):
        return self.token


def run_case(op, want_vars, payload):
    def handler(request):
        assert isinstance(request, GraphQLRequest)
        assert request.operation_name == op
        assert request.variables == want_vars
        return json.loads(payload)

    client = FakeClient(handler=handler)
    return Service(client), client


def run_error_case(op, want_vars, call):
    def handler(request):
        assert request.operation_name == op
        assert request.variables == want_vars
        raise RuntimeError("boom")

    client = FakeClient(handler=handler)
    with pytest.raises(RuntimeError, match="boom"):
        call(Service(client))
    assert len(client.requests) == 1


def test_service_token_value():
    svc = Service(FakeClient(token="secret"))
    assert svc.client.token_value() == "secret"


def test_list_tags():
    svc, client = run_case("GetTags", None, '{"householdTransactionTags":[{"id":"tag-1","name":"Trip","color":"blue"}]}')
    got = svc.list_tags()
    assert len(got) == 1
    assert got[0].name == "Trip"
    assert got[0] == Tag(id="tag-1", name="Trip", color="blue")
    assert len(client.requests) == 1


def test_create_tag():
    svc, _ = run_case(
        "CreateTag",
        {"name": "Trip", "color": "blue"},
        '{"createHouseholdTransactionTag":{"tag":{"id":"tag-1","name":"Trip","color":"blue"}}}',
    )
    got = svc.create_tag("Trip", "blue")
    assert got.id == "tag-1"
    assert got.name == "Trip"


def test_subscription():
    svc, _ = run_case(
        "GetSubscriptionDetails",
        None,
        '{"subscription":{"id":"sub-1","paymentSource":"card","referralCode":"REF","isOnFreeTrial":true,"hasPremiumEntitlement":true}}',
    )
    got = svc.get_subscription_details()
    assert got.payment_source == "card"
    assert got.referral_code == "REF"
    assert got.is_on_free_trial is True
    assert got.has_premium_entitlement is True
    assert got.id == "sub-1"


def test_subscription_missing_fields_default_to_zero_values():
    svc, _ = run_case("GetSubscriptionDetails", None, '{"subscription":{"id":"sub-1"}}')
    assert svc.get_subscription_details() == Subscription(id="sub-1")


def test_list_tags_empty_response():
    svc, _ = run_case("GetTags", None, "{}")
    assert svc.list_tags() == []


def test_error_subscription():
    run_error_case("GetSubscriptionDetails", None, lambda s: s.get_subscription_details())


def test_error_list_tags():
    run_error_case("GetTags", None, lambda s: s.list_tags())


def test_error_create_tag():
    run_error_case("CreateTag", {"name": "Trip", "color": "blue"}, lambda s: s.create_tag("Trip", "blue"))