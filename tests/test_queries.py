import pytest

from monarchcli import queries


@pytest.fixture
def query_root(tmp_path, monkeypatch):
    (tmp_path / "GetIdentity.graphql").write_text("query GetIdentity { me { id } }", encoding="utf-8")
    (tmp_path / "rules").mkdir()
    (tmp_path / "rules" / "list.graphql").write_text("query GetTransactionRules { transactionRules { id } }", encoding="utf-8")
    monkeypatch.setattr(queries, "QUERY_ROOT", tmp_path)
    return tmp_path


def test_get_returns_query(query_root):
    assert queries.get("GetIdentity.graphql") == "query GetIdentity { me { id } }"


def test_get_returns_nested_rule_query(query_root):
    got = queries.get("rules/list.graphql")
    assert got.startswith("query GetTransactionRules")


def test_get_returns_empty_string_for_missing_file(query_root):
    assert queries.get("does-not-exist.graphql") == ""


@pytest.mark.parametrize("path", ["", "../GetIdentity.graphql", "/GetIdentity.graphql", "rules/", "rules//list.graphql", "./GetIdentity.graphql"])
def test_get_rejects_invalid_paths(query_root, path):
    assert queries.get(path) == ""


def test_get_returns_empty_string_for_directory(query_root):
    assert queries.get("rules") == ""