import pytest
from fastapi.testclient import TestClient

from fedsearch_server.core.error import ConfigurationError
from fedsearch_server.debug_server import create_app

from conftest import FailingConnector, FakeConnector, make_expander


@pytest.fixture
def client(config):
    connectors = [FakeConnector("Europeana", [10.0]), FakeConnector("PLOS", [5.0])]
    app = create_app(config, connectors=connectors, expander=make_expander({"cat": ["feline"]}))
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "ok"


def test_search_returns_ranked_records(client):
    resp = client.get("/search", params={"q": "cat dog"})
    assert resp.status_code == 200
    body = resp.json()
    assert [(r["source"], r["normalized_score"]) for r in body] == [("Europeana", 1.0), ("PLOS", 0.5)]
    assert set(body[0]) == {"title", "source", "link", "original_relevance_score", "normalized_score"}


@pytest.mark.parametrize("params", [{}, {"q": ""}])
def test_search_without_query_is_400(client, params):
    resp = client.get("/search", params=params)
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["error_type"] == "invalid_query"
    assert detail["message"] == "empty query"
    assert detail["details"] == {"parameter": "q"}


def test_search_whitespace_query_is_empty_list(client):
    resp = client.get("/search", params={"q": "   "})
    assert resp.status_code == 200
    assert resp.json() == []


def test_search_all_failed_is_empty_list(config):
    app = create_app(config, connectors=[FailingConnector("A"), FailingConnector("B")], expander=make_expander({}))
    resp = TestClient(app).get("/search", params={"q": "cat"})
    assert resp.status_code == 200
    assert resp.json() == []


def test_debug_expand(client):
    resp = client.get("/debug/expand", params={"query": "cat dog"})
    assert resp.json()["query_string"] == "(cat OR feline) AND dog"


def test_create_app_without_key_fails(monkeypatch):
    monkeypatch.setattr("fedsearch_server.debug_server.load_env", lambda: None)
    monkeypatch.delenv("EUROPEANA_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        create_app()


def test_connectors_built_once_for_app(monkeypatch, config):
    built = []

    def fake_build(cfg):
        built.append(cfg)
        return [FakeConnector("Europeana", [1.0])]

    monkeypatch.setattr("fedsearch_server.core.pipeline.build_connectors", fake_build)
    client = TestClient(create_app(config, expander=make_expander({})))
    client.get("/search", params={"q": "cat"})
    client.get("/search", params={"q": "dog"})
    assert built == [config]
