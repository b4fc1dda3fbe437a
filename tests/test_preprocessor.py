import asyncio
import threading

import pytest
import requests

from fedsearch_server.core.error import ConfigurationError
from fedsearch_server.core.preprocessor import (
    build_query,
    build_query_group,
    build_query_string,
    expand_terms,
    split_terms,
)

from conftest import FakeResponse, make_expander


def test_split_terms_on_any_whitespace():
    assert split_terms("  cat \t dog\nbird  ") == ["cat", "dog", "bird"]


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_split_terms_empty(raw):
    assert split_terms(raw) == []


def test_group_without_synonyms_is_bare_term():
    assert build_query_group("dog", []) == "dog"
    assert build_query_group("dog") == "dog"


def test_group_with_synonyms():
    assert build_query_group("cat", ["feline", "kitty"]) == "(cat OR feline OR kitty)"


def test_group_deduplicates_keeping_first_seen_order():
    assert build_query_group("cat", ["feline", "cat", "feline", "puss"]) == "(cat OR feline OR puss)"


def test_group_only_self_as_synonym_is_bare():
    assert build_query_group("cat", ["cat"]) == "cat"


def test_query_string_scenario():
    assert build_query_string(["cat", "dog"], [["feline"], []]) == "(cat OR feline) AND dog"


def test_query_string_no_terms():
    assert build_query_string([], []) == ""


def test_query_string_misaligned():
    with pytest.raises(ValueError):
        build_query_string(["cat"], [])


def test_build_query_expands_every_term(config):
    expander = make_expander({"cat": ["feline"], "dog": []})
    assert asyncio.run(build_query("cat dog", expander, config)) == "(cat OR feline) AND dog"
    assert sorted(expander.calls) == ["cat", "dog"]


def test_build_query_keeps_term_order(config):
    expander = make_expander({"b": ["bee"], "a": ["ay"]})
    assert asyncio.run(build_query("b a", expander, config)) == "(b OR bee) AND (a OR ay)"


def test_build_query_empty_skips_expander(config):
    expander = make_expander({})
    assert asyncio.run(build_query("   ", expander, config)) == ""
    assert expander.calls == []


def test_failed_expansion_keeps_literal_term(config):
    def expander(term, cfg):
        if term == "dog":
            raise RuntimeError("lexicon down")
        return ["feline"]

    assert asyncio.run(build_query("cat dog", expander, config)) == "(cat OR feline) AND dog"


def test_expansions_run_concurrently(config):
    # Each call waits until both have started; a sequential loop would time out.
    barrier = threading.Barrier(2, timeout=5)

    def expander(term, cfg):
        barrier.wait()
        return [term + "s"]

    assert asyncio.run(expand_terms(["cat", "dog"], expander, config)) == [["cats"], ["dogs"]]


def test_expand_terms_empty(config):
    assert asyncio.run(expand_terms([], make_expander({}), config)) == []


def test_build_query_without_config_uses_environment(monkeypatch):
    monkeypatch.setenv("EUROPEANA_API_KEY", "env-key")
    monkeypatch.setenv("DATAMUSE_API_URL", "https://datamuse.env/words")
    seen = []

    def fake_get(url, params=None, timeout=None):
        seen.append(url)
        if params["ml"] == "cat":
            return FakeResponse([{"word": "feline"}])
        return FakeResponse([])

    monkeypatch.setattr(requests, "get", fake_get)
    assert asyncio.run(build_query("cat dog")) == "(cat OR feline) AND dog"
    assert seen == ["https://datamuse.env/words"] * 2


def test_build_query_without_config_or_key_fails(monkeypatch):
    monkeypatch.delenv("EUROPEANA_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        asyncio.run(build_query("cat"))
