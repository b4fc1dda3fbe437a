import pytest

from fedsearch_server.core.config import (
    DATAMUSE_API_URL,
    DEFAULT_DATAMUSE_MAX,
    DEFAULT_PROVIDER_TIMEOUT,
    DEFAULT_ROWS,
    load_config,
)
from fedsearch_server.core.error import ConfigurationError, ErrorType


def test_missing_api_key_fails_fast():
    with pytest.raises(ConfigurationError) as exc_info:
        load_config({})
    assert exc_info.value.error_type is ErrorType.CONFIGURATION
    assert exc_info.value.details["key"] == "EUROPEANA_API_KEY"


def test_blank_api_key_is_missing():
    with pytest.raises(ConfigurationError):
        load_config({"EUROPEANA_API_KEY": "   "})


def test_defaults_applied():
    config = load_config({"EUROPEANA_API_KEY": "abc"})
    assert config.europeana_api_key == "abc"
    assert config.datamuse_url == DATAMUSE_API_URL
    assert config.datamuse_max == DEFAULT_DATAMUSE_MAX
    assert config.europeana_rows == DEFAULT_ROWS
    assert config.plos_rows == DEFAULT_ROWS
    assert config.plos_fields == "title_display,score,id"
    assert config.provider_timeout == DEFAULT_PROVIDER_TIMEOUT


def test_overrides_are_coerced():
    config = load_config({
        "EUROPEANA_API_KEY": "abc",
        "DATAMUSE_MAX_RESULTS": "3",
        "EUROPEANA_ROWS": "10",
        "PLOS_ROWS": "7",
        "PROVIDER_TIMEOUT": "2.5",
        "PLOS_API_URL": "https://plos.example/search",
    })
    assert config.datamuse_max == 3
    assert config.europeana_rows == 10
    assert config.plos_rows == 7
    assert config.provider_timeout == 2.5
    assert config.plos_url == "https://plos.example/search"


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_numbers_rejected(value):
    with pytest.raises(ConfigurationError):
        load_config({"EUROPEANA_API_KEY": "abc", "PLOS_ROWS": value})


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "NaN"])
def test_non_finite_timeouts_rejected(value):
    with pytest.raises(ConfigurationError, match="PROVIDER_TIMEOUT"):
        load_config({"EUROPEANA_API_KEY": "abc", "PROVIDER_TIMEOUT": value})
    with pytest.raises(ConfigurationError, match="EXPANSION_TIMEOUT"):
        load_config({"EUROPEANA_API_KEY": "abc", "EXPANSION_TIMEOUT": value})


def test_config_is_immutable(config):
    with pytest.raises(AttributeError):
        config.europeana_api_key = "other"
