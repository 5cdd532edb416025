"""Tests for settings loading and per-retailer defaults."""

import pytest
from pydantic import ValidationError

from retailcrawl.config import Settings


class TestSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, test_settings):
        """Test global defaults."""
        assert test_settings.DEFAULT_MAX_PAGES == 20
        assert test_settings.DEFAULT_REQUEST_DELAY_MS == 2000
        assert test_settings.CRAWL_RUN_ATTEMPTS == 3
        assert test_settings.get_proxy_list() == []
        assert not test_settings.has_brightdata_credentials()

    @pytest.mark.parametrize(
        "slug, max_pages, delay_ms",
        [
            ("amazon-uk", 50, 3000),
            ("ocado", 50, 3000),
            ("pets-at-home", 100, 2000),
            ("bm", 30, 2000),
            ("just-for-pets", 30, 2000),
            ("zooplus", 20, 2000),
            ("corner-shop", 20, 2000),
        ],
    )
    def test_retailer_overrides(self, test_settings, slug, max_pages, delay_ms):
        """Test per-retailer caps and delays."""
        assert test_settings.get_max_pages(slug) == max_pages
        assert test_settings.get_request_delay_ms(slug) == delay_ms

    def test_environment_variables(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("DEFAULT_MAX_PAGES", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("PROXY_LIST", "http://p1:8000, ,http://p2:8000")

        config = Settings(_env_file=None)

        assert config.get_max_pages("corner-shop") == 5
        assert config.LOG_LEVEL == "DEBUG"
        assert config.get_proxy_list() == ["http://p1:8000", "http://p2:8000"]

    def test_overrides_from_environment(self, monkeypatch):
        """Test the override table can be replaced with JSON."""
        monkeypatch.setenv("RETAILER_OVERRIDES", '{"tesco": {"max_pages": 7}}')

        config = Settings(_env_file=None)

        assert config.get_max_pages("tesco") == 7
        assert config.get_request_delay_ms("tesco") == 2000
        assert config.get_max_pages("amazon-uk") == 20

    def test_brightdata_credentials(self):
        """Test both username and password are needed."""
        assert not Settings(_env_file=None, BRIGHTDATA_USERNAME="u").has_brightdata_credentials()
        assert Settings(
            _env_file=None, BRIGHTDATA_USERNAME="u", BRIGHTDATA_PASSWORD="p"
        ).has_brightdata_credentials()

    @pytest.mark.parametrize(
        "kwargs",
        [{"DEFAULT_MAX_PAGES": 0}, {"DEFAULT_REQUEST_DELAY_MS": -1}],
    )
    def test_invalid_limits(self, kwargs):
        """Test unusable crawl limits are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **kwargs)
