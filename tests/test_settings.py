from mirante.settings import AppSettings


def test_from_env_reads_defaults(monkeypatch):
    for name in (
        "NEWSAPI_KEY",
        "EDITOR_TOKEN",
        "MIRANTE_CACHE_TTL",
        "MIRANTE_BLOCKED_DOMAINS",
        "MIRANTE_CURATION_ENABLED",
        "MIRANTE_CURATION_BACKEND",
        "MIRANTE_DATASET_ENABLED",
        "MIRANTE_COLLECTOR_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings.from_env()

    assert settings.newsapi_key is None
    assert settings.editor_token is None
    assert settings.cache_ttl == 300.0
    assert settings.blocked_domains == ()
    assert settings.curation_enabled is True
    assert settings.curation_backend == "file"
    assert settings.dataset_enabled is False
    assert settings.collector_enabled is False


def test_collector_follows_dataset_flag_unless_overridden(monkeypatch):
    monkeypatch.setenv("MIRANTE_DATASET_ENABLED", "true")
    monkeypatch.delenv("MIRANTE_COLLECTOR_ENABLED", raising=False)
    assert AppSettings.from_env().collector_enabled is True

    monkeypatch.setenv("MIRANTE_COLLECTOR_ENABLED", "0")
    assert AppSettings.from_env().collector_enabled is False


def test_blocked_domains_are_split_and_lowercased(monkeypatch):
    monkeypatch.setenv("MIRANTE_BLOCKED_DOMAINS", " Spam.com, ,clickbait.net ")

    assert AppSettings.from_env().blocked_domains == ("spam.com", "clickbait.net")


def test_empty_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("NEWSAPI_KEY", "")

    assert AppSettings.from_env().newsapi_key is None


def test_api_rate_limit_defaults_and_can_be_disabled(monkeypatch):
    monkeypatch.delenv("MIRANTE_API_RATE_LIMIT", raising=False)
    assert AppSettings.from_env().api_rate_limit == "30/minute"

    monkeypatch.setenv("MIRANTE_API_RATE_LIMIT", " ")
    assert AppSettings.from_env().api_rate_limit is None
