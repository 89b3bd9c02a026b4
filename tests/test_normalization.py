import pytest

from mirante.ingestion import (
    categorize,
    estimate_read_time,
    is_blocked,
    is_safe_url,
    normalize_articles,
)


def _raw(**overrides):
    base = {
        "title": "Court backs climate justice claim",
        "url": "https://news.example.com/a",
        "source": {"name": "Example News"},
        "author": "Ana",
        "description": "Ruling favours affected communities",
        "content": "Full text",
        "urlToImage": "https://img.example.com/a.jpg",
        "publishedAt": "2024-03-01T10:00:00Z",
    }
    base.update(overrides)
    return base


@pytest.mark.parametrize(
    "title, description, expected",
    [
        ("New climate legislation passes", "", "Policy"),
        ("Indigenous communities protest new research", "", "Community"),
        ("New study on ocean temperature", "", "Science"),
        ("Forest wildlife returns", "", "Environment"),
        ("Weekly roundup", "", "General"),
    ],
)
def test_categorize_uses_first_matching_rule(title, description, expected):
    assert categorize(title, description) == expected


def test_categorize_is_case_insensitive_and_reads_description():
    assert categorize("Headline", "BIODIVERSITY loss") == "Environment"


def test_estimate_read_time_rounds_up_with_minimum_of_one():
    assert estimate_read_time("") == 1
    assert estimate_read_time(" ".join(["word"] * 200)) == 1
    assert estimate_read_time(" ".join(["word"] * 201)) == 2


def test_is_safe_url_rejects_non_http_schemes():
    assert is_safe_url("https://example.com/x")
    assert is_safe_url("http://example.com")
    assert not is_safe_url("javascript:alert(1)")
    assert not is_safe_url("data:text/html,hi")
    assert not is_safe_url("https://")
    assert not is_safe_url(None)


def test_is_blocked_matches_domain_and_subdomains():
    assert is_blocked("https://spam.com/a", ["spam.com"])
    assert is_blocked("https://www.spam.com/a", ["spam.com"])
    assert not is_blocked("https://notspam.com/a", ["spam.com"])


def test_normalize_articles_filters_invalid_records_and_renumbers():
    raw = [
        _raw(title="[Removed]"),
        _raw(url="javascript:alert(1)"),
        _raw(title=None),
        _raw(url="https://blocked.org/x"),
        _raw(url="https://news.example.com/ok", urlToImage="data:image/png;base64,AAA"),
        _raw(url="https://news.example.com/second", source=None, author=""),
    ]

    articles = normalize_articles(raw, blocked_domains=["blocked.org"])

    assert [article.id for article in articles] == [0, 1]
    first, second = articles
    assert first.url == "https://news.example.com/ok"
    assert first.image is None
    assert first.source == "Example News"
    assert second.source == "Unknown Source"
    assert second.author is None


def test_normalize_article_fills_derived_fields():
    (article,) = normalize_articles([_raw()])

    assert article.title == "Court backs climate justice claim"
    assert article.image == "https://img.example.com/a.jpg"
    assert article.published_at == "2024-03-01T10:00:00Z"
    assert article.read_time == 1
    assert article.category == "Community"
    assert article.pinned is False
