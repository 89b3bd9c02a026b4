from datetime import date

from mirante.ingestion.query import (
    BASE_QUERY,
    MAX_QUERY_LENGTH,
    SUPPORTED_REGIONS,
    build_query,
    days_ago,
    resolve_region,
)


def test_global_region_uses_only_the_thematic_filter():
    assert build_query("global") == BASE_QUERY
    assert build_query(None) == BASE_QUERY


def test_regional_query_combines_filters_with_and():
    query = build_query("africa")

    assert query.startswith(f"({BASE_QUERY}) AND (")
    assert "Nigeria" in query
    assert query.endswith(")")


def test_unknown_region_falls_back_to_global():
    assert resolve_region("atlantis") == "global"
    assert build_query("atlantis") == BASE_QUERY


def test_every_supported_region_fits_the_query_limit():
    assert SUPPORTED_REGIONS[0] == "global"
    for region in SUPPORTED_REGIONS:
        assert len(build_query(region)) <= MAX_QUERY_LENGTH, region


def test_days_ago_returns_iso_date():
    assert days_ago(7, today=date(2024, 3, 10)) == "2024-03-03"
    assert days_ago(30, today=date(2024, 3, 1)) == "2024-01-31"
