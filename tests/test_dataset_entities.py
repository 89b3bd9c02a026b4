from mirante.domain import DatasetQuery
from mirante.domain.entities.dataset import MAX_QUERY_LIMIT, SORT_FIRST_SEEN, SORT_PUBLISHED


def test_query_from_params_ignores_blank_values():
    query = DatasetQuery.from_params({"category": "  ", "region": "asia", "from": "2024-01-01"})

    assert query.category is None
    assert query.region == "asia"
    assert query.published_from == "2024-01-01"
    assert query.sort == SORT_PUBLISHED
    assert query.limit == 50
    assert query.offset == 0


def test_query_from_params_clamps_pagination():
    assert DatasetQuery.from_params({"limit": "9999"}).limit == MAX_QUERY_LIMIT
    assert DatasetQuery.from_params({"limit": "-1"}).limit == 1
    assert DatasetQuery.from_params({"limit": "abc"}).limit == 50
    assert DatasetQuery.from_params({"offset": "-10"}).offset == 0


def test_query_from_params_accepts_first_seen_sort_only():
    assert DatasetQuery.from_params({"sort": "first_seen"}).sort == SORT_FIRST_SEEN
    assert DatasetQuery.from_params({"sort": "title"}).sort == SORT_PUBLISHED
