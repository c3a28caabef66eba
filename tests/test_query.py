from sqlalchemy import select

from app import models
from app.pagination import compute_pagination
from app.query import MAX_LIMIT, build_book_query


def test_defaults():
    q = build_book_query()
    assert (q.page, q.limit, q.sort_by, q.order) == (1, 10, "createdAt", "desc")
    assert q.skip == 0
    assert q.take == 10
    assert q.filters() == []


def test_limit_is_capped():
    assert build_book_query(limit="51").limit == MAX_LIMIT
    assert build_book_query(limit=1000).take == 50
    assert build_book_query(limit="50").limit == 50


def test_invalid_numbers_fall_back():
    q = build_book_query(page="0", limit="0")
    assert q.page == 1
    assert q.limit == 10
    q = build_book_query(page="dos", limit="-4")
    assert q.page == 1
    assert q.skip == 0


def test_skip_from_page_and_limit():
    q = build_book_query(page="3", limit="20")
    assert q.skip == 40
    assert q.take == 20


def test_sort_and_order_allow_list():
    q = build_book_query(sort_by="publishedYear", order="asc")
    assert (q.sort_by, q.order) == ("publishedYear", "asc")
    q = build_book_query(sort_by="isbn", order="ASC")
    assert (q.sort_by, q.order) == ("createdAt", "desc")


def test_blank_filters_are_ignored():
    q = build_book_query(search="", genre="  ", author_name=None)
    assert q.filters() == []


def test_filter_values_are_bound_parameters():
    q = build_book_query(search="x' OR 1=1 --", genre="Drama", author_name="ana")
    assert len(q.filters()) == 3

    stmt = q.apply(select(models.Book))
    sql = str(stmt)
    assert "OR 1=1" not in sql
    assert "x' OR 1=1 --" in stmt.compile().params.values()


def test_pagination_math():
    assert compute_pagination(0, 1, 10) == {
        "page": 1, "limit": 10, "total": 0, "total_pages": 0, "has_next": False, "has_prev": False,
    }
    p = compute_pagination(21, 2, 10)
    assert (p["total_pages"], p["has_next"], p["has_prev"]) == (3, True, True)
    p = compute_pagination(20, 2, 10)
    assert (p["total_pages"], p["has_next"], p["has_prev"]) == (2, False, True)
    p = compute_pagination(1, 1, 50)
    assert (p["total_pages"], p["has_next"], p["has_prev"]) == (1, False, False)


def test_pagination_page_beyond_end():
    p = compute_pagination(5, 4, 2)
    assert p["total_pages"] == 3
    assert p["has_next"] is False
    assert p["has_prev"] is True


def test_genre_value_is_not_altered():
    assert build_book_query(genre=" Drama ").genre == " Drama "
    assert build_book_query(genre="  ").genre is None
