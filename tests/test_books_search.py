from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def _seed():
    tolkien = client.post("/authors/", json={"name": "J. R. R. Tolkien", "email": "tolkien@oxford.org"}).json()
    le_guin = client.post("/authors/", json={"name": "Ursula K. Le Guin", "email": "ursula@earthsea.org"}).json()
    books = [
        ("The Hobbit", 1937, "Fantasy", tolkien),
        ("The Silmarillion", 1977, "Fantasy", tolkien),
        ("A Wizard of Earthsea", 1968, "Fantasy", le_guin),
        ("The Dispossessed", 1974, "Science Fiction", le_guin),
        ("The Left Hand of Darkness", 1969, "Science Fiction", le_guin),
    ]
    for title, year, genre, author in books:
        r = client.post("/books/", json={"title": title, "publishedYear": year, "genre": genre, "authorId": author["id"]})
        assert r.status_code == 201, r.text


def _titles(body):
    return [b["title"] for b in body["data"]]


def test_search_defaults():
    _seed()
    r = client.get("/books/search")
    assert r.status_code == 200
    body = r.json()
    # Por defecto: createdAt desc
    assert _titles(body)[0] == "The Left Hand of Darkness"
    assert body["pagination"] == {
        "page": 1,
        "limit": 10,
        "total": 5,
        "totalPages": 1,
        "hasNext": False,
        "hasPrev": False,
    }
    assert body["data"][0]["author"]["name"] == "Ursula K. Le Guin"


def test_search_by_title_is_case_insensitive():
    _seed()
    body = client.get("/books/search", params={"search": "the", "sortBy": "title", "order": "asc"}).json()
    assert _titles(body) == [
        "The Dispossessed",
        "The Hobbit",
        "The Left Hand of Darkness",
        "The Silmarillion",
    ]


def test_search_wildcards_are_literal():
    _seed()
    body = client.get("/books/search", params={"search": "%"}).json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 0
    assert body["pagination"]["totalPages"] == 0


def test_filter_by_genre_and_author_name():
    _seed()
    body = client.get("/books/search", params={"genre": "Fantasy", "authorName": "le guin"}).json()
    assert _titles(body) == ["A Wizard of Earthsea"]

    body = client.get("/books/search", params={"genre": "fantasy"}).json()
    assert body["pagination"]["total"] == 0


def test_sort_by_published_year():
    _seed()
    body = client.get("/books/search", params={"sortBy": "publishedYear", "order": "asc"}).json()
    assert _titles(body)[0] == "The Hobbit"
    body = client.get("/books/search", params={"sortBy": "publishedYear"}).json()
    assert _titles(body)[0] == "The Silmarillion"


def test_unknown_sort_and_order_fall_back_to_created_at_desc():
    _seed()
    default = client.get("/books/search").json()
    r = client.get("/books/search", params={"sortBy": "pages; DROP TABLE books", "order": "sideways"})
    assert r.status_code == 200
    assert _titles(r.json()) == _titles(default)


def test_pagination_pages():
    _seed()
    body = client.get("/books/search", params={"limit": 2, "page": 2, "sortBy": "title", "order": "asc"}).json()
    assert _titles(body) == ["The Hobbit", "The Left Hand of Darkness"]
    assert body["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


def test_page_beyond_end_is_empty():
    _seed()
    body = client.get("/books/search", params={"limit": 2, "page": 9}).json()
    assert body["data"] == []
    assert body["pagination"]["hasNext"] is False
    assert body["pagination"]["hasPrev"] is True


def test_limit_is_capped_and_bad_values_use_defaults():
    _seed()
    body = client.get("/books/search", params={"limit": 500}).json()
    assert body["pagination"]["limit"] == 50

    body = client.get("/books/search", params={"limit": "abc", "page": "-3"}).json()
    assert body["pagination"]["limit"] == 10
    assert body["pagination"]["page"] == 1


def test_huge_page_is_empty_not_an_error():
    _seed()
    r = client.get("/books/search", params={"page": "99999999999999999999"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 5
    assert body["pagination"]["hasNext"] is False
    assert body["pagination"]["hasPrev"] is True


def test_genre_is_matched_exactly():
    _seed()
    body = client.get("/books/search", params={"genre": " Fantasy"}).json()
    assert body["data"] == []

    body = client.get("/books/search", params={"genre": "   "}).json()
    assert body["pagination"]["total"] == 5
