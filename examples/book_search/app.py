"""Book search — a JSON catalog filtered by query parameters.

Demonstrates:
- ``request.query`` for optional text filters
- ``request.query_parsed`` for typed parameters, with 400 on bad input
- ``wren.query`` reading the current request without passing it around
- last-value-wins for repeated names

Run with any ASGI server:
    uvicorn app:app
"""

from wren import App, HTTPError, Request, query

app = App()

BOOKS = [
    {"id": 1, "title": "The Pragmatic Programmer", "genre": "programming", "year": 2019, "rating": 4.7},
    {"id": 2, "title": "Clean Code", "genre": "programming", "year": 2008, "rating": 4.4},
    {"id": 3, "title": "Designing Data-Intensive Applications", "genre": "systems", "year": 2017, "rating": 4.8},
    {"id": 4, "title": "The Art of Computer Programming", "genre": "cs-theory", "year": 1968, "rating": 4.6},
    {"id": 5, "title": "Fluent Python", "genre": "programming", "year": 2022, "rating": 4.7},
    {"id": 6, "title": "Site Reliability Engineering", "genre": "systems", "year": 2016, "rating": 4.3},
    {"id": 7, "title": "Refactoring", "genre": "programming", "year": 2018, "rating": 4.5},
    {"id": 8, "title": "The Design of Everyday Things", "genre": "design", "year": 2013, "rating": 4.3},
]

PAGE_SIZE = 3


def _typed(request: Request, name: str, kind: type, default):
    """Read a typed parameter; missing gives *default*, malformed gives 400."""
    result = request.query_parsed(name, kind)
    if result is None:
        return default
    if not result:
        raise HTTPError(status=400, detail=str(result.error))
    return result.value


@app.route("/books")
def books(request: Request):
    term = (request.query("q") or "").lower()
    genre = request.query("genre")
    min_year = _typed(request, "since", int, 0)
    min_rating = _typed(request, "rating", float, 0.0)
    page = _typed(request, "page", int, 1)

    matches = [
        book
        for book in BOOKS
        if term in book["title"].lower()
        and (not genre or book["genre"] == genre)
        and book["year"] >= min_year
        and book["rating"] >= min_rating
    ]
    start = (max(page, 1) - 1) * PAGE_SIZE
    return {
        "total": len(matches),
        "page": page,
        "results": [book["title"] for book in matches[start : start + PAGE_SIZE]],
    }


@app.route("/echo")
def echo():
    return {"q": query("q")}
