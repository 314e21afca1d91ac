"""
Integration tests against a seeded MongoDB.

Skipped unless a server answers at ``TEST_MONGO_URI``.
"""

from collections import Counter

import queries
from db_executor import aggregate, delete_one, find_documents, paginate, update_one
from index_utils import create_indexes, explain_find, get_collection_indexes, summarize_explain
from runner import run_queries
from seed import SAMPLE_BOOKS


class TestBasicQueries:

    def test_genre_filter_returns_exact_subset(self, books):
        docs = find_documents(books, queries.by_genre("Fiction"))

        expected = {b.title for b in SAMPLE_BOOKS if b.genre == "Fiction"}
        assert {d["title"] for d in docs} == expected
        assert all(d["genre"] == "Fiction" for d in docs)

    def test_year_filter_is_strict(self, books):
        books.insert_one({"title": "Edge", "author": "X", "genre": "Y",
                          "published_year": 2015, "price": 1.0, "in_stock": True})

        docs = find_documents(books, queries.published_after(2015))

        expected = {b.title for b in SAMPLE_BOOKS if b.published_year > 2015}
        assert {d["title"] for d in docs} == expected

    def test_update_targets_one_document(self, books):
        before = {d["title"]: d for d in find_documents(books)}

        counts = update_one(books, queries.by_title("Book Title 1"), queries.set_price(25.99))

        after = {d["title"]: d for d in find_documents(books)}
        assert counts == {"matched_count": 1, "modified_count": 1}
        assert after["Book Title 1"]["price"] == 25.99
        before.pop("Book Title 1")
        after.pop("Book Title 1")
        assert after == before

    def test_delete_removes_old_book(self, books):
        assert delete_one(books, queries.by_title("Old Book")) == {"deleted_count": 1}
        assert books.count_documents({"title": "Old Book"}) == 0

        assert delete_one(books, queries.by_title("Old Book")) == {"deleted_count": 0}


class TestAdvancedQueries:

    def test_projection(self, books):
        docs = find_documents(books, projection=queries.SUMMARY_PROJECTION)

        assert all(set(d) == {"title", "author", "price"} for d in docs)

    def test_price_sorts(self, books):
        ascending = [d["price"] for d in find_documents(books, sort=queries.PRICE_ASCENDING)]
        descending = [d["price"] for d in find_documents(books, sort=queries.PRICE_DESCENDING)]

        assert ascending == sorted(ascending)
        assert descending == sorted(descending, reverse=True)

    def test_pages_do_not_overlap(self, books):
        first = paginate(books, page=1, page_size=5)["data"]
        second = paginate(books, page=2, page_size=5)["data"]

        natural = find_documents(books, limit=10)
        assert len(first) == len(second) == 5
        assert not {d["_id"] for d in first} & {d["_id"] for d in second}
        assert [d["_id"] for d in first + second] == [d["_id"] for d in natural]


class TestAggregations:

    def test_average_price_by_genre(self, books):
        books.insert_many([
            {"title": f"Priced {p}", "author": "Tester", "genre": "Averages",
             "published_year": 2000, "price": p, "in_stock": True}
            for p in (10, 20, 30)
        ])

        results = {r["_id"]: r["avgPrice"] for r in aggregate(books, queries.average_price_by_genre())}

        assert results["Averages"] == 20

    def test_top_author(self, books):
        assert aggregate(books, queries.top_author()) == [{"_id": "John Doe", "totalBooks": 3}]

    def test_books_by_decade(self, books):
        results = aggregate(books, queries.books_by_decade())

        buckets = [r["_id"] for r in results]
        assert buckets == sorted(buckets)
        assert {int(r["_id"]): r["totalBooks"] for r in results} == dict(
            Counter(b.published_year // 10 for b in SAMPLE_BOOKS)
        )


class TestIndexes:

    def test_creation_is_idempotent(self, books):
        first = create_indexes(books)
        second = create_indexes(books)

        assert first == second == ["title_1", "author_1_published_year_1"]
        names = {i["name"] for i in get_collection_indexes(books)}
        assert {"_id_", "title_1", "author_1_published_year_1"} <= names

    def test_explain_uses_title_index(self, books):
        create_indexes(books)

        summary = summarize_explain(explain_find(books, queries.by_title("Book Title 1")))

        assert summary["index_used"] == "title_1"
        assert summary["n_returned"] == 1


def test_full_sequence(books, capsys):
    run_queries(books)

    assert books.find_one(queries.by_title("Book Title 1"))["price"] == 25.99
    assert books.count_documents(queries.by_title("Old Book")) == 0
    assert "Explain query with index:" in capsys.readouterr().out
