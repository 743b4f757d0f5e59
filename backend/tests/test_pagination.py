"""
Tests pour la pagination : tri, nombre de pages, headers Link.
"""
from starlette.datastructures import URL

from healthpoints.api.pagination import Page, generate_pagination_headers, parse_sort


class TestParseSort:
    def test_default_ascending(self):
        assert parse_sort(["date"]) == [("date", False)]

    def test_direction_applies_to_all_properties(self):
        assert parse_sort(["date,id,desc"]) == [("date", True), ("id", True)]

    def test_repeated_parameters(self):
        assert parse_sort(["date,desc", "id,asc"]) == [("date", True), ("id", False)]

    def test_empty(self):
        assert parse_sort(None) == []
        assert parse_sort([""]) == []


class TestPage:
    def test_total_pages(self):
        assert Page(content=[], number=0, size=20, total_elements=0).total_pages == 0
        assert Page(content=[], number=0, size=20, total_elements=20).total_pages == 1
        assert Page(content=[], number=0, size=20, total_elements=21).total_pages == 2


class TestPaginationHeaders:
    URL = URL("http://testserver/api/points?page=1&size=10&sort=date,desc")

    def test_middle_page(self):
        headers = generate_pagination_headers(self.URL, Page(content=[], number=1, size=10, total_elements=35))

        assert headers["X-Total-Count"] == "35"
        links = headers["Link"].split(",<")
        assert len(links) == 4
        assert 'page=2' in links[0] and links[0].endswith('rel="next"')
        assert 'page=0' in links[1] and links[1].endswith('rel="prev"')
        assert 'page=3' in links[2] and links[2].endswith('rel="last"')
        assert 'page=0' in links[3] and links[3].endswith('rel="first"')

    def test_commas_are_escaped(self):
        headers = generate_pagination_headers(self.URL, Page(content=[], number=0, size=10, total_elements=5))
        assert "date%2Cdesc" in headers["Link"]

    def test_empty_result(self):
        headers = generate_pagination_headers(self.URL, Page(content=[], number=0, size=10, total_elements=0))

        assert headers["X-Total-Count"] == "0"
        assert 'rel="next"' not in headers["Link"]
        assert 'rel="prev"' not in headers["Link"]
        assert headers["Link"].count("page=0") == 2
