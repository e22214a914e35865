import dataclasses

import pytest

from pico_sqlpage import DEFAULT_PAGE_SIZE, Page, PageRequest
from pico_sqlpage.paging import (
    current_page_from_start,
    end_of_page,
    page_count,
    start_of_next_page,
    start_of_page,
    start_of_previous_page,
)


@pytest.mark.parametrize("page_no", [0, -1, -50])
def test_start_of_page_clamps_non_positive_pages(page_no):
    assert start_of_page(page_no, 20) == 1


def test_start_of_page():
    assert start_of_page(1, 20) == 1
    assert start_of_page(2, 20) == 21
    assert start_of_page(3, 20) == 41
    assert start_of_page(99, 20) == 1961


def test_page_count():
    assert page_count(41, 20) == 3
    assert page_count(40, 20) == 2
    assert page_count(1, 20) == 1
    assert page_count(0, 20) == 0


def test_current_page_from_start():
    assert current_page_from_start(1, 20) == 1
    assert current_page_from_start(20, 20) == 1
    assert current_page_from_start(21, 20) == 2
    assert current_page_from_start(41, 20) == 3


@pytest.mark.parametrize("size", [0, -5])
def test_non_positive_page_size_is_rejected(size):
    with pytest.raises(ValueError, match="Invalid page size"):
        page_count(10, size)
    with pytest.raises(ValueError, match="Invalid page size"):
        current_page_from_start(1, size)
    with pytest.raises(ValueError):
        PageRequest(page=1, size=size)
    with pytest.raises(ValueError):
        Page(rows=[], start=1, total_count=0, page_size=size)


def test_end_and_neighbours():
    assert end_of_page(41, 5) == 45
    assert end_of_page(0, 0) == 0
    assert start_of_previous_page(41, 20) == 21
    assert start_of_previous_page(1, 20) == 1
    assert start_of_next_page(21, 20) == 41


def test_empty_page_defaults():
    page = Page()
    assert page.rows == ()
    assert page.start == 0
    assert page.available_count == 0
    assert page.total_count == 0
    assert page.page_size == DEFAULT_PAGE_SIZE
    assert page.page_count == 1
    assert page.current_page == 1
    assert page.end == 0
    assert not page.has_next_page
    assert not page.has_previous_page


def test_page_metadata():
    page = Page(rows=["a"] * 20, start=21, total_count=45, page_size=20)
    assert page.available_count == 20
    assert page.current_page == 2
    assert page.page_count == 3
    assert page.end == 40
    assert page.start_of_previous_page == 1
    assert page.start_of_next_page == 41
    assert page.has_next_page
    assert page.has_previous_page


def test_last_partial_page():
    page = Page(rows=list(range(5)), start=41, total_count=45, page_size=20)
    assert page.available_count == 5
    assert page.current_page == 3
    assert page.page_count == 3
    assert page.end == 45
    assert not page.has_next_page


def test_page_is_frozen_and_copies_rows():
    rows = ["x", "y"]
    page = Page(rows=rows, start=1, total_count=2, page_size=20)
    rows.append("z")
    assert page.rows == ("x", "y")
    with pytest.raises(dataclasses.FrozenInstanceError):
        page.start = 5


def test_more_rows_than_remaining_only_warns(caplog):
    with caplog.at_level("WARNING", logger="pico_sqlpage.paging"):
        page = Page(rows=[1, 2, 3], start=1, total_count=2, page_size=20)
    assert page.available_count == 3
    assert "only 2 of 2 remain" in caplog.text


def test_more_rows_than_page_size_only_warns(caplog):
    with caplog.at_level("WARNING", logger="pico_sqlpage.paging"):
        page = Page(rows=list(range(7)), start=1, total_count=100, page_size=5)
    assert page.available_count == 7
    assert "7 rows returned for page_size=5" in caplog.text
    assert "remain" not in caplog.text


def test_current_page_never_below_one():
    page = Page(rows=(), start=0, total_count=5, page_size=20)
    assert page.current_page == 1
    assert not page.has_previous_page
    assert Page(rows=(), start=-40, total_count=5, page_size=20).current_page == 1


def test_page_request():
    req = PageRequest()
    assert req.page == 1
    assert req.size == DEFAULT_PAGE_SIZE
    assert req.start == 1
    assert not req.has_offset
    req = PageRequest(page=3, size=20)
    assert req.start == 41
    assert req.has_offset
