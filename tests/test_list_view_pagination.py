"""Pagination: coverage, clamping and the pager metadata."""

from __future__ import annotations

import pytest

from spendtrack.services.list_view import ASCENDING, ListViewConfig, last_page_for
from spendtrack.services.screens import expense_controller, expense_list_config
from tests.conftest import FakeRecordRepository, make_expense, numbered_expenses


def _controller(records, page_size: int = 5):
    controller = expense_controller(FakeRecordRepository(records), page_size=page_size)
    controller.refresh()
    return controller


def test_third_page_of_twelve_holds_the_last_two():
    controller = _controller(numbered_expenses(12))
    controller.set_sort("amount", ASCENDING)

    view = controller.set_page(3)

    assert view.ids == [11, 12]
    assert view.last_page == 3
    assert view.total == 12
    assert not view.has_next
    assert view.has_previous


def test_out_of_range_page_is_clamped():
    controller = _controller(numbered_expenses(12))

    assert controller.set_page(99).page == 3
    assert controller.set_page(0).page == 1
    assert controller.set_page(-4).page == 1


@pytest.mark.parametrize("requested", [-3, 0, 1, 2, 3, 4, 50])
def test_set_page_equals_set_page_of_clamped_value(requested):
    left = _controller(numbered_expenses(12))
    right = _controller(numbered_expenses(12))

    clamped = min(max(1, requested), 3)

    assert left.set_page(requested) == right.set_page(clamped)


@pytest.mark.parametrize("count,size", [(0, 5), (1, 5), (5, 5), (12, 5), (13, 4), (7, 1)])
def test_pages_reconstruct_sorted_list(count, size):
    controller = _controller(numbered_expenses(count), page_size=size)
    controller.set_sort("amount", ASCENDING)
    last = controller.view.last_page

    assert last == max(1, -(-count // size))
    collected = []
    for number in range(1, last + 1):
        collected.extend(controller.set_page(number).records)

    assert [r.id for r in collected] == [r.id for r in controller.filtered_records]
    assert len(collected) == count


def test_empty_collection_renders_page_one():
    controller = _controller([])

    view = controller.set_page(5)

    assert view.page == 1
    assert view.last_page == 1
    assert view.is_empty
    assert not view.has_next
    assert not view.has_previous


def test_has_next_uses_filtered_count():
    controller = _controller([make_expense(n, "Coffee" if n <= 6 else "Tea") for n in range(1, 11)])

    assert controller.view.has_next
    controller.set_filter("description", "coffee")
    controller.set_page(2)

    assert controller.view.ids and len(controller.view.records) == 1
    assert not controller.view.has_next


def test_next_and_previous_page_clamp_at_edges():
    controller = _controller(numbered_expenses(7))

    controller.previous_page()
    assert controller.page.current == 1
    controller.next_page()
    controller.next_page()
    assert controller.page.current == 2


def test_ingest_resets_to_first_page():
    controller = _controller(numbered_expenses(12))
    controller.set_page(3)

    controller.ingest(numbered_expenses(12))

    assert controller.page.current == 1


def test_last_page_floor_is_one():
    assert last_page_for(0, 5) == 1
    assert last_page_for(10, 5) == 2
    assert last_page_for(11, 5) == 3


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        expense_list_config(page_size=0)
    base = expense_list_config()
    with pytest.raises(ValueError):
        ListViewConfig(
            name="broken",
            filter_fields=base.filter_fields,
            sort_fields=base.sort_fields,
            default_sort="nope",
        )
