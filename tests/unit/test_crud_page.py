"""
Unit tests for list loading on the entity pages
"""

from unittest.mock import Mock, patch

import pytest

from finance_console.api.client import ApiError
from finance_console.models import PaginatedResult, Pagination
from finance_console.ui.crud_page import EntityPage, load_all, load_page, unfiltered_records
from finance_console.ui.state.view_state import ListViewState


def page_of(items, current_page=1, total_pages=1):
    return PaginatedResult(
        items=list(items),
        pagination=Pagination(currentPage=current_page, totalPages=total_pages, totalItems=len(items)),
    )


@pytest.fixture
def service():
    return Mock()


@pytest.fixture
def entity_page(service):
    return EntityPage(
        key="budgets",
        entity="budget",
        singular="budget",
        title="Budgets",
        icon="💳",
        service=service,
        columns=[],
        form=Mock(return_value=None),
    )


class TestLoadPage:

    def test_result_is_applied(self, entity_page, service):
        service.list.return_value = page_of(["Marketing"])
        view = ListViewState(search="mark", filters={"budget_type_id": 2, "other": None})

        load_page(entity_page, view)

        assert view.result.items == ["Marketing"]
        service.list.assert_called_once_with(page=1, limit=10, search="mark", budget_type_id=2)

    def test_emptied_last_page_steps_back(self, entity_page, service):
        service.list.side_effect = [page_of([], 3, 2), page_of(["Marketing"], 2, 2)]
        view = ListViewState(page=3)

        load_page(entity_page, view)

        assert view.page == 2
        assert view.result.items == ["Marketing"]

    def test_stale_page_count_steps_back_only_once(self, entity_page, service):
        service.list.return_value = page_of([], 3, 5)
        view = ListViewState(page=3)

        load_page(entity_page, view)

        assert view.page == 2
        assert service.list.call_count == 2
        assert view.result.items == []

    def test_zero_page_count_steps_back_one_page(self, entity_page, service):
        service.list.return_value = page_of([], 4, 0)
        view = ListViewState(page=4)

        load_page(entity_page, view)

        assert view.page == 3
        assert service.list.call_count == 2

    def test_empty_first_page_is_final(self, entity_page, service):
        service.list.return_value = page_of([], 1, 0)
        view = ListViewState()

        load_page(entity_page, view)

        assert view.page == 1
        service.list.assert_called_once()

    def test_response_overtaken_by_newer_fetch_is_dropped(self, entity_page, service):
        view = ListViewState()
        view.complete_fetch(view.begin_fetch(), page_of(["current"]))

        def slow_list(**kwargs):
            # Another fetch for the same view is issued before this one returns
            view.begin_fetch()
            return page_of(["stale"])

        service.list.side_effect = slow_list

        load_page(entity_page, view)

        assert view.result.items == ["current"]

    def test_failure_keeps_rows_and_records_message(self, entity_page, service):
        view = ListViewState()
        view.complete_fetch(view.begin_fetch(), page_of(["Marketing"]))
        service.list.side_effect = ApiError("Server down", 500)

        with patch("finance_console.ui.crud_page.report_failure", return_value="Server down") as report:
            load_page(entity_page, view)

        report.assert_called_once()
        assert view.error == "Server down"
        assert view.result.items == ["Marketing"]


class TestLoadAll:

    def test_complete_collection_as_single_page(self, entity_page, service):
        service.list_all.return_value = ["A", "B", "C"]
        view = ListViewState(search="a")

        load_all(entity_page, view)

        assert view.result.items == ["A", "B", "C"]
        assert view.result.pagination.total_items == 3
        assert not view.result.pagination.has_next
        service.list_all.assert_called_once_with(search="a")

    def test_stale_complete_fetch_is_dropped(self, entity_page, service):
        view = ListViewState()

        def slow_list_all(**kwargs):
            view.begin_fetch()
            return ["stale"]

        service.list_all.side_effect = slow_list_all

        load_all(entity_page, view)

        assert view.result is None


class TestUnfilteredRecords:

    def test_reuses_complete_fetch_without_search(self, service):
        view = ListViewState()
        view.complete_fetch(view.begin_fetch(), page_of(["A", "B"]))

        assert unfiltered_records(service, view, {}, "load types") == ["A", "B"]
        service.list_all.assert_not_called()

    def test_search_fetches_once_per_cache(self, service):
        service.list_all.return_value = ["A", "B", "C"]
        view = ListViewState(search="b")
        view.complete_fetch(view.begin_fetch(), page_of(["B"]))
        cache = {}

        first = unfiltered_records(service, view, cache, "load types")
        second = unfiltered_records(service, view, cache, "load types")

        assert first == second == ["A", "B", "C"]
        service.list_all.assert_called_once_with()

    def test_new_cache_fetches_again(self, service):
        service.list_all.return_value = ["A"]
        view = ListViewState(search="a")

        unfiltered_records(service, view, {}, "load types")
        unfiltered_records(service, view, {}, "load types")

        assert service.list_all.call_count == 2

    def test_failed_view_is_not_reused(self, service):
        service.list_all.return_value = ["A", "B"]
        view = ListViewState()
        view.complete_fetch(view.begin_fetch(), page_of(["A"]))
        view.fail_fetch(view.begin_fetch(), "timeout")

        assert unfiltered_records(service, view, {}, "load types") == ["A", "B"]

    def test_failure_returns_empty_and_is_not_cached(self, service):
        service.list_all.side_effect = [ApiError("Server down", 500), ["A"]]
        view = ListViewState(search="a")
        cache = {}

        with patch("finance_console.ui.crud_page.report_failure") as report:
            assert unfiltered_records(service, view, cache, "load types") == []
        report.assert_called_once()
        assert unfiltered_records(service, view, cache, "load types") == ["A"]
