"""
Shared list/create/edit/delete page used by every entity screen.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import streamlit as st

from ..api.client import ApiError, AuthenticationError
from ..models.base import PaginatedResult, Pagination
from ..services.error_handler import ErrorHandler, get_error_handler
from ..services.resource_service import ResourceService
from ..services.validators import ValidationError
from ..utils.logger import log_user_action
from .components import UIComponents
from .forms import prepare_payload
from .state.view_state import ListViewState, ensure_state_default, get_list_view_state
from .tables import Column, TableComponents

logger = logging.getLogger(__name__)

NEW_RECORD = "new"

FormRenderer = Callable[[Optional[Any], str], Optional[Dict[str, Any]]]
SaveHook = Callable[[Optional[Any], Dict[str, Any]], Any]


@dataclass
class EntityPage:
    """Everything the generic page needs to know about one entity."""
    key: str
    entity: str
    singular: str
    title: str
    icon: str
    service: ResourceService
    columns: Sequence[Column]
    form: FormRenderer
    subtitle: Optional[str] = None
    page_size: int = 10
    filters: Optional[Callable[[ListViewState], None]] = None
    save: Optional[SaveHook] = None

    @property
    def editing_key(self) -> str:
        return f"{self.key}_editing"

    @property
    def deleting_key(self) -> str:
        return f"{self.key}_deleting"


def report_failure(error: Exception, context: str, handler: Optional[ErrorHandler] = None) -> str:
    """Log ``error`` and show it as a toast; an expired session goes back to login."""
    handler = handler or get_error_handler()
    result = handler.handle_exception(error, context=context)
    if isinstance(error, AuthenticationError):
        UIComponents.queue_notification(result["message"], "error")
        st.rerun()
    UIComponents.show_error(result)
    return result["message"]


def load_page(page: EntityPage, view: ListViewState, step_back: bool = True) -> None:
    """Fetch the current page; only the latest fetch may update the view."""
    token = view.begin_fetch()
    try:
        result = page.service.list(
            page=view.page,
            limit=page.page_size,
            search=view.search or None,
            **view.active_filters(),
        )
    except ApiError as e:
        view.fail_fetch(token, report_failure(e, f"load {page.key}"))
        return

    logger.debug("Fetched %s page %d (token %d)", page.key, view.page, token)
    if view.complete_fetch(token, result) and step_back and not result.items and view.page > 1:
        # The last row of a page was deleted; step back once
        view.go_to(min(result.pagination.total_pages or view.page - 1, view.page - 1))
        load_page(page, view, step_back=False)


def load_all(page: EntityPage, view: ListViewState) -> None:
    """Fetch the complete collection for views that need every record at once."""
    token = view.begin_fetch()
    try:
        records = page.service.list_all(search=view.search or None, **view.active_filters())
    except ApiError as e:
        view.fail_fetch(token, report_failure(e, f"load {page.key}"))
        return

    logger.debug("Fetched all %s (token %d)", page.key, token)
    view.complete_fetch(token, PaginatedResult(items=records, pagination=Pagination.single_page(len(records))))


def save_record(page: EntityPage, record: Optional[Any], payload: Dict[str, Any]) -> bool:
    """Validate and submit one create/update; returns whether it succeeded."""
    action = "update" if record is not None else "create"
    try:
        prepared = prepare_payload(page.entity, payload)
        if page.save is not None:
            page.save(record, prepared)
        elif record is None:
            page.service.create(prepared)
        else:
            page.service.update(record.id, prepared)
    except (ValidationError, ApiError) as e:
        report_failure(e, f"{action} {page.singular}")
        return False

    log_user_action(f"{action}_{page.entity}", {"id": getattr(record, "id", None), "name": prepared.get("name")})
    verb = "updated" if record is not None else "created"
    UIComponents.queue_notification(f"{page.singular.capitalize()} {verb} successfully", "success")
    return True


def delete_record(page: EntityPage, record: Any) -> bool:
    try:
        page.service.delete(record.id)
    except ApiError as e:
        report_failure(e, f"delete {page.singular}")
        return False

    log_user_action(f"delete_{page.entity}", {"id": record.id})
    UIComponents.queue_notification(f"{page.singular.capitalize()} deleted successfully", "success")
    return True


def render_toolbar(page: EntityPage, view: ListViewState) -> None:
    col1, col2 = st.columns([4, 1])
    with col1:
        search = UIComponents.search_box(f"{page.key}_search", placeholder=f"Search {page.title.lower()}...")
        view.set_search(search)
    with col2:
        if st.button(f"➕ Add {page.singular}", key=f"{page.key}_add", type="primary", use_container_width=True):
            st.session_state[page.editing_key] = NEW_RECORD
            st.session_state[page.deleting_key] = None

    if page.filters is not None:
        page.filters(view)


def render_editor(page: EntityPage) -> None:
    """Create/update form for the record currently being edited, if any."""
    editing = st.session_state.get(page.editing_key)
    if editing is None:
        return

    record = None if editing == NEW_RECORD else editing
    with st.container(border=True):
        if record is None:
            st.subheader(f"New {page.singular}")
        else:
            st.subheader(f"Edit {page.singular}")

        form_key = f"{page.key}_form_{record.id if record is not None else NEW_RECORD}"
        payload = page.form(record, form_key)
        if payload is not None and save_record(page, record, payload):
            st.session_state[page.editing_key] = None
            st.rerun()

        if st.button("Cancel", key=f"{page.key}_cancel_edit"):
            st.session_state[page.editing_key] = None
            st.rerun()


def render_delete_confirmation(page: EntityPage) -> None:
    """Second step of a delete: nothing is removed until confirmed."""
    record = st.session_state.get(page.deleting_key)
    if record is None:
        return

    name = getattr(record, "label", None) or getattr(record, "name", None) or f"#{record.id}"
    st.warning(f"Delete {page.singular} **{name}**? This cannot be undone.")
    col1, col2, _ = st.columns([1, 1, 4])
    if col1.button("Delete", key=f"{page.key}_confirm_delete", type="primary"):
        if delete_record(page, record):
            st.session_state[page.deleting_key] = None
            st.rerun()
    if col2.button("Cancel", key=f"{page.key}_cancel_delete"):
        st.session_state[page.deleting_key] = None
        st.rerun()


def handle_table_action(page: EntityPage, action: Optional[Any]) -> None:
    if action is None:
        return
    kind, record = action
    if kind == "edit":
        st.session_state[page.editing_key] = record
        st.session_state[page.deleting_key] = None
        st.rerun()
    elif kind == "delete":
        st.session_state[page.deleting_key] = record
        st.session_state[page.editing_key] = None
        st.rerun()


def render_entity_page(page: EntityPage) -> None:
    """Header, search, filters, editor, table and pagination for one entity."""
    UIComponents.page_header(page.title, page.subtitle, page.icon)
    UIComponents.flush_notifications()

    ensure_state_default(page.editing_key, None)
    ensure_state_default(page.deleting_key, None)
    view = get_list_view_state(page.key)

    render_toolbar(page, view)
    render_editor(page)
    render_delete_confirmation(page)

    with UIComponents.loading_spinner(f"Loading {page.title.lower()}..."):
        load_page(page, view)

    if view.result is None:
        if view.error:
            st.error(view.error)
        return

    action = TableComponents.records_table(view.result.items, page.columns, page.key)
    handle_table_action(page, action)

    requested = UIComponents.pagination_controls(view.result.pagination, page.key)
    if requested is not None:
        view.go_to(requested)
        st.rerun()


def load_lookup(service: ResourceService, context: str) -> List[Any]:
    """Complete collection for select boxes; empty (with a toast) on failure."""
    try:
        return service.list_all()
    except ApiError as e:
        report_failure(e, context)
        return []


def unfiltered_records(service: ResourceService, view: ListViewState, cache: Dict[str, Any], context: str) -> List[Any]:
    """Every record regardless of the view's search, fetched at most once per ``cache``."""
    if "records" not in cache:
        if not view.search and not view.active_filters() and view.result is not None and view.error is None:
            cache["records"] = list(view.result.items)
        else:
            try:
                cache["records"] = service.list_all()
            except ApiError as e:
                report_failure(e, context)
                return []
    return cache["records"]

def filter_select(view: ListViewState, name: str, label: str, options: Sequence[Any], key: str) -> None:
    """Selectbox that narrows the list to one related record."""
    labels = {o.id: getattr(o, "label", None) or o.name for o in options}
    current = view.filters.get(name)
    ids = [None, *labels]
    selected = st.selectbox(
        label,
        options=ids,
        index=ids.index(current) if current in ids else 0,
        format_func=lambda value: "All" if value is None else labels.get(value, str(value)),
        key=key,
    )
    view.set_filter(name, selected)
