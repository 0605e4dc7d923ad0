"""
Reusable UI components for Streamlit application.
"""

from typing import Any, Dict, List, Optional

import streamlit as st

from ..models.base import Pagination

NOTIFICATION_QUEUE_KEY = "pending_notifications"

_ICONS = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}


class UIComponents:
    """Collection of reusable UI components."""

    @staticmethod
    def metric_card(
        title: str,
        value: str,
        delta: Optional[str] = None,
        delta_color: str = "normal",
        help_text: Optional[str] = None
    ) -> None:
        """Display a metric card with optional delta."""
        st.metric(
            label=title,
            value=value,
            delta=delta,
            delta_color=delta_color,
            help=help_text
        )

    @staticmethod
    def page_header(title: str, subtitle: Optional[str] = None, icon: Optional[str] = None) -> None:
        """Render a consistent page header with icon, title, subtitle, and divider."""
        header_text = f"{icon} {title}" if icon else title
        st.title(header_text)

        if subtitle:
            st.markdown(f"*{subtitle}*")

        st.divider()

    @staticmethod
    def empty_state(title: str, description: str) -> None:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            st.markdown(f"### {title}")
            st.markdown(description)

    @staticmethod
    def notify(message: str, kind: str = "info") -> None:
        """Transient notification in the corner of the page."""
        st.toast(message, icon=_ICONS.get(kind, _ICONS["info"]))

    @staticmethod
    def queue_notification(message: str, kind: str = "success") -> None:
        """Keep a notification for the next rerun (``st.rerun`` drops toasts)."""
        st.session_state.setdefault(NOTIFICATION_QUEUE_KEY, []).append((message, kind))

    @staticmethod
    def flush_notifications() -> None:
        pending: List = st.session_state.pop(NOTIFICATION_QUEUE_KEY, [])
        for message, kind in pending:
            UIComponents.notify(message, kind)

    @staticmethod
    def show_error(error: Dict[str, Any]) -> None:
        """Show an ``ErrorHandler`` result as a toast."""
        UIComponents.notify(error["message"], "error")

    @staticmethod
    def loading_spinner(text: str = "Loading...") -> Any:
        """Display loading spinner context manager."""
        return st.spinner(text)

    @staticmethod
    def search_box(key: str, placeholder: str = "Search...") -> str:
        return st.text_input("Search", key=key, placeholder=placeholder, label_visibility="collapsed")

    @staticmethod
    def pagination_controls(pagination: Pagination, key: str) -> Optional[int]:
        """Previous/next buttons; returns the requested page, if any."""
        col1, col2, col3 = st.columns([1, 3, 1])

        requested = None
        with col1:
            if st.button("← Previous", key=f"{key}_prev", disabled=not pagination.has_previous):
                requested = pagination.current_page - 1
        with col2:
            st.caption(
                f"Page {pagination.current_page} of {max(pagination.total_pages, 1)} "
                f"· {pagination.total_items} records"
            )
        with col3:
            if st.button("Next →", key=f"{key}_next", disabled=not pagination.has_next):
                requested = pagination.current_page + 1

        return requested
