"""
Row-by-row entity tables with edit/delete actions.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

import streamlit as st

from ..analytics.hierarchy import HierarchyRow

# Em spaces are not collapsed by markdown
INDENT = "\u2003\u2003"

TableAction = Tuple[str, Any]


@dataclass(frozen=True)
class Column:
    """One table column: header label, cell renderer and relative width."""
    label: str
    render: Callable[[Any], Any]
    width: float = 2.0


def indent_label(text: str, depth: int) -> str:
    """Prefix ``text`` with one indent unit per hierarchy level."""
    return f"{INDENT * depth}{text}"


def toggle_icon(row: HierarchyRow) -> str:
    if not row.has_children:
        return ""
    return "▾" if row.expanded else "▸"


class TableComponents:
    """Entity tables rendered with ``st.columns``."""

    @staticmethod
    def _header(columns: Sequence[Column], extra: Sequence[float]) -> List[Any]:
        cells = st.columns([*extra, *(c.width for c in columns), 1.2])
        offset = len(extra)
        for cell, column in zip(cells[offset:], columns):
            cell.markdown(f"**{column.label}**")
        cells[-1].markdown("**Actions**")
        return cells

    @staticmethod
    def _actions(cell: Any, record: Any, key: str) -> Optional[TableAction]:
        edit_col, delete_col = cell.columns(2)
        if edit_col.button("✏️", key=f"{key}_edit_{record.id}", help="Edit"):
            return ("edit", record)
        if delete_col.button("🗑️", key=f"{key}_delete_{record.id}", help="Delete"):
            return ("delete", record)
        return None

    @staticmethod
    def records_table(records: Sequence[Any], columns: Sequence[Column], key: str) -> Optional[TableAction]:
        """
        Render records one row at a time.

        Returns:
            ``("edit", record)`` or ``("delete", record)`` for the clicked button
        """
        if not records:
            st.info("No data available")
            return None

        TableComponents._header(columns, ())
        action = None
        for record in records:
            cells = st.columns([*(c.width for c in columns), 1.2])
            for cell, column in zip(cells, columns):
                cell.write(column.render(record))
            clicked = TableComponents._actions(cells[-1], record, key)
            action = action or clicked
        return action

    @staticmethod
    def hierarchy_table(rows: Sequence[HierarchyRow], columns: Sequence[Column], key: str) -> Optional[TableAction]:
        """
        Render flattened hierarchy rows; the first column is indented by depth.

        Returns:
            ``("toggle", node)`` when an expand/collapse control was clicked,
            otherwise the same edit/delete actions as ``records_table``
        """
        if not rows:
            st.info("No data available")
            return None

        TableComponents._header(columns, (0.4,))
        action = None
        for row in rows:
            node = row.node
            cells = st.columns([0.4, *(c.width for c in columns), 1.2])

            icon = toggle_icon(row)
            if icon and cells[0].button(icon, key=f"{key}_toggle_{node.id}"):
                action = action or ("toggle", node)

            for index, (cell, column) in enumerate(zip(cells[1:], columns)):
                value = column.render(node)
                cell.write(indent_label(str(value), row.depth) if index == 0 else value)

            clicked = TableComponents._actions(cells[-1], node, key)
            action = action or clicked
        return action
