from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, MutableMapping, Optional, Set

import streamlit as st

from finance_console.models.base import PaginatedResult


class ExpansionState:
    """
    Ids of the hierarchy rows currently expanded.

    Only explicit user actions change it; re-fetching the list keeps it
    as is, so ids that disappear from the data are simply never matched.
    """

    def __init__(self, expanded: Optional[Iterable[int]] = None):
        self._expanded: Set[int] = set(expanded or ())

    def toggle(self, node_id: int) -> bool:
        """Flip one id; returns whether it is now expanded."""
        self._expanded ^= {node_id}
        return node_id in self._expanded

    def is_expanded(self, node_id: int) -> bool:
        return node_id in self._expanded

    def expand_all(self, node_ids: Iterable[int]) -> None:
        self._expanded.update(node_ids)

    def collapse_all(self) -> None:
        self._expanded.clear()

    def snapshot(self) -> FrozenSet[int]:
        """Immutable copy to hand to the renderer."""
        return frozenset(self._expanded)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)


class RequestSequencer:
    """
    Hands out increasing tokens for one view's fetches.

    A response may be applied only while its token is still the latest one
    issued, so an older response finishing late never replaces newer data.
    """

    def __init__(self):
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest


@dataclass
class ListViewState:
    """Paging, search and filter state of one list page."""
    page: int = 1
    search: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)
    result: Optional[PaginatedResult] = None
    error: Optional[str] = None
    sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    def set_search(self, search: str) -> None:
        search = (search or "").strip()
        if search != self.search:
            self.search = search
            self.page = 1

    def set_filter(self, name: str, value: Any) -> None:
        if self.filters.get(name) != value:
            self.filters[name] = value
            self.page = 1

    def active_filters(self) -> Dict[str, Any]:
        return {name: value for name, value in self.filters.items() if value is not None}

    def go_to(self, page: int) -> None:
        self.page = max(1, page)

    def begin_fetch(self) -> int:
        return self.sequencer.issue()

    def complete_fetch(self, token: int, result: PaginatedResult) -> bool:
        """Store ``result`` if ``token`` is still current; returns whether it was applied."""
        if not self.sequencer.is_current(token):
            return False
        self.result = result
        self.error = None
        return True

    def fail_fetch(self, token: int, message: str) -> bool:
        """Record a failed fetch; previously loaded rows stay visible."""
        if not self.sequencer.is_current(token):
            return False
        self.error = message
        return True


def ensure_state_default(key: str, value, state: Optional[MutableMapping[str, Any]] = None):
    """
    Ensure a session_state key exists without reassigning on reruns.
    Uses setdefault to avoid Streamlit warnings about conflicting defaults.
    """
    state = st.session_state if state is None else state
    if key not in state:
        state.setdefault(key, value)
    return state[key]


def get_expansion_state(key_prefix: str, state: Optional[MutableMapping[str, Any]] = None) -> ExpansionState:
    """Expansion state kept under ``{key_prefix}_expanded``."""
    return ensure_state_default(f"{key_prefix}_expanded", ExpansionState(), state)


def get_list_view_state(key_prefix: str, state: Optional[MutableMapping[str, Any]] = None) -> ListViewState:
    """List state kept under ``{key_prefix}_list``."""
    return ensure_state_default(f"{key_prefix}_list", ListViewState(), state)
