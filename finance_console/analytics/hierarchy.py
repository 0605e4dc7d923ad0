"""
Cash flow type hierarchy.

Rebuilds the parent/child forest from the flat list the API returns and
flattens it into indented display rows for the current expansion state.
The builder never raises: a record whose parent is not in the loaded data
is shown as a root for this pass. Cycle prevention happens on the write
path (see ``would_create_cycle``).
"""

from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Set

from ..models.cash_flow import CashFlowType


@dataclass(frozen=True)
class HierarchyRow:
    """One rendered table row."""
    node: CashFlowType
    depth: int
    expanded: bool = False

    @property
    def has_children(self) -> bool:
        """Whether the row gets an expand/collapse toggle."""
        return bool(self.node.children)


def build_forest(records: Iterable[CashFlowType]) -> List[CashFlowType]:
    """
    Reconstruct the forest from a flat sequence of cash flow types.

    Args:
        records: A page or a complete fetch of cash flow types. Any
                 ``children`` already present on the records are ignored.

    Returns:
        Root nodes in input order. Every returned node is a copy whose
        ``children`` holds its direct children in input order; the input
        records are left untouched.
    """
    index: Dict[int, CashFlowType] = {}
    ordered: List[CashFlowType] = []

    for record in records:
        if record.id is not None:
            # First occurrence of a duplicated id wins
            if record.id in index:
                continue
            node = record.model_copy(update={"children": []})
            index[record.id] = node
        else:
            node = record.model_copy(update={"children": []})
        ordered.append(node)

    roots: List[CashFlowType] = []
    for node in ordered:
        parent = index.get(node.parent_id) if node.parent_id is not None else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)

    return roots


def flatten(forest: Sequence[CashFlowType], expanded: AbstractSet[int]) -> List[HierarchyRow]:
    """
    Depth-first, pre-order list of visible rows.

    A node's children are emitted (at depth + 1) only when its id is in
    ``expanded`` and it has at least one child. Depth is measured from the
    roots of ``forest``, not from the true top of the dataset.
    """
    rows: List[HierarchyRow] = []
    stack = [(root, 0) for root in reversed(forest)]

    while stack:
        node, depth = stack.pop()
        is_open = bool(node.children) and node.id in expanded
        rows.append(HierarchyRow(node=node, depth=depth, expanded=is_open))
        if is_open:
            stack.extend((child, depth + 1) for child in reversed(node.children))

    return rows


def expandable_ids(forest: Sequence[CashFlowType]) -> Set[int]:
    """Ids of every node in the forest that has children."""
    ids: Set[int] = set()
    stack = list(forest)
    while stack:
        node = stack.pop()
        if node.children and node.id is not None:
            ids.add(node.id)
        stack.extend(node.children)
    return ids


def descendant_ids(records: Iterable[CashFlowType], node_id: int) -> Set[int]:
    """All ids below ``node_id`` according to the records' parent references."""
    children_of: Dict[int, List[int]] = {}
    for record in records:
        if record.id is not None and record.parent_id is not None:
            children_of.setdefault(record.parent_id, []).append(record.id)

    found: Set[int] = set()
    pending = list(children_of.get(node_id, []))
    while pending:
        child_id = pending.pop()
        # Stored data may already contain a loop
        if child_id in found or child_id == node_id:
            continue
        found.add(child_id)
        pending.extend(children_of.get(child_id, []))
    return found


def would_create_cycle(records: Iterable[CashFlowType], node_id: Optional[int], parent_id: Optional[int]) -> bool:
    """True when making ``parent_id`` the parent of ``node_id`` closes a loop."""
    if node_id is None or parent_id is None:
        return False
    if parent_id == node_id:
        return True
    return parent_id in descendant_ids(records, node_id)


def parent_candidates(records: Sequence[CashFlowType], editing_id: Optional[int] = None) -> List[CashFlowType]:
    """Records that may be chosen as parent of ``editing_id`` (all of them for a new record)."""
    if editing_id is None:
        return list(records)
    excluded = descendant_ids(records, editing_id) | {editing_id}
    return [record for record in records if record.id not in excluded]
