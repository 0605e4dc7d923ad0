"""
Unit tests for the cash flow type hierarchy
"""

import pytest

from finance_console.analytics.hierarchy import (
    build_forest,
    descendant_ids,
    expandable_ids,
    flatten,
    parent_candidates,
    would_create_cycle,
)
from finance_console.models import CashFlowType


def ids(nodes):
    return [node.id for node in nodes]


def all_nodes(forest):
    stack = list(forest)
    while stack:
        node = stack.pop()
        yield node
        stack.extend(node.children)


class TestBuildForest:
    """Reconstruction of the parent/child forest"""

    def test_roots_and_children_in_input_order(self, cash_flow_types):
        forest = build_forest(cash_flow_types)

        assert ids(forest) == [1, 5]
        assert ids(forest[0].children) == [2, 3]
        assert ids(forest[0].children[0].children) == [4]
        assert forest[1].children == []

    def test_every_input_node_appears_exactly_once(self, cash_flow_types):
        forest = build_forest(cash_flow_types)

        seen = [node.id for node in all_nodes(forest)]
        assert sorted(seen) == [1, 2, 3, 4, 5]

    def test_children_reference_their_parent(self, cash_flow_types):
        forest = build_forest(cash_flow_types)

        for node in all_nodes(forest):
            for child in node.children:
                assert child.parent_id == node.id

    def test_orphan_becomes_root(self):
        records = [
            CashFlowType(id=1, name="Root"),
            CashFlowType(id=7, name="Orphan", parentId=99),
        ]

        forest = build_forest(records)

        assert ids(forest) == [1, 7]

    def test_child_listed_before_parent(self):
        records = [
            CashFlowType(id=2, name="Child", parentId=1),
            CashFlowType(id=1, name="Parent"),
        ]

        forest = build_forest(records)

        assert ids(forest) == [1]
        assert ids(forest[0].children) == [2]

    def test_self_parented_node_is_root(self):
        forest = build_forest([CashFlowType(id=3, name="Loop", parentId=3)])

        assert ids(forest) == [3]
        assert forest[0].children == []

    def test_duplicate_id_keeps_first_occurrence(self):
        records = [
            CashFlowType(id=1, name="First"),
            CashFlowType(id=1, name="Second"),
        ]

        forest = build_forest(records)

        assert len(forest) == 1
        assert forest[0].name == "First"

    def test_input_records_are_not_mutated(self, cash_flow_types):
        build_forest(cash_flow_types)
        build_forest(cash_flow_types)

        assert all(record.children == [] for record in cash_flow_types)

    def test_stale_children_on_input_are_ignored(self):
        stale = CashFlowType(id=9, name="Stale")
        records = [CashFlowType(id=1, name="Root", children=[stale])]

        forest = build_forest(records)

        assert forest[0].children == []

    def test_empty_input(self):
        assert build_forest([]) == []


class TestFlatten:
    """Depth-first rendering of the forest"""

    def test_collapsed_forest_shows_roots_only(self, cash_flow_types):
        rows = flatten(build_forest(cash_flow_types), frozenset())

        assert [(row.node.id, row.depth) for row in rows] == [(1, 0), (5, 0)]

    def test_expanded_node_shows_direct_children(self, cash_flow_types):
        rows = flatten(build_forest(cash_flow_types), frozenset({1}))

        assert [(row.node.id, row.depth) for row in rows] == [(1, 0), (2, 1), (3, 1), (5, 0)]

    def test_chain_reveals_one_level_per_expanded_node(self):
        records = [
            CashFlowType(id=1, name="A"),
            CashFlowType(id=2, name="B", parentId=1),
            CashFlowType(id=3, name="C", parentId=2),
        ]
        forest = build_forest(records)

        rows = flatten(forest, frozenset({1}))
        assert [(row.node.name, row.depth) for row in rows] == [("A", 0), ("B", 1)]

        rows = flatten(forest, frozenset({1, 2}))
        assert [(row.node.name, row.depth) for row in rows] == [("A", 0), ("B", 1), ("C", 2)]

    def test_fully_expanded_is_pre_order(self, cash_flow_types):
        rows = flatten(build_forest(cash_flow_types), frozenset({1, 2}))

        assert [(row.node.id, row.depth) for row in rows] == [
            (1, 0), (2, 1), (4, 2), (3, 1), (5, 0),
        ]

    def test_expanded_child_under_collapsed_parent_stays_hidden(self, cash_flow_types):
        rows = flatten(build_forest(cash_flow_types), frozenset({2}))

        assert [row.node.id for row in rows] == [1, 5]

    def test_child_depth_is_parent_depth_plus_one(self, cash_flow_types):
        forest = build_forest(cash_flow_types)
        rows = flatten(forest, expandable_ids(forest))

        depth_of = {row.node.id: row.depth for row in rows}
        for row in rows:
            if row.node.parent_id in depth_of:
                assert row.depth == depth_of[row.node.parent_id] + 1

    def test_toggle_affordance_only_for_nodes_with_children(self, cash_flow_types):
        forest = build_forest(cash_flow_types)
        rows = flatten(forest, expandable_ids(forest))

        flags = {row.node.id: row.has_children for row in rows}
        assert flags == {1: True, 2: True, 3: False, 4: False, 5: False}

    def test_expanded_flag(self, cash_flow_types):
        rows = flatten(build_forest(cash_flow_types), frozenset({1, 3}))

        expanded = {row.node.id: row.expanded for row in rows}
        # 3 has no children, so it never renders as open
        assert expanded[1] is True
        assert expanded[3] is False

    def test_orphan_rendered_at_depth_zero(self):
        records = [CashFlowType(id=7, name="Orphan", parentId=99)]

        rows = flatten(build_forest(records), frozenset())

        assert [(row.node.id, row.depth) for row in rows] == [(7, 0)]

    def test_deep_chain_does_not_recurse(self):
        records = [CashFlowType(id=1, name="n1")]
        records += [CashFlowType(id=i, name=f"n{i}", parentId=i - 1) for i in range(2, 3001)]
        forest = build_forest(records)

        rows = flatten(forest, expandable_ids(forest))

        assert len(rows) == 3000
        assert rows[-1].depth == 2999


class TestWritePathHelpers:
    """Cycle prevention and parent candidates"""

    def test_expandable_ids(self, cash_flow_types):
        assert expandable_ids(build_forest(cash_flow_types)) == {1, 2}

    def test_descendant_ids(self, cash_flow_types):
        assert descendant_ids(cash_flow_types, 1) == {2, 3, 4}
        assert descendant_ids(cash_flow_types, 4) == set()

    def test_descendant_ids_tolerates_stored_loop(self):
        records = [
            CashFlowType(id=1, name="A", parentId=2),
            CashFlowType(id=2, name="B", parentId=1),
        ]

        assert descendant_ids(records, 1) == {2}

    @pytest.mark.parametrize("node_id,parent_id,expected", [
        (1, 1, True),
        (1, 4, True),
        (2, 4, True),
        (4, 3, False),
        (5, 1, False),
        (None, 1, False),
        (1, None, False),
    ])
    def test_would_create_cycle(self, cash_flow_types, node_id, parent_id, expected):
        assert would_create_cycle(cash_flow_types, node_id, parent_id) is expected

    def test_parent_candidates_exclude_self_and_descendants(self, cash_flow_types):
        assert ids(parent_candidates(cash_flow_types, 2)) == [1, 3, 5]

    def test_parent_candidates_for_new_record(self, cash_flow_types):
        assert ids(parent_candidates(cash_flow_types)) == [1, 2, 3, 4, 5]
