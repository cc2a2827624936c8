"""Unit tests for the lifecycle TransitionTable."""

import pytest

from itam.domain.exceptions import ValidationError
from itam.domain.model.asset import AssetStatus as S
from itam.domain.model.transition_table import SideEffect, TransitionTable


@pytest.fixture
def table():
    return TransitionTable.default()


class TestDefaultEdges:

    @pytest.mark.parametrize("source,target", [
        (S.EXPECTED, S.RECEIVED),
        (S.RECEIVED, S.STAGED),
        (S.STAGED, S.IN_SERVICE),
        (S.IN_SERVICE, S.REPAIR),
        (S.REPAIR, S.IN_SERVICE),
        (S.REPAIR, S.RETIRED),
        (S.IN_SERVICE, S.RETIRED),
        (S.RETIRED, S.DISPOSED),
    ])
    def test_legal_edges(self, table, source, target):
        assert table.is_legal(source, target)

    def test_exactly_eight_edges(self, table):
        legal = [(a, b) for a in S for b in S if table.is_legal(a, b)]
        assert len(legal) == 8

    @pytest.mark.parametrize("source,target", [
        (S.RETIRED, S.STAGED),
        (S.EXPECTED, S.IN_SERVICE),
        (S.DISPOSED, S.EXPECTED),
        (S.STAGED, S.STAGED),
    ])
    def test_illegal_edges(self, table, source, target):
        assert not table.is_legal(source, target)

    def test_repair_next_states(self, table):
        assert table.next_states(S.REPAIR) == {S.IN_SERVICE, S.RETIRED}

    def test_initial_and_terminal(self, table):
        assert table.initial == S.EXPECTED
        assert table.terminal_states() == {S.DISPOSED}


class TestSideEffects:

    def test_retirement_releases_and_notifies_owner(self, table):
        effects = table.side_effects(S.IN_SERVICE, S.RETIRED)
        assert effects == {SideEffect.RELEASE_OWNER, SideEffect.NOTIFY_OWNER}

    def test_repair_notifies_only(self, table):
        assert table.side_effects(S.IN_SERVICE, S.REPAIR) == {SideEffect.NOTIFY_OWNER}

    def test_plain_edge_has_none(self, table):
        assert table.side_effects(S.EXPECTED, S.RECEIVED) == frozenset()

    def test_illegal_edge_rejected(self, table):
        with pytest.raises(ValidationError, match="not a lifecycle edge"):
            table.side_effects(S.RETIRED, S.STAGED)


class TestCustomTable:

    def test_custom_edges(self):
        table = TransitionTable({(S.EXPECTED, S.IN_SERVICE): set()})
        assert table.is_legal(S.EXPECTED, S.IN_SERVICE)
        assert not table.is_legal(S.EXPECTED, S.RECEIVED)

    def test_self_edge_rejected(self):
        with pytest.raises(ValidationError, match="Self-transition"):
            TransitionTable({(S.STAGED, S.STAGED): set()})
