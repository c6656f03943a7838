"""BattleSnapshot lookups, target map and neighbor counting."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from qtarget.errors import ContractViolation
from qtarget.state import BattleSnapshot, Side, Unit


class TestLookup:
    def test_unit_by_id(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 7, 3, 4)])
        assert snap.unit_by_id(Side.FRIENDLY, 1) == Unit(1, 10, (0, 0))
        assert snap.unit_by_id(Side.ENEMY, 9).hp == 7
        assert snap.unit_by_id(Side.ENEMY, 1) is None
        assert snap.unit_by_id(Side.FRIENDLY, 42) is None

    def test_roster_order_preserved(self, make_snapshot):
        snap = make_snapshot([(5, 1, 0, 0), (2, 1, 0, 0), (7, 1, 0, 0)], [])
        assert [u.unit_id for u in snap.friendly] == [5, 2, 7]

    def test_side_of_unknown_id_is_contract_violation(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0)])
        with pytest.raises(ContractViolation):
            snap.side_of(3)


class TestTargets:
    def test_target_absent_until_set(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0), (2, 10, 0, 0)], [(9, 10, 0, 0)])
        assert snap.target_of(1) is None
        snap.set_target(1, 9)
        assert snap.target_of(1) == 9
        assert snap.target_of(2) is None

    def test_set_target_overwrites(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0), (10, 10, 0, 0)])
        snap.set_target(1, 9)
        snap.set_target(1, 10)
        assert snap.targets == {1: 10}

    def test_set_target_rejects_unknown_ids(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0)])
        with pytest.raises(ContractViolation):
            snap.set_target(1, 99)
        with pytest.raises(ContractViolation):
            snap.set_target(9, 9)  # Enemy id used as attacker

    def test_target_of_unknown_id_is_contract_violation(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0)])
        with pytest.raises(ContractViolation):
            snap.target_of(123)

    def test_set_random_target_uses_rng(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0), (10, 10, 0, 0), (11, 10, 0, 0)])
        rng_a = np.random.default_rng(7)
        rng_b = np.random.default_rng(7)
        eid = snap.set_random_target(1, rng_a)
        assert eid in (9, 10, 11)
        assert snap.target_of(1) == eid
        assert [9, 10, 11][int(rng_b.integers(3))] == eid

    def test_set_random_target_empty_enemy_roster(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [])
        with pytest.raises(ContractViolation):
            snap.set_random_target(1, np.random.default_rng(0))

    def test_two_attackers_on_one_enemy(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0), (2, 10, 0, 0)], [(9, 10, 0, 0)])
        snap.set_target(1, 9)
        snap.set_target(2, 9)
        assert snap.count_attackers_of(9) == 2

    def test_copy_targets_skips_dead_units(self, make_snapshot):
        prev = make_snapshot([(1, 10, 0, 0), (2, 10, 0, 0), (3, 10, 0, 0)], [(9, 10, 0, 0), (10, 10, 0, 0)])
        prev.set_target(1, 9)
        prev.set_target(2, 10)
        prev.set_target(3, 9)

        # F3 and E10 died since the previous turn.
        curr = make_snapshot([(1, 8, 0, 0), (2, 8, 0, 0)], [(9, 4, 0, 0)])
        curr.copy_targets_from(prev)
        assert curr.targets == {1: 9}


class TestNeighbors:
    def test_adjacency_includes_diagonals(self, make_snapshot):
        snap = make_snapshot(
            [(1, 10, 5, 5), (2, 10, 6, 6), (3, 10, 5, 6), (4, 10, 7, 5)],
            [(9, 10, 4, 4), (10, 10, 5, 8)],
        )
        # F2 diagonal (d2=2), F3 orthogonal (d2=1), F4 two cells away (d2=4).
        assert snap.count_neighbors(Side.FRIENDLY, 1) == 2
        assert snap.count_neighbors(Side.ENEMY, 1) == 1

    def test_neighbors_of_enemy_unit(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0), (2, 10, 0, 1)], [(9, 10, 1, 1), (10, 10, 1, 2)])
        assert snap.count_neighbors(Side.FRIENDLY, 9) == 2
        assert snap.count_neighbors(Side.ENEMY, 9) == 1

    def test_unknown_unit_is_contract_violation(self, make_snapshot):
        snap = make_snapshot([(1, 10, 0, 0)], [(9, 10, 0, 0)])
        with pytest.raises(ContractViolation):
            snap.count_neighbors(Side.ENEMY, 77)


unit_tuples = st.lists(
    st.tuples(st.integers(0, 20), st.integers(0, 5), st.integers(0, 5)),
    min_size=1,
    max_size=8,
)


def _build(friendly, enemy) -> BattleSnapshot:
    return BattleSnapshot(
        friendly=[Unit(i + 1, hp, (x, y)) for i, (hp, x, y) in enumerate(friendly)],
        enemy=[Unit(100 + i, hp, (x, y)) for i, (hp, x, y) in enumerate(enemy)],
    )


@settings(max_examples=50, deadline=None)
@given(friendly=unit_tuples, enemy=unit_tuples, seed=st.integers(0, 2**31 - 1))
def test_prop_attacker_counts_sum_to_assignments(friendly, enemy, seed):
    snap = _build(friendly, enemy)
    rng = np.random.default_rng(seed)
    assigned = 0
    for unit in snap.friendly:
        if rng.random() < 0.7:
            snap.set_random_target(unit.unit_id, rng)
            assigned += 1

    for e in snap.enemy:
        assert snap.count_attackers_of(e.unit_id) == sum(1 for v in snap.targets.values() if v == e.unit_id)
    assert sum(snap.count_attackers_of(e.unit_id) for e in snap.enemy) == assigned


@settings(max_examples=50, deadline=None)
@given(friendly=unit_tuples, enemy=unit_tuples)
def test_prop_unit_is_never_its_own_neighbor(friendly, enemy):
    snap = _build(friendly, enemy)
    for side in (Side.FRIENDLY, Side.ENEMY):
        for unit in snap.roster(side):
            expected = sum(
                1 for other in snap.roster(side) if other is not unit and unit.squared_distance(other) <= 2
            )
            assert snap.count_neighbors(side, unit.unit_id) == expected
            assert snap.count_neighbors(side, unit.unit_id) <= len(snap.roster(side)) - 1
