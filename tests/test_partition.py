import random
from collections import Counter

import pytest

from teambalance.allocator import InvalidConfiguration, partition
from teambalance.models import Participant


def _roster(size: int) -> list[Participant]:
    positions = ["ST", "CAM", "CB", "LM", "RM", "GK"]
    return [
        Participant(name=f"Player {i}", skill=(i % 5) + 1, position=positions[i % len(positions)])
        for i in range(size)
    ]


@pytest.mark.parametrize("size, team_count", [(1, 1), (7, 2), (10, 3), (12, 4), (5, 5), (13, 6)])
def test_partition_sizes_differ_by_at_most_one(size, team_count):
    teams = partition(_roster(size), team_count, rng=random.Random(size))

    sizes = [len(team) for team in teams]
    assert len(teams) == team_count
    assert max(sizes) - min(sizes) <= 1
    # Larger teams come first.
    assert sizes == sorted(sizes, reverse=True)


def test_partition_keeps_every_participant_once():
    roster = _roster(11)
    teams = partition(roster, 3, rng=random.Random(4))

    placed = [member.name for team in teams for member in team]
    assert Counter(placed) == Counter(member.name for member in roster)


def test_partition_with_more_teams_than_players():
    teams = partition(_roster(2), 4, rng=random.Random(0))
    assert [len(team) for team in teams] == [1, 1, 0, 0]


def test_partition_is_deterministic_for_a_seed():
    roster = _roster(9)
    first = partition(roster, 3, rng=random.Random(42))
    second = partition(roster, 3, rng=random.Random(42))
    assert first == second


def test_partition_does_not_mutate_roster():
    roster = _roster(6)
    snapshot = list(roster)
    partition(roster, 2, rng=random.Random(1))
    assert roster == snapshot


def test_partition_shuffle_is_unbiased_for_first_slot():
    roster = _roster(3)
    rng = random.Random(2024)
    firsts = Counter(partition(roster, 1, rng=rng)[0][0].name for _ in range(3000))
    assert set(firsts) == {member.name for member in roster}
    for count in firsts.values():
        assert 850 < count < 1150


def test_partition_rejects_empty_roster():
    with pytest.raises(InvalidConfiguration):
        partition([], 2)


@pytest.mark.parametrize("team_count", [0, -3])
def test_partition_rejects_non_positive_team_count(team_count):
    with pytest.raises(InvalidConfiguration):
        partition(_roster(4), team_count)
