"""Tests for the shared balancing score helpers."""

import pytest

from domain.models.balance import TeamSizeTemplate
from domain.models.player import Player
from domain.services.balance_scoring import (
    get_weight,
    league_average_goal_threat,
    metric_range,
    positional_balance_score,
    resolve_performance_metrics,
    scale_positional_counts,
    suggested_positions,
    suitability_score,
    team_totals,
    unit_averages,
)
from tests.conftest import make_player, make_rated_player


class TestPerformanceMetrics:
    """Tests for power rating / goal threat resolution."""

    def test_league_average_ignores_guests_and_unqualified(self):
        players = [
            make_rated_player(1, power_rating=6.0, goal_threat=0.4),
            make_rated_player(2, power_rating=5.0, goal_threat=0.8),
            make_rated_player(3, power_rating=9.0, goal_threat=3.0, is_guest=True),
            make_player(4, goal_threat=5.0),
        ]
        assert league_average_goal_threat(players, fallback=0.5) == pytest.approx(0.6)

    def test_league_average_fallback_when_nobody_qualifies(self):
        players = [make_player(1), make_player(2)]
        assert league_average_goal_threat(players, fallback=0.5) == 0.5

    def test_unqualified_player_gets_defaults(self):
        """Unqualified players never carry None/0 into scoring."""
        players = [
            make_rated_player(1, power_rating=6.0, goal_threat=0.4),
            make_rated_player(2, power_rating=5.0, goal_threat=0.8),
            make_player(3),
        ]
        metrics = resolve_performance_metrics(players, default_power_rating=5.35, fallback_goal_threat=0.5)

        assert metrics[1] == (6.0, 0.4)
        assert metrics[2] == (5.0, 0.8)
        assert metrics[3][0] == 5.35
        assert metrics[3][1] == pytest.approx(0.6)

    def test_qualified_flag_without_figures_is_treated_as_unqualified(self):
        players = [Player(player_id=1, is_qualified=True, power_rating=7.0, goal_threat=None)]
        metrics = resolve_performance_metrics(players, default_power_rating=5.35, fallback_goal_threat=0.5)
        assert metrics[1] == (5.35, 0.5)

    def test_team_totals(self):
        metrics = {1: (5.0, 0.5), 2: (6.0, 0.25), 3: (7.0, 1.0)}
        assert team_totals([1, 3], metrics) == (12.0, 1.5)
        assert team_totals([], metrics) == (0.0, 0.0)


class TestMetricRange:
    def test_spread(self):
        assert metric_range([1.0, 4.0, 2.5]) == 3.0

    def test_zero_spread_is_one(self):
        assert metric_range([2.0, 2.0, 2.0]) == 1.0

    def test_empty_is_one(self):
        assert metric_range([]) == 1.0


class TestPositionalScore:
    """Tests for the weighted positional balance score."""

    def test_identical_units_score_zero(self):
        units_a = {"defense": [make_player(1)], "midfield": [make_player(2)], "attack": [make_player(3)]}
        units_b = {"defense": [make_player(4)], "midfield": [make_player(5)], "attack": [make_player(6)]}
        assert positional_balance_score(units_a, units_b) == 0.0

    def test_difference_uses_default_weight(self):
        units_a = {"defense": [make_player(1, defending=5.0)]}
        units_b = {"defense": [make_player(2, defending=3.0)]}
        assert positional_balance_score(units_a, units_b) == pytest.approx(2.0)

    def test_configured_weight_applies(self):
        units_a = {"defense": [make_player(1, defending=5.0)]}
        units_b = {"defense": [make_player(2, defending=3.0)]}
        weights = {("defense", "defending"): 0.5}
        assert positional_balance_score(units_a, units_b, weights) == pytest.approx(1.0)

    def test_explicit_zero_weight_is_honored(self):
        units_a = {"defense": [make_player(1, defending=5.0)]}
        units_b = {"defense": [make_player(2, defending=3.0)]}
        weights = {("defense", "defending"): 0.0}
        assert positional_balance_score(units_a, units_b, weights) == 0.0

    def test_empty_unit_on_one_side_contributes_nothing(self):
        units_a = {"midfield": [make_player(1, control=5.0)]}
        units_b = {"midfield": []}
        assert positional_balance_score(units_a, units_b) == 0.0

    def test_unit_averages(self):
        averages = unit_averages([make_player(1, teamwork=2.0), make_player(2, teamwork=4.0)])
        assert averages["teamwork"] == 3.0
        assert unit_averages([]) == {}

    def test_missing_attribute_counts_as_zero(self):
        averages = unit_averages([Player(player_id=1)])
        assert averages["goalscoring"] == 0.0

    def test_get_weight_default_and_override(self):
        weights = {("attack", "goalscoring"): 2.0}
        assert get_weight(weights, "attack", "goalscoring") == 2.0
        assert get_weight(weights, "attack", "control") == 1.0
        assert get_weight(None, "defense", "defending", default=0.7) == 0.7


class TestSuitability:
    def test_weighted_average_of_group_attributes(self):
        player = make_player(1, goalscoring=5.0, control=2.0)
        weights = {("attack", "goalscoring"): 2.0, ("attack", "control"): 1.0}
        assert suitability_score(player, "attack", weights) == pytest.approx(4.0)

    def test_unconfigured_group_averages_everything(self):
        player = make_player(1, goalscoring=6.0)
        # (6 + 3*5) / 6
        assert suitability_score(player, "midfield") == pytest.approx(3.5)


class TestPositionalCounts:
    """Tests for template scaling and suggested layouts."""

    def test_same_size_keeps_template(self):
        counts = scale_positional_counts(TeamSizeTemplate(5, 1, 3, 1), 5)
        assert (counts.defenders, counts.midfielders, counts.attackers) == (1, 3, 1)

    def test_scaling_rounds_half_up(self):
        counts = scale_positional_counts(TeamSizeTemplate(4, 1, 2, 1), 6)
        assert (counts.defenders, counts.midfielders, counts.attackers) == (2, 2, 2)

    def test_scaling_down(self):
        counts = scale_positional_counts(TeamSizeTemplate(8, 3, 3, 2), 7)
        assert (counts.defenders, counts.midfielders, counts.attackers) == (3, 2, 2)
        assert counts.total == 7

    def test_overflow_trims_attackers_first(self):
        counts = scale_positional_counts(TeamSizeTemplate(2, 1, 0, 1), 3)
        assert (counts.defenders, counts.midfielders, counts.attackers) == (2, 0, 1)

    def test_invalid_template_size(self):
        with pytest.raises(ValueError):
            scale_positional_counts(TeamSizeTemplate(0, 0, 0, 0), 5)

    @pytest.mark.parametrize(
        "size,expected",
        [
            (5, (1, 3, 1)),
            (6, (2, 3, 1)),
            (7, (2, 3, 2)),
            (8, (3, 3, 2)),
            (9, (3, 4, 2)),
            (11, (4, 4, 3)),
            (10, (3, 5, 2)),
            (4, (1, 3, 0)),
        ],
    )
    def test_suggested_positions(self, size, expected):
        template = suggested_positions(size)
        assert (template.defenders, template.midfielders, template.attackers) == expected
        assert template.team_size == size

    def test_suggested_positions_rejects_non_positive(self):
        with pytest.raises(ValueError):
            suggested_positions(0)
