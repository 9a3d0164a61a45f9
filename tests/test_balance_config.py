"""Tests for balancing configuration storage and validation."""

import pytest

from domain.models.balance import PerformanceWeights, TeamSizeTemplate
from services import error_codes
from tests.conftest import TEST_GUILD_ID, TEST_GUILD_ID_SECONDARY


class TestBalanceConfigRepository:
    def test_performance_weights_unset(self, balance_config_repository):
        assert balance_config_repository.get_performance_weights(TEST_GUILD_ID) is None

    def test_performance_weights_upsert(self, balance_config_repository):
        balance_config_repository.set_performance_weights(TEST_GUILD_ID, 0.7, 0.3)
        balance_config_repository.set_performance_weights(TEST_GUILD_ID, 0.6, 0.4)
        assert balance_config_repository.get_performance_weights(TEST_GUILD_ID) == PerformanceWeights(0.6, 0.4)

    def test_attribute_weights_per_guild(self, balance_config_repository):
        balance_config_repository.set_attribute_weight(TEST_GUILD_ID, "attack", "goalscoring", 2.0)
        balance_config_repository.set_attribute_weight(TEST_GUILD_ID, "attack", "goalscoring", 2.5)
        balance_config_repository.set_attribute_weight(TEST_GUILD_ID, "defense", "defending", 1.5)

        assert balance_config_repository.get_attribute_weights(TEST_GUILD_ID) == {
            ("attack", "goalscoring"): 2.5,
            ("defense", "defending"): 1.5,
        }
        assert balance_config_repository.get_attribute_weights(TEST_GUILD_ID_SECONDARY) == {}

    def test_clear_attribute_weights(self, balance_config_repository):
        balance_config_repository.set_attribute_weight(TEST_GUILD_ID, "attack", "goalscoring", 2.0)
        balance_config_repository.set_attribute_weight(TEST_GUILD_ID, "midfield", "control", 2.0)
        assert balance_config_repository.clear_attribute_weights(TEST_GUILD_ID) == 2
        assert balance_config_repository.get_attribute_weights(TEST_GUILD_ID) == {}

    def test_seeded_global_templates(self, balance_config_repository):
        template = balance_config_repository.get_template(TEST_GUILD_ID, 5)
        assert template == TeamSizeTemplate(5, 1, 3, 1)
        assert balance_config_repository.get_template(TEST_GUILD_ID, 4) is None

    def test_guild_template_overrides_global(self, balance_config_repository):
        balance_config_repository.set_template(TEST_GUILD_ID, TeamSizeTemplate(5, 2, 2, 1))

        assert balance_config_repository.get_template(TEST_GUILD_ID, 5) == TeamSizeTemplate(5, 2, 2, 1)
        assert balance_config_repository.get_template(TEST_GUILD_ID_SECONDARY, 5) == TeamSizeTemplate(5, 1, 3, 1)


class TestBalanceConfigService:
    """Tests for weight validation and template management."""

    def test_default_performance_weights(self, balance_config_service):
        assert balance_config_service.get_performance_weights(TEST_GUILD_ID) == PerformanceWeights(0.5, 0.5)

    def test_set_performance_weights(self, balance_config_service):
        result = balance_config_service.set_performance_weights(TEST_GUILD_ID, 0.8, 0.2)
        assert result.success
        assert balance_config_service.get_performance_weights(TEST_GUILD_ID) == PerformanceWeights(0.8, 0.2)

    @pytest.mark.parametrize("power,goal", [(0.6, 0.6), (1.2, -0.2), (0.3, 0.3)])
    def test_invalid_performance_weights_rejected(self, balance_config_service, power, goal):
        result = balance_config_service.set_performance_weights(TEST_GUILD_ID, power, goal)
        assert not result.success
        assert result.error_code == error_codes.VALIDATION_ERROR
        assert balance_config_service.get_performance_weights(TEST_GUILD_ID) == PerformanceWeights(0.5, 0.5)

    def test_weight_sum_tolerance(self, balance_config_service):
        assert balance_config_service.validate_performance_weights(0.6005, 0.4).success

    def test_set_attribute_weight_validation(self, balance_config_service):
        assert balance_config_service.set_attribute_weight(TEST_GUILD_ID, "goalkeeping", "control", 1.0).error_code == (
            error_codes.VALIDATION_ERROR
        )
        assert balance_config_service.set_attribute_weight(TEST_GUILD_ID, "attack", "dribbling", 1.0).error_code == (
            error_codes.VALIDATION_ERROR
        )
        assert balance_config_service.set_attribute_weight(TEST_GUILD_ID, "attack", "control", -1.0).error_code == (
            error_codes.VALIDATION_ERROR
        )
        assert balance_config_service.get_attribute_weights(TEST_GUILD_ID) == {}

    def test_zero_attribute_weight_allowed(self, balance_config_service):
        assert balance_config_service.set_attribute_weight(TEST_GUILD_ID, "attack", "defending", 0.0).success
        assert balance_config_service.get_attribute_weights(TEST_GUILD_ID) == {("attack", "defending"): 0.0}

    def test_reset_attribute_weights(self, balance_config_service):
        balance_config_service.set_attribute_weight(TEST_GUILD_ID, "attack", "control", 2.0)
        result = balance_config_service.reset_attribute_weights(TEST_GUILD_ID)
        assert result.value == 1
        assert balance_config_service.get_attribute_weights(TEST_GUILD_ID) == {}

    def test_get_template_missing(self, balance_config_service):
        result = balance_config_service.get_template(TEST_GUILD_ID, 4)
        assert not result.success
        assert result.error_code == error_codes.TEMPLATE_NOT_FOUND

    def test_set_template_must_add_up(self, balance_config_service):
        result = balance_config_service.set_template(TEST_GUILD_ID, 6, 2, 2, 1)
        assert result.error_code == error_codes.VALIDATION_ERROR

        result = balance_config_service.set_template(TEST_GUILD_ID, 6, 2, 2, 2)
        assert result.success
        assert balance_config_service.get_template(TEST_GUILD_ID, 6).value == TeamSizeTemplate(6, 2, 2, 2)

    def test_set_template_rejects_negative_counts(self, balance_config_service):
        result = balance_config_service.set_template(TEST_GUILD_ID, 4, -1, 4, 1)
        assert result.error_code == error_codes.VALIDATION_ERROR

    def test_reset_template_uses_suggested_layout(self, balance_config_service):
        balance_config_service.set_template(TEST_GUILD_ID, 10, 1, 8, 1)
        result = balance_config_service.reset_template(TEST_GUILD_ID, 10)

        assert result.value == TeamSizeTemplate(10, 3, 5, 2)
        assert balance_config_service.get_template(TEST_GUILD_ID, 10).value == TeamSizeTemplate(10, 3, 5, 2)
        assert balance_config_service.suggested_positions(10) == TeamSizeTemplate(10, 3, 5, 2)
