"""
Administration of balancing weights and positional templates.
"""

import logging

from config import DEFAULT_GOAL_WEIGHT, DEFAULT_POWER_WEIGHT
from domain.models.balance import POSITION_GROUPS, PerformanceWeights, TeamSizeTemplate
from domain.models.player import ATTRIBUTES
from domain.services.balance_scoring import suggested_positions
from repositories.interfaces import IBalanceConfigRepository
from services import error_codes
from services.result import Result

logger = logging.getLogger("league_bot.services.balance_config")

WEIGHT_SUM_TOLERANCE = 0.001


class BalanceConfigService:
    """Reads and validates per-guild balancing configuration."""

    def __init__(self, config_repo: IBalanceConfigRepository):
        self.config_repo = config_repo

    # --- Performance weights ---

    def get_performance_weights(self, guild_id: int | None) -> PerformanceWeights:
        """Stored weights for the guild, or the configured defaults."""
        stored = self.config_repo.get_performance_weights(guild_id)
        if stored is not None:
            return stored
        return PerformanceWeights(power_weight=DEFAULT_POWER_WEIGHT, goal_weight=DEFAULT_GOAL_WEIGHT)

    @staticmethod
    def validate_performance_weights(power_weight: float, goal_weight: float) -> Result[PerformanceWeights]:
        """Each weight must be in [0, 1] and the pair must sum to 1."""
        for label, value in (("Power", power_weight), ("Goal", goal_weight)):
            if not 0.0 <= value <= 1.0:
                return Result.fail(
                    f"{label} weight must be between 0 and 1, got {value}",
                    code=error_codes.VALIDATION_ERROR,
                )
        if abs(power_weight + goal_weight - 1.0) > WEIGHT_SUM_TOLERANCE:
            return Result.fail(
                f"Weights must sum to 1.0, got {power_weight + goal_weight:.3f}",
                code=error_codes.VALIDATION_ERROR,
            )
        return Result.ok(PerformanceWeights(power_weight=power_weight, goal_weight=goal_weight))

    def set_performance_weights(
        self, guild_id: int | None, power_weight: float, goal_weight: float
    ) -> Result[PerformanceWeights]:
        validated = self.validate_performance_weights(power_weight, goal_weight)
        if not validated:
            logger.warning(f"Rejected performance weights for guild {guild_id}: {validated.error}")
            return validated
        self.config_repo.set_performance_weights(guild_id, power_weight, goal_weight)
        logger.info(f"Guild {guild_id} performance weights set to {power_weight}/{goal_weight}")
        return validated

    # --- Attribute weights ---

    def get_attribute_weights(self, guild_id: int | None) -> dict[tuple[str, str], float]:
        return self.config_repo.get_attribute_weights(guild_id)

    def set_attribute_weight(
        self, guild_id: int | None, position_group: str, attribute: str, weight: float
    ) -> Result[float]:
        if position_group not in POSITION_GROUPS:
            return Result.fail(
                f"Unknown position group '{position_group}'. Use one of: {', '.join(POSITION_GROUPS)}",
                code=error_codes.VALIDATION_ERROR,
            )
        if attribute not in ATTRIBUTES:
            return Result.fail(
                f"Unknown attribute '{attribute}'. Use one of: {', '.join(ATTRIBUTES)}",
                code=error_codes.VALIDATION_ERROR,
            )
        if weight < 0:
            return Result.fail("Weight cannot be negative", code=error_codes.VALIDATION_ERROR)

        self.config_repo.set_attribute_weight(guild_id, position_group, attribute, weight)
        return Result.ok(weight)

    def reset_attribute_weights(self, guild_id: int | None) -> Result[int]:
        """Drop all custom attribute weights so every pair weighs the default."""
        removed = self.config_repo.clear_attribute_weights(guild_id)
        logger.info(f"Cleared {removed} attribute weights for guild {guild_id}")
        return Result.ok(removed)

    # --- Templates ---

    @staticmethod
    def suggested_positions(team_size: int) -> TeamSizeTemplate:
        return suggested_positions(team_size)

    def get_template(self, guild_id: int | None, team_size: int) -> Result[TeamSizeTemplate]:
        template = self.config_repo.get_template(guild_id, team_size)
        if template is None:
            return Result.fail(
                f"No positional template configured for team size {team_size}",
                code=error_codes.TEMPLATE_NOT_FOUND,
            )
        return Result.ok(template)

    def set_template(
        self,
        guild_id: int | None,
        team_size: int,
        defenders: int,
        midfielders: int,
        attackers: int,
    ) -> Result[TeamSizeTemplate]:
        if team_size < 1:
            return Result.fail("Team size must be positive", code=error_codes.VALIDATION_ERROR)
        if min(defenders, midfielders, attackers) < 0:
            return Result.fail("Positional counts cannot be negative", code=error_codes.VALIDATION_ERROR)
        if defenders + midfielders + attackers != team_size:
            return Result.fail(
                f"Positional counts {defenders}/{midfielders}/{attackers} do not add up to {team_size}",
                code=error_codes.VALIDATION_ERROR,
            )

        template = TeamSizeTemplate(
            team_size=team_size,
            defenders=defenders,
            midfielders=midfielders,
            attackers=attackers,
        )
        self.config_repo.set_template(guild_id, template)
        logger.info(f"Guild {guild_id} template for {team_size}: {defenders}/{midfielders}/{attackers}")
        return Result.ok(template)

    def reset_template(self, guild_id: int | None, team_size: int) -> Result[TeamSizeTemplate]:
        """Overwrite the guild's template for a size with the suggested layout."""
        if team_size < 1:
            return Result.fail("Team size must be positive", code=error_codes.VALIDATION_ERROR)
        template = suggested_positions(team_size)
        self.config_repo.set_template(guild_id, template)
        return Result.ok(template)
