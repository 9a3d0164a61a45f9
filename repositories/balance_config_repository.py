"""
Repository for per-guild balancing configuration.
"""

import logging

from domain.models.balance import PerformanceWeights, TeamSizeTemplate
from repositories.base_repository import BaseRepository
from repositories.interfaces import IBalanceConfigRepository

logger = logging.getLogger("league_bot.repositories.balance_config")

GLOBAL_GUILD_ID = 0


class BalanceConfigRepository(BaseRepository, IBalanceConfigRepository):
    """
    Stores performance weights, attribute weights and positional templates.

    Templates fall back to the global (guild 0) row when a guild has none.
    """

    def get_performance_weights(self, guild_id: int | None) -> PerformanceWeights | None:
        """Stored weights for the guild, or None if never configured."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT power_weight, goal_weight FROM performance_weights WHERE guild_id = ?",
                (guild_id,),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return PerformanceWeights(power_weight=row["power_weight"], goal_weight=row["goal_weight"])

    def set_performance_weights(self, guild_id: int | None, power_weight: float, goal_weight: float) -> None:
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO performance_weights (guild_id, power_weight, goal_weight)
                VALUES (?, ?, ?)
                ON CONFLICT(guild_id) DO UPDATE SET
                    power_weight = excluded.power_weight,
                    goal_weight = excluded.goal_weight,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (guild_id, power_weight, goal_weight),
            )

    def get_attribute_weights(self, guild_id: int | None) -> dict[tuple[str, str], float]:
        """(position_group, attribute) -> weight for the guild (may be empty)."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT position_group, attribute, weight FROM balance_weights WHERE guild_id = ?",
                (guild_id,),
            )
            return {
                (row["position_group"], row["attribute"]): row["weight"]
                for row in cursor.fetchall()
            }

    def set_attribute_weight(
        self, guild_id: int | None, position_group: str, attribute: str, weight: float
    ) -> None:
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO balance_weights (guild_id, position_group, attribute, weight)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(guild_id, position_group, attribute) DO UPDATE SET
                    weight = excluded.weight
                """,
                (guild_id, position_group, attribute, weight),
            )

    def clear_attribute_weights(self, guild_id: int | None) -> int:
        """Delete every attribute weight for the guild. Returns rows removed."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM balance_weights WHERE guild_id = ?", (guild_id,))
            return cursor.rowcount

    def get_template(self, guild_id: int | None, team_size: int) -> TeamSizeTemplate | None:
        """Guild template for a size, falling back to the global one."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT team_size, defenders, midfielders, attackers
                FROM team_size_templates
                WHERE team_size = ? AND guild_id IN (?, ?)
                ORDER BY CASE WHEN guild_id = ? THEN 0 ELSE 1 END
                LIMIT 1
                """,
                (team_size, guild_id, GLOBAL_GUILD_ID, guild_id),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return TeamSizeTemplate(
                team_size=row["team_size"],
                defenders=row["defenders"],
                midfielders=row["midfielders"],
                attackers=row["attackers"],
            )

    def set_template(self, guild_id: int | None, template: TeamSizeTemplate) -> None:
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO team_size_templates
                    (guild_id, team_size, defenders, midfielders, attackers)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(guild_id, team_size) DO UPDATE SET
                    defenders = excluded.defenders,
                    midfielders = excluded.midfielders,
                    attackers = excluded.attackers
                """,
                (
                    guild_id,
                    template.team_size,
                    template.defenders,
                    template.midfielders,
                    template.attackers,
                ),
            )
