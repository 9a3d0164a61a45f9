"""
Repository for player data access.
"""

import logging

from domain.models.player import Player
from repositories.base_repository import BaseRepository
from repositories.interfaces import IPlayerRepository

logger = logging.getLogger("league_bot.repositories.player")

_SELECT_PLAYERS = """
    SELECT p.player_id, p.guild_id, p.name, p.goalscoring, p.teamwork, p.stamina_pace,
           p.control, p.resilience, p.defending, p.is_guest,
           r.power_rating, r.goal_threat, r.is_qualified
    FROM players p
    LEFT JOIN player_power_ratings r
        ON r.player_id = p.player_id AND r.guild_id = p.guild_id
"""


class PlayerRepository(BaseRepository, IPlayerRepository):
    """
    Handles all player-related database operations.

    Responsibilities:
    - Player registration with positional attributes
    - Ordered, guild-scoped lookups for balancing
    """

    def add(self, player: Player, guild_id: int | None = None) -> None:
        """
        Add a new player, plus their performance figures when present.

        Raises:
            ValueError: If the player already exists in this guild
        """
        guild_id = self.normalize_guild_id(guild_id if guild_id is not None else player.guild_id)

        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT player_id FROM players WHERE player_id = ? AND guild_id = ?",
                (player.player_id, guild_id),
            )
            if cursor.fetchone():
                raise ValueError(f"Player {player.player_id} already exists in this server.")

            cursor.execute(
                """
                INSERT INTO players
                (player_id, guild_id, name, goalscoring, teamwork, stamina_pace,
                 control, resilience, defending, is_guest)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    player.player_id,
                    guild_id,
                    player.name,
                    player.goalscoring,
                    player.teamwork,
                    player.stamina_pace,
                    player.control,
                    player.resilience,
                    player.defending,
                    1 if player.is_guest else 0,
                ),
            )

            if player.power_rating is not None or player.goal_threat is not None or player.is_qualified:
                cursor.execute(
                    """
                    INSERT INTO player_power_ratings
                    (player_id, guild_id, power_rating, goal_threat, is_qualified)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        player.player_id,
                        guild_id,
                        player.power_rating,
                        player.goal_threat,
                        1 if player.is_qualified else 0,
                    ),
                )

    def get_by_id(self, player_id: int, guild_id: int | None = None) -> Player | None:
        """Get a player by id within a guild, or None."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                _SELECT_PLAYERS + " WHERE p.player_id = ? AND p.guild_id = ?",
                (player_id, guild_id),
            )
            row = cursor.fetchone()
            return self._row_to_player(row) if row else None

    def get_by_ids(self, player_ids: list[int], guild_id: int | None = None) -> list[Player]:
        """
        Get multiple players by id within a guild.

        Returns players in the same order as the input ids. Unknown ids are
        skipped, so callers compare lengths to detect missing players.
        """
        if not player_ids:
            return []

        guild_id = self.normalize_guild_id(guild_id)

        with self.connection() as conn:
            cursor = conn.cursor()
            placeholders = ",".join("?" * len(player_ids))
            cursor.execute(
                _SELECT_PLAYERS + f" WHERE p.player_id IN ({placeholders}) AND p.guild_id = ?",
                list(player_ids) + [guild_id],
            )
            by_id = {row["player_id"]: row for row in cursor.fetchall()}

        players = []
        for pid in player_ids:
            row = by_id.get(pid)
            if row is None:
                logger.warning(f"Player {pid} not found in guild {guild_id}")
                continue
            players.append(self._row_to_player(row))
        return players

    @staticmethod
    def _row_to_player(row) -> Player:
        return Player(
            player_id=row["player_id"],
            name=row["name"],
            goalscoring=row["goalscoring"],
            teamwork=row["teamwork"],
            stamina_pace=row["stamina_pace"],
            control=row["control"],
            resilience=row["resilience"],
            defending=row["defending"],
            is_qualified=bool(row["is_qualified"]),
            is_guest=bool(row["is_guest"]),
            power_rating=row["power_rating"],
            goal_threat=row["goal_threat"],
            guild_id=row["guild_id"],
        )
