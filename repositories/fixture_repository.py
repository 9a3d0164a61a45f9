"""
Repository for fixtures, their player pools and slot assignments.
"""

import logging

from domain.models.fixture import Fixture, SlotAssignment
from repositories.base_repository import BaseRepository
from repositories.interfaces import IFixtureRepository

logger = logging.getLogger("league_bot.repositories.fixture")


class FixtureRepository(BaseRepository, IFixtureRepository):
    """
    Handles fixture persistence.

    Pool members live in fixture_slots with a NULL team until a balancing
    run rewrites the whole table for the fixture.
    """

    def create(self, guild_id: int | None, team_size_a: int, team_size_b: int) -> int:
        """Create a fixture and return its id."""
        guild_id = self.normalize_guild_id(guild_id)
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO fixtures (guild_id, team_size_a, team_size_b)
                VALUES (?, ?, ?)
                """,
                (guild_id, team_size_a, team_size_b),
            )
            return cursor.lastrowid

    def get_by_id(self, fixture_id: int) -> Fixture | None:
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT fixture_id, guild_id, team_size_a, team_size_b, is_balanced, state_version
                FROM fixtures WHERE fixture_id = ?
                """,
                (fixture_id,),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return Fixture(
                fixture_id=row["fixture_id"],
                guild_id=row["guild_id"],
                team_size_a=row["team_size_a"],
                team_size_b=row["team_size_b"],
                is_balanced=bool(row["is_balanced"]),
                state_version=row["state_version"],
            )

    def add_to_pool(self, fixture_id: int, player_ids: list[int]) -> int:
        """
        Add players to a fixture's pool.

        Players already in the pool are ignored.

        Returns:
            Number of players newly added
        """
        if not player_ids:
            return 0
        with self.connection() as conn:
            cursor = conn.cursor()
            added = 0
            for pid in player_ids:
                cursor.execute(
                    "INSERT OR IGNORE INTO fixture_slots (fixture_id, player_id) VALUES (?, ?)",
                    (fixture_id, pid),
                )
                added += cursor.rowcount
            return added

    def get_pool_player_ids(self, fixture_id: int) -> list[int]:
        """All players attached to the fixture, assigned or not, in insertion order."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT player_id FROM fixture_slots WHERE fixture_id = ? ORDER BY rowid",
                (fixture_id,),
            )
            return [row["player_id"] for row in cursor.fetchall()]

    def get_assignments(self, fixture_id: int) -> list[SlotAssignment]:
        """Assigned slots ordered by team then slot number."""
        with self.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT player_id, team, slot_number FROM fixture_slots
                WHERE fixture_id = ? AND team IS NOT NULL
                ORDER BY team, slot_number
                """,
                (fixture_id,),
            )
            return [
                SlotAssignment(
                    player_id=row["player_id"],
                    team=row["team"],
                    slot_number=row["slot_number"],
                )
                for row in cursor.fetchall()
            ]

    @staticmethod
    def _update_if_version(cursor, fixture_id: int, expected_version: int, is_balanced: bool) -> int:
        cursor.execute(
            """
            UPDATE fixtures
            SET is_balanced = ?, state_version = state_version + 1
            WHERE fixture_id = ? AND state_version = ?
            """,
            (1 if is_balanced else 0, fixture_id, expected_version),
        )
        return cursor.rowcount

    def update_if_version(self, fixture_id: int, expected_version: int, is_balanced: bool) -> int:
        """
        Compare-and-swap the balanced flag.

        Sets is_balanced and bumps state_version only if the stored version
        still equals expected_version.

        Returns:
            Rows affected (0 means another writer got there first)
        """
        with self.atomic_transaction() as conn:
            return self._update_if_version(conn.cursor(), fixture_id, expected_version, is_balanced)

    def replace_assignments(
        self,
        fixture_id: int,
        assignments: list[SlotAssignment],
        is_balanced: bool = True,
        expected_version: int | None = None,
    ) -> bool:
        """
        Atomically replace every slot row for a fixture.

        With expected_version the flag/version update is a compare-and-swap
        and nothing is written on mismatch. Without it the update is
        unconditional but still bumps the version.

        Returns:
            True if written, False on a version conflict

        Raises:
            ValueError: If the fixture does not exist
        """
        with self.atomic_transaction() as conn:
            cursor = conn.cursor()

            if expected_version is not None:
                if self._update_if_version(cursor, fixture_id, expected_version, is_balanced) == 0:
                    logger.warning(
                        f"Version conflict on fixture {fixture_id}: expected {expected_version}"
                    )
                    return False
            else:
                cursor.execute(
                    """
                    UPDATE fixtures
                    SET is_balanced = ?, state_version = state_version + 1
                    WHERE fixture_id = ?
                    """,
                    (1 if is_balanced else 0, fixture_id),
                )
                if cursor.rowcount == 0:
                    raise ValueError(f"Fixture {fixture_id} not found")

            cursor.execute("DELETE FROM fixture_slots WHERE fixture_id = ?", (fixture_id,))
            cursor.executemany(
                """
                INSERT INTO fixture_slots (fixture_id, player_id, team, slot_number)
                VALUES (?, ?, ?, ?)
                """,
                [(fixture_id, a.player_id, a.team, a.slot_number) for a in assignments],
            )

        logger.info(f"Wrote {len(assignments)} slot assignments for fixture {fixture_id}")
        return True
