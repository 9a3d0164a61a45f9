"""
Schema and migration management for SQLite database.
"""

import logging
import sqlite3

from domain.services.balance_scoring import SUGGESTED_TEMPLATE_SIZES, suggested_positions

logger = logging.getLogger("league_bot.schema")


class SchemaManager:
    """
    Owns schema creation and migrations.

    Call initialize() to ensure schema is present and migrations are applied.
    """

    def __init__(self, db_path: str, use_uri: bool = False):
        self.db_path = db_path
        self.use_uri = use_uri

    def initialize(self) -> None:
        """Create base schema and apply migrations."""
        logger.info(f"Initializing database schema: {self.db_path}")
        conn = self._connect()
        try:
            cursor = conn.cursor()
            self._create_base_schema(cursor)
            self._create_schema_migrations_table(cursor)
            self._run_migrations(cursor)
            conn.commit()
        finally:
            conn.close()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, uri=self.use_uri)
        conn.row_factory = sqlite3.Row
        if not self.use_uri:  # Skip WAL for in-memory databases
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # Players and their positional attributes (1-5 scale)
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                player_id INTEGER NOT NULL,
                guild_id INTEGER NOT NULL DEFAULT 0,
                name TEXT NOT NULL DEFAULT '',
                goalscoring REAL,
                teamwork REAL,
                stamina_pace REAL,
                control REAL,
                resilience REAL,
                defending REAL,
                is_guest INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (player_id, guild_id)
            )
            """
        )

        # Fixtures to be balanced
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS fixtures (
                fixture_id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL DEFAULT 0,
                team_size_a INTEGER NOT NULL,
                team_size_b INTEGER NOT NULL,
                is_balanced INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

        # Pool membership and slot assignments; team/slot NULL until balanced
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS fixture_slots (
                fixture_id INTEGER NOT NULL,
                player_id INTEGER NOT NULL,
                team TEXT,
                slot_number INTEGER,
                FOREIGN KEY (fixture_id) REFERENCES fixtures(fixture_id),
                PRIMARY KEY (fixture_id, player_id)
            )
            """
        )

    # --- Migration helpers ---

    def _add_column_if_not_exists(self, cursor, table: str, column: str, column_type: str) -> None:
        columns = {row[1] for row in cursor.execute(f"PRAGMA table_info({table})")}
        if column not in columns:
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")

    def _create_schema_migrations_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _run_migrations(self, cursor) -> None:
        applied = {row["name"] for row in cursor.execute("SELECT name FROM schema_migrations")}
        for name, action in self._get_migrations():
            if name in applied:
                continue
            logger.info(f"Applying migration: {name}")
            action(cursor)
            cursor.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (name,),
            )

    def _get_migrations(self):
        return [
            ("create_player_power_ratings_table", self._migration_create_player_power_ratings_table),
            ("add_state_version_to_fixtures", self._migration_add_state_version_to_fixtures),
            ("create_performance_weights_table", self._migration_create_performance_weights_table),
            ("create_balance_weights_table", self._migration_create_balance_weights_table),
            ("create_team_size_templates_table", self._migration_create_team_size_templates_table),
            ("seed_default_team_size_templates", self._migration_seed_default_team_size_templates),
            ("add_indexes_v1", self._migration_add_indexes_v1),
        ]

    # --- Migrations ---

    def _migration_create_player_power_ratings_table(self, cursor) -> None:
        """Performance figures computed upstream from match history."""
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS player_power_ratings (
                player_id INTEGER NOT NULL,
                guild_id INTEGER NOT NULL DEFAULT 0,
                power_rating REAL,
                goal_threat REAL,
                is_qualified INTEGER DEFAULT 0,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (player_id, guild_id)
            )
            """
        )

    def _migration_add_state_version_to_fixtures(self, cursor) -> None:
        """Optimistic concurrency counter bumped on every slot rewrite."""
        self._add_column_if_not_exists(cursor, "fixtures", "state_version", "INTEGER NOT NULL DEFAULT 0")

    def _migration_create_performance_weights_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS performance_weights (
                guild_id INTEGER PRIMARY KEY,
                power_weight REAL NOT NULL,
                goal_weight REAL NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _migration_create_balance_weights_table(self, cursor) -> None:
        """Per-guild weights for (position group, attribute) pairs."""
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS balance_weights (
                guild_id INTEGER NOT NULL,
                position_group TEXT NOT NULL,
                attribute TEXT NOT NULL,
                weight REAL NOT NULL,
                PRIMARY KEY (guild_id, position_group, attribute)
            )
            """
        )

    def _migration_create_team_size_templates_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS team_size_templates (
                guild_id INTEGER NOT NULL,
                team_size INTEGER NOT NULL,
                defenders INTEGER NOT NULL,
                midfielders INTEGER NOT NULL,
                attackers INTEGER NOT NULL,
                PRIMARY KEY (guild_id, team_size)
            )
            """
        )

    def _migration_seed_default_team_size_templates(self, cursor) -> None:
        """Global (guild 0) templates every guild falls back to."""
        for size in SUGGESTED_TEMPLATE_SIZES:
            template = suggested_positions(size)
            cursor.execute(
                """
                INSERT OR IGNORE INTO team_size_templates
                    (guild_id, team_size, defenders, midfielders, attackers)
                VALUES (0, ?, ?, ?, ?)
                """,
                (template.team_size, template.defenders, template.midfielders, template.attackers),
            )

    def _migration_add_indexes_v1(self, cursor) -> None:
        """
        Add indexes for common access patterns.
        Safe to run multiple times due to IF NOT EXISTS.
        """
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_fixtures_guild_id ON fixtures(guild_id)")
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_fixture_slots_team ON fixture_slots(fixture_id, team, slot_number)"
        )
