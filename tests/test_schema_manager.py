import sqlite3

from infrastructure.schema_manager import SchemaManager


def _tables(db_path):
    with sqlite3.connect(db_path) as conn:
        return {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}


def test_schema_manager_initializes_tables(tmp_path):
    """SchemaManager creates every table the balancer needs."""
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    required = {
        "players",
        "player_power_ratings",
        "fixtures",
        "fixture_slots",
        "performance_weights",
        "balance_weights",
        "team_size_templates",
        "schema_migrations",
    }
    assert required.issubset(_tables(db_path))


def test_fixtures_get_state_version(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        columns = {row[1] for row in conn.execute("PRAGMA table_info(fixtures)")}
    assert "state_version" in columns


def test_initialize_is_idempotent(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        migrations = [row[0] for row in conn.execute("SELECT name FROM schema_migrations")]
        templates = conn.execute("SELECT COUNT(*) FROM team_size_templates WHERE guild_id = 0").fetchone()[0]

    assert len(migrations) == len(set(migrations))
    assert "seed_default_team_size_templates" in migrations
    assert templates == 6


def test_default_templates_seeded(tmp_path):
    db_path = str(tmp_path / "test.db")
    SchemaManager(db_path).initialize()

    with sqlite3.connect(db_path) as conn:
        row = conn.execute(
            "SELECT defenders, midfielders, attackers FROM team_size_templates "
            "WHERE guild_id = 0 AND team_size = 11"
        ).fetchone()
    assert row == (4, 4, 3)
