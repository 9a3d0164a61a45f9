"""
Pytest fixtures for tests.

Schema creation and migrations run once per session into a template database;
each test gets a file copy of it instead of re-initializing.

Import TEST_GUILD_ID from here instead of defining it locally.
"""

import random
import shutil

import pytest

from domain.models.player import Player
from infrastructure.schema_manager import SchemaManager
from repositories.balance_config_repository import BalanceConfigRepository
from repositories.fixture_repository import FixtureRepository
from repositories.player_repository import PlayerRepository
from services.balance_config_service import BalanceConfigService
from services.balance_service import BalanceService
from services.fixture_service import FixtureService

# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GUILD_ID = 12345
"""Standard guild ID for single-guild tests."""

TEST_GUILD_ID_SECONDARY = 67890
"""Secondary guild ID for multi-guild isolation tests."""


def make_player(player_id: int, **overrides) -> Player:
    """Player with mid-range attributes and no performance data unless overridden."""
    fields = {
        "name": f"Player{player_id}",
        "goalscoring": 3.0,
        "teamwork": 3.0,
        "stamina_pace": 3.0,
        "control": 3.0,
        "resilience": 3.0,
        "defending": 3.0,
    }
    fields.update(overrides)
    return Player(player_id=player_id, **fields)


def make_rated_player(player_id: int, power_rating: float, goal_threat: float, **overrides) -> Player:
    """Qualified player with performance figures."""
    return make_player(
        player_id,
        is_qualified=True,
        power_rating=power_rating,
        goal_threat=goal_threat,
        **overrides,
    )


@pytest.fixture(scope="session")
def _schema_template_path(tmp_path_factory):
    """
    Create a schema template database once per test session.

    Tests copy from this template instead of running migrations each time.
    """
    template_dir = tmp_path_factory.mktemp("schema_template")
    template_path = str(template_dir / "template.db")
    SchemaManager(template_path).initialize()
    yield template_path


@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path (no schema)."""
    yield str(tmp_path / "temp.db")


@pytest.fixture
def repo_db_path(_schema_template_path, tmp_path):
    """Temporary database with initialized schema, copied from the template."""
    test_db_path = str(tmp_path / "test.db")
    shutil.copy2(_schema_template_path, test_db_path)
    yield test_db_path


@pytest.fixture
def player_repository(repo_db_path):
    return PlayerRepository(repo_db_path)


@pytest.fixture
def fixture_repository(repo_db_path):
    return FixtureRepository(repo_db_path)


@pytest.fixture
def balance_config_repository(repo_db_path):
    return BalanceConfigRepository(repo_db_path)


@pytest.fixture
def balance_config_service(balance_config_repository):
    return BalanceConfigService(balance_config_repository)


@pytest.fixture
def fixture_service(fixture_repository, player_repository):
    return FixtureService(fixture_repository, player_repository)


@pytest.fixture
def balance_service(fixture_repository, player_repository, balance_config_service):
    """Balance service with a seeded random source."""
    return BalanceService(
        fixture_repo=fixture_repository,
        player_repo=player_repository,
        config_service=balance_config_service,
        rng=random.Random(42),
    )


@pytest.fixture
def rated_players():
    """Ten qualified players with spread-out power ratings and goal threats."""
    return [
        make_rated_player(i, power_rating=4.0 + i * 0.4, goal_threat=0.2 + (i % 5) * 0.15)
        for i in range(1, 11)
    ]


@pytest.fixture
def registered_rated_players(player_repository, rated_players):
    """rated_players stored in TEST_GUILD_ID."""
    for player in rated_players:
        player_repository.add(player, guild_id=TEST_GUILD_ID)
    return rated_players
