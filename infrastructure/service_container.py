"""
Service container for dependency injection and initialization.

Usage:
    container = ServiceContainer(ServiceConfig(db_path="league.db"))
    await container.initialize()

    balance_service = container.balance_service
"""

import logging
import random
from dataclasses import dataclass
from typing import Any

import config
from infrastructure.schema_manager import SchemaManager
from repositories.balance_config_repository import BalanceConfigRepository
from repositories.fixture_repository import FixtureRepository
from repositories.player_repository import PlayerRepository
from services.balance_config_service import BalanceConfigService
from services.balance_service import BalanceService
from services.fixture_service import FixtureService

logger = logging.getLogger("league_bot.infrastructure.container")


@dataclass
class RepositoryContainer:
    """Container for all repositories."""

    player: PlayerRepository | None = None
    fixture: FixtureRepository | None = None
    balance_config: BalanceConfigRepository | None = None


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    db_path: str = config.DB_PATH

    # Pool bounds for performance balancing
    min_pool_size: int = config.BALANCE_MIN_POOL_SIZE
    max_pool_size: int = config.BALANCE_MAX_POOL_SIZE

    # Seed for the shared random source (None = nondeterministic)
    random_seed: int | None = None


class ServiceContainer:
    """
    Central container for all application services.

    Handles initialization order and dependency injection.
    """

    def __init__(self, config: ServiceConfig | None = None):
        self.config = config or ServiceConfig()
        self._initialized = False
        self._repos = RepositoryContainer()
        self._services: dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """
        Initialize all services in correct order.

        Idempotent: calling it again has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")
        self._init_database()
        self._init_repositories()
        self._init_services()
        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_database(self) -> None:
        logger.debug(f"Initializing database at {self.config.db_path}")
        SchemaManager(self.config.db_path).initialize()

    def _init_repositories(self) -> None:
        logger.debug("Initializing repositories")
        db_path = self.config.db_path
        self._repos.player = PlayerRepository(db_path)
        self._repos.fixture = FixtureRepository(db_path)
        self._repos.balance_config = BalanceConfigRepository(db_path)

    def _init_services(self) -> None:
        logger.debug("Initializing services")
        rng = random.Random(self.config.random_seed)

        balance_config = BalanceConfigService(self._repos.balance_config)
        self._services["balance_config"] = balance_config
        self._services["fixture"] = FixtureService(
            fixture_repo=self._repos.fixture,
            player_repo=self._repos.player,
        )
        self._services["balance"] = BalanceService(
            fixture_repo=self._repos.fixture,
            player_repo=self._repos.player,
            config_service=balance_config,
            rng=rng,
            min_pool_size=self.config.min_pool_size,
            max_pool_size=self.config.max_pool_size,
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def player_repo(self) -> PlayerRepository:
        return self._repos.player

    @property
    def fixture_repo(self) -> FixtureRepository:
        return self._repos.fixture

    @property
    def balance_config_repo(self) -> BalanceConfigRepository:
        return self._repos.balance_config

    @property
    def balance_service(self) -> "BalanceService | None":
        return self._services.get("balance")

    @property
    def balance_config_service(self) -> "BalanceConfigService | None":
        return self._services.get("balance_config")

    @property
    def fixture_service(self) -> "FixtureService | None":
        return self._services.get("fixture")

    def expose_to_bot(self, bot) -> None:
        """
        Attach repositories and services to the bot so cogs can find them
        with getattr(bot, "<name>").
        """
        bot.player_repo = self.player_repo
        bot.fixture_repo = self.fixture_repo
        bot.balance_config_repo = self.balance_config_repo

        bot.balance_service = self.balance_service
        bot.balance_config_service = self.balance_config_service
        bot.fixture_service = self.fixture_service

        logger.info("Services exposed to bot object")
