"""
Application services layer.

Services orchestrate business operations using repositories and domain services.
"""

from services.balance_config_service import BalanceConfigService
from services.balance_service import BalanceOutcome, BalanceService
from services.fixture_service import FixtureService
from services.permissions import has_admin_permission
from services.result import Result

__all__ = [
    "BalanceService",
    "BalanceOutcome",
    "BalanceConfigService",
    "FixtureService",
    "has_admin_permission",
    "Result",
]
