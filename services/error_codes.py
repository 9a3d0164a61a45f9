"""
Standard error codes for the service layer.

Command handlers branch on these instead of parsing error text.

Usage:
    from services.error_codes import FIXTURE_NOT_FOUND
    from services.result import Result

    if fixture is None:
        return Result.fail(f"Fixture {fixture_id} not found", code=FIXTURE_NOT_FOUND)
"""

# General errors
NOT_FOUND = "not_found"
VALIDATION_ERROR = "validation_error"
PERMISSION_DENIED = "permission_denied"

# Player errors
PLAYER_NOT_FOUND = "player_not_found"
PLAYER_COUNT_MISMATCH = "player_count_mismatch"

# Fixture errors
FIXTURE_NOT_FOUND = "fixture_not_found"
VERSION_CONFLICT = "version_conflict"

# Configuration errors
TEMPLATE_NOT_FOUND = "template_not_found"

# Failures a caller may simply retry after reloading state
RETRYABLE_CODES = frozenset({VERSION_CONFLICT})
