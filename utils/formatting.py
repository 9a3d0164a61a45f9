"""
Shared formatting helpers and position constants.
"""

import re

POSITION_EMOJIS = {
    "defense": "🛡️",
    "midfield": "⚙️",
    "attack": "⚽",
}

POSITION_NAMES = {
    "defense": "Defence",
    "midfield": "Midfield",
    "attack": "Attack",
}

TEAM_LABELS = {
    "A": "🔵 Team A",
    "B": "🔴 Team B",
}


def parse_id_list(raw: str) -> list[int]:
    """
    Parse a comma or space separated list of ids, keeping order.

    Raises:
        ValueError: On anything that is not an integer id
    """
    ids = []
    for token in re.split(r"[,\s]+", raw.strip()):
        if not token:
            continue
        # Accept Discord mentions like <@123>
        token = token.removeprefix("<@").removeprefix("!").removesuffix(">")
        if not token.lstrip("-").isdigit():
            raise ValueError(f"'{token}' is not a valid player id")
        ids.append(int(token))
    return ids


def format_player_name(player_id: int, names: dict[int, str] | None = None) -> str:
    """Stored name for a player, falling back to the id."""
    if names and names.get(player_id):
        return names[player_id]
    return f"#{player_id}"


def format_position_display(group: str) -> str:
    """Position group with emoji (e.g. '🛡️ Defence')."""
    emoji = POSITION_EMOJIS.get(group, "")
    return f"{emoji} {POSITION_NAMES.get(group, group)}".strip()
