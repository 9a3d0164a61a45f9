"""
Tests for permission helpers.
"""

from types import SimpleNamespace

from services.permissions import has_admin_permission


def test_allowlisted_user_passes_outside_guild(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [202])
    interaction = SimpleNamespace(user=SimpleNamespace(id=202), guild=None)

    assert has_admin_permission(interaction) is True


def test_guild_member_with_administrator(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [])

    perms = SimpleNamespace(administrator=True, manage_guild=False)
    member = SimpleNamespace(guild_permissions=perms)
    guild = SimpleNamespace(get_member=lambda _uid: member)
    interaction = SimpleNamespace(user=SimpleNamespace(id=303), guild=guild)

    assert has_admin_permission(interaction) is True


def test_manage_guild_on_user_object(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [])

    perms = SimpleNamespace(administrator=False, manage_guild=True)
    interaction = SimpleNamespace(user=SimpleNamespace(id=404, guild_permissions=perms), guild=None)

    assert has_admin_permission(interaction) is True


def test_uncached_member_falls_back_to_user(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [])

    perms = SimpleNamespace(administrator=True, manage_guild=False)
    guild = SimpleNamespace(get_member=lambda _uid: None)
    interaction = SimpleNamespace(user=SimpleNamespace(id=505, guild_permissions=perms), guild=guild)

    assert has_admin_permission(interaction) is True


def test_regular_member_rejected(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [1])

    perms = SimpleNamespace(administrator=False, manage_guild=False)
    member = SimpleNamespace(guild_permissions=perms)
    guild = SimpleNamespace(get_member=lambda _uid: member)
    interaction = SimpleNamespace(user=SimpleNamespace(id=606), guild=guild)

    assert has_admin_permission(interaction) is False


def test_no_permissions_outside_guild(monkeypatch):
    monkeypatch.setattr("services.permissions.ADMIN_USER_IDS", [])
    interaction = SimpleNamespace(user=SimpleNamespace(id=707), guild=None)

    assert has_admin_permission(interaction) is False
