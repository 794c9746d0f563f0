"""Permissions for RBAC."""

from enum import StrEnum


class Permission(StrEnum):
    """Capabilities granted to roles.

    ``own`` permissions cover the actor's own journal, ``any`` permissions
    cover every user's journal.
    """

    EMOTIONS_READ_OWN = "emotions:read:own"
    EMOTIONS_WRITE_OWN = "emotions:write:own"
    DAYS_READ_OWN = "days:read:own"
    DAYS_WRITE_OWN = "days:write:own"
    ACCOUNT_DELETE_OWN = "account:delete:own"
    EMOTIONS_READ_ANY = "emotions:read:any"
    EMOTIONS_WRITE_ANY = "emotions:write:any"
    DAYS_READ_ANY = "days:read:any"
    DAYS_WRITE_ANY = "days:write:any"
    USERS_READ = "users:read"
    USERS_DELETE = "users:delete"
