#!/usr/bin/env python3
"""Validate a role configuration and print each role's permission closure.

Usage:
    python scripts/check_roles.py [--roles-file roles.json] [--role admin --permission users:read]

Without --roles-file the built-in roles are checked. Exits 1 on a malformed
configuration (no default role, unknown parent, inheritance cycle), and 2 when
--role/--permission is given and the role lacks the permission.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from moodlog.config import Settings, load_roles
from moodlog.domain.exceptions import ConfigError
from moodlog.domain.services import PermissionResolver, RoleRegistry
from moodlog.domain.value_objects import Permission


def main() -> int:
    parser = argparse.ArgumentParser(description="Check role configuration")
    parser.add_argument("--roles-file", type=Path, default=None, help="JSON roles file")
    parser.add_argument("--role", type=str, default=None, help="Role to check")
    parser.add_argument(
        "--permission",
        type=Permission,
        choices=list(Permission),
        default=None,
        help="Permission the role must hold",
    )
    args = parser.parse_args()

    try:
        registry = RoleRegistry.from_mapping(load_roles(Settings(roles_file=args.roles_file)))
        resolver = PermissionResolver(registry)
    except ConfigError as e:
        print(f"Invalid role configuration: {e}", file=sys.stderr)
        return 1

    for name in registry:
        marker = " (default)" if name == registry.default_role.name else ""
        print(f"{name}{marker}: {', '.join(sorted(resolver.resolve(name)))}")

    if args.role and args.permission:
        try:
            granted = resolver.has_permission(args.role, args.permission)
        except ConfigError as e:
            print(str(e), file=sys.stderr)
            return 1
        print(f"{args.role} {'has' if granted else 'lacks'} {args.permission}")
        return 0 if granted else 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
