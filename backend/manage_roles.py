#!/usr/bin/env python3
"""
Grant or revoke roles on application user records.

The API re-reads roles on every request, so changes made here apply to the
user's very next call without them signing in again.

Usage:
    python manage_roles.py grant admin alice@example.com
    python manage_roles.py grant security 3f1c...-user-id
    python manage_roles.py revoke bob@example.com        # back to resident
    python manage_roles.py show alice@example.com
"""

import argparse
import sys

from rich.console import Console
from rich.table import Table

from api.dependencies import ServiceContainer
from modules.auth.identity import IIdentityProvider
from modules.users.models import UserRecord
from modules.users.store import IUserStore
from shared.config import get_settings
from shared.models import Role

console = Console()


def find_user(users: IUserStore, identity: IIdentityProvider, ref: str) -> UserRecord:
    """
    Look a user up by email if `ref` contains '@', otherwise by id.

    A user who has signed up but never called the API has an identity and
    no record yet; one is provisioned for them here.
    """
    if "@" not in ref:
        record = users.get(ref)
    else:
        record = users.get_by_email(ref)
        if record is None:
            account = identity.get_user_by_email(ref)
            if account is not None:
                record = users.create_default(account.id, account.email, display_name=account.display_name)
                console.print(f"[dim]Provisioned user record for identity {account.id}[/dim]")
    if record is None:
        console.print(f"[red]Error:[/red] no user record found for '{ref}'")
        sys.exit(1)
    return record


def set_role(users: IUserStore, record: UserRecord, role: Role) -> None:
    if record.role == role:
        console.print(f"[dim]{record.email or record.id} already has role '{role.value}'[/dim]")
        return
    users.update(record.id, {"role": role.value})
    console.print(
        f"[green]✓[/green] {record.email or record.id}: "
        f"{record.role.value} → [bold]{role.value}[/bold]"
    )


def show(record: UserRecord) -> None:
    table = Table(title="User Record")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field in ("id", "email", "role", "display_name", "flat_number", "block_number"):
        value = getattr(record, field)
        table.add_row(field, value.value if isinstance(value, Role) else str(value))
    console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage Residence Portal user roles")
    sub = parser.add_subparsers(dest="command", required=True)

    grant = sub.add_parser("grant", help="Give a user a role")
    grant.add_argument("role", choices=[r.value for r in Role])
    grant.add_argument("user", help="Email address or user id")

    revoke = sub.add_parser("revoke", help="Reset a user to the resident role")
    revoke.add_argument("user", help="Email address or user id")

    show_cmd = sub.add_parser("show", help="Print a user record")
    show_cmd.add_argument("user", help="Email address or user id")

    args = parser.parse_args()

    container = ServiceContainer.from_settings(get_settings())
    try:
        record = find_user(container.users, container.identity, args.user)
        if args.command == "grant":
            set_role(container.users, record, Role(args.role))
        elif args.command == "revoke":
            set_role(container.users, record, Role.RESIDENT)
        else:
            show(record)
    finally:
        container.close()


if __name__ == "__main__":
    main()
