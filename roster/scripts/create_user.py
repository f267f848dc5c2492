"""
Create a user (e.g. first admin) in the SQL store. Run from project root:
  STORAGE_BACKEND=sql DATABASE_URL=sqlite:///roster.db python -m roster.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m roster.scripts.create_user admin@example.com your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from roster.core.config import get_settings
from roster.core.dependencies import get_credential_store
from roster.schemas.auth import CredentialsRequest, Role
from roster.services.credentials import ConflictError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Roster API user.")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    if get_settings().STORAGE_BACKEND != "sql":
        print(
            "STORAGE_BACKEND is 'memory'; a user created here would vanish on exit. "
            "Use STORAGE_BACKEND=sql or BOOTSTRAP_ADMIN_EMAIL/BOOTSTRAP_ADMIN_PASSWORD.",
            file=sys.stderr,
        )
        return 1

    try:
        creds = CredentialsRequest(email=args.email.strip(), password=args.password)
    except ValidationError as e:
        print(f"Invalid credentials: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    try:
        user = get_credential_store().register(creds.email, creds.password, role=Role(args.role))
    except ConflictError:
        print(f"User '{creds.email}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{user.email}' with role '{user.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
