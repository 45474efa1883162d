"""
scripts/create_admin.py

Run this from your project root to create an admin user against the store
configured by DATABASE_URL:

    python -m scripts.create_admin

You will be prompted for email, password and role. With no DATABASE_URL
the account only lives as long as this process, so set it first.
"""

import asyncio
import getpass
import sys

from pydantic import ValidationError as PydanticValidationError

from island_properties.core.errors import DuplicateError
from island_properties.core.logging import setup_logging
from island_properties.main import build_repository
from island_properties.models.admin import AdminRole
from island_properties.repositories.seed import create_admin_account
from island_properties.schemas.admin import AdminUserCreate


async def create_admin(email: str, password: str, role: AdminRole) -> None:
    repository = build_repository()
    try:
        admin = await create_admin_account(
            repository, AdminUserCreate(email=email, password=password, role=role)
        )
        print("\nAdmin user created successfully!")
        print(f"   ID:    {admin.id}")
        print(f"   Email: {admin.email}")
        print(f"   Role:  {admin.role.value}")
        print("\nYou can now log in at /api/admin/login.\n")
    finally:
        await repository.close()


def main() -> None:
    setup_logging()
    print("\n── Create Admin User ─────────────────────")

    email    = input("Email:                   ").strip()
    password = getpass.getpass("Password (min 8 chars): ")
    role_raw = input("Role [admin/super_admin]: ").strip() or AdminRole.ADMIN.value

    if not email or not password:
        print("Email and password are required.")
        sys.exit(1)

    try:
        role = AdminRole(role_raw)
    except ValueError:
        print(f"Unknown role '{role_raw}'.")
        sys.exit(1)

    try:
        asyncio.run(create_admin(email, password, role))
    except PydanticValidationError as e:
        print(f"Invalid input: {e.errors()[0]['msg']}")
        sys.exit(1)
    except DuplicateError:
        print(f"Email '{email}' is already registered.")
        sys.exit(1)


if __name__ == "__main__":
    main()
