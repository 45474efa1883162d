"""Tests for sample data and the bootstrap admin."""

import pytest

from island_properties.models.admin import AdminRole
from island_properties.repositories.seed import (
    SAMPLE_PROPERTIES, ensure_bootstrap_admin, seed_sample_data,
)
from island_properties.utils.security import verify_password


@pytest.mark.asyncio
async def test_seed_fills_empty_store_once(repository):
    """Test seeding creates the sample set and is skipped afterwards."""
    assert await seed_sample_data(repository) == len(SAMPLE_PROPERTIES)
    assert await seed_sample_data(repository) == 0

    properties = await repository.get_all_properties()
    assert len(properties) == len(SAMPLE_PROPERTIES)
    assert len({p.category for p in properties}) == 6
    assert len(await repository.get_all_testimonials()) == 3
    posts = await repository.get_all_blog_posts()
    assert [post.status.value for post in posts] == ["published"]


@pytest.mark.asyncio
async def test_bootstrap_admin_created_with_hashed_password(repository):
    """Test the configured admin is created as super admin."""
    admin = await ensure_bootstrap_admin(repository, "owner@islandproperties.ph", "s3cret-pass")

    assert admin.role == AdminRole.SUPER_ADMIN
    assert admin.password_hash != "s3cret-pass"
    assert verify_password("s3cret-pass", admin.password_hash)


@pytest.mark.asyncio
async def test_bootstrap_admin_is_idempotent(repository):
    """Test a second run returns the existing account."""
    first = await ensure_bootstrap_admin(repository, "owner@islandproperties.ph", "s3cret-pass")
    second = await ensure_bootstrap_admin(repository, "owner@islandproperties.ph", "other-pass")

    assert second.id == first.id


@pytest.mark.asyncio
async def test_bootstrap_admin_skipped_without_credentials(repository):
    """Test nothing happens when email or password is unset."""
    assert await ensure_bootstrap_admin(repository, "", "s3cret-pass") is None
    assert await ensure_bootstrap_admin(repository, "owner@islandproperties.ph", "") is None
    assert await repository.get_admin_user_by_email("owner@islandproperties.ph") is None


def test_verify_password_rejects_malformed_hash():
    """Test a corrupt stored hash fails closed."""
    assert verify_password("anything", "not-a-bcrypt-hash") is False


@pytest.mark.asyncio
async def test_bootstrap_admin_with_mixed_case_email(repository, auth_service):
    """Test a mixed-case configured email can log in and survives a restart."""
    email = "Admin@IslandProperties.PH"
    admin = await ensure_bootstrap_admin(repository, email, "s3cret-pass")

    result = await auth_service.login(email, "s3cret-pass")
    assert result.user.id == admin.id

    again = await ensure_bootstrap_admin(repository, email, "s3cret-pass")
    assert again.id == admin.id
    assert (await repository.get_admin_user_by_email("admin@islandproperties.ph")).id == admin.id
