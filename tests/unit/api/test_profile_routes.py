"""Tests for the profile response mapping."""

from uuid import uuid4

import pytest

from api.routes.profile import _to_response
from core.exceptions import ProfileNotFoundError
from domain.entities.profile import Profile, ProfileOwner


class TestToResponse:
    def test_profile_without_owner_is_not_found(self) -> None:
        profile = Profile(user_id=uuid4(), status="Developer")

        with pytest.raises(ProfileNotFoundError):
            _to_response(profile)

    def test_owner_snapshot_becomes_user(self) -> None:
        user_id = uuid4()
        profile = Profile(
            user_id=user_id,
            status="Developer",
            owner=ProfileOwner(id=user_id, name="Alice", avatar="//gravatar/a"),
        )

        response = _to_response(profile)

        assert response.user.id == user_id
        assert response.user.name == "Alice"
