"""
Tests for the User domain model and the users table definition.
"""

import uuid

import pytest
from pydantic import ValidationError

from user_storage.models import Base, UserRecord
from user_storage.schemas.user import User, new_user


class TestUserSchema:
    """Tests for the pydantic User model."""

    def test_new_user_generates_distinct_uuids(self, make_user):
        first = make_user()
        second = make_user()

        assert isinstance(first.uuid, uuid.UUID)
        assert first.uuid != second.uuid

    def test_uuid_parsed_from_string(self):
        user_id = uuid.uuid4()

        user = User(
            uuid=str(user_id), firstname="a", lastname="b", username="c",
            password="d", email="e", ip="f", mac_address="g", website="h", image="i",
        )

        assert user.uuid == user_id

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            new_user(firstname="only")

    def test_password_hidden_from_repr(self, make_user):
        user = make_user(password="top-secret")

        assert "top-secret" not in repr(user)
        assert user.password == "top-secret"

    def test_built_from_record_attributes(self, make_user):
        user = make_user()
        record = UserRecord(uuid=str(user.uuid), **user.model_dump(exclude={"uuid"}))

        assert User.model_validate(record) == user


class TestUserRecord:
    """Tests for the users table mapping."""

    def test_table_columns(self):
        columns = [c.name for c in Base.metadata.tables["users"].columns]

        assert columns == [
            "uuid", "firstname", "lastname", "username", "password",
            "email", "ip", "macAddress", "website", "image",
        ]

    def test_uuid_is_primary_key(self):
        assert [c.name for c in UserRecord.__table__.primary_key] == ["uuid"]

    def test_repr_omits_password(self):
        record = UserRecord(uuid="abc", username="ada", password="secret")

        assert repr(record) == "UserRecord(uuid='abc', username='ada')"
