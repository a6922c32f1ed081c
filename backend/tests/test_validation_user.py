"""Tests for user request validation."""

from __future__ import annotations

import pytest

from core.validation import (
    IssueCode,
    bio_schema,
    login_schema,
    password_schema,
    register_schema,
    update_user_schema,
    user_login_schema,
    user_registration_schema,
    user_update_schema,
    username_schema,
    validate_user_login,
    validate_user_registration,
    validate_user_update,
)


class TestPasswordSchema:
    """Tests for password rules."""

    def test_accepts_strong_password(self) -> None:
        """Test a password with every character class."""
        assert password_schema.parse("Password123!") == "Password123!"

    def test_rejects_missing_classes(self) -> None:
        """Test missing uppercase and symbol."""
        issue = password_schema.safe_parse("password123").error.issues[0]

        assert issue.code == IssueCode.INVALID_FORMAT
        assert issue.message == (
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number, and one special character"
        )

    def test_length_bounds(self) -> None:
        """Test min and max length messages."""
        short = password_schema.safe_parse("Pa1!").error.issues[0]
        long = password_schema.safe_parse("Pa1!" * 33).error.issues[0]

        assert short.message == "Password must be at least 8 characters long"
        assert short.code == IssueCode.TOO_SHORT
        assert long.message == "Password must be no more than 128 characters long"
        assert long.code == IssueCode.TOO_LONG

    @pytest.mark.parametrize("password", ["Password123#", "Pässword123!", "Password 123!", "Password١٢٣!"])
    def test_rejects_characters_outside_allowed_set(self, password: str) -> None:
        """Test only ASCII letters, digits and @$!%*?& are allowed."""
        assert not password_schema.safe_parse(password).success

    def test_reports_one_issue(self) -> None:
        """Test checks on one field stop at the first failure."""
        result = password_schema.safe_parse("short")

        assert len(result.error.issues) == 1


class TestUsernameSchema:
    """Tests for username rules."""

    @pytest.mark.parametrize("username", ["jake", "jake_the-dev", "J4K3", "a" * 30])
    def test_accepts(self, username: str) -> None:
        """Test valid usernames."""
        assert username_schema.parse(username) == username

    def test_required(self) -> None:
        """Test empty username message."""
        assert username_schema.safe_parse("").error.issues[0].message == "Username is required"

    def test_too_long(self) -> None:
        """Test max length message."""
        issue = username_schema.safe_parse("a" * 31).error.issues[0]

        assert issue.message == "Username must be no more than 30 characters long"

    @pytest.mark.parametrize("username", ["jake doe", " jake", "jake!", "jake\n"])
    def test_rejects_characters(self, username: str) -> None:
        """Test usernames are not trimmed and only allow [A-Za-z0-9_-]."""
        issue = username_schema.safe_parse(username).error.issues[0]

        assert issue.message == "Username can only contain letters, numbers, underscores, and hyphens"


class TestBioSchema:
    """Tests for bio."""

    def test_bounds(self) -> None:
        """Test empty is fine and 1001 characters is not."""
        assert bio_schema.parse("") == ""
        assert bio_schema.parse("a" * 1000) == "a" * 1000
        issue = bio_schema.safe_parse("a" * 1001).error.issues[0]
        assert issue.message == "Bio must be no more than 1000 characters"


class TestUserRegistration:
    """Tests for the registration envelope."""

    def test_accepts_and_normalizes(self, valid_user: dict) -> None:
        """Test a full registration payload."""
        result = validate_user_registration({"user": {**valid_user, "email": " JAKE@JAKE.JAKE "}})

        assert result.success is True
        assert result.data.user.email == "jake@jake.jake"
        assert result.data.user.bio is None
        assert result.data.user.image is None

    def test_accepts_optional_profile(self, valid_user: dict) -> None:
        """Test bio and image."""
        payload = {"user": {**valid_user, "bio": "I like to skateboard", "image": "https://example.com/me.png"}}

        result = validate_user_registration(payload)

        assert result.success is True
        assert result.data.user.image == "https://example.com/me.png"

    def test_rejects_unknown_keys(self, valid_user: dict) -> None:
        """Test the user object is strict."""
        result = validate_user_registration({"user": {**valid_user, "admin": True}})

        assert result.success is False
        issue = result.error.issues[0]
        assert issue.code == IssueCode.UNRECOGNIZED_KEYS
        assert issue.path == ("user", "admin")

    def test_collects_issues_across_fields(self) -> None:
        """Test every failing field is reported."""
        result = validate_user_registration({"user": {"username": "", "email": "nope", "password": "weak"}})

        fields = {issue.field for issue in result.error.issues}
        assert fields == {"user.username", "user.email", "user.password"}

    def test_missing_fields(self) -> None:
        """Test missing required keys."""
        result = validate_user_registration({"user": {}})

        assert {issue.code for issue in result.error.issues} == {IssueCode.REQUIRED}
        assert len(result.error.issues) == 3

    def test_rejects_null_optional(self, valid_user: dict) -> None:
        """Test an explicit null is not an absent value."""
        result = validate_user_registration({"user": {**valid_user, "bio": None}})

        assert result.error.issues[0].path == ("user", "bio")
        assert result.error.issues[0].code == IssueCode.INVALID_TYPE

    def test_rejects_bad_image_url(self, valid_user: dict) -> None:
        """Test image must be http(s)."""
        result = validate_user_registration({"user": {**valid_user, "image": "ftp://example.com/me.png"}})

        assert result.error.issues[0].code == IssueCode.INVALID_URL

    @pytest.mark.parametrize("data", [None, "user", [], {"user": "jake"}])
    def test_never_raises_on_malformed_input(self, data: object) -> None:
        """Test malformed payloads become failures."""
        result = validate_user_registration(data)

        assert result.success is False
        assert result.error.issues[0].code in (IssueCode.INVALID_TYPE, IssueCode.REQUIRED)


class TestUserLogin:
    """Tests for the login envelope."""

    def test_accepts(self) -> None:
        """Test login only needs a non-empty password."""
        result = validate_user_login({"user": {"email": "Jake@Jake.Jake", "password": "x"}})

        assert result.success is True
        assert result.data.user.email == "jake@jake.jake"

    def test_password_required(self) -> None:
        """Test empty password message."""
        result = validate_user_login({"user": {"email": "jake@jake.jake", "password": ""}})

        issue = result.error.issues[0]
        assert issue.message == "Password is required"
        assert issue.field == "user.password"

    def test_ignores_unknown_keys(self) -> None:
        """Test login is not strict."""
        result = validate_user_login({"user": {"email": "jake@jake.jake", "password": "x", "remember": True}})

        assert result.success is True


class TestUserUpdate:
    """Tests for the update envelope."""

    def test_accepts_empty_update(self) -> None:
        """Test every field is optional."""
        result = validate_user_update({"user": {}})

        assert result.success is True
        assert result.data.user.model_fields_set == set()

    def test_applies_field_rules(self) -> None:
        """Test present fields are still validated."""
        result = validate_user_update({"user": {"password": "password123", "email": "nope"}})

        assert {issue.field for issue in result.error.issues} == {"user.password", "user.email"}

    def test_partial_update(self) -> None:
        """Test only provided fields are set."""
        result = validate_user_update({"user": {"bio": "New bio"}})

        assert result.data.user.model_fields_set == {"bio"}
        assert result.data.user.bio == "New bio"


class TestSchemaAliases:
    """Tests for exported schema names."""

    def test_aliases(self) -> None:
        """Test both naming styles refer to the same schema."""
        assert user_registration_schema is register_schema
        assert user_login_schema is login_schema
        assert user_update_schema is update_user_schema
