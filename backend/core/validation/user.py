"""User request validation: registration, login and profile update."""
from typing import Annotated, Any

from .constraints import COMMON_CONSTRAINTS
from .factories import create_url_schema, email_schema
from .schema import FieldSchema, RequestSchema, StrictSchema, ValidationResult
from .validators import AllOf, NonEmpty, RegexPattern, StringLength, check

PASSWORD_PATTERN = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]+$"
USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"

password_schema = FieldSchema(
    Annotated[str, check(AllOf(
        StringLength(min_length=8).with_message("Password must be at least 8 characters long"),
        StringLength(max_length=128).with_message("Password must be no more than 128 characters long"),
        RegexPattern(PASSWORD_PATTERN, description="password").with_message(
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number, and one special character"
        ),
    ))],
    name="password",
)

# Usernames are not trimmed: surrounding spaces fail the character check.
username_schema = FieldSchema(
    Annotated[str, check(AllOf(
        StringLength(min_length=1).with_message("Username is required"),
        StringLength(max_length=30).with_message("Username must be no more than 30 characters long"),
        RegexPattern(USERNAME_PATTERN, description="username").with_message(
            "Username can only contain letters, numbers, underscores, and hyphens"
        ),
    ))],
    name="username",
)

bio_schema = FieldSchema(
    Annotated[str, check(
        StringLength(max_length=COMMON_CONSTRAINTS.long_text.max).with_message(
            f"Bio must be no more than {COMMON_CONSTRAINTS.long_text.max} characters"
        )
    )],
    name="bio",
)

image_url_schema = create_url_schema(["http", "https"])

Username = username_schema.annotation
Email = email_schema.annotation
Password = password_schema.annotation
Bio = bio_schema.annotation
ImageUrl = image_url_schema.annotation
LoginPassword = Annotated[str, check(NonEmpty(strip_whitespace=False).with_message("Password is required"))]

# Optional fields default to None without validation: an absent key is
# accepted, an explicit null is not a string and fails.


class NewUser(StrictSchema):
    username: Username
    email: Email
    password: Password
    bio: Bio = None
    image: ImageUrl = None


class UserRegistration(RequestSchema):
    user: NewUser


class LoginCredentials(RequestSchema):
    email: Email
    password: LoginPassword


class UserLogin(RequestSchema):
    user: LoginCredentials


class UserChanges(RequestSchema):
    username: Username = None
    email: Email = None
    password: Password = None
    bio: Bio = None
    image: ImageUrl = None


class UserUpdate(RequestSchema):
    user: UserChanges


def validate_user_registration(data: Any) -> ValidationResult[UserRegistration]:
    return UserRegistration.safe_parse(data)


def validate_user_login(data: Any) -> ValidationResult[UserLogin]:
    return UserLogin.safe_parse(data)


def validate_user_update(data: Any) -> ValidationResult[UserUpdate]:
    return UserUpdate.safe_parse(data)


register_schema = user_registration_schema = UserRegistration
login_schema = user_login_schema = UserLogin
update_user_schema = user_update_schema = UserUpdate
