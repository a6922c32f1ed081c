"""Declarative Validation System

Request bodies and query strings are validated at the API boundary with
parse-don't-validate semantics: a ``validate_*`` helper returns either
ValidationSuccess(data) holding the normalized model, or
ValidationFailure(error) listing every issue. Nothing here raises for
malformed input.

Key Features:
- Shared constraint registry (text lengths, pagination, tag limits)
- Compositional validators bridged into pydantic Annotated types
- Explicit opt-in coercion for query-string integers
- One ValidationError kind with per-issue path and code

Usage:
    from core.validation import validate_create_article, format_validation_error

    result = validate_create_article(await request.json())
    if not result.success:
        return JSONResponse(format_validation_error(result.error), status_code=400)
    article = result.data.article
"""

# Constraint registry
from .constraints import (
    COMMON_CONSTRAINTS,
    CommonConstraints,
    IntRange,
    MinBound,
    TagBounds,
    TextBounds,
)

# Compositional validators
from .validators import (
    CheckResult,
    AtomicValidator,
    StringLength,
    NonEmpty,
    RegexPattern,
    NumericRange,
    URLValidator,
    URLProtocol,
    UUIDValidator,
    ListLength,
    UniqueItems,
    AllOf,
    WithMessage,
    check,
)

# Coercion and transformers
from .coercion import CoercedInt, CoercionFailure, StringToInt
from .annotated import LowerCaseItems, Lowered, Trimmed

# Errors
from .errors import (
    IssueCode,
    ValidationError,
    ValidationIssue,
    format_validation_error,
)

# Schema system
from .schema import (
    FieldSchema,
    RequestSchema,
    StrictSchema,
    ValidationFailure,
    ValidationResult,
    ValidationSuccess,
    safe_parse,
)

# Field schema factories
from .factories import (
    create_text_schema,
    create_url_schema,
    email_schema,
    id_schema,
    limit_schema,
    limit_schema_with_default,
    offset_schema,
)

# Entity validators
from .user import (
    bio_schema,
    image_url_schema,
    password_schema,
    username_schema,
    UserRegistration,
    UserLogin,
    UserUpdate,
    register_schema,
    login_schema,
    update_user_schema,
    user_registration_schema,
    user_login_schema,
    user_update_schema,
    validate_user_registration,
    validate_user_login,
    validate_user_update,
)
from .article import (
    title_schema,
    description_schema,
    body_schema,
    tag_list_schema,
    CreateArticle,
    UpdateArticle,
    ArticlesQuery,
    ArticleFeedQuery,
    create_article_schema,
    update_article_schema,
    get_articles_query_schema,
    get_article_feed_query_schema,
    get_articles_schema,
    get_feed_schema,
    validate_create_article,
    validate_update_article,
    validate_get_articles_query,
    validate_get_article_feed_query,
)
from .comment import (
    comment_body_schema,
    AddComment,
    CommentsQuery,
    add_comment_schema,
    create_comment_schema,
    get_comments_query_schema,
    validate_add_comment,
    validate_get_comments_query,
)

__all__ = [
    # Constraints
    "COMMON_CONSTRAINTS", "CommonConstraints", "IntRange", "MinBound", "TagBounds", "TextBounds",
    # Validators
    "CheckResult", "AtomicValidator", "StringLength", "NonEmpty", "RegexPattern", "NumericRange",
    "URLValidator", "URLProtocol", "UUIDValidator", "ListLength", "UniqueItems",
    "AllOf", "WithMessage", "check",
    # Coercion / transformers
    "CoercedInt", "CoercionFailure", "StringToInt", "LowerCaseItems", "Lowered", "Trimmed",
    # Errors
    "IssueCode", "ValidationError", "ValidationIssue", "format_validation_error",
    # Schema
    "FieldSchema", "RequestSchema", "StrictSchema",
    "ValidationFailure", "ValidationResult", "ValidationSuccess", "safe_parse",
    # Factories
    "create_text_schema", "create_url_schema", "email_schema", "id_schema",
    "limit_schema", "limit_schema_with_default", "offset_schema",
    # User
    "bio_schema", "image_url_schema", "password_schema", "username_schema",
    "UserRegistration", "UserLogin", "UserUpdate",
    "register_schema", "login_schema", "update_user_schema",
    "user_registration_schema", "user_login_schema", "user_update_schema",
    "validate_user_registration", "validate_user_login", "validate_user_update",
    # Article
    "title_schema", "description_schema", "body_schema", "tag_list_schema",
    "CreateArticle", "UpdateArticle", "ArticlesQuery", "ArticleFeedQuery",
    "create_article_schema", "update_article_schema",
    "get_articles_query_schema", "get_article_feed_query_schema",
    "get_articles_schema", "get_feed_schema",
    "validate_create_article", "validate_update_article",
    "validate_get_articles_query", "validate_get_article_feed_query",
    # Comment
    "comment_body_schema", "AddComment", "CommentsQuery",
    "add_comment_schema", "create_comment_schema", "get_comments_query_schema",
    "validate_add_comment", "validate_get_comments_query",
]
