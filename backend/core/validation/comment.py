"""Comment request validation."""
from typing import Any

from .constraints import COMMON_CONSTRAINTS
from .factories import create_text_schema, limit_schema_with_default, offset_schema
from .schema import RequestSchema, ValidationResult

comment_body_schema = create_text_schema(COMMON_CONSTRAINTS.long_text, "Comment")

comment_limit_schema = limit_schema_with_default(10)


class NewComment(RequestSchema):
    body: comment_body_schema.annotation


class AddComment(RequestSchema):
    comment: NewComment


class CommentsQuery(RequestSchema):
    limit: comment_limit_schema.annotation = comment_limit_schema.default
    offset: offset_schema.annotation = offset_schema.default


def validate_add_comment(data: Any) -> ValidationResult[AddComment]:
    return AddComment.safe_parse(data)


def validate_get_comments_query(data: Any) -> ValidationResult[CommentsQuery]:
    return CommentsQuery.safe_parse(data)


add_comment_schema = create_comment_schema = AddComment
get_comments_query_schema = CommentsQuery
