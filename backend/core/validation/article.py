"""Article request validation: create, update, list and feed queries."""
from typing import Annotated, Any

from pydantic import Field

from .annotated import LowerCaseItems
from .constraints import COMMON_CONSTRAINTS
from .factories import create_text_schema, limit_schema, offset_schema
from .schema import FieldSchema, RequestSchema, StrictSchema, ValidationResult
from .validators import AllOf, ListLength, StringLength, UniqueItems, check

_TAGS = COMMON_CONSTRAINTS.tags

# TODO: the 200-character cap can never fire behind the 100-character
# short_text bound; confirm which limit the product wants before dropping one.
title_schema = create_text_schema(COMMON_CONSTRAINTS.short_text, "Title").refine(
    StringLength(max_length=200).with_message("Title must be no more than 200 characters")
)

description_schema = create_text_schema(COMMON_CONSTRAINTS.medium_text, "Description")

body_schema = create_text_schema(COMMON_CONSTRAINTS.very_long_text, "Article body")

Tag = Annotated[str, check(AllOf(
    StringLength(min_length=1).with_message("Tag cannot be empty"),
    StringLength(max_length=_TAGS.max_tag_length).with_message(
        f"Tag must be no more than {_TAGS.max_tag_length} characters"
    ),
))]

# Duplicates are checked after lowercasing, so "React" and "react" collide.
tag_list_schema = FieldSchema(
    Annotated[
        list[Tag],
        check(ListLength(max_length=_TAGS.max_items).with_message(f"Maximum {_TAGS.max_items} tags allowed")),
        LowerCaseItems,
        check(UniqueItems().with_message("Duplicate tags are not allowed")),
    ],
    name="tagList",
)

Title = title_schema.annotation
Description = description_schema.annotation
Body = body_schema.annotation
TagList = tag_list_schema.annotation
Limit = limit_schema.annotation
Offset = offset_schema.annotation


class NewArticle(StrictSchema):
    title: Title
    description: Description
    body: Body
    tag_list: TagList = Field(default_factory=list, alias="tagList")


class CreateArticle(RequestSchema):
    article: NewArticle


class ArticleChanges(RequestSchema):
    title: Title = None
    description: Description = None
    body: Body = None
    tag_list: TagList = Field(default=None, alias="tagList")


class UpdateArticle(RequestSchema):
    article: ArticleChanges


class ArticlesQuery(RequestSchema):
    tag: str = None
    author: str = None
    favorited: str = None
    limit: Limit = limit_schema.default
    offset: Offset = offset_schema.default


class ArticleFeedQuery(RequestSchema):
    limit: Limit = limit_schema.default
    offset: Offset = offset_schema.default


def validate_create_article(data: Any) -> ValidationResult[CreateArticle]:
    return CreateArticle.safe_parse(data)


def validate_update_article(data: Any) -> ValidationResult[UpdateArticle]:
    return UpdateArticle.safe_parse(data)


def validate_get_articles_query(data: Any) -> ValidationResult[ArticlesQuery]:
    return ArticlesQuery.safe_parse(data)


def validate_get_article_feed_query(data: Any) -> ValidationResult[ArticleFeedQuery]:
    return ArticleFeedQuery.safe_parse(data)


create_article_schema = CreateArticle
update_article_schema = UpdateArticle
get_articles_query_schema = get_articles_schema = ArticlesQuery
get_article_feed_query_schema = get_feed_schema = ArticleFeedQuery
