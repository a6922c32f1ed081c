"""Tests for article and comment request validation."""

from __future__ import annotations

import pytest

from core.validation import (
    IssueCode,
    ValidationError,
    add_comment_schema,
    body_schema,
    comment_body_schema,
    create_article_schema,
    create_comment_schema,
    description_schema,
    get_article_feed_query_schema,
    get_articles_query_schema,
    get_articles_schema,
    get_feed_schema,
    tag_list_schema,
    title_schema,
    validate_add_comment,
    validate_create_article,
    validate_get_article_feed_query,
    validate_get_articles_query,
    validate_get_comments_query,
    validate_update_article,
)

REQUIRED_TEXT_SCHEMAS = [title_schema, description_schema, body_schema, comment_body_schema]


class TestTextFields:
    """Tests for title, description, body and comment body."""

    @pytest.mark.parametrize("schema", REQUIRED_TEXT_SCHEMAS)
    @pytest.mark.parametrize("value", ["", " ", "   ", "\n\t "])
    def test_blank_rejected(self, schema, value: str) -> None:
        """Test every required text field rejects blank strings."""
        result = schema.safe_parse(value)

        assert result.success is False
        assert result.error.issues[0].code == IssueCode.REQUIRED

    @pytest.mark.parametrize(
        ("schema", "limit", "message"),
        [
            (title_schema, 100, "Title must be no more than 100 characters"),
            (description_schema, 255, "Description must be no more than 255 characters"),
            (body_schema, 50000, "Article body must be no more than 50000 characters"),
            (comment_body_schema, 1000, "Comment must be no more than 1000 characters"),
        ],
    )
    def test_max_length(self, schema, limit: int, message: str) -> None:
        """Test the upper bound of each field."""
        assert schema.parse("a" * limit) == "a" * limit
        assert schema.safe_parse("a" * (limit + 1)).error.issues[0].message == message

    def test_title_cap_reports_short_text_bound(self) -> None:
        """Test the 200-character cap never fires before the 100-character bound."""
        issue = title_schema.safe_parse("a" * 201).error.issues[0]

        assert issue.message == "Title must be no more than 100 characters"

    def test_trims(self) -> None:
        """Test returned values are trimmed."""
        assert title_schema.parse("  Valid Title  ") == "Valid Title"
        assert body_schema.parse("  Valid article body  ") == "Valid article body"

    def test_required_message_names_field(self) -> None:
        """Test messages use the display name."""
        assert body_schema.safe_parse("").error.issues[0].message == "Article body is required"
        assert comment_body_schema.safe_parse("").error.issues[0].message == "Comment is required"


class TestTagListSchema:
    """Tests for tag lists."""

    def test_normalizes_to_lowercase(self) -> None:
        """Test normalization."""
        assert tag_list_schema.parse(["JavaScript", "REACT"]) == ["javascript", "react"]

    @pytest.mark.parametrize(
        "tags", [[], ["javascript"], ["a" * 20], [f"tag{i}" for i in range(10)], ["tag-with-hyphens", "tag_x"]]
    )
    def test_accepts(self, tags: list[str]) -> None:
        """Test valid tag lists."""
        assert tag_list_schema.safe_parse(tags).success

    @pytest.mark.parametrize("tags", [["tag", "tag"], ["React", "react"], ["a", "B", "b"]])
    def test_rejects_duplicates_case_insensitively(self, tags: list[str]) -> None:
        """Test duplicates are detected after lowercasing."""
        issue = tag_list_schema.safe_parse(tags).error.issues[0]

        assert issue.message == "Duplicate tags are not allowed"
        assert issue.code == IssueCode.DUPLICATE

    def test_too_many(self) -> None:
        """Test the item limit."""
        issue = tag_list_schema.safe_parse([f"tag{i}" for i in range(11)]).error.issues[0]

        assert issue.message == "Maximum 10 tags allowed"

    def test_empty_tag(self) -> None:
        """Test empty strings are rejected at their index."""
        issue = tag_list_schema.safe_parse(["valid", ""]).error.issues[0]

        assert issue.message == "Tag cannot be empty"
        assert issue.path == (1,)

    def test_long_tag(self) -> None:
        """Test the per-tag length limit."""
        issue = tag_list_schema.safe_parse(["a" * 21]).error.issues[0]

        assert issue.message == "Tag must be no more than 20 characters"

    def test_tags_are_not_trimmed(self) -> None:
        """Test whitespace is kept as part of the tag."""
        assert tag_list_schema.parse([" Go "]) == [" go "]


class TestCreateArticle:
    """Tests for the create envelope."""

    def test_accepts(self, valid_article: dict) -> None:
        """Test a valid article."""
        result = validate_create_article({"article": valid_article})

        assert result.success is True
        assert result.data.article.tag_list == ["typescript", "javascript"]

    def test_tag_list_defaults_to_empty(self, valid_article: dict) -> None:
        """Test missing tagList becomes []."""
        del valid_article["tagList"]

        result = validate_create_article({"article": valid_article})

        assert result.data.article.tag_list == []

    @pytest.mark.parametrize("field", ["title", "description", "body"])
    def test_required_fields(self, valid_article: dict, field: str) -> None:
        """Test each required field."""
        del valid_article[field]

        issue = validate_create_article({"article": valid_article}).error.issues[0]

        assert issue.path == ("article", field)
        assert issue.code == IssueCode.REQUIRED

    def test_rejects_unknown_keys(self) -> None:
        """Test the article object is strict."""
        result = validate_create_article({"article": {"title": "T", "description": "D", "body": "B", "extra": "x"}})

        assert result.success is False
        assert result.error.issues[0].field == "article.extra"
        assert result.error.issues[0].code == IssueCode.UNRECOGNIZED_KEYS

    def test_only_wire_name_for_tags(self, valid_article: dict) -> None:
        """Test the Python attribute name is not accepted as input."""
        del valid_article["tagList"]

        result = validate_create_article({"article": {**valid_article, "tag_list": ["x"]}})

        assert result.error.issues[0].field == "article.tag_list"

    def test_duplicate_tag_path(self, valid_article: dict) -> None:
        """Test list-level issues point at tagList."""
        result = validate_create_article({"article": {**valid_article, "tagList": ["Go", "go"]}})

        assert result.error.issues[0].field == "article.tagList"

    def test_ignores_unknown_top_level_keys(self, valid_article: dict) -> None:
        """Test only the inner object is strict."""
        assert validate_create_article({"article": valid_article, "meta": 1}).success

    def test_parse_raises(self) -> None:
        """Test the raising entry point on the schema class."""
        with pytest.raises(ValidationError):
            create_article_schema.parse({"article": {}})


class TestUpdateArticle:
    """Tests for the update envelope."""

    def test_accepts_empty(self) -> None:
        """Test all-optional update accepts an empty object."""
        result = validate_update_article({"article": {}})

        assert result.success is True
        assert result.data.article.model_fields_set == set()

    def test_absent_tag_list_stays_absent(self) -> None:
        """Test no default is applied on update."""
        result = validate_update_article({"article": {"title": "New"}})

        assert result.data.article.tag_list is None
        assert "tag_list" not in result.data.article.model_fields_set

    def test_present_fields_validated(self) -> None:
        """Test rules still apply."""
        result = validate_update_article({"article": {"title": "  ", "tagList": ["a", "A"]}})

        assert {issue.field for issue in result.error.issues} == {"article.title", "article.tagList"}

    def test_article_key_required(self) -> None:
        """Test the envelope itself."""
        issue = validate_update_article({}).error.issues[0]

        assert issue.field == "article"
        assert issue.message == "Required"


class TestArticleQueries:
    """Tests for list and feed queries."""

    def test_defaults(self) -> None:
        """Test pagination defaults."""
        result = validate_get_articles_query({})

        assert (result.data.limit, result.data.offset) == (20, 0)
        assert result.data.tag is None

    def test_coerces_query_strings(self) -> None:
        """Test string pagination values."""
        result = validate_get_articles_query({"tag": "dragons", "author": "jake", "limit": "5", "offset": "10"})

        assert result.data.tag == "dragons"
        assert (result.data.limit, result.data.offset) == (5, 10)

    @pytest.mark.parametrize(
        ("query", "message"),
        [({"limit": "0"}, "Limit must be at least 1"), ({"limit": 101}, "Limit cannot exceed 100"),
         ({"offset": "-1"}, "Offset must be non-negative")],
    )
    def test_bounds(self, query: dict, message: str) -> None:
        """Test pagination bounds."""
        assert validate_get_articles_query(query).error.issues[0].message == message

    def test_blank_pagination(self) -> None:
        """Test empty query values coerce to zero."""
        assert validate_get_articles_query({"offset": ""}).data.offset == 0
        issue = validate_get_articles_query({"limit": ""}).error.issues[0]
        assert (issue.field, issue.message) == ("limit", "Limit must be at least 1")

    def test_feed(self) -> None:
        """Test the feed query."""
        assert validate_get_article_feed_query({"limit": "50"}).data.limit == 50
        assert validate_get_article_feed_query({}).data.offset == 0

    def test_aliases(self) -> None:
        """Test exported aliases."""
        assert get_articles_schema is get_articles_query_schema
        assert get_feed_schema is get_article_feed_query_schema


class TestComments:
    """Tests for comment validation."""

    def test_add_comment(self) -> None:
        """Test body is trimmed."""
        result = validate_add_comment({"comment": {"body": "  Great article!  "}})

        assert result.data.comment.body == "Great article!"

    def test_add_comment_requires_body(self) -> None:
        """Test blank body."""
        issue = validate_add_comment({"comment": {"body": "   "}}).error.issues[0]

        assert issue.field == "comment.body"
        assert issue.message == "Comment is required"

    def test_comments_query_default_limit(self) -> None:
        """Test comments default to 10 per page."""
        result = validate_get_comments_query({})

        assert (result.data.limit, result.data.offset) == (10, 0)

    def test_comments_query_bounds(self) -> None:
        """Test bounds still apply."""
        assert validate_get_comments_query({"limit": "101"}).success is False

    def test_alias(self) -> None:
        """Test exported alias."""
        assert create_comment_schema is add_comment_schema
