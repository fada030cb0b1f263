"""Example schema of a small social network, used as a starting document."""

from schema.types import Endpoint, Field, Schema, Table

USERS_ID = Endpoint(table="users", field="id")
POSTS_ID = Endpoint(table="posts", field="id")

EXAMPLE_SCHEMA = Schema(
    tables=(
        Table(
            name="users",
            note="Registered users of the system",
            fields=(
                Field("id", "int", pk=True, not_null=True, auto_increment=True),
                Field("username", "varchar(50)", unique=True, not_null=True),
                Field("email", "varchar(100)", not_null=True),
                Field("created_at", "timestamp", default="CURRENT_TIMESTAMP"),
            ),
        ),
        Table(
            name="posts",
            note="Posts written by users",
            fields=(
                Field("id", "int", pk=True, auto_increment=True),
                Field("user_id", "int", not_null=True, references=USERS_ID),
                Field("title", "varchar(200)", not_null=True),
                Field("content", "text"),
                Field("published_at", "timestamp"),
            ),
        ),
        Table(
            name="comments",
            note="Comments on posts",
            fields=(
                Field("id", "int", pk=True, auto_increment=True),
                Field("post_id", "int", not_null=True, references=POSTS_ID),
                Field("user_id", "int", not_null=True, references=USERS_ID),
                Field("content", "text", not_null=True),
                Field("created_at", "timestamp", default="CURRENT_TIMESTAMP"),
            ),
        ),
        Table(
            name="likes",
            note="Likes on posts",
            fields=(
                Field("id", "int", pk=True, auto_increment=True),
                Field("post_id", "int", not_null=True, references=POSTS_ID),
                Field("user_id", "int", not_null=True, references=USERS_ID),
                Field("created_at", "timestamp", default="CURRENT_TIMESTAMP"),
            ),
        ),
    ),
)
