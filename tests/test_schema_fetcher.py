import pytest

from directus_mcp.schema import (
    ManyToAnyField,
    PlainField,
    RelationField,
    SchemaLimits,
    build_schema,
    compact_schema,
    fallback_schema,
    fetch_schema,
    strip_none,
)


def field(collection, name, type_="string", special=None, system=None, **meta):
    return {
        "collection": collection,
        "field": name,
        "type": type_,
        "meta": {"special": special, "system": system, **meta},
        "schema": {},
    }


def relation(collection, name, related=None, **meta):
    return {
        "collection": collection,
        "field": name,
        "related_collection": related,
        "meta": meta or None,
    }


def test_plain_fields_keep_api_order():
    schema = build_schema(
        [field("posts", "id", "integer"), field("posts", "title"), field("pages", "slug")],
        [],
    )
    assert list(schema) == ["posts", "pages"]
    assert list(schema["posts"]) == ["id", "title"]
    assert isinstance(schema["posts"]["title"], PlainField)


def test_primary_key_and_required_are_true_or_absent():
    pk = field("posts", "id", "integer")
    pk["schema"] = {"is_primary_key": True}
    optional = field("posts", "title", required=False)
    required = field("posts", "body", required=True)

    compact = compact_schema(build_schema([pk, optional, required], []))["posts"]

    assert compact["id"] == {"type": "integer", "primary_key": True}
    assert "required" not in compact["title"]
    assert "primary_key" not in compact["title"]
    assert compact["body"]["required"] is True


def test_choices_and_note_are_copied():
    status = field(
        "posts",
        "status",
        interface="select-dropdown",
        note="Publication state",
        options={"choices": [{"text": "Draft", "value": "draft"}, {"text": "Live", "value": "live"}]},
    )
    compact = compact_schema(build_schema([status], []))["posts"]["status"]
    assert compact["interface"] == "select-dropdown"
    assert compact["note"] == "Publication state"
    assert compact["choices"] == [
        {"text": "Draft", "value": "draft"},
        {"text": "Live", "value": "live"},
    ]


def test_excluded_collections_are_skipped():
    limits = SchemaLimits(exclude_collections=frozenset({"logs"}))
    schema = build_schema([field("logs", "id"), field("posts", "id")], [], limits)
    assert list(schema) == ["posts"]


def test_collection_cap_blocks_only_new_collections():
    limits = SchemaLimits(max_collections=2)
    schema = build_schema(
        [field("a", "one"), field("b", "one"), field("c", "one"), field("a", "two")],
        [],
        limits,
    )
    assert list(schema) == ["a", "b"]
    assert list(schema["a"]) == ["one", "two"]


def test_field_cap_per_collection():
    limits = SchemaLimits(max_fields_per_collection=2)
    schema = build_schema(
        [field("a", "f1"), field("a", "f2"), field("a", "f3"), field("b", "f1")],
        [],
        limits,
    )
    assert list(schema["a"]) == ["f1", "f2"]
    assert list(schema["b"]) == ["f1"]


def test_skipped_fields_do_not_count_against_caps():
    limits = SchemaLimits(max_collections=1)
    schema = build_schema(
        [field("directus_roles", "id"), field("posts", "id")],
        [],
        limits,
    )
    assert list(schema) == ["posts"]


def test_system_fields_skipped_unless_they_reference_files_or_users():
    fields = [
        field("posts", "user_created", "uuid", special=["user-created", "m2o"], system=True),
        field("posts", "sort", "integer", system=True),
        field("posts", "image", "uuid", special=["file"], system=True),
        field("posts", "role", "uuid", special=["m2o"], system=True),
    ]
    relations = [
        relation("posts", "user_created", "directus_users"),
        relation("posts", "image", "directus_files"),
        relation("posts", "role", "directus_roles"),
    ]
    schema = build_schema(fields, relations)
    assert list(schema["posts"]) == ["user_created", "image"]


def test_directus_prefixed_collections_except_files_and_users():
    schema = build_schema(
        [
            field("directus_roles", "id"),
            field("directus_files", "id", "uuid"),
            field("directus_users", "email"),
            field("directus_settings", "project_name"),
        ],
        [],
    )
    assert list(schema) == ["directus_files", "directus_users"]


def test_no_data_alias_fields_are_skipped():
    schema = build_schema(
        [
            field("posts", "divider", "alias", special=["alias", "no-data"]),
            field("posts", "title"),
        ],
        [],
    )
    assert list(schema["posts"]) == ["title"]


def test_m2o_relation_target_and_meta():
    fields = [field("posts", "author", "uuid", special=["m2o"])]
    relations = [relation("posts", "author", "authors", one_field="posts", sort_field=None)]

    result = build_schema(fields, relations)["posts"]["author"]

    assert isinstance(result, RelationField)
    assert result.relation_type == "m2o"
    assert result.relation_collection == "authors"
    assert result.relation_meta == {"one_field": "posts"}


def test_file_marker_wins_over_m2o():
    fields = [field("posts", "cover", "uuid", special=["m2o", "file"])]
    result = build_schema(fields, [relation("posts", "cover", "directus_files")])["posts"]["cover"]
    assert result.relation_type == "file"
    assert result.relation_collection == "directus_files"


def test_files_marker_wins_over_m2m():
    fields = [field("posts", "gallery", "alias", special=["m2m", "files"])]
    result = build_schema(fields, [])["posts"]["gallery"]
    assert result.relation_type == "files"
    assert result.relation_collection is None


def test_relational_field_without_relation_has_no_target():
    result = build_schema([field("posts", "author", "uuid", special=["m2o"])], [])["posts"]["author"]
    assert isinstance(result, RelationField)
    assert result.relation_collection is None
    assert "relation_collection" not in result.compact()
    assert "relation_meta" not in result.compact()


def test_m2a_relation_lists_allowed_collections():
    fields = [field("pages", "item", "string", special=["m2a"])]
    relations = [
        relation(
            "pages",
            "item",
            None,
            one_allowed_collections=["headings", "texts"],
            one_collection_field="collection",
        )
    ]
    result = build_schema(fields, relations)["pages"]["item"]

    assert isinstance(result, ManyToAnyField)
    assert result.relation_collection == ("headings", "texts")
    assert result.compact()["relation_collection"] == ["headings", "texts"]
    assert result.compact()["relation_type"] == "m2a"


def test_o2m_alias_resolved_through_one_field():
    fields = [field("authors", "posts", "alias", special=["o2m"])]
    relations = [relation("posts", "author", "authors", one_field="posts")]

    result = build_schema(fields, relations)["authors"]["posts"]

    assert result.relation_type == "o2m"
    assert result.relation_collection == "posts"
    assert result.relation_meta == {"one_field": "posts"}


def test_m2a_alias_follows_junction_to_allowed_collections():
    fields = [field("pages", "blocks", "alias", special=["m2a"])]
    relations = [
        relation("pages_blocks", "pages_id", "pages", one_field="blocks", junction_field="item"),
        relation("pages_blocks", "item", None, one_allowed_collections=["hero", "text"]),
    ]
    result = build_schema(fields, relations)["pages"]["blocks"]
    assert result.relation_collection == ("hero", "text")


def test_strip_none_nested():
    value = {"a": None, "b": {"c": None, "d": [1, None, {"e": None}]}, "f": 0}
    assert strip_none(value) == {"b": {"d": [1, {}]}, "f": 0}


def test_fallback_schema_shape():
    compact = compact_schema(fallback_schema())
    assert compact == {
        "directus_files": {
            "id": {"type": "uuid", "primary_key": True},
            "filename_download": {"type": "string"},
        },
        "directus_users": {
            "id": {"type": "uuid", "primary_key": True},
            "email": {"type": "string"},
        },
    }


class BrokenClient:
    async def read_fields(self):
        raise RuntimeError("connection refused")

    async def read_relations(self):
        return []


@pytest.mark.asyncio
async def test_fetch_schema_falls_back_on_error():
    schema = await fetch_schema(BrokenClient())
    assert list(schema) == ["directus_files", "directus_users"]


@pytest.mark.asyncio
async def test_fetch_schema_reads_fields_and_relations():
    from tests.conftest import FakeDirectusClient

    client = FakeDirectusClient(
        fields=[field("posts", "author", "uuid", special=["m2o"])],
        relations=[relation("posts", "author", "authors")],
    )
    schema = await fetch_schema(client, SchemaLimits())
    assert schema["posts"]["author"].relation_collection == "authors"
    assert client.count("read_fields") == 1
    assert client.count("read_relations") == 1


def test_choices_without_entries_are_absent():
    status = field("posts", "status", options={"choices": ["draft", "live"]})
    compact = compact_schema(build_schema([status], []))["posts"]["status"]
    assert compact == {"type": "string"}
