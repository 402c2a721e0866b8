"""Tests for the BookStack REST client against the in-memory fake API."""

import pytest

from bookstack_mcp.client import EntityKind, Filter, FilterOperator
from bookstack_mcp.exceptions import BookStackApiError


class TestEntityKind:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("book", EntityKind.BOOK),
            ("Books", EntityKind.BOOK),
            ("CHAPTER", EntityKind.CHAPTER),
            ("pages", EntityKind.PAGE),
            ("shelf", EntityKind.SHELF),
            ("shelves", EntityKind.SHELF),
            (" user ", EntityKind.USER),
        ],
    )
    def test_parse_singular_and_plural(self, name, expected):
        assert EntityKind.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown entity type: widget"):
            EntityKind.parse("widget")

    def test_supported_names(self):
        assert EntityKind.supported_names() == ["book", "chapter", "page", "shelf", "user"]


class TestFilters:
    def test_operator_parse_case_insensitive(self):
        assert FilterOperator.parse("GTE") is FilterOperator.GTE

    def test_unknown_operator_falls_back_to_like(self):
        assert FilterOperator.parse("between") is FilterOperator.LIKE
        assert FilterOperator.parse("") is FilterOperator.LIKE

    def test_like_value_is_wrapped(self):
        assert Filter("name", "guide").as_query() == {"filter[name:like]": "%guide%"}

    def test_eq_value_is_verbatim(self):
        query = Filter("id", "3", FilterOperator.EQ).as_query()
        assert query == {"filter[id:eq]": "3"}


class TestRequests:
    @pytest.mark.asyncio
    async def test_token_header_sent(self, bookstack_client, fake_api):
        await bookstack_client.list(EntityKind.BOOK)
        request = fake_api.last_request()
        assert request.headers["authorization"] == "Token token-id:token-secret"
        assert request.url.params["offset"] == "0"
        assert request.url.params["count"] == "50"

    @pytest.mark.asyncio
    async def test_list_with_filter(self, bookstack_client, fake_api):
        result = await bookstack_client.list(
            EntityKind.BOOK, filters=[Filter("name", "engineering")]
        )
        assert [b["name"] for b in result["data"]] == ["Engineering Guide"]
        assert fake_api.last_request().url.params["filter[name:like]"] == "%engineering%"

    @pytest.mark.asyncio
    async def test_read(self, bookstack_client):
        book = await bookstack_client.read(EntityKind.BOOK, 1)
        assert book["name"] == "Operations Handbook"

    @pytest.mark.asyncio
    async def test_read_missing_raises_with_status(self, bookstack_client):
        with pytest.raises(BookStackApiError) as exc_info:
            await bookstack_client.read(EntityKind.BOOK, 999)
        assert exc_info.value.status_code == 404
        assert "Book 999 not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_drops_none_values(self, bookstack_client, fake_api):
        created = await bookstack_client.create(
            EntityKind.SHELF, {"name": "Archive", "description": None}
        )
        assert created["name"] == "Archive"
        assert "description" not in created

    @pytest.mark.asyncio
    async def test_delete(self, bookstack_client, fake_api):
        assert await bookstack_client.delete(EntityKind.USER, 6) is True
        assert 6 not in fake_api.items["users"]
