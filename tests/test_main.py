"""
Tests for the MCP tool layer.

Tools are called through their undecorated functions (m.<tool>.fn) with the
shared client replaced by one wired to the stub API.
"""

import json

import pytest

from worldanvil_mcp import main as m
from worldanvil_mcp.config import WorldAnvilConfig


@pytest.fixture
def tools_client(monkeypatch, client):
    monkeypatch.setattr(m, "_client", client)
    return client


class TestConvertTool:
    def test_converts_without_api(self):
        assert m.worldanvil_convert_markdown.fn(text="# Hi") == "[h1]Hi[/h1]"


class TestToolOutput:
    """Results are rendered as indented JSON text, errors as 'Error: ...'."""

    @pytest.mark.asyncio
    async def test_result_is_pretty_json(self, tools_client, api):
        api.queue(json_body={"id": "u1", "username": "Élodie"})

        result = await m.worldanvil_get_identity.fn()

        assert json.loads(result) == {"id": "u1", "username": "Élodie"}
        assert "Élodie" in result
        assert "\n  " in result

    @pytest.mark.asyncio
    async def test_api_error_becomes_text(self, tools_client, api):
        api.queue(403, json_body={"error": "Forbidden"})

        result = await m.worldanvil_get_world.fn(world_id="w1")

        assert result == "Error: API Error (403): Forbidden"

    @pytest.mark.asyncio
    async def test_missing_token_reported_on_first_call(self, monkeypatch):
        monkeypatch.setattr(m, "_client", None)
        monkeypatch.setattr(m, "config", WorldAnvilConfig())

        result = await m.worldanvil_get_identity.fn()

        assert result.startswith("Error: WA_AUTH_TOKEN is required")
        assert m._client is None

    def test_get_client_is_cached(self, monkeypatch):
        monkeypatch.setattr(m, "_client", None)
        monkeypatch.setattr(m, "config", WorldAnvilConfig(auth_token="tok"))

        first = m.get_client()

        assert first is m.get_client()
        assert first.mode == "proxy"


class TestWriteTools:
    """Markdown written through tools reaches the API as BBCode."""

    @pytest.mark.asyncio
    async def test_create_article(self, tools_client, api):
        await m.worldanvil_create_article.fn(
            title="The Sunken City",
            world_id="w1",
            template="location",
            content="## History\n- founded\n- flooded",
            fields={"scenery": "**Ruins** everywhere"},
        )

        assert api.last.method == "PUT"
        assert api.last_json() == {
            "title": "The Sunken City",
            "world": {"id": "w1"},
            "templateType": "location",
            "content": "[h2]History[/h2]\n[ul]\n[li]founded[/li]\n[li]flooded[/li]\n[/ul]",
            "scenery": "[b]Ruins[/b] everywhere",
        }

    @pytest.mark.asyncio
    async def test_update_category_content_to_custom1(self, tools_client, api):
        await m.worldanvil_update_category.fn(category_id="c1", content="*intro*")

        assert str(api.last.url).endswith("/category?id=c1")
        assert api.last_json() == {"custom1": "[i]intro[/i]"}

    @pytest.mark.asyncio
    async def test_create_note(self, tools_client, api):
        await m.worldanvil_create_note.fn(title="Recap", notesection_id="s1", content="> quote")

        assert api.last_json() == {
            "title": "Recap",
            "notesection": {"id": "s1"},
            "content": "[quote]quote[/quote]",
            "type": "default",
        }

    @pytest.mark.asyncio
    async def test_create_marker(self, tools_client, api):
        await m.worldanvil_create_marker.fn(title="Inn", map_id="m1")
        assert api.last_json() == {"title": "Inn", "map": "m1"}

    @pytest.mark.asyncio
    async def test_create_variable(self, tools_client, api):
        await m.worldanvil_create_variable.fn(
            collection_id="vc1", world_id="w1", k="hp", v="10", type="number"
        )
        assert api.last_json()["collection"] == {"id": "vc1"}
        assert api.last_json()["world"] == {"id": "w1"}


class TestReadTools:
    @pytest.mark.asyncio
    async def test_list_articles(self, tools_client, api):
        await m.worldanvil_list_articles.fn(world_id="w1", offset=10, limit=5)

        assert str(api.last.url).endswith("/world/articles?id=w1")
        assert api.last_json() == {"limit": "5", "offset": "10", "category": {"id": "-1"}}

    @pytest.mark.asyncio
    async def test_list_rpgsystems(self, tools_client, api):
        await m.worldanvil_list_rpgsystems.fn()
        assert str(api.last.url).endswith("/rpgsystems")

    @pytest.mark.asyncio
    async def test_delete_timeline(self, tools_client, api):
        result = await m.worldanvil_delete_timeline.fn(timeline_id="t1")

        assert api.last.method == "DELETE"
        assert json.loads(result) == {"success": True}
