"""
Tests for request body builders.
"""

from worldanvil_mcp.payloads import (
    article_payload,
    block_payload,
    block_template_part_payload,
    canvas_payload,
    category_payload,
    marker_payload,
    note_payload,
    titled,
    titled_content,
    variable_collection_payload,
    variable_payload,
)


class TestGenericBuilders:
    def test_titled_with_parent(self):
        assert titled("Maps", world="w1") == {"title": "Maps", "world": {"id": "w1"}}

    def test_titled_omits_none(self):
        assert titled(None, world=None) == {}

    def test_titled_content_converts_markdown(self):
        data = titled_content("Lore", "**old** magic", world="w1")
        assert data == {"title": "Lore", "world": {"id": "w1"}, "content": "[b]old[/b] magic"}


class TestArticlePayload:
    """Articles convert content and every string template field."""

    def test_create_body(self):
        data = article_payload(
            title="Red Dragons",
            world_id="w1",
            template="species",
            content="# Overview\nBig and *red*.",
            icon="fa-solid fa-dragon",
        )
        assert data == {
            "title": "Red Dragons",
            "world": {"id": "w1"},
            "templateType": "species",
            "content": "[h1]Overview[/h1]\nBig and [i]red[/i].",
            "icon": "fa-solid fa-dragon",
        }

    def test_template_fields_converted_and_merged(self):
        fields = {"anatomy": "- wings\n- tail", "lifespan": 900}
        data = article_payload(title="Wyvern", fields=fields)

        assert data["anatomy"] == "[ul]\n[li]wings[/li]\n[li]tail[/li]\n[/ul]"
        assert data["lifespan"] == 900
        assert fields["anatomy"] == "- wings\n- tail"

    def test_fields_override_named_arguments(self):
        data = article_payload(content="a", fields={"content": "**b**"})
        assert data["content"] == "[b]b[/b]"

    def test_update_body_only_has_given_fields(self):
        assert article_payload(content="~~gone~~") == {"content": "[s]gone[/s]"}


class TestCategoryPayload:
    def test_content_goes_to_custom1(self):
        data = category_payload(title="Places", content="> Where it began", excerpt="Short")
        assert data == {
            "title": "Places",
            "excerpt": "Short",
            "custom1": "[quote]Where it began[/quote]",
        }
        assert "content" not in data

    def test_create_body(self):
        assert category_payload(title="People", world_id="w1", icon="ra ra-player") == {
            "title": "People",
            "world": {"id": "w1"},
            "icon": "ra ra-player",
        }


class TestNotePayload:
    def test_new_note_gets_default_type(self):
        data = note_payload(title="Session 1", notesection_id="s1", content="*rain*")
        assert data == {
            "title": "Session 1",
            "notesection": {"id": "s1"},
            "content": "[i]rain[/i]",
            "type": "default",
        }

    def test_update_has_no_type(self):
        assert note_payload(content="x") == {"content": "x"}


class TestOtherPayloads:
    def test_block(self):
        data = block_payload(title="Goblin", template_id=3, folder_id=9, content="**AC** 15")
        assert data == {
            "title": "Goblin",
            "template": {"id": 3},
            "folder": {"id": 9},
            "content": "[b]AC[/b] 15",
        }

    def test_block_template_part_renames_bounds(self):
        data = block_template_part_payload(
            title="Strength",
            part_type="number",
            template_id=4,
            required=False,
            position=0,
            min_value=1,
            max_value=30,
        )
        assert data == {
            "title": "Strength",
            "type": "number",
            "template": {"id": 4},
            "required": False,
            "position": 0,
            "min": 1,
            "max": 30,
        }

    def test_marker_uses_bare_map_id(self):
        assert marker_payload("Tower", "m1") == {"title": "Tower", "map": "m1"}

    def test_canvas_defaults_to_empty_board(self):
        assert canvas_payload("Plot", "w1") == {"title": "Plot", "world": {"id": "w1"}, "data": {}}

    def test_variable_collection(self):
        data = variable_collection_payload("Stats", "w1", prefix="st")
        assert data == {"title": "Stats", "world": {"id": "w1"}, "prefix": "st"}

    def test_variable_uses_nested_references(self):
        data = variable_payload(
            key="gold", value="100", var_type="number", collection_id="vc1", world_id="w1"
        )
        assert data == {
            "collection": {"id": "vc1"},
            "k": "gold",
            "type": "number",
            "v": "100",
            "world": {"id": "w1"},
        }

    def test_variable_update(self):
        assert variable_payload(value="200") == {"v": "200"}
