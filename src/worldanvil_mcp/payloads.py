"""
Request bodies for World Anvil create and update calls.

Every text field a caller writes passes through the Markdown converter here,
before the client sends it. Builders are pure: they return a new dict and
never touch their arguments. Optional arguments left as None are omitted so
that PATCH requests only change what the caller asked for.
"""

from typing import Any

from .bbcode import convert, convert_fields


def _ref(entity_id: Any) -> dict[str, Any]:
    """Reference to another resource as the API expects it: {"id": ...}."""
    return {"id": entity_id}


def _optional(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def titled(title: str | None, **parents: Any) -> dict[str, Any]:
    """Generic body: a title plus {"<parent>": {"id": ...}} references.

    Example:
        >>> titled("Maps", world="w1")
        {'title': 'Maps', 'world': {'id': 'w1'}}
    """
    data = _optional(title=title)
    for parent, parent_id in parents.items():
        if parent_id is not None:
            data[parent] = _ref(parent_id)
    return data


def titled_content(
    title: str | None, content: str | None = None, **parents: Any
) -> dict[str, Any]:
    """Title, parent references and BBCode-converted content."""
    data = titled(title, **parents)
    if content is not None:
        data["content"] = convert(content)
    return data


# ---------------------------------------------------------------------------
# Articles and categories
# ---------------------------------------------------------------------------

def article_payload(
    title: str | None = None,
    world_id: str | None = None,
    template: str | None = None,
    content: str | None = None,
    icon: str | None = None,
    fields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Body for creating or updating an article.

    Template-specific fields (e.g. "manifestation", "anatomy", "seeded") are
    merged last after conversion, so they may override the named arguments.
    """
    data = titled(title, world=world_id)
    if template is not None:
        data["templateType"] = template
    if content is not None:
        data["content"] = convert(content)
    if icon is not None:
        data["icon"] = icon
    if isinstance(fields, dict):
        data.update(convert_fields(fields))
    return data


def category_payload(
    title: str | None = None,
    world_id: str | None = None,
    icon: str | None = None,
    content: str | None = None,
    excerpt: str | None = None,
) -> dict[str, Any]:
    """Body for creating or updating a category.

    World Anvil renders a category page from "custom1", not "description",
    so converted content is stored there.
    """
    data = titled(title, world=world_id)
    data.update(_optional(icon=icon, excerpt=excerpt))
    if content is not None:
        data["custom1"] = convert(content)
    return data


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

def note_payload(
    title: str | None = None,
    notesection_id: str | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Body for a note. New notes need type "default", which the docs omit."""
    data = titled_content(title, content, notesection=notesection_id)
    if notesection_id is not None:
        data["type"] = "default"
    return data


# ---------------------------------------------------------------------------
# Blocks and block templates
# ---------------------------------------------------------------------------

def block_payload(
    title: str | None = None,
    template_id: int | str | None = None,
    folder_id: int | str | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    return titled_content(title, content, template=template_id, folder=folder_id)


def block_template_part_payload(
    title: str | None = None,
    part_type: str | None = None,
    template_id: int | str | None = None,
    description: str | None = None,
    placeholder: str | None = None,
    required: bool | None = None,
    position: int | None = None,
    section: str | None = None,
    min_value: int | None = None,
    max_value: int | None = None,
    options: str | None = None,
) -> dict[str, Any]:
    """Body for a block template part (one field of a statblock template)."""
    data = _optional(title=title, type=part_type)
    if template_id is not None:
        data["template"] = _ref(template_id)
    data.update(
        _optional(
            description=description,
            placeholder=placeholder,
            required=required,
            position=position,
            section=section,
            min=min_value,
            max=max_value,
            options=options,
        )
    )
    return data


# ---------------------------------------------------------------------------
# Everything else
# ---------------------------------------------------------------------------

def marker_payload(title: str | None = None, map_id: str | None = None) -> dict[str, Any]:
    """Markers reference their map by bare id, unlike other resources."""
    return _optional(title=title, map=map_id)


def canvas_payload(
    title: str, world_id: str, data: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Body for a new canvas; the whiteboard "data" field is mandatory."""
    payload = titled(title, world=world_id)
    payload["data"] = data if data is not None else {}
    return payload


def variable_collection_payload(
    title: str | None = None,
    world_id: str | None = None,
    description: str | None = None,
    prefix: str | None = None,
) -> dict[str, Any]:
    data = titled(title, world=world_id)
    data.update(_optional(description=description, prefix=prefix))
    return data


def variable_payload(
    key: str | None = None,
    value: str | None = None,
    var_type: str | None = None,
    collection_id: str | None = None,
    world_id: str | None = None,
) -> dict[str, Any]:
    """Body for a variable. The API wants nested references, not plain ids."""
    data: dict[str, Any] = {}
    if collection_id is not None:
        data["collection"] = _ref(collection_id)
    data.update(_optional(k=key, type=var_type, v=value))
    if world_id is not None:
        data["world"] = _ref(world_id)
    return data
