"""
World Anvil MCP Server
Exposes the World Anvil Boromir API as MCP tools, built with FastMCP.

Markdown in every text field written through these tools is converted to
World Anvil BBCode before it is sent.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import Field

from . import payloads
from .bbcode import convert
from .client import WorldAnvilClient
from .config import WorldAnvilConfig
from .errors import WorldAnvilError

logger = logging.getLogger("worldanvil-mcp")

if not load_dotenv():
    logger.debug("No .env file found, using process environment only")

config = WorldAnvilConfig.from_env()

logging.basicConfig(
    level=config.log_level,
    )

mcp = FastMCP(
    name="worldanvil-mcp"
)

# Created on first use so the server can start and list tools without credentials
_client: WorldAnvilClient | None = None


def get_client() -> WorldAnvilClient:
    """Return the shared API client, creating it on first use."""
    global _client
    if _client is None:
        _client = WorldAnvilClient(config)
        logger.info(f"🌍 World Anvil client ready ({_client.mode} mode, {_client.base_url})")
    return _client


def _format_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False)


async def _run(operation: Callable[[WorldAnvilClient], Awaitable[Any]]) -> str:
    """Run an API operation and render its result as tool output text."""
    try:
        result = await operation(get_client())
    except WorldAnvilError as e:
        logger.error(f"❌ {e}")
        return f"Error: {e}"
    return _format_result(result)


WorldId = Annotated[str, Field(description="The ID of the world")]
Offset = Annotated[int | None, Field(description="Pagination offset (optional)")]
Limit = Annotated[int | None, Field(description="Maximum number of results to return (optional)")]
Title = Annotated[str, Field(description="Title")]
OptionalTitle = Annotated[str | None, Field(description="New title (optional)")]
MarkdownContent = Annotated[
    str | None, Field(description="Content in Markdown (auto-converted to BBCode)")
]
Icon = Annotated[
    str | None,
    Field(description='FontAwesome or RPG-Awesome icon class (e.g. "fa-solid fa-dragon", "ra ra-crystal-ball")'),
]


# ----------------------------------------------------------------------
# Markup
# ----------------------------------------------------------------------

@mcp.tool
def worldanvil_convert_markdown(
    text: Annotated[str, Field(description="Markdown text to convert")],
) -> str:
    """Convert Markdown to World Anvil BBCode without calling the API.

    Useful for previewing what will be stored when content is written.
    """
    return convert(text)


# ----------------------------------------------------------------------
# Identity & worlds
# ----------------------------------------------------------------------

@mcp.tool
async def worldanvil_get_identity() -> str:
    """Get the current authenticated user's identity and information."""
    return await _run(lambda c: c.get_identity())


@mcp.tool
async def worldanvil_list_worlds() -> str:
    """List all worlds belonging to the authenticated user."""
    return await _run(lambda c: c.list_worlds())


@mcp.tool
async def worldanvil_get_world(world_id: WorldId) -> str:
    """Get details about a specific world by its ID."""
    return await _run(lambda c: c.get_entity("world", world_id))


@mcp.tool
async def worldanvil_create_world(title: Annotated[str, Field(description="The title of the world")]) -> str:
    """Create a new world in World Anvil."""
    return await _run(lambda c: c.create_entity("world", payloads.titled(title)))


@mcp.tool
async def worldanvil_update_world(world_id: WorldId, title: OptionalTitle = None) -> str:
    """Update an existing world in World Anvil."""
    return await _run(lambda c: c.update_entity("world", world_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_world(world_id: WorldId) -> str:
    """Delete a world from World Anvil."""
    return await _run(lambda c: c.delete_entity("world", world_id))


# ----------------------------------------------------------------------
# Articles
# ----------------------------------------------------------------------

@mcp.tool
async def worldanvil_list_articles(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List articles in a specific world."""
    return await _run(lambda c: c.list_articles(world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_get_article(
    article_id: Annotated[str, Field(description="The ID of the article to retrieve")],
) -> str:
    """Get a specific article by its ID, including its full content."""
    return await _run(lambda c: c.get_entity("article", article_id))


@mcp.tool
async def worldanvil_create_article(
    title: Annotated[str, Field(description="The title of the article")],
    world_id: Annotated[str, Field(description="The ID of the world to create the article in")],
    template: Annotated[str | None, Field(description="""
        Template type. Use "article" for generic articles, or specific types like
        law, species, ethnicity, material, document, technology, organization,
        location, character, item.
        """)] = None,
    content: Annotated[str | None, Field(description="Main content/intro of the article (Markdown auto-converted to BBCode)")] = None,
    icon: Icon = None,
    fields: Annotated[dict[str, Any] | None, Field(description="""
        Template-specific fields as key-value pairs (e.g. manifestation, anatomy,
        seeded, authornotes). Markdown in every text field is auto-converted to BBCode.
        """)] = None,
) -> str:
    """Create a new article in World Anvil.

    Markdown is converted to BBCode in the content field and in every
    template-specific text field.
    """
    data = payloads.article_payload(
        title=title, world_id=world_id, template=template, content=content, icon=icon, fields=fields
    )
    return await _run(lambda c: c.create_entity("article", data))


@mcp.tool
async def worldanvil_update_article(
    article_id: Annotated[str, Field(description="The ID of the article to update")],
    title: OptionalTitle = None,
    content: Annotated[str | None, Field(description="New main content (Markdown auto-converted to BBCode)")] = None,
    icon: Icon = None,
    fields: Annotated[dict[str, Any] | None, Field(description="Template-specific fields to update. Markdown is auto-converted to BBCode.")] = None,
) -> str:
    """Update an existing article in World Anvil."""
    data = payloads.article_payload(title=title, content=content, icon=icon, fields=fields)
    return await _run(lambda c: c.update_entity("article", article_id, data))


@mcp.tool
async def worldanvil_delete_article(
    article_id: Annotated[str, Field(description="The ID of the article to delete")],
) -> str:
    """Delete an article from World Anvil."""
    return await _run(lambda c: c.delete_entity("article", article_id))


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------

CategoryId = Annotated[str, Field(description="The ID of the category")]


@mcp.tool
async def worldanvil_list_categories(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List categories in a specific world."""
    return await _run(lambda c: c.list_entities("category", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_get_category(category_id: CategoryId) -> str:
    """Get a specific category by its ID."""
    return await _run(lambda c: c.get_entity("category", category_id))


@mcp.tool
async def worldanvil_create_category(title: Title, world_id: WorldId, icon: Icon = None) -> str:
    """Create a new category in World Anvil."""
    data = payloads.category_payload(title=title, world_id=world_id, icon=icon)
    return await _run(lambda c: c.create_entity("category", data))


@mcp.tool
async def worldanvil_update_category(
    category_id: CategoryId,
    title: OptionalTitle = None,
    icon: Icon = None,
    content: Annotated[str | None, Field(description="Main content of the category page (Markdown auto-converted to BBCode)")] = None,
    excerpt: Annotated[str | None, Field(description="A short teaser/summary for the category")] = None,
) -> str:
    """Update an existing category. Markdown in content is converted to BBCode."""
    data = payloads.category_payload(title=title, icon=icon, content=content, excerpt=excerpt)
    return await _run(lambda c: c.update_entity("category", category_id, data))


@mcp.tool
async def worldanvil_delete_category(category_id: CategoryId) -> str:
    """Delete a category from World Anvil."""
    return await _run(lambda c: c.delete_entity("category", category_id))


# ----------------------------------------------------------------------
# Images
# ----------------------------------------------------------------------

@mcp.tool
async def worldanvil_list_images(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List images in a specific world."""
    return await _run(lambda c: c.list_entities("image", world_id, offset=offset, limit=limit))


# ----------------------------------------------------------------------
# Notebooks, note sections & notes
# ----------------------------------------------------------------------

NotebookId = Annotated[str, Field(description="Notebook ID")]
NotesectionId = Annotated[str, Field(description="Note section ID")]
NoteId = Annotated[str, Field(description="Note ID")]


@mcp.tool
async def worldanvil_get_notebook(notebook_id: NotebookId) -> str:
    """Get notebook by ID."""
    return await _run(lambda c: c.get_entity("notebook", notebook_id))


@mcp.tool
async def worldanvil_list_notebooks(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List notebooks in a world.

    The upstream endpoint is unreliable; use get_notebook with a known ID if it fails.
    """
    return await _run(lambda c: c.list_entities("notebook", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_notebook(title: Title, world_id: WorldId) -> str:
    """Create notebook."""
    return await _run(lambda c: c.create_entity("notebook", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_notebook(notebook_id: NotebookId, title: OptionalTitle = None) -> str:
    """Update notebook."""
    return await _run(lambda c: c.update_entity("notebook", notebook_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_notebook(notebook_id: NotebookId) -> str:
    """Delete notebook."""
    return await _run(lambda c: c.delete_entity("notebook", notebook_id))


@mcp.tool
async def worldanvil_get_notesection(notesection_id: NotesectionId) -> str:
    """Get note section by ID."""
    return await _run(lambda c: c.get_entity("notesection", notesection_id))


@mcp.tool
async def worldanvil_list_notesections(notebook_id: NotebookId, offset: Offset = None, limit: Limit = None) -> str:
    """List note sections in a notebook."""
    return await _run(lambda c: c.list_entities("notesection", notebook_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_notesection(title: Title, notebook_id: NotebookId) -> str:
    """Create note section."""
    return await _run(lambda c: c.create_entity("notesection", payloads.titled(title, notebook=notebook_id)))


@mcp.tool
async def worldanvil_update_notesection(notesection_id: NotesectionId, title: OptionalTitle = None) -> str:
    """Update note section."""
    return await _run(lambda c: c.update_entity("notesection", notesection_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_notesection(notesection_id: NotesectionId) -> str:
    """Delete note section."""
    return await _run(lambda c: c.delete_entity("notesection", notesection_id))


@mcp.tool
async def worldanvil_get_note(note_id: NoteId) -> str:
    """Get note by ID."""
    return await _run(lambda c: c.get_entity("note", note_id))


@mcp.tool
async def worldanvil_list_notes(notesection_id: NotesectionId, offset: Offset = None, limit: Limit = None) -> str:
    """List notes in a note section."""
    return await _run(lambda c: c.list_entities("note", notesection_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_note(title: Title, notesection_id: NotesectionId, content: MarkdownContent = None) -> str:
    """Create note. Markdown in content is converted to BBCode."""
    data = payloads.note_payload(title=title, notesection_id=notesection_id, content=content)
    return await _run(lambda c: c.create_entity("note", data))


@mcp.tool
async def worldanvil_update_note(note_id: NoteId, title: OptionalTitle = None, content: MarkdownContent = None) -> str:
    """Update note. Markdown in content is converted to BBCode."""
    data = payloads.note_payload(title=title, content=content)
    return await _run(lambda c: c.update_entity("note", note_id, data))


@mcp.tool
async def worldanvil_delete_note(note_id: NoteId) -> str:
    """Delete note."""
    return await _run(lambda c: c.delete_entity("note", note_id))


# ----------------------------------------------------------------------
# Secrets & history events
# ----------------------------------------------------------------------

SecretId = Annotated[str, Field(description="Secret ID")]
HistoryId = Annotated[str, Field(description="History event ID")]


@mcp.tool
async def worldanvil_get_secret(secret_id: SecretId) -> str:
    """Get secret by ID."""
    return await _run(lambda c: c.get_entity("secret", secret_id))


@mcp.tool
async def worldanvil_list_secrets(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List secrets in a world."""
    return await _run(lambda c: c.list_entities("secret", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_secret(title: Title, world_id: WorldId, content: MarkdownContent = None) -> str:
    """Create secret. Markdown in content is converted to BBCode."""
    data = payloads.titled_content(title, content, world=world_id)
    return await _run(lambda c: c.create_entity("secret", data))


@mcp.tool
async def worldanvil_update_secret(secret_id: SecretId, title: OptionalTitle = None, content: MarkdownContent = None) -> str:
    """Update secret. Markdown in content is converted to BBCode."""
    data = payloads.titled_content(title, content)
    return await _run(lambda c: c.update_entity("secret", secret_id, data))


@mcp.tool
async def worldanvil_delete_secret(secret_id: SecretId) -> str:
    """Delete secret."""
    return await _run(lambda c: c.delete_entity("secret", secret_id))


@mcp.tool
async def worldanvil_get_history(history_id: HistoryId) -> str:
    """Get history event by ID."""
    return await _run(lambda c: c.get_entity("history", history_id))


@mcp.tool
async def worldanvil_list_histories(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List history events in a world."""
    return await _run(lambda c: c.list_entities("history", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_history(title: Title, world_id: WorldId, content: MarkdownContent = None) -> str:
    """Create history event. Markdown in content is converted to BBCode."""
    data = payloads.titled_content(title, content, world=world_id)
    return await _run(lambda c: c.create_entity("history", data))


@mcp.tool
async def worldanvil_update_history(history_id: HistoryId, title: OptionalTitle = None, content: MarkdownContent = None) -> str:
    """Update history event. Markdown in content is converted to BBCode."""
    data = payloads.titled_content(title, content)
    return await _run(lambda c: c.update_entity("history", history_id, data))


@mcp.tool
async def worldanvil_delete_history(history_id: HistoryId) -> str:
    """Delete history event."""
    return await _run(lambda c: c.delete_entity("history", history_id))


# ----------------------------------------------------------------------
# Maps, markers & timelines
# ----------------------------------------------------------------------

MapId = Annotated[str, Field(description="Map ID")]
MarkerId = Annotated[str, Field(description="Marker ID")]
TimelineId = Annotated[str, Field(description="Timeline ID")]


@mcp.tool
async def worldanvil_get_map(map_id: MapId) -> str:
    """Get map by ID."""
    return await _run(lambda c: c.get_entity("map", map_id))


@mcp.tool
async def worldanvil_list_maps(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List maps in a world."""
    return await _run(lambda c: c.list_entities("map", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_map(title: Title, world_id: WorldId) -> str:
    """Create map."""
    return await _run(lambda c: c.create_entity("map", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_map(map_id: MapId, title: OptionalTitle = None) -> str:
    """Update map."""
    return await _run(lambda c: c.update_entity("map", map_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_map(map_id: MapId) -> str:
    """Delete map."""
    return await _run(lambda c: c.delete_entity("map", map_id))


@mcp.tool
async def worldanvil_get_marker(marker_id: MarkerId) -> str:
    """Get map marker by ID."""
    return await _run(lambda c: c.get_entity("marker", marker_id))


@mcp.tool
async def worldanvil_list_markers(map_id: MapId, offset: Offset = None, limit: Limit = None) -> str:
    """List markers on a map."""
    return await _run(lambda c: c.list_entities("marker", map_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_marker(title: Title, map_id: MapId) -> str:
    """Create map marker."""
    return await _run(lambda c: c.create_entity("marker", payloads.marker_payload(title, map_id)))


@mcp.tool
async def worldanvil_update_marker(marker_id: MarkerId, title: OptionalTitle = None) -> str:
    """Update map marker."""
    return await _run(lambda c: c.update_entity("marker", marker_id, payloads.marker_payload(title)))


@mcp.tool
async def worldanvil_delete_marker(marker_id: MarkerId) -> str:
    """Delete map marker."""
    return await _run(lambda c: c.delete_entity("marker", marker_id))


@mcp.tool
async def worldanvil_get_timeline(timeline_id: TimelineId) -> str:
    """Get timeline by ID."""
    return await _run(lambda c: c.get_entity("timeline", timeline_id))


@mcp.tool
async def worldanvil_list_timelines(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List timelines in a world."""
    return await _run(lambda c: c.list_entities("timeline", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_timeline(title: Title, world_id: WorldId) -> str:
    """Create timeline."""
    return await _run(lambda c: c.create_entity("timeline", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_timeline(timeline_id: TimelineId, title: OptionalTitle = None) -> str:
    """Update timeline."""
    return await _run(lambda c: c.update_entity("timeline", timeline_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_timeline(timeline_id: TimelineId) -> str:
    """Delete timeline."""
    return await _run(lambda c: c.delete_entity("timeline", timeline_id))


# ----------------------------------------------------------------------
# RPG systems
# ----------------------------------------------------------------------

@mcp.tool
async def worldanvil_get_rpgsystem(
    rpgsystem_id: Annotated[str, Field(description="RPG system ID")],
) -> str:
    """Get RPG system by ID."""
    return await _run(lambda c: c.get_entity("rpgsystem", rpgsystem_id))


@mcp.tool
async def worldanvil_list_rpgsystems(offset: Offset = None, limit: Limit = None) -> str:
    """List all RPG systems."""
    return await _run(lambda c: c.list_entities("rpgsystem", offset=offset, limit=limit))


# ----------------------------------------------------------------------
# Blocks, block folders, block templates & parts
# ----------------------------------------------------------------------

BlockId = Annotated[str, Field(description="Block ID")]
BlockFolderId = Annotated[str, Field(description="Block folder ID")]
BlockTemplateId = Annotated[int, Field(description="Block template ID")]
BlockTemplatePartId = Annotated[int, Field(description="Block template part ID")]


@mcp.tool
async def worldanvil_get_block(block_id: BlockId) -> str:
    """Get a reusable content block by ID."""
    return await _run(lambda c: c.get_entity("block", block_id))


@mcp.tool
async def worldanvil_list_blocks(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List all blocks in a world."""
    return await _run(lambda c: c.list_entities("block", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_list_blocks_in_folder(blockfolder_id: BlockFolderId, offset: Offset = None, limit: Limit = None) -> str:
    """List blocks within a specific block folder."""
    return await _run(lambda c: c.list_blocks_in_folder(blockfolder_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_block(
    title: Title,
    template_id: Annotated[int, Field(description="ID of the BlockTemplate that defines the block structure")],
    folder_id: Annotated[int | None, Field(description="Optional BlockFolder ID to organize the block")] = None,
) -> str:
    """Create a new statblock/content block. Requires a BlockTemplate ID."""
    data = payloads.block_payload(title=title, template_id=template_id, folder_id=folder_id)
    return await _run(lambda c: c.create_entity("block", data))


@mcp.tool
async def worldanvil_update_block(block_id: BlockId, title: OptionalTitle = None, content: MarkdownContent = None) -> str:
    """Update an existing block. Markdown in content is converted to BBCode."""
    data = payloads.block_payload(title=title, content=content)
    return await _run(lambda c: c.update_entity("block", block_id, data))


@mcp.tool
async def worldanvil_delete_block(block_id: BlockId) -> str:
    """Delete a block."""
    return await _run(lambda c: c.delete_entity("block", block_id))


@mcp.tool
async def worldanvil_get_blockfolder(blockfolder_id: BlockFolderId) -> str:
    """Get a block folder by ID."""
    return await _run(lambda c: c.get_entity("blockfolder", blockfolder_id))


@mcp.tool
async def worldanvil_list_blockfolders(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List all block folders in a world."""
    return await _run(lambda c: c.list_entities("blockfolder", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_blockfolder(title: Title, world_id: WorldId) -> str:
    """Create a new block folder."""
    return await _run(lambda c: c.create_entity("blockfolder", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_blockfolder(blockfolder_id: BlockFolderId, title: OptionalTitle = None) -> str:
    """Update a block folder."""
    return await _run(lambda c: c.update_entity("blockfolder", blockfolder_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_blockfolder(blockfolder_id: BlockFolderId) -> str:
    """Delete a block folder."""
    return await _run(lambda c: c.delete_entity("blockfolder", blockfolder_id))


@mcp.tool
async def worldanvil_get_blocktemplate(template_id: BlockTemplateId) -> str:
    """Get a block template by ID. Block templates define the fields of statblocks."""
    return await _run(lambda c: c.get_entity("blocktemplate", template_id))


@mcp.tool
async def worldanvil_list_blocktemplates(
    user_id: Annotated[str, Field(description="User ID (from get_identity)")],
    offset: Offset = None,
    limit: Limit = None,
) -> str:
    """List all block templates belonging to a user."""
    return await _run(lambda c: c.list_entities("blocktemplate", user_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_blocktemplate(title: Annotated[str, Field(description="Template name")]) -> str:
    """Create a new block template."""
    return await _run(lambda c: c.create_entity("blocktemplate", payloads.titled(title)))


@mcp.tool
async def worldanvil_update_blocktemplate(template_id: BlockTemplateId, title: OptionalTitle = None) -> str:
    """Update a block template."""
    return await _run(lambda c: c.update_entity("blocktemplate", template_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_blocktemplate(template_id: BlockTemplateId) -> str:
    """Delete a block template (also deletes all its parts)."""
    return await _run(lambda c: c.delete_entity("blocktemplate", template_id))


@mcp.tool
async def worldanvil_get_blocktemplatepart(part_id: BlockTemplatePartId) -> str:
    """Get a block template part by ID."""
    return await _run(lambda c: c.get_entity("blocktemplatepart", part_id))


@mcp.tool
async def worldanvil_list_blocktemplateparts(template_id: BlockTemplateId, offset: Offset = None, limit: Limit = None) -> str:
    """List all parts in a block template.

    The upstream endpoint is unreliable; get_blocktemplate returns the parts as well.
    """
    return await _run(lambda c: c.list_entities("blocktemplatepart", template_id, offset=offset, limit=limit))


PartType = Annotated[str | None, Field(description="Field type (e.g. string, text, number, select)")]
PartDescription = Annotated[str | None, Field(description="Help text shown for the field")]
PartPlaceholder = Annotated[str | None, Field(description="Placeholder text")]
PartRequired = Annotated[bool | None, Field(description="Whether the field is mandatory")]
PartPosition = Annotated[int | None, Field(description="Sort position within the template")]
PartSection = Annotated[str | None, Field(description="Section the field belongs to")]
PartMin = Annotated[int | None, Field(description="Minimum value (numeric fields)")]
PartMax = Annotated[int | None, Field(description="Maximum value (numeric fields)")]
PartOptions = Annotated[str | None, Field(description="Options for select fields")]


@mcp.tool
async def worldanvil_create_blocktemplatepart(
    title: Title,
    type: Annotated[str, Field(description="Field type (e.g. string, text, number, select)")],
    template_id: BlockTemplateId,
    description: PartDescription = None,
    placeholder: PartPlaceholder = None,
    required: PartRequired = None,
    position: PartPosition = None,
    section: PartSection = None,
    min: PartMin = None,
    max: PartMax = None,
    options: PartOptions = None,
) -> str:
    """Create a block template part (one field of a statblock template)."""
    data = payloads.block_template_part_payload(
        title=title, part_type=type, template_id=template_id, description=description,
        placeholder=placeholder, required=required, position=position, section=section,
        min_value=min, max_value=max, options=options,
    )
    return await _run(lambda c: c.create_entity("blocktemplatepart", data))


@mcp.tool
async def worldanvil_update_blocktemplatepart(
    part_id: BlockTemplatePartId,
    title: OptionalTitle = None,
    type: PartType = None,
    description: PartDescription = None,
    placeholder: PartPlaceholder = None,
    required: PartRequired = None,
    position: PartPosition = None,
    section: PartSection = None,
    min: PartMin = None,
    max: PartMax = None,
    options: PartOptions = None,
) -> str:
    """Update a block template part."""
    data = payloads.block_template_part_payload(
        title=title, part_type=type, description=description, placeholder=placeholder,
        required=required, position=position, section=section,
        min_value=min, max_value=max, options=options,
    )
    return await _run(lambda c: c.update_entity("blocktemplatepart", part_id, data))


@mcp.tool
async def worldanvil_delete_blocktemplatepart(part_id: BlockTemplatePartId) -> str:
    """Delete a block template part."""
    return await _run(lambda c: c.delete_entity("blocktemplatepart", part_id))


# ----------------------------------------------------------------------
# Manuscripts, canvases & subscriber groups
# ----------------------------------------------------------------------

ManuscriptId = Annotated[str, Field(description="Manuscript ID")]
CanvasId = Annotated[str, Field(description="Canvas ID")]
SubscriberGroupId = Annotated[str, Field(description="Subscriber group ID")]


@mcp.tool
async def worldanvil_get_manuscript(manuscript_id: ManuscriptId) -> str:
    """Get manuscript by ID."""
    return await _run(lambda c: c.get_entity("manuscript", manuscript_id))


@mcp.tool
async def worldanvil_list_manuscripts(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List manuscripts in a world."""
    return await _run(lambda c: c.list_entities("manuscript", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_manuscript(title: Title, world_id: WorldId) -> str:
    """Create manuscript."""
    return await _run(lambda c: c.create_entity("manuscript", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_manuscript(manuscript_id: ManuscriptId, title: OptionalTitle = None) -> str:
    """Update manuscript."""
    return await _run(lambda c: c.update_entity("manuscript", manuscript_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_manuscript(manuscript_id: ManuscriptId) -> str:
    """Delete manuscript."""
    return await _run(lambda c: c.delete_entity("manuscript", manuscript_id))


@mcp.tool
async def worldanvil_get_canvas(canvas_id: CanvasId) -> str:
    """Get canvas (visual board) by ID."""
    return await _run(lambda c: c.get_entity("canvas", canvas_id))


@mcp.tool
async def worldanvil_list_canvases(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List canvases in a world."""
    return await _run(lambda c: c.list_entities("canvas", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_canvas(
    title: Title,
    world_id: WorldId,
    data: Annotated[dict[str, Any] | None, Field(description="Whiteboard content (defaults to an empty board)")] = None,
) -> str:
    """Create canvas."""
    body = payloads.canvas_payload(title, world_id, data)
    return await _run(lambda c: c.create_entity("canvas", body))


@mcp.tool
async def worldanvil_update_canvas(canvas_id: CanvasId, title: OptionalTitle = None) -> str:
    """Update canvas."""
    return await _run(lambda c: c.update_entity("canvas", canvas_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_canvas(canvas_id: CanvasId) -> str:
    """Delete canvas."""
    return await _run(lambda c: c.delete_entity("canvas", canvas_id))


@mcp.tool
async def worldanvil_get_subscribergroup(subscribergroup_id: SubscriberGroupId) -> str:
    """Get subscriber group by ID."""
    return await _run(lambda c: c.get_entity("subscribergroup", subscribergroup_id))


@mcp.tool
async def worldanvil_list_subscribergroups(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List subscriber groups in a world."""
    return await _run(lambda c: c.list_entities("subscribergroup", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_subscribergroup(title: Title, world_id: WorldId) -> str:
    """Create subscriber group."""
    return await _run(lambda c: c.create_entity("subscribergroup", payloads.titled(title, world=world_id)))


@mcp.tool
async def worldanvil_update_subscribergroup(subscribergroup_id: SubscriberGroupId, title: OptionalTitle = None) -> str:
    """Update subscriber group."""
    return await _run(lambda c: c.update_entity("subscribergroup", subscribergroup_id, payloads.titled(title)))


@mcp.tool
async def worldanvil_delete_subscribergroup(subscribergroup_id: SubscriberGroupId) -> str:
    """Delete subscriber group."""
    return await _run(lambda c: c.delete_entity("subscribergroup", subscribergroup_id))


# ----------------------------------------------------------------------
# Variable collections & variables
# ----------------------------------------------------------------------

CollectionId = Annotated[str, Field(description="Variable collection ID")]
VariableId = Annotated[str, Field(description="Variable ID")]


@mcp.tool
async def worldanvil_get_variablecollection(collection_id: CollectionId) -> str:
    """Get variable collection by ID."""
    return await _run(lambda c: c.get_entity("variablecollection", collection_id))


@mcp.tool
async def worldanvil_list_variablecollections(world_id: WorldId, offset: Offset = None, limit: Limit = None) -> str:
    """List variable collections in a world."""
    return await _run(lambda c: c.list_entities("variablecollection", world_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_variablecollection(
    title: Title,
    world_id: WorldId,
    description: Annotated[str | None, Field(description="Collection description")] = None,
    prefix: Annotated[str | None, Field(description="Prefix used when referencing variables")] = None,
) -> str:
    """Create variable collection."""
    data = payloads.variable_collection_payload(title, world_id, description, prefix)
    return await _run(lambda c: c.create_entity("variablecollection", data))


@mcp.tool
async def worldanvil_update_variablecollection(
    collection_id: CollectionId,
    title: OptionalTitle = None,
    description: Annotated[str | None, Field(description="Collection description")] = None,
    prefix: Annotated[str | None, Field(description="Prefix used when referencing variables")] = None,
) -> str:
    """Update variable collection."""
    data = payloads.variable_collection_payload(title, description=description, prefix=prefix)
    return await _run(lambda c: c.update_entity("variablecollection", collection_id, data))


@mcp.tool
async def worldanvil_delete_variablecollection(collection_id: CollectionId) -> str:
    """Delete variable collection."""
    return await _run(lambda c: c.delete_entity("variablecollection", collection_id))


@mcp.tool
async def worldanvil_get_variable(variable_id: VariableId) -> str:
    """Get variable by ID."""
    return await _run(lambda c: c.get_entity("variable", variable_id))


@mcp.tool
async def worldanvil_list_variables(collection_id: CollectionId, offset: Offset = None, limit: Limit = None) -> str:
    """List variables in a collection."""
    return await _run(lambda c: c.list_entities("variable", collection_id, offset=offset, limit=limit))


@mcp.tool
async def worldanvil_create_variable(
    collection_id: CollectionId,
    world_id: WorldId,
    k: Annotated[str, Field(description="Variable key")],
    v: Annotated[str, Field(description="Variable value")],
    type: Annotated[str, Field(description="Variable type (e.g. string, number)")],
) -> str:
    """Create variable."""
    data = payloads.variable_payload(key=k, value=v, var_type=type, collection_id=collection_id, world_id=world_id)
    return await _run(lambda c: c.create_entity("variable", data))


@mcp.tool
async def worldanvil_update_variable(
    variable_id: VariableId,
    k: Annotated[str | None, Field(description="Variable key")] = None,
    v: Annotated[str | None, Field(description="Variable value")] = None,
    type: Annotated[str | None, Field(description="Variable type")] = None,
) -> str:
    """Update variable."""
    data = payloads.variable_payload(key=k, value=v, var_type=type)
    return await _run(lambda c: c.update_entity("variable", variable_id, data))


@mcp.tool
async def worldanvil_delete_variable(variable_id: VariableId) -> str:
    """Delete variable."""
    return await _run(lambda c: c.delete_entity("variable", variable_id))


logger.debug("✅ All tools registered. World Anvil MCP server ready 🌍")

def main() -> None:
    """Main entry point for the World Anvil MCP Server."""
    mcp.run()

if __name__ == "__main__":
    main()
