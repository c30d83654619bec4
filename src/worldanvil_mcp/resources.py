"""
World Anvil resource table.

Every resource kind of the Boromir API follows the same conventions:
- GET    /<resource>?id=<id>&granularity=<n>   fetch one
- PUT    /<resource>                           create
- PATCH  /<resource>?id=<id>                   update
- DELETE /<resource>?id=<id>                   delete
- POST   /<parent>/<resources>?id=<parent id>  list (paginated body)

Only the list endpoint and the parent that scopes it differ between kinds,
so they are described here as data instead of one method per endpoint.
"""

from pydantic import BaseModel, Field

from .errors import UnknownResourceError


class ResourceSpec(BaseModel):
    """Endpoint layout for one World Anvil resource kind."""

    name: str = Field(description="Resource name, also the singular endpoint path")
    list_path: str = Field(description="Endpoint that lists resources of this kind")
    list_parent: str | None = Field(
        default=None,
        description="Resource whose id scopes the list call (None for global lists)",
    )
    granularity: int | None = Field(
        default=2,
        description="Granularity requested on fetch (2 returns full content)",
    )

    @property
    def path(self) -> str:
        return f"/{self.name}"


_RESOURCES = [
    ResourceSpec(name="world", list_path="/user/worlds", list_parent="user"),
    ResourceSpec(name="article", list_path="/world/articles", list_parent="world"),
    ResourceSpec(name="category", list_path="/world/categories", list_parent="world"),
    ResourceSpec(name="image", list_path="/world/images", list_parent="world"),
    ResourceSpec(name="notebook", list_path="/world/notebooks", list_parent="world"),
    ResourceSpec(name="notesection", list_path="/notebook/notesections", list_parent="notebook"),
    ResourceSpec(name="note", list_path="/notesection/notes", list_parent="notesection"),
    ResourceSpec(name="secret", list_path="/world/secrets", list_parent="world"),
    ResourceSpec(name="map", list_path="/world/maps", list_parent="world"),
    ResourceSpec(name="marker", list_path="/map/markers", list_parent="map"),
    ResourceSpec(name="timeline", list_path="/world/timelines", list_parent="world"),
    ResourceSpec(name="history", list_path="/world/histories", list_parent="world"),
    ResourceSpec(name="rpgsystem", list_path="/rpgsystems", granularity=None),
    ResourceSpec(name="block", list_path="/world/blocks", list_parent="world"),
    ResourceSpec(name="blockfolder", list_path="/world/blockfolders", list_parent="world"),
    ResourceSpec(name="blocktemplate", list_path="/user/blocktemplates", list_parent="user"),
    ResourceSpec(
        name="blocktemplatepart",
        list_path="/blocktemplate/blocktemplateparts",
        list_parent="blocktemplate",
    ),
    ResourceSpec(name="manuscript", list_path="/world/manuscripts", list_parent="world"),
    ResourceSpec(name="canvas", list_path="/world/canvases", list_parent="world"),
    ResourceSpec(name="subscribergroup", list_path="/world/subscribergroups", list_parent="world"),
    # Swagger documents /variable_collection but the live API uses /variablecollection
    ResourceSpec(
        name="variablecollection",
        list_path="/world/variablecollections",
        list_parent="world",
    ),
    ResourceSpec(
        name="variable",
        list_path="/variablecollection/variables",
        list_parent="variablecollection",
    ),
]

RESOURCES: dict[str, ResourceSpec] = {spec.name: spec for spec in _RESOURCES}


def get_resource(name: str) -> ResourceSpec:
    """Look up a resource by name.

    Raises:
        UnknownResourceError: If the name is not a known resource kind.
    """
    try:
        return RESOURCES[name]
    except KeyError:
        raise UnknownResourceError(name) from None
