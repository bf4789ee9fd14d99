"""Result record of a resolution attempt."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

UNKNOWN_SOURCE = "Unknown"


class ResourceInfo(BaseModel):
    """Outcome of resolving one resource path.

    Attributes:
        search_path: The path exactly as the caller passed it
        location: URI of the resolved resource, None when unresolved
        source_entity: Name of the loader that produced the result
    """

    model_config = ConfigDict(frozen=True)

    search_path: str = Field(..., description="Original, unmodified input path")
    location: str | None = Field(None, description="Resolved resource URI")
    source_entity: str = Field(UNKNOWN_SOURCE, description="Loader that produced the result")

    @property
    def is_resolved(self) -> bool:
        return self.location is not None

    @property
    def url(self) -> str | None:
        """Alias of ``location``."""
        return self.location

    @classmethod
    def unresolved(cls, search_path: str, source_entity: str = UNKNOWN_SOURCE) -> "ResourceInfo":
        return cls(search_path=search_path, location=None, source_entity=source_entity)

    def to_dict(self) -> dict[str, str | bool | None]:
        """Convert to a plain dict including the derived ``resolved`` flag."""
        return {
            "search_path": self.search_path,
            "resolved": self.is_resolved,
            "location": self.location,
            "source_entity": self.source_entity,
        }
