"""
Shared pydantic configuration for persisted records.

Records keep snake_case attribute names in Python and camelCase field
names in their JSON form (``parentId``, ``isSubfolder``, ``createdAt``).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base class for every persisted record and patch."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_record(self) -> dict:
        """Return the JSON-compatible form stored in a collection."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
