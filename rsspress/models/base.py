"""Base model for models persisted with camelCase attribute names."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    """Model that reads and writes its camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict using the public (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
