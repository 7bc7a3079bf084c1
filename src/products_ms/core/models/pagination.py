"""Offset pagination request."""

from pydantic import BaseModel, ConfigDict, Field


class PaginationRequest(BaseModel):
    """Page-based listing parameters; both default when absent."""

    model_config = ConfigDict(extra="forbid")

    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=10, ge=1, description="Rows per page")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit
