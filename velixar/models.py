"""
Data models exchanged with the Velixar memory service.

Attribute names are snake_case; the wire format uses the camelCase aliases
(``userId``, ``createdAt``, ...). Response models are built with
``from_body``, which skips validation: the client trusts the server's shape,
keeps fields it does not know about, and never coerces values.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from typing_extensions import Self


class ResponseModel(BaseModel):
    """Base for models decoded from service responses."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @classmethod
    def from_body(cls, data: dict[str, Any]) -> "Self":
        """Wrap a decoded JSON body as-is, without validation."""
        return cls.model_construct(**data)


class Memory(ResponseModel):
    """A stored unit of text content, as returned by the service."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Server-assigned identifier")
    content: str
    tier: int | None = Field(
        default=None, description="Importance/retention hint, interpreted by the server"
    )
    memory_type: str | None = Field(default=None, alias="type")
    tags: list[str] | None = None
    metadata: dict[str, Any] | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


def _memory_from_body(value: Any) -> Any:
    return Memory.from_body(value) if isinstance(value, dict) else value


class StoreMemoryRequest(BaseModel):
    """Body of ``POST /memory``. Options left as ``None`` are not sent."""

    model_config = ConfigDict(populate_by_name=True)

    content: str
    user_id: str | None = Field(default=None, alias="userId")
    tier: int | None = None
    memory_type: str | None = Field(default=None, alias="type")
    tags: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class StoreMemoryResponse(ResponseModel):
    id: str


class SearchResult(ResponseModel):
    """Memories matching a search query.

    ``count`` is reported by the server and is not checked against
    ``len(memories)``.
    """

    memories: list[Memory] = Field(default_factory=list)
    count: int = 0

    @classmethod
    def from_body(cls, data: dict[str, Any]) -> "Self":
        values = dict(data)
        if isinstance(values.get("memories"), list):
            values["memories"] = [_memory_from_body(m) for m in values["memories"]]
        return cls.model_construct(**values)


class GetMemoryResponse(ResponseModel):
    memory: Memory

    @classmethod
    def from_body(cls, data: dict[str, Any]) -> "Self":
        values = dict(data)
        if "memory" in values:
            values["memory"] = _memory_from_body(values["memory"])
        return cls.model_construct(**values)


class DeleteMemoryResponse(ResponseModel):
    deleted: bool


class TelemetryEvent(BaseModel):
    """Anonymous usage beacon sent after each request when telemetry is enabled."""

    sdk: str = "python"
    v: str
    m: str = Field(description="Route template with identifiers redacted")
    ok: bool
    ms: int = Field(description="Elapsed time in milliseconds")
