"""Pydantic models describing the export document."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any, Final

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

EXPORT_FORMAT_VERSION: Final[str] = "1.0.0"


class TransferBaseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class LevelCounts(TransferBaseModel):
    atom: int = 0
    molecule: int = 0
    organism: int = 0


class StatusCounts(TransferBaseModel):
    draft: int = 0
    ready: int = 0


class ExportMetadata(TransferBaseModel):
    version: str = EXPORT_FORMAT_VERSION
    exported_at: datetime
    total_components: int
    components_by_level: LevelCounts
    components_by_status: StatusCounts


class ExportDocument(TransferBaseModel):
    components: list[dict[str, Any]]
    metadata: ExportMetadata | None = None

    def to_payload(self) -> dict[str, object]:
        payload = self.model_dump(mode="json", by_alias=True)
        if self.metadata is None:
            payload.pop("metadata", None)
        return payload
