from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from slither_sync.domain.value_objects import SyncState


class SourceMapping(BaseModel):
    """Byte and line range of an element inside one source file.

    Keys the analyzer emits beyond the ones modelled here (``filename_short``,
    ``filename_used``, ``is_dependency``...) are kept as extras so a persisted
    document round-trips unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    start: int = 0
    length: int = 0
    filename_absolute: str = ""
    filename_relative: str = ""
    lines: list[int] = Field(default_factory=list)
    starting_column: int = 0
    ending_column: int = 0
    source_hash: str | None = Field(default=None, alias="_ext_source_hash")

    @property
    def is_mapped(self) -> bool:
        """True if the mapping points at a file."""
        return bool(self.filename_relative or self.filename_absolute)


class FindingElement(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = ""
    element_type: str = Field(default="", alias="type")
    source_mapping: SourceMapping | None = None
    type_specific_fields: dict[str, Any] | None = None

    @property
    def mapping(self) -> SourceMapping | None:
        """Source mapping if it points at a file, else None."""
        if self.source_mapping is not None and self.source_mapping.is_mapped:
            return self.source_mapping
        return None


class Finding(BaseModel):
    """One issue reported by the analyzer.

    Only ``in_sync`` and the elements' ``source_hash`` change after creation.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    check: str = ""
    confidence: str = ""
    impact: str = ""
    description: str = ""
    elements: list[FindingElement] = Field(default_factory=list)
    in_sync: SyncState = Field(default=SyncState.UNKNOWN, alias="_ext_in_sync")

    @field_validator("in_sync", mode="before")
    @classmethod
    def _coerce_in_sync(cls, value: Any) -> Any:
        if value is None:
            return SyncState.UNKNOWN
        if isinstance(value, bool):
            return SyncState.IN_SYNC if value else SyncState.OUT_OF_SYNC
        return value

    @field_serializer("in_sync")
    def _serialize_in_sync(self, value: SyncState) -> bool | None:
        if value == SyncState.UNKNOWN:
            return None
        return value == SyncState.IN_SYNC

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Finding":
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted document shape; absent fields are omitted."""
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        if data.get("_ext_in_sync") is None:
            data.pop("_ext_in_sync", None)
        return data

    def content_dict(self) -> dict[str, Any]:
        """Analyzer-provided content only, without the engine's sync state."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=True,
            exclude={
                "in_sync": True,
                "elements": {"__all__": {"source_mapping": {"source_hash"}}},
            },
        )

    def mapped_elements(self) -> list[tuple[int, SourceMapping]]:
        """(element index, mapping) for every element that maps to a file."""
        return [(i, m) for i, e in enumerate(self.elements) if (m := e.mapping) is not None]

    def parent_index(self, element_index: int) -> int | None:
        """Index of the element's enclosing element within ``elements``.

        The analyzer embeds a copy of the parent under
        ``type_specific_fields.parent``; it is matched back by name and type.
        """
        if not 0 <= element_index < len(self.elements):
            return None
        fields = self.elements[element_index].type_specific_fields or {}
        parent = fields.get("parent")
        if not isinstance(parent, dict):
            return None

        for i, candidate in enumerate(self.elements):
            if i == element_index:
                continue
            if candidate.name == parent.get("name") and candidate.element_type == parent.get(
                "type"
            ):
                return i
        return None
