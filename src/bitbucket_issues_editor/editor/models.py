"""Pydantic models for a Bitbucket issue export.

Only the fields the editor reads or rewrites are declared. Everything else is
kept as extra data, and every model remembers the key order it was loaded with,
so that a loaded export serializes back exactly as it came in.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    StrictInt,
    model_serializer,
    model_validator,
)

# Top-level members that are carried through unchanged and never examined.
PASSTHROUGH_MEMBERS: tuple[str, ...] = (
    "milestones",
    "versions",
    "meta",
    "components",
    "attachments",
)


class _ExportObject(BaseModel):
    """An export object that dumps its keys in the order they were loaded."""

    model_config = ConfigDict(extra="allow")

    _key_order: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: ModelWrapValidatorHandler[Self]) -> Self:
        model = handler(data)
        if isinstance(data, dict):
            model._key_order = tuple(data)
        return model

    @model_serializer(mode="wrap")
    def _restore_key_order(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        dumped = handler(self)
        ordered = {key: dumped[key] for key in self._key_order if key in dumped}
        # Keys the input did not have (e.g. models built in code) keep dump order.
        ordered.update((key, value) for key, value in dumped.items() if key not in ordered)
        return ordered


class Issue(_ExportObject):
    """A tracked ticket."""

    id: StrictInt
    title: str


class Comment(_ExportObject):
    """A remark attached to exactly one issue."""

    id: StrictInt
    # None once a reference could not be renumbered.
    issue: StrictInt | None


class Log(_ExportObject):
    """An activity entry. Logs have no id of their own."""

    issue: StrictInt | None


class IssueExport(_ExportObject):
    """The whole export record."""

    issues: list[Issue]
    comments: list[Comment]
    logs: list[Log]

    milestones: Any = Field(default=None)
    versions: Any = Field(default=None)
    meta: Any = Field(default=None)
    components: Any = Field(default=None)
    attachments: Any = Field(default=None)

    def issue_ids(self) -> list[int]:
        return [issue.id for issue in self.issues]

    def to_json_payload(self) -> dict[str, Any]:
        """Dump to plain JSON data, omitting passthrough members the input did not have."""

        missing = {name for name in PASSTHROUGH_MEMBERS if name not in self.model_fields_set}
        return self.model_dump(mode="json", exclude=missing)
