"""Canonical Pydantic models shared across all scardoc modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Document models** -- produced by the parsers, combined by the merger, and
serialised as the canonical JSON document:
    :class:`Parameter`, :class:`FunctionDoc`, :class:`Category`,
    :class:`EnumValue`, :class:`EnumDef`, :class:`GlobalDef`, and
    :class:`CanonicalDocument`.

**Configuration models** -- serialised as JSON in the user's config directory
or in a project-local ``.scardoc.json``:
    :class:`ParserConfig`, :class:`DiscoveryConfig`, :class:`DumpConfig`,
    :class:`MergeConfig`, :class:`OutputConfig`, and :class:`ScardocConfig`.

Document models are frozen: once a parser has built a record it is never
changed in place. The merger derives updated copies with ``model_copy``.

On the wire, ``None`` fields and empty lists are omitted. Input accepts both
the current field names and the names used by earlier scardoc releases
(``description_short``, ``source_file``, ``arg_name`` ...), so older
documents can still be merged.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)


class _Record(BaseModel):
    """Frozen base for document records that omits empty values on output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None and v != []}


# --- Functions ---


class Parameter(_Record):
    """A single documented function argument.

    Produced by :func:`~scardoc.parser.arguments.parse_arguments` from an
    ``@args`` directive. Order within :attr:`FunctionDoc.parameters` follows
    declaration order.
    """

    name: str = Field(validation_alias=AliasChoices("name", "arg_name"))
    type: str = Field(validation_alias=AliasChoices("type", "arg_type"))
    description: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("description", "arg_description")
    )
    required: bool = Field(
        default=True, validation_alias=AliasChoices("required", "arg_required")
    )


class FunctionDoc(_Record):
    """Documentation for one script function.

    ``name`` is the identity of the record: it is unique within a
    :class:`CanonicalDocument` and drives both categorisation and merging.

    Example::

        FunctionDoc(
            name="Util_ScarPos",
            short_description="Converts position",
            parameters=[Parameter(name="xpos", type="Real")],
            source_origin="scar/util.scar",
        )
    """

    name: str
    short_description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("short_description", "description_short"),
    )
    extended_description: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("extended_description", "description_extended"),
    )
    example: Optional[str] = None
    return_type: Optional[str] = None
    return_description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    source_origin: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("source_origin", "source_file")
    )
    groups: list[str] = Field(default_factory=list)


class Category(_Record):
    """A named group of functions.

    Categories are a view recomputed by :func:`~scardoc.categorizer.categorize`
    from a flat function collection; they are never edited by hand.
    """

    name: str = Field(
        validation_alias=AliasChoices("name", "category_name"),
        serialization_alias="category_name",
    )
    functions: list[FunctionDoc] = Field(
        default_factory=list,
        validation_alias=AliasChoices("functions", "category_functions"),
        serialization_alias="category_functions",
    )


# --- Enums and globals ---


class EnumValue(_Record):
    """One member of an :class:`EnumDef`."""

    name: str
    value: Optional[str] = None


class EnumDef(_Record):
    """An enum-like declaration; ``values`` carries no ordering guarantee."""

    name: str
    values: list[EnumValue] = Field(default_factory=list)


class GlobalDef(_Record):
    """A global variable exposed to scripts.

    The ``type`` field is written as ``global_type`` in the canonical JSON.
    """

    name: str
    value: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("type", "global_type"),
        serialization_alias="global_type",
    )


# --- Document ---


class CanonicalDocument(_Record):
    """The unified documentation document exchanged between subsystems.

    Produced by :func:`~scardoc.generator.generate_document`,
    :func:`~scardoc.parser.dump.parse_dump`, and
    :func:`~scardoc.merger.merge_documents`. Serialise with :meth:`to_wire`
    and read back with :meth:`from_wire`.

    Invariants: function names are unique across all categories, every
    function sits in exactly one category, no category is empty, and enum
    and global names are unique.
    """

    categories: list[Category] = Field(default_factory=list)
    enums: list[EnumDef] = Field(default_factory=list)
    globals: list[GlobalDef] = Field(default_factory=list)

    def iter_functions(self) -> Iterator[FunctionDoc]:
        """Yield every function across all categories in document order."""
        for category in self.categories:
            yield from category.functions

    def function_count(self) -> int:
        return sum(len(category.functions) for category in self.categories)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-compatible interchange representation."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> CanonicalDocument:
        """Validate an interchange dict (current or legacy field names)."""
        return cls.model_validate(data)


# --- Configuration ---


class ParserConfig(BaseModel):
    """Settings for the annotation block parser."""

    marker: str = Field(
        default="--? ",
        min_length=1,
        description="Prefix that marks a documentation comment line",
    )
    strict: bool = Field(
        default=False,
        description="Abort a whole source unit when an @args directive is malformed",
    )


class DiscoveryConfig(BaseModel):
    """Rules for finding source units below a directory."""

    extensions: list[str] = Field(
        default_factory=lambda: [".scar"],
        description="File suffixes treated as source units",
    )
    exclude: list[str] = Field(
        default_factory=list, description="Gitignore-style patterns to skip"
    )
    respect_gitignore: bool = Field(
        default=True, description="Skip files matched by the root .gitignore"
    )


class DumpConfig(BaseModel):
    """Settings for the dump importer."""

    dedupe_first_enum_value: bool = Field(
        default=False,
        description="Do not repeat the first value recorded for each enum",
    )


class MergeConfig(BaseModel):
    """Settings for folding several documents."""

    cumulative: bool = Field(
        default=False,
        description="Carry the running merge result forward instead of merging adjacent pairs",
    )


class OutputConfig(BaseModel):
    """Default output preferences."""

    path: str = Field(
        default="scardoc.json", description="Where generated documents are written"
    )
    indent: int = Field(default=2, ge=0, description="JSON indentation")
    format: str = Field(
        default="auto", description="Diagnostic output format: auto, json, plain, rich"
    )


class ScardocConfig(BaseModel):
    """Effective configuration, persisted at ``~/.config/scardoc/config.json``.

    Loaded by :func:`~scardoc.config.load_global_config` and layered with the
    project config and environment by :func:`~scardoc.config.resolve_config`.
    """

    parser: ParserConfig = Field(default_factory=ParserConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    dump: DumpConfig = Field(default_factory=DumpConfig)
    merge: MergeConfig = Field(default_factory=MergeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
