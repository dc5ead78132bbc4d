"""Scratch 3 project loading.

Decodes an .sb3 archive or a bare project.json into the read-only
project model.

Decoding rules:
    - Inputs '[kind, value, shadow?]': kind 1 keeps the shadow arm, kinds 2
      and 3 keep the expression arm; SUBSTACK inputs and empty slots become
      OptionalBlockRef.
    - Input primitives: numbers and text -> Literal, colour -> Color,
      broadcast -> BroadcastRef, variable -> VariableRef, list -> ListRef.
      A bare string is a block id.
    - procedures_call inputs named by the 'argumentids' mutation are gathered
      into a single ProcedureArguments attribute.
    - Menu shadow blocks (shadow, no inputs, no mutation, some field) are
      folded into the input that owns them and are not blocks of the project.
    - Top-level variable/list reporters stored as primitives become
      data_variable / data_listcontents blocks.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from scratchgraph.constants import MAX_PROJECT_SIZE, PROJECT_JSON_MEMBER
from scratchgraph.diagnostics import ErrorTemplate, ProjectLoadError
from scratchgraph.enums import InputShadow, PrimitiveKind
from scratchgraph.project.model import (
    ArgumentDefinition,
    ArgumentDefinitions,
    ArgumentReporterName,
    AttributeValue,
    Block,
    BlockAttribute,
    BlockRef,
    BroadcastRef,
    Color,
    DropdownMenu,
    DropdownValue,
    Expression,
    ListDeclaration,
    ListField,
    ListRef,
    Literal,
    OptionalBlockRef,
    ProcedureArguments,
    ProcedureCode,
    Project,
    ShadowOrExpression,
    Target,
    VariableDeclaration,
    VariableField,
    VariableRef,
)
from scratchgraph.project.types import BlockId, ProjectSource

__all__ = ["load_project", "parse_project"]

logger = logging.getLogger(__name__)

_LITERAL_KINDS = frozenset({
    PrimitiveKind.MATH_NUM,
    PrimitiveKind.POSITIVE_NUM,
    PrimitiveKind.WHOLE_NUM,
    PrimitiveKind.INTEGER_NUM,
    PrimitiveKind.ANGLE_NUM,
    PrimitiveKind.TEXT,
})

_ARGUMENT_REPORTER_PREFIX = "argument_reporter_"

# Mutation keys that carry no analysis-relevant data
_IGNORED_MUTATION_KEYS = frozenset({"tagName", "children"})


def _invalid(location: str, reason: str) -> ProjectLoadError:
    return ProjectLoadError(ErrorTemplate.project_structure_invalid(location, reason))


def _expect_mapping(value: object, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise _invalid(location, f"expected an object, got {type(value).__name__}")
    return value


def _optional_id(value: object, location: str) -> BlockId | None:
    if value is None or isinstance(value, str):
        return value
    raise _invalid(location, f"expected a block id or null, got {value!r}")


def _json_string_list(value: object, location: str) -> list[str]:
    """Decode a mutation entry holding a JSON-encoded list of strings."""
    if isinstance(value, str):
        try:
            value = json.loads(value) if value else []
        except ValueError as e:
            raise _invalid(location, f"malformed JSON list: {e}") from e
    if not isinstance(value, list):
        raise _invalid(location, "expected a list")
    return [str(item) for item in value]


def _is_menu_shadow(raw: object) -> bool:
    return (
        isinstance(raw, Mapping)
        and raw.get("shadow") is True
        and not raw.get("inputs")
        and "mutation" not in raw
        and isinstance(raw.get("fields"), Mapping)
        and bool(raw["fields"])
    )


def _fold_menu_shadow(raw: Mapping[str, Any]) -> AttributeValue:
    opcode = str(raw.get("opcode", ""))
    first_field = next(iter(raw["fields"].values()))
    value = first_field[0] if isinstance(first_field, list) and first_field else first_field
    if opcode.startswith(_ARGUMENT_REPORTER_PREFIX):
        return ArgumentReporterName(str(value))
    return DropdownMenu(opcode=opcode, value=str(value))


def _decode_primitive(raw: list[Any], location: str) -> AttributeValue:
    """Decode a compressed input primitive ([kind, value, id?])."""
    if len(raw) < 2:
        raise _invalid(location, f"primitive too short: {raw!r}")
    kind = raw[0]
    if not isinstance(kind, int):
        raise _invalid(location, f"primitive kind is not an integer: {kind!r}")
    if kind in _LITERAL_KINDS:
        return Literal(raw[1])
    if kind == PrimitiveKind.COLOR_PICKER:
        return Color(str(raw[1]))
    if kind in (PrimitiveKind.BROADCAST, PrimitiveKind.VARIABLE, PrimitiveKind.LIST):
        if len(raw) < 3:
            raise _invalid(location, f"reference primitive without id: {raw!r}")
        name, ref_id = str(raw[1]), str(raw[2])
        match kind:
            case PrimitiveKind.BROADCAST:
                return BroadcastRef(id=ref_id, name=name)
            case PrimitiveKind.VARIABLE:
                return VariableRef(id=ref_id, name=name)
            case _:
                return ListRef(id=ref_id, name=name)
    raise _invalid(location, f"unknown primitive kind {kind!r}")


class _TargetDecoder:
    """Decodes one target: its blocks, lists and variables."""

    def __init__(self, raw_target: Mapping[str, Any], index: int) -> None:
        self.name = str(raw_target.get("name", f"target {index}"))
        self._raw_target = raw_target
        self._raw_blocks = _expect_mapping(
            raw_target.get("blocks", {}), f"target {self.name!r} blocks"
        )
        self._folded: dict[BlockId, AttributeValue] = {
            block_id: _fold_menu_shadow(raw)
            for block_id, raw in self._raw_blocks.items()
            if _is_menu_shadow(raw)
        }

    def decode(self) -> Target:
        blocks = tuple(
            self._decode_block(block_id, raw)
            for block_id, raw in self._raw_blocks.items()
            if block_id not in self._folded
        )
        return Target(
            name=self.name,
            is_stage=bool(self._raw_target.get("isStage", False)),
            blocks=blocks,
            lists=self._decode_lists(),
            variables=self._decode_variables(),
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _decode_lists(self) -> tuple[ListDeclaration, ...]:
        raw_lists = _expect_mapping(
            self._raw_target.get("lists", {}), f"target {self.name!r} lists"
        )
        lists: list[ListDeclaration] = []
        for list_id, raw in raw_lists.items():
            if not isinstance(raw, list) or len(raw) < 2 or not isinstance(raw[1], list):
                raise _invalid(f"list {list_id!r}", "expected [name, items]")
            lists.append(ListDeclaration(id=list_id, name=str(raw[0]), items=tuple(raw[1])))
        return tuple(lists)

    def _decode_variables(self) -> tuple[VariableDeclaration, ...]:
        raw_variables = _expect_mapping(
            self._raw_target.get("variables", {}), f"target {self.name!r} variables"
        )
        variables: list[VariableDeclaration] = []
        for variable_id, raw in raw_variables.items():
            if not isinstance(raw, list) or len(raw) < 2:
                raise _invalid(f"variable {variable_id!r}", "expected [name, value]")
            variables.append(
                VariableDeclaration(id=variable_id, name=str(raw[0]), value=raw[1])
            )
        return tuple(variables)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _decode_block(self, block_id: BlockId, raw: object) -> Block:
        location = f"block {block_id!r}"
        if isinstance(raw, list):
            return self._decode_top_level_reporter(block_id, raw, location)
        raw = _expect_mapping(raw, location)

        opcode = raw.get("opcode")
        if not isinstance(opcode, str) or not opcode:
            raise _invalid(location, "missing opcode")

        mutation = _expect_mapping(raw.get("mutation", {}), f"{location} mutation")
        attributes = [
            *self._decode_inputs(
                opcode,
                _expect_mapping(raw.get("inputs", {}), f"{location} inputs"),
                mutation,
                location,
            ),
            *self._decode_fields(
                opcode,
                _expect_mapping(raw.get("fields", {}), f"{location} fields"),
                location,
            ),
            *self._decode_mutation(mutation, location),
        ]

        return Block(
            id=block_id,
            opcode=opcode,
            next=_optional_id(raw.get("next"), f"{location} next"),
            parent=_optional_id(raw.get("parent"), f"{location} parent"),
            attributes=tuple(attributes),
            shadow=bool(raw.get("shadow", False)),
            top_level=bool(raw.get("topLevel", False)),
        )

    def _decode_top_level_reporter(
        self, block_id: BlockId, raw: list[Any], location: str
    ) -> Block:
        reference = _decode_primitive(raw, location)
        match reference:
            case VariableRef(id=ref_id, name=name):
                opcode, attribute = "data_variable", BlockAttribute(
                    "VARIABLE", VariableField(id=ref_id, name=name)
                )
            case ListRef(id=ref_id, name=name):
                opcode, attribute = "data_listcontents", BlockAttribute(
                    "LIST", ListField(id=ref_id, name=name)
                )
            case _:
                raise _invalid(location, "top-level primitive must be a variable or list")
        return Block(id=block_id, opcode=opcode, attributes=(attribute,), top_level=True)

    def _decode_inputs(
        self,
        opcode: str,
        inputs: Mapping[str, Any],
        mutation: Mapping[str, Any],
        location: str,
    ) -> list[BlockAttribute]:
        arguments: dict[str, Expression | None] = {}
        if opcode == "procedures_call" and "argumentids" in mutation:
            arguments = dict.fromkeys(
                _json_string_list(mutation["argumentids"], f"{location} argumentids")
            )

        attributes: list[BlockAttribute] = []
        for name, raw_input in inputs.items():
            input_location = f"{location} input {name!r}"
            value = self._decode_input(name, raw_input, input_location)
            if name in arguments:
                arguments[name] = self._as_expression(value)
            else:
                attributes.append(BlockAttribute(name, value))

        if arguments:
            attributes.append(
                BlockAttribute("ARGUMENTS", ProcedureArguments(tuple(arguments.items())))
            )
        return attributes

    def _decode_input(self, name: str, raw: object, location: str) -> AttributeValue:
        if not isinstance(raw, list) or not raw:
            raise _invalid(location, f"expected [kind, value, ...], got {raw!r}")
        kind = raw[0]
        value = raw[1] if len(raw) > 1 else None

        if name.startswith("SUBSTACK"):
            if value is None:
                return OptionalBlockRef()
            if not isinstance(value, str):
                raise _invalid(location, "substack must hold a block id")
            return OptionalBlockRef(BlockRef(value))

        if isinstance(value, str) and value in self._folded:
            return ShadowOrExpression(shadow=self._folded[value])

        match kind:
            case InputShadow.SAME_BLOCK_SHADOW:
                if value is None:
                    return OptionalBlockRef()
                return ShadowOrExpression(shadow=self._decode_value(value, location))
            case InputShadow.NO_SHADOW | InputShadow.DIFF_BLOCK_SHADOW:
                if value is None:
                    if kind == InputShadow.DIFF_BLOCK_SHADOW and len(raw) > 2:
                        shadow = [InputShadow.SAME_BLOCK_SHADOW, raw[2]]
                        return self._decode_input(name, shadow, location)
                    return OptionalBlockRef()
                expression = self._as_expression(self._decode_value(value, location))
                if expression is None:
                    raise _invalid(location, f"input does not hold an expression: {value!r}")
                return ShadowOrExpression(expression=expression)
            case _:
                raise _invalid(location, f"unknown input kind {kind!r}")

    def _decode_value(self, value: object, location: str) -> AttributeValue:
        if isinstance(value, str):
            return self._folded.get(value) or BlockRef(value)
        if isinstance(value, list):
            return _decode_primitive(value, location)
        raise _invalid(location, f"expected a block id or primitive, got {value!r}")

    @staticmethod
    def _as_expression(value: AttributeValue) -> Expression | None:
        match value:
            case ShadowOrExpression():
                return _TargetDecoder._as_expression(value.value)
            case OptionalBlockRef(block=block):
                return block
            case BlockRef() | VariableRef() | Literal() | ListRef():
                return value
            case _:
                return None

    def _decode_fields(
        self, opcode: str, fields: Mapping[str, Any], location: str
    ) -> list[BlockAttribute]:
        attributes: list[BlockAttribute] = []
        for name, raw in fields.items():
            if not isinstance(raw, list) or not raw:
                raise _invalid(f"{location} field {name!r}", "expected [value, id?]")
            value = str(raw[0])
            field_id = str(raw[1]) if len(raw) > 1 and raw[1] is not None else ""
            match name:
                case "VARIABLE":
                    decoded: AttributeValue = VariableField(id=field_id, name=value)
                case "LIST":
                    decoded = ListField(id=field_id, name=value)
                case "BROADCAST_OPTION":
                    decoded = BroadcastRef(id=field_id, name=value)
                case "VALUE" if opcode.startswith(_ARGUMENT_REPORTER_PREFIX):
                    decoded = ArgumentReporterName(value)
                case _:
                    decoded = DropdownValue(value)
            attributes.append(BlockAttribute(name, decoded))
        return attributes

    def _decode_mutation(
        self, mutation: Mapping[str, Any], location: str
    ) -> list[BlockAttribute]:
        attributes: list[BlockAttribute] = []
        for key, raw in mutation.items():
            match key:
                case _ if key in _IGNORED_MUTATION_KEYS:
                    continue
                case "argumentids" | "argumentnames" | "argumentdefaults":
                    continue
                case "proccode":
                    attributes.append(BlockAttribute(key, ProcedureCode(str(raw))))
                case "warp":
                    attributes.append(BlockAttribute(key, raw is True or raw == "true"))
                case _:
                    attributes.append(BlockAttribute(key, str(raw)))

        if "argumentnames" in mutation:
            mutation_location = f"{location} mutation"
            ids = _json_string_list(mutation.get("argumentids", "[]"), mutation_location)
            names = _json_string_list(mutation["argumentnames"], mutation_location)
            defaults = _json_string_list(mutation.get("argumentdefaults", "[]"), mutation_location)
            if len(ids) != len(names):
                raise _invalid(mutation_location, "argumentids and argumentnames differ in length")
            defaults += [""] * (len(ids) - len(defaults))
            attributes.append(
                BlockAttribute(
                    "arguments",
                    ArgumentDefinitions(
                        tuple(
                            ArgumentDefinition(id=arg_id, name=name, default=default)
                            for arg_id, name, default in zip(ids, names, defaults, strict=False)
                        )
                    ),
                )
            )
        return attributes


def parse_project(source: ProjectSource | Mapping[str, Any]) -> Project:
    """Decode project.json content into a Project.

    Args:
        source: JSON text, UTF-8 bytes, or an already decoded mapping

    Returns:
        The decoded project

    Raises:
        ProjectLoadError: If the JSON is invalid or not shaped like a Scratch 3 project
    """
    if isinstance(source, (str, bytes)):
        try:
            data = json.loads(source)
        except ValueError as e:
            raise ProjectLoadError(ErrorTemplate.project_json_invalid(str(e))) from e
    else:
        data = source

    data = _expect_mapping(data, "project root")
    raw_targets = data.get("targets")
    if not isinstance(raw_targets, list):
        raise _invalid("project root", "missing 'targets' list")

    targets = tuple(
        _TargetDecoder(_expect_mapping(raw, f"target #{index}"), index).decode()
        for index, raw in enumerate(raw_targets)
    )
    return Project(targets=targets)


def _read_source(path: Path, max_source_size: int) -> bytes:
    try:
        if zipfile.is_zipfile(path):
            with zipfile.ZipFile(path) as archive:
                info = archive.getinfo(PROJECT_JSON_MEMBER)
                if info.file_size > max_source_size:
                    raise ProjectLoadError(
                        ErrorTemplate.project_too_large(info.file_size, max_source_size)
                    )
                return archive.read(info)
        size = path.stat().st_size
        if size > max_source_size:
            raise ProjectLoadError(ErrorTemplate.project_too_large(size, max_source_size))
        return path.read_bytes()
    except (OSError, KeyError, zipfile.BadZipFile) as e:
        raise ProjectLoadError(ErrorTemplate.project_read_failed(str(path), str(e))) from e


def load_project(
    path: str | Path,
    *,
    max_source_size: int = MAX_PROJECT_SIZE,
) -> Project:
    """Load a Scratch 3 project from an .sb3 archive or a project.json file.

    Args:
        path: Path to the .sb3 archive or project.json
        max_source_size: Maximum accepted size of project.json in bytes

    Returns:
        The decoded project

    Raises:
        ProjectLoadError: If the file cannot be read, is too large, or does not
            decode into a Scratch 3 project

    Example:
        >>> project = load_project("games/pong.sb3")
        >>> project.block_count
        212
    """
    path = Path(path)
    project = parse_project(_read_source(path, max_source_size))
    logger.info(
        "Loaded project %s: %d target(s), %d block(s)",
        path,
        len(project.targets),
        project.block_count,
    )
    return project
