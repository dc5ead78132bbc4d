"""Scratch 3 project object model.

Read-only document model consumed by the analysis passes: targets own
blocks and lists, blocks carry an open set of typed attributes.

Attribute values form a closed set of shapes. Reference shapes (BlockRef,
OptionalBlockRef, ProcedureArguments, ShadowOrExpression and the expression
variants) may point at other blocks or lists; every other shape is inert data.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeIs

from .types import BlockId, ListId, Opcode, ProcedureArgumentId, VariableId

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Reference shapes
    "BlockRef",
    "OptionalBlockRef",
    "ProcedureArguments",
    "ShadowOrExpression",
    # Expressions
    "Literal",
    "VariableRef",
    "ListRef",
    # Inert shapes
    "Color",
    "DropdownValue",
    "DropdownMenu",
    "ListField",
    "VariableField",
    "BroadcastRef",
    "ProcedureCode",
    "ArgumentReporterName",
    "ArgumentDefinition",
    "ArgumentDefinitions",
    # Document structure
    "BlockAttribute",
    "Block",
    "ListDeclaration",
    "VariableDeclaration",
    "Target",
    "Project",
    # Type aliases
    "Expression",
    "AttributeValue",
    "ScalarValue",
]

type ScalarValue = str | int | float | bool

# ============================================================================
# REFERENCE SHAPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class BlockRef:
    """Direct reference to another block (also a nested-block expression)."""

    id: BlockId

    @staticmethod
    def guard(value: object) -> TypeIs["BlockRef"]:
        """Type guard for BlockRef."""
        return isinstance(value, BlockRef)


@dataclass(frozen=True, slots=True)
class OptionalBlockRef:
    """Reference to a block that may be absent.

    Example:
        An empty C-block mouth: control_forever with no SUBSTACK.
    """

    block: BlockRef | None = None


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal value typed into an input slot."""

    value: ScalarValue


@dataclass(frozen=True, slots=True)
class VariableRef:
    """Variable reporter dropped into an input slot."""

    id: VariableId
    name: str


@dataclass(frozen=True, slots=True)
class ListRef:
    """List reporter dropped into an input slot.

    Evaluates to the list items joined into one string, not to the item count.
    """

    id: ListId
    name: str

    @staticmethod
    def guard(value: object) -> TypeIs["ListRef"]:
        """Type guard for ListRef."""
        return isinstance(value, ListRef)


type Expression = BlockRef | VariableRef | Literal | ListRef


@dataclass(frozen=True, slots=True)
class ProcedureArguments:
    """Custom block call arguments: argument id -> optional expression.

    Argument ids declared by the procedure but left empty map to None.
    """

    arguments: tuple[tuple[ProcedureArgumentId, Expression | None], ...]

    def get(self, argument_id: ProcedureArgumentId) -> Expression | None:
        """Return the expression bound to an argument id, if any."""
        for key, value in self.arguments:
            if key == argument_id:
                return value
        return None


@dataclass(frozen=True, slots=True)
class ShadowOrExpression:
    """Input slot holding either its typed shadow value or an expression.

    Exactly one arm is set.
    """

    shadow: "AttributeValue | None" = None
    expression: Expression | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one arm is present."""
        if (self.shadow is None) == (self.expression is None):
            msg = "ShadowOrExpression requires exactly one of shadow or expression"
            raise ValueError(msg)

    @property
    def value(self) -> "AttributeValue":
        """The arm that is present."""
        return self.expression if self.expression is not None else self.shadow


# ============================================================================
# INERT SHAPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Color:
    """Colour picker value ('#rrggbb')."""

    value: str


@dataclass(frozen=True, slots=True)
class DropdownValue:
    """Dropdown selection stored directly in a block field."""

    value: str


@dataclass(frozen=True, slots=True)
class DropdownMenu:
    """Menu shadow block folded into its parent input."""

    opcode: Opcode
    value: str


@dataclass(frozen=True, slots=True)
class ListField:
    """List chosen in a block field (e.g. data_addtolist LIST)."""

    id: ListId
    name: str


@dataclass(frozen=True, slots=True)
class VariableField:
    """Variable chosen in a block field (e.g. data_setvariableto VARIABLE)."""

    id: VariableId
    name: str


@dataclass(frozen=True, slots=True)
class BroadcastRef:
    """Broadcast message reference."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class ProcedureCode:
    """Custom block signature ('move %s steps')."""

    proccode: str


@dataclass(frozen=True, slots=True)
class ArgumentReporterName:
    """Name read by an argument reporter block."""

    name: str


@dataclass(frozen=True, slots=True)
class ArgumentDefinition:
    """One declared argument of a custom block."""

    id: ProcedureArgumentId
    name: str
    default: str = ""


@dataclass(frozen=True, slots=True)
class ArgumentDefinitions:
    """Argument declarations of a procedures_prototype block."""

    definitions: tuple[ArgumentDefinition, ...]


type AttributeValue = (
    BlockRef
    | OptionalBlockRef
    | ProcedureArguments
    | ShadowOrExpression
    | VariableRef
    | Literal
    | ListRef
    | Color
    | DropdownValue
    | DropdownMenu
    | ListField
    | VariableField
    | BroadcastRef
    | ProcedureCode
    | ArgumentReporterName
    | ArgumentDefinitions
    | bool
    | str
)

# ============================================================================
# DOCUMENT STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class BlockAttribute:
    """Named attribute of a block (input, field or mutation entry)."""

    name: str
    value: AttributeValue


@dataclass(frozen=True, slots=True)
class Block:
    """Executable unit of a script.

    Attributes:
        id: Unique block id
        opcode: Block kind
        next: Sequential successor, if any
        parent: Enclosing block, if any
        attributes: Inputs, fields and mutation entries
        shadow: Shadow block flag from the project file
        top_level: Script head flag from the project file
    """

    id: BlockId
    opcode: Opcode
    next: BlockId | None = None
    parent: BlockId | None = None
    attributes: tuple[BlockAttribute, ...] = ()
    shadow: bool = False
    top_level: bool = False

    def attribute(self, name: str) -> AttributeValue | None:
        """Return the value of the named attribute, if present."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None


@dataclass(frozen=True, slots=True)
class ListDeclaration:
    """List owned by a target."""

    id: ListId
    name: str
    items: tuple[ScalarValue, ...] = ()


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    """Variable owned by a target."""

    id: VariableId
    name: str
    value: ScalarValue = 0


@dataclass(frozen=True, slots=True)
class Target:
    """Sprite or stage: a namespace owning blocks, lists and variables."""

    name: str
    is_stage: bool = False
    blocks: tuple[Block, ...] = ()
    lists: tuple[ListDeclaration, ...] = ()
    variables: tuple[VariableDeclaration, ...] = ()

    def get_list(self, list_id: ListId) -> ListDeclaration | None:
        """Look up a list owned by this target."""
        for declared in self.lists:
            if declared.id == list_id:
                return declared
        return None


@dataclass(frozen=True, slots=True)
class Project:
    """Root of the document: an ordered collection of targets.

    Owns id lookup tables built once at construction. The tables are
    excluded from equality and repr; two projects compare equal when their
    targets do.
    """

    targets: tuple[Target, ...] = ()
    _blocks_by_id: dict[BlockId, Block] = field(
        init=False, repr=False, compare=False
    )
    _lists_by_id: dict[ListId, ListDeclaration] = field(
        init=False, repr=False, compare=False
    )
    _targets_by_block_id: dict[BlockId, Target] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Build id lookup tables."""
        blocks_by_id: dict[BlockId, Block] = {}
        lists_by_id: dict[ListId, ListDeclaration] = {}
        targets_by_block_id: dict[BlockId, Target] = {}
        for target in self.targets:
            for block in target.blocks:
                blocks_by_id.setdefault(block.id, block)
                targets_by_block_id.setdefault(block.id, target)
            for declared in target.lists:
                lists_by_id.setdefault(declared.id, declared)
        object.__setattr__(self, "_blocks_by_id", blocks_by_id)
        object.__setattr__(self, "_lists_by_id", lists_by_id)
        object.__setattr__(self, "_targets_by_block_id", targets_by_block_id)

    def iter_blocks(self) -> Iterator[Block]:
        """Iterate every block of every target, in target order."""
        for target in self.targets:
            yield from target.blocks

    def iter_opcodes(self) -> Iterator[tuple[BlockId, Opcode]]:
        """Iterate (id, opcode) pairs across the whole document."""
        for block in self.iter_blocks():
            yield block.id, block.opcode

    @property
    def block_count(self) -> int:
        """Number of opcode-bearing blocks in the document."""
        return sum(len(target.blocks) for target in self.targets)

    def find_block(self, block_id: BlockId) -> Block | None:
        """Resolve a block by id within the whole document."""
        return self._blocks_by_id.get(block_id)

    def find_list(self, list_id: ListId) -> ListDeclaration | None:
        """Resolve a list by id within the whole document."""
        return self._lists_by_id.get(list_id)

    def find_target(self, block_id: BlockId) -> Target | None:
        """Resolve the target that owns a block."""
        return self._targets_by_block_id.get(block_id)
