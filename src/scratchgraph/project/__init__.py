"""Scratch 3 project model and loader.

Exports the read-only document model, its id type aliases, and the
functions that decode .sb3 archives and project.json content.

Python 3.13+.
"""

from .loader import load_project, parse_project
from .model import (
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
    ScalarValue,
    ShadowOrExpression,
    Target,
    VariableDeclaration,
    VariableField,
    VariableRef,
)
from .types import BlockId, ListId, Opcode, ProcedureArgumentId, ProjectSource, VariableId

__all__ = [
    "ArgumentDefinition",
    "ArgumentDefinitions",
    "ArgumentReporterName",
    "AttributeValue",
    "Block",
    "BlockAttribute",
    "BlockId",
    "BlockRef",
    "BroadcastRef",
    "Color",
    "DropdownMenu",
    "DropdownValue",
    "Expression",
    "ListDeclaration",
    "ListField",
    "ListId",
    "ListRef",
    "Literal",
    "Opcode",
    "OptionalBlockRef",
    "ProcedureArgumentId",
    "ProcedureArguments",
    "ProcedureCode",
    "Project",
    "ProjectSource",
    "ScalarValue",
    "ShadowOrExpression",
    "Target",
    "VariableDeclaration",
    "VariableField",
    "VariableId",
    "VariableRef",
    "load_project",
    "parse_project",
]
