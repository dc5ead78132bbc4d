"""Type aliases for the project domain.

Provides semantic type aliases used throughout the project model, the
loader and the analysis passes.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "BlockId",
    "ListId",
    "Opcode",
    "ProcedureArgumentId",
    "ProjectSource",
    "VariableId",
]

type BlockId = str
"""Unique block identifier (e.g., 'a1#b]Qz|k0Y9qVf:2xN~')."""

type ListId = str
"""Unique list identifier, owned by exactly one target."""

type VariableId = str
"""Unique variable identifier."""

type Opcode = str
"""Block kind (e.g., 'data_itemoflist', 'control_repeat')."""

type ProcedureArgumentId = str
"""Identifier of a custom block argument (from the 'argumentids' mutation)."""

type ProjectSource = str | bytes
"""Raw project.json text, undecoded or decoded."""
