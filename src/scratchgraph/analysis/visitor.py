"""Visitor pattern for block attribute traversal.

Extracts references from block attributes without per-opcode special
casing: the case analysis is over attribute *shapes*, one visit method per
shape.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_TypeName after the attribute class (visit_BlockRef,
visit_ShadowOrExpression). Builtin shapes dispatch the same way
(visit_bool, visit_str).

Unlike ast.NodeVisitor, a value with no visit method is an error: the set
of shapes is closed, and an unhandled shape must not silently contribute
no edges.

Python 3.13+.
"""

from collections.abc import Callable
from typing import ClassVar

from scratchgraph.constants import MAX_DEPTH
from scratchgraph.core.depth_guard import DepthGuard
from scratchgraph.project.model import (
    AttributeValue,
    BlockRef,
    ListRef,
    OptionalBlockRef,
    ProcedureArguments,
    ShadowOrExpression,
)
from scratchgraph.project.types import BlockId, ListId

__all__ = ["AttributeVisitor", "ReferenceCollector"]


class AttributeVisitor[T = None]:
    """Base visitor for block attribute values.

    Uses class-level dispatch table for performance:
    - Dispatch table built once per class definition via __init_subclass__
    - Bound methods cached per instance on first use

    Example:
        >>> class CountListFields(AttributeVisitor[None]):
        ...     def __init__(self) -> None:
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_ListField(self, value: ListField) -> None:
        ...         self.count += 1
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    # Class-level dispatch table: type name -> method name
    _class_visit_methods: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_"):
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum nesting depth (default: MAX_DEPTH).
        """
        effective_max_depth = max_depth if max_depth is not None else MAX_DEPTH
        self._depth_guard = DepthGuard(max_depth=effective_max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[object], T]] = {}

    def visit(self, value: AttributeValue) -> T:
        """Dispatch a value to its visit_TypeName method.

        Raises:
            TypeError: If no visit method handles the value's type
            DepthLimitExceededError: If nesting exceeds max_depth
        """
        value_type = type(value)
        method = self._instance_dispatch_cache.get(value_type)
        if method is None:
            method_name = self._class_visit_methods.get(value_type.__name__)
            if method_name is None:
                return self.generic_visit(value)
            method = getattr(self, method_name)
            self._instance_dispatch_cache[value_type] = method
        with self._depth_guard:
            return method(value)

    def generic_visit(self, value: object) -> T:
        """Fallback for values without a visit method."""
        msg = f"{type(self).__name__} has no case for attribute shape {type(value).__name__}"
        raise TypeError(msg)


class ReferenceCollector(AttributeVisitor[None]):
    """Collects outgoing block and list references from attribute values.

    Block references land in ``block_refs``, list reporters (lists read as
    concatenated strings) in ``list_refs``, both in visit order.

    Example:
        >>> collector = ReferenceCollector()
        >>> for attr in block.attributes:
        ...     collector.visit(attr.value)
        >>> collector.block_refs, collector.list_refs
    """

    __slots__ = ("block_refs", "list_refs")

    def __init__(self, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.block_refs: list[BlockId] = []
        self.list_refs: list[ListId] = []

    def visit_BlockRef(self, value: BlockRef) -> None:
        self.block_refs.append(value.id)

    def visit_OptionalBlockRef(self, value: OptionalBlockRef) -> None:
        if value.block is not None:
            self.visit(value.block)

    def visit_ProcedureArguments(self, value: ProcedureArguments) -> None:
        for _argument_id, expression in value.arguments:
            if expression is not None:
                self.visit(expression)

    def visit_ShadowOrExpression(self, value: ShadowOrExpression) -> None:
        self.visit(value.value)

    def visit_ListRef(self, value: ListRef) -> None:
        self.list_refs.append(value.id)

    def _ignore(self, value: object) -> None:
        """Terminal shape: contributes no edges."""

    # Expressions that reference no block or list
    visit_VariableRef = visit_Literal = _ignore
    # Inert data
    visit_Color = visit_DropdownValue = visit_DropdownMenu = _ignore
    visit_ListField = visit_VariableField = visit_BroadcastRef = _ignore
    visit_ProcedureCode = visit_ArgumentReporterName = _ignore
    visit_ArgumentDefinitions = visit_bool = visit_str = _ignore
