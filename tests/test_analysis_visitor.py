"""Tests for analysis.visitor: attribute dispatch and reference collection.

Python 3.13+.
"""

from __future__ import annotations

import pytest

from scratchgraph.analysis import AttributeVisitor, ReferenceCollector
from scratchgraph.core import DepthLimitExceededError
from scratchgraph.project import (
    ArgumentDefinition,
    ArgumentDefinitions,
    ArgumentReporterName,
    BlockRef,
    BroadcastRef,
    Color,
    DropdownMenu,
    DropdownValue,
    ListField,
    ListRef,
    Literal,
    OptionalBlockRef,
    ProcedureArguments,
    ProcedureCode,
    ShadowOrExpression,
    VariableField,
    VariableRef,
)


def _collect(*values: object) -> ReferenceCollector:
    collector = ReferenceCollector()
    for value in values:
        collector.visit(value)  # type: ignore[arg-type]
    return collector


class TestReferenceCollectorShapes:
    """One case per attribute shape."""

    def test_block_ref(self) -> None:
        assert _collect(BlockRef("a")).block_refs == ["a"]

    def test_optional_block_ref_present_and_absent(self) -> None:
        collector = _collect(OptionalBlockRef(BlockRef("a")), OptionalBlockRef())
        assert collector.block_refs == ["a"]

    def test_procedure_arguments_skip_absent(self) -> None:
        arguments = ProcedureArguments(
            (
                ("x", BlockRef("a")),
                ("y", None),
                ("z", ListRef(id="L", name="items")),
                ("w", Literal(3)),
            )
        )
        collector = _collect(arguments)

        assert collector.block_refs == ["a"]
        assert collector.list_refs == ["L"]

    def test_shadow_arm_is_visited(self) -> None:
        assert _collect(ShadowOrExpression(shadow=BlockRef("menu"))).block_refs == ["menu"]

    def test_expression_arm_is_visited(self) -> None:
        collector = _collect(ShadowOrExpression(expression=ListRef(id="L", name="items")))
        assert collector.list_refs == ["L"]

    def test_list_field_is_not_a_read(self) -> None:
        """A list chosen in a dropdown is not read as a string."""
        assert _collect(ListField(id="L", name="items")).list_refs == []

    @pytest.mark.parametrize(
        "value",
        [
            VariableRef(id="v", name="score"),
            Literal("hello"),
            Color("#ff0000"),
            DropdownValue("left-right"),
            DropdownMenu(opcode="sensing_touchingobjectmenu", value="_mouse_"),
            VariableField(id="v", name="score"),
            BroadcastRef(id="b", name="start"),
            ProcedureCode("jump %s"),
            ArgumentReporterName("height"),
            ArgumentDefinitions((ArgumentDefinition(id="x", name="height"),)),
            True,
            "auto",
        ],
    )
    def test_inert_shapes_contribute_nothing(self, value: object) -> None:
        collector = _collect(value)
        assert collector.block_refs == []
        assert collector.list_refs == []

    def test_visit_order_preserved(self) -> None:
        collector = _collect(
            ShadowOrExpression(expression=BlockRef("b")),
            OptionalBlockRef(BlockRef("a")),
            ShadowOrExpression(expression=ListRef(id="L2", name="two")),
            ShadowOrExpression(expression=ListRef(id="L1", name="one")),
        )

        assert collector.block_refs == ["b", "a"]
        assert collector.list_refs == ["L2", "L1"]


class TestDispatch:
    """Dispatch table behavior."""

    def test_unknown_shape_raises_type_error(self) -> None:
        with pytest.raises(TypeError, match="no case for attribute shape float"):
            _collect(1.5)

    def test_subclass_gets_own_dispatch_table(self) -> None:
        class CountLiterals(AttributeVisitor[None]):
            def __init__(self) -> None:
                super().__init__()
                self.count = 0

            def visit_Literal(self, value: Literal) -> None:
                self.count += 1

        visitor = CountLiterals()
        visitor.visit(Literal(1))
        visitor.visit(Literal(2))

        assert visitor.count == 2
        assert "Literal" in CountLiterals._class_visit_methods
        assert "Literal" not in AttributeVisitor._class_visit_methods

    def test_depth_limit_applies_to_nesting(self) -> None:
        collector = ReferenceCollector(max_depth=1)
        with pytest.raises(DepthLimitExceededError):
            collector.visit(ShadowOrExpression(expression=BlockRef("a")))

    def test_depth_resets_between_visits(self) -> None:
        collector = ReferenceCollector(max_depth=2)
        for _ in range(5):
            collector.visit(ShadowOrExpression(expression=BlockRef("a")))
        assert collector.block_refs == ["a"] * 5
