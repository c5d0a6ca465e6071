import logging
from pathlib import Path
from typing import Final

from pydantic import BaseModel
from tree_sitter import Node as TSNode

from poolguard.models.call_site import Argument, CallSite, NamedArgument, PositionalArgument
from poolguard.models.expressions import (
    Expression,
    LiteralExpr,
    LiteralKind,
    OtherExpr,
    RecordField,
    RecordLiteralExpr,
    UnaryExpr,
)
from poolguard.utils.treesitter_helpers import (
    iter_nodes_of_type,
    location_for,
    node_text,
    normalize_name,
)

logger = logging.getLogger(__name__)

LITERAL_TYPES: Final[dict[str, LiteralKind]] = {
    "integer": LiteralKind.INTEGER,
    "float": LiteralKind.FLOAT,
    "string": LiteralKind.STRING,
    "true": LiteralKind.BOOLEAN,
    "false": LiteralKind.BOOLEAN,
    "none": LiteralKind.NONE,
}
# Implicitly concatenated strings are not read as literals or keys
STRING_KEY_TYPES: Final[set[str]] = {"string"}
SKIPPED_CHILD_TYPES: Final[set[str]] = {"comment"}


class CallSiteBuilder(BaseModel):
    """Lower Tree-sitter call nodes into ``CallSite`` models."""

    path: Path

    def build(self, root: TSNode) -> list[CallSite]:
        """Collect every call in the tree, outer calls before the calls nested in them."""

        return [self.call_site_for(node) for node in iter_nodes_of_type(root, "call")]

    def call_site_for(self, call_node: TSNode) -> CallSite:
        function_node = call_node.child_by_field_name("function")
        arguments_node = call_node.child_by_field_name("arguments")
        callee: str = normalize_name(node_text(function_node)) if function_node else ""

        arguments: list[Argument] = []
        # `f(x for x in y)` passes a generator_expression instead of an argument_list
        if arguments_node is not None and arguments_node.type == "argument_list":
            arguments = [self.__argument_for(child) for child in self.__entries(arguments_node)]
        elif arguments_node is not None:
            arguments = [PositionalArgument(value=self.expression_for(arguments_node))]

        return CallSite(
            callee=callee,
            arguments=tuple(arguments),
            location=location_for(call_node, self.path),
        )

    def __entries(self, node: TSNode) -> list[TSNode]:
        return [child for child in node.named_children if child.type not in SKIPPED_CHILD_TYPES]

    def __argument_for(self, node: TSNode) -> Argument:
        if node.type == "keyword_argument":
            name_node = node.child_by_field_name("name")
            value_node = node.child_by_field_name("value")
            if name_node is not None and value_node is not None:
                return NamedArgument(
                    name=node_text(name_node),
                    value=self.expression_for(value_node),
                )
        # *args and **kwargs still occupy a slot in the argument count
        return PositionalArgument(value=self.expression_for(node))

    def expression_for(self, node: TSNode) -> Expression:
        """Lower an expression node into the closed expression model."""

        text: str = node_text(node)
        location = location_for(node, self.path)

        literal_kind = LITERAL_TYPES.get(node.type)
        if literal_kind is not None:
            return LiteralExpr(text=text, location=location, literal_kind=literal_kind)

        if node.type == "unary_operator":
            operator_node = node.child_by_field_name("operator")
            operand_node = node.child_by_field_name("argument")
            if operator_node is not None and operand_node is not None:
                return UnaryExpr(
                    text=text,
                    location=location,
                    operator=node_text(operator_node),
                    operand=self.expression_for(operand_node),
                )

        if node.type == "dictionary":
            return RecordLiteralExpr(
                text=text,
                location=location,
                fields=tuple(self.__dictionary_fields(node)),
            )

        if node.type == "call":
            record = self.__dict_call_record(node)
            if record is not None:
                return record

        return OtherExpr(text=text, location=location, node_type=node.type)

    def __dictionary_fields(self, node: TSNode) -> list[RecordField]:
        fields: list[RecordField] = []
        for entry in self.__entries(node):
            if entry.type == "pair":
                key_node = entry.child_by_field_name("key")
                value_node = entry.child_by_field_name("value")
                if key_node is None or value_node is None:
                    continue
                key: str | None = (
                    node_text(key_node) if key_node.type in STRING_KEY_TYPES else None
                )
                fields.append(
                    RecordField(
                        key=key,
                        value=self.expression_for(value_node),
                        location=location_for(entry, self.path),
                    )
                )
            elif entry.type == "dictionary_splat":
                fields.append(
                    RecordField(
                        key=None,
                        value=self.expression_for(entry),
                        location=location_for(entry, self.path),
                    )
                )
        return fields

    def __dict_call_record(self, node: TSNode) -> RecordLiteralExpr | None:
        """Treat ``dict(a=1, b=2)`` as the record literal ``{"a": 1, "b": 2}``.

        Calls with positional arguments are left alone since the positional
        mapping may contribute keys that are not visible here.
        """

        function_node = node.child_by_field_name("function")
        arguments_node = node.child_by_field_name("arguments")
        if function_node is None or node_text(function_node) != "dict":
            return None
        if arguments_node is None or arguments_node.type != "argument_list":
            return None

        fields: list[RecordField] = []
        for entry in self.__entries(arguments_node):
            if entry.type == "keyword_argument":
                name_node = entry.child_by_field_name("name")
                value_node = entry.child_by_field_name("value")
                if name_node is None or value_node is None:
                    continue
                fields.append(
                    RecordField(
                        key=node_text(name_node),
                        value=self.expression_for(value_node),
                        location=location_for(entry, self.path),
                    )
                )
            elif entry.type == "dictionary_splat":
                fields.append(
                    RecordField(
                        key=None,
                        value=self.expression_for(entry),
                        location=location_for(entry, self.path),
                    )
                )
            else:
                logger.debug(
                    "dict() call with positional arguments at %s:%d",
                    self.path,
                    node.start_point[0] + 1,
                )
                return None

        return RecordLiteralExpr(
            text=node_text(node),
            location=location_for(node, self.path),
            fields=tuple(fields),
        )
