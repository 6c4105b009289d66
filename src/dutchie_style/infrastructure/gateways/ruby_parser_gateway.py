"""Ruby Parser Gateway - tree-sitter implementation of ParserGatewayProtocol."""

import logging

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from dutchie_style.domain.errors import RubySyntaxError
from dutchie_style.domain.nodes import Child, SourceRange, SyntaxNode
from dutchie_style.domain.protocols import ParserGatewayProtocol

logger = logging.getLogger(__name__)

KEYWORD_ARGUMENT_TYPES = ("pair", "hash_splat_argument")
BODY_WRAPPER_TYPES = ("body_statement", "block_body")


class RubyParserGateway(ParserGatewayProtocol):
    """Parses Ruby with tree-sitter and lowers the concrete tree to SyntaxNodes."""

    def __init__(self) -> None:
        self._parser: Parser | None = None

    @property
    def parser(self) -> Parser:
        if self._parser is None:
            self._parser = get_parser("ruby")
        return self._parser

    def parse(self, source: str, file_path: str = "(string)") -> SyntaxNode:
        data = source.encode("utf-8")
        tree = self.parser.parse(data)
        root = tree.root_node
        if root.has_error:
            error = _first_error(root)
            line, column = error.start_point
            raise RubySyntaxError(file_path, line + 1, column + 1)
        logger.debug("Parsed %s (%d bytes)", file_path, len(data))
        return _Lowering(data).lower(root)


def _first_error(node: Node) -> Node:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(reversed(current.children))
    return node


def _named(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type != "comment"]


class _Lowering:
    """
    Concrete tree-sitter tree -> parser-gem shaped SyntaxNode tree.

    Grammar kinds with a ``_lower_<kind>`` method are reshaped; every other
    kind keeps its name and its lowered named children.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data

    def text(self, node: Node) -> str:
        return self._data[node.start_byte:node.end_byte].decode("utf-8")

    def span(self, first: Node, last: Node) -> SourceRange:
        line, column = first.start_point
        return SourceRange(first.start_byte, last.end_byte, line + 1, column)

    def make(self, kind: str, children: list[Child], first: Node, last: Node | None = None) -> SyntaxNode:
        last = last or first
        return SyntaxNode(
            type=kind,
            children=tuple(children),
            expression=self.span(first, last),
            source=self._data[first.start_byte:last.end_byte].decode("utf-8"),
        )

    def lower(self, node: Node) -> SyntaxNode:
        handler = getattr(self, f"_lower_{node.type}", None)
        if handler is not None:
            return handler(node)
        return self.make(node.type, [self.lower(c) for c in _named(node)], node)

    # -- calls ------------------------------------------------------------------

    def _lower_call(self, node: Node) -> SyntaxNode:
        receiver = node.child_by_field_name("receiver")
        method = node.child_by_field_name("method")
        arguments = node.child_by_field_name("arguments")
        block = node.child_by_field_name("block")

        kind = "csend" if any(c.type == "&." for c in node.children) else "send"
        children: list[Child] = [
            self.lower(receiver) if receiver is not None else None,
            self.text(method) if method is not None else "call",
        ]
        if arguments is not None:
            children.extend(self.lower_arguments(_named(arguments)))

        if block is None:
            return self.make(kind, children, node)

        send_end = max(
            (part for part in (receiver, method, arguments) if part is not None),
            key=lambda part: part.end_byte,
        )
        send = self.make(kind, children, node, send_end)
        return self.make("block", self._block_children(send, block), node)

    def _block_children(self, send: SyntaxNode, block: Node) -> list[Child]:
        parameters = block.child_by_field_name("parameters")
        if parameters is not None:
            args = self.lower(parameters)
        else:
            args = SyntaxNode("args", (), self.span(block, block).begin, "")

        statements: list[Node] = []
        for child in _named(block):
            if parameters is not None and child.id == parameters.id:
                continue
            if child.type in BODY_WRAPPER_TYPES:
                statements.extend(_named(child))
            else:
                statements.append(child)

        body: SyntaxNode | None = None
        if len(statements) == 1:
            body = self.lower(statements[0])
        elif statements:
            body = self.make("begin", [self.lower(s) for s in statements], statements[0], statements[-1])
        return [send, args, body]

    def lower_arguments(self, items: list[Node]) -> list[SyntaxNode]:
        """Lower an argument list; trailing keyword pairs become one brace-less hash."""
        split = len(items)
        while split > 0 and items[split - 1].type in KEYWORD_ARGUMENT_TYPES:
            split -= 1
        lowered = [self.lower(item) for item in items[:split]]
        keywords = items[split:]
        if keywords:
            lowered.append(
                self.make("hash", [self.lower(k) for k in keywords], keywords[0], keywords[-1])
            )
        return lowered

    def _lower_element_reference(self, node: Node) -> SyntaxNode:
        target = node.child_by_field_name("object")
        indices = [c for c in _named(node) if target is None or c.id != target.id]
        children: list[Child] = [self.lower(target) if target is not None else None, "[]"]
        children.extend(self.lower_arguments(indices))
        return self.make("send", children, node)

    def _lower_identifier(self, node: Node) -> SyntaxNode:
        # Without scope analysis a bare identifier reads as a receiverless call.
        return self.make("send", [None, self.text(node)], node)

    def _lower_splat_argument(self, node: Node) -> SyntaxNode:
        return self.make("splat", [self.lower(c) for c in _named(node)], node)

    def _lower_hash_splat_argument(self, node: Node) -> SyntaxNode:
        return self.make("kwsplat", [self.lower(c) for c in _named(node)], node)

    def _lower_block_argument(self, node: Node) -> SyntaxNode:
        return self.make("block_pass", [self.lower(c) for c in _named(node)], node)

    # -- constants --------------------------------------------------------------

    def _lower_constant(self, node: Node) -> SyntaxNode:
        return self.make("const", [None, self.text(node)], node)

    def _lower_scope_resolution(self, node: Node) -> SyntaxNode:
        scope = node.child_by_field_name("scope")
        name = node.child_by_field_name("name")
        if scope is not None:
            parent = self.lower(scope)
        else:
            parent = SyntaxNode("cbase", (), self.span(node, node).begin.adjust(end_pos=2), "::")
        return self.make("const", [parent, self.text(name) if name is not None else ""], node)

    # -- literals ---------------------------------------------------------------

    def _lower_simple_symbol(self, node: Node) -> SyntaxNode:
        return self.make("sym", [self.text(node)[1:]], node)

    def _lower_hash_key_symbol(self, node: Node) -> SyntaxNode:
        return self.make("sym", [self.text(node)], node)

    def _lower_string(self, node: Node) -> SyntaxNode:
        parts = _named(node)
        if any(part.type == "interpolation" for part in parts):
            return self.make("dstr", [self.lower(part) for part in parts], node)
        return self.make("str", ["".join(self.text(part) for part in parts)], node)

    def _lower_integer(self, node: Node) -> SyntaxNode:
        return self.make("int", [self.text(node)], node)

    def _lower_float(self, node: Node) -> SyntaxNode:
        return self.make("float", [self.text(node)], node)

    def _lower_hash(self, node: Node) -> SyntaxNode:
        return self.make("hash", [self.lower(c) for c in _named(node)], node)

    def _lower_pair(self, node: Node) -> SyntaxNode:
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        return self.make(
            "pair",
            [
                self.lower(key) if key is not None else None,
                self.lower(value) if value is not None else None,
            ],
            node,
        )
