"""Unit tests for RubyParserGateway (tree-sitter lowering)."""

import pytest

from dutchie_style.domain.errors import RubySyntaxError
from dutchie_style.domain.nodes import SyntaxNode
from dutchie_style.infrastructure.gateways.ruby_parser_gateway import RubyParserGateway


@pytest.fixture(scope="module")
def gateway() -> RubyParserGateway:
    return RubyParserGateway()


def _first(root: SyntaxNode, kind: str) -> SyntaxNode:
    return next(n for n in root.each_node() if n.type == kind)


def _sends(root: SyntaxNode, method: str) -> list[SyntaxNode]:
    return [n for n in root.each_node() if n.type == "send" and n.method_name == method]


class TestCalls:

    def test_constant_receiver_call(self, gateway: RubyParserGateway) -> None:
        source = 'DutchieFeatureFlags.flag("my.flag")\n'
        call = _sends(gateway.parse(source), "flag")[0]

        receiver = call.receiver
        assert receiver.type == "const"
        assert receiver.children == (None, "DutchieFeatureFlags")
        key = call.arguments[0]
        assert key.type == "str"
        assert key.value == "my.flag"
        assert source.encode()[key.expression.begin_pos:key.expression.end_pos] == b'"my.flag"'
        assert call.expression.line == 1
        assert call.expression.column == 0

    def test_predicate_method_name(self, gateway: RubyParserGateway) -> None:
        root = gateway.parse('DutchieFeatureFlags.on?("my.flag")\n')
        assert _sends(root, "on?")

    def test_trailing_keywords_become_one_hash(self, gateway: RubyParserGateway) -> None:
        source = 'DutchieFeatureFlags.dispensary_flag("k", dispensary: d, default: false)\n'
        call = _sends(gateway.parse(source), "dispensary_flag")[0]

        assert [a.type for a in call.arguments] == ["str", "hash"]
        options = call.arguments[1]
        assert not options.braced
        assert [p.key.value for p in options.pairs] == ["dispensary", "default"]
        assert options.pairs[1].value.type == "false"

    def test_braced_hash_argument(self, gateway: RubyParserGateway) -> None:
        call = _sends(gateway.parse('DutchieFeatureFlags.context_flag("k", { user: u })\n'), "context_flag")[0]
        options = call.arguments[1]
        assert options.is_hash
        assert options.braced

    def test_rocket_symbol_key(self, gateway: RubyParserGateway) -> None:
        call = _sends(gateway.parse('DutchieFeatureFlags.on?("k", :default => true)\n'), "on?")[0]
        assert call.arguments[1].pairs[0].key.is_sym_named("default")

    def test_bare_identifier_is_receiverless_send(self, gateway: RubyParserGateway) -> None:
        call = _sends(gateway.parse('ld_client.variation("k", context)\n'), "variation")[0]
        assert call.receiver.type == "send"
        assert call.receiver.children == (None, "ld_client")
        assert call.arguments[1].children == (None, "context")

    def test_scoped_constant_and_element_reference(self, gateway: RubyParserGateway) -> None:
        root = gateway.parse('MenuConnector::App[:launchdarkly].variation("k")\n')
        call = _sends(root, "variation")[0]
        lookup = call.receiver

        assert lookup.method_name == "[]"
        scope = lookup.receiver
        assert scope.type == "const"
        assert scope.children[1] == "App"
        assert scope.children[0].children == (None, "MenuConnector")
        assert lookup.arguments[0].is_sym_named("launchdarkly")

    def test_safe_navigation_is_csend(self, gateway: RubyParserGateway) -> None:
        root = gateway.parse('client&.variation("k")\n')
        assert any(n.type == "csend" for n in root.each_node())
        assert not _sends(root, "variation")

    def test_interpolated_string_is_dstr(self, gateway: RubyParserGateway) -> None:
        call = _sends(gateway.parse('DutchieFeatureFlags.flag("a.#{name}")\n'), "flag")[0]
        assert call.arguments[0].type == "dstr"


class TestBlocks:

    def test_do_block(self, gateway: RubyParserGateway) -> None:
        source = "safety_assured do\n  remove_column :users, :legacy\nend\n"
        block = _first(gateway.parse(source), "block")

        assert block.send_node.children == (None, "safety_assured")
        assert block.children[1].type == "args"
        assert block.body.method_name == "remove_column"
        assert block.expression.begin_pos == 0
        assert block.expression.end_pos == source.index("end") + 3

    def test_brace_block_with_several_statements(self, gateway: RubyParserGateway) -> None:
        block = _first(gateway.parse("safety_assured { a; b }\n"), "block")
        assert block.body.type == "begin"
        assert len(block.body.child_nodes()) == 2

    def test_empty_block_has_no_body(self, gateway: RubyParserGateway) -> None:
        block = _first(gateway.parse("safety_assured {}\n"), "block")
        assert block.body is None

    def test_send_range_stops_before_block(self, gateway: RubyParserGateway) -> None:
        source = "items.each(1) do |item|\n  item\nend\n"
        block = _first(gateway.parse(source), "block")
        assert block.send_node.expression.end_pos == source.index(" do")
        assert block.send_node.method_name == "each"


class TestPositions:

    def test_lines_are_one_based_and_columns_zero_based(self, gateway: RubyParserGateway) -> None:
        source = "class Menu\n  def on\n    DutchieFeatureFlags.flag(\"k\")\n  end\nend\n"
        call = _sends(gateway.parse(source), "flag")[0]
        assert (call.expression.line, call.expression.column) == (3, 4)

    def test_offsets_are_byte_offsets(self, gateway: RubyParserGateway) -> None:
        source = '# café\nDutchieFeatureFlags.flag("k")\n'
        call = _sends(gateway.parse(source), "flag")[0]
        assert call.expression.begin_pos == len("# café\n".encode("utf-8"))

    def test_comments_are_dropped(self, gateway: RubyParserGateway) -> None:
        root = gateway.parse("# note\nputs 1 # trailing\n")
        assert all(n.type != "comment" for n in root.each_node())


class TestSyntaxErrors:

    def test_unparsable_source_raises_with_position(self, gateway: RubyParserGateway) -> None:
        with pytest.raises(RubySyntaxError) as excinfo:
            gateway.parse("def broken(\n", "app/broken.rb")
        assert excinfo.value.file_path == "app/broken.rb"
        assert excinfo.value.line >= 1
        assert str(excinfo.value).endswith("unparsable Ruby source")

    def test_empty_source_parses(self, gateway: RubyParserGateway) -> None:
        assert gateway.parse("").type == "program"
