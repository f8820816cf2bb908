import pytest

from finchcmake.ast import (
    BooleanLiteral,
    CommandCall,
    CPMAddPackage,
    ElseIfStatement,
    File,
    ForEachStatement,
    Identifier,
    IfStatement,
    Node,
    NumberLiteral,
    StringLiteral,
    Variable,
)
from finchcmake.source import SourceLocation


def test_number_literal_as_float():
    assert NumberLiteral("45.67").as_float() == 45.67
    assert NumberLiteral("123").as_float() == 123.0
    assert NumberLiteral("1.23e-4").as_float() == 1.23e-4


def test_number_literal_invalid_text_raises():
    with pytest.raises(ValueError):
        NumberLiteral("invalid-version").as_float()


def test_default_location_is_invalid():
    assert StringLiteral("x").location.is_valid() is False


def test_location_is_keyword_only():
    loc = SourceLocation("test.cmake", 2, 5)
    node = Identifier("cmd", location=loc)
    assert node.location == loc
    assert str(node.location) == "test.cmake:2:5"


def test_string_literal_unquoted_by_default():
    literal = StringLiteral("Hello, World!")
    assert literal.value == "Hello, World!"
    assert literal.quoted is False
    assert StringLiteral("Hello, World!", quoted=True).quoted is True


def test_command_arguments_lists_are_independent():
    first = CommandCall("set")
    second = CommandCall("set")
    first.arguments.append(Identifier("A"))
    assert second.arguments == []
    assert len(first.arguments) == 1


def test_nodes_compare_by_value():
    a = CommandCall("add_library", [Identifier("mylib"), Identifier("STATIC")])
    b = CommandCall("add_library", [Identifier("mylib"), Identifier("STATIC")])
    c = CommandCall("add_library", [Identifier("other")])
    assert a == b
    assert a != c


def _describe(node: Node) -> str:
    match node:
        case Variable(name=name):
            return f"var:{name}"
        case StringLiteral(value=value):
            return f"str:{value}"
        case _:
            return "other"


def test_nodes_support_structural_matching():
    assert _describe(Variable("MY_VAR")) == "var:MY_VAR"
    assert _describe(StringLiteral("hello")) == "str:hello"
    assert _describe(BooleanLiteral(True)) == "other"


def test_if_statement_branches_default_empty():
    stmt = IfStatement(Identifier("WIN32"))
    assert stmt.then_branch == []
    assert stmt.elseif_branches == []
    assert stmt.else_branch == []


def test_if_statement_holds_elseif_branches():
    branch = ElseIfStatement(Identifier("UNIX"), [CommandCall("message")])
    stmt = IfStatement(Identifier("WIN32"), elseif_branches=[branch])
    assert stmt.elseif_branches[0].condition == Identifier("UNIX")
    assert stmt.elseif_branches[0].body[0].name == "message"


def test_foreach_defaults():
    loop = ForEachStatement(["src"], loop_type="IN_LISTS")
    assert loop.variables == ["src"]
    assert loop.loop_type == "IN_LISTS"
    assert ForEachStatement().loop_type == "ITEMS"


def test_cpm_add_package_fields():
    package = CPMAddPackage(
        "fmt",
        version="10.0.0",
        github_repository="fmtlib/fmt",
        options=[("FMT_INSTALL", "ON")],
    )
    assert package.name == "fmt"
    assert package.version == "10.0.0"
    assert package.github_repository == "fmtlib/fmt"
    assert package.git_tag is None
    assert package.options == [("FMT_INSTALL", "ON")]


def test_file_holds_statements():
    file = File("test.cmake", [BooleanLiteral(True)])
    assert file.path == "test.cmake"
    assert file.statements[0].value is True