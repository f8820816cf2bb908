"""Syntax tree nodes for CMake source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from finchcmake.source import SourceLocation


@dataclass
class Node:
    """Base of all syntax tree nodes; every node may carry a source location."""

    location: SourceLocation = field(default_factory=SourceLocation, kw_only=True)


@dataclass
class StringLiteral(Node):
    """A quoted or unquoted string argument."""

    value: str
    quoted: bool = False


@dataclass
class NumberLiteral(Node):
    """A numeric literal, kept as its source text."""

    text: str

    def as_float(self) -> float:
        """The literal's numeric value; raises ValueError if it is not a number."""
        return float(self.text)


@dataclass
class BooleanLiteral(Node):
    """A boolean constant such as ON or OFF."""

    value: bool


@dataclass
class Variable(Node):
    """A variable reference such as ``${NAME}``."""

    name: str


@dataclass
class Identifier(Node):
    """A bare word."""

    name: str


@dataclass
class CommandCall(Node):
    """An invocation of a CMake command."""

    name: str
    arguments: List[Node] = field(default_factory=list)


@dataclass
class FunctionDef(Node):
    """A ``function()`` ... ``endfunction()`` block."""

    name: str
    parameters: List[str] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class MacroDef(Node):
    """A ``macro()`` ... ``endmacro()`` block."""

    name: str
    parameters: List[str] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)


@dataclass
class ElseIfStatement(Node):
    """An ``elseif()`` condition and the statements it guards."""

    condition: Node
    body: List[Node] = field(default_factory=list)


@dataclass
class ElseStatement(Node):
    """An ``else()`` branch."""

    body: List[Node] = field(default_factory=list)


@dataclass
class IfStatement(Node):
    """An ``if()`` block with optional ``elseif()`` and ``else()`` branches."""

    condition: Node
    then_branch: List[Node] = field(default_factory=list)
    elseif_branches: List[ElseIfStatement] = field(default_factory=list)
    else_branch: List[Node] = field(default_factory=list)


@dataclass
class WhileStatement(Node):
    """A ``while()`` loop."""

    condition: Node
    body: List[Node] = field(default_factory=list)


@dataclass
class ForEachStatement(Node):
    """A ``foreach()`` loop; ``loop_type`` is ITEMS, RANGE, IN_LISTS or IN_ITEMS."""

    variables: List[str] = field(default_factory=list)
    items: List[Node] = field(default_factory=list)
    body: List[Node] = field(default_factory=list)
    loop_type: str = "ITEMS"


@dataclass
class ListExpression(Node):
    """A sequence of elements forming a CMake list."""

    elements: List[Node] = field(default_factory=list)


@dataclass
class GeneratorExpression(Node):
    """A generator expression ``$<...>``, kept as its inner text."""

    expression: str


@dataclass
class BracketExpression(Node):
    """A bracketed expression wrapping another node."""

    content: Node


@dataclass
class BinaryOp(Node):
    """A binary operator in a condition, such as AND or STREQUAL."""

    operator: str
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    """A unary operator in a condition, such as NOT or DEFINED."""

    operator: str
    operand: Node


@dataclass
class FunctionCall(Node):
    """A call to a user-defined function."""

    name: str
    arguments: List[Node] = field(default_factory=list)


@dataclass
class Block(Node):
    """A ``block()`` ... ``endblock()`` group of statements."""

    statements: List[Node] = field(default_factory=list)


@dataclass
class File(Node):
    """A whole parsed CMake file."""

    path: str = ""
    statements: List[Node] = field(default_factory=list)


@dataclass
class ErrorNode(Node):
    """A placeholder for source that could not be parsed."""

    message: str


@dataclass
class CPMAddPackage(Node):
    """A ``CPMAddPackage()`` call."""

    name: str
    version: str = ""
    github_repository: Optional[str] = None
    git_tag: Optional[str] = None
    options: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class CPMFindPackage(Node):
    """A ``CPMFindPackage()`` call."""

    name: str
    version: str = ""
    required: bool = False
    components: List[str] = field(default_factory=list)


@dataclass
class CPMUsePackageLock(Node):
    """A ``CPMUsePackageLock()`` call."""

    lockfile_path: str


@dataclass
class CPMDeclarePackage(Node):
    """A ``CPMDeclarePackage()`` call."""

    name: str
    version: str = ""
    dependencies: List[str] = field(default_factory=list)