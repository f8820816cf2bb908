"""Evaluation of a CMake syntax tree into variables, cache entries and targets."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from finchcmake import ast
from finchcmake.commands import evaluate_command
from finchcmake.context import EvaluationContext, Target
from finchcmake.errors import AnalysisError
from finchcmake.values import Confidence, EvaluatedValue, is_truthy, to_string

logger = logging.getLogger(__name__)

_VARIABLE_PATTERN = re.compile(r"\$\{([^}]+)\}")

_PLATFORM_VARIABLES = frozenset(
    {"WIN32", "WINDOWS", "UNIX", "LINUX", "APPLE", "DARWIN", "MSVC", "MINGW", "CYGWIN"}
)


def _unknown() -> EvaluatedValue:
    return EvaluatedValue("", Confidence.UNKNOWN)


def _done() -> EvaluatedValue:
    return EvaluatedValue("", Confidence.CERTAIN)


class CMakeEvaluator:
    """Evaluates syntax tree nodes against an evaluation context."""

    def __init__(self, context: EvaluationContext) -> None:
        self.context = context
        self._handlers: Dict[type, Callable[[ast.Node], EvaluatedValue]] = {
            ast.StringLiteral: self._string_literal,
            ast.NumberLiteral: self._number_literal,
            ast.BooleanLiteral: self._boolean_literal,
            ast.Variable: self._variable,
            ast.Identifier: self._identifier,
            ast.CommandCall: self._command_call,
            ast.IfStatement: self._if_statement,
            ast.ListExpression: self._list_expression,
            ast.GeneratorExpression: self._generator_expression,
            ast.BracketExpression: self._bracket_expression,
            ast.Block: self._block,
            ast.File: self._file,
            ast.ErrorNode: self._error_node,
        }
        for unevaluated in (
            ast.FunctionDef,
            ast.MacroDef,
            ast.ElseIfStatement,
            ast.ElseStatement,
            ast.WhileStatement,
            ast.ForEachStatement,
            ast.BinaryOp,
            ast.UnaryOp,
            ast.FunctionCall,
            ast.CPMAddPackage,
            ast.CPMFindPackage,
            ast.CPMUsePackageLock,
            ast.CPMDeclarePackage,
        ):
            self._handlers[unevaluated] = lambda node: _unknown()

    def evaluate(self, node: ast.Node) -> EvaluatedValue:
        """Evaluate one node; raises AnalysisError when it cannot be evaluated."""
        for node_type in type(node).__mro__:
            handler = self._handlers.get(node_type)
            if handler is not None:
                return handler(node)
        raise AnalysisError(f"Not evaluated: {type(node).__name__}")

    def _string_literal(self, node: ast.StringLiteral) -> EvaluatedValue:
        return EvaluatedValue(self.interpolate_string(node.value), Confidence.CERTAIN)

    def _number_literal(self, node: ast.NumberLiteral) -> EvaluatedValue:
        try:
            return EvaluatedValue(node.as_float(), Confidence.CERTAIN)
        except ValueError as exc:
            raise AnalysisError(f"Invalid number: {node.text}") from exc

    def _boolean_literal(self, node: ast.BooleanLiteral) -> EvaluatedValue:
        return EvaluatedValue(node.value, Confidence.CERTAIN)

    def _variable(self, node: ast.Variable) -> EvaluatedValue:
        value = self.context.get_variable(node.name)
        if value is not None:
            return value
        logger.debug("Unknown variable: %s", node.name)
        return EvaluatedValue(f"${{{node.name}}}", Confidence.UNKNOWN)

    def _identifier(self, node: ast.Identifier) -> EvaluatedValue:
        return EvaluatedValue(node.name, Confidence.CERTAIN)

    def _command_call(self, node: ast.CommandCall) -> EvaluatedValue:
        return evaluate_command(self, node)

    def _run_all(self, statements: Iterable[ast.Node]) -> None:
        for statement in statements:
            try:
                self.evaluate(statement)
            except AnalysisError as exc:
                logger.debug("Statement not evaluated: %s", exc)

    def _condition_holds(self, condition: ast.Node) -> Optional[bool]:
        try:
            return self.evaluate_condition(condition)
        except AnalysisError:
            return None

    def _if_statement(self, node: ast.IfStatement) -> EvaluatedValue:
        holds = self._condition_holds(node.condition)
        if holds:
            self._run_all(node.then_branch)
        elif holds is False:
            branch = next(
                (b for b in node.elseif_branches if self._condition_holds(b.condition)),
                None,
            )
            if branch is not None:
                self._run_all(branch.body)
            else:
                self._run_all(node.else_branch)
        return _done()

    def _list_expression(self, node: ast.ListExpression) -> EvaluatedValue:
        values: List[str] = []
        confidence = Confidence.CERTAIN
        for element in node.elements:
            try:
                result = self.evaluate(element)
            except AnalysisError:
                confidence = Confidence.UNKNOWN
                break
            values.append(to_string(result.value))
            confidence = min(confidence, result.confidence)
        return EvaluatedValue(values, confidence)

    def _generator_expression(self, node: ast.GeneratorExpression) -> EvaluatedValue:
        # Left unevaluated so that it can be carried into the generated build.
        return EvaluatedValue(f"${{{node.expression}}}", Confidence.UNKNOWN)

    def _bracket_expression(self, node: ast.BracketExpression) -> EvaluatedValue:
        return self.evaluate(node.content)

    def _block(self, node: ast.Block) -> EvaluatedValue:
        self._run_all(node.statements)
        return _done()

    def _file(self, node: ast.File) -> EvaluatedValue:
        self._run_all(node.statements)
        return _done()

    def _error_node(self, node: ast.ErrorNode) -> EvaluatedValue:
        raise AnalysisError(node.message)

    def interpolate_string(self, text: str) -> str:
        """Replace known ``${VAR}`` references; unknown ones are left in place."""

        def replace(match: re.Match) -> str:
            try:
                return self.expand_variable_reference(match.group(1))
            except AnalysisError:
                return match.group(0)

        return _VARIABLE_PATTERN.sub(replace, text)

    def expand_variable_reference(self, name: str) -> str:
        """Expand a variable name to its string value; raises if it is unknown."""
        if name.startswith("ENV{") and name.endswith("}"):
            # Environment variables are not known until build time.
            return f"${{{name}}}"
        value = self.context.get_variable(name)
        if value is not None:
            return to_string(value.value)
        cached = self.context.get_cache_variable(name)
        if cached is not None:
            return to_string(cached.value)
        raise AnalysisError(f"Unknown variable: {name}")

    def evaluate_condition(self, condition: ast.Node) -> bool:
        """Evaluate a condition node and apply CMake's truth rules."""
        return is_truthy(self.evaluate(condition).value)

    def evaluate_platform_check(self, platform: str) -> bool:
        """Decide a platform check such as WIN32; raises if it cannot be decided."""
        cached = self.context.get_platform_check(platform)
        if cached is not None:
            return cached
        if platform in _PLATFORM_VARIABLES:
            variable = self.context.get_variable(platform)
            if variable is not None and variable.is_certain():
                result = is_truthy(variable.value)
                self.context.set_platform_check(platform, result)
                return result
        logger.warning("Unknown platform check: %s", platform)
        raise AnalysisError(f"Cannot evaluate platform: {platform}")


@dataclass
class ProjectAnalysis:
    """Summary of a project gathered from an evaluated CMake file."""

    project_name: str = ""
    project_version: str = ""
    targets: List[Target] = field(default_factory=list)
    global_variables: Dict[str, str] = field(default_factory=dict)
    cache_variables: Dict[str, str] = field(default_factory=dict)


class CMakeFileEvaluator:
    """Evaluates whole files in a context preloaded with CMake's built-in variables."""

    def __init__(self) -> None:
        self.context = EvaluationContext()
        self.context.initialize_builtin_variables()

    def evaluate_file(self, file: ast.File) -> None:
        CMakeEvaluator(self.context).evaluate(file)

    def analyze(self, file: ast.File) -> ProjectAnalysis:
        """Evaluate the file and summarise the project it describes."""
        self.evaluate_file(file)
        context = self.context
        analysis = ProjectAnalysis()

        project_name = context.get_variable("PROJECT_NAME")
        if project_name is not None:
            analysis.project_name = to_string(project_name.value)
        project_version = context.get_variable("PROJECT_VERSION")
        if project_version is not None:
            analysis.project_version = to_string(project_version.value)

        analysis.targets = list(context.targets)
        analysis.global_variables = {
            name: to_string(context.get_variable(name).value)
            for name in context.list_variables()
        }
        analysis.cache_variables = {
            name: to_string(context.get_cache_variable(name).value)
            for name in context.list_cache_variables()
        }
        return analysis

    def get_variable(self, name: str) -> Optional[EvaluatedValue]:
        return self.context.get_variable(name)

    def list_variables(self) -> List[str]:
        return self.context.list_variables()