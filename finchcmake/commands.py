"""Evaluation of the CMake commands the evaluator understands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from finchcmake.ast import CommandCall, Node
from finchcmake.context import EvaluationContext, Target, TargetType
from finchcmake.errors import AnalysisError
from finchcmake.values import Confidence, EvaluatedValue, to_string

logger = logging.getLogger(__name__)

_VISIBILITY = frozenset({"PUBLIC", "PRIVATE", "INTERFACE"})
_LIBRARY_TYPES = {
    "SHARED": TargetType.SHARED_LIBRARY,
    "STATIC": TargetType.STATIC_LIBRARY,
    "INTERFACE": TargetType.INTERFACE_LIBRARY,
}
_OPTION_TRUE = frozenset({"ON", "TRUE", "YES", "1"})


class _Evaluator(Protocol):
    context: EvaluationContext

    def evaluate(self, node: Node) -> EvaluatedValue: ...


def _done() -> EvaluatedValue:
    return EvaluatedValue("", Confidence.CERTAIN)


def _try_evaluate(evaluator: _Evaluator, node: Node) -> Optional[EvaluatedValue]:
    try:
        return evaluator.evaluate(node)
    except AnalysisError:
        return None


def _try_string(evaluator: _Evaluator, node: Node) -> Optional[str]:
    result = _try_evaluate(evaluator, node)
    return None if result is None else to_string(result.value)


def evaluate_set(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """``set(NAME value...)``: one value is stored as is, several as a list."""
    args = command.arguments
    if len(args) < 2:
        raise AnalysisError("set() requires at least 2 arguments")

    try:
        name_result = evaluator.evaluate(args[0])
    except AnalysisError as exc:
        raise AnalysisError("Cannot determine variable name") from exc
    if not name_result.is_certain() or not isinstance(name_result.value, str):
        raise AnalysisError("Cannot determine variable name")
    var_name = name_result.value

    if len(args) == 2:
        result = _try_evaluate(evaluator, args[1])
        if result is not None:
            evaluator.context.set_variable(var_name, result.value, result.confidence)
        return _done()

    values: List[str] = []
    confidence = Confidence.CERTAIN
    for arg in args[1:]:
        result = _try_evaluate(evaluator, arg)
        if result is None:
            confidence = Confidence.UNKNOWN
            break
        values.append(to_string(result.value))
        confidence = min(confidence, result.confidence)
    evaluator.context.set_variable(var_name, values, confidence)
    return _done()


def evaluate_cmake_minimum_required(
    evaluator: _Evaluator, command: CommandCall
) -> EvaluatedValue:
    """Record the version following the VERSION keyword."""
    args = command.arguments
    if len(args) < 2:
        raise AnalysisError("cmake_minimum_required() requires VERSION argument")

    version_index = next(
        (
            index + 1
            for index, arg in enumerate(args[:-1])
            if _try_string(evaluator, arg) == "VERSION"
        ),
        None,
    )
    if version_index is not None:
        version = _try_string(evaluator, args[version_index])
        if version is not None:
            evaluator.context.set_variable(
                "CMAKE_MINIMUM_REQUIRED_VERSION", version, Confidence.CERTAIN
            )
    return _done()


def evaluate_option(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """``option(NAME "help" [value])``: store ON or OFF as an overridable cache variable."""
    args = command.arguments
    if len(args) < 2:
        raise AnalysisError("option() requires at least 2 arguments")

    option_name = to_string(evaluator.evaluate(args[0]).value)

    enabled = False
    if len(args) >= 3:
        value = _try_string(evaluator, args[-1])
        enabled = value in _OPTION_TRUE

    evaluator.context.set_cache_variable(
        option_name, "ON" if enabled else "OFF", Confidence.UNCERTAIN
    )
    return _done()


def evaluate_project(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """Set PROJECT_NAME and CMAKE_PROJECT_NAME from the first argument."""
    if command.arguments:
        project_name = _try_string(evaluator, command.arguments[0])
        if project_name is not None:
            context = evaluator.context
            context.set_variable("PROJECT_NAME", project_name, Confidence.CERTAIN)
            context.set_variable("CMAKE_PROJECT_NAME", project_name, Confidence.CERTAIN)
    return _done()


def _collect_sources(evaluator: _Evaluator, nodes: List[Node]) -> List[str]:
    return [s for s in (_try_string(evaluator, n) for n in nodes) if s is not None]


def evaluate_add_library(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """Declare a library target; the type defaults to static."""
    args = command.arguments
    if not args:
        raise AnalysisError("add_library() requires target name")

    target_name = to_string(evaluator.evaluate(args[0]).value)
    target = Target(target_name, TargetType.STATIC_LIBRARY)

    source_start = 1
    if len(args) > 1:
        kind = _try_string(evaluator, args[1])
        if kind in _LIBRARY_TYPES:
            target.type = _LIBRARY_TYPES[kind]
            source_start = 2

    target.sources = _collect_sources(evaluator, args[source_start:])
    target.source_directory = Path.cwd()
    evaluator.context.add_target(target)
    logger.debug("Added library target: %s", target_name)
    return _done()


def evaluate_add_executable(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """Declare an executable target with the remaining arguments as sources."""
    args = command.arguments
    if not args:
        raise AnalysisError("add_executable() requires target name")

    target_name = to_string(evaluator.evaluate(args[0]).value)
    target = Target(target_name, TargetType.EXECUTABLE)
    target.sources = _collect_sources(evaluator, args[1:])
    target.source_directory = Path.cwd()
    evaluator.context.add_target(target)
    logger.debug("Added executable target: %s", target_name)
    return _done()


def _extend_target(
    evaluator: _Evaluator, command: CommandCall, attribute: str, requirement: str
) -> EvaluatedValue:
    args = command.arguments
    if len(args) < 2:
        raise AnalysisError(f"{command.name}() requires {requirement}")

    target_name = to_string(evaluator.evaluate(args[0]).value)
    target = evaluator.context.find_target(target_name)
    if target is not None:
        items: List[str] = getattr(target, attribute)
        for arg in args[1:]:
            item = _try_string(evaluator, arg)
            if item is not None and item not in _VISIBILITY:
                items.append(item)
        logger.debug("Updated %s for target: %s", attribute, target_name)
    return _done()


def evaluate_target_include_directories(
    evaluator: _Evaluator, command: CommandCall
) -> EvaluatedValue:
    """Add include directories to a declared target, skipping visibility keywords."""
    return _extend_target(
        evaluator, command, "include_directories", "target and directories"
    )


def evaluate_target_link_libraries(
    evaluator: _Evaluator, command: CommandCall
) -> EvaluatedValue:
    """Add link libraries to a declared target, skipping visibility keywords."""
    return _extend_target(evaluator, command, "link_libraries", "target and libraries")


def evaluate_target_compile_definitions(
    evaluator: _Evaluator, command: CommandCall
) -> EvaluatedValue:
    """Add compile definitions to a declared target, skipping visibility keywords."""
    return _extend_target(
        evaluator, command, "compile_definitions", "target and definitions"
    )


def _no_effect(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    return _done()


_HANDLERS: Dict[str, Callable[[_Evaluator, CommandCall], EvaluatedValue]] = {
    "set": evaluate_set,
    "if": _no_effect,
    "cmake_minimum_required": evaluate_cmake_minimum_required,
    "option": evaluate_option,
    "project": evaluate_project,
    "message": _no_effect,
    "add_library": evaluate_add_library,
    "add_executable": evaluate_add_executable,
    "target_include_directories": evaluate_target_include_directories,
    "target_link_libraries": evaluate_target_link_libraries,
    "target_compile_definitions": evaluate_target_compile_definitions,
}


def evaluate_command(evaluator: _Evaluator, command: CommandCall) -> EvaluatedValue:
    """Evaluate a command call; commands without a handler yield an unknown value."""
    handler = _HANDLERS.get(command.name)
    if handler is None:
        logger.debug("Unknown command for evaluation: %s", command.name)
        return EvaluatedValue("", Confidence.UNKNOWN)
    return handler(evaluator, command)