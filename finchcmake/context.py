"""Variable scopes, cache variables and targets collected during evaluation."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from finchcmake.values import Confidence, EvaluatedValue, Value

logger = logging.getLogger(__name__)


class TargetType(Enum):
    """Kind of build target declared in a CMake file."""

    STATIC_LIBRARY = "static_library"
    SHARED_LIBRARY = "shared_library"
    INTERFACE_LIBRARY = "interface_library"
    EXECUTABLE = "executable"


@dataclass
class Target:
    """A build target and the properties gathered for it."""

    name: str
    type: TargetType = TargetType.STATIC_LIBRARY
    sources: List[str] = field(default_factory=list)
    include_directories: List[str] = field(default_factory=list)
    link_libraries: List[str] = field(default_factory=list)
    compile_definitions: List[str] = field(default_factory=list)
    source_directory: Optional[Path] = None


class EvaluationContext:
    """One variable scope; lookups fall back to the parent scope."""

    def __init__(self, parent: Optional[EvaluationContext] = None) -> None:
        self.parent = parent
        self._variables: Dict[str, EvaluatedValue] = {}
        self._cache_variables: Dict[str, EvaluatedValue] = {}
        self._platform_checks: Dict[str, bool] = {}
        self._targets: List[Target] = []

    def set_variable(
        self, name: str, value: Value, confidence: Confidence = Confidence.CERTAIN
    ) -> None:
        self._variables[name] = EvaluatedValue(value, confidence)
        logger.debug("Set variable '%s' with confidence %s", name, confidence.name)

    def get_variable(self, name: str) -> Optional[EvaluatedValue]:
        found = self._variables.get(name)
        if found is not None:
            return found
        if self.parent is not None:
            return self.parent.get_variable(name)
        return None

    def set_cache_variable(
        self, name: str, value: Value, confidence: Confidence = Confidence.CERTAIN
    ) -> None:
        self._cache_variables[name] = EvaluatedValue(value, confidence)
        logger.debug("Set cache variable '%s' with confidence %s", name, confidence.name)

    def get_cache_variable(self, name: str) -> Optional[EvaluatedValue]:
        # Cache variables are not inherited from the parent scope.
        return self._cache_variables.get(name)

    def set_platform_check(self, check: str, result: bool) -> None:
        self._platform_checks[check] = result
        logger.debug("Set platform check '%s' = %s", check, result)

    def get_platform_check(self, check: str) -> Optional[bool]:
        if check in self._platform_checks:
            return self._platform_checks[check]
        if self.parent is not None:
            return self.parent.get_platform_check(check)
        return None

    def add_target(self, target: Target) -> None:
        self._targets.append(target)
        logger.debug("Added target '%s' of type %s", target.name, target.type.name)

    @property
    def targets(self) -> Tuple[Target, ...]:
        """Targets declared in this scope, in declaration order."""
        return tuple(self._targets)

    def find_target(self, name: str) -> Optional[Target]:
        """Return the first target in this scope with the given name."""
        return next((t for t in self._targets if t.name == name), None)

    def create_child_scope(self) -> EvaluationContext:
        return EvaluationContext(self)

    def initialize_builtin_variables(self) -> None:
        """Populate the scope with the variables CMake predefines."""
        uncertain = Confidence.UNCERTAIN
        certain = Confidence.CERTAIN
        self.set_variable("CMAKE_SOURCE_DIR", "/source", uncertain)
        self.set_variable("CMAKE_BINARY_DIR", "/build", uncertain)
        self.set_variable("CMAKE_CURRENT_SOURCE_DIR", "/source", uncertain)
        self.set_variable("CMAKE_CURRENT_BINARY_DIR", "/build", uncertain)

        if sys.platform.startswith("win"):
            platform_values = {
                "WIN32": "1", "WINDOWS": "1", "UNIX": "", "APPLE": "", "LINUX": "",
            }
        elif sys.platform == "darwin":
            platform_values = {
                "APPLE": "1", "UNIX": "1", "DARWIN": "1",
                "WIN32": "", "WINDOWS": "", "LINUX": "",
            }
        else:
            platform_values = {
                "UNIX": "1", "LINUX": "1", "WIN32": "", "WINDOWS": "", "APPLE": "",
            }
        for name, value in platform_values.items():
            self.set_variable(name, value, certain)

        self.set_variable("CMAKE_CXX_COMPILER_ID", "Generic", uncertain)
        self.set_variable("CMAKE_CXX_STANDARD", "17", Confidence.LIKELY)
        self.set_variable("CMAKE_C_COMPILER_ID", "Generic", uncertain)
        self.set_variable("CMAKE_C_STANDARD", "11", Confidence.LIKELY)

        self.set_variable("CMAKE_BUILD_TYPE", "Release", uncertain)

        for name, value in (
            ("TRUE", "1"), ("FALSE", ""), ("ON", "ON"),
            ("OFF", "OFF"), ("YES", "1"), ("NO", ""),
        ):
            self.set_variable(name, value, certain)

        logger.debug("Initialized built-in CMake variables")

    def has_variable(self, name: str) -> bool:
        return self.get_variable(name) is not None

    def has_cache_variable(self, name: str) -> bool:
        return self.get_cache_variable(name) is not None

    def list_variables(self) -> List[str]:
        """Sorted names of all variables visible from this scope."""
        names = set(self._variables)
        if self.parent is not None:
            names.update(self.parent.list_variables())
        return sorted(names)

    def list_cache_variables(self) -> List[str]:
        return sorted(self._cache_variables)