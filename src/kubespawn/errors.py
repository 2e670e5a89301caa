# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


class RenderError(RuntimeError):
    """Base class for artifact rendering failures."""


class TemplateNotFound(RenderError):
    """Raised when no template is registered for an artifact kind."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"No template registered for artifact kind {kind}")


class TemplateSyntaxError(RenderError):
    """Raised at load time when a template source does not parse."""

    def __init__(self, kind, message: str, lineno: Optional[int] = None):
        self.kind = kind
        self.lineno = lineno
        where = f" (line {lineno})" if lineno is not None else ""
        super().__init__(f"Template for {kind} is invalid{where}: {message}")


class ParameterError(RenderError):
    """Caller supplied a Parameter Set that cannot be rendered."""


class MissingParameter(ParameterError):
    """
    Required field(s) unset. Raised for one kind by a single render, or for
    a whole pass by the pre-flight check, in which case ``kind`` is a tuple
    of kinds and ``violations`` says which field each kind needs.
    """

    def __init__(self, kind, fields: Iterable[str], violations: Iterable["Violation"] = ()):
        self.kind = kind
        self.fields: Tuple[str, ...] = tuple(fields)
        self.violations: Tuple[Violation, ...] = tuple(violations)
        if isinstance(kind, tuple):
            scope = ", ".join(str(k) for k in kind)
        else:
            scope = str(kind)
        msg = f"Missing required parameter(s) for {scope}: {', '.join(self.fields)}"
        if self.violations:
            msg += "\n" + "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(msg)


@dataclass(frozen=True)
class Violation:
    fields: Tuple[str, ...]
    message: str
    kinds: Tuple[str, ...] = ()

    def __str__(self) -> str:
        scope = f" [{', '.join(self.kinds)}]" if self.kinds else ""
        return f"{', '.join(self.fields)}: {self.message}{scope}"


class ConsistencyViolation(ParameterError):
    """One or more cross-artifact invariants do not hold."""

    def __init__(self, violations: Iterable[Violation]):
        self.violations: Tuple[Violation, ...] = tuple(violations)
        lines = "\n".join(f"  - {v}" for v in self.violations)
        super().__init__(f"Inconsistent parameters:\n{lines}")

    @property
    def fields(self) -> Tuple[str, ...]:
        seen = []
        for v in self.violations:
            for f in v.fields:
                if f not in seen:
                    seen.append(f)
        return tuple(seen)


class ExecutionError(RenderError):
    """Raised when substitution fails while rendering a template."""

    def __init__(self, kind, message: str):
        self.kind = kind
        super().__init__(f"Failed to render {kind}: {message}")
