# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Protocol

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    missing_required_buffer = "MissingRequiredBuffer"
    unsupported_parameter_type = "UnsupportedParameterType"
    duplicate_or_misordered_parameter = "DuplicateOrMisorderedParameter"
    unexpected_extra_parameter = "UnexpectedExtraParameter"
    skip_not_allowed = "SkipNotAllowed"
    unsupported_kernel_form = "UnsupportedKernelForm"
    arity_mismatch = "ArityMismatch"
    return_type_mismatch = "ReturnTypeMismatch"
    invalid_parameter_type = "InvalidParameterType"
    user_data_export_failure = "UserDataExportFailure"


class Severity(str, Enum):
    error = "error"
    warning = "warning"


MESSAGE_TEMPLATES: dict[DiagnosticKind, str] = {
    DiagnosticKind.missing_required_buffer: (
        "Compute kernel {function}() must have at least one parameter for in "
        "or out"
    ),
    DiagnosticKind.unsupported_parameter_type: (
        "Unexpected kernel {function}() parameter '{parameter}' of type "
        "'{type_name}'"
    ),
    DiagnosticKind.duplicate_or_misordered_parameter: (
        "Duplicate parameter entry (by position/name): '{parameter}'"
    ),
    DiagnosticKind.unexpected_extra_parameter: (
        "Unexpected kernel {function}() parameter '{parameter}' of type "
        "'{type_name}'"
    ),
    DiagnosticKind.skip_not_allowed: (
        "Compute kernel {function}() targeting SDK levels {min_api}-{max_api} "
        "may not skip parameters"
    ),
    DiagnosticKind.unsupported_kernel_form: (
        "Non-root compute kernel {function}() is not supported in SDK levels "
        "{min_api}-{max_api}"
    ),
    DiagnosticKind.arity_mismatch: (
        "{function}(void) is required to have no parameters"
    ),
    DiagnosticKind.return_type_mismatch: (
        "{function}() is required to return {expected}{usage}"
    ),
    DiagnosticKind.invalid_parameter_type: (
        "invalid parameter type for legacy graphics root() function: "
        "{type_name}"
    ),
    DiagnosticKind.user_data_export_failure: (
        "Failed to export the function {function}. There's at least one "
        "parameter whose type is not supported by the reflection"
    ),
}


@dataclass(frozen=True)
class Diagnostic:
    """One reported rule violation.

    ``extra`` holds template arguments other than the function, parameter
    and type names, as ``(key, value)`` pairs.
    """

    kind: DiagnosticKind
    function: str
    parameter: str | None = None
    type_name: str | None = None
    location: str | None = None
    severity: Severity = Severity.error
    extra: tuple[tuple[str, Any], ...] = ()

    @property
    def message(self) -> str:
        return MESSAGE_TEMPLATES[self.kind].format(
            function=self.function,
            parameter=self.parameter,
            type_name=self.type_name,
            **dict(self.extra),
        )

    def __str__(self):
        prefix = f"{self.location}: " if self.location else ""
        return f"{prefix}{self.severity.value}: {self.message}"


class DiagnosticSink(Protocol):
    """Append-only destination for diagnostics.

    ``report`` must not raise; the same function may report many times.
    """

    def report(self, diagnostic: Diagnostic) -> None: ...


class DiagnosticCollector:
    """Keep every reported diagnostic in memory, optionally forwarding it."""

    def __init__(self, forward_to: DiagnosticSink | None = None):
        self.diagnostics: list[Diagnostic] = []
        self.forward_to = forward_to

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.forward_to is not None:
            self.forward_to.report(diagnostic)

    def kinds(self) -> list[DiagnosticKind]:
        return [d.kind for d in self.diagnostics]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self):
        return len(self.diagnostics)


class LoggingSink:
    """Write diagnostics to a logger, one record per diagnostic."""

    _LEVELS = {Severity.error: logging.ERROR, Severity.warning: logging.WARNING}

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logging.getLogger("kernelsig.diagnostics.sink")

    def report(self, diagnostic: Diagnostic) -> None:
        self.log.log(self._LEVELS[diagnostic.severity], "%s", diagnostic)


class ErrorAccumulator:
    """Collect the errors of a single analysis call.

    Every recorded error is also sent to the sink right away. Analysis keeps
    going after an error so one pass reports every violation.
    """

    def __init__(
        self,
        sink: DiagnosticSink,
        function: str,
        location: str | None = None,
    ):
        self.sink = sink
        self.function = function
        self.location = location
        self.errors: list[Diagnostic] = []

    def record(
        self,
        kind: DiagnosticKind,
        *,
        parameter: str | None = None,
        type_name: str | None = None,
        location: str | None = None,
        **extra,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            kind,
            self.function,
            parameter=parameter,
            type_name=type_name,
            location=location or self.location,
            extra=tuple(sorted(extra.items())),
        )
        logger.debug("Recorded %s for %s()", kind.value, self.function)
        self.errors.append(diagnostic)
        self.sink.report(diagnostic)
        return diagnostic

    @property
    def ok(self) -> bool:
        return not self.errors
