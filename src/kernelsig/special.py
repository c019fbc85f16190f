# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from enum import Enum

from kernelsig.compat import allows_legacy_graphics_root
from kernelsig.decl import Function
from kernelsig.diagnostics import DiagnosticKind, DiagnosticSink, ErrorAccumulator
from kernelsig.errors import SpecialFunctionError

logger = logging.getLogger(__name__)


class SpecialFunctionKind(str, Enum):
    graphics_root = "GraphicsRoot"
    legacy_graphics_root = "LegacyGraphicsRoot"
    compute_kernel_candidate = "ComputeKernelCandidate"
    lifecycle_init = "LifecycleInit"
    lifecycle_destroy = "LifecycleDestroy"
    not_special = "NotSpecial"


def _is_legacy_graphics_root(target_api: int, func: Function) -> bool:
    return (
        func.is_root()
        and func.num_params == 1
        and allows_legacy_graphics_root(target_api)
        and func.return_type.is_int()
    )


def is_legacy_or_graphics_root(target_api: int, func: Function) -> bool:
    """Whether ``func`` is a graphics ``root()``, in modern or legacy form.

    The modern form takes no parameters. The legacy form takes a single
    parameter and returns ``int``; it is only recognized for legacy targets.
    """
    if not func.is_root():
        return False
    if func.num_params == 0:
        return True
    return _is_legacy_graphics_root(target_api, func)


def is_foreach_candidate(target_api: int, func: Function) -> bool:
    """Whether ``func`` should go through kernel signature matching.

    A ``root()`` that is not a graphics root is always a candidate, even
    without a leading pointer, so that its signature gets diagnosed.
    """
    if is_legacy_or_graphics_root(target_api, func) or func.is_lifecycle():
        return False
    if func.num_params == 0:
        return False
    if func.is_root():
        return True
    return func.exported and func.param_types[0].is_pointer()


def classify_special(target_api: int, func: Function) -> SpecialFunctionKind:
    if is_legacy_or_graphics_root(target_api, func):
        if func.num_params == 0:
            kind = SpecialFunctionKind.graphics_root
        else:
            kind = SpecialFunctionKind.legacy_graphics_root
    elif func.is_init():
        kind = SpecialFunctionKind.lifecycle_init
    elif func.is_dtor():
        kind = SpecialFunctionKind.lifecycle_destroy
    elif is_foreach_candidate(target_api, func):
        kind = SpecialFunctionKind.compute_kernel_candidate
    else:
        kind = SpecialFunctionKind.not_special

    logger.debug("%s() classified as %s", func.name, kind.value)
    return kind


def validate_special_form(
    target_api: int, sink: DiagnosticSink, func: Function
) -> bool:
    """Check the arity and return type contract of a special function.

    Parameters
    ----------
    target_api : int
        The API level the module is compiled for.
    sink : DiagnosticSink
        Receives one diagnostic per violated rule.
    func : Function
        A graphics root, ``init`` or ``.rs.dtor`` function.

    Returns
    -------
    valid : bool
        True if no rule was violated.

    Raises
    ------
    SpecialFunctionError
        If ``func`` is none of the special functions.
    """
    acc = ErrorAccumulator(sink, func.name, func.location)

    if is_legacy_or_graphics_root(target_api, func):
        if func.num_params == 1:
            param = func.params[0]
            if not param.type_.is_int():
                acc.record(
                    DiagnosticKind.invalid_parameter_type,
                    parameter=param.name,
                    type_name=param.type_.name,
                    location=param.location,
                )

        if not func.return_type.is_int():
            acc.record(
                DiagnosticKind.return_type_mismatch,
                expected="an int",
                usage=" for graphics usage",
            )
    elif func.is_lifecycle():
        if func.num_params != 0:
            acc.record(DiagnosticKind.arity_mismatch)

        if not func.return_type.is_void():
            acc.record(
                DiagnosticKind.return_type_mismatch,
                expected="a void type",
                usage="",
            )
    else:
        raise SpecialFunctionError(func.name)

    return acc.ok
