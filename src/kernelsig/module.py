# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from dataclasses import dataclass, field

from kernelsig.context import KernelContext
from kernelsig.decl import Function
from kernelsig.diagnostics import Diagnostic, DiagnosticCollector
from kernelsig.foreach import classify_kernel, create_dummy_root
from kernelsig.signature import ExportFailure, KernelSignature
from kernelsig.special import (
    SpecialFunctionKind,
    classify_special,
    validate_special_form,
)

logger = logging.getLogger(__name__)

_SPECIAL_FORMS = frozenset(
    {
        SpecialFunctionKind.graphics_root,
        SpecialFunctionKind.legacy_graphics_root,
        SpecialFunctionKind.lifecycle_init,
        SpecialFunctionKind.lifecycle_destroy,
    }
)


@dataclass
class ModuleReport:
    """Result of analyzing every function of one module.

    ``signatures`` keeps declaration order, with the dummy root (if any)
    first. ``special_forms`` maps special function names to whether their
    contract holds.
    """

    kinds: dict[str, SpecialFunctionKind] = field(default_factory=dict)
    signatures: list[KernelSignature] = field(default_factory=list)
    failures: list[ExportFailure] = field(default_factory=list)
    special_forms: dict[str, bool] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def signature(self, name: str) -> KernelSignature | None:
        for sig in self.signatures:
            if sig.name == name:
                return sig
        return None


def analyze_module(
    context: KernelContext,
    functions: list[Function],
    dummy_root: bool = True,
) -> ModuleReport:
    """Classify all functions of a module.

    Parameters
    ----------
    context : KernelContext
        The module's compilation context. Every diagnostic is still sent to
        its sink.
    functions : list[Function]
        Function declarations in source order.
    dummy_root : bool
        Add a placeholder ``root`` kernel when the module defines no
        ``root()`` at all. Default to True.

    Returns
    -------
    report : ModuleReport
    """
    collector = DiagnosticCollector(forward_to=context.sink)
    scoped = KernelContext(context.target_api, collector, context.exporter)
    report = ModuleReport()

    for func_decl in functions:
        kind = classify_special(context.target_api, func_decl)
        report.kinds[func_decl.name] = kind

        if kind in _SPECIAL_FORMS:
            report.special_forms[func_decl.name] = validate_special_form(
                context.target_api, collector, func_decl
            )
        elif kind is SpecialFunctionKind.compute_kernel_candidate:
            result = classify_kernel(scoped, func_decl)
            if isinstance(result, ExportFailure):
                logger.info("Dropped kernel %s()", result.name)
                report.failures.append(result)
            else:
                report.signatures.append(result)

    if dummy_root and not any(f.is_root() for f in functions):
        report.signatures.insert(0, create_dummy_root(context))

    report.diagnostics = list(collector)
    return report
