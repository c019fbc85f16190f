# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import numba

from kernelsig.context import KernelContext
from kernelsig.decl import Function, ParamVar, Type
from kernelsig.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    LoggingSink,
)
from kernelsig.foreach import classify_kernel, create_dummy_root
from kernelsig.module import ModuleReport, analyze_module
from kernelsig.signature import (
    ExportFailure,
    KernelSignature,
    SignatureRole,
    decode_metadata,
    encode_metadata,
)
from kernelsig.special import (
    SpecialFunctionKind,
    classify_special,
    is_foreach_candidate,
    is_legacy_or_graphics_root,
    validate_special_form,
)

import importlib.metadata

__version__ = importlib.metadata.version("kernelsig")

major, minor, *_ = numba.__version__.split(".")
if (int(major), int(minor)) < (0, 59):
    raise RuntimeError("Numba version >= 0.59 is required")

__all__ = [
    "__version__",
    "KernelContext",
    "Function",
    "ParamVar",
    "Type",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "LoggingSink",
    "classify_kernel",
    "create_dummy_root",
    "ModuleReport",
    "analyze_module",
    "ExportFailure",
    "KernelSignature",
    "SignatureRole",
    "decode_metadata",
    "encode_metadata",
    "SpecialFunctionKind",
    "classify_special",
    "is_foreach_candidate",
    "is_legacy_or_graphics_root",
    "validate_special_form",
]
