# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from kernelsig.compat import CompatibilityTier, tier_for
from kernelsig.diagnostics import DiagnosticCollector, DiagnosticSink
from kernelsig.export import TypeExporter


class KernelContext:
    """Compilation state shared by every kernel of one module.

    Parameters
    ----------
    target_api : int
        The API level the module is compiled for.
    sink : DiagnosticSink | None
        Where diagnostics go. Defaults to a fresh ``DiagnosticCollector``.
    exporter : TypeExporter | None
        Used to reflect kernel types. Defaults to an exporter that only
        knows builtin types.
    """

    def __init__(
        self,
        target_api: int,
        sink: DiagnosticSink | None = None,
        exporter: TypeExporter | None = None,
    ):
        self.tier: CompatibilityTier = tier_for(target_api)
        self.target_api = target_api
        self.sink = sink if sink is not None else DiagnosticCollector()
        self.exporter = exporter if exporter is not None else TypeExporter()
