# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from kernelsig.compat import ICS_TARGET_API, JB_TARGET_API, MINIMUM_TARGET_API
from kernelsig.context import KernelContext
from kernelsig.decl import Function, ParamVar, Type


@pytest.fixture
def make_function():
    """Build a ``Function`` from ``(type, name)`` pairs."""

    def _make(name, params=(), return_type="void", exported=True):
        return Function(
            name,
            Type(return_type),
            [ParamVar(pname, Type(ptype)) for ptype, pname in params],
            exported=exported,
            location=f"{name}.rs:1",
        )

    return _make


@pytest.fixture
def make_context():
    def _make(target_api=JB_TARGET_API, **kwargs):
        return KernelContext(target_api, **kwargs)

    return _make


@pytest.fixture
def legacy_api():
    return MINIMUM_TARGET_API


@pytest.fixture
def ics_api():
    return ICS_TARGET_API


@pytest.fixture
def modern_api():
    return JB_TARGET_API
