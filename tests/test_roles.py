# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from kernelsig.diagnostics import DiagnosticCollector, DiagnosticKind, ErrorAccumulator
from kernelsig.roles import (
    RoleAssignment,
    match_positional,
    resolve_coordinates,
)
from kernelsig.shapes import ParameterShape, ShapeKind, extract_shapes
from kernelsig.signature import SignatureRole

CONST_PTR = ShapeKind.pointer_to_const
MUT_PTR = ShapeKind.pointer_to_mutable
UINT = ShapeKind.unsigned_scalar
OTHER = ShapeKind.other


def shapes(*specs):
    return tuple(
        ParameterShape(i, name, kind, kind.value)
        for i, (kind, name) in enumerate(specs)
    )


@pytest.fixture
def sink():
    return DiagnosticCollector()


@pytest.fixture
def acc(sink):
    return ErrorAccumulator(sink, "kernel")


def test_extract_shapes(make_function):
    func = make_function(
        "kernel",
        [
            ("const float *", "in"),
            ("float *", "out"),
            ("uint32_t", "x"),
            ("int", "y"),
        ],
    )

    assert [s.kind for s in extract_shapes(func)] == [
        CONST_PTR,
        MUT_PTR,
        UINT,
        OTHER,
    ]
    assert [s.index for s in extract_shapes(func)] == [0, 1, 2, 3]


def test_positional_all_roles(acc):
    params = shapes(
        (CONST_PTR, "in"), (MUT_PTR, "out"), (CONST_PTR, "usr"), (UINT, "x")
    )

    assignment, next_index = match_positional(params, acc)

    assert assignment.get(SignatureRole.IN) is params[0]
    assert assignment.get(SignatureRole.OUT) is params[1]
    assert assignment.get(SignatureRole.USR_DATA) is params[2]
    assert next_index == 3
    assert acc.ok


def test_positional_out_only(acc):
    params = shapes((MUT_PTR, "out"))

    assignment, next_index = match_positional(params, acc)

    assert assignment.get(SignatureRole.IN) is None
    assert assignment.get(SignatureRole.OUT) is params[0]
    assert next_index == 1
    assert acc.ok


def test_positional_skips_out(acc):
    params = shapes((CONST_PTR, "in"), (CONST_PTR, "usr"))

    assignment, next_index = match_positional(params, acc)

    assert assignment.get(SignatureRole.OUT) is None
    assert assignment.get(SignatureRole.USR_DATA) is params[1]
    assert next_index == 2


def test_positional_never_backtracks(acc):
    # The second mutable pointer cannot be user data.
    params = shapes((MUT_PTR, "a"), (MUT_PTR, "b"))

    assignment, next_index = match_positional(params, acc)

    assert assignment.get(SignatureRole.OUT) is params[0]
    assert assignment.get(SignatureRole.USR_DATA) is None
    assert next_index == 1


def test_positional_missing_buffer_continues(acc, sink):
    params = shapes((UINT, "x"), (UINT, "y"))

    assignment, next_index = match_positional(params, acc)

    assert next_index == 0
    assert not assignment.slots
    assert sink.kinds() == [DiagnosticKind.missing_required_buffer]


@pytest.mark.parametrize(
    "names, expected_x, expected_y",
    [
        (["x", "y"], "x", "y"),
        (["y"], None, "y"),
        (["a"], "a", None),
        (["a", "b"], "a", "b"),
        (["x", "b"], "x", "b"),
        (["a", "y"], "a", "y"),
    ],
)
def test_coordinates_valid(acc, names, expected_x, expected_y):
    params = shapes(*[(UINT, n) for n in names])
    assignment = RoleAssignment()

    resolve_coordinates(params, assignment, acc)

    x = assignment.get(SignatureRole.X)
    y = assignment.get(SignatureRole.Y)
    assert (x.name if x else None) == expected_x
    assert (y.name if y else None) == expected_y
    assert acc.ok


@pytest.mark.parametrize(
    "names, error",
    [
        (["x", "x"], DiagnosticKind.duplicate_or_misordered_parameter),
        (["y", "y"], DiagnosticKind.duplicate_or_misordered_parameter),
        (["a", "x"], DiagnosticKind.duplicate_or_misordered_parameter),
        (["y", "x"], DiagnosticKind.duplicate_or_misordered_parameter),
        (["a", "b", "c"], DiagnosticKind.unexpected_extra_parameter),
        (["y", "a"], DiagnosticKind.unexpected_extra_parameter),
    ],
)
def test_coordinates_invalid(acc, sink, names, error):
    params = shapes(*[(UINT, n) for n in names])

    resolve_coordinates(params, RoleAssignment(), acc)

    assert sink.kinds() == [error]
    assert sink.diagnostics[0].parameter == names[-1]


def test_x_locked_after_y():
    assignment = RoleAssignment()
    (y,) = shapes((UINT, "y"))

    assert assignment.can_claim(SignatureRole.X)
    assignment.assign(SignatureRole.Y, y)

    assert assignment.is_free(SignatureRole.X)
    assert assignment.is_locked(SignatureRole.X)
    assert not assignment.can_claim(SignatureRole.X)


def test_non_scalar_is_reported_and_skipped(acc, sink):
    params = shapes((OTHER, "f"), (UINT, "x"), (MUT_PTR, "p"), (UINT, "y"))
    assignment = RoleAssignment()

    resolve_coordinates(params, assignment, acc)

    assert sink.kinds() == [
        DiagnosticKind.unsupported_parameter_type,
        DiagnosticKind.unsupported_parameter_type,
    ]
    assert [d.parameter for d in sink] == ["f", "p"]
    assert assignment.get(SignatureRole.X) is params[1]
    assert assignment.get(SignatureRole.Y) is params[3]
