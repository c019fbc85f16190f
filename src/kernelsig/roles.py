# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Sequence

from kernelsig.diagnostics import DiagnosticKind, ErrorAccumulator
from kernelsig.shapes import ParameterShape, ShapeKind
from kernelsig.signature import SignatureRole

# Leading parameters matched by shape, in this order, each at most once.
POSITIONAL_ROLES: tuple[tuple[SignatureRole, ShapeKind], ...] = (
    (SignatureRole.IN, ShapeKind.pointer_to_const),
    (SignatureRole.OUT, ShapeKind.pointer_to_mutable),
    (SignatureRole.USR_DATA, ShapeKind.pointer_to_const),
)

COORDINATE_ORDER: tuple[SignatureRole, ...] = (SignatureRole.X, SignatureRole.Y)

COORDINATE_NAMES: dict[str, SignatureRole] = {
    "x": SignatureRole.X,
    "y": SignatureRole.Y,
}

# A coordinate cannot be claimed once any role listed for it is assigned.
COORDINATE_LOCKS: dict[SignatureRole, tuple[SignatureRole, ...]] = {
    SignatureRole.X: (SignatureRole.Y,),
    SignatureRole.Y: (),
}


class RoleAssignment:
    """Working role table of a single analysis pass."""

    def __init__(self):
        self.slots: dict[SignatureRole, ParameterShape] = {}

    def get(self, role: SignatureRole) -> ParameterShape | None:
        return self.slots.get(role)

    def assign(self, role: SignatureRole, shape: ParameterShape):
        assert role not in self.slots, f"{role!r} assigned twice"
        self.slots[role] = shape

    def is_free(self, role: SignatureRole) -> bool:
        return role not in self.slots

    def is_locked(self, role: SignatureRole) -> bool:
        return any(r in self.slots for r in COORDINATE_LOCKS.get(role, ()))

    def can_claim(self, role: SignatureRole) -> bool:
        return self.is_free(role) and not self.is_locked(role)


def match_positional(
    shapes: Sequence[ParameterShape], acc: ErrorAccumulator
) -> tuple[RoleAssignment, int]:
    """Assign the leading pointer parameters to in, out and usrData.

    Each role only looks at the parameter under the cursor and the cursor
    never moves back. A pointer that does not fit is left for the
    coordinate phase, which will reject it.

    Returns
    -------
    assignment : RoleAssignment
    next_index : int
        Index of the first parameter not consumed.
    """
    assignment = RoleAssignment()
    i = 0
    for role, kind in POSITIONAL_ROLES:
        if role is SignatureRole.USR_DATA and not (
            assignment.get(SignatureRole.IN) or assignment.get(SignatureRole.OUT)
        ):
            acc.record(DiagnosticKind.missing_required_buffer)

        if i < len(shapes) and shapes[i].kind is kind:
            assignment.assign(role, shapes[i])
            i += 1

    return assignment, i


def _claim_named(
    role: SignatureRole,
    shape: ParameterShape,
    assignment: RoleAssignment,
    acc: ErrorAccumulator,
):
    if assignment.can_claim(role):
        assignment.assign(role, shape)
    else:
        acc.record(
            DiagnosticKind.duplicate_or_misordered_parameter,
            parameter=shape.name,
        )


def _claim_next(
    shape: ParameterShape, assignment: RoleAssignment, acc: ErrorAccumulator
):
    for role in COORDINATE_ORDER:
        if assignment.can_claim(role):
            assignment.assign(role, shape)
            return
    acc.record(
        DiagnosticKind.unexpected_extra_parameter,
        parameter=shape.name,
        type_name=shape.type_name,
    )


def resolve_coordinates(
    shapes: Sequence[ParameterShape],
    assignment: RoleAssignment,
    acc: ErrorAccumulator,
):
    """Assign the trailing scalar parameters to the X and Y coordinates.

    Parameters named ``x`` or ``y`` claim their coordinate directly, others
    take the first coordinate still available. Every non-``unsigned int``
    parameter is reported and skipped.
    """
    for shape in shapes:
        if shape.kind is not ShapeKind.unsigned_scalar:
            acc.record(
                DiagnosticKind.unsupported_parameter_type,
                parameter=shape.name,
                type_name=shape.type_name,
            )
            continue

        role = COORDINATE_NAMES.get(shape.name)
        if role is not None:
            _claim_named(role, shape, assignment, acc)
        else:
            _claim_next(shape, assignment, acc)
