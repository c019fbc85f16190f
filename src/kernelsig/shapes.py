# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kernelsig.decl import Function, Type


class ShapeKind(str, Enum):
    """The only type distinctions the role matchers look at."""

    pointer_to_const = "PointerToConst"
    pointer_to_mutable = "PointerToMutable"
    unsigned_scalar = "UnsignedScalar"
    other = "Other"


@dataclass(frozen=True)
class ParameterShape:
    """Value copy of one kernel parameter.

    ``index`` is the position in the declaration; it is the only link back
    to the declaration that signatures keep.
    """

    index: int
    name: str
    kind: ShapeKind
    type_name: str

    @property
    def is_pointer(self) -> bool:
        return self.kind in (
            ShapeKind.pointer_to_const,
            ShapeKind.pointer_to_mutable,
        )


def shape_of(ty: Type) -> ShapeKind:
    if ty.is_pointer():
        if ty.pointee.is_const():
            return ShapeKind.pointer_to_const
        return ShapeKind.pointer_to_mutable
    if ty.is_unsigned_int():
        return ShapeKind.unsigned_scalar
    return ShapeKind.other


def extract_shapes(func: Function) -> tuple[ParameterShape, ...]:
    return tuple(
        ParameterShape(i, p.name, shape_of(p.type_), p.type_.name)
        for i, p in enumerate(func.params)
    )
