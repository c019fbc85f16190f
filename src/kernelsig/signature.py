# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import TYPE_CHECKING, Mapping

from kernelsig.diagnostics import Diagnostic
from kernelsig.shapes import ParameterShape

if TYPE_CHECKING:
    from kernelsig.export import ExportedType


class SignatureRole(IntFlag):
    """Kernel parameter roles and their bit in the signature metadata."""

    IN = 0x01
    OUT = 0x02
    USR_DATA = 0x04
    X = 0x08
    Y = 0x10


ROLE_ORDER: tuple[SignatureRole, ...] = (
    SignatureRole.IN,
    SignatureRole.OUT,
    SignatureRole.USR_DATA,
    SignatureRole.X,
    SignatureRole.Y,
)


def encode_metadata(
    roles: Mapping[SignatureRole, ParameterShape | None],
) -> int:
    """Encode present roles into the runtime signature metadata.

    Parameters
    ----------
    roles : Mapping[SignatureRole, ParameterShape | None]
        Assigned parameter per role. Missing keys and None values are absent
        roles.

    Returns
    -------
    metadata_bits : int
        Bitwise OR of the bits of all present roles.
    """
    bits = 0
    for role in ROLE_ORDER:
        if roles.get(role) is not None:
            bits |= role.value
    return bits


def decode_metadata(metadata_bits: int) -> tuple[SignatureRole, ...]:
    return tuple(role for role in ROLE_ORDER if metadata_bits & role.value)


@dataclass(frozen=True)
class KernelSignature:
    """The classified signature of one compute kernel.

    Built once per declaration and never mutated afterwards. Invalid
    signatures still carry the roles that could be matched and their mask.
    """

    name: str
    in_: ParameterShape | None = None
    out: ParameterShape | None = None
    usr_data: ParameterShape | None = None
    x: ParameterShape | None = None
    y: ParameterShape | None = None
    metadata_bits: int = 0
    errors: tuple[Diagnostic, ...] = ()
    is_dummy_root: bool = False
    in_type: ExportedType | None = None
    out_type: ExportedType | None = None
    param_packet_type: ExportedType | None = None

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def roles(self) -> dict[SignatureRole, ParameterShape | None]:
        return {
            SignatureRole.IN: self.in_,
            SignatureRole.OUT: self.out,
            SignatureRole.USR_DATA: self.usr_data,
            SignatureRole.X: self.x,
            SignatureRole.Y: self.y,
        }

    def role(self, role: SignatureRole) -> ParameterShape | None:
        return self.roles[role]

    def present_roles(self) -> tuple[SignatureRole, ...]:
        return decode_metadata(self.metadata_bits)

    def error_kinds(self):
        return [e.kind for e in self.errors]


@dataclass(frozen=True)
class ExportFailure:
    """Returned instead of a signature when reflection of a kernel failed.

    The kernel is dropped from code generation; other kernels are not
    affected.
    """

    name: str
    diagnostic: Diagnostic
