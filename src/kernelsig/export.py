# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from dataclasses import dataclass
from enum import Enum

from numba import types as nbtypes

from kernelsig.decl import ParamVar, Type
from kernelsig.errors import TypeNotFoundError
from kernelsig.types import to_numba_type

logger = logging.getLogger(__name__)

PARAM_PACKET_PREFIX = "helper_foreach_param:"


class ExportClass(str, Enum):
    primitive = "primitive"
    pointer = "pointer"
    record = "record"


@dataclass(frozen=True)
class ExportedType:
    """Reflectable description of a kernel-visible type."""

    name: str
    export_class: ExportClass
    numba_type: nbtypes.Type


def _export_class_of(nbty: nbtypes.Type) -> ExportClass:
    if isinstance(nbty, nbtypes.Record):
        return ExportClass.record
    if isinstance(nbty, (nbtypes.CPointer, nbtypes.RawPointer)):
        return ExportClass.pointer
    return ExportClass.primitive


class TypeExporter:
    """Turn kernel types into Numba type descriptors for reflection.

    Builtin C types are always known. User structs are added with
    ``register_record`` and plain aliases with ``register_type``.
    """

    def __init__(self, types: dict[str, nbtypes.Type] | None = None):
        self.registry: dict[str, nbtypes.Type] = dict(types or {})

    def register_type(self, name: str, nbty: nbtypes.Type):
        self.registry[name] = nbty

    def register_record(
        self, name: str, fields: list[tuple[str, nbtypes.Type]]
    ) -> nbtypes.Record:
        """Register a struct laid out with C rules.

        Parameters
        ----------
        name : str
            The struct name as spelled in kernel sources (without ``struct``).
        fields : list[tuple[str, numba.types.Type]]
            Field names and scalar Numba types, in declaration order.

        Returns
        -------
        record : numba.types.Record
        """
        record = nbtypes.Record.make_c_struct(fields)
        self.registry[name] = record
        return record

    def export_type(self, ty: Type) -> ExportedType | None:
        """Export a type, or return None if it cannot be reflected."""
        try:
            nbty = to_numba_type(ty.unqualified_non_ref_type_name, self.registry)
        except TypeNotFoundError as e:
            logger.debug("Type %s is not exportable: %s", ty, e)
            return None
        return ExportedType(ty.spelling, _export_class_of(nbty), nbty)

    def export_param_packet(
        self, kernel_name: str, param: ParamVar
    ) -> ExportedType | None:
        """Pack the pointee of a user-data parameter into a one-field record.

        The field is named after the parameter. Returns None when the pointee
        cannot be placed in a record.
        """
        pointee = param.type_.pointee
        try:
            field_ty = to_numba_type(
                pointee.unqualified_non_ref_type_name, self.registry
            )
        except TypeNotFoundError as e:
            logger.debug("User data of %s() is not exportable: %s", kernel_name, e)
            return None

        if isinstance(field_ty, nbtypes.Record):
            packet = nbtypes.Record(
                [(param.name, {"type": field_ty, "offset": 0})],
                size=field_ty.size,
                aligned=field_ty.aligned,
            )
        else:
            try:
                packet = nbtypes.Record.make_c_struct([(param.name, field_ty)])
            except TypeError as e:
                logger.debug(
                    "User data of %s() is not exportable: %s", kernel_name, e
                )
                return None

        return ExportedType(
            PARAM_PACKET_PREFIX + kernel_name, ExportClass.record, packet
        )
