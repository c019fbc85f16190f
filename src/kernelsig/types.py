# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Mapping

from numba import types as nbtypes

from kernelsig.errors import TypeNotFoundError

QUALIFIERS = frozenset({"const", "volatile", "restrict", "__restrict"})
ELABORATED_KEYWORDS = frozenset({"struct", "union", "enum"})

# Typedefs of the kernel language resolved to their canonical C spelling.
CANONICAL_TYPE_NAMES = {
    "unsigned": "unsigned int",
    "signed": "int",
    "signed int": "int",
    "uchar": "unsigned char",
    "ushort": "unsigned short",
    "uint": "unsigned int",
    "ulong": "unsigned long long",
    "int8_t": "signed char",
    "uint8_t": "unsigned char",
    "int16_t": "short",
    "uint16_t": "unsigned short",
    "int32_t": "int",
    "uint32_t": "unsigned int",
    "int64_t": "long long",
    "uint64_t": "unsigned long long",
    "half": "__half",
}

INTEGER_TYPE_MAPS = {
    "char": nbtypes.int8,
    "signed char": nbtypes.int8,
    "unsigned char": nbtypes.uint8,
    "short": nbtypes.int16,
    "unsigned short": nbtypes.uint16,
    "int": nbtypes.int32,
    "unsigned int": nbtypes.uint32,
    "long": nbtypes.int64,
    "unsigned long": nbtypes.uint64,
    "long long": nbtypes.int64,
    "unsigned long long": nbtypes.uint64,
}

FLOATING_TYPE_MAPS = {
    "__half": nbtypes.float16,
    "float": nbtypes.float32,
    "double": nbtypes.float64,
}

CTYPE_MAPS = {
    **INTEGER_TYPE_MAPS,
    **FLOATING_TYPE_MAPS,
    "void": nbtypes.void,
    "bool": nbtypes.bool_,
}


def split_type_tokens(ty: str) -> list[str]:
    """Split a C type spelling into tokens, with ``*`` as its own token."""
    return ty.replace("*", " * ").split()


def canonical_type_name(ty: str) -> str:
    """Resolve a qualifier-free base type spelling to its canonical name."""
    ty = " ".join(ty.split())
    return CANONICAL_TYPE_NAMES.get(ty, ty)


def to_numba_type(
    ty: str, registry: Mapping[str, nbtypes.Type] | None = None
) -> nbtypes.Type:
    """Map a C type spelling to a Numba type.

    Qualifiers are dropped since Numba types carry no cv-qualification.
    ``void *`` maps to ``voidptr``, other pointers to ``CPointer``.

    Parameters
    ----------
    ty : str
        The C type spelling, e.g. ``const float *``.
    registry : Mapping[str, numba.types.Type] | None
        Additional user types (structs, aliases) consulted before the builtin
        maps.

    Raises
    ------
    TypeNotFoundError
        If the base type is unknown.
    """
    tokens = [
        t
        for t in split_type_tokens(ty)
        if t not in QUALIFIERS and t not in ELABORATED_KEYWORDS
    ]
    if tokens and tokens[-1] == "*":
        base_ty = " ".join(tokens[:-1])
        if canonical_type_name(base_ty) == "void":
            return nbtypes.voidptr
        return nbtypes.CPointer(to_numba_type(base_ty, registry))

    name = canonical_type_name(" ".join(tokens))
    if registry is not None and name in registry:
        return registry[name]
    if name not in CTYPE_MAPS:
        raise TypeNotFoundError(name)
    return CTYPE_MAPS[name]
