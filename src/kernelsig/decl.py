# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from functools import cached_property

from kernelsig.types import (
    ELABORATED_KEYWORDS,
    QUALIFIERS,
    canonical_type_name,
    split_type_tokens,
)

ROOT_FUNCTION_NAME = "root"
INIT_FUNCTION_NAME = "init"
DTOR_FUNCTION_NAME = ".rs.dtor"


class Type:
    """A C type as spelled in a kernel declaration.

    Only the structure the classifier needs is modelled: pointer levels and
    top-level cv-qualifiers. Base type names are canonicalized, so
    ``uint32_t`` and ``unsigned int`` compare equal.
    """

    def __init__(self, name: str):
        self.name = name

        tokens = split_type_tokens(name)
        if not tokens:
            raise ValueError("Empty type spelling.")

        if "*" in tokens:
            last = len(tokens) - 1 - tokens[::-1].index("*")
            trailing = tokens[last + 1 :]
            if any(t not in QUALIFIERS for t in trailing):
                raise ValueError(f"Malformed pointer type spelling: {name!r}")
            self._pointee: Type | None = Type(" ".join(tokens[:last]))
            self._qualifiers = frozenset(trailing)
            self._base = None
        else:
            self._pointee = None
            self._qualifiers = frozenset(t for t in tokens if t in QUALIFIERS)
            base = [
                t
                for t in tokens
                if t not in QUALIFIERS and t not in ELABORATED_KEYWORDS
            ]
            if not base:
                raise ValueError(f"Type spelling has no base type: {name!r}")
            self._base = canonical_type_name(" ".join(base))

    def __str__(self):
        return self.spelling

    def __repr__(self):
        return f"Type({self.spelling!r})"

    def __eq__(self, other):
        if not isinstance(other, Type):
            return NotImplemented
        return self.spelling == other.spelling

    def __hash__(self):
        return hash(self.spelling)

    def is_pointer(self) -> bool:
        return self._pointee is not None

    def is_const(self) -> bool:
        return "const" in self._qualifiers

    @property
    def pointee(self) -> "Type":
        if self._pointee is None:
            raise ValueError(f"{self.spelling} is not a pointer type")
        return self._pointee

    @cached_property
    def unqualified_non_ref_type_name(self) -> str:
        """Canonical spelling with top-level qualifiers removed."""
        if self._pointee is not None:
            return f"{self._pointee.spelling} *"
        return self._base

    @cached_property
    def spelling(self) -> str:
        """Canonical spelling including top-level qualifiers."""
        quals = " ".join(sorted(self._qualifiers))
        if self._pointee is not None:
            return f"{self.unqualified_non_ref_type_name} {quals}".rstrip()
        return f"{quals} {self._base}".lstrip()

    def is_void(self) -> bool:
        return self.unqualified_non_ref_type_name == "void"

    def is_int(self) -> bool:
        return self.unqualified_non_ref_type_name == "int"

    def is_unsigned_int(self) -> bool:
        return self.unqualified_non_ref_type_name == "unsigned int"


class ParamVar:
    """A named function parameter."""

    def __init__(self, name: str, type_: Type, location: str | None = None):
        self.name = name
        self.type_ = type_
        self.location = location

    def __str__(self):
        return f"{self.type_} {self.name}"

    def __repr__(self):
        return f"ParamVar({self.name!r}, {self.type_!r})"

    @classmethod
    def from_dict(cls, d: dict):
        return cls(d["name"], Type(d["type"]), d.get("location"))


class Function:
    """Represents a function declared in a kernel source file.

    ``exported`` is false for functions with internal linkage (``static``),
    which are never reflected.
    """

    def __init__(
        self,
        name: str,
        return_type: Type,
        params: list[ParamVar],
        exported: bool = True,
        location: str | None = None,
    ):
        if not name:
            raise ValueError("Function must have a name")
        self.name = name
        self.return_type = return_type
        self.params = params
        self.exported = exported
        self.location = location

    def __str__(self):
        return f"{self.name}({', '.join(str(p) for p in self.params)}) -> {self.return_type}"

    def __repr__(self):
        old = super().__repr__()
        return f"{old[:-1]} {self.__str__()}>"

    @property
    def param_types(self) -> list[Type]:
        return [p.type_ for p in self.params]

    @property
    def num_params(self) -> int:
        return len(self.params)

    def is_root(self) -> bool:
        return self.name == ROOT_FUNCTION_NAME

    def is_init(self) -> bool:
        return self.name == INIT_FUNCTION_NAME

    def is_dtor(self) -> bool:
        return self.name == DTOR_FUNCTION_NAME

    def is_lifecycle(self) -> bool:
        return self.is_init() or self.is_dtor()

    @classmethod
    def from_dict(cls, d: dict):
        """Build a ``Function`` from its configuration-file description.

        Expected keys are ``name``, ``return`` (default ``void``), ``params``
        (a list of ``{name, type}``), ``exported`` and ``location``.
        """
        return cls(
            d["name"],
            Type(d.get("return", "void")),
            [ParamVar.from_dict(p) for p in d.get("params") or []],
            exported=d.get("exported", True),
            location=d.get("location"),
        )
