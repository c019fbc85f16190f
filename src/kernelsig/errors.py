# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class BaseKernelSigError(Exception):
    pass


class TypeNotFoundError(BaseKernelSigError):
    """Indicate that a C type spelling was not found in the type maps.

    Kernel signatures only carry type spellings. When a spelling cannot be
    mapped to a Numba type, the exporter treats the type as not reflectable.
    """

    def __init__(self, type_name):
        self._type_name = type_name
        super().__init__(f"{type_name} is not found in type cache.")

    @property
    def type_name(self):
        return self._type_name


class SpecialFunctionError(BaseKernelSigError, AssertionError):
    """Indicate that a special-form validator was called on a plain function.

    Only graphics roots and lifecycle functions have a special contract. This
    is a bug in the caller, not a diagnostic for the user.
    """

    def __init__(self, function_name: str):
        self._function_name = function_name
        super().__init__(
            f"{function_name}() is not a root, init or .rs.dtor function."
        )

    @property
    def function_name(self):
        return self._function_name


class ConfigError(BaseKernelSigError, ValueError):
    """Indicate an invalid configuration value."""
