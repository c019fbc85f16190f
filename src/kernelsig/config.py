# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import yaml

import numba.types

from kernelsig.compat import tier_for
from kernelsig.context import KernelContext
from kernelsig.decl import Function
from kernelsig.diagnostics import DiagnosticSink
from kernelsig.errors import ConfigError
from kernelsig.export import TypeExporter


class Config:
    """Configuration file for kernel signature checking.

    Attributes
    ----------
    target_api : int
        The API level the kernels are compiled for. Required.
    types : dict[str, numba.types.Type]
        Maps C type names (typedefs, opaque handles) to Numba types.
    records : dict[str, list[tuple[str, numba.types.Type]]]
        Maps struct names to their fields. Structs are laid out with C rules
        and may be used as user data.
    functions : list[Function]
        The function declarations of the module, in source order.
    dummy_root : bool
        Synthesize a ``root`` placeholder when the module defines no root.
        Default to True.
    """

    target_api: int
    types: dict[str, numba.types.Type]
    records: dict[str, list[tuple[str, numba.types.Type]]]
    functions: list[Function]
    dummy_root: bool

    def __init__(self, config_dict: dict):
        """Initialize Config from a dictionary.

        Parameters
        ----------
        config_dict : dict
            Dictionary containing configuration values.
        """
        if "Target API" not in config_dict:
            raise ConfigError("Target API is required.")
        self.target_api = config_dict["Target API"]

        self.types = _str_value_to_numba_type(config_dict.get("Types") or {})
        self.records = {
            name: list(_str_value_to_numba_type(fields).items())
            for name, fields in (config_dict.get("Records") or {}).items()
        }

        self.functions = []
        for entry in config_dict.get("Functions") or []:
            try:
                self.functions.append(Function.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"Invalid function entry {entry!r}: {e}")

        self.dummy_root = config_dict.get("Dummy Root", True)

        self._verify_target_api()

    @classmethod
    def from_yaml_path(
        cls, cfg_path: str, target_api: int | None = None
    ) -> "Config":
        """Create a Config instance from a YAML file path.

        Parameters
        ----------
        cfg_path : str
            Path to the YAML configuration file.
        target_api : int | None
            If set, replaces the ``Target API`` of the file.

        Returns
        -------
        Config
            A new Config instance.
        """
        with open(cfg_path) as f:
            config_dict = yaml.safe_load(f)
        if not isinstance(config_dict, dict):
            raise ConfigError(f"{cfg_path} does not contain a mapping.")
        if target_api is not None:
            config_dict["Target API"] = target_api
        return cls(config_dict)

    @classmethod
    def from_params(
        cls,
        target_api: int,
        functions: list[dict] | None = None,
        types: dict[str, str] | None = None,
        records: dict[str, dict[str, str]] | None = None,
        dummy_root: bool = True,
    ) -> "Config":
        """Create a Config instance from individual parameters instead of a config file."""
        return cls(
            {
                "Target API": target_api,
                "Types": types or {},
                "Records": records or {},
                "Functions": functions or [],
                "Dummy Root": dummy_root,
            }
        )

    def _verify_target_api(self):
        if isinstance(self.target_api, bool) or not isinstance(
            self.target_api, int
        ):
            raise ConfigError(
                f"Target API must be an integer, got {self.target_api!r}"
            )
        tier_for(self.target_api)

    def make_exporter(self) -> TypeExporter:
        exporter = TypeExporter(self.types)
        for name, fields in self.records.items():
            try:
                exporter.register_record(name, fields)
            except TypeError as e:
                raise ConfigError(f"Invalid record {name}: {e}")
        return exporter

    def make_context(self, sink: DiagnosticSink | None = None) -> KernelContext:
        return KernelContext(self.target_api, sink, self.make_exporter())


def _str_value_to_numba_type(d: dict[str, str]) -> dict[str, numba.types.Type]:
    """Converts string typed value to numba `types` objects"""
    try:
        return {k: getattr(numba.types, v) for k, v in d.items()}
    except (AttributeError, TypeError) as e:
        raise ConfigError(f"Unknown Numba type in {d!r}: {e}")
