# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Versioned compatibility rules for kernel signatures.

All target-API thresholds live in ``COMPATIBILITY_POLICY``. Everything else
asks the policy through ``tier_for`` instead of comparing API levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from kernelsig.diagnostics import DiagnosticKind
from kernelsig.errors import ConfigError

MINIMUM_TARGET_API = 11
ICS_TARGET_API = 14
JB_TARGET_API = 16

# Masks formed by dropping roles from the end of (in, out, usrData, x, y).
ORDERED_SIGNATURE_MASKS = frozenset({0x01, 0x03, 0x07, 0x0F, 0x1F})


@dataclass(frozen=True)
class CompatibilityTier:
    """A contiguous range of target APIs sharing the same signature rules.

    ``legal_masks`` of None accepts every signature mask.
    """

    name: str
    min_api: int
    max_api: int | None
    non_root_kernels: bool
    legal_masks: frozenset[int] | None
    legacy_graphics_root: bool

    def contains(self, target_api: int) -> bool:
        return self.min_api <= target_api and (
            self.max_api is None or target_api <= self.max_api
        )

    def allows_mask(self, metadata_bits: int) -> bool:
        return self.legal_masks is None or metadata_bits in self.legal_masks


COMPATIBILITY_POLICY: tuple[CompatibilityTier, ...] = (
    CompatibilityTier(
        "legacy",
        MINIMUM_TARGET_API,
        ICS_TARGET_API - 1,
        non_root_kernels=False,
        legal_masks=ORDERED_SIGNATURE_MASKS,
        legacy_graphics_root=True,
    ),
    CompatibilityTier(
        "ics",
        ICS_TARGET_API,
        JB_TARGET_API - 1,
        non_root_kernels=False,
        legal_masks=None,
        legacy_graphics_root=False,
    ),
    CompatibilityTier(
        "modern",
        JB_TARGET_API,
        None,
        non_root_kernels=True,
        legal_masks=None,
        legacy_graphics_root=False,
    ),
)


def tier_for(target_api: int) -> CompatibilityTier:
    for tier in COMPATIBILITY_POLICY:
        if tier.contains(target_api):
            return tier
    raise ConfigError(
        f"Target API {target_api} is not supported, the minimum is "
        f"{MINIMUM_TARGET_API}."
    )


def _restricted_range(
    restricted: Callable[[CompatibilityTier], bool],
) -> tuple[int, int]:
    tiers = [t for t in COMPATIBILITY_POLICY if restricted(t)]
    return tiers[0].min_api, tiers[-1].max_api


def skip_restricted_range() -> tuple[int, int]:
    """API range in which signatures may not skip roles."""
    return _restricted_range(lambda t: t.legal_masks is not None)


def root_only_range() -> tuple[int, int]:
    """API range in which only ``root`` may be a compute kernel."""
    return _restricted_range(lambda t: not t.non_root_kernels)


def check_mask(metadata_bits: int, target_api: int) -> DiagnosticKind | None:
    if tier_for(target_api).allows_mask(metadata_bits):
        return None
    return DiagnosticKind.skip_not_allowed


def check_kernel_form(is_root: bool, target_api: int) -> DiagnosticKind | None:
    if is_root or tier_for(target_api).non_root_kernels:
        return None
    return DiagnosticKind.unsupported_kernel_form


def allows_legacy_graphics_root(target_api: int) -> bool:
    return tier_for(target_api).legacy_graphics_root
