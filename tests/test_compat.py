# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from kernelsig.compat import (
    COMPATIBILITY_POLICY,
    ORDERED_SIGNATURE_MASKS,
    allows_legacy_graphics_root,
    check_kernel_form,
    check_mask,
    root_only_range,
    skip_restricted_range,
    tier_for,
)
from kernelsig.diagnostics import DiagnosticKind
from kernelsig.errors import ConfigError


@pytest.mark.parametrize(
    "api, name",
    [(11, "legacy"), (13, "legacy"), (14, "ics"), (15, "ics"), (16, "modern"), (34, "modern")],
)
def test_tier_for(api, name):
    assert tier_for(api).name == name


def test_tier_below_minimum():
    with pytest.raises(ConfigError, match="minimum is 11"):
        tier_for(10)


def test_tiers_are_contiguous():
    for lower, upper in zip(COMPATIBILITY_POLICY, COMPATIBILITY_POLICY[1:]):
        assert lower.max_api + 1 == upper.min_api
    assert COMPATIBILITY_POLICY[-1].max_api is None


@pytest.mark.parametrize("bits", sorted(ORDERED_SIGNATURE_MASKS))
def test_ordered_masks_on_legacy(bits):
    assert check_mask(bits, 11) is None


@pytest.mark.parametrize("bits", [0x00, 0x02, 0x05, 0x0B, 0x1B, 0x10])
def test_skipping_masks_on_legacy(bits):
    assert check_mask(bits, 13) is DiagnosticKind.skip_not_allowed
    assert check_mask(bits, 14) is None


def test_kernel_form():
    assert check_kernel_form(True, 11) is None
    assert check_kernel_form(False, 15) is DiagnosticKind.unsupported_kernel_form
    assert check_kernel_form(False, 16) is None


def test_restricted_ranges():
    assert skip_restricted_range() == (11, 13)
    assert root_only_range() == (11, 15)


def test_legacy_graphics_root():
    assert allows_legacy_graphics_root(13)
    assert not allows_legacy_graphics_root(14)
