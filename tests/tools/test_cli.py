# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest


@pytest.fixture
def filter_module():
    return {
        "target_api": 16,
        "records": {"Params": {"scale": "float32", "bias": "float32"}},
        "functions": [
            {
                "name": "root",
                "params": [
                    ("const float *", "in"),
                    ("float *", "out"),
                    ("const Params *", "params"),
                    ("uint32_t", "x"),
                    ("uint32_t", "y"),
                ],
            },
            {"name": "init"},
            {"name": "helper", "params": [("float *", "p")], "exported": False},
        ],
    }


def test_valid_module(run_in_isolated_folder, filter_module):
    result = run_in_isolated_folder("module.yml.j2", filter_module)

    assert result.exit_code == 0, result.output
    assert "root: 0x1f [IN, OUT, USR_DATA, X, Y] ok" in result.output
    assert "init: LifecycleInit ok" in result.output
    assert "  - helper" in result.output


def test_dummy_root(run_in_isolated_folder):
    params = {
        "target_api": 16,
        "functions": [{"name": "scale", "params": [("float *", "out")]}],
    }
    result = run_in_isolated_folder("module.yml.j2", params)

    assert result.exit_code == 0, result.output
    assert "root: 0x00 [] dummy" in result.output
    assert "scale: 0x02 [OUT] ok" in result.output


@pytest.fixture
def invalid_module():
    return {
        "target_api": 16,
        "functions": [
            {
                "name": "root",
                "params": [("const float *", "in"), ("float", "k")],
            },
        ],
    }


def test_invalid_module_strict(run_in_isolated_folder, invalid_module):
    result = run_in_isolated_folder("module.yml.j2", invalid_module)

    assert result.exit_code == 1
    assert "root: 0x01 [IN] invalid" in result.output


def test_invalid_module_no_strict(run_in_isolated_folder, invalid_module):
    result = run_in_isolated_folder(
        "module.yml.j2", invalid_module, extra_args=["--no-strict"]
    )

    assert result.exit_code == 0, result.output


def test_target_api_override(run_in_isolated_folder):
    params = {
        "target_api": 16,
        "functions": [
            {
                "name": "root",
                "params": [("const float *", "in"), ("uint32_t", "x")],
            },
        ],
    }
    result = run_in_isolated_folder(
        "module.yml.j2",
        params,
        extra_args=["--target-api", "11", "--no-strict"],
    )

    assert result.exit_code == 0, result.output
    assert "Target API: 11" in result.output
    assert "root: 0x09 [IN, X] invalid" in result.output


@pytest.mark.parametrize("target_api", [10, "jelly"])
def test_invalid_target_api(run_in_isolated_folder, target_api):
    params = {"target_api": target_api, "functions": []}
    result = run_in_isolated_folder("module.yml.j2", params)

    assert result.exit_code == 1
    assert "Target API" in result.output
