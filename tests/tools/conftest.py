# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import os

import pytest

from jinja2 import Environment, FileSystemLoader

from click.testing import CliRunner

from kernelsig.tools.kernel_checker import kernel_checker


@pytest.fixture
def run_in_isolated_folder(tmpdir):
    # Renders a configuration template into a temporary folder and runs the
    # checker on it.
    # Tmp Folder structure:
    # - /
    # - config/
    #   - <config_name>.yml
    def _run(cfg_template, params, extra_args=()):
        config_folder = tmpdir.mkdir("config")
        here = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(config_folder, cfg_template.replace(".j2", ""))

        env = Environment(loader=FileSystemLoader(here))
        template = env.get_template(os.path.join("config/", cfg_template))
        with open(config_path, "w") as f:
            f.write(template.render(params))

        runner = CliRunner(catch_exceptions=False)
        return runner.invoke(
            kernel_checker, ["--cfg-path", config_path, *extra_args]
        )

    return _run
