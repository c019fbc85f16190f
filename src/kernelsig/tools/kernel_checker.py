# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

import click

from kernelsig.config import Config
from kernelsig.diagnostics import LoggingSink
from kernelsig.errors import ConfigError
from kernelsig.module import ModuleReport, analyze_module
from kernelsig.signature import decode_metadata
from kernelsig.special import SpecialFunctionKind


def log_report(report: ModuleReport, target_api: int):
    click.echo("-" * 80)
    click.echo(f"Target API: {target_api}")

    click.echo("Kernels: ")
    for sig in report.signatures:
        roles = ", ".join(r.name for r in decode_metadata(sig.metadata_bits))
        status = "dummy" if sig.is_dummy_root else "ok" if sig.valid else "invalid"
        click.echo(
            f"  - {sig.name}: 0x{sig.metadata_bits:02x} [{roles}] {status}"
        )
    for failure in report.failures:
        click.echo(f"  - {failure.name}: export failed")

    click.echo("Special Functions: ")
    for name, valid in report.special_forms.items():
        click.echo(
            f"  - {name}: {report.kinds[name].value} "
            f"{'ok' if valid else 'invalid'}"
        )

    ignored = [
        name
        for name, kind in report.kinds.items()
        if kind is SpecialFunctionKind.not_special
    ]
    click.echo("Other Functions: ")
    click.echo("\n".join(f"  - {name}" for name in ignored))

    click.echo("\nDiagnostics: ")
    click.echo("\n".join(f"  {d}" for d in report.diagnostics))


@click.command()
@click.pass_context
@click.option(
    "--cfg-path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    required=True,
)
@click.option(
    "--target-api",
    type=int,
    default=None,
    help="Override the Target API of the configuration file.",
)
@click.option(
    "--strict/--no-strict",
    default=True,
    help="Exit with status 1 when any diagnostic is emitted.",
)
@click.option("-v", "--verbose", is_flag=True, default=False)
def kernel_checker(ctx, cfg_path, target_api, strict, verbose):
    """
    A CLI tool to classify and validate the kernels of a module.

    CFG_PATH: Path to the module description in YAML format.
    TARGET_API: Target API level, overriding the configuration file.
    STRICT: Fail when any diagnostic is emitted.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        cfg = Config.from_yaml_path(cfg_path, target_api=target_api)
        context = cfg.make_context(LoggingSink())
    except ConfigError as e:
        raise click.ClickException(str(e))

    report = analyze_module(context, cfg.functions, dummy_root=cfg.dummy_root)
    log_report(report, cfg.target_api)

    if strict and not report.ok:
        ctx.exit(1)
