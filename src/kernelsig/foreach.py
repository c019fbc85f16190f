# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from warnings import warn

from kernelsig.compat import (
    check_kernel_form,
    check_mask,
    root_only_range,
    skip_restricted_range,
)
from kernelsig.context import KernelContext
from kernelsig.decl import ROOT_FUNCTION_NAME, Function
from kernelsig.diagnostics import DiagnosticKind, ErrorAccumulator
from kernelsig.roles import match_positional, resolve_coordinates
from kernelsig.shapes import extract_shapes
from kernelsig.signature import (
    ExportFailure,
    KernelSignature,
    SignatureRole,
    encode_metadata,
)

logger = logging.getLogger(__name__)


def classify_kernel(
    context: KernelContext, func_decl: Function
) -> KernelSignature | ExportFailure:
    """Classify the parameters of a compute kernel.

    Every rule is checked even after a violation, so the returned signature
    lists all errors of the declaration. Types are only exported for valid
    signatures.

    Parameters
    ----------
    context : KernelContext
        Target API, diagnostic sink and type exporter of the module.
    func_decl : Function
        A compute kernel candidate, see ``is_foreach_candidate``.

    Returns
    -------
    result : KernelSignature | ExportFailure
        The signature, valid or not. ``ExportFailure`` if the user data of a
        valid kernel could not be reflected.
    """
    if func_decl.num_params == 0:
        raise ValueError(
            f"Compute kernel {func_decl.name}() has no parameters to classify"
        )

    acc = ErrorAccumulator(context.sink, func_decl.name, func_decl.location)

    if check_kernel_form(func_decl.is_root(), context.target_api) is not None:
        min_api, max_api = root_only_range()
        acc.record(
            DiagnosticKind.unsupported_kernel_form,
            min_api=min_api,
            max_api=max_api,
        )

    # Compute kernels are required to return void for now.
    if not func_decl.return_type.is_void():
        acc.record(
            DiagnosticKind.return_type_mismatch,
            expected="a void type",
            usage="",
        )

    shapes = extract_shapes(func_decl)
    assignment, next_index = match_positional(shapes, acc)
    resolve_coordinates(shapes[next_index:], assignment, acc)

    metadata_bits = encode_metadata(assignment.slots)

    if check_mask(metadata_bits, context.target_api) is not None:
        min_api, max_api = skip_restricted_range()
        acc.record(
            DiagnosticKind.skip_not_allowed, min_api=min_api, max_api=max_api
        )

    logger.debug(
        "%s() signature metadata 0x%02x (%d errors)",
        func_decl.name,
        metadata_bits,
        len(acc.errors),
    )

    in_type = out_type = param_packet_type = None
    if acc.ok:
        usr_data = assignment.get(SignatureRole.USR_DATA)
        if usr_data is not None:
            param = func_decl.params[usr_data.index]
            if param.type_.pointee.is_void():
                # No type can be reflected for const void *, only in/out are.
                warn(
                    f"User data of {func_decl.name}() is const void *, it is "
                    "not reflected."
                )
            else:
                param_packet_type = context.exporter.export_param_packet(
                    func_decl.name, param
                )
                if param_packet_type is None:
                    diagnostic = acc.record(
                        DiagnosticKind.user_data_export_failure,
                        parameter=param.name,
                        type_name=param.type_.name,
                    )
                    return ExportFailure(func_decl.name, diagnostic)

        in_shape = assignment.get(SignatureRole.IN)
        if in_shape is not None:
            in_type = context.exporter.export_type(
                func_decl.params[in_shape.index].type_
            )
        out_shape = assignment.get(SignatureRole.OUT)
        if out_shape is not None:
            out_type = context.exporter.export_type(
                func_decl.params[out_shape.index].type_
            )

    return KernelSignature(
        func_decl.name,
        in_=assignment.get(SignatureRole.IN),
        out=assignment.get(SignatureRole.OUT),
        usr_data=assignment.get(SignatureRole.USR_DATA),
        x=assignment.get(SignatureRole.X),
        y=assignment.get(SignatureRole.Y),
        metadata_bits=metadata_bits,
        errors=tuple(acc.errors),
        in_type=in_type,
        out_type=out_type,
        param_packet_type=param_packet_type,
    )


def create_dummy_root(context: KernelContext) -> KernelSignature:
    """Placeholder ``root`` kernel for modules that do not define one."""
    logger.debug("Creating dummy root for target API %d", context.target_api)
    return KernelSignature(ROOT_FUNCTION_NAME, is_dummy_root=True)
