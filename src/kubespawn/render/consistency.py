# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/render/consistency.py

"""
Cross-artifact checks for one render pass.

Several artifacts encode the same decision independently (cgroup driver,
docker vs. remote CRI runtime). ``preflight`` rejects a Parameter Set that
cannot produce a consistent set before anything is rendered;
``verify_rendered`` re-reads the rendered text and confirms every artifact
agrees.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping, Tuple

from kubespawn.artifacts.kinds import REMOTE_RUNTIME_KINDS, ArtifactKind, spec_for
from kubespawn.artifacts.params import ContainerRuntime, ParameterSet
from kubespawn.errors import ConsistencyViolation, MissingParameter, Violation

log = logging.getLogger("kubespawn")

CGROUP_DRIVER_RE = re.compile(
    r"(?:native\.cgroupdriver=|--cgroup-driver=|cgroupDriver:[ \t]*)([A-Za-z0-9_-]*)"
)
RUNTIME_ENDPOINT_RE = re.compile(
    r"(?:--container-runtime-endpoint=|CRISocket:[ \t]*|criSocket:[ \t]*)(\S*)"
)
REMOTE_RUNTIME_MARKERS = (
    "--container-runtime=remote",
    "--container-runtime-endpoint=",
    "--runtime-request-timeout=",
    "runtimeRequestTimeout:",
    "CRISocket:",
    "criSocket:",
)


def extract_cgroup_drivers(text: str) -> List[str]:
    return CGROUP_DRIVER_RE.findall(text)


def extract_runtime_endpoints(text: str) -> List[str]:
    return RUNTIME_ENDPOINT_RE.findall(text)


def check_kind(
    params: ParameterSet, kind: ArtifactKind
) -> Tuple[List[str], List[Violation]]:
    """
    Evaluate the input rules for a single kind.

    Returns ``(missing_fields, contradictions)``.
    """
    spec = spec_for(kind)
    missing = params.missing(spec.required)
    contradictions: List[Violation] = []

    if spec.runtime_aware and params.container_runtime is not None:
        if params.remote_runtime and not params.runtime_endpoint:
            missing.append("runtime_endpoint")
        elif params.container_runtime == ContainerRuntime.DOCKER and params.runtime_endpoint:
            contradictions.append(
                Violation(
                    fields=("runtime_endpoint", "container_runtime"),
                    message=(
                        f"runtime endpoint {params.runtime_endpoint!r} supplied "
                        "but the docker runtime does not use one"
                    ),
                    kinds=(kind.value,),
                )
            )

    return sorted(set(missing)), contradictions


def preflight(params: ParameterSet, kinds: Iterable[ArtifactKind]) -> None:
    """
    Check every input rule for all *kinds* at once.

    Raises one aggregated error: :class:`MissingParameter` when the only
    problems are unset fields, otherwise :class:`ConsistencyViolation`
    listing every problem, missing fields included.
    """
    missing_by_field: Dict[str, List[str]] = {}
    contradictions: Dict[Tuple[str, ...], Violation] = {}
    kinds = [ArtifactKind(k) for k in kinds]

    for kind in kinds:
        missing, conflicts = check_kind(params, kind)
        for name in missing:
            missing_by_field.setdefault(name, []).append(kind.value)
        for v in conflicts:
            prev = contradictions.get(v.fields)
            if prev is None:
                contradictions[v.fields] = v
            else:
                contradictions[v.fields] = Violation(
                    fields=v.fields, message=v.message, kinds=prev.kinds + v.kinds
                )

    violations = [
        Violation(fields=(name,), message="required but not set", kinds=tuple(ks))
        for name, ks in sorted(missing_by_field.items())
    ]

    if violations and not contradictions:
        affected = tuple(k for k in kinds if any(k.value in v.kinds for v in violations))
        raise MissingParameter(affected, sorted(missing_by_field), violations)

    violations.extend(contradictions.values())
    if violations:
        raise ConsistencyViolation(violations)

    log.debug(f"preflight ok for {[k.value for k in kinds]}")


def verify_rendered(params: ParameterSet, rendered: Mapping[ArtifactKind, str]) -> None:
    """
    Confirm rendered artifacts agree on cgroup driver and runtime branch.
    """
    violations: List[Violation] = []
    expected_driver = params.cgroup_driver.value

    for kind, text in rendered.items():
        kind = ArtifactKind(kind)
        spec = spec_for(kind)

        drivers = extract_cgroup_drivers(text)
        if spec.mentions_cgroup_driver and not drivers:
            violations.append(
                Violation(
                    fields=("use_legacy_cgroup_driver",),
                    message="no cgroup driver emitted",
                    kinds=(kind.value,),
                )
            )
        wrong = sorted({d for d in drivers if d != expected_driver})
        if wrong:
            violations.append(
                Violation(
                    fields=("use_legacy_cgroup_driver",),
                    message=f"cgroup driver {', '.join(wrong)} != {expected_driver}",
                    kinds=(kind.value,),
                )
            )

        if kind not in REMOTE_RUNTIME_KINDS or params.container_runtime is None:
            continue

        if params.remote_runtime:
            endpoints = extract_runtime_endpoints(text)
            if not endpoints:
                violations.append(
                    Violation(
                        fields=("container_runtime", "runtime_endpoint"),
                        message="remote runtime flags missing",
                        kinds=(kind.value,),
                    )
                )
            elif any(e != params.runtime_endpoint for e in endpoints):
                violations.append(
                    Violation(
                        fields=("runtime_endpoint",),
                        message=(
                            f"endpoint(s) {sorted(set(endpoints))} do not match "
                            f"{params.runtime_endpoint!r}"
                        ),
                        kinds=(kind.value,),
                    )
                )
        else:
            leaked = [m for m in REMOTE_RUNTIME_MARKERS if m in text]
            if leaked:
                violations.append(
                    Violation(
                        fields=("container_runtime",),
                        message=f"remote runtime flags present for docker: {', '.join(leaked)}",
                        kinds=(kind.value,),
                    )
                )

    if violations:
        raise ConsistencyViolation(violations)
