# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/artifacts/kinds.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Dict, FrozenSet, Optional, Tuple

from kubespawn.artifacts.params import ContainerRuntime


class ArtifactKind(str, Enum):
    DOCKER_DAEMON_CONFIG = "DockerDaemonConfig"
    DOCKER_SYSTEMD_DROPIN = "DockerSystemdDropin"
    RKTLET_UNIT = "RktletUnit"
    WEAVE_NETWORKD_CONFIG = "WeaveNetworkdConfig"
    BOOTSTRAP_SCRIPT = "BootstrapScript"
    KUBELET_DROPIN = "KubeletDropin"
    KUBELET_CONFIG = "KubeletConfig"
    KUBEADM_CONFIG = "KubeadmConfig"
    RUNC_WRAPPER = "RuncWrapper"
    CNI_MANIFEST = "CNIManifest"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ArtifactSpec:
    """
    Static facts about one artifact kind.

    ``required`` names the Parameter Set fields that must be non-empty for
    the kind to render. ``runtime_aware`` kinds branch on the container
    runtime and are subject to the runtime-endpoint coupling rule.
    """
    kind: ArtifactKind
    template: str
    path: PurePosixPath
    mode: int = 0o644
    required: FrozenSet[str] = frozenset()
    runtime_aware: bool = False
    mentions_cgroup_driver: bool = False

    @property
    def executable(self) -> bool:
        return bool(self.mode & 0o111)


_SPECS = (
    ArtifactSpec(
        kind=ArtifactKind.DOCKER_DAEMON_CONFIG,
        template="docker-daemon.json.j2",
        path=PurePosixPath("/etc/docker/daemon.json"),
    ),
    ArtifactSpec(
        kind=ArtifactKind.DOCKER_SYSTEMD_DROPIN,
        template="docker-dropin.conf.j2",
        path=PurePosixPath("/etc/systemd/system/docker.service.d/20-kube-spawn.conf"),
        mentions_cgroup_driver=True,
    ),
    ArtifactSpec(
        kind=ArtifactKind.RKTLET_UNIT,
        template="rktlet.service.j2",
        path=PurePosixPath("/usr/lib/systemd/system/rktlet.service"),
        required=frozenset({"cni_plugin"}),
    ),
    ArtifactSpec(
        kind=ArtifactKind.WEAVE_NETWORKD_CONFIG,
        template="weave.network.j2",
        path=PurePosixPath("/etc/systemd/network/50-weave.network"),
    ),
    ArtifactSpec(
        kind=ArtifactKind.BOOTSTRAP_SCRIPT,
        template="bootstrap.sh.j2",
        path=PurePosixPath("/opt/kube-spawn-bootstrap.sh"),
        mode=0o755,
        required=frozenset({"container_runtime"}),
        runtime_aware=True,
    ),
    ArtifactSpec(
        kind=ArtifactKind.KUBELET_DROPIN,
        template="kubelet-dropin.conf.j2",
        path=PurePosixPath("/etc/systemd/system/kubelet.service.d/20-kube-spawn.conf"),
        required=frozenset({"container_runtime"}),
        runtime_aware=True,
        mentions_cgroup_driver=True,
    ),
    ArtifactSpec(
        kind=ArtifactKind.KUBELET_CONFIG,
        template="kubelet-config.yaml.j2",
        path=PurePosixPath("/etc/kubernetes/kubelet.yaml"),
        required=frozenset({"container_runtime"}),
        runtime_aware=True,
        mentions_cgroup_driver=True,
    ),
    ArtifactSpec(
        kind=ArtifactKind.KUBEADM_CONFIG,
        template="kubeadm.yml.j2",
        path=PurePosixPath("/etc/kubeadm/kubeadm.yml"),
        required=frozenset({"container_runtime", "kubernetes_version"}),
        runtime_aware=True,
    ),
    ArtifactSpec(
        kind=ArtifactKind.RUNC_WRAPPER,
        template="kube-spawn-runc.sh.j2",
        path=PurePosixPath("/usr/bin/kube-spawn-runc"),
        mode=0o755,
    ),
    ArtifactSpec(
        kind=ArtifactKind.CNI_MANIFEST,
        template="calico.yaml.j2",
        path=PurePosixPath("/etc/kubernetes/calico.yaml"),
    ),
)

ARTIFACT_SPECS: Dict[ArtifactKind, ArtifactSpec] = {s.kind: s for s in _SPECS}

# Kinds whose remote-runtime flags must embed the runtime endpoint.
REMOTE_RUNTIME_KINDS: FrozenSet[ArtifactKind] = frozenset(
    {
        ArtifactKind.KUBELET_DROPIN,
        ArtifactKind.KUBELET_CONFIG,
        ArtifactKind.KUBEADM_CONFIG,
    }
)


def spec_for(kind: ArtifactKind) -> ArtifactSpec:
    return ARTIFACT_SPECS[ArtifactKind(kind)]


_COMMON_KINDS = (
    ArtifactKind.WEAVE_NETWORKD_CONFIG,
    ArtifactKind.BOOTSTRAP_SCRIPT,
    ArtifactKind.KUBELET_DROPIN,
    ArtifactKind.KUBELET_CONFIG,
    ArtifactKind.KUBEADM_CONFIG,
    ArtifactKind.CNI_MANIFEST,
)

# Every ContainerRuntime must have an entry; checked below at import.
RUNTIME_KINDS: Dict[ContainerRuntime, Tuple[ArtifactKind, ...]] = {
    ContainerRuntime.DOCKER: (
        ArtifactKind.DOCKER_DAEMON_CONFIG,
        ArtifactKind.DOCKER_SYSTEMD_DROPIN,
        ArtifactKind.RUNC_WRAPPER,
    ) + _COMMON_KINDS,
    ContainerRuntime.RKT: (ArtifactKind.RKTLET_UNIT,) + _COMMON_KINDS,
}

_unmapped = set(ContainerRuntime) - set(RUNTIME_KINDS)
if _unmapped:
    raise RuntimeError(f"No artifact set for runtime(s): {sorted(r.value for r in _unmapped)}")


def node_artifacts(runtime: Optional[ContainerRuntime]) -> Tuple[ArtifactKind, ...]:
    """
    Artifact kinds a node running *runtime* needs. With no runtime chosen
    every kind is returned, so requiredness checks name the gap.
    """
    if runtime is None:
        return tuple(ArtifactKind)
    return RUNTIME_KINDS[ContainerRuntime(runtime)]
