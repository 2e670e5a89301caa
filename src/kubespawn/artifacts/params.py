# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/artifacts/params.py

from __future__ import annotations

import ipaddress
import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator


class ContainerRuntime(str, Enum):
    DOCKER = "docker"
    RKT = "rkt"

    def __str__(self) -> str:
        return self.value


class CgroupDriver(str, Enum):
    CGROUPFS = "cgroupfs"
    SYSTEMD = "systemd"

    def __str__(self) -> str:
        return self.value


_K8S_VERSION = re.compile(r"^v?\d+\.\d+\.\d+(?:[-+][0-9A-Za-z.\-+]+)?$")


class ParameterSet(BaseModel):
    """
    Values driving one render pass for a node (or a cluster, for the
    shared artifacts).

    Accepts either the snake_case field names or the CamelCase names used
    by kube-spawn configs (``ContainerRuntime``, ``PodNetworkCIDR`` ...).
    Requiredness is enforced per artifact kind by the renderer, so every
    field here has an empty default.
    """

    container_runtime: Optional[ContainerRuntime] = Field(default=None, alias="ContainerRuntime")
    use_legacy_cgroup_driver: bool = Field(default=False, alias="UseLegacyCgroupDriver")
    runtime_endpoint: str = Field(default="", alias="RuntimeEndpoint")
    cni_plugin: str = Field(default="", alias="CNIPlugin")
    kubeadm_reset_options: str = Field(default="", alias="KubeadmResetOptions")
    kubernetes_version: str = Field(default="", alias="KubernetesVersion")
    cluster_cidr: str = Field(default="", alias="ClusterCIDR")
    pod_network_cidr: str = Field(default="", alias="PodNetworkCIDR")
    hyperkube_image: str = Field(default="", alias="HyperkubeImage")

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("container_runtime", mode="before")
    @classmethod
    def _blank_runtime_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator(
        "runtime_endpoint", "cni_plugin", "kubernetes_version", "hyperkube_image",
        mode="before",
    )
    @classmethod
    def _strip(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("runtime_endpoint", "cni_plugin", "hyperkube_image")
    @classmethod
    def _single_token(cls, v: str) -> str:
        # Substituted bare into unit files, shell and YAML; one token only.
        bad = [c for c in v if c.isspace() or not c.isprintable()]
        if bad:
            raise ValueError(
                f"must not contain whitespace or control characters: {v!r}"
            )
        return v

    @field_validator("kubeadm_reset_options", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("kubernetes_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        if v and not _K8S_VERSION.match(v):
            raise ValueError(f"not a semantic version: {v!r} (expected e.g. v1.10.0)")
        return v

    @field_validator("cluster_cidr", "pod_network_cidr", mode="before")
    @classmethod
    def _check_cidr(cls, v: Any) -> Any:
        if v is None:
            return ""
        if not isinstance(v, str):
            return v
        v = v.strip()
        if not v:
            return v
        if "/" not in v:
            raise ValueError(f"not a CIDR (missing prefix length): {v!r}")
        ipaddress.ip_network(v, strict=False)
        return v

    # ------------------------------------------------------------------
    # Derived decisions
    # ------------------------------------------------------------------

    @property
    def cgroup_driver(self) -> CgroupDriver:
        if self.use_legacy_cgroup_driver:
            return CgroupDriver.CGROUPFS
        return CgroupDriver.SYSTEMD

    @property
    def remote_runtime(self) -> bool:
        # Anything that is not docker talks CRI over a socket.
        return (
            self.container_runtime is not None
            and self.container_runtime != ContainerRuntime.DOCKER
        )

    def missing(self, names: Iterable[str]) -> List[str]:
        """Return the subset of *names* that are unset or empty, sorted."""
        out = []
        for name in names:
            value = getattr(self, name)
            if value is None or value == "":
                out.append(name)
        return sorted(out)

    def template_context(self) -> Dict[str, Any]:
        runtime = self.container_runtime.value if self.container_runtime else None
        return {
            "container_runtime": runtime,
            "cgroup_driver": self.cgroup_driver.value,
            "runtime_endpoint": self.runtime_endpoint,
            "cni_plugin": self.cni_plugin,
            "kubeadm_reset_options": self.kubeadm_reset_options,
            "kubernetes_version": self.kubernetes_version,
            "cluster_cidr": self.cluster_cidr,
            "pod_network_cidr": self.pod_network_cidr,
            "hyperkube_image": self.hyperkube_image,
        }
