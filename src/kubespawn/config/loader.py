# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/config/loader.py

import logging
import os
import yaml
from pathlib import Path
from kubespawn.artifacts.params import ParameterSet

log = logging.getLogger("kubespawn")

PARAMS_FILE_ENV = "KUBESPAWN_PARAMS_FILE"


def _resolve_path(path: str | Path) -> Path:
    """
    Honour KUBESPAWN_PARAMS_FILE when it points at an existing file,
    otherwise use *path*.
    """
    env = os.environ.get(PARAMS_FILE_ENV)
    if env:
        p = Path(env)
        if p.is_file():
            return p
        log.warning("%s=%s does not exist — using %s", PARAMS_FILE_ENV, env, path)
    return Path(path)


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def load_parameters(path: str | Path) -> ParameterSet:
    """
    Load and validate a Parameter Set from YAML.

    Values may sit at the document root or under a ``parameters:`` key,
    using either snake_case or kube-spawn CamelCase names::

        parameters:
          ContainerRuntime: rkt
          RuntimeEndpoint: /run/rktlet.sock
          KubernetesVersion: ${K8S_VERSION}
    """
    path = _resolve_path(path)
    data = _load_yaml(path)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")

    if "parameters" in data:
        data = data["parameters"] or {}

    log.debug("Loaded parameters from %s", path)
    return ParameterSet.model_validate(data)
