# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/__init__.py

from kubespawn.artifacts.kinds import ArtifactKind, ArtifactSpec, node_artifacts
from kubespawn.artifacts.params import CgroupDriver, ContainerRuntime, ParameterSet
from kubespawn.errors import (
    ConsistencyViolation,
    ExecutionError,
    MissingParameter,
    ParameterError,
    RenderError,
    TemplateNotFound,
    TemplateSyntaxError,
    Violation,
)
from kubespawn.render.engine import RenderedArtifact, RenderingEngine
from kubespawn.render.store import TemplateStore

__all__ = [
    "ArtifactKind",
    "ArtifactSpec",
    "CgroupDriver",
    "ConsistencyViolation",
    "ContainerRuntime",
    "ExecutionError",
    "MissingParameter",
    "ParameterError",
    "ParameterSet",
    "RenderError",
    "RenderedArtifact",
    "RenderingEngine",
    "TemplateNotFound",
    "TemplateStore",
    "TemplateSyntaxError",
    "Violation",
    "node_artifacts",
]
