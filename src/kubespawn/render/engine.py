# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/render/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Iterable, Optional

import jinja2

from kubespawn.artifacts.kinds import ArtifactKind, node_artifacts, spec_for
from kubespawn.artifacts.params import ParameterSet
from kubespawn.errors import ConsistencyViolation, ExecutionError, MissingParameter, ParameterError
from kubespawn.logging.log import new_run_id, pass_logger
from kubespawn.render.consistency import check_kind, preflight, verify_rendered
from kubespawn.render.store import TemplateStore

log = logging.getLogger("kubespawn")


@dataclass(frozen=True)
class RenderedArtifact:
    kind: ArtifactKind
    text: str
    path: PurePosixPath
    mode: int

    @property
    def executable(self) -> bool:
        return bool(self.mode & 0o111)


class RenderingEngine:
    """
    Renders node artifacts from a :class:`TemplateStore`.

    Holds no state besides the (read-only) store, so one engine can serve
    concurrent renders with independent Parameter Sets.
    """

    def __init__(self, store: Optional[TemplateStore] = None):
        self.store = store if store is not None else TemplateStore.load()

    def render(self, kind: ArtifactKind, params: ParameterSet) -> str:
        template = self.store.get(kind)
        kind = ArtifactKind(kind)

        missing, contradictions = check_kind(params, kind)
        if missing:
            raise MissingParameter(kind, missing)
        if contradictions:
            raise ConsistencyViolation(contradictions)

        try:
            text = template.render(**params.template_context())
        except jinja2.TemplateError as e:
            raise ExecutionError(kind, str(e)) from e
        except (TypeError, ValueError, AttributeError) as e:
            raise ExecutionError(kind, f"{type(e).__name__}: {e}") from e

        log.debug(f"rendered {kind} ({len(text)} bytes)")
        return text

    def render_artifact(self, kind: ArtifactKind, params: ParameterSet) -> RenderedArtifact:
        text = self.render(kind, params)
        spec = spec_for(kind)
        return RenderedArtifact(
            kind=spec.kind,
            text=text,
            path=spec.path,
            mode=spec.mode,
        )

    def render_all(
        self,
        params: ParameterSet,
        kinds: Optional[Iterable[ArtifactKind]] = None,
        *,
        run_id: Optional[str] = None,
    ) -> Dict[ArtifactKind, RenderedArtifact]:
        """
        Render a full pass (by default the kinds the node's runtime needs).
        Inputs are checked for every requested kind before anything renders,
        and the rendered set is checked for cgroup-driver and runtime-branch
        agreement before it is returned.

        Log records for the pass carry *run_id* (a fresh one if omitted).
        """
        plog = pass_logger(run_id or new_run_id())
        if kinds is None:
            selected = list(node_artifacts(params.container_runtime))
        else:
            selected = [ArtifactKind(k) for k in kinds]
        # dedupe, keep order
        selected = list(dict.fromkeys(selected))

        plog.debug(f"render pass for {[k.value for k in selected]}")

        try:
            preflight(params, selected)
        except ParameterError as e:
            plog.warning(f"rejected parameters: {e}")
            raise

        artifacts: Dict[ArtifactKind, RenderedArtifact] = {}
        for kind in selected:
            artifacts[kind] = self.render_artifact(kind, params)
            plog.debug(f"rendered {kind} -> {artifacts[kind].path}")

        try:
            verify_rendered(params, {k: a.text for k, a in artifacts.items()})
        except ConsistencyViolation as e:
            plog.error(f"rendered artifacts disagree: {e}")
            raise

        plog.info(f"rendered {len(artifacts)} artifacts")
        return artifacts
