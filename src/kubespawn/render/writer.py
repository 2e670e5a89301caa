# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/render/writer.py

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Union

from kubespawn.artifacts.kinds import ArtifactKind
from kubespawn.render.engine import RenderedArtifact

log = logging.getLogger("kubespawn")


def write_artifacts(
    root: Path,
    artifacts: Union[Mapping[ArtifactKind, RenderedArtifact], Iterable[RenderedArtifact]],
) -> List[Path]:
    """
    Write rendered artifacts into a node root filesystem at *root*.

    Each artifact lands at its declared absolute path re-rooted under
    *root*, with its declared mode.
    """
    if isinstance(artifacts, Mapping):
        artifacts = artifacts.values()

    root = Path(root)
    written: List[Path] = []

    for artifact in artifacts:
        out_path = root / artifact.path.relative_to("/")
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(artifact.text, encoding="utf-8")
        os.chmod(out_path, artifact.mode)
        log.debug(f"wrote {artifact.kind} -> {out_path} ({oct(artifact.mode)})")
        written.append(out_path)

    return written
