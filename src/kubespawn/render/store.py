# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/render/store.py

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

import jinja2
from jinja2 import DictLoader, Environment, StrictUndefined

from kubespawn.artifacts.kinds import ARTIFACT_SPECS, ArtifactKind
from kubespawn.errors import RenderError, TemplateNotFound, TemplateSyntaxError

log = logging.getLogger("kubespawn")

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def make_environment(sources: Mapping[str, str]) -> Environment:
    # No implicit trimming: only explicit {%- / -%} markers eat whitespace.
    return Environment(
        loader=DictLoader(dict(sources)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
    )


class TemplateStore:
    """
    Read-only mapping of artifact kind -> compiled template.

    Built once (``load`` or ``from_sources``); every kind in
    :class:`ArtifactKind` must be present and every template must parse,
    otherwise construction fails.
    """

    def __init__(self, sources: Mapping[ArtifactKind, str]):
        by_kind: Dict[ArtifactKind, str] = {}
        for key, text in sources.items():
            try:
                by_kind[ArtifactKind(key)] = text
            except ValueError:
                raise RenderError(
                    f"Template key not mapped to any artifact kind: {key!r}"
                ) from None

        missing = [k for k in ArtifactKind if k not in by_kind]
        if missing:
            raise TemplateNotFound(", ".join(k.value for k in missing))

        env = make_environment(
            {ARTIFACT_SPECS[k].template: text for k, text in by_kind.items()}
        )

        compiled: Dict[ArtifactKind, jinja2.Template] = {}
        for kind in ArtifactKind:
            name = ARTIFACT_SPECS[kind].template
            try:
                compiled[kind] = env.get_template(name)
            except jinja2.TemplateSyntaxError as e:
                raise TemplateSyntaxError(kind, e.message or str(e), e.lineno) from e
            log.debug(f"compiled template {name} for {kind}")

        self._sources = MappingProxyType(by_kind)
        self._templates = MappingProxyType(compiled)

    @classmethod
    def from_sources(cls, sources: Mapping[ArtifactKind, str]) -> "TemplateStore":
        return cls(sources)

    @classmethod
    def load(cls, directory: Optional[Path] = None) -> "TemplateStore":
        """
        Load one ``*.j2`` file per artifact kind from *directory*
        (defaults to the templates shipped with the package).
        """
        directory = Path(directory) if directory is not None else TEMPLATES_DIR
        if not directory.is_dir():
            raise RenderError(f"Template directory does not exist: {directory}")

        expected = {spec.template: kind for kind, spec in ARTIFACT_SPECS.items()}
        present = {p.name for p in directory.glob("*.j2") if p.is_file()}

        unclaimed = present - set(expected)
        if unclaimed:
            raise RenderError(
                f"Templates not mapped to any artifact kind in {directory}: "
                + ", ".join(sorted(unclaimed))
            )

        missing = sorted(set(expected) - present)
        if missing:
            raise TemplateNotFound(
                ", ".join(f"{expected[name].value} ({name})" for name in missing)
            )

        sources = {
            kind: (directory / name).read_text(encoding="utf-8")
            for name, kind in expected.items()
        }
        log.debug(f"loaded {len(sources)} templates from {directory}")
        return cls(sources)

    def get(self, kind: ArtifactKind) -> jinja2.Template:
        try:
            return self._templates[ArtifactKind(kind)]
        except (KeyError, ValueError) as e:
            raise TemplateNotFound(kind) from e

    def source(self, kind: ArtifactKind) -> str:
        try:
            return self._sources[ArtifactKind(kind)]
        except (KeyError, ValueError) as e:
            raise TemplateNotFound(kind) from e

    def kinds(self) -> Iterator[ArtifactKind]:
        return iter(self._templates)

    def __contains__(self, kind: object) -> bool:
        try:
            return ArtifactKind(kind) in self._templates
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._templates)
