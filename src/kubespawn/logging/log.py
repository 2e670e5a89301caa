# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/kubespawn/logging/log.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGGER_NAME = "kubespawn"

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(run_id)s | %(message)s"


def new_run_id() -> str:
    return uuid.uuid4().hex[:12]


class RunIdFilter(logging.Filter):
    """
    Gives every record a ``run_id`` so LOG_FORMAT never fails.

    Records emitted through :func:`pass_logger` already carry the id of
    their render pass; anything else gets *default*.
    """

    def __init__(self, default: str = "-"):
        super().__init__()
        self.default = default

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = self.default
        return True


def pass_logger(run_id: str) -> logging.LoggerAdapter:
    """Logger for one render pass; every record is tagged with *run_id*."""
    return logging.LoggerAdapter(logging.getLogger(LOGGER_NAME), {"run_id": run_id})


def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = LOGGER_NAME,
    verbose: bool = False,
    run_id: Optional[str] = None,
) -> tuple[logging.Logger, str, Path]:
    """
    Attach handlers for a process that renders node artifacts.

    The file under *base_dir* (default ``~/.kubespawn/logs``) gets the full
    DEBUG trace; the console gets INFO, or DEBUG when *verbose*. Records
    that do not come from a render pass are stamped with the returned
    run_id, so pass that id to ``RenderingEngine.render_all`` to correlate
    the whole process in one file.
    """
    run_id = run_id or new_run_id()

    if base_dir is None:
        base_dir = Path.home() / ".kubespawn" / "logs"
    base_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    log_path = base_dir / f"{name}-{ts}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    run_filter = RunIdFilter(default=run_id)

    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in (fh, ch):
        handler.setFormatter(formatter)
        handler.addFilter(run_filter)
        logger.addHandler(handler)

    logger.info(f"kubespawn logging to {log_path}")
    return logger, run_id, log_path
