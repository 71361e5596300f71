"""Run manifest: what was trained, on what, with which library versions."""

from __future__ import annotations

import json
import platform
import subprocess
import time
from pathlib import Path
from typing import Dict, Mapping, Optional

import numpy as np
import PIL

from ..core.types import PathLike


def source_revision(cwd: Optional[PathLike] = None) -> Optional[str]:
    """Commit of the checkout the run was started from, if there is one."""

    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


def environment() -> Dict[str, str]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pillow": PIL.__version__,
    }


def write_manifest(
    path: PathLike,
    *,
    config: Mapping[str, object],
    run: Mapping[str, object],
) -> str:
    """Write ``manifest.json`` with the network config and the run settings."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "revision": source_revision(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": dict(config),
        "run": dict(run),
        "environment": environment(),
    }
    path.write_text(json.dumps(manifest, indent=2, default=str))
    return str(path)


__all__ = ["environment", "source_revision", "write_manifest"]
