from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class MinifySettings:
    """
    All user-configurable knobs for a minification run.

    Pure data object: the CLI builds one, the engine only reads it.
    """

    # ----- Output handling -----
    output_dir: Path

    # Relative directory structure of inputs is mirrored from this base.
    cwd: Path = field(default_factory=Path.cwd)

    # Naming: app.js -> app.min.js
    marker: str = ".min"

    encoding: str = "utf-8"

    # ----- JavaScript -----
    drop_console: bool = True

    # ----- CSS -----
    # /*! ... */ license comments
    keep_bang_comments: bool = False

    # ----- HTML -----
    html_keep_comments: bool = False
