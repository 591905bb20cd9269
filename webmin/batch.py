from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .engine import process_file
from .results import ProcessResult, RunStats
from .settings import MinifySettings


logger = logging.getLogger(__name__)


def iter_files(path: Path) -> Iterable[Path]:
    """
    Yield the files to process for an input path.

    A regular file yields itself. A directory yields every immediate entry
    in listing order, unfiltered: subdirectories are passed on and fail
    later as read errors. Anything else raises FileNotFoundError before a
    single path is yielded.
    """
    path = Path(path)
    st = path.stat()  # raises for a missing input

    if not stat.S_ISDIR(st.st_mode):
        yield path
        return

    for name in os.listdir(path):
        yield path / name


def process_batch(
    input_path: Path,
    settings: MinifySettings,
    stats: Optional[RunStats] = None,
) -> Tuple[List[ProcessResult], RunStats]:
    if stats is None:
        stats = RunStats()

    # Materialize first so a missing input fails before any file is touched.
    file_list = list(iter_files(input_path))
    logger.debug("Found %d entries under %s", len(file_list), input_path)

    results: List[ProcessResult] = []
    for file_path in file_list:
        results.append(process_file(file_path, settings, stats))

    return results, stats
