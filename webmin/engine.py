from __future__ import annotations

import logging
from pathlib import Path, PurePath

from .minifiers import FileKind, minify_or_pass_through
from .results import ErrorKind, ProcessResult, RunStats
from .settings import MinifySettings


logger = logging.getLogger(__name__)

DECODE_ERRORS = "surrogateescape"


def process_file(src_path: Path, s: MinifySettings, stats: RunStats) -> ProcessResult:
    """
    Read, minify and write one file.

    Every failure is recorded in ``stats`` and reported through the returned
    result; nothing raised here escapes to the batch loop.
    """
    src_path = Path(src_path)
    logger.info("Processing file: %s", src_path)

    if not src_path.exists():
        message = f"File does not exist: {src_path}"
        logger.error(message)
        stats.record_error(ErrorKind.NOT_FOUND, str(src_path), message)
        return _failed(src_path, None, "not_found")

    try:
        content = read_text(src_path, s.encoding)
    except Exception as e:
        logger.error("Error reading file %s: %s", src_path, e)
        stats.record_error(ErrorKind.READ_FAILURE, str(src_path), str(e))
        return _failed(src_path, None, "read_failure")

    ext = src_path.suffix.lower()
    kind = FileKind.from_extension(ext)
    src_bytes = _byte_len(content, s.encoding)

    logger.info("File type: %s", ext or "(none)")
    logger.info("Original size: %d bytes", src_bytes)

    if kind is FileKind.UNSUPPORTED:
        logger.info("Skipping unsupported file type: %s", ext or "(none)")
        return ProcessResult(
            src_path=src_path,
            kind=None,
            out_path=None,
            src_bytes=src_bytes,
            out_bytes=src_bytes,
            skipped_reason="unsupported_extension",
        )

    minified = minify_or_pass_through(kind, content, stats, s)
    out_path = build_output_path(src_path, s)

    try:
        write_output(minified, out_path, s.encoding)
    except Exception as e:
        logger.error("Error writing file %s: %s", out_path, e)
        stats.record_error(ErrorKind.WRITE_FAILURE, str(src_path), str(e))
        return _failed(src_path, kind.label, "write_failure", src_bytes)

    out_bytes = _byte_len(minified, s.encoding)
    stats.record_success(src_bytes, out_bytes)
    logger.info("File processed successfully. New size: %d bytes", out_bytes)

    return ProcessResult(
        src_path=src_path,
        kind=kind.label,
        out_path=out_path,
        src_bytes=src_bytes,
        out_bytes=out_bytes,
    )


def build_output_path(src_path: Path, s: MinifySettings) -> Path:
    # <cwd>/a/b/x.js -> <output_dir>/a/b/x.min.js
    src_path = Path(src_path)
    rel_dir = _relative_dir(src_path.parent, s.cwd)
    name = f"{src_path.stem}{s.marker}{src_path.suffix}"
    return Path(s.output_dir) / rel_dir / name


def _relative_dir(directory: Path, base: Path) -> PurePath:
    """
    Directory of an input relative to ``base``.

    Inputs outside ``base`` keep their absolute structure with the anchor
    stripped, so the result never climbs out of the output directory.
    """
    try:
        return directory.relative_to(base)
    except ValueError:
        return PurePath(*directory.parts[1:])


def read_text(path: Path, encoding: str) -> str:
    # Undecodable bytes survive as lone surrogates and are restored on write.
    return path.read_bytes().decode(encoding, errors=DECODE_ERRORS)


def write_output(content: str, out_path: Path, encoding: str) -> None:
    logger.info("Creating output directory: %s", out_path.parent)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info("Writing minified file to: %s", out_path)
    out_path.write_bytes(content.encode(encoding, errors=DECODE_ERRORS))


def _byte_len(text: str, encoding: str) -> int:
    return len(text.encode(encoding, errors=DECODE_ERRORS))


def _failed(src_path: Path, kind, reason: str, src_bytes: int = 0) -> ProcessResult:
    return ProcessResult(
        src_path=src_path,
        kind=kind,
        out_path=None,
        src_bytes=src_bytes,
        out_bytes=src_bytes,
        skipped_reason=reason,
    )
