from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Optional

import minify_html
import rcssmin
from calmjs.parse import asttypes, es5
from calmjs.parse.unparsers.es5 import minify_print

from .results import ErrorKind, RunStats
from .settings import MinifySettings


logger = logging.getLogger(__name__)


class MinifyError(Exception):
    """Raised by an adapter when its input cannot be minified."""


class FileKind(Enum):
    SCRIPT = "JavaScript"
    STYLE = "CSS"
    MARKUP = "HTML"
    UNSUPPORTED = None

    @property
    def label(self) -> Optional[str]:
        return self.value

    @classmethod
    def from_extension(cls, ext: str) -> "FileKind":
        return EXT_TO_KIND.get(ext.lower(), cls.UNSUPPORTED)


EXT_TO_KIND: Dict[str, FileKind] = {
    ".js": FileKind.SCRIPT,
    ".css": FileKind.STYLE,
    ".html": FileKind.MARKUP,
}


def minify_js(content: str, s: MinifySettings) -> str:
    """
    Parse, strip console calls, and print with shortened local names.

    Syntax errors propagate from the parser. The printed result is parsed
    again so a program the printer mangled is never written out.
    """
    program = es5(content)
    if s.drop_console:
        strip_console_calls(program)

    minified = minify_print(program, obfuscate=True, obfuscate_globals=False)
    es5(minified)
    return minified


def minify_css(content: str, s: MinifySettings) -> str:
    check_css_syntax(content)
    return rcssmin.cssmin(content, keep_bang_comments=s.keep_bang_comments)


def minify_markup(content: str, s: MinifySettings) -> str:
    # Embedded <script> and <style> blocks are minified by the same call.
    return minify_html.minify(
        content,
        minify_js=True,
        minify_css=True,
        keep_comments=s.html_keep_comments,
    )


MINIFIERS: Dict[FileKind, Callable[[str, MinifySettings], str]] = {
    FileKind.SCRIPT: minify_js,
    FileKind.STYLE: minify_css,
    FileKind.MARKUP: minify_markup,
}


def minify_or_pass_through(
    kind: FileKind,
    content: str,
    stats: RunStats,
    s: MinifySettings,
) -> str:
    """
    Run the minifier for ``kind`` and fall back to the original content.

    A failing minifier never aborts the file: the error is logged, recorded
    against the content type, and the unmodified text is returned so the
    caller still writes a valid (uncompressed) output file.
    """
    minifier = MINIFIERS[kind]
    try:
        return minifier(content, s)
    except Exception as e:
        message = str(e) or e.__class__.__name__
        logger.error("Error processing %s: %s", kind.label, message)
        stats.record_error(ErrorKind.MINIFY_FAILURE, kind.label, message)
        return content


def check_css_syntax(css: str) -> None:
    """
    Reject stylesheets a CSS parser would refuse outright.

    rcssmin is a regex based minifier and happily emits garbage for
    truncated input, so unterminated comments, unterminated strings and
    unbalanced braces are caught here first.
    """
    depth = 0
    i = 0
    n = len(css)
    line = 1

    while i < n:
        ch = css[i]

        if ch == "\n":
            line += 1

        elif ch == "/" and css.startswith("/*", i):
            end = css.find("*/", i + 2)
            if end < 0:
                raise MinifyError(f"Unterminated comment (line {line})")
            line += css.count("\n", i, end)
            i = end + 2
            continue

        elif ch in ("'", '"'):
            i = _skip_string(css, i, line)
            continue

        elif ch == "{":
            depth += 1

        elif ch == "}":
            if depth == 0:
                raise MinifyError(f"Unexpected '}}' (line {line})")
            depth -= 1

        i += 1

    if depth > 0:
        raise MinifyError(f"Unclosed block: {depth} '{{' without matching '}}'")


def _skip_string(css: str, start: int, line: int) -> int:
    quote = css[start]
    i = start + 1
    n = len(css)
    while i < n:
        ch = css[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            break
        i += 1
    raise MinifyError(f"Unterminated string (line {line})")


def strip_console_calls(program: asttypes.Node) -> int:
    """Remove ``console.*(...)`` expression statements in place."""
    removed = 0
    for node in list(_walk(program)):
        statements = _statement_list(node)
        if statements is None:
            continue
        kept = [stmt for stmt in statements if not _is_console_call(stmt)]
        removed += len(statements) - len(kept)
        statements[:] = kept
    return removed


def _walk(node: asttypes.Node):
    yield node
    for child in node.children():
        if isinstance(child, asttypes.Node):
            yield from _walk(child)


def _statement_list(node: asttypes.Node):
    # Program and Block hand out their own list; function bodies and
    # switch clauses keep theirs in ``elements``.
    if isinstance(node, (asttypes.Program, asttypes.Block)):
        return node.children()
    if isinstance(node, (asttypes.FuncBase, asttypes.Case, asttypes.Default)):
        return node.elements
    return None


def _is_console_call(stmt) -> bool:
    if not isinstance(stmt, asttypes.ExprStatement):
        return False
    call = stmt.expr
    if not isinstance(call, asttypes.FunctionCall):
        return False
    callee = call.identifier
    return (
        isinstance(callee, asttypes.DotAccessor)
        and isinstance(callee.node, asttypes.Identifier)
        and callee.node.value == "console"
    )
