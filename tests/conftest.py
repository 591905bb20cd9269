from pathlib import Path

import pytest

from webmin.results import RunStats
from webmin.settings import MinifySettings


APP_JS = """\
// Application entry point
function greet(name) {
    var message = "Hello, " + name;
    return message;
}

/* unused helper kept for reference */
function add(first, second) {
    return first + second;
}
"""

STYLE_CSS = """\
/* main layout */
body {
    margin: 0;
    color: #ff0000;
}
"""

PAGE_HTML = """\
<!DOCTYPE html>
<html>
  <head>
    <!-- page title -->
    <title>Demo</title>
    <style>
      p {   color:   blue;   }
    </style>
  </head>
  <body>
    <p>Hello     world</p>
  </body>
</html>
"""


@pytest.fixture
def stats() -> RunStats:
    return RunStats()


@pytest.fixture
def settings(tmp_path: Path) -> MinifySettings:
    return MinifySettings(output_dir=tmp_path / "out", cwd=tmp_path)


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    src = tmp_path / "site"
    src.mkdir()
    (src / "app.js").write_text(APP_JS, encoding="utf-8")
    (src / "style.css").write_text(STYLE_CSS, encoding="utf-8")
    (src / "page.html").write_text(PAGE_HTML, encoding="utf-8")
    (src / "readme.md").write_text("# Demo\n", encoding="utf-8")
    return src
