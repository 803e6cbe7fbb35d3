"""
MFlow creative-coding language package.

MFlow is a small language for describing 2D shapes and frame-by-frame
animations.  A program such as::

    circle at (150, 200) size 60 color #F5A623

    animate {
      move 3 right
      rotate 2
    }

is compiled into a self-contained JavaScript program that draws onto an
HTML canvas.  The compiler is a classic four stage pipeline:

* ``lang.parser.grammar.lexer`` – turns source text into tokens.  It never
  fails; characters it does not understand become ``UNKNOWN`` tokens.
* ``lang.parser`` – a hand written recursive descent parser producing the
  dataclass AST defined in ``ast``.  Malformed statements are reported and
  skipped so one typo does not hide the rest of the program.
* ``semantic`` – walks the AST with a stack of lexical scopes and collects
  undefined / duplicate identifier diagnostics.
* ``codegen`` – turns the AST into JavaScript text on top of a fixed
  runtime prelude.

``compile_source`` in ``compiler`` ties the stages together and is the
only entry point the command line interface (``cli``) and any editor
integration need.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("mflow")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

from .compiler import CompileResult, MFlowCompiler, check_source, compile_source  # noqa: E402

__all__ = [
    "__version__",
    "CompileResult",
    "MFlowCompiler",
    "check_source",
    "compile_source",
]
