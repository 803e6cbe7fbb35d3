"""Public compile entry point.

``compile_source`` runs the whole pipeline and never raises for any
source text: every problem is reported as a diagnostic and any diagnostic
means ``success=False`` with no output.

Example:
    >>> result = compile_source("circle at (150, 200) size 60 color #F5A623")
    >>> result.success, result.diagnostics
    (True, [])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from mflow.ast import Program
from mflow.codegen import JavaScriptGenerator, build_source_map, minify_lines, render_lines
from mflow.config import CompilerOptions
from mflow.lang.parser import Diagnostic, MFlowParser, ParseError
from mflow.semantic import SemanticAnalyzer

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Outcome of one compilation."""

    success: bool
    output: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)
    source_map: Optional[str] = None
    errors: List[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "output": self.output,
            "diagnostics": list(self.diagnostics),
        }


def _front_end(source: str, path: str) -> Tuple[Optional[Program], List[Diagnostic]]:
    try:
        parser = MFlowParser(source, path=path)
        program = parser.parse()
        errors: List[Diagnostic] = list(parser.errors)
        errors.extend(SemanticAnalyzer().analyze(program))
    except RecursionError:
        logger.error("Nesting limit exceeded while compiling %s", path or "<source>")
        return None, [ParseError(message="Program is nested too deeply", line=1, column=1)]
    return program, errors


def check_source(source: str, *, path: str = "") -> List[Diagnostic]:
    """Lex, parse and analyse *source*; return every diagnostic found."""
    _, diagnostics = _front_end(source, path)
    return diagnostics


def compile_source(source: str, options: Optional[CompilerOptions] = None) -> CompileResult:
    """Compile MFlow *source* to JavaScript."""
    options = options or CompilerOptions()
    program, errors = _front_end(source, options.source_name)
    if errors or program is None:
        logger.debug("Compilation of %s failed with %d diagnostic(s)", options.source_name, len(errors))
        return CompileResult(
            success=False,
            diagnostics=[str(error) for error in errors],
            errors=errors,
        )

    generator = JavaScriptGenerator(canvas_id=options.canvas_id, fps=options.fps)
    generator.generate(program)
    lines = generator.lines
    if options.minify:
        lines = minify_lines(lines)
    output = render_lines(lines)

    source_map = None
    if options.sourcemap:
        source_map = build_source_map(
            lines,
            source_name=options.source_name,
            source_content=source,
        )
    return CompileResult(success=True, output=output, source_map=source_map)


class MFlowCompiler:
    """Compiler with options bound once, for tools that compile repeatedly."""

    def __init__(self, options: Optional[CompilerOptions] = None) -> None:
        self.options = options or CompilerOptions()

    def compile(self, source: str) -> CompileResult:
        return compile_source(source, self.options)

    def check(self, source: str) -> List[Diagnostic]:
        return check_source(source, path=self.options.source_name)


__all__ = ["CompileResult", "MFlowCompiler", "check_source", "compile_source"]
