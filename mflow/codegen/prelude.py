"""Runtime library text emitted ahead of every compiled program.

The prelude binds the canvas and its 2D context, installs the ``mflow``
runtime state (pointer, time, frame count, keys) on ``window.mflow``,
defines the math/color/array/input helpers programs may call, and the
shared ``animationState`` plus the transform helpers shapes use.
"""

from __future__ import annotations

import textwrap
from typing import Optional

from .literals import format_number, format_string

DEFAULT_CANVAS_ID = "mflow-canvas"
DEFAULT_TICK = 0.016


RUNTIME_STATE = textwrap.dedent("""
    // Runtime state
    const mflow = {
      mouseX: 0,
      mouseY: 0,
      time: 0,
      frameCount: 0,
      keys: {},
      canvas: canvas,
      ctx: ctx
    };
    window.mflow = mflow;
""").strip()

MATH_HELPERS = textwrap.dedent("""
    // Math helpers
    const sin = Math.sin, cos = Math.cos, tan = Math.tan;
    const asin = Math.asin, acos = Math.acos, atan = Math.atan, atan2 = Math.atan2;
    const sqrt = Math.sqrt, pow = Math.pow, abs = Math.abs;
    const floor = Math.floor, ceil = Math.ceil, round = Math.round;
    const min = Math.min, max = Math.max;
    const random = (lo, hi) => lo === undefined ? Math.random() : hi === undefined ? Math.random() * lo : Math.random() * (hi - lo) + lo;
    const noise = (x, y, z) => { const n = x * 12.9898 + (y || 0) * 78.233 + (z || 0) * 37.719; return ((Math.sin(n) * 43758.5453123) % 1 + 1) / 2; };
    const lerp = (a, b, t) => a + (b - a) * t;
    const map = (value, start1, stop1, start2, stop2) => start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1));
    const constrain = (value, lo, hi) => Math.min(Math.max(value, lo), hi);
    const dist = (x1, y1, x2, y2) => Math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2);
    const radians = (deg) => deg * Math.PI / 180;
    const degrees = (rad) => rad * 180 / Math.PI;
    const PI = Math.PI, TWO_PI = Math.PI * 2, HALF_PI = Math.PI / 2;
""").strip()

COLOR_HELPERS = textwrap.dedent("""
    // Color helpers
    const rgb = (r, g, b) => "rgb(" + Math.round(r) + "," + Math.round(g) + "," + Math.round(b) + ")";
    const rgba = (r, g, b, a) => "rgba(" + Math.round(r) + "," + Math.round(g) + "," + Math.round(b) + "," + a + ")";
    const hsl = (h, s, l) => "hsl(" + h + "," + s + "%," + l + "%)";
    const hsla = (h, s, l, a) => "hsla(" + h + "," + s + "%," + l + "%," + a + ")";
""").strip()

ARRAY_HELPERS = textwrap.dedent("""
    // Array helpers
    const length = (arr) => arr.length;
    const push = (arr, ...items) => arr.push(...items);
    const pop = (arr) => arr.pop();
    const slice = (arr, start, end) => arr.slice(start, end);
    const concat = (a, b) => a.concat(b);
    const join = (arr, separator) => arr.join(separator);
""").strip()

INPUT_HELPERS = textwrap.dedent("""
    // Input helpers
    const mouseX = () => mflow.mouseX;
    const mouseY = () => mflow.mouseY;
    const time = () => mflow.time;
    const frameCount = () => mflow.frameCount;
    const keyDown = (key) => mflow.keys[key] === true;
""").strip()

ANIMATION_STATE = textwrap.dedent("""
    // Animation state
    let animationState = {
      x: 0,
      y: 0,
      rotation: 0,
      scale: 1,
      opacity: 1
    };

    function resetTransform() {
      ctx.setTransform(1, 0, 0, 1, 0, 0);
    }

    function applyTransform(x, y) {
      ctx.translate(x + animationState.x, y + animationState.y);
      ctx.rotate(animationState.rotation * Math.PI / 180);
      ctx.scale(animationState.scale, animationState.scale);
      ctx.globalAlpha = animationState.opacity;
    }

    function clear() {
      ctx.clearRect(0, 0, canvas.width, canvas.height);
    }
""").strip()


def canvas_setup(canvas_id: str) -> str:
    """Canvas and context lookup for the configured element id."""
    quoted = format_string(canvas_id)
    missing = format_string(f"Canvas not found: {canvas_id}")
    return "\n".join([
        "// MFlow compiled output",
        f"const canvas = document.getElementById({quoted});",
        f"if (!canvas) {{ console.error({missing}); }}",
        'const ctx = canvas.getContext("2d");',
        'if (!ctx) { console.error("Cannot get 2D context"); }',
    ])


def event_loop(tick: float) -> str:
    """Pointer and keyboard listeners plus the per-frame clock."""
    return textwrap.dedent(f"""
        // Input and clock
        (function () {{
          document.addEventListener("mousemove", (e) => {{
            const rect = canvas.getBoundingClientRect();
            mflow.mouseX = e.clientX - rect.left;
            mflow.mouseY = e.clientY - rect.top;
          }});
          document.addEventListener("keydown", (e) => {{ mflow.keys[e.key] = true; }});
          document.addEventListener("keyup", (e) => {{ mflow.keys[e.key] = false; }});
          function updateTime() {{
            mflow.time += {format_number(tick)};
            mflow.frameCount++;
            requestAnimationFrame(updateTime);
          }}
          updateTime();
        }})();
    """).strip()


def frame_tick(fps: Optional[float]) -> float:
    """Seconds added to ``mflow.time`` per frame."""
    if not fps:
        return DEFAULT_TICK
    return 1 / fps


def render_prelude(canvas_id: str = DEFAULT_CANVAS_ID, fps: Optional[float] = None) -> str:
    """Assemble the full prelude text."""
    sections = [
        canvas_setup(canvas_id),
        RUNTIME_STATE,
        event_loop(frame_tick(fps)),
        MATH_HELPERS,
        COLOR_HELPERS,
        ARRAY_HELPERS,
        INPUT_HELPERS,
        ANIMATION_STATE,
    ]
    return "\n\n".join(sections) + "\n"


__all__ = [
    "DEFAULT_CANVAS_ID",
    "DEFAULT_TICK",
    "frame_tick",
    "render_prelude",
]
