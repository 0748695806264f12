#!/usr/bin/env python3
"""symbol_generator.py

Procedural generator for alphabets of abstract line glyphs, rendered to SVG.

Key features:
- Seeded, reproducible glyphs on a normalised [0, 1] x [0, 1] grid.
- Orthogonal or diagonal stroke motifs.
- Horizontal, vertical or combined mirror symmetry.
- Optional suppression of duplicate strokes within a glyph.
- Alphabet sheets (one glyph per seed) written as SVG.

Run:
  python symbol_generator.py sheet --output alphabet.svg --symmetry horizontal
  python symbol_generator.py glyph 42 --resolution 4 --output glyph.svg
  python symbol_generator.py inspect 0 --resolution 3 --motif diagonal
  python symbol_generator.py --help
"""

from __future__ import annotations

import argparse
import enum
import logging
import os
import random
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

PixelPoint = tuple[float, float]


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    return float(x)


# -------------------------
# Points and lines
# -------------------------


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point | tuple[float, float]) -> Point:
        if isinstance(other, Point):
            dx, dy = other.x, other.y
        else:
            dx, dy = other
        return Point(self.x + dx, self.y + dy)

    def clamped(self) -> Point:
        return Point(min(max(self.x, 0.0), 1.0), min(max(self.y, 0.0), 1.0))

    def mirrored_x(self) -> Point:
        """Reflect across the vertical midline x = 0.5."""
        return Point(0.5 + (0.5 - self.x), self.y)

    def mirrored_y(self) -> Point:
        """Reflect across the horizontal midline y = 0.5."""
        return Point(self.x, 0.5 + (0.5 - self.y))

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


def snap(index: int, resolution: int) -> float:
    """Map a grid index in [0, resolution - 1] onto [0, 1]."""
    return index / (resolution - 1)


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def key(self) -> frozenset[Point]:
        # Line(a, b) and Line(b, a) share a key.
        return frozenset((self.start, self.end))

    def reversed(self) -> Line:
        return Line(self.end, self.start)

    def mirrored_x(self) -> Line:
        return Line(self.start.mirrored_x(), self.end.mirrored_x())

    def mirrored_y(self) -> Line:
        return Line(self.start.mirrored_y(), self.end.mirrored_y())

    def scaled(self, scale: float, offset: PixelPoint) -> tuple[PixelPoint, PixelPoint]:
        ox, oy = offset
        return (
            (self.start.x * scale + ox, self.start.y * scale + oy),
            (self.end.x * scale + ox, self.end.y * scale + oy),
        )


# -------------------------
# Configuration
# -------------------------


def _token(value: str) -> str:
    return value.strip().lower().replace("-", "").replace("_", "")


class Symmetry(enum.Enum):
    ASYMMETRIC = "asymmetric"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    HORIZONTAL_VERTICAL = "horizontalvertical"

    @classmethod
    def parse(cls, value: Symmetry | str) -> Symmetry:
        if isinstance(value, cls):
            return value
        _require(isinstance(value, str), f"symmetry must be a string, got {value!r}")
        for member in cls:
            if member.value == _token(value):
                return member
        raise ConfigError(
            f"Could not parse symmetry {value!r}; expected one of: "
            + ", ".join(m.value for m in cls)
        )

    @property
    def mirrors_x(self) -> bool:
        return self in (Symmetry.HORIZONTAL, Symmetry.HORIZONTAL_VERTICAL)

    @property
    def mirrors_y(self) -> bool:
        return self in (Symmetry.VERTICAL, Symmetry.HORIZONTAL_VERTICAL)


class Motif(enum.Enum):
    ORTHOGONAL = "orthogonal"
    DIAGONAL = "diagonal"

    @classmethod
    def parse(cls, value: Motif | str) -> Motif:
        if isinstance(value, cls):
            return value
        _require(isinstance(value, str), f"motif must be a string, got {value!r}")
        for member in cls:
            if member.value == _token(value):
                return member
        raise ConfigError(
            f"Could not parse motif {value!r}; expected one of: "
            + ", ".join(m.value for m in cls)
        )


@dataclass(frozen=True)
class Glyph:
    seed: int
    lines: tuple[Line, ...]

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def segments(self) -> list[tuple[tuple[float, float], tuple[float, float]]]:
        return [(ln.start.as_tuple(), ln.end.as_tuple()) for ln in self.lines]


@dataclass(frozen=True)
class Alphabet:
    """A fixed glyph configuration; a stateless factory over `generate`.

    resolution: grid positions per axis (>= 2)
    density: random-walk attempts per grid position (>= 1)
    symmetry / motif: enum members or their string tokens
    suppress_duplicates: drop strokes equal (in either direction) to one
        already kept for the same glyph
    """

    resolution: int
    density: int
    symmetry: Symmetry = Symmetry.ASYMMETRIC
    motif: Motif = Motif.ORTHOGONAL
    suppress_duplicates: bool = False

    def __post_init__(self) -> None:
        resolution = _as_int(self.resolution, "resolution")
        density = _as_int(self.density, "density")
        _require(resolution >= 2, f"resolution must be >= 2, got {resolution}")
        _require(density >= 1, f"density must be >= 1, got {density}")
        _require(
            isinstance(self.suppress_duplicates, bool),
            "suppress_duplicates must be a boolean",
        )
        # Frozen: normalise string tokens through object.__setattr__.
        object.__setattr__(self, "symmetry", Symmetry.parse(self.symmetry))
        object.__setattr__(self, "motif", Motif.parse(self.motif))

    @property
    def step(self) -> float:
        return 1.0 / (self.resolution - 1)

    @property
    def num_attempts(self) -> int:
        return self.density * self.resolution

    def generate(self, seed: int) -> Glyph:
        return generate(self, seed)

    generate_glyph = generate

    def generate_many(self, seeds: Iterable[int]) -> list[Glyph]:
        return [generate(self, seed) for seed in seeds]


# -------------------------
# Generation
# -------------------------

_ADJUSTMENTS = (-1, 0, 1)
_EPSILON = sys.float_info.epsilon


def _gen_coordinate(rng: random.Random, resolution: int) -> float:
    return snap(rng.randrange(resolution), resolution)


def _gen_adjustment(rng: random.Random) -> int:
    """Return -1, 0 or 1 with equal probability."""
    return rng.choice(_ADJUSTMENTS)


def _orthogonal_offset(value: float, step: float, rng: random.Random) -> float:
    # Strokes starting on an edge always point inward.
    if value == 0.0:
        return step
    if abs(value - 1.0) < _EPSILON:
        return -step
    return _gen_adjustment(rng) * step


def walk_segments(config: Alphabet, rng: random.Random) -> list[Line]:
    """Run the random walk and return the accepted strokes in draw order.

    Every attempt consumes randomness in a fixed order: two motif bits, the
    start x and y indices, then any adjustments (x before y). Degenerate
    strokes, and duplicates when `config.suppress_duplicates` is set, are
    dropped without retrying the attempt.
    """
    step = config.step
    lines: list[Line] = []
    seen: set[frozenset[Point]] = set()
    degenerate = duplicates = 0

    for _ in range(config.num_attempts):
        flip_x = bool(rng.getrandbits(1))
        flip_y = bool(rng.getrandbits(1))

        start = Point(
            _gen_coordinate(rng, config.resolution),
            _gen_coordinate(rng, config.resolution),
        )

        dx = dy = 0.0
        if config.motif is Motif.ORTHOGONAL:
            if flip_x:
                dx = _orthogonal_offset(start.x, step, rng)
            else:
                dy = _orthogonal_offset(start.y, step, rng)
        else:
            if flip_x:
                dx = _gen_adjustment(rng) * step
            if flip_y:
                dy = _gen_adjustment(rng) * step

        line = Line(start, (start + (dx, dy)).clamped())
        if line.is_degenerate:
            degenerate += 1
            continue
        if config.suppress_duplicates:
            key = line.key()
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
        lines.append(line)

    logger.debug(
        "walk: attempts=%d kept=%d degenerate=%d duplicates=%d",
        config.num_attempts,
        len(lines),
        degenerate,
        duplicates,
    )
    return lines


def expand_symmetry(lines: Sequence[Line], symmetry: Symmetry) -> list[Line]:
    """Append mirrored copies of `lines` according to `symmetry`.

    The vertical pass runs over the list after the horizontal mirrors were
    appended, so HORIZONTAL_VERTICAL yields four copies of every stroke.
    Mirrors are never deduplicated.
    """
    out = list(lines)
    if symmetry.mirrors_x:
        out.extend([ln.mirrored_x() for ln in out])
    if symmetry.mirrors_y:
        out.extend([ln.mirrored_y() for ln in out])
    return out


def generate(config: Alphabet, seed: int) -> Glyph:
    """Deterministically generate the glyph for `seed` under `config`."""
    _require(isinstance(config, Alphabet), "config must be an Alphabet")
    seed = _as_int(seed, "seed")

    rng = random.Random(seed)
    lines = expand_symmetry(walk_segments(config, rng), config.symmetry)

    logger.debug(
        "glyph seed=%d resolution=%d symmetry=%s lines=%d",
        seed,
        config.resolution,
        config.symmetry.value,
        len(lines),
    )
    return Glyph(seed=seed, lines=tuple(lines))


# -------------------------
# SVG writing
# -------------------------


@dataclass(frozen=True)
class SheetLayout:
    columns: int = 26
    rows: int = 4
    scale: float = 25.0
    spacing: float = 25.0
    line_width: float = 4.0
    precision: int = 3
    background: str | None = "white"
    stroke: str = "#000"

    def __post_init__(self) -> None:
        _require(_as_int(self.columns, "columns") >= 1, "columns must be >= 1")
        _require(_as_int(self.rows, "rows") >= 1, "rows must be >= 1")
        _require(_as_float(self.scale, "scale") > 0, "scale must be > 0")
        _require(_as_float(self.spacing, "spacing") >= 0, "spacing must be >= 0")
        _require(_as_float(self.line_width, "line_width") > 0, "line_width must be > 0")
        precision = _as_int(self.precision, "precision")
        _require(0 <= precision <= 10, "precision must be between 0 and 10")

    @property
    def width(self) -> float:
        return self.spacing + (self.scale + self.spacing) * self.columns

    @property
    def height(self) -> float:
        return self.spacing + (self.scale + self.spacing) * self.rows

    def offset(self, row: int, column: int) -> PixelPoint:
        pitch = self.scale + self.spacing
        return (self.spacing + pitch * column, self.spacing + pitch * row)

    def seed(self, row: int, column: int) -> int:
        return row * self.columns + column


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in SVG output.
    if not x:
        x = 0.0
    # Strip trailing zeros for nicer SVG.
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s or "0"


def _svg_document(
    width: float,
    height: float,
    body: list[str],
    *,
    precision: int,
    line_width: float,
    stroke: str,
    background: str | None,
    title: str | None,
) -> str:
    w = _fmt(width, precision)
    h = _fmt(height, precision)
    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        "<svg xmlns=\"http://www.w3.org/2000/svg\" version=\"1.1\" "
        f"viewBox=\"0 0 {w} {h}\" width=\"{w}\" height=\"{h}\">"
    )

    if title:
        safe_title = (
            title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        )
        lines.append(f"  <title>{safe_title}</title>")

    if background and background.lower() != "none":
        lines.append(f'  <rect x="0" y="0" width="{w}" height="{h}" fill="{background}" />')

    lines.append(
        f'  <g stroke="{stroke}" stroke-width="{_fmt(line_width, precision)}" '
        'fill="none" stroke-linecap="round">'
    )
    lines.extend(body)
    lines.append("  </g>")
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def _glyph_elements(
    glyph: Glyph, scale: float, offset: PixelPoint, precision: int
) -> list[str]:
    out: list[str] = []
    for line in glyph:
        (x1, y1), (x2, y2) = line.scaled(scale, offset)
        out.append(
            f'    <line x1="{_fmt(x1, precision)}" y1="{_fmt(y1, precision)}" '
            f'x2="{_fmt(x2, precision)}" y2="{_fmt(y2, precision)}" />'
        )
    return out


def render_glyph_svg(
    glyph: Glyph,
    *,
    scale: float = 100.0,
    margin: float = 10.0,
    line_width: float = 4.0,
    precision: int = 3,
    stroke: str = "#000",
    background: str | None = "white",
) -> str:
    _require(scale > 0, "scale must be > 0")
    _require(margin >= 0, "margin must be >= 0")
    body = _glyph_elements(glyph, scale, (margin, margin), precision)
    size = scale + 2 * margin
    return _svg_document(
        size,
        size,
        body,
        precision=precision,
        line_width=line_width,
        stroke=stroke,
        background=background,
        title=f"glyph {glyph.seed}",
    )


def render_sheet_svg(
    glyph_rows: Sequence[Sequence[Glyph]],
    layout: SheetLayout,
    *,
    title: str | None = None,
) -> str:
    """Lay out rows of glyphs on one sheet, left to right, top to bottom."""
    _require(
        len(glyph_rows) <= layout.rows, f"sheet holds at most {layout.rows} rows"
    )
    body: list[str] = []
    for row, glyphs in enumerate(glyph_rows):
        _require(
            len(glyphs) <= layout.columns,
            f"sheet holds at most {layout.columns} glyphs per row",
        )
        for column, glyph in enumerate(glyphs):
            offset = layout.offset(row, column)
            body.extend(_glyph_elements(glyph, layout.scale, offset, layout.precision))
    return _svg_document(
        layout.width,
        layout.height,
        body,
        precision=layout.precision,
        line_width=layout.line_width,
        stroke=layout.stroke,
        background=layout.background,
        title=title,
    )


def build_sheet(
    layout: SheetLayout,
    *,
    density: int = 3,
    symmetry: Symmetry | str = Symmetry.ASYMMETRIC,
    motif: Motif | str = Motif.DIAGONAL,
    resolution: int | None = None,
    suppress_duplicates: bool = False,
) -> list[list[Glyph]]:
    """Generate one glyph per sheet cell, seeded by its cell index.

    Without an explicit `resolution`, row r uses a grid of r + 2 positions.
    """
    rows: list[list[Glyph]] = []
    for row in range(layout.rows):
        alphabet = Alphabet(
            resolution=row + 2 if resolution is None else resolution,
            density=density,
            symmetry=symmetry,
            motif=motif,
            suppress_duplicates=suppress_duplicates,
        )
        seeds = [layout.seed(row, column) for column in range(layout.columns)]
        rows.append(alphabet.generate_many(seeds))
    return rows


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def write_output(text: str, path: str | None) -> None:
    """Write `text` to `path`, or to stdout when no path is given."""
    if path is None:
        sys.stdout.write(text)
        return
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
GLYPH CONFIGURATION

  --resolution N  (>= 2)
      Grid positions per axis. Coordinates are snapped to k / (N - 1).

  --density N  (>= 1)
      Random-walk attempts per grid position; N * resolution attempts are
      made per glyph. Degenerate strokes are dropped, so this is an upper
      bound on the stroke count before symmetry.

  --motif orthogonal|diagonal
      orthogonal: each stroke moves along one axis; strokes starting on an
                  edge always point inward.
      diagonal:   x and y are each displaced with probability 1/2.

  --symmetry asymmetric|horizontal|vertical|horizontalvertical
      horizontal mirrors across the vertical midline (2x strokes), vertical
      across the horizontal midline (2x), horizontalvertical does both (4x).
      Mirrored copies are never deduplicated.

  --suppress-duplicates
      Drop strokes already present in the glyph (in either direction)
      before symmetry is applied.

SHEETS

  The sheet command draws COLUMNS x ROWS glyphs. The glyph in row r and
  column c uses seed r * COLUMNS + c. Unless --resolution is given, row r
  uses resolution r + 2.

Examples

  python symbol_generator.py sheet --output alphabet.svg
  python symbol_generator.py sheet --symmetry horizontal --motif orthogonal
  python symbol_generator.py glyph 7 --resolution 5 --density 2 --output g.svg
  python symbol_generator.py inspect 0 --resolution 3 --motif diagonal
"""


def _add_glyph_options(p: argparse.ArgumentParser, *, resolution: int | None) -> None:
    p.add_argument(
        "--resolution",
        type=int,
        default=resolution,
        help="Grid positions per axis (>= 2).",
    )
    p.add_argument(
        "--density", type=int, default=3, help="Attempts per grid position (>= 1)."
    )
    p.add_argument(
        "--symmetry",
        default=Symmetry.ASYMMETRIC.value,
        help="asymmetric, horizontal, vertical or horizontalvertical.",
    )
    p.add_argument(
        "--motif",
        default=Motif.DIAGONAL.value,
        help="orthogonal or diagonal.",
    )
    p.add_argument(
        "--suppress-duplicates",
        action="store_true",
        help="Drop repeated strokes within a glyph before symmetry.",
    )


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="symbolgen",
        description="Generate alphabets of configurable symbols as SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log generation details."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    ps = sub.add_parser(
        "sheet",
        help="Render a sheet of glyphs, one per seed, to SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ps.add_argument("--output", default=None, help="Output file, stdout if absent.")
    _add_glyph_options(ps, resolution=None)
    ps.add_argument("--columns", type=int, default=26)
    ps.add_argument("--rows", type=int, default=4)
    ps.add_argument("--scale", type=float, default=25.0, help="Glyph size in pixels.")
    ps.add_argument("--spacing", type=float, default=25.0)
    ps.add_argument("--line-width", type=float, default=4.0)

    pg = sub.add_parser(
        "glyph",
        help="Render a single glyph to SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("seed", type=int, help="Seed for the glyph.")
    pg.add_argument("--output", default=None, help="Output file, stdout if absent.")
    _add_glyph_options(pg, resolution=3)
    pg.add_argument("--scale", type=float, default=100.0, help="Glyph size in pixels.")
    pg.add_argument("--line-width", type=float, default=4.0)

    pi = sub.add_parser(
        "inspect",
        help="Print the strokes of a single glyph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pi.add_argument("seed", type=int, help="Seed for the glyph.")
    _add_glyph_options(pi, resolution=3)

    return p


# -------------------------
# Commands
# -------------------------


def _alphabet_from_args(args: argparse.Namespace) -> Alphabet:
    return Alphabet(
        resolution=args.resolution,
        density=args.density,
        symmetry=Symmetry.parse(args.symmetry),
        motif=Motif.parse(args.motif),
        suppress_duplicates=args.suppress_duplicates,
    )


def cmd_sheet(args: argparse.Namespace) -> None:
    layout = SheetLayout(
        columns=args.columns,
        rows=args.rows,
        scale=args.scale,
        spacing=args.spacing,
        line_width=args.line_width,
    )
    glyph_rows = build_sheet(
        layout,
        density=args.density,
        symmetry=Symmetry.parse(args.symmetry),
        motif=Motif.parse(args.motif),
        resolution=args.resolution,
        suppress_duplicates=args.suppress_duplicates,
    )
    logger.info(
        "sheet: %dx%d glyphs, %d strokes",
        layout.columns,
        layout.rows,
        sum(len(g) for row in glyph_rows for g in row),
    )
    write_output(render_sheet_svg(glyph_rows, layout, title="symbolgen"), args.output)


def cmd_glyph(args: argparse.Namespace) -> None:
    alphabet = _alphabet_from_args(args)
    glyph = alphabet.generate(args.seed)
    logger.info("glyph: seed=%d strokes=%d", glyph.seed, len(glyph))
    write_output(
        render_glyph_svg(glyph, scale=args.scale, line_width=args.line_width),
        args.output,
    )


def cmd_inspect(args: argparse.Namespace) -> None:
    alphabet = _alphabet_from_args(args)
    walked = walk_segments(alphabet, random.Random(args.seed))
    glyph = alphabet.generate(args.seed)

    print(f"seed: {glyph.seed}")
    print(
        f"resolution: {alphabet.resolution} density: {alphabet.density} "
        f"step: {alphabet.step:g}"
    )
    print(f"symmetry: {alphabet.symmetry.value} motif: {alphabet.motif.value}")
    print(f"attempts: {alphabet.num_attempts}")
    print(f"strokes before symmetry: {len(walked)}")
    print(f"strokes: {len(glyph)}")
    for (x1, y1), (x2, y2) in glyph.segments():
        print(f"  ({x1:g}, {y1:g}) -> ({x2:g}, {y2:g})")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.cmd == "sheet":
            cmd_sheet(args)
        elif args.cmd == "glyph":
            cmd_glyph(args)
        elif args.cmd == "inspect":
            cmd_inspect(args)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
