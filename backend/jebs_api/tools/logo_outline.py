"""
Jeb's API — Logo Outline Builder
=================================

What:  Converts the New York Pizzeria logo bitmaps into white vector outlines
       for the website header.
How:   ImageMagick isolates colour masks and edge-outlines them into PBM
       bitmaps; potrace traces each PBM into SVG; the SVG groups are recoloured
       to white and written to the assets directory.
Who:   Run by hand after the designer delivers a new logo PNG.
When:  Build time only. Requires `magick` (ImageMagick 7) and `potrace` on PATH.

Commands:
    jebs-logo logo [SOURCE]   full logo → assets/logo-outline-white.svg
                              (red "NEW YORK PIZZERIA" text + green awning)
    jebs-logo text [SOURCE]   text-only logo → assets/logo-text-transparent.png
                                              + assets/logo-text-outline-white.svg

Intermediate masks and bitmaps live in a temporary directory that is removed
when the command finishes, successfully or not.
"""

import argparse
import logging
import re
import shlex
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from jebs_api.exceptions import ToolchainError

logger = logging.getLogger(__name__)

# Logo palette
RED = "#c41e3a"
CREAM = "#f5f0e8"
BLACK = "#000000"
WHITE = "#fff"

LOGO_FUZZ = 25
TEXT_FUZZ = 30

# -t: drop speckles smaller than N pixels; -a: corner smoothing
LOGO_POTRACE_OPTS = ["-t", "100", "-a", "2"]
TEXT_POTRACE_OPTS = ["-t", "20", "-a", "1.5"]

# Mask bitmap → outline PBM ready for potrace
OUTLINE_TO_PBM = [
    "-morphology", "EdgeOut", "Diamond",
    "-background", "white", "-alpha", "shape",
    "-background", "black", "-flatten",
    "-negate", "-colorspace", "gray", "-threshold", "50%",
]

_FILL_RE = re.compile(r'fill="#?[^"]*"', re.IGNORECASE)
_GROUP_RE = re.compile(r"<g[^>]*>.*?</g>", re.DOTALL)
_VIEWBOX_RE = re.compile(r'viewBox="([^"]+)"')

Runner = Callable[..., subprocess.CompletedProcess]


# ══════════════════════════════════════════════════════════════════════════
# SVG text helpers
# ══════════════════════════════════════════════════════════════════════════

def recolor_fills(svg: str, color: str = WHITE) -> str:
    """Rewrite every fill="..." attribute to `color`."""
    return _FILL_RE.sub(f'fill="{color}"', svg)


def extract_group(svg: str, color: str = WHITE) -> str:
    """
    Return the first <g>...</g> element of a potrace SVG, recoloured.

    The element is kept whole: potrace writes its scale/flip transform on the
    <g> tag, and the path coordinates are meaningless without it.
    Returns "" when the SVG has no group.
    """
    match = _GROUP_RE.search(svg)
    if not match:
        return ""
    return recolor_fills(match.group(0), color)


def extract_view_box(svg: str) -> Optional[str]:
    match = _VIEWBOX_RE.search(svg)
    return match.group(1) if match else None


def compose_outline_svg(view_box: str, groups: Sequence[str]) -> str:
    """One standalone SVG holding the given groups, all filled white."""
    body = "\n".join(group for group in groups if group)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}" '
        'preserveAspectRatio="xMidYMid meet">\n'
        f'<g fill="{WHITE}" stroke="none">\n'
        f"{body}\n"
        "</g>\n"
        "</svg>"
    )


# ══════════════════════════════════════════════════════════════════════════
# External tools
# ══════════════════════════════════════════════════════════════════════════

class Toolchain:
    """
    Thin wrapper around the `magick` and `potrace` binaries.

    Commands are passed as argv lists (no shell), so paths with spaces are safe.
    `runner` defaults to subprocess.run; tests inject a fake.
    """

    def __init__(
        self,
        magick: str = "magick",
        potrace: str = "potrace",
        runner: Optional[Runner] = None,
    ):
        self.magick_bin = magick
        self.potrace_bin = potrace
        self._runner = runner or subprocess.run

    def check(self) -> None:
        """Raise ToolchainError naming every binary missing from PATH."""
        missing = [b for b in (self.magick_bin, self.potrace_bin) if shutil.which(b) is None]
        if missing:
            raise ToolchainError(
                message=f"Required tool(s) not found on PATH: {', '.join(missing)}",
                command=missing,
            )

    def run(self, argv: List[str], capture: bool = False) -> str:
        logger.debug("$ %s", shlex.join(argv))
        try:
            result = self._runner(argv, check=True, capture_output=capture, text=True)
        except FileNotFoundError as e:
            raise ToolchainError(
                message=f"{argv[0]} not found on PATH", command=argv
            ) from e
        except subprocess.CalledProcessError as e:
            raise ToolchainError(
                message=f"{argv[0]} exited with status {e.returncode}",
                command=argv,
                returncode=e.returncode,
                context={"stderr": (e.stderr or "").strip()},
            ) from e
        return (result.stdout or "") if capture else ""

    def magick(self, *args: str) -> None:
        self.run([self.magick_bin, *args])

    def potrace(self, pbm: Path, svg: Path, options: Sequence[str]) -> None:
        self.run([self.potrace_bin, str(pbm), "-s", *options, "-o", str(svg)])

    def dimensions(self, image: Path) -> Tuple[int, int]:
        out = self.run([self.magick_bin, str(image), "-format", "%w %h", "info:"], capture=True)
        try:
            width, height = (int(n) for n in out.split())
        except ValueError as e:
            raise ToolchainError(
                message=f"Could not read image size of {image.name}: {out.strip()!r}"
            ) from e
        return width, height

    def trace_outline(self, mask: Path, pbm: Path, svg: Path, options: Sequence[str]) -> str:
        """Edge-outline a mask, trace it, and return the SVG text."""
        self.magick(str(mask), *OUTLINE_TO_PBM, str(pbm))
        self.potrace(pbm, svg, options)
        return svg.read_text(encoding="utf-8")


# ══════════════════════════════════════════════════════════════════════════
# Pipelines
# ══════════════════════════════════════════════════════════════════════════

def build_logo_outline(source: Path, assets_dir: Path, toolchain: Optional[Toolchain] = None) -> Path:
    """
    Full logo → white outline of the red text and the green awning.

    Returns:
        Path of the written logo-outline-white.svg
    """
    toolchain = toolchain or Toolchain()
    if not source.is_file():
        raise FileNotFoundError(f"Source not found: {source}")
    toolchain.check()

    assets_dir.mkdir(parents=True, exist_ok=True)
    output = assets_dir / "logo-outline-white.svg"

    with tempfile.TemporaryDirectory(prefix="jebs-logo-") as tmp:
        work = Path(tmp)
        text_mask = work / "text_mask.png"
        awning_mask = work / "awning_mask.png"
        pbm = work / "outline.pbm"

        logger.info("1. Extracting text mask (red)...")
        toolchain.magick(
            str(source), "-fuzz", f"{LOGO_FUZZ}%", "-transparent", RED,
            "-alpha", "extract", "-negate", "-threshold", "25%",
            "-morphology", "Dilate", "Diamond:1", str(text_mask),
        )

        # Awning: top 40% only, stripes dilated into one shape
        logger.info("2. Extracting awning mask (green roof)...")
        toolchain.magick(
            str(source), "-crop", "100%x40%+0+0", "+repage",
            "-fuzz", f"{LOGO_FUZZ}%", "-transparent", CREAM, "-transparent", RED,
            "-alpha", "extract", "-threshold", "15%",
            "-morphology", "Dilate", "Rectangle:20x5", str(awning_mask),
        )

        logger.info("3. Text outline...")
        text_svg = toolchain.trace_outline(text_mask, pbm, work / "text.svg", LOGO_POTRACE_OPTS)

        logger.info("4. Awning outline...")
        awning_svg = toolchain.trace_outline(awning_mask, pbm, work / "awning.svg", LOGO_POTRACE_OPTS)

        logger.info("5. Merging outlines...")
        view_box = extract_view_box(text_svg)
        if view_box is None:
            width, height = toolchain.dimensions(source)
            view_box = f"0 0 {width} {height}"

        # Awning was cropped from the top edge, so it shares the text's origin
        combined = compose_outline_svg(view_box, [extract_group(awning_svg), extract_group(text_svg)])
        output.write_text(combined, encoding="utf-8")

    logger.info("Done. White outline: %s", output)
    return output


def build_text_outline(
    source: Path, assets_dir: Path, toolchain: Optional[Toolchain] = None
) -> Tuple[Path, Path]:
    """
    Text-only logo (red text on black) → transparent PNG + white outline SVG.

    Returns:
        (transparent PNG path, outline SVG path)
    """
    toolchain = toolchain or Toolchain()
    if not source.is_file():
        raise FileNotFoundError(f"Source not found: {source}")
    toolchain.check()

    assets_dir.mkdir(parents=True, exist_ok=True)
    transparent_png = assets_dir / "logo-text-transparent.png"
    outline_svg = assets_dir / "logo-text-outline-white.svg"

    with tempfile.TemporaryDirectory(prefix="jebs-logo-") as tmp:
        work = Path(tmp)
        text_mask = work / "text_mask.png"
        outline_png = work / "text_outline.png"
        pbm = work / "text.pbm"

        logger.info("1. Making background transparent...")
        toolchain.magick(str(source), "-fuzz", f"{TEXT_FUZZ}%", "-transparent", BLACK, str(transparent_png))

        logger.info("2. Extracting text mask...")
        toolchain.magick(
            str(source), "-fuzz", f"{TEXT_FUZZ}%", "-transparent", BLACK,
            "-alpha", "extract", "-negate", "-threshold", "20%", str(text_mask),
        )

        logger.info("3. Extracting outline...")
        toolchain.magick(str(text_mask), "-morphology", "EdgeOut", "Diamond", str(outline_png))

        # EdgeOut already applied above; OUTLINE_TO_PBM would apply it twice
        logger.info("4. Potracing white outline...")
        toolchain.magick(str(outline_png), *OUTLINE_TO_PBM[3:], str(pbm))
        toolchain.potrace(pbm, outline_svg, TEXT_POTRACE_OPTS)

        svg = outline_svg.read_text(encoding="utf-8")
        outline_svg.write_text(recolor_fills(svg), encoding="utf-8")

    logger.info("Done. Transparent PNG: %s", transparent_png)
    logger.info("Done. White outline SVG: %s", outline_svg)
    return transparent_png, outline_svg


# ══════════════════════════════════════════════════════════════════════════
# CLI
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jebs-logo",
        description="Trace logo bitmaps into white SVG outlines (needs magick + potrace).",
    )
    parser.add_argument(
        "--assets-dir",
        type=Path,
        default=Path("assets"),
        help="Directory holding the source PNGs and receiving the outputs (default: ./assets)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every external command")

    sub = parser.add_subparsers(dest="command", required=True)

    logo = sub.add_parser("logo", help="Full logo: red text + green awning outline")
    logo.add_argument("source", nargs="?", type=Path, default=None,
                      help="Source PNG (default: <assets-dir>/logo.png)")

    text = sub.add_parser("text", help="Text-only logo: transparent PNG + outline")
    text.add_argument("source", nargs="?", type=Path, default=None,
                      help="Source PNG (default: <assets-dir>/logo-text-only.png)")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    assets_dir: Path = args.assets_dir
    try:
        if args.command == "logo":
            build_logo_outline(args.source or assets_dir / "logo.png", assets_dir)
        else:
            build_text_outline(args.source or assets_dir / "logo-text-only.png", assets_dir)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except ToolchainError as e:
        logger.error("%s", e.message)
        if e.context.get("stderr"):
            logger.error("%s", e.context["stderr"])
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
