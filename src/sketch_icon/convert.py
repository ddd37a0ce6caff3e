"""Sketch to icon conversion.

This module ties the pipeline together:
- load: parse markup and locate the <svg> drawing root
- resolve: recover the unpadded viewport from the viewBox
- walk: flatten every path into viewport coordinates

The result is a document with a single <path> element.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from xml.etree import ElementTree as ET

import yaml

from .errors import UnsupportedElementError, UnsupportedStyleTransformError
from .geometry import (
    DEFAULT_PADDING_FACTOR,
    TransformContext,
    Viewport,
    apply_transform,
    resolve_viewport,
)
from .path_data import DEFAULT_PRECISION, format_number, normalize_path_data
from .utils import (
    SVG_NAMESPACES,
    NodeKind,
    classify_element,
    find_drawing_root,
    get_local_name,
    parse_svg_string,
)

logger = logging.getLogger(__name__)

DEFAULT_FILL = "currentColor"
DEFAULT_FILL_RULE = "evenodd"

# Option file keys, hyphenated spellings accepted as aliases
OPTION_KEYS = {
    "exported_padding_factor": "exported_padding_factor",
    "exported-padding-factor": "exported_padding_factor",
    "fill": "fill",
    "fill_rule": "fill_rule",
    "fill-rule": "fill_rule",
    "precision": "precision",
}


@dataclass(frozen=True)
class ConvertOptions:
    """Conversion settings.

    Attributes:
        exported_padding_factor: Padding the exporter added on each side.
        fill: Fill color of the output path.
        fill_rule: Fill rule of the output path.
        precision: Maximum fractional digits in coordinates.
    """

    exported_padding_factor: float = DEFAULT_PADDING_FACTOR
    fill: str = DEFAULT_FILL
    fill_rule: str = DEFAULT_FILL_RULE
    precision: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an integer, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        factor = self.exported_padding_factor
        if not math.isfinite(factor) or factor <= -0.5:
            raise ValueError(
                f"exported_padding_factor must be a finite number > -0.5, got {factor}"
            )

    def merged(self, **overrides) -> "ConvertOptions":
        """Return a copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


@dataclass
class ConvertReport:
    """Summary of a single conversion."""

    file_path: Path | None
    viewport: Viewport
    path_count: int = 0
    output_path: Path | None = None
    options: ConvertOptions = field(default_factory=ConvertOptions)


def parse_options_file(options_path: Path) -> ConvertOptions:
    """Parse a YAML options file.

    Example file::

        exported_padding_factor: 0.01
        fill: currentColor
        fill_rule: evenodd
        precision: 5

    Args:
        options_path: Path to the YAML options file.

    Returns:
        Parsed ConvertOptions, defaults for missing keys.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the option format is invalid.
    """
    with open(options_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return ConvertOptions()
    if not isinstance(data, dict):
        raise ValueError("Options file must be a YAML dictionary")

    values: dict = {}
    for key, value in data.items():
        if key not in OPTION_KEYS:
            raise ValueError(f"Unknown option: {key}")
        values[OPTION_KEYS[key]] = value

    options = ConvertOptions()
    if "exported_padding_factor" in values:
        options = options.merged(
            exported_padding_factor=float(values["exported_padding_factor"])
        )
    if "fill" in values:
        options = options.merged(fill=str(values["fill"]))
    if "fill_rule" in values:
        options = options.merged(fill_rule=str(values["fill_rule"]))
    if "precision" in values:
        precision = values["precision"]
        if isinstance(precision, float) and not precision.is_integer():
            raise ValueError(f"precision must be an integer, got {precision}")
        options = options.merged(precision=int(precision))

    return options


def collect_paths(
    element: ET.Element,
    context: TransformContext,
    precision: int = DEFAULT_PRECISION,
) -> list[str]:
    """Collect normalized path data from an element and its descendants.

    Elements are visited depth-first in document order. Each element's
    transform is folded into the context it inherited, and its children
    inherit the result. An explicit stack keeps deeply nested groups from
    exhausting the interpreter's recursion limit.

    Args:
        element: Element to start from.
        context: Context inherited from the parent element.
        precision: Maximum fractional digits.

    Returns:
        Normalized path data strings in document order.

    Raises:
        UnsupportedStyleTransformError: If a style carries a transform.
        UnsupportedTransformError: If a transform cannot be applied.
        UnsupportedElementError: If a non-path shape is found.
        UnsupportedPathCommandError: If path data uses an unsupported command.
    """
    paths: list[str] = []
    stack: list[tuple[ET.Element, TransformContext]] = [(element, context)]

    while stack:
        element, context = stack.pop()

        style = element.get("style")
        if style and "transform" in style:
            raise UnsupportedStyleTransformError(
                "style transforms are currently not supported"
            )

        transform = element.get("transform")
        if transform:
            context = apply_transform(context, transform)

        kind = classify_element(element)
        if kind is NodeKind.UNSUPPORTED:
            raise UnsupportedElementError(get_local_name(element.tag))
        elif kind is NodeKind.PATH:
            data = element.get("d")
            if data:
                paths.append(normalize_path_data(data, context, precision))
        elif kind is not NodeKind.CONTAINER:
            raise ValueError(f"Unknown node kind: {kind}")

        # Reversed so the first child is popped first
        stack.extend((child, context) for child in reversed(list(element)))

    return paths


def build_icon_element(
    viewport: Viewport, paths: list[str], options: ConvertOptions
) -> ET.Element:
    """Build the single-path output document."""
    width = format_number(viewport.width, options.precision)
    height = format_number(viewport.height, options.precision)
    svg = ET.Element(
        "svg",
        {
            "xmlns": SVG_NAMESPACES["svg"],
            "version": "1.1",
            "viewBox": f"0 0 {width} {height}",
        },
    )
    ET.SubElement(
        svg,
        "path",
        {
            "d": " ".join(paths),
            "fill": options.fill,
            "fill-rule": options.fill_rule,
        },
    )
    return svg


def convert_svg_tree(
    tree: ET.Element, options: ConvertOptions | None = None
) -> tuple[ET.Element, ConvertReport]:
    """Convert a parsed flattened export into an icon element.

    Args:
        tree: Parsed document element.
        options: Conversion settings (defaults if None).

    Returns:
        Tuple of (icon element, ConvertReport).
    """
    if options is None:
        options = ConvertOptions()

    root = find_drawing_root(tree)
    viewport = resolve_viewport(root, options.exported_padding_factor)
    paths = collect_paths(root, viewport.origin_context(), options.precision)

    logger.info(
        "Collected %d paths into a %sx%s viewport",
        len(paths),
        format_number(viewport.width, options.precision),
        format_number(viewport.height, options.precision),
    )

    report = ConvertReport(
        file_path=None,
        viewport=viewport,
        path_count=len(paths),
        options=options,
    )
    return build_icon_element(viewport, paths, options), report


def sketch_to_icon(text: str, options: ConvertOptions | None = None) -> str:
    """Convert flattened export markup into icon markup.

    Args:
        text: Markup of an SVG exported as a "Flattened SVG".
        options: Conversion settings (defaults if None).

    Returns:
        Markup of the normalized single-path icon.

    Raises:
        SketchIconError: If the input is malformed or unsupported.
    """
    icon, _ = convert_svg_tree(parse_svg_string(text), options)
    return ET.tostring(icon, encoding="unicode")


def convert_file(
    input_path: Path,
    output_path: Path | None = None,
    options: ConvertOptions | None = None,
) -> tuple[str, ConvertReport]:
    """Convert a flattened export file.

    Nothing is written unless the conversion succeeds.

    Args:
        input_path: Path to the exported SVG file.
        output_path: Where to write the icon (not written if None).
        options: Conversion settings (defaults if None).

    Returns:
        Tuple of (icon markup, ConvertReport).
    """
    text = Path(input_path).read_text(encoding="utf-8")
    icon, report = convert_svg_tree(parse_svg_string(text), options)
    output = ET.tostring(icon, encoding="unicode")
    report.file_path = Path(input_path)

    if output_path is not None:
        Path(output_path).write_text(output, encoding="utf-8")
        report.output_path = Path(output_path)
        logger.info("Wrote %s", output_path)

    return output, report


def format_convert_report(report: ConvertReport) -> str:
    """Format conversion report as text.

    Args:
        report: Conversion report.

    Returns:
        Formatted text.
    """
    precision = report.options.precision
    viewport = report.viewport
    lines: list[str] = []
    if report.file_path is not None:
        lines.append(f"File: {report.file_path}")
    lines.append(
        f"Viewport: {format_number(viewport.width, precision)} x "
        f"{format_number(viewport.height, precision)}"
    )
    lines.append(
        f"Origin offset: ({format_number(viewport.x, precision)}, "
        f"{format_number(viewport.y, precision)})"
    )
    lines.append(f"Paths merged: {report.path_count}")
    if report.output_path is not None:
        lines.append("")
        lines.append(f"Output written to: {report.output_path}")
    return "\n".join(lines)
