"""Sketch Icon - Convert flattened CAD sketch exports into single-path SVG icons."""

__version__ = "0.1.0"

from .errors import (
    DocumentParseError,
    InvalidViewboxError,
    MissingRootError,
    MissingViewboxError,
    PathDataError,
    SketchIconError,
    UnsupportedElementError,
    UnsupportedPathCommandError,
    UnsupportedStyleTransformError,
    UnsupportedTransformError,
)
from .geometry import (
    TransformContext,
    Viewport,
    apply_transform,
    resolve_viewport,
)
from .path_data import (
    PathCommand,
    format_number,
    normalize_path_data,
    tokenize_path,
)
from .convert import (
    ConvertOptions,
    ConvertReport,
    convert_file,
    convert_svg_tree,
    format_convert_report,
    parse_options_file,
    sketch_to_icon,
)

__all__ = [
    # Errors
    "SketchIconError",
    "DocumentParseError",
    "MissingRootError",
    "MissingViewboxError",
    "InvalidViewboxError",
    "UnsupportedStyleTransformError",
    "UnsupportedTransformError",
    "UnsupportedElementError",
    "UnsupportedPathCommandError",
    "PathDataError",
    # Geometry
    "TransformContext",
    "Viewport",
    "apply_transform",
    "resolve_viewport",
    # Path data
    "PathCommand",
    "format_number",
    "normalize_path_data",
    "tokenize_path",
    # Conversion
    "ConvertOptions",
    "ConvertReport",
    "convert_file",
    "convert_svg_tree",
    "format_convert_report",
    "parse_options_file",
    "sketch_to_icon",
]
