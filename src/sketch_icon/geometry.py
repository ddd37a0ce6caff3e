"""Viewport and transform utilities for flattened sketch exports."""

import math
import re
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from .errors import (
    InvalidViewboxError,
    MissingViewboxError,
    UnsupportedTransformError,
)

DEFAULT_PADDING_FACTOR = 0.01

# name(args) tokens of a transform attribute
TRANSFORM_TOKEN = re.compile(r"\s*([A-Za-z]+)\s*\(([^)]*)\)\s*,?")

# Transform commands and the number of arguments they take
SUPPORTED_TRANSFORMS = {
    "translate": 2,
    "scale": 2,
}


@dataclass(frozen=True)
class TransformContext:
    """Net translate and scale from local to viewport coordinates.

    Instances are immutable; every update returns a new context so that
    sibling branches of the tree never observe each other's transforms.
    """

    translate: tuple[float, float] = (0.0, 0.0)
    scale: tuple[float, float] = (1.0, 1.0)

    def translated(self, dx: float, dy: float) -> "TransformContext":
        """Apply a translate command under the current scale."""
        return TransformContext(
            translate=(
                self.scale[0] * dx + self.translate[0],
                self.scale[1] * dy + self.translate[1],
            ),
            scale=self.scale,
        )

    def scaled(self, sx: float, sy: float) -> "TransformContext":
        """Apply a scale command."""
        return TransformContext(
            translate=self.translate,
            scale=(self.scale[0] * sx, self.scale[1] * sy),
        )

    @property
    def is_reflecting(self) -> bool:
        """True if the scale mirrors exactly one axis."""
        return self.scale[0] * self.scale[1] < 0

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a local point into viewport coordinates."""
        return (
            x * self.scale[0] + self.translate[0],
            y * self.scale[1] + self.translate[1],
        )


@dataclass(frozen=True)
class Viewport:
    """Tight output frame recovered from a padded viewBox."""

    x: float
    y: float
    width: float
    height: float

    def origin_context(self) -> TransformContext:
        """Root transform context for the drawing.

        The offsets are added as they are: with a viewBox of ``10 20 100 100``
        and no padding, the point ``(15, 25)`` maps to ``(25, 45)``, not
        ``(5, 5)``. Only a ``0 0`` origin leaves points unshifted.
        """
        return TransformContext(translate=(self.x, self.y), scale=(1.0, 1.0))


def parse_viewbox(value: str) -> tuple[float, float, float, float]:
    """Parse a viewBox attribute into (min_x, min_y, width, height).

    Raises:
        InvalidViewboxError: If the value is not four numbers.
    """
    parts = value.replace(",", " ").split()
    if len(parts) != 4:
        raise InvalidViewboxError(
            f"<svg> element has an invalid viewBox attribute: {value!r}"
        )
    try:
        min_x, min_y, width, height = (float(part) for part in parts)
    except ValueError as e:
        raise InvalidViewboxError(
            f"<svg> element has an invalid viewBox attribute: {value!r}"
        ) from e
    return (min_x, min_y, width, height)


def resolve_viewport(
    root: ET.Element, padding_factor: float = DEFAULT_PADDING_FACTOR
) -> Viewport:
    """Recover the unpadded viewport of a drawing root.

    The export tool inflates the bounding box by ``padding_factor`` of the
    real size on every side. This reverses that inflation.

    Args:
        root: The <svg> element.
        padding_factor: Padding applied by the exporter on each side.

    Returns:
        Viewport whose x/y seed the root translation.

    Raises:
        MissingViewboxError: If the root has no viewBox.
        InvalidViewboxError: If the viewBox or the derived viewport is invalid.
    """
    value = root.get("viewBox")
    if not value or not value.strip():
        raise MissingViewboxError("<svg> element does not have a viewBox attribute")

    min_x, min_y, vb_width, vb_height = parse_viewbox(value)
    width = vb_width / (1 + padding_factor * 2)
    height = vb_height / (1 + padding_factor * 2)
    x_offset = min_x - width * padding_factor
    y_offset = min_y - height * padding_factor

    values = (min_x, min_y, vb_width, vb_height, x_offset, y_offset, width, height)
    if not all(math.isfinite(v) for v in values):
        raise InvalidViewboxError(
            f"<svg> element has an invalid viewBox attribute: {value!r}"
        )
    if width <= 0 or height <= 0:
        raise InvalidViewboxError(
            f"<svg> viewBox must have a positive size, got {value!r}"
        )

    return Viewport(x=x_offset, y=y_offset, width=width, height=height)


def parse_transform(value: str) -> list[tuple[str, tuple[float, ...]]]:
    """Parse a transform attribute into ordered (name, args) commands.

    Args:
        value: Transform attribute, e.g. ``"translate(1,2) scale(2,2)"``.

    Returns:
        Commands in the order they appear.

    Raises:
        UnsupportedTransformError: If a command is unknown or malformed.
    """
    commands: list[tuple[str, tuple[float, ...]]] = []
    pos = 0
    value = value.strip()
    while pos < len(value):
        match = TRANSFORM_TOKEN.match(value, pos)
        if match is None:
            raise UnsupportedTransformError(
                f"invalid transform attribute: {value!r}"
            )
        name, raw_args = match.group(1), match.group(2)
        pos = match.end()

        if name not in SUPPORTED_TRANSFORMS:
            raise UnsupportedTransformError(
                f'transform command "{name}" is currently not supported'
            )

        parts = raw_args.split(",")
        if len(parts) != SUPPORTED_TRANSFORMS[name]:
            raise UnsupportedTransformError(
                f"invalid {name} parameters: {raw_args!r}"
            )
        try:
            args = tuple(float(part.strip()) for part in parts)
        except ValueError as e:
            raise UnsupportedTransformError(
                f"invalid {name} parameters: {raw_args!r}"
            ) from e

        commands.append((name, args))

    return commands


def apply_transform(context: TransformContext, value: str) -> TransformContext:
    """Fold a transform attribute into a context, left to right.

    Each command updates the running context immediately, so a translate
    is scaled by every scale that precedes it.

    Args:
        context: Context inherited from the parent element.
        value: Transform attribute of the current element.

    Returns:
        Context for the current element and its children.

    Raises:
        UnsupportedTransformError: If a command is unknown or malformed.
    """
    for name, args in parse_transform(value):
        if name == "translate":
            context = context.translated(*args)
        elif name == "scale":
            context = context.scaled(*args)
    return context
