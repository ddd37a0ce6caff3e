"""Exceptions raised while converting a flattened sketch export."""


class SketchIconError(ValueError):
    """Base class for all conversion errors.

    Every error is fatal to the conversion call that raised it.
    """


class DocumentParseError(SketchIconError):
    """Input markup is not well-formed."""


class MissingRootError(SketchIconError):
    """Input contains no <svg> element."""


class MissingViewboxError(SketchIconError):
    """The <svg> element has no viewBox attribute."""


class InvalidViewboxError(SketchIconError):
    """The viewBox is malformed or yields a non-finite viewport."""


class UnsupportedStyleTransformError(SketchIconError):
    """A style attribute carries a transform declaration."""


class UnsupportedTransformError(SketchIconError):
    """A transform attribute uses an unknown or malformed command."""


class UnsupportedElementError(SketchIconError):
    """A shape element other than <path> was found."""

    def __init__(self, kind: str):
        super().__init__(f"<{kind}> is currently not supported")
        self.kind = kind


class UnsupportedPathCommandError(SketchIconError):
    """Path data uses a command letter that cannot be rewritten."""

    def __init__(self, command: str):
        super().__init__(f'path command "{command}" is currently not supported')
        self.command = command


class PathDataError(SketchIconError):
    """Path data cannot be tokenized into commands and arguments."""
