"""Exception hierarchy for rastertrace."""


class RasterTraceError(Exception):
    """Base exception for all rastertrace errors."""

    pass


class RasterError(RasterTraceError):
    """Errors related to raster mask loading."""

    pass


class RasterLoadError(RasterError):
    """Error loading a raster mask file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load raster '{path}': {reason}")


class UnsupportedFormatError(RasterError):
    """Unsupported or invalid raster mask format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Unsupported raster format '{path}': {details}")


class ContourError(RasterTraceError):
    """Errors in contour tracing or simplification."""

    pass


class GraphCorruptionError(ContourError):
    """Segment graph invariant violated during ring assembly.

    Never raised for a well-formed raster; it signals a defect in the
    segment tables or in the linking logic.
    """

    def __init__(
        self,
        message: str,
        start: tuple[int, int] | None = None,
        end: tuple[int, int] | None = None,
        code: int | None = None,
        leader: int | None = None,
    ) -> None:
        self.start = start
        self.end = end
        self.code = code
        self.leader = leader

        details: list[str] = []
        if start is not None and end is not None:
            details.append(f"segment <{start} -> {end}>")
        if code is not None:
            details.append(f"cell [{code:04b}]")
        if leader is not None:
            details.append(f"ring leader #{leader}")

        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class ProcessingCancelledError(RasterTraceError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
