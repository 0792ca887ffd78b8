import os
from enum import Enum
from pathlib import Path

from PIL import Image

from .config import Config
from .engine import TRANSPARENT, Color, PillowEngine
from .exceptions import EngineError, MissingDestination, UnsupportedSource
from .geometry import Dimension, ResizeResult
from .logger import Logger
from .orientation import is_mirrored, rotation_for
from .resize import ResizeConstraints, ResizeMethod, compute_resize, constraints_for

# Sentinel for "use the configured default" where None is itself meaningful
_DEFAULT = object()


class SessionState(Enum):
    LOADING = "loading"
    READY = "ready"
    FINALIZED = "finalized"


class ImageSession:
    """One image being edited.

    Parameters
    ----------
    source : str | os.PathLike | PIL.Image.Image | bytes
        File to load, an already decoded Pillow image, or a bitmap blob
    config : Config | None, optional
        Defaults for resizing, transparency and encoding, by default the
        packaged ``config.yaml``
    engine : PillowEngine | None, optional
        Adapter used for every pixel operation, by default one built from ``config``
    logger : Logger | None, optional
        Receives progress messages, by default a silent logger

    Raises
    ------
    UnsupportedSource
        If ``source`` is none of the accepted kinds
    EngineError
        If Pillow cannot decode the source
    """

    def __init__(
        self,
        source: str | os.PathLike[str] | Image.Image | bytes,
        config: Config | None = None,
        engine: PillowEngine | None = None,
        logger: Logger | None = None,
    ):
        self.config = config or Config.default()
        self.engine = engine or PillowEngine(self.config.engine)
        self.logger = logger or Logger(verbose=False)
        self._state = SessionState.LOADING
        self._file: Path | None = None

        if isinstance(source, (str, os.PathLike)):
            self._file = Path(source)
            decoded = self.engine.decode(self._file)
        elif isinstance(source, Image.Image):
            decoded = self.engine.adopt(source)
        elif isinstance(source, (bytes, bytearray)):
            decoded = self.engine.decode_blob(bytes(source))
        else:
            raise UnsupportedSource(f"Invalid source for an image session: {type(source).__name__}")

        self._image = decoded.image
        self._format = decoded.format

        angle = rotation_for(decoded.orientation)
        if angle is not None:
            self.logger.debug(f"Rotating image by {angle} degrees ({decoded.orientation.name})")
            self._image = self.engine.rotate(self._image, angle, self.config.orientation.fill_color)
        elif is_mirrored(decoded.orientation):
            self.logger.warning(f"Leaving mirrored orientation {decoded.orientation.name} uncorrected")

        self._width, self._height = self._image.size
        self._state = SessionState.READY
        self.logger.info(f"Loaded {self._format} image {self._width}x{self._height}")

    @property
    def file(self) -> Path | None:
        return self._file

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Dimension:
        return Dimension(self._width, self._height)

    @property
    def format(self) -> str:
        return self._format

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def state(self) -> SessionState:
        return self._state

    def set_file(self, path: str | os.PathLike[str]) -> None:
        self._file = Path(path)

    def resize(
        self,
        method: ResizeMethod | int | str | ResizeConstraints = ResizeMethod.STANDARD,
        target_format: str | None = None,
        max_width: int | None = _DEFAULT,
        max_height: int | None = _DEFAULT,
        offset_x: int = 0,
        offset_y: int = 0,
        crop_width: int | None = None,
        crop_height: int | None = None,
    ) -> ResizeResult:
        """Resize the image onto a new canvas.

        ``method`` is either a method selector, combined with the sizing
        arguments, or a ready-made constraint object, in which case the sizing
        arguments are ignored. Nothing changes if the geometry cannot be computed.

        Returns
        -------
        ResizeResult
            The geometry that was applied
        """
        if isinstance(method, ResizeConstraints):
            constraints = method
        else:
            constraints = constraints_for(
                method,
                max_width=self.config.resize.max_width if max_width is _DEFAULT else max_width,
                max_height=self.config.resize.max_height if max_height is _DEFAULT else max_height,
                offset_x=offset_x,
                offset_y=offset_y,
                crop_width=crop_width,
                crop_height=crop_height,
            )

        result = compute_resize(self.size, constraints)
        self.logger.debug(
            f"{type(constraints).__name__} resize of {self.size}: scaled {result.scaled}, "
            f"canvas {result.canvas}, offset {result.offset.as_tuple()}"
        )

        format = self._format
        if target_format:
            format = self.engine.set_format(self._image, target_format)

        fill = TRANSPARENT if self.engine.supports_alpha(format) else "white"
        canvas = self.engine.new_canvas(result.canvas.width, result.canvas.height, fill)
        scaled = self.engine.resize(
            self._image,
            result.scaled.width,
            result.scaled.height,
            self.config.resize.filter,
            self.config.resize.blur_factor,
        )
        self._image = self.engine.composite(canvas, scaled, result.offset.x, result.offset.y)

        self._format = format
        self._width, self._height = result.canvas.as_tuple()
        self._state = SessionState.READY
        return result

    def make_transparent(self, background_color: Color | None = None, threshold: int | None = None) -> None:
        if background_color is None:
            background_color = self.config.transparency.background_color
        if threshold is None:
            threshold = self.config.transparency.threshold

        self._image = self.engine.paint_transparent(self._image, background_color, threshold)
        self._format = self.engine.set_format(self._image, "PNG")
        self._state = SessionState.READY
        self.logger.debug(f"Made {background_color} transparent (threshold {threshold})")

    def round_corners(self, color: Color, radius: float | None = None) -> None:
        # Formats without alpha get the corners painted in ``color``
        background = None if self.engine.supports_alpha(self._format) else color
        radius = radius or (self._width + self._height) / 4

        self._image = self.engine.round_corners(self._image, radius, radius, background=background)
        self._state = SessionState.READY
        self.logger.debug(f"Rounded corners with radius {radius}")

    def write(self, path: str | os.PathLike[str] | None = None) -> Path:
        """Encode the image to ``path``, or to the file it was loaded from.

        The image is first written next to the destination with the format as
        extension, then renamed over it, so the destination never holds a
        partial file.

        Raises
        ------
        MissingDestination
            If no path was given now or before
        EngineError
            If encoding fails; the temporary file is left in place
        """
        if path is not None:
            self._file = Path(path)

        if self._file is None:
            raise MissingDestination("Missing file name to write the image to")

        quality = None
        if self._format in self.config.engine.lossy_formats:
            quality = self.config.engine.jpeg_quality

        temporary = self._file.with_name(f"{self._file.name}.{self._format.lower()}")
        self.engine.encode_to_file(self._image, temporary, self._format, quality=quality)
        try:
            os.replace(temporary, self._file)
        except OSError as e:
            raise EngineError(f"Failed to move {temporary} to {self._file}: {e}") from e

        self._state = SessionState.FINALIZED
        self.logger.info(f"Wrote {self._format} image {self._width}x{self._height} to {self._file}")
        return self._file

    def export_legacy_handle(self) -> Image.Image:
        """Return an independent copy of the current image, round-tripped through a PNG blob."""
        blob = self.engine.encode_to_blob(self._image, "PNG")
        return self.engine.decode_legacy_bitmap(blob)
