from PIL import ExifTags, Image, ImageChops, ImageColor, ImageDraw, ImageFilter, ImageMath
import io
import os
from dataclasses import dataclass
from typing import Any
from .exceptions import EngineError
from .config import EngineConfig
from .orientation import Orientation, parse_orientation

TRANSPARENT = "transparent"

# ImageMagick style 16-bit quantum per 8-bit channel step
QUANTUM_SCALE = 257

Color = str | tuple[int, ...]


@dataclass
class DecodedImage:
    image: Image.Image
    width: int
    height: int
    format: str
    orientation: Orientation


class PillowEngine:
    """Thin adapter between image sessions and Pillow.

    Every method takes and returns ``PIL.Image.Image`` handles; anything Pillow
    or the OS raises comes out as ``EngineError``.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()

    def decode(self, source: str | os.PathLike[str]) -> DecodedImage:
        try:
            with Image.open(source) as img:
                img.load()
                return self._describe(img.copy(), img.format, img.getexif())
        except Exception as e:
            raise EngineError(f"Failed to decode image {source}: {e}") from e

    def adopt(self, image: Image.Image) -> DecodedImage:
        """Wrap a caller's image. The session works on a copy and never tags the original."""
        try:
            image.load()
            return self._describe(image.copy(), image.format, image.getexif())
        except Exception as e:
            raise EngineError(f"Failed to read image: {e}") from e

    def decode_blob(self, blob: bytes) -> DecodedImage:
        """Decode a bitmap blob. Blobs carry no trustworthy format, so they are treated as JPEG."""
        try:
            with Image.open(io.BytesIO(blob)) as img:
                img.load()
                return self._describe(img.copy(), "JPEG", img.getexif())
        except Exception as e:
            raise EngineError(f"Failed to decode bitmap blob: {e}") from e

    def _describe(self, image: Image.Image, format: str | None, exif: Image.Exif) -> DecodedImage:
        width, height = image.size
        return DecodedImage(
            image=image,
            width=width,
            height=height,
            format=(format or self.config.fallback_format).upper(),
            orientation=parse_orientation(exif.get(ExifTags.Base.Orientation)),
        )

    def rotate(self, image: Image.Image, angle: float, fill_color: Color) -> Image.Image:
        """Rotate clockwise by ``angle`` degrees, growing the canvas to fit."""
        try:
            return image.rotate(-angle, expand=True, fillcolor=fill_color)
        except Exception as e:
            raise EngineError(f"Failed to rotate image by {angle}: {e}") from e

    def new_canvas(self, width: int, height: int, fill_color: Color) -> Image.Image:
        try:
            if fill_color == TRANSPARENT:
                return Image.new("RGBA", (width, height), (0, 0, 0, 0))
            return Image.new("RGB", (width, height), fill_color)
        except Exception as e:
            raise EngineError(f"Failed to create {width}x{height} canvas: {e}") from e

    def resize(
        self,
        image: Image.Image,
        width: int,
        height: int,
        filter: str = "LANCZOS",
        blur_factor: float = 1.0,
    ) -> Image.Image:
        """Resample to ``width`` x ``height``.

        ``blur_factor`` 1.0 leaves the result as resampled; above 1 it is
        softened, below 1 sharpened.
        """
        if blur_factor <= 0:
            raise EngineError(f"Blur factor must be positive, got {blur_factor}")
        try:
            resample = Image.Resampling[filter.upper()]
        except KeyError as e:
            raise EngineError(f"Unknown resampling filter: {filter}") from e

        try:
            if image.mode not in ("RGB", "RGBA", "L", "LA"):
                image = image.convert("RGBA")
            resized = image.resize((width, height), resample)
            if blur_factor > 1:
                resized = resized.filter(ImageFilter.GaussianBlur(radius=blur_factor - 1))
            elif blur_factor < 1:
                resized = resized.filter(ImageFilter.UnsharpMask(radius=2, percent=round((1 - blur_factor) * 100)))
            return resized
        except Exception as e:
            raise EngineError(f"Failed to resize image to {width}x{height}: {e}") from e

    def composite(self, canvas: Image.Image, overlay: Image.Image, x: int, y: int) -> Image.Image:
        """Draw ``overlay`` over ``canvas`` with its top-left corner at (x, y).

        Offsets may be negative; whatever falls outside the canvas is dropped.
        """
        try:
            base = canvas if canvas.mode == "RGBA" else canvas.convert("RGBA")
            layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
            layer.paste(overlay.convert("RGBA"), (x, y))
            result = Image.alpha_composite(base, layer)
            return result if canvas.mode == "RGBA" else result.convert(canvas.mode)
        except Exception as e:
            raise EngineError(f"Failed to composite image at ({x}, {y}): {e}") from e

    def paint_transparent(self, image: Image.Image, color: Color, threshold: int) -> Image.Image:
        """Make every pixel within ``threshold`` of ``color`` fully transparent.

        Distance is Euclidean over RGB, each 8-bit channel scaled to 16 bits.
        """
        try:
            target = ImageColor.getrgb(color) if isinstance(color, str) else tuple(color)
            if len(target) < 3:
                raise ValueError(f"expected at least 3 components, got {len(target)}")
            rgba = image.convert("RGBA")
            solid = Image.new("RGB", rgba.size, tuple(target[:3]))
        except Exception as e:
            raise EngineError(f"Failed to prepare transparency for colour {color!r}: {e}") from e

        # Squared 8-bit distances are whole numbers, so flooring the scaled limit is exact
        limit = (threshold * threshold) // (QUANTUM_SCALE * QUANTUM_SCALE)
        dr, dg, db = ImageChops.difference(rgba.convert("RGB"), solid).split()
        keep = ImageMath.lambda_eval(
            lambda args: ((args["r"] * args["r"] + args["g"] * args["g"] + args["b"] * args["b"]) > limit) * 255,
            r=dr,
            g=dg,
            b=db,
        ).convert("L")
        rgba.putalpha(ImageChops.multiply(rgba.getchannel("A"), keep))
        return rgba

    def normalize_format(self, format: str) -> str:
        """Return Pillow's name for ``format`` ("jpg" -> "JPEG"), refusing formats it cannot write."""
        name = format.strip().lstrip(".")
        extensions = Image.registered_extensions()
        normalized = extensions.get(f".{name.lower()}", name.upper())
        if normalized not in Image.SAVE:
            raise EngineError(f"Unsupported image format: {format}")
        return normalized

    def set_format(self, image: Image.Image, format: str) -> str:
        normalized = self.normalize_format(format)
        image.format = normalized
        return normalized

    def supports_alpha(self, format: str) -> bool:
        return format.upper() in self.config.transparent_formats

    def set_background_color(self, image: Image.Image, color: Color) -> Image.Image:
        """Flatten any transparency onto a solid ``color``."""
        try:
            rgba = image.convert("RGBA")
            background = Image.new("RGBA", rgba.size, color)
            return Image.alpha_composite(background, rgba).convert("RGB")
        except Exception as e:
            raise EngineError(f"Failed to set background colour {color!r}: {e}") from e

    def round_corners(
        self,
        image: Image.Image,
        x_radius: float,
        y_radius: float,
        background: Color | None = None,
    ) -> Image.Image:
        """Mask the corners with a rounded rectangle.

        Pillow draws circular corners, so the smaller of the two radii is used.
        With ``background`` the masked corners are filled with it instead of
        left transparent.
        """
        try:
            rgba = image.convert("RGBA")
            width, height = rgba.size
            mask = Image.new("L", rgba.size, 0)
            ImageDraw.Draw(mask).rounded_rectangle(
                (0, 0, width - 1, height - 1),
                radius=round(min(x_radius, y_radius)),
                fill=255,
            )
            rgba.putalpha(ImageChops.multiply(rgba.getchannel("A"), mask))
        except Exception as e:
            raise EngineError(f"Failed to round corners: {e}") from e

        if background is not None:
            return self.set_background_color(rgba, background)
        return rgba

    def _encodable(self, image: Image.Image, format: str) -> Image.Image:
        if self.supports_alpha(format):
            return image
        if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
            return self.set_background_color(image, "white")
        if format == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
            return image.convert("RGB")
        return image

    def encode_to_file(
        self,
        image: Image.Image,
        path: str | os.PathLike[str],
        format: str,
        quality: int | None = None,
    ) -> None:
        params: dict[str, Any] = {}
        if quality is not None:
            params["quality"] = quality
        try:
            self._encodable(image, format).save(path, format=format, **params)
        except Exception as e:
            raise EngineError(f"Failed to write {format} image to {path}: {e}") from e

    def encode_to_blob(self, image: Image.Image, format: str = "PNG") -> bytes:
        buffer = io.BytesIO()
        try:
            self._encodable(image, format).save(buffer, format=format)
        except Exception as e:
            raise EngineError(f"Failed to encode {format} image: {e}") from e
        return buffer.getvalue()

    def decode_legacy_bitmap(self, blob: bytes) -> Image.Image:
        """Decode a blob into a standalone truecolour image, detached from any file."""
        try:
            with Image.open(io.BytesIO(blob)) as img:
                img.load()
                has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
                return img.convert("RGBA" if has_alpha else "RGB")
        except Exception as e:
            raise EngineError(f"Failed to decode bitmap blob: {e}") from e
