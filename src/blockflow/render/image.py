"""Image graphics using Pillow."""

from io import BytesIO
from pathlib import Path

from PIL import Image
from reportlab.lib.utils import ImageReader

# Resolution assumed for images that carry no DPI information
DEFAULT_DPI = 72.0


def load_image_from_bytes(image_data: bytes) -> Image.Image:
    """
    Load image from raw bytes.

    Args:
        image_data: Raw image bytes (JPEG, PNG, etc.).

    Returns:
        PIL Image object.
    """
    return Image.open(BytesIO(image_data))


class Graphic:
    """A fixed-size image that can be placed as a run."""

    def __init__(self, image_bytes: bytes, name: str = "") -> None:
        """
        Load and prepare image from bytes.

        Args:
            image_bytes: Raw image data (JPEG, PNG, etc.).
            name: Label used in logs and dumps.
        """
        self._image = load_image_from_bytes(image_bytes)
        if self._image.mode not in ("RGB", "RGBA"):
            self._image = self._image.convert("RGBA")
        self.name = name

        dpi = self._image.info.get("dpi", (DEFAULT_DPI, DEFAULT_DPI))
        dpi_x, dpi_y = (float(d) or DEFAULT_DPI for d in dpi)
        self._size = (self._image.width * 72 / dpi_x, self._image.height * 72 / dpi_y)

    @classmethod
    def from_path(cls, path: str | Path) -> "Graphic":
        """
        Load a graphic from an image file.

        Args:
            path: Image file path.

        Returns:
            Graphic object.

        Raises:
            FileNotFoundError: If the file doesn't exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {path}")
        return cls(path.read_bytes(), name=path.name)

    @property
    def image(self) -> Image.Image:
        """Get original PIL Image."""
        return self._image

    @property
    def size(self) -> tuple[float, float]:
        """Natural (width, height) in points."""
        return self._size

    def scaled_to_width(self, width: float) -> tuple[float, float]:
        """
        Get the size for a given width, keeping the aspect ratio.

        Args:
            width: Target width in points.

        Returns:
            Tuple of (width, height) in points.
        """
        natural_width, natural_height = self._size
        return (width, natural_height * width / natural_width)

    def image_reader(self) -> ImageReader:
        """
        Convert the image to a ReportLab ImageReader.

        Returns:
            ImageReader object ready for canvas.drawImage().
        """
        img_buffer = BytesIO()
        self._image.save(img_buffer, format="PNG")
        img_buffer.seek(0)
        return ImageReader(img_buffer)

    def __repr__(self) -> str:
        return f"Graphic({self.name!r}, {self._size[0]:.1f}x{self._size[1]:.1f}pt)"
