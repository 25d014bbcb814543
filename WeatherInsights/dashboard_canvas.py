"""Canvas abstraction for the dashboard - text output for terminals, PIL for images."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont


class DashboardCanvas(ABC):
    """Abstract canvas addressed in character cells (columns x rows)."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Get canvas width in character cells."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Get canvas height in character cells."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the entire canvas."""
        pass

    @abstractmethod
    def fill(self, r: int, g: int, b: int) -> None:
        """Fill the background with the given RGB color."""
        pass

    @abstractmethod
    def draw_text(self, col: int, row: int, text: str, r: int, g: int, b: int) -> None:
        """
        Draw text starting at a cell.

        Args:
            col: Column (0-based)
            row: Row (0-based)
            text: Text to draw; anything past the right edge is clipped
            r: Red component (0-255)
            g: Green component (0-255)
            b: Blue component (0-255)
        """
        pass


class TextCanvas(DashboardCanvas):
    """
    Plain-text canvas - stores characters in memory.

    Colors are recorded per row but not rendered. Used for terminal output
    and in unit tests.
    """

    def __init__(self, width: int = 64, height: int = 32):
        self._width = width
        self._height = height
        self.clear()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._rows = [[" "] * self._width for _ in range(self._height)]
        self._colors: List[Optional[Tuple[int, int, int]]] = [None] * self._height
        self.background: Tuple[int, int, int] = (0, 0, 0)

    def fill(self, r: int, g: int, b: int) -> None:
        self.background = (r, g, b)

    def draw_text(self, col: int, row: int, text: str, r: int, g: int, b: int) -> None:
        if not 0 <= row < self._height:
            return
        for i, char in enumerate(text):
            x = col + i
            if 0 <= x < self._width:
                self._rows[row][x] = char
        self._colors[row] = (r, g, b)

    def get_row(self, row: int) -> str:
        return "".join(self._rows[row]).rstrip()

    def get_row_color(self, row: int) -> Optional[Tuple[int, int, int]]:
        return self._colors[row]

    def to_text(self) -> str:
        return "\n".join(self.get_row(row) for row in range(self._height))


class PILCanvas(DashboardCanvas):
    """
    PIL-based canvas for rendering the dashboard to PNG images.
    """

    def __init__(
        self,
        width: int = 64,
        height: int = 32,
        cell_width: int = 7,
        cell_height: int = 13,
        scale: int = 1,
        font_path: Optional[str] = None
    ):
        """
        Initialize PIL canvas.

        Args:
            width: Canvas width in character cells
            height: Canvas height in character cells
            cell_width: Pixel width of one cell
            cell_height: Pixel height of one cell
            scale: Scale factor for output image (makes it bigger for viewing)
            font_path: TrueType font to use (defaults to PIL's built-in font)
        """
        self._width = width
        self._height = height
        self._cell_width = cell_width
        self._cell_height = cell_height
        self._scale = scale
        self._background = (0, 0, 0)
        if font_path:
            self._font = ImageFont.truetype(font_path, cell_height - 2)
        else:
            self._font = ImageFont.load_default()
        self.clear()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return (self._width * self._cell_width, self._height * self._cell_height)

    def clear(self) -> None:
        self._background = (0, 0, 0)
        self._image = Image.new("RGB", self.pixel_size, self._background)
        self._draw = ImageDraw.Draw(self._image)

    def fill(self, r: int, g: int, b: int) -> None:
        self._background = (r, g, b)
        self._image = Image.new("RGB", self.pixel_size, self._background)
        self._draw = ImageDraw.Draw(self._image)

    def draw_text(self, col: int, row: int, text: str, r: int, g: int, b: int) -> None:
        if not 0 <= row < self._height:
            return
        visible = text[:max(self._width - col, 0)]
        self._draw.text(
            (col * self._cell_width, row * self._cell_height),
            visible,
            fill=(r, g, b),
            font=self._font,
        )

    def save(self, filename: str) -> None:
        """
        Save canvas to PNG file (scaled up for visibility).

        Args:
            filename: Output filename (e.g., "dashboard.png")
        """
        if self._scale > 1:
            w, h = self.pixel_size
            scaled = self._image.resize((w * self._scale, h * self._scale), Image.NEAREST)
            scaled.save(filename)
        else:
            self._image.save(filename)

    def get_image(self):
        """Get the PIL Image object (for advanced usage)."""
        return self._image
