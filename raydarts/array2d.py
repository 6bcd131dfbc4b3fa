"""A resizable two-dimensional array, images, and density visualisation helpers."""

from __future__ import annotations

from typing import Any, Iterator

from raydarts.colormap import inferno


class Array2d:
    """A width-by-height grid of values stored in row-major order."""

    def __init__(self, width: int = 0, height: int = 0, value: Any = 0.0) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"negative array size {width} x {height}")
        self._fill = value
        self._data = [value] * (width * height)
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def index_1d(self, x: int, y: int) -> int:
        """Convert a 2-D index into a linear index."""
        return y * self._width + x

    def index_2d(self, i: int) -> tuple[int, int]:
        """Convert a linear index into a 2-D index."""
        return (i % self._width, i // self._width)

    def _linear(self, key: Any) -> int:
        if isinstance(key, tuple):
            x, y = key
            return self.index_1d(x, y)
        return key

    def at(self, *args: int) -> Any:
        """Bounds-checked access by ``(x, y)`` or by a linear index."""
        if len(args) == 2:
            i = self.index_1d(*args)
        elif len(args) == 1:
            i = args[0]
        else:
            raise TypeError("at() takes a linear index or an x, y pair")
        if not 0 <= i < len(self._data):
            raise IndexError(f"index {args} out of range for {self._width} x {self._height} array")
        return self._data[i]

    def row(self, y: int) -> list[Any]:
        """Return a copy of the ``y``-th row."""
        start = self.index_1d(0, y)
        return self._data[start : start + self._width]

    def resize(self, width: int, height: int) -> None:
        """Resize to width by height, padding with the construction fill value."""
        if (width, height) == self.size:
            return
        if width < 0 or height < 0:
            raise ValueError(f"negative array size {width} x {height}")
        n = width * height
        if n <= len(self._data):
            del self._data[n:]
        else:
            self._data.extend([self._fill] * (n - len(self._data)))
        self._width = width
        self._height = height

    def reset(self, value: Any = 0.0) -> None:
        """Set every element to ``value``."""
        self._data = [value] * len(self._data)

    def __getitem__(self, key: Any) -> Any:
        return self._data[self._linear(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._data[self._linear(key)] = value

    def __len__(self) -> int:
        return self._width * self._height

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._width}, {self._height})"


class Image(Array2d):
    """An array of RGB colour tuples."""

    def __init__(
        self, width: int = 0, height: int = 0, value: Any = (0.0, 0.0, 0.0)
    ) -> None:
        super().__init__(width, height, value)

    @classmethod
    def loadable_formats(cls) -> set[str]:
        """File extensions supported for loading."""
        return {"jpg", "jpeg", "png", "bmp", "psd", "tga", "gif", "hdr", "pic", "ppm", "pgm", "exr"}

    @classmethod
    def savable_formats(cls) -> set[str]:
        """File extensions supported for saving."""
        return {"bmp", "exr", "hdr", "jpg", "png", "tga"}


def upsample(img: Array2d, factor: int) -> Array2d:
    """Enlarge ``img`` by an integer factor with nearest-neighbour replication."""
    result = Array2d(img.width * factor, img.height * factor)
    for y in range(result.height):
        for x in range(result.width):
            result[x, y] = img[x // factor, y // factor]
    return result


def generate_heatmap(density: Array2d, scale: float = 1.0) -> Image:
    """Map scaled densities through the inferno colormap."""
    result = Image(density.width, density.height)
    for y in range(density.height):
        for x in range(density.width):
            result[x, y] = inferno(density[x, y] * scale)
    return result


def generate_graymap(density: Array2d, scale: float = 1.0) -> Image:
    """Map scaled densities to grey colours."""
    result = Image(density.width, density.height)
    for y in range(density.height):
        for x in range(density.width):
            v = density[x, y] * scale
            result[x, y] = (v, v, v)
    return result