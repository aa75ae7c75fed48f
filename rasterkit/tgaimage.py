"""In-memory raster images with Truevision TGA reading and writing."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from numbers import Real
from os import PathLike
from pathlib import Path
from typing import Union

_HEADER = struct.Struct("<BBBhhBhhhhBB")
_FOOTER = b"TRUEVISION-XFILE.\x00"
_AREA_REFS = bytes(8)
_MAX_CHUNK = 128
_TOP_LEFT = 0x20
_RIGHT_TO_LEFT = 0x10
_SHORT_MAX = 0x7FFF

StrPath = Union[str, "PathLike[str]"]


class TGAError(ValueError):
    """Raised when TGA data cannot be decoded or encoded."""


class Format(IntEnum):
    """Bytes per pixel of the supported pixel layouts."""

    GRAYSCALE = 1
    RGB = 3
    RGBA = 4


_FORMATS = frozenset(f.value for f in Format)


def _to_byte(value: float) -> int:
    return int(value) & 0xFF


@dataclass(frozen=True)
class TGAColor:
    """A pixel value stored in blue, green, red, alpha order."""

    bgra: tuple[int, int, int, int] = (0, 0, 0, 0)
    bytespp: int = 1

    def __post_init__(self) -> None:
        values = tuple(self.bgra)
        if len(values) != 4:
            raise ValueError("bgra must hold exactly four values")
        object.__setattr__(self, "bgra", tuple(_to_byte(v) for v in values))

    @classmethod
    def rgba(cls, r: float, g: float, b: float, a: float = 255) -> "TGAColor":
        """Build a four-byte colour from red, green, blue and alpha."""
        return cls((b, g, r, a), 4)

    @classmethod
    def grayscale(cls, value: float) -> "TGAColor":
        """Build a one-byte grey level."""
        return cls((value, 0, 0, 0), 1)

    @classmethod
    def from_bytes(cls, data: bytes, bytespp: int) -> "TGAColor":
        """Build a colour from the first ``bytespp`` bytes of ``data``."""
        raw = bytes(data[:bytespp])
        if len(raw) < bytespp or not 0 < bytespp <= 4:
            raise ValueError(f"need {bytespp} bytes (1 to 4) for a colour")
        padded = raw + bytes(4 - bytespp)
        return cls(tuple(padded), bytespp)

    def __getitem__(self, index: int) -> int:
        return self.bgra[index]

    def __mul__(self, intensity: object) -> "TGAColor":
        if not isinstance(intensity, Real):
            return NotImplemented
        factor = min(1.0, max(0.0, float(intensity)))
        return TGAColor(tuple(int(c * factor) for c in self.bgra), self.bytespp)

    __rmul__ = __mul__

    def to_bytes(self) -> bytes:
        """All four stored bytes in blue, green, red, alpha order."""
        return bytes(self.bgra)


class TGAImage:
    """A width x height grid of pixels, stored row by row from the top."""

    def __init__(self, width: int = 0, height: int = 0, bytespp: int = Format.RGB) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        if int(bytespp) not in _FORMATS:
            raise ValueError(f"unsupported bytes per pixel: {bytespp}")
        self.width = width
        self.height = height
        self.bytespp = int(bytespp)
        self.data = bytearray(width * height * self.bytespp)

    def __repr__(self) -> str:
        return f"TGAImage(width={self.width}, height={self.height}, bytespp={self.bytespp})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TGAImage):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.bytespp == other.bytespp
            and self.data == other.data
        )

    # -- decoding -------------------------------------------------------

    @classmethod
    def from_tga_bytes(cls, data: bytes) -> "TGAImage":
        """Decode a TGA file held in memory."""
        if len(data) < _HEADER.size:
            raise TGAError("an error occurred while reading the header")
        fields = _HEADER.unpack_from(data)
        code, width, height, bits, descriptor = fields[2], fields[8], fields[9], fields[10], fields[11]
        bytespp = bits >> 3
        if width <= 0 or height <= 0 or bytespp not in _FORMATS:
            raise TGAError("bad bpp (or width/height) value")
        body = memoryview(data)[_HEADER.size:]
        nbytes = width * height * bytespp
        if code in (2, 3):
            if len(body) < nbytes:
                raise TGAError("an error occurred while reading the data")
            pixels = bytearray(body[:nbytes])
        elif code in (10, 11):
            pixels = _decode_rle(body, width * height, bytespp)
        else:
            raise TGAError(f"unknown file format {code}")
        image = cls(width, height, bytespp)
        image.data = pixels
        if not descriptor & _TOP_LEFT:
            image.flip_vertically()
        if descriptor & _RIGHT_TO_LEFT:
            image.flip_horizontally()
        return image

    @classmethod
    def read_tga_file(cls, path: StrPath) -> "TGAImage":
        """Read and decode a TGA file."""
        return cls.from_tga_bytes(Path(path).read_bytes())

    # -- encoding -------------------------------------------------------

    def to_tga_bytes(self, rle: bool = True) -> bytes:
        """Encode the image as a TGA file with a top-left origin."""
        if self.width > _SHORT_MAX or self.height > _SHORT_MAX:
            raise TGAError("image too large for the TGA header")
        if self.bytespp == Format.GRAYSCALE:
            code = 11 if rle else 3
        else:
            code = 10 if rle else 2
        header = _HEADER.pack(
            0, 0, code, 0, 0, 0, 0, 0, self.width, self.height, self.bytespp << 3, _TOP_LEFT
        )
        body = self._encode_rle() if rle else bytes(self.data)
        return header + body + _AREA_REFS + _FOOTER

    def write_tga_file(self, path: StrPath, rle: bool = True) -> None:
        """Encode the image and write it to ``path``."""
        Path(path).write_bytes(self.to_tga_bytes(rle))

    def _encode_rle(self) -> bytes:
        bpp = self.bytespp
        data = self.data
        npixels = self.width * self.height
        out = bytearray()
        curpix = 0
        while curpix < npixels:
            chunkstart = curpix * bpp
            curbyte = chunkstart
            run_length = 1
            raw = True
            while curpix + run_length < npixels and run_length < _MAX_CHUNK:
                succ_eq = data[curbyte:curbyte + bpp] == data[curbyte + bpp:curbyte + 2 * bpp]
                curbyte += bpp
                if run_length == 1:
                    raw = not succ_eq
                if raw and succ_eq:
                    run_length -= 1
                    break
                if not raw and not succ_eq:
                    break
                run_length += 1
            curpix += run_length
            out.append(run_length - 1 if raw else run_length + 127)
            out += data[chunkstart:chunkstart + (run_length * bpp if raw else bpp)]
        return bytes(out)

    # -- pixel access ---------------------------------------------------

    def _inside(self, x: int, y: int) -> bool:
        return bool(self.data) and 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TGAColor:
        """Colour at (x, y); a zero colour outside the image."""
        if not self._inside(x, y):
            return TGAColor()
        offset = (x + y * self.width) * self.bytespp
        return TGAColor.from_bytes(self.data[offset:offset + self.bytespp], self.bytespp)

    def set(self, x: int, y: int, color: TGAColor) -> bool:
        """Store ``color`` at (x, y); returns False when (x, y) is outside."""
        if not self._inside(x, y):
            return False
        offset = (x + y * self.width) * self.bytespp
        self.data[offset:offset + self.bytespp] = color.to_bytes()[:self.bytespp]
        return True

    # -- whole-image operations ----------------------------------------

    def _rows(self) -> list[bytearray]:
        line = self.width * self.bytespp
        return [self.data[start:start + line] for start in range(0, len(self.data), line)] if line else []

    def flip_vertically(self) -> None:
        """Reverse the order of the rows."""
        self.data = bytearray().join(reversed(self._rows()))

    def flip_horizontally(self) -> None:
        """Reverse the order of the pixels in every row."""
        bpp = self.bytespp
        flipped = bytearray()
        for row in self._rows():
            pixels = [row[start:start + bpp] for start in range(0, len(row), bpp)]
            flipped += bytearray().join(reversed(pixels))
        self.data = flipped

    def scale(self, width: int, height: int) -> None:
        """Resample to ``width`` x ``height`` by nearest-pixel stepping."""
        if width <= 0 or height <= 0 or not self.data:
            raise ValueError("cannot scale an empty image or to a non-positive size")
        bpp = self.bytespp
        target = bytearray(width * height * bpp)
        nlinebytes = width * bpp
        olinebytes = self.width * bpp
        nscanline = 0
        oscanline = 0
        erry = 0
        for _ in range(self.height):
            errx = self.width - width
            nx = -bpp
            ox = -bpp
            for _ in range(self.width):
                ox += bpp
                errx += width
                while errx >= self.width:
                    errx -= self.width
                    nx += bpp
                    source = self.data[oscanline + ox:oscanline + ox + bpp]
                    target[nscanline + nx:nscanline + nx + bpp] = source
            erry += height
            oscanline += olinebytes
            while erry >= self.height:
                if erry >= self.height << 1 and nscanline + 2 * nlinebytes <= len(target):
                    target[nscanline + nlinebytes:nscanline + 2 * nlinebytes] = (
                        target[nscanline:nscanline + nlinebytes]
                    )
                erry -= self.height
                nscanline += nlinebytes
        self.data = target
        self.width = width
        self.height = height

    def clear(self) -> None:
        """Set every byte to zero."""
        self.data = bytearray(len(self.data))

    def copy(self) -> "TGAImage":
        """An independent copy of the image."""
        duplicate = TGAImage(self.width, self.height, self.bytespp)
        duplicate.data = bytearray(self.data)
        return duplicate

    def tobytes(self) -> bytes:
        """The raw pixel bytes, top row first."""
        return bytes(self.data)


def _decode_rle(body: memoryview, pixelcount: int, bytespp: int) -> bytearray:
    out = bytearray()
    pos = 0
    current = 0
    while current < pixelcount:
        if pos >= len(body):
            raise TGAError("an error occurred while reading the data")
        chunk = body[pos]
        pos += 1
        if chunk < 128:
            count = chunk + 1
            size = count * bytespp
            pixels = body[pos:pos + size]
            if len(pixels) < size:
                raise TGAError("an error occurred while reading the data")
            pos += size
            out += pixels
        else:
            count = chunk - 127
            pixel = body[pos:pos + bytespp]
            if len(pixel) < bytespp:
                raise TGAError("an error occurred while reading the data")
            pos += bytespp
            out += bytes(pixel) * count
        current += count
        if current > pixelcount:
            raise TGAError("too many pixels read")
    return out