"""Reading and writing Truevision TGA images."""

from __future__ import annotations

import os
import struct
from enum import IntEnum

_HEADER = struct.Struct("<BBBHHBHHHHBB")
_FOOTER = bytes(4) + bytes(4) + b"TRUEVISION-XFILE.\x00"
_MAX_CHUNK = 128


class TGAError(Exception):
    """A TGA file could not be decoded or encoded."""


class Format(IntEnum):
    """Bytes per pixel of the supported layouts."""

    GRAYSCALE = 1
    RGB = 3
    RGBA = 4


class TGAColor:
    """A pixel value in BGRA byte order."""

    __slots__ = ("bgra", "bytespp")

    def __init__(self, b: int = 0, g: int = 0, r: int = 0, a: int = 0, bytespp: int = 4) -> None:
        self.bgra = [int(v) & 0xFF for v in (b, g, r, a)]
        self.bytespp = bytespp

    def __getitem__(self, index: int) -> int:
        return self.bgra[index]

    def __setitem__(self, index: int, value) -> None:
        self.bgra[index] = int(value) & 0xFF

    def __eq__(self, other) -> bool:
        if not isinstance(other, TGAColor):
            return NotImplemented
        return self.bgra == other.bgra and self.bytespp == other.bytespp

    __hash__ = None

    def __repr__(self) -> str:
        b, g, r, a = self.bgra
        return f"TGAColor(b={b}, g={g}, r={r}, a={a}, bytespp={self.bytespp})"


def _decode_rle(body: memoryview, pixel_count: int, bpp: int) -> bytearray:
    out = bytearray()
    pos = 0
    pixels = 0
    while pixels < pixel_count:
        if pos >= len(body):
            raise TGAError("an error occurred while reading the data")
        header = body[pos]
        pos += 1
        if header < 128:
            count = header + 1
            chunk = bytes(body[pos:pos + count * bpp])
            if len(chunk) < count * bpp:
                raise TGAError("an error occurred while reading the data")
            pos += count * bpp
        else:
            count = header - 127
            pixel = bytes(body[pos:pos + bpp])
            if len(pixel) < bpp:
                raise TGAError("an error occurred while reading the data")
            pos += bpp
            chunk = pixel * count
        pixels += count
        if pixels > pixel_count:
            raise TGAError("too many pixels read")
        out += chunk
    return out


class TGAImage:
    """An in-memory image of width x height pixels, bpp bytes each."""

    __slots__ = ("_w", "_h", "_bpp", "_data")

    def __init__(self, width: int = 0, height: int = 0, bpp: int = 0) -> None:
        if width < 0 or height < 0 or bpp < 0:
            raise ValueError("image dimensions must not be negative")
        self._w = int(width)
        self._h = int(height)
        self._bpp = int(bpp)
        self._data = bytearray(self._w * self._h * self._bpp)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def bpp(self) -> int:
        return self._bpp

    @classmethod
    def read(cls, path: str | os.PathLike) -> TGAImage:
        """Load an uncompressed or RLE-compressed TGA file."""
        with open(path, "rb") as stream:
            blob = stream.read()
        if len(blob) < _HEADER.size:
            raise TGAError("an error occurred while reading the header")
        fields = _HEADER.unpack_from(blob)
        datatype, width, height, bits, descriptor = (
            fields[2], fields[8], fields[9], fields[10], fields[11],
        )
        bpp = bits >> 3
        if width <= 0 or height <= 0 or bpp not in {f.value for f in Format}:
            raise TGAError("bad bpp (or width/height) value")

        body = memoryview(blob)[_HEADER.size:]
        nbytes = width * height * bpp
        if datatype in (2, 3):
            if len(body) < nbytes:
                raise TGAError("an error occurred while reading the data")
            data = bytearray(body[:nbytes])
        elif datatype in (10, 11):
            data = _decode_rle(body, width * height, bpp)
        else:
            raise TGAError(f"unknown file format {datatype}")

        image = cls()
        image._w, image._h, image._bpp, image._data = width, height, bpp, data
        if not descriptor & 0x20:
            image.flip_vertically()
        if descriptor & 0x10:
            image.flip_horizontally()
        return image

    def write(self, path: str | os.PathLike, vflip: bool = True, rle: bool = True) -> None:
        """Save the image; vflip marks it as having a bottom-left origin."""
        if self._bpp == Format.GRAYSCALE:
            datatype = 11 if rle else 3
        else:
            datatype = 10 if rle else 2
        try:
            header = _HEADER.pack(
                0, 0, datatype, 0, 0, 0, 0, 0,
                self._w, self._h, (self._bpp << 3) & 0xFF,
                0x00 if vflip else 0x20,
            )
        except struct.error as exc:
            raise TGAError("image too large for the TGA format") from exc
        payload = self._encode_rle() if rle else bytes(self._data)
        with open(path, "wb") as stream:
            stream.write(header + payload + _FOOTER)

    def _encode_rle(self) -> bytes:
        bpp, data = self._bpp, self._data
        npixels = self._w * self._h
        out = bytearray()
        curpix = 0
        while curpix < npixels:
            chunk_start = curpix * bpp
            curbyte = chunk_start
            run_length = 1
            raw = True
            while curpix + run_length < npixels and run_length < _MAX_CHUNK:
                same = data[curbyte:curbyte + bpp] == data[curbyte + bpp:curbyte + 2 * bpp]
                curbyte += bpp
                if run_length == 1:
                    raw = not same
                if raw and same:
                    run_length -= 1
                    break
                if not raw and not same:
                    break
                run_length += 1
            curpix += run_length
            out.append(run_length - 1 if raw else run_length + 127)
            out += data[chunk_start:chunk_start + (run_length * bpp if raw else bpp)]
        return bytes(out)

    def _rows(self) -> list[bytearray]:
        row_len = self._w * self._bpp
        return [self._data[r * row_len:(r + 1) * row_len] for r in range(self._h)]

    def flip_horizontally(self) -> None:
        bpp = self._bpp
        flipped = bytearray()
        for row in self._rows():
            pixels = [row[i:i + bpp] for i in range(0, len(row), bpp)]
            flipped += b"".join(reversed(pixels))
        self._data = flipped

    def flip_vertically(self) -> None:
        self._data = bytearray(b"".join(reversed(self._rows())))

    def _offset(self, x: int, y: int) -> int | None:
        if not self._data or not (0 <= x < self._w and 0 <= y < self._h):
            return None
        return (x + y * self._w) * self._bpp

    def get(self, x: int, y: int) -> TGAColor:
        """The pixel at (x, y), or a blank colour outside the image."""
        offset = self._offset(x, y)
        if offset is None:
            return TGAColor()
        color = TGAColor(bytespp=self._bpp)
        color.bgra[:self._bpp] = self._data[offset:offset + self._bpp]
        return color

    def set(self, x: int, y: int, color: TGAColor) -> None:
        """Store a pixel; writes outside the image are ignored."""
        offset = self._offset(x, y)
        if offset is None:
            return
        self._data[offset:offset + self._bpp] = bytes(color.bgra[:self._bpp])