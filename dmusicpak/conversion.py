# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Conversion to/from the primitive field types of the container format."""

class LittleEndian:
    """Conversion to/from unsigned little-endian integers of any length."""

    @staticmethod
    def decode(data):
        "Decodes an unsigned little-endian integer of any length"
        value = 0
        for b in reversed(bytes(data)):
            value <<= 8
            value += b
        return value

    @staticmethod
    def encode(i, *, width=-1):
        """Encodes a nonnegative integer into little-endian bytes.

        When width > 0, then len(result) == width
        When width < 0, then len(result) >= abs(width)
        """
        assert width != 0
        if i is None:
            i = 0
        if i < 0:
            raise ValueError("Nonnegative integer expected")
        data = bytearray()
        while i:
            data.append(i & 255)
            i >>= 8
        if width > 0 and len(data) > width:
            raise ValueError("Integer too large")
        if len(data) < abs(width):
            data.extend([0] * (abs(width) - len(data)))
        return bytes(data)

def write_u32_le(value):
    return LittleEndian.encode(value, width=4)

def write_u16_le(value):
    return LittleEndian.encode(value, width=2)

def read_u32_le(data):
    if len(data) < 4:
        raise EOFError
    return LittleEndian.decode(data[:4])

def read_u16_le(data):
    if len(data) < 2:
        raise EOFError
    return LittleEndian.decode(data[:2])

class LengthPrefixedString:
    """Conversion to/from strings stored as a u32 length and raw bytes.

    None and the empty string share the same encoding, and decode to None.
    Text is UTF-8 with surrogateescape, so arbitrary bytes survive
    a decode/encode cycle.
    """
    encoding = "utf-8"
    errors = "surrogateescape"

    @classmethod
    def raw(cls, value):
        if value is None:
            return b""
        if isinstance(value, str):
            return value.encode(cls.encoding, cls.errors)
        return bytes(value)

    @classmethod
    def encode(cls, value):
        raw = cls.raw(value)
        return write_u32_le(len(raw)) + raw

    @classmethod
    def decode(cls, data):
        "Returns (value, rest); raises EOFError if data is too short."
        length = read_u32_le(data)
        if 4 + length > len(data):
            raise EOFError
        raw = bytes(data[4:4 + length])
        value = raw.decode(cls.encoding, cls.errors) if length else None
        return value, data[4 + length:]
