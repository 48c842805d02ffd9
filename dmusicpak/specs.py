# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc

from abc import abstractmethod

from dmusicpak.conversion import *
from dmusicpak import formats

# A spec describes one field of a section body: how to read it from
# the front of a byte sequence, how to write it, and how to validate
# values assigned to it.

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    default = None

    @abstractmethod
    def read(self, section, data): pass

    @abstractmethod
    def write(self, section, value): pass

    def validate(self, section, value):
        self.write(section, value)
        return value

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class IntegerSpec(Spec):
    "Unsigned little-endian integer of a fixed width."
    default = 0

    def __init__(self, name, width):
        super().__init__(name)
        self.width = width
    def read(self, section, data):
        if len(data) < self.width:
            raise EOFError()
        return LittleEndian.decode(data[:self.width]), data[self.width:]
    def write(self, section, value):
        return LittleEndian.encode(value, width=self.width)
    def validate(self, section, value):
        if value is None:
            return self.default
        if type(value) is not int:
            raise TypeError("Not an integer: {0}".format(repr(value)))
        if value < 0:
            raise ValueError("Value is negative")
        if value >= 1 << (self.width << 3):
            raise ValueError("Value is too large")
        return value

class EnumSpec(IntegerSpec):
    """A format tag stored as an unsigned integer.

    Values outside the enum are returned as plain integers when read,
    but rejected on assignment.
    """
    def __init__(self, name, enumtype, width=4):
        super().__init__(name, width)
        self.enumtype = enumtype
        self.default = enumtype(0)
    def read(self, section, data):
        value, data = super().read(section, data)
        try:
            value = self.enumtype(value)
        except ValueError:
            pass
        return value, data
    def write(self, section, value):
        return super().write(section, int(value))
    def validate(self, section, value):
        if value is None:
            return self.default
        if isinstance(value, int) and not isinstance(value, self.enumtype):
            # Unknown tags read from a newer file are kept as they are.
            if getattr(section, "_decoding", False):
                return super().validate(section, value)
        return formats.lookup(self.enumtype, value)
    def to_str(self, value):
        if isinstance(value, self.enumtype):
            return "{0}={1}".format(self.name, value.name)
        return super().to_str(value)

class StringSpec(Spec):
    "Length-prefixed string; None and empty strings are equivalent."
    def read(self, section, data):
        return LengthPrefixedString.decode(data)
    def write(self, section, value):
        return LengthPrefixedString.encode(value)
    def validate(self, section, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise TypeError("Not a string")
        if value == "":
            return None
        if len(LengthPrefixedString.raw(value)) >= 1 << 32:
            raise ValueError("String is too long")
        return value

class BinaryDataSpec(Spec):
    "Opaque payload; consumes the rest of the body."
    default = b""

    def read(self, section, data):
        return bytes(data), bytes()
    def write(self, section, value):
        return value
    def validate(self, section, value):
        if value is None:
            return self.default
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Not a byte sequence")
        # Take a private, immutable copy.
        return bytes(value)
    def to_str(self, value):
        return '{0}=<{1} bytes>'.format(self.name, len(value))
