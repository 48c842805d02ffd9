# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for package sections.

Each section kind is serialized as one chunk of the container. The
chunk body is described by the section's _sectionspec, a tuple of
field specs that are read and written in order.
"""

import abc

from dmusicpak.specs import *
from dmusicpak.formats import LyricFormat, AudioFormat, CoverFormat

CHUNK_METADATA = 0x01
CHUNK_LYRICS = 0x02
CHUNK_AUDIO = 0x03
CHUNK_COVER = 0x04

# Chunk type -> section class; filled in by @sectionclass.
known_sections = {}

def since(version, spec):
    "Mark spec as present on the wire only from the given format version."
    spec._since = version
    return spec

def sectionclass(cls):
    """Register cls as the section class for its chunk type.

    To be used as a decorator on the class definition:

    @sectionclass
    class Lyrics(Section):
        chunk_type = CHUNK_LYRICS
        ...
    """
    assert issubclass(cls, Section)
    assert cls.chunk_type not in known_sections
    if cls.name is None:
        cls.name = cls.__name__.lower()
    known_sections[cls.chunk_type] = cls
    return cls

class Section(metaclass=abc.ABCMeta):
    _sectionspec = tuple()
    chunk_type = None
    name = None

    def __init__(self, **kwargs):
        assert len(self._sectionspec) > 0
        names = set(spec.name for spec in self._sectionspec)
        for key in kwargs:
            if key not in names:
                raise TypeError("{0} has no field {1!r}".format(type(self).__name__, key))
        for spec in self._sectionspec:
            setattr(self, spec.name, kwargs.get(spec.name, None))

    def __setattr__(self, name, value):
        # Automatic validation on assignment
        for spec in self._sectionspec:
            if name == spec.name:
                value = spec.validate(self, value)
                break
        super().__setattr__(name, value)

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._sectionspec))

    @classmethod
    def field_names(cls):
        return [spec.name for spec in cls._sectionspec]

    @classmethod
    def _wirespec(cls, version):
        return tuple(spec for spec in cls._sectionspec
                     if getattr(spec, "_since", 1) <= version)

    @classmethod
    def _from_data(cls, data, version):
        """Decode a chunk body.

        Raises EOFError if the body is too short for its fields, or
        ValueError if a field holds an invalid value.
        """
        section = cls()
        section._decoding = True
        try:
            for spec in cls._wirespec(version):
                val, data = spec.read(section, data)
                setattr(section, spec.name, val)
        finally:
            del section._decoding
        return section

    def _to_data(self, version):
        data = bytearray()
        for spec in self._wirespec(version):
            data.extend(spec.write(self, getattr(self, spec.name)))
        return bytes(data)

    def __repr__(self):
        args = []
        for spec in self._sectionspec:
            value = getattr(self, spec.name)
            if isinstance(spec, BinaryDataSpec):
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(value),
                        value[:20], "..." if len(value) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, value))
        return "{0}({1})".format(type(self).__name__, ", ".join(args))

    def _str_fields(self):
        return ", ".join(spec.to_str(getattr(self, spec.name, None))
                         for spec in self._sectionspec)

    def __str__(self):
        return "{0}({1})".format(self.name, self._str_fields())

@sectionclass
class Metadata(Section):
    "Descriptive text fields and audio properties"
    chunk_type = CHUNK_METADATA
    _sectionspec = (StringSpec("title"),
                    StringSpec("artist"),
                    StringSpec("album"),
                    StringSpec("genre"),
                    StringSpec("year"),
                    StringSpec("comment"),
                    IntegerSpec("duration_ms", 4),
                    IntegerSpec("bitrate", 4),
                    IntegerSpec("sample_rate", 4),
                    IntegerSpec("channels", 2))

    text_fields = ("title", "artist", "album", "genre", "year", "comment")

    def _str_fields(self):
        fields = ["{0}={1!r}".format(name, getattr(self, name))
                  for name in self.text_fields if getattr(self, name) is not None]
        fields.append("{0}ms {1}kbps {2}Hz {3}ch".format(
                self.duration_ms, self.bitrate, self.sample_rate, self.channels))
        return ", ".join(fields)

@sectionclass
class Lyrics(Section):
    "Timed lyrics in one of the LyricFormat encodings"
    chunk_type = CHUNK_LYRICS
    _sectionspec = (EnumSpec("format", LyricFormat),
                    BinaryDataSpec("data"))

    @property
    def text(self):
        "The lyrics payload decoded as UTF-8."
        return self.data.decode("utf-8", "replace")

@sectionclass
class Audio(Section):
    "Raw audio file contents"
    chunk_type = CHUNK_AUDIO
    # Version 1 bodies do not carry the format tag.
    _sectionspec = (since(2, EnumSpec("format", AudioFormat)),
                    StringSpec("source_filename"),
                    BinaryDataSpec("data"))

@sectionclass
class Cover(Section):
    "Cover art image"
    chunk_type = CHUNK_COVER
    _sectionspec = (EnumSpec("format", CoverFormat),
                    IntegerSpec("width", 4),
                    IntegerSpec("height", 4),
                    BinaryDataSpec("data"))

def section_class(key):
    """Return the section class named by key.

    key may be a section class, a section name, or a chunk type.
    Raises KeyError for anything else.
    """
    if isinstance(key, type) and issubclass(key, Section):
        if known_sections.get(key.chunk_type) is key:
            return key
    elif isinstance(key, str):
        for cls in known_sections.values():
            if cls.name == key.lower():
                return cls
    elif type(key) is int and key in known_sections:
        return known_sections[key]
    raise KeyError("Unknown section " + repr(key))
