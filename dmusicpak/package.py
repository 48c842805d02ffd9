# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import io
import copy
import collections.abc

from warnings import warn

from dmusicpak.errors import *
from dmusicpak.conversion import *
from dmusicpak.formats import AudioFormat

import dmusicpak.sections as Sections
import dmusicpak.fileutil as fileutil

MAGIC = b"DMPK"
HEADER_SIZE = 12        # magic, version, chunk count
CHUNK_HEADER_SIZE = 5   # type, length
MAX_CHUNK_SIZE = 0xFFFFFFFF

def read_package(filename):
    "Read a package from a file name or an open binary file."
    return decode_package(fileutil.read_file(filename))

def decode_package(data):
    cls = detect_package(data)[0]
    return cls.decode(data)

def delete_section(filename, key, atomic=True):
    """Remove the section named by key from the package stored in filename.
    Does nothing if the section is not present; raises KeyError if key
    does not name a section kind.
    """
    cls = Sections.section_class(key)
    package = read_package(filename)
    if cls.name not in package:
        return
    del package[cls]
    package.write(filename, atomic=atomic)

def detect_package(data):
    """Return the class and chunk count of the package in data.
    Returns (package_class, chunk_count), where package_class is
    either Package1 or Package2, depending on the format version
    in the header. Raises InvalidFormatError if the header is invalid.
    """
    if len(data) < HEADER_SIZE:
        raise InvalidFormatError("Package too short: {0} bytes".format(len(data)))
    if bytes(data[0:4]) != MAGIC:
        raise NoPackageError("DMusicPak header not found")
    version = read_u32_le(data[4:8])
    if version not in _package_versions:
        raise InvalidFormatError("Unknown DMusicPak format version: {0}".format(version))
    return (_package_versions[version], read_u32_le(data[8:12]))

class Package(collections.abc.MutableMapping):
    """A set of optional sections (metadata, lyrics, audio, cover).

    A Package acts as a mapping from section names to section objects.
    Sections are stored by value: assigning a section stores a copy,
    so later changes to the original do not leak into the package.

    Package() creates an instance of default_package.
    """
    version = None
    stream_slice_size = 8 * 1024

    def __new__(cls, *args, **kwargs):
        if cls is Package:
            cls = default_package
        return super().__new__(cls)

    def __init__(self):
        self._sections = dict()

    # MutableMapping methods
    def _normalize_key(self, key):
        return Sections.section_class(key)

    def __iter__(self):
        for chunk_type in sorted(self._sections):
            yield self._sections[chunk_type].name

    def __len__(self):
        return len(self._sections)

    def __getitem__(self, key):
        cls = self._normalize_key(key)
        try:
            return self._sections[cls.chunk_type]
        except KeyError:
            raise KeyError("Section not present: " + repr(key)) from None

    def __setitem__(self, key, value):
        cls = self._normalize_key(key)
        if not isinstance(value, cls):
            raise TypeError("{0} section expected, got {1!r}".format(cls.name, value))
        self._sections[cls.chunk_type] = copy.copy(value)

    def __delitem__(self, key):
        cls = self._normalize_key(key)
        try:
            del self._sections[cls.chunk_type]
        except KeyError:
            raise KeyError("Section not present: " + repr(key)) from None

    def __contains__(self, key):
        try:
            cls = self._normalize_key(key)
        except KeyError:
            return False
        return cls.chunk_type in self._sections

    def __eq__(self, other):
        return (isinstance(other, Package)
                and self.version == other.version
                and self._sections == other._sections)

    def sections(self):
        "Iterate over present sections in the order they are written."
        for chunk_type in sorted(self._sections):
            yield self._sections[chunk_type]

    def __repr__(self):
        return "<{0}: DMusicPak v{1} package with {2} sections{3}>".format(
            type(self).__name__,
            self.version,
            len(self),
            (" ({0})".format(", ".join(self))
             if len(self) > 0 else ""))

    # Section accessors
    def _set(self, cls, section, fields):
        if section is None:
            section = cls(**fields)
        elif fields:
            raise InvalidParamError("Pass either a section or field values, not both")
        self[cls] = section

    def _get(self, cls):
        try:
            return self._sections[cls.chunk_type]
        except KeyError:
            raise NotSupportedError("Package has no {0} section".format(cls.name)) from None

    def set_metadata(self, metadata=None, **fields):
        self._set(Sections.Metadata, metadata, fields)

    def get_metadata(self):
        return self._get(Sections.Metadata)

    def set_lyrics(self, lyrics=None, **fields):
        self._set(Sections.Lyrics, lyrics, fields)

    def get_lyrics(self):
        return self._get(Sections.Lyrics)

    def set_audio(self, audio=None, **fields):
        self._set(Sections.Audio, audio, fields)

    def get_audio(self):
        return self._get(Sections.Audio)

    def set_cover(self, cover=None, **fields):
        self._set(Sections.Cover, cover, fields)

    def get_cover(self):
        return self._get(Sections.Cover)

    @property
    def has_metadata(self):
        return Sections.CHUNK_METADATA in self._sections

    @property
    def has_lyrics(self):
        return Sections.CHUNK_LYRICS in self._sections

    @property
    def has_audio(self):
        return Sections.CHUNK_AUDIO in self._sections

    @property
    def has_cover(self):
        return Sections.CHUNK_COVER in self._sections

    def to_version(self, version):
        "Return a copy of this package using the given format version."
        try:
            cls = _package_versions[version]
        except KeyError:
            raise InvalidParamError("Unknown format version: {0!r}".format(version)) from None
        package = cls()
        for section in self.sections():
            package[type(section)] = section
        return package

    # Audio access
    def get_audio_chunk(self, offset, size):
        """Return up to size bytes of the audio payload, starting at offset.

        The result is empty if offset is at or past the end of the
        payload, and shorter than size if the payload ends sooner.
        Raises NotSupportedError if the package has no audio.
        """
        data = self.get_audio().data
        if type(offset) is not int or type(size) is not int:
            raise InvalidParamError("Offset and size must be integers")
        if offset < 0 or size < 0:
            raise InvalidParamError("Offset and size must not be negative")
        if offset >= len(data):
            return b""
        return data[offset:offset + size]

    def stream_audio(self, sink, slice_size=None):
        """Push the audio payload to sink in slices of slice_size bytes.

        sink is called with each slice and returns the number of bytes
        it consumed; the next slice starts right after them. Returning 0
        stops the stream; returning None counts as consuming the whole
        slice. Returns the total number of bytes consumed.
        """
        if not callable(sink):
            raise InvalidParamError("Sink is not callable")
        if slice_size is None:
            slice_size = self.stream_slice_size
        if type(slice_size) is not int or slice_size < 1:
            raise InvalidParamError("Invalid slice size: {0!r}".format(slice_size))
        data = self.get_audio().data
        offset = 0
        while offset < len(data):
            piece = data[offset:offset + slice_size]
            consumed = sink(piece)
            if consumed is None:
                consumed = len(piece)
            if consumed == 0:
                break
            if type(consumed) is not int or not 0 < consumed <= len(piece):
                raise InvalidParamError("Sink reported {0!r} bytes consumed out of {1}"
                                        .format(consumed, len(piece)))
            offset += consumed
        return offset

    # Reading packages
    @classmethod
    def read(cls, filename):
        """Read a package from a file."""
        return cls.decode(fileutil.read_file(filename))

    @classmethod
    def decode(cls, data):
        """Decode a package from bytes.

        Raises InvalidFormatError if the header is invalid or its
        version is not the one implemented by cls. Chunks that run past
        the end of data are dropped, along with everything after them.
        """
        (pkgcls, count) = detect_package(data)
        if cls is not Package and pkgcls is not cls:
            raise InvalidFormatError("{0} cannot decode format version {1}"
                                     .format(cls.__name__, pkgcls.version))
        package = pkgcls()
        for (chunk_type, body) in package._read_chunks(data, count):
            package._section_from_chunk(chunk_type, body)
        return package

    def _read_chunks(self, data, count):
        file = io.BytesIO(data)
        file.seek(HEADER_SIZE)
        size = len(data)
        for i in range(count):
            if size - file.tell() < CHUNK_HEADER_SIZE:
                break
            header = fileutil.xread(file, CHUNK_HEADER_SIZE)
            chunk_type = header[0]
            length = read_u32_le(header[1:5])
            # Declared lengths are untrusted.
            if length > size - file.tell():
                break
            yield (chunk_type, fileutil.xread(file, length))

    def _section_from_chunk(self, chunk_type, body):
        if chunk_type not in Sections.known_sections:
            warn("Skipping unknown chunk type 0x{0:02X} ({1} bytes)"
                 .format(chunk_type, len(body)), UnknownChunkWarning)
            return
        cls = Sections.known_sections[chunk_type]
        try:
            section = cls._from_data(body, self.version)
        except (EOFError, ValueError) as e:
            warn("Dropping corrupted {0} section ({1})"
                 .format(cls.name, str(e) or "truncated"), CorruptedSectionWarning)
            return
        if chunk_type in self._sections:
            warn("Section {0} duplicated, only the last instance is kept"
                 .format(cls.name), DuplicateSectionWarning)
        self._sections[chunk_type] = section

    # Writing packages
    def write(self, filename, atomic=True):
        fileutil.write_file(filename, self.encode(), atomic=atomic)

    def _check_lossless(self, section):
        pass

    def encode(self):
        """Return the package as bytes.

        The result is exactly as long as the header and chunks
        require. The package is not modified.
        """
        chunks = []
        for section in self.sections():
            self._check_lossless(section)
            body = section._to_data(self.version)
            if len(body) > MAX_CHUNK_SIZE:
                raise InvalidParamError("Section {0} is too large: {1} bytes"
                                        .format(section.name, len(body)))
            chunks.append((section.chunk_type, body))

        size = HEADER_SIZE + sum(CHUNK_HEADER_SIZE + len(body)
                                 for (chunk_type, body) in chunks)
        try:
            data = bytearray(size)
        except MemoryError as e:
            raise MemoryAllocError("Can't allocate {0} bytes".format(size)) from e

        offset = 0
        def put(field):
            nonlocal offset
            data[offset:offset + len(field)] = field
            offset += len(field)

        put(MAGIC)
        put(write_u32_le(self.version))
        put(write_u32_le(len(chunks)))
        for (chunk_type, body) in chunks:
            put(bytes([chunk_type]))
            put(write_u32_le(len(body)))
            put(body)
        assert offset == size
        return bytes(data)


class Package1(Package):
    version = 1

    def _check_lossless(self, section):
        # Version 1 audio chunks have no room for the format tag.
        if (isinstance(section, Sections.Audio)
            and section.format != AudioFormat.NONE):
            warn("Audio format {0} is not stored in format version 1"
                 .format(section.format.name if isinstance(section.format, AudioFormat)
                         else section.format),
                 LossySectionWarning)

class Package2(Package):
    "Format version 2 stores the audio format tag in the audio chunk."
    version = 2


_package_versions = {
    1: Package1,
    2: Package2,
    }

default_package = Package1
