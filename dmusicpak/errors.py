# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Exception and warning classes for DMusicPak."""

import warnings

OK = 0
INVALID_PARAM = -1
FILE_NOT_FOUND = -2
INVALID_FORMAT = -3
MEMORY_ALLOC = -4
IO = -5
NOT_SUPPORTED = -6
CORRUPTED = -7

_error_strings = {
    OK: "Success",
    INVALID_PARAM: "Invalid parameter",
    FILE_NOT_FOUND: "File not found",
    INVALID_FORMAT: "Invalid format",
    MEMORY_ALLOC: "Memory allocation failed",
    IO: "I/O error",
    NOT_SUPPORTED: "Not supported",
    CORRUPTED: "File corrupted",
    }

def error_string(code):
    "Return the message for a numeric error code."
    return _error_strings.get(code, "Unknown error")

class Error(Exception):
    code = CORRUPTED

class Warning(Error, UserWarning): pass

class SectionWarning(Warning): pass
class CorruptedSectionWarning(SectionWarning): pass
class UnknownChunkWarning(SectionWarning): pass
class DuplicateSectionWarning(SectionWarning): pass
class LossySectionWarning(SectionWarning): pass

class InvalidParamError(Error, ValueError):
    code = INVALID_PARAM

class MissingFileError(Error, FileNotFoundError):
    code = FILE_NOT_FOUND

class InvalidFormatError(Error, ValueError):
    code = INVALID_FORMAT

class NoPackageError(InvalidFormatError): pass

class MemoryAllocError(Error, MemoryError):
    code = MEMORY_ALLOC

class PackageIOError(Error, OSError):
    code = IO

class NotSupportedError(Error, LookupError):
    code = NOT_SUPPORTED

class CorruptedError(Error, ValueError):
    code = CORRUPTED

def ignore_decode_warnings():
    """Install the default filters for recoverable decode anomalies.

    Skipped, corrupted and repeated chunks do not stop a decode, and
    are not reported unless a filter asks for them. Filters installed
    by the application or by -W options take precedence.
    """
    for category in (CorruptedSectionWarning,
                     UnknownChunkWarning,
                     DuplicateSectionWarning):
        warnings.filterwarnings("ignore", category=category, append=True)

ignore_decode_warnings()
