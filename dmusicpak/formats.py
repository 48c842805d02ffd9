# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Format tags for lyrics, audio and cover payloads."""

import enum
import os.path

class LyricFormat(enum.IntEnum):
    NONE = 0
    LRC_ESLYRIC = 1       # Enhanced LRC
    LRC_WORD_BY_WORD = 2
    LRC_LINE_BY_LINE = 3
    SRT = 4
    ASS = 5

class AudioFormat(enum.IntEnum):
    NONE = 0
    MP3 = 1
    FLAC = 2
    WAV = 3
    OGG = 4
    AAC = 5
    M4A = 6
    OPUS = 7
    WMA = 8
    APE = 9
    DSD = 10

class CoverFormat(enum.IntEnum):
    NONE = 0
    JPEG = 1
    PNG = 2
    WEBP = 3
    BMP = 4

_extensions = {
    AudioFormat: {
        ".mp3": AudioFormat.MP3,
        ".flac": AudioFormat.FLAC,
        ".wav": AudioFormat.WAV,
        ".ogg": AudioFormat.OGG,
        ".oga": AudioFormat.OGG,
        ".aac": AudioFormat.AAC,
        ".m4a": AudioFormat.M4A,
        ".opus": AudioFormat.OPUS,
        ".wma": AudioFormat.WMA,
        ".ape": AudioFormat.APE,
        ".dsf": AudioFormat.DSD,
        ".dff": AudioFormat.DSD,
        },
    CoverFormat: {
        ".jpg": CoverFormat.JPEG,
        ".jpeg": CoverFormat.JPEG,
        ".png": CoverFormat.PNG,
        ".webp": CoverFormat.WEBP,
        ".bmp": CoverFormat.BMP,
        },
    LyricFormat: {
        ".lrc": LyricFormat.LRC_LINE_BY_LINE,
        ".srt": LyricFormat.SRT,
        ".ass": LyricFormat.ASS,
        },
    }

def lookup(enumtype, value):
    """Convert value to a member of enumtype.

    Accepts a member, its integer value, or its name in any case
    (dashes are ignored, so "lrc-eslyric" names LRC_ESLYRIC).
    """
    if isinstance(value, enumtype):
        return value
    if isinstance(value, str):
        key = value.upper().replace("-", "_")
        try:
            return enumtype[key]
        except KeyError:
            raise ValueError("Unknown {0} {1!r}".format(enumtype.__name__, value)) from None
    if type(value) is not int:
        raise TypeError("Not a {0}: {1!r}".format(enumtype.__name__, value))
    return enumtype(value)

def guess(enumtype, filename):
    "Guess the format of filename from its extension; NONE if unknown."
    ext = os.path.splitext(filename)[1].lower()
    return _extensions[enumtype].get(ext, enumtype.NONE)
