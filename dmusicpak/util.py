# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import warnings
import sys
from contextlib import contextmanager

import dmusicpak
from dmusicpak.sections import Metadata

def verb(verbose, *args, **kwargs):
    if verbose:
        print(*args, **kwargs)

def format_name(value):
    "Name of a format tag, or its number if the tag is not known."
    return getattr(value, "name", str(value))

def format_duration(ms):
    return "{0}:{1:02}.{2:03}".format(ms // 60000, ms // 1000 % 60, ms % 1000)

def describe(package):
    "Generate lines of human-readable text describing package."
    yield "DMusicPak format version {0}, {1} section(s)".format(
        package.version, len(package))
    if package.has_metadata:
        metadata = package.get_metadata()
        yield "  metadata:"
        for name in Metadata.text_fields:
            value = getattr(metadata, name)
            if value is not None:
                yield "    {0:<12} {1}".format(name + ":", value)
        yield "    {0:<12} {1}".format("duration:", format_duration(metadata.duration_ms))
        yield "    {0:<12} {1} kbps".format("bitrate:", metadata.bitrate)
        yield "    {0:<12} {1} Hz".format("sample rate:", metadata.sample_rate)
        yield "    {0:<12} {1}".format("channels:", metadata.channels)
    if package.has_lyrics:
        lyrics = package.get_lyrics()
        yield "  lyrics: {0}, {1} bytes".format(format_name(lyrics.format), len(lyrics.data))
    if package.has_audio:
        audio = package.get_audio()
        yield "  audio: {0}, {1} bytes{2}".format(
            format_name(audio.format), len(audio.data),
            ", from {0!r}".format(audio.source_filename)
            if audio.source_filename is not None else "")
    if package.has_cover:
        cover = package.get_cover()
        yield "  cover: {0}, {1}x{2}, {3} bytes".format(
            format_name(cover.format), cover.width, cover.height, len(cover.data))

@contextmanager
def print_warnings(filename, options):
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always", dmusicpak.Warning)
        try:
            yield None
        finally:
            if not options.quiet and len(ws) > 0:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()
