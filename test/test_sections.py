# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import struct

from dmusicpak.sections import *
from dmusicpak.formats import LyricFormat, AudioFormat, CoverFormat

class SectionTestCase(unittest.TestCase):
    def testDefaults(self):
        metadata = Metadata()
        for name in Metadata.text_fields:
            self.assertIsNone(getattr(metadata, name))
        self.assertEqual((metadata.duration_ms, metadata.bitrate,
                          metadata.sample_rate, metadata.channels), (0, 0, 0, 0))
        self.assertEqual(Lyrics().format, LyricFormat.NONE)
        self.assertEqual(Lyrics().data, b"")
        self.assertEqual(Audio().format, AudioFormat.NONE)
        self.assertIsNone(Audio().source_filename)
        self.assertEqual(Cover(), Cover(format=0, width=0, height=0, data=b""))

    def testValidation(self):
        metadata = Metadata(title="Title", channels=2)
        self.assertRaises(ValueError, setattr, metadata, "channels", 1 << 16)
        self.assertRaises(ValueError, setattr, metadata, "bitrate", -320)
        self.assertRaises(TypeError, setattr, metadata, "title", 12)
        self.assertEqual(metadata.channels, 2)
        metadata.title = ""
        self.assertIsNone(metadata.title)

        self.assertRaises(TypeError, Metadata, tilte="Typo")
        self.assertRaises(ValueError, Cover, format="gif")
        self.assertEqual(Cover(format="png").format, CoverFormat.PNG)
        self.assertRaises(TypeError, Lyrics, data="not bytes")

    def testNames(self):
        self.assertEqual([cls.name for cls in known_sections.values()],
                         ["metadata", "lyrics", "audio", "cover"])
        self.assertIs(section_class("Audio"), Audio)
        self.assertIs(section_class(Cover), Cover)
        self.assertIs(section_class(CHUNK_LYRICS), Lyrics)
        self.assertRaises(KeyError, section_class, "video")
        self.assertRaises(KeyError, section_class, 0x7F)
        self.assertRaises(KeyError, section_class, Section)

    def testMetadataLayout(self):
        metadata = Metadata(title="Example Song", artist="Example Artist",
                            duration_ms=180000, bitrate=320,
                            sample_rate=44100, channels=2)
        expected = (struct.pack("<I", 12) + b"Example Song"
                    + struct.pack("<I", 14) + b"Example Artist"
                    + b"\x00\x00\x00\x00" * 4
                    + struct.pack("<IIIH", 180000, 320, 44100, 2))
        self.assertEqual(metadata._to_data(1), expected)
        self.assertEqual(Metadata._from_data(expected, 1), metadata)
        # Fixed fields add up to 14 bytes
        self.assertEqual(len(Metadata()._to_data(1)), 6 * 4 + 14)

    def testLyricsLayout(self):
        lyrics = Lyrics(format=LyricFormat.SRT, data=b"1\n00:00:01,000 --> 00:00:02,000\nHi\n")
        data = lyrics._to_data(1)
        self.assertEqual(data[:4], b"\x04\x00\x00\x00")
        self.assertEqual(data[4:], lyrics.data)
        self.assertEqual(Lyrics._from_data(data, 1), lyrics)
        self.assertEqual(lyrics.text[:1], "1")

    def testAudioLayout(self):
        audio = Audio(format=AudioFormat.FLAC, source_filename="a.flac", data=b"fLaC")
        v1 = audio._to_data(1)
        v2 = audio._to_data(2)
        self.assertEqual(v1, b"\x06\x00\x00\x00a.flacfLaC")
        self.assertEqual(v2, b"\x02\x00\x00\x00" + v1)

        # Version 1 bodies lose the format tag
        decoded = Audio._from_data(v1, 1)
        self.assertEqual(decoded.format, AudioFormat.NONE)
        self.assertEqual(decoded.source_filename, "a.flac")
        self.assertEqual(decoded.data, b"fLaC")
        self.assertEqual(Audio._from_data(v2, 2), audio)

    def testCoverLayout(self):
        cover = Cover(format=CoverFormat.JPEG, width=600, height=400, data=b"\xff\xd8\xff")
        data = cover._to_data(1)
        self.assertEqual(data, struct.pack("<III", 1, 600, 400) + b"\xff\xd8\xff")
        self.assertEqual(Cover._from_data(data, 1), cover)

    def testEmptyPayloads(self):
        for section in (Lyrics(), Audio(), Cover(), Metadata()):
            for version in (1, 2):
                data = section._to_data(version)
                self.assertEqual(type(section)._from_data(data, version), section)

    def testTruncatedBody(self):
        metadata = Metadata(title="Title", channels=2)._to_data(1)
        for k in range(len(metadata)):
            self.assertRaises(EOFError, Metadata._from_data, metadata[:k], 1)
        self.assertRaises(EOFError, Lyrics._from_data, b"\x01\x00", 1)
        self.assertRaises(EOFError, Cover._from_data, b"\x01\x00\x00\x00" * 2, 1)
        self.assertRaises(EOFError, Audio._from_data, b"\x10\x00\x00\x00short", 1)

    def testUnknownFormatTag(self):
        lyrics = Lyrics._from_data(b"\x2a\x00\x00\x00data", 1)
        self.assertEqual(lyrics.format, 42)
        self.assertEqual(lyrics._to_data(1), b"\x2a\x00\x00\x00data")
        # ...but it can't be assigned directly
        self.assertRaises(ValueError, setattr, lyrics, "format", 42)

    def testRepr(self):
        audio = Audio(source_filename="x.mp3", data=bytes(100))
        self.assertIn("data=<100 bytes of binary data", repr(audio))
        self.assertIn("source_filename='x.mp3'", repr(audio))
        self.assertTrue(str(Metadata(title="T")).startswith("metadata(title='T'"))

suite = unittest.TestLoader().loadTestsFromTestCase(SectionTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
