# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest

from dmusicpak.specs import *
from dmusicpak.formats import LyricFormat, AudioFormat, CoverFormat, lookup, guess

class SpecTestCase(unittest.TestCase):
    def testIntegerSpec(self):
        spec = IntegerSpec("channels", 2)
        self.assertEqual(spec.read(None, b"\x02\x00rest"), (2, b"rest"))
        self.assertRaises(EOFError, spec.read, None, b"\x02")
        self.assertEqual(spec.write(None, 0x0102), b"\x02\x01")
        self.assertEqual(spec.validate(None, None), 0)
        self.assertEqual(spec.validate(None, 65535), 65535)
        self.assertRaises(ValueError, spec.validate, None, 65536)
        self.assertRaises(ValueError, spec.validate, None, -1)
        self.assertRaises(TypeError, spec.validate, None, "2")
        self.assertRaises(TypeError, spec.validate, None, 2.0)

    def testEnumSpec(self):
        spec = EnumSpec("format", CoverFormat)
        self.assertEqual(spec.validate(None, None), CoverFormat.NONE)
        self.assertIs(spec.validate(None, CoverFormat.PNG), CoverFormat.PNG)
        self.assertIs(spec.validate(None, 1), CoverFormat.JPEG)
        self.assertIs(spec.validate(None, "webp"), CoverFormat.WEBP)
        self.assertRaises(ValueError, spec.validate, None, 99)
        self.assertRaises(ValueError, spec.validate, None, "gif")
        self.assertRaises(TypeError, spec.validate, None, 1.5)

        self.assertEqual(spec.write(None, CoverFormat.BMP), b"\x04\x00\x00\x00")
        value, rest = spec.read(None, b"\x02\x00\x00\x00")
        self.assertIs(value, CoverFormat.PNG)
        self.assertEqual(rest, b"")

        # Unknown tags are read as plain integers
        value, rest = spec.read(None, b"\x63\x00\x00\x00")
        self.assertEqual(value, 99)
        self.assertNotIsInstance(value, CoverFormat)

    def testStringSpec(self):
        spec = StringSpec("title")
        self.assertEqual(spec.validate(None, "Title"), "Title")
        self.assertEqual(spec.validate(None, ""), None)
        self.assertEqual(spec.validate(None, None), None)
        self.assertRaises(TypeError, spec.validate, None, b"Title")
        self.assertRaises(TypeError, spec.validate, None, 42)
        self.assertEqual(spec.write(None, None), b"\x00\x00\x00\x00")
        self.assertEqual(spec.read(None, b"\x01\x00\x00\x00Xyz"), ("X", b"yz"))

    def testBinaryDataSpec(self):
        spec = BinaryDataSpec("data")
        source = bytearray(b"payload")
        value = spec.validate(None, source)
        self.assertIsInstance(value, bytes)
        source[0:1] = b"X"
        self.assertEqual(value, b"payload")
        self.assertEqual(spec.validate(None, None), b"")
        self.assertRaises(TypeError, spec.validate, None, "payload")
        self.assertEqual(spec.read(None, b"all of it"), (b"all of it", b""))
        self.assertEqual(spec.to_str(b"12345"), "data=<5 bytes>")

class FormatsTestCase(unittest.TestCase):
    def testValues(self):
        self.assertEqual([int(f) for f in LyricFormat], list(range(6)))
        self.assertEqual([int(f) for f in AudioFormat], list(range(11)))
        self.assertEqual([int(f) for f in CoverFormat], list(range(5)))

    def testLookup(self):
        self.assertIs(lookup(LyricFormat, "lrc-eslyric"), LyricFormat.LRC_ESLYRIC)
        self.assertIs(lookup(LyricFormat, "Lrc_Word_By_Word"), LyricFormat.LRC_WORD_BY_WORD)
        self.assertIs(lookup(AudioFormat, 7), AudioFormat.OPUS)
        self.assertRaises(ValueError, lookup, AudioFormat, "mp4")
        self.assertRaises(TypeError, lookup, AudioFormat, True)

    def testGuess(self):
        self.assertIs(guess(AudioFormat, "/music/Song.FLAC"), AudioFormat.FLAC)
        self.assertIs(guess(AudioFormat, "track.xyz"), AudioFormat.NONE)
        self.assertIs(guess(CoverFormat, "folder.jpg"), CoverFormat.JPEG)
        self.assertIs(guess(LyricFormat, "song.srt"), LyricFormat.SRT)

suite = unittest.TestSuite([
        unittest.TestLoader().loadTestsFromTestCase(SpecTestCase),
        unittest.TestLoader().loadTestsFromTestCase(FormatsTestCase),
        ])

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
