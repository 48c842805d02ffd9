# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import dmusicpak.sections
import dmusicpak.package

from dmusicpak.errors import *
from dmusicpak.formats import LyricFormat, AudioFormat, CoverFormat
from dmusicpak.sections import Metadata, Lyrics, Audio, Cover
from dmusicpak.package import read_package, decode_package, detect_package, delete_section
from dmusicpak.package import Package, Package1, Package2, default_package

__version__ = "1.0.1"

def version():
    "Return the library version string."
    return __version__
