# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""The dmusicpak command-line tool.

Usage: dmusicpak COMMAND [options] ARGS...

Commands:
  info FILE...            describe packages
  create OUT [options]    build a package from loose files
  extract FILE [options]  write package sections out to files
  delete FILE SECTION...  remove sections from a package
"""

import sys
import os.path
import optparse

import dmusicpak
import dmusicpak.fileutil as fileutil
from dmusicpak.formats import LyricFormat, AudioFormat, CoverFormat, lookup, guess
from dmusicpak.util import verb, describe, print_warnings

def _common_options(parser):
    parser.add_option("-q", "--quiet", action="store_true", default=False,
                      help="don't print warnings")
    parser.add_option("-v", "--verbose", action="store_true", default=False,
                      help="explain what is being done")
    parser.add_option("-n", "--dry-run", dest="act", action="store_false", default=True,
                      help="don't modify any files")

def _error(filename, e):
    print("{0}: error: {1}".format(filename, e), file=sys.stderr)

def cmd_info(args):
    parser = optparse.OptionParser(usage="%prog info [options] FILE...")
    _common_options(parser)
    (options, files) = parser.parse_args(args)
    if not files:
        parser.error("no files given")
    status = 0
    for filename in files:
        with print_warnings(filename, options):
            try:
                package = dmusicpak.read_package(filename)
            except (dmusicpak.Error, OSError) as e:
                _error(filename, e)
                status = 1
                continue
        print(filename + ":")
        for line in describe(package):
            print(line)
    return status

def cmd_create(args):
    parser = optparse.OptionParser(usage="%prog create [options] OUT")
    _common_options(parser)
    group = optparse.OptionGroup(parser, "Metadata")
    for name in dmusicpak.Metadata.text_fields:
        group.add_option("--" + name, metavar="TEXT")
    group.add_option("--duration", dest="duration_ms", type="int", metavar="MS")
    group.add_option("--bitrate", type="int", metavar="KBPS")
    group.add_option("--sample-rate", dest="sample_rate", type="int", metavar="HZ")
    group.add_option("--channels", type="int", metavar="N")
    parser.add_option_group(group)
    group = optparse.OptionGroup(parser, "Payloads")
    group.add_option("--audio", metavar="FILE")
    group.add_option("--audio-format", metavar="NAME",
                     help="one of " + ", ".join(f.name.lower() for f in AudioFormat))
    group.add_option("--lyrics", metavar="FILE")
    group.add_option("--lyrics-format", metavar="NAME",
                     help="one of " + ", ".join(f.name.lower() for f in LyricFormat))
    group.add_option("--cover", metavar="FILE")
    group.add_option("--cover-format", metavar="NAME",
                     help="one of " + ", ".join(f.name.lower() for f in CoverFormat))
    group.add_option("--width", type="int", default=0)
    group.add_option("--height", type="int", default=0)
    parser.add_option_group(group)
    parser.add_option("--format-version", dest="format_version", type="int",
                      default=dmusicpak.default_package.version,
                      help="container format version (1 or 2)")
    (options, args) = parser.parse_args(args)
    if len(args) != 1:
        parser.error("exactly one output file expected")
    out = args[0]

    with print_warnings(out, options):
        try:
            package = _build_package(options)
            verb(options.verbose, "{0}: writing {1!r}".format(out, package))
            if options.act:
                package.write(out)
        except (ValueError, TypeError) as e:
            parser.error(str(e))
        except (dmusicpak.Error, OSError) as e:
            _error(out, e)
            return 1
    return 0

def _build_package(options):
    package = dmusicpak.Package().to_version(options.format_version)
    fields = dict((name, getattr(options, name))
                  for name in dmusicpak.Metadata.field_names()
                  if getattr(options, name, None) is not None)
    if fields:
        package.set_metadata(**fields)
    if options.lyrics:
        fmt = options.lyrics_format or guess(LyricFormat, options.lyrics)
        package.set_lyrics(format=lookup(LyricFormat, fmt),
                           data=fileutil.read_file(options.lyrics))
    if options.audio:
        fmt = options.audio_format or guess(AudioFormat, options.audio)
        package.set_audio(format=lookup(AudioFormat, fmt),
                          source_filename=os.path.basename(options.audio),
                          data=fileutil.read_file(options.audio))
    if options.cover:
        fmt = options.cover_format or guess(CoverFormat, options.cover)
        package.set_cover(format=lookup(CoverFormat, fmt),
                          width=options.width, height=options.height,
                          data=fileutil.read_file(options.cover))
    return package

def cmd_extract(args):
    parser = optparse.OptionParser(usage="%prog extract [options] FILE")
    _common_options(parser)
    parser.add_option("--audio", metavar="OUT", help="write the audio payload to OUT")
    parser.add_option("--lyrics", metavar="OUT", help="write the lyrics payload to OUT")
    parser.add_option("--cover", metavar="OUT", help="write the cover image to OUT")
    (options, args) = parser.parse_args(args)
    if len(args) != 1:
        parser.error("exactly one package file expected")
    filename = args[0]

    with print_warnings(filename, options):
        try:
            package = dmusicpak.read_package(filename)
            if options.audio:
                if options.act:
                    with fileutil.replacing(options.audio) as file:
                        size = package.stream_audio(file.write)
                else:
                    size = len(package.get_audio().data)
                verb(options.verbose, "{0}: audio: {1} bytes written to {2}"
                     .format(filename, size, options.audio))
            if options.lyrics:
                data = package.get_lyrics().data
                if options.act:
                    fileutil.write_file(options.lyrics, data)
                verb(options.verbose, "{0}: lyrics: {1} bytes written to {2}"
                     .format(filename, len(data), options.lyrics))
            if options.cover:
                data = package.get_cover().data
                if options.act:
                    fileutil.write_file(options.cover, data)
                verb(options.verbose, "{0}: cover: {1} bytes written to {2}"
                     .format(filename, len(data), options.cover))
        except (dmusicpak.Error, OSError) as e:
            _error(filename, e)
            return 1
    return 0

def cmd_delete(args):
    parser = optparse.OptionParser(usage="%prog delete [options] FILE SECTION...")
    _common_options(parser)
    (options, args) = parser.parse_args(args)
    if len(args) < 2:
        parser.error("a package file and at least one section name expected")
    filename, names = args[0], args[1:]
    for name in names:
        try:
            dmusicpak.sections.section_class(name)
        except KeyError:
            parser.error("unknown section " + repr(name))

    with print_warnings(filename, options):
        try:
            package = dmusicpak.read_package(filename)
            for name in names:
                try:
                    del package[name]
                    verb(options.verbose, "{0}: {1}: deleted".format(filename, name))
                except KeyError:
                    verb(options.verbose, "{0}: {1}: not in file".format(filename, name))
            if options.act:
                package.write(filename)
        except (dmusicpak.Error, OSError) as e:
            _error(filename, e)
            return 1
    return 0

commands = {
    "info": cmd_info,
    "create": cmd_create,
    "extract": cmd_extract,
    "delete": cmd_delete,
    }

def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print(__doc__.strip(), file=sys.stderr)
        return 2
    if argv[0] in ("-h", "--help"):
        print(__doc__.strip())
        return 0
    if argv[0] == "--version":
        print("dmusicpak " + dmusicpak.version())
        return 0
    if argv[0] not in commands:
        print("dmusicpak: unknown command {0!r}\n\n{1}".format(argv[0], __doc__.strip()),
              file=sys.stderr)
        return 2
    try:
        return commands[argv[0]](argv[1:])
    except SystemExit as e:
        # optparse exits on usage errors and --help
        return e.code

if __name__ == "__main__":
    sys.exit(main())
