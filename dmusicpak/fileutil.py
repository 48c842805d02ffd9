# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""File manipulation utilities."""

import os
import os.path
import shutil
import tempfile
import signal
import threading

from contextlib import contextmanager

from dmusicpak.errors import MissingFileError, PackageIOError

def xread(file, length):
    "Read exactly length bytes from file; raise EOFError if file ends sooner."
    data = file.read(length)
    if len(data) != length:
        raise EOFError
    return data

def is_filename(filename):
    return isinstance(filename, (str, bytes, os.PathLike))

@contextmanager
def opened(filename, mode):
    "Open filename, or do nothing if filename is already an open file object"
    if is_filename(filename):
        try:
            file = open(filename, mode)
        except FileNotFoundError as e:
            raise MissingFileError(e.errno, e.strerror, e.filename) from e
        try:
            yield file
        finally:
            if not file.closed:
                file.close()
    else:
        yield filename

@contextmanager
def suppress_interrupt():
    """Suppress KeyboardInterrupt exceptions while the context is active.

    The suppressed interrupt (if any) is raised when the context is exited.
    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield None
        return

    interrupted = False

    def sigint_handler(signum, frame):
        nonlocal interrupted
        interrupted = True

    s = signal.signal(signal.SIGINT, sigint_handler)
    try:
        yield None
    finally:
        signal.signal(signal.SIGINT, s)
    if interrupted:
        raise KeyboardInterrupt()

def read_file(filename):
    "Return the entire contents of filename (or an open binary file)."
    with opened(filename, "rb") as file:
        return file.read()

def write_file(filename, data, atomic=True):
    """Replace the contents of filename with data.
    Any KeyboardInterrupts arriving while write_file is running
    are deferred until the operation is complete.

    If atomic is true and filename is a path, the data is written to a
    temporary file in the same directory first, which is then renamed
    over the original. This prevents corruption on systems with atomic
    renames (UNIX), and reduces the window of vulnerability elsewhere.

    Otherwise the file is truncated and written directly; this works on
    files that are already open, but an error or interrupt may leave
    partial contents behind.
    """
    with suppress_interrupt():
        if atomic and is_filename(filename):
            _write_file_atomic(filename, data)
        else:
            with opened(filename, "wb") as file:
                if not is_filename(filename):
                    file.seek(0)
                    file.truncate()
                _write_all(file, data)

def _write_all(file, data):
    written = file.write(data)
    if written is not None and written != len(data):
        raise PackageIOError("Short write: {0} of {1} bytes"
                             .format(written, len(data)))

def _write_file_atomic(filename, data):
    with replacing(filename) as file:
        _write_all(file, data)

def _umask():
    mask = os.umask(0)
    os.umask(mask)
    return mask

@contextmanager
def replacing(filename):
    """Open a temporary file next to filename for binary writing.

    When the with block completes, the temporary file is moved over
    filename. If the block raises, filename is left untouched and the
    temporary file is removed.

    The result keeps the permissions of the file it replaces; new
    files get the usual permissions allowed by the process umask.
    """
    filename = os.fsdecode(filename)
    temp = tempfile.NamedTemporaryFile(dir=os.path.dirname(os.path.abspath(filename)),
                                       prefix="dmusicpak-",
                                       suffix=".tmp",
                                       delete=False)
    try:
        try:
            yield temp
        finally:
            temp.close()
        if os.path.exists(filename):
            shutil.copymode(filename, temp.name)
        else:
            # mkstemp creates files readable by the owner only
            os.chmod(temp.name, 0o666 & ~_umask())
        shutil.move(temp.name, filename)
    except BaseException:
        if os.path.exists(temp.name):
            os.unlink(temp.name)
        raise
