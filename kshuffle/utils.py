import bz2
import gzip
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def asHandle(fileNameOrHandle, mode="rt", encoding="latin-1"):
    """
    Decorator for file opening that makes it easy to open compressed files
    and which can be passed an already-open file handle or a file name.

    @param fileNameOrHandle: Either a C{str} or C{Path} file name or an open
        text or binary file handle.
    @param mode: The C{str} mode to use for opening the file.
    @param encoding: The C{str} encoding to use when opening the file.
    @return: A generator that can be turned into a context manager via
        L{contextlib.contextmanager}.
    """
    if isinstance(fileNameOrHandle, (Path, str)):
        fileNameOrHandle = str(fileNameOrHandle)
        if fileNameOrHandle.endswith(".gz"):
            with gzip.open(fileNameOrHandle, mode=mode, encoding=encoding) as fp:
                yield fp
        elif fileNameOrHandle.endswith(".bz2"):
            with bz2.open(fileNameOrHandle, mode=mode, encoding=encoding) as fp:
                yield fp
        else:
            with open(fileNameOrHandle, mode=mode, encoding=encoding) as fp:
                yield fp
    else:
        yield fileNameOrHandle


def chomp(line: str) -> str:
    """
    Remove a single trailing line terminator.

    @param line: A C{str} line, as returned by C{readline}.
    @return: C{line} without one trailing '\\r\\n' or '\\n' (if present).
    """
    if line.endswith("\r\n"):
        return line[:-2]
    elif line.endswith("\n"):
        return line[:-1]
    else:
        return line
