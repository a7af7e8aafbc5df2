"""Reading and writing text files with charset and line ending handling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from leafcore.encoding import (
    LineEnding,
    convert_line_ending,
    convert_line_ending_to_lf,
    detect_charset,
    detect_line_ending,
    get_default_charset,
)

__all__ = [
    "FileInfo",
    "FileError",
    "check_file_writable",
    "get_file_basename",
    "parse_file_uri",
    "read_text_file",
    "write_text_file",
]

UNTITLED = "Untitled"
_FALLBACK_CHARSET = "ISO-8859-1"


class FileError(Exception):
    """Raised when a file cannot be read, converted or written."""


@dataclass
class FileInfo:
    """A document's file name, character set and line ending style.

    ``charset_flag`` is true when the charset was given explicitly rather
    than picked from the detected or listed ones.
    """

    filename: str | None = None
    charset: str | None = None
    charset_flag: bool = False
    lineend: LineEnding = LineEnding.LF


def check_file_writable(filename: str) -> bool:
    """Tell whether ``filename`` can be opened for appending."""
    try:
        with open(filename, "ab"):
            pass
    except OSError:
        return False
    return True


def _basename(filename: str) -> str:
    separators = os.sep + (os.altsep or "")
    stripped = filename.rstrip(separators)
    if not stripped:
        return os.sep if filename else "."
    return os.path.basename(stripped)


def get_file_basename(filename: str | None, bracket: bool = False) -> str:
    """Return the name shown for a document.

    With ``bracket``, a missing file is shown as ``(name)`` and a file that
    cannot be written as ``<name>``.
    """
    if filename is not None:
        name = _basename(filename)
        exists = os.path.exists(filename)
    else:
        name = UNTITLED
        exists = False

    if bracket:
        if not exists:
            return f"({name})"
        if filename is not None and not check_file_writable(filename):
            return f"<{name}>"
    return name


def parse_file_uri(uri: str, cwd: str | None = None) -> str:
    """Turn a ``file:`` URI or a path into an absolute file name."""
    if "file:" in uri[:5]:
        parts = urlsplit(uri)
        if parts.scheme != "file":
            raise ValueError(f"not a file URI: {uri!r}")
        if parts.netloc not in ("", "localhost"):
            raise ValueError(f"file URI names a remote host: {uri!r}")
        if parts.query or parts.fragment:
            raise ValueError(f"file URI carries a query or fragment: {uri!r}")
        path = unquote(parts.path)
        if not path.startswith("/"):
            raise ValueError(f"file URI path is not absolute: {uri!r}")
        return path
    if os.path.isabs(uri):
        return uri
    return os.path.join(cwd if cwd is not None else os.getcwd(), uri)


def _decode(data: bytes, charset: str) -> tuple[str, str]:
    try:
        return data.decode(charset), charset
    except (UnicodeDecodeError, LookupError):
        return data.decode(_FALLBACK_CHARSET), _FALLBACK_CHARSET


def read_text_file(fi: FileInfo) -> str:
    """Read the file named by ``fi`` and return its text with LF line endings.

    A file that does not exist reads as empty text.  ``fi.lineend`` and
    ``fi.charset`` are updated to what the file turned out to use.
    """
    if fi.filename is None:
        raise ValueError("FileInfo has no file name")
    try:
        with open(fi.filename, "rb") as stream:
            contents = stream.read()
    except OSError as exc:
        if os.path.exists(fi.filename):
            raise FileError(exc.strerror or str(exc)) from exc
        contents = b""

    length = len(contents)
    fi.lineend = detect_line_ending(contents)
    if fi.lineend is not LineEnding.LF:
        contents = convert_line_ending_to_lf(contents)

    if fi.charset:
        charset = fi.charset
    else:
        charset = detect_charset(contents) or get_default_charset()

    if length:
        text, charset = _decode(contents.split(b"\0", 1)[0], charset)
    else:
        text = ""

    if charset != fi.charset:
        fi.charset = charset
        fi.charset_flag = False
    return text


def write_text_file(fi: FileInfo, text: str) -> None:
    """Write ``text`` (LF line endings) to ``fi.filename`` in its charset and line ending."""
    if fi.filename is None:
        raise ValueError("FileInfo has no file name")
    text = convert_line_ending(text, fi.lineend)
    if not fi.charset:
        fi.charset = get_default_charset()
    try:
        data = text.encode(fi.charset)
    except UnicodeEncodeError as exc:
        raise FileError(f"Can't convert codeset to '{fi.charset}'") from exc
    except LookupError as exc:
        raise FileError(str(exc)) from exc

    try:
        stream = open(fi.filename, "wb")
    except OSError as exc:
        raise FileError("Can't open file to write") from exc
    with stream:
        try:
            written = stream.write(data)
        except OSError as exc:
            raise FileError("Can't write file") from exc
        if written != len(data):
            raise FileError("Can't write file")