import os

import pytest

from leafcore.encoding import LineEnding
from leafcore.fileio import (
    FileError,
    FileInfo,
    check_file_writable,
    get_file_basename,
    parse_file_uri,
    read_text_file,
    write_text_file,
)


def test_check_file_writable_for_new_file(tmp_path):
    target = tmp_path / "new.txt"
    assert check_file_writable(str(target)) is True


def test_check_file_writable_for_directory(tmp_path):
    assert check_file_writable(str(tmp_path)) is False


def test_check_file_writable_missing_directory(tmp_path):
    assert check_file_writable(str(tmp_path / "nope" / "x.txt")) is False


def test_basename_untitled():
    assert get_file_basename(None) == "Untitled"
    assert get_file_basename(None, True) == "(Untitled)"


def test_basename_missing_file_in_brackets(tmp_path):
    path = str(tmp_path / "x.txt")
    assert get_file_basename(path, True) == "(x.txt)"
    assert get_file_basename(path, False) == "x.txt"


def test_basename_existing_writable(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("hi")
    assert get_file_basename(str(path), True) == "doc.txt"


def test_basename_unwritable_in_angle_brackets(tmp_path):
    folder = tmp_path / "folder"
    folder.mkdir()
    assert get_file_basename(str(folder), True) == "<folder>"


def test_parse_file_uri_decodes_escapes():
    assert parse_file_uri("file:///tmp/a%20b.txt") == "/tmp/a b.txt"


def test_parse_file_uri_localhost():
    assert parse_file_uri("file://localhost/etc/x") == "/etc/x"


def test_parse_file_uri_remote_host_rejected():
    with pytest.raises(ValueError):
        parse_file_uri("file://host.example.com/x")


def test_parse_relative_path_uses_cwd(tmp_path):
    assert parse_file_uri("notes.txt", str(tmp_path)) == os.path.join(
        str(tmp_path), "notes.txt"
    )


def test_parse_absolute_path_unchanged(tmp_path):
    path = str(tmp_path / "a.txt")
    assert parse_file_uri(path) == path


def test_read_missing_file_is_empty(tmp_path):
    fi = FileInfo(str(tmp_path / "missing.txt"), charset="UTF-8")
    assert read_text_file(fi) == ""
    assert fi.lineend is LineEnding.LF


def test_read_directory_raises(tmp_path):
    with pytest.raises(FileError):
        read_text_file(FileInfo(str(tmp_path)))


def test_read_crlf_file(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    fi = FileInfo(str(path), charset="UTF-8", charset_flag=True)
    assert read_text_file(fi) == "one\ntwo\n"
    assert fi.lineend is LineEnding.CRLF
    assert fi.charset == "UTF-8"
    assert fi.charset_flag is True


def test_read_detects_utf8(tmp_path):
    path = tmp_path / "u.txt"
    path.write_bytes("caf\u00e9\n".encode("utf-8"))
    fi = FileInfo(str(path))
    assert read_text_file(fi) == "caf\u00e9\n"
    assert fi.charset == "UTF-8"


def test_read_falls_back_to_latin1(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"a\xffb")
    fi = FileInfo(str(path), charset="UTF-8", charset_flag=True)
    assert read_text_file(fi) == "a\u00ffb"
    assert fi.charset == "ISO-8859-1"
    assert fi.charset_flag is False


def test_read_unknown_charset_falls_back(tmp_path):
    path = tmp_path / "g.txt"
    path.write_bytes(b"abc")
    fi = FileInfo(str(path), charset="NO-SUCH-CHARSET")
    assert read_text_file(fi) == "abc"
    assert fi.charset == "ISO-8859-1"


@pytest.mark.parametrize(
    "ending", [LineEnding.LF, LineEnding.CR, LineEnding.CRLF]
)
def test_round_trip_line_endings(tmp_path, ending):
    path = str(tmp_path / "rt.txt")
    text = "alpha\nbeta\ngamma\n"
    write_text_file(FileInfo(path, charset="UTF-8", lineend=ending), text)
    fi = FileInfo(path, charset="UTF-8")
    assert read_text_file(fi) == text
    assert fi.lineend is ending


def test_write_crlf_bytes(tmp_path):
    path = tmp_path / "w.txt"
    write_text_file(
        FileInfo(str(path), charset="UTF-8", lineend=LineEnding.CRLF), "a\nb"
    )
    assert path.read_bytes() == b"a\r\nb"


def test_round_trip_legacy_charset(tmp_path):
    path = str(tmp_path / "sj.txt")
    text = "\u65e5\u672c\u8a9e\n"
    write_text_file(FileInfo(path, charset="CP932"), text)
    fi = FileInfo(path, charset="CP932")
    assert read_text_file(fi) == text


def test_write_unencodable_raises(tmp_path):
    path = tmp_path / "a.txt"
    fi = FileInfo(str(path), charset="ASCII")
    with pytest.raises(FileError, match="ASCII"):
        write_text_file(fi, "\u00e9")
    assert not path.exists()


def test_write_into_missing_directory_raises(tmp_path):
    fi = FileInfo(str(tmp_path / "no" / "a.txt"), charset="UTF-8")
    with pytest.raises(FileError, match="open file to write"):
        write_text_file(fi, "x")


def test_write_without_filename_raises():
    with pytest.raises(ValueError):
        write_text_file(FileInfo(), "x")


def test_write_fills_default_charset(tmp_path):
    fi = FileInfo(str(tmp_path / "d.txt"))
    write_text_file(fi, "plain")
    assert fi.charset
    assert (tmp_path / "d.txt").read_bytes() == b"plain"