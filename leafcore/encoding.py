"""Locale-aware character set and line ending detection for text files."""

from __future__ import annotations

import codecs
import enum
import locale
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import AnyStr

__all__ = [
    "Region",
    "LineEnding",
    "EncodingItems",
    "get_encoding_code",
    "get_encoding_items",
    "get_default_charset",
    "detect_line_ending",
    "convert_line_ending_to_lf",
    "convert_line_ending",
    "detect_charset",
]


class Region(enum.IntEnum):
    """Language regions, each with its own set of likely legacy encodings."""

    LATIN1 = 0
    LATIN2 = 1
    LATIN3 = 2
    LATIN4 = 3
    LATINC = 4
    LATINC_UA = 5
    LATINC_TJ = 6
    LATINA = 7
    LATING = 8
    LATINH = 9
    LATIN5 = 10
    CHINESE_CN = 11
    CHINESE_TW = 12
    CHINESE_HK = 13
    JAPANESE = 14
    KOREAN = 15
    VIETNAMESE = 16
    THAI = 17
    GEORGIAN = 18


class LineEnding(enum.IntEnum):
    """Line terminator styles; CRLF is the sum of its two characters."""

    LF = 0x0A
    CR = 0x0D
    CRLF = 0x0A + 0x0D


@dataclass(frozen=True)
class EncodingItems:
    """The IANA, OpenI18N and code page encodings of a region."""

    iana: str | None
    openi18n: str | None
    codepage: str | None


_COUNTRIES: dict[Region, tuple[str, ...]] = {
    Region.LATIN1: (),
    Region.LATIN2: ("cs", "hr", "hu", "pl", "ro", "sk", "sl", "sq", "sr", "uz"),
    Region.LATIN3: ("eo", "mt"),
    Region.LATIN4: ("et", "lt", "lv", "mi"),
    Region.LATINC: ("be", "bg", "ky", "mk", "mn", "ru", "tt"),
    Region.LATINC_UA: ("uk",),
    Region.LATINC_TJ: ("tg",),
    Region.LATINA: ("ar", "fa", "ur"),
    Region.LATING: ("el",),
    Region.LATINH: ("he", "yi"),
    Region.LATIN5: ("az", "tr"),
    Region.CHINESE_CN: ("zh_CN",),
    Region.CHINESE_TW: ("zh_TW",),
    Region.CHINESE_HK: ("zh_HK",),
    Region.JAPANESE: ("ja",),
    Region.KOREAN: ("ko",),
    Region.VIETNAMESE: ("vi",),
    Region.THAI: ("th",),
    Region.GEORGIAN: ("ka",),
}

_ENCODINGS: dict[Region, EncodingItems] = {
    Region.LATIN1: EncodingItems("ISO-8859-1", "ISO-8859-15", "CP1252"),
    Region.LATIN2: EncodingItems("ISO-8859-2", "ISO-8859-16", "CP1250"),
    Region.LATIN3: EncodingItems("ISO-8859-3", None, None),
    Region.LATIN4: EncodingItems("ISO-8859-4", "ISO-8859-13", "CP1257"),
    Region.LATINC: EncodingItems("ISO-8859-5", "KOI8-R", "CP1251"),
    Region.LATINC_UA: EncodingItems("ISO-8859-5", "KOI8-U", "CP1251"),
    Region.LATINC_TJ: EncodingItems("ISO-8859-5", "KOI8-T", "CP1251"),
    Region.LATINA: EncodingItems("ISO-8859-6", None, "CP1256"),
    Region.LATING: EncodingItems("ISO-8859-7", None, "CP1253"),
    Region.LATINH: EncodingItems("ISO-8859-8", None, "CP1255"),
    Region.LATIN5: EncodingItems("ISO-8859-9", None, "CP1254"),
    Region.CHINESE_CN: EncodingItems("GB2312", "GB18030", "CP936"),
    Region.CHINESE_TW: EncodingItems("BIG5", "EUC-TW", "CP950"),
    Region.CHINESE_HK: EncodingItems("BIG5", "BIG5-HKSCS", "CP950"),
    Region.JAPANESE: EncodingItems("ISO-2022-JP", "EUC-JP", "CP932"),
    Region.KOREAN: EncodingItems("ISO-2022-KR", "EUC-KR", "CP949"),
    Region.VIETNAMESE: EncodingItems(None, "VISCII", "CP1258"),
    Region.THAI: EncodingItems(None, "TIS-620", "CP874"),
    Region.GEORGIAN: EncodingItems(None, "GEORGIAN-PS", None),
}

_CYRILLIC = {Region.LATINC, Region.LATINC_UA, Region.LATINC_TJ}
_CHINESE = {Region.CHINESE_CN, Region.CHINESE_TW, Region.CHINESE_HK}
_OPENI18N_ONLY = {Region.VIETNAMESE, Region.THAI, Region.GEORGIAN}

_ESC = 0x1B
_LINE_BREAK = re.compile(rb"[\r\n]")


def get_encoding_code(environ: Mapping[str, str] | None = None) -> Region:
    """Return the region named by ``LC_ALL`` (or ``LANG`` when unset)."""
    if environ is None:
        environ = os.environ
    env = environ.get("LC_ALL")
    if env is None:
        env = environ.get("LANG")
    if env and len(env) >= 2:
        for region, countries in _COUNTRIES.items():
            if any(env.startswith(country) for country in countries):
                return region
    return Region.LATIN1


def get_encoding_items(code: Region | int) -> EncodingItems:
    """Return the candidate encodings of a region."""
    return _ENCODINGS[Region(code)]


def get_default_charset() -> str:
    """Return the character set of the current locale."""
    name = locale.getpreferredencoding(False)
    try:
        if codecs.lookup(name).name == "utf-8":
            return "UTF-8"
    except LookupError:
        pass
    return name


def _until_nul(data: bytes) -> bytes:
    return data.split(b"\0", 1)[0]


def detect_line_ending(data: bytes) -> LineEnding:
    """Guess the line ending from the first line break after the first byte."""
    data = _until_nul(data)
    found = _LINE_BREAK.search(data, 1)
    if found is None or found.group() == b"\n":
        return LineEnding.LF
    if data[found.end():found.end() + 1] == b"\n":
        return LineEnding.CRLF
    return LineEnding.CR


def _newlines(text: AnyStr) -> tuple[AnyStr, AnyStr, AnyStr]:
    if isinstance(text, bytes):
        return b"\r", b"\n", b"\r\n"
    return "\r", "\n", "\r\n"


def convert_line_ending_to_lf(data: AnyStr) -> AnyStr:
    """Turn every CR LF pair and every lone CR into LF."""
    cr, lf, crlf = _newlines(data)
    return data.replace(crlf, lf).replace(cr, lf)


def convert_line_ending(text: AnyStr, line_ending: LineEnding | int) -> AnyStr:
    """Turn LF line endings into the requested style."""
    cr, lf, crlf = _newlines(text)
    ending = LineEnding(line_ending)
    if ending is LineEnding.CR:
        return text.replace(lf, cr)
    if ending is LineEnding.CRLF:
        return text.replace(lf, crlf)
    return text


def _next(it: Iterator[int]) -> int:
    return next(it, 0)


def _is_gb18030_trail(c: int) -> bool:
    return 0x30 <= c <= 0x39 or 0x80 <= c <= 0xA0


def _detect_cyrillic(data: bytes, items: EncodingItems) -> str | None:
    noniso = False
    xc = xd = xef = 0
    for c in data:
        if 0x80 <= c <= 0x9F:
            noniso = True
        elif 0xC0 <= c <= 0xCF:
            xc += 1
        elif 0xD0 <= c <= 0xDF:
            xd += 1
        elif c >= 0xE0:
            xef += 1
    if not noniso and xc + xef < xd:
        return "ISO-8859-5"
    if xc + xd < xef:
        return "CP1251"
    return items.openi18n


def _detect_chinese(data: bytes, items: EncodingItems) -> str | None:
    charset = items.iana
    it = iter(data)
    for c in it:
        if 0x81 <= c <= 0x87:
            return "GB18030"
        if 0x88 <= c <= 0xA0:
            if _is_gb18030_trail(_next(it)):
                return "GB18030"
        elif 0xA1 <= c <= 0xC6 or 0xC9 <= c <= 0xF9:
            c = _next(it)
            if 0x40 <= c <= 0x7E:
                charset = "BIG5"
            elif _is_gb18030_trail(c):
                return "GB18030"
        elif c >= 0xC7:
            if _is_gb18030_trail(_next(it)):
                return "GB18030"
    return charset


def _detect_japanese(data: bytes) -> str:
    it = iter(data)
    for c in it:
        if 0x81 <= c <= 0x9F:
            if c == 0x8E:
                c = _next(it)
                if 0x40 <= c <= 0xA0 or 0xE0 <= c <= 0xFC:
                    return "CP932"
            elif c == 0x8F:
                c = _next(it)
                if 0x40 <= c <= 0xA0:
                    return "CP932"
                if c >= 0xFD:
                    break
            else:
                return "CP932"
        elif 0xA1 <= c <= 0xDF:
            c = _next(it)
            if c <= 0x9F:
                return "CP932"
            if c >= 0xFD:
                break
        elif 0xE0 <= c <= 0xEF:
            c = _next(it)
            if 0x40 <= c <= 0xA0:
                return "CP932"
            if c >= 0xFD:
                break
        elif c >= 0xF0:
            break
    return "EUC-JP"


def _is_johab_trail(c: int) -> bool:
    return 0x5A < c < 0x61 or 0x7A < c < 0x81


def _is_uhc_low_trail(c: int) -> bool:
    return c in (0x52, 0x72, 0x92) or 0x9D < c < 0xA1


def _is_uhc_high_trail(c: int) -> bool:
    return (
        c in (0xB2, 0xD2, 0xF2, 0xFE)
        or 0xBD < c < 0xC1
        or 0xDD < c < 0xE1
    )


def _detect_korean(data: bytes) -> str:
    noneuc = False
    nonjohab = False
    charset: str | None = None
    it = iter(data)
    for c in it:
        if 0x81 <= c < 0x84:
            charset = "CP949"
        elif 0x84 <= c < 0xA1:
            noneuc = True
            c = _next(it)
            if _is_johab_trail(c):
                charset = "CP1361"
            elif _is_uhc_low_trail(c) or _is_uhc_high_trail(c):
                charset = "CP949"
        elif 0xA1 <= c <= 0xC6:
            c = _next(it)
            if c < 0xA1:
                noneuc = True
                if _is_johab_trail(c):
                    charset = "CP1361"
                elif _is_uhc_low_trail(c):
                    charset = "CP949"
                elif _is_uhc_high_trail(c):
                    nonjohab = True
        elif 0xC6 < c <= 0xD3:
            if _next(it) < 0xA1:
                charset = "CP1361"
        elif 0xD3 < c < 0xD8:
            nonjohab = True
            _next(it)
        elif c >= 0xD8:
            if _next(it) < 0xA1:
                charset = "CP1361"
        if noneuc and nonjohab:
            charset = "CP949"
        if charset is not None:
            return charset
    return "CP949" if noneuc else "EUC-KR"


def _detect_in_utf8(data: bytes) -> str | None:
    charset: str | None = None
    it = iter(data)
    for c in it:
        if c > 0x7F:
            return "UTF-8"
        if c != _ESC or _next(it) != ord("$"):
            continue
        c = _next(it)
        if c in (ord("B"), ord("@")):
            charset = "ISO-2022-JP"
            continue
        if c == ord("A"):
            charset = "ISO-2022-JP-2"
        elif c == ord("("):
            if _next(it) in (ord("C"), ord("D")):
                charset = "ISO-2022-JP-2"
        elif c == ord(")"):
            if _next(it) == ord("C"):
                charset = "ISO-2022-KR"
        break
    return charset


def _is_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def detect_charset(
    data: bytes,
    region: Region | int | None = None,
    default_charset: str | None = None,
) -> str | None:
    """Guess the character set of ``data`` using the region's likely encodings."""
    data = _until_nul(data)
    if default_charset is None:
        default_charset = get_default_charset()

    if _is_utf8(data):
        return _detect_in_utf8(data) or default_charset

    region = get_encoding_code() if region is None else Region(region)
    items = get_encoding_items(region)

    if region in _CYRILLIC:
        return _detect_cyrillic(data, items)
    if region in _CHINESE:
        return _detect_chinese(data, items)
    if region is Region.JAPANESE:
        return _detect_japanese(data)
    if region is Region.KOREAN:
        return _detect_korean(data)
    if region in _OPENI18N_ONLY:
        return items.openi18n

    if default_charset != "UTF-8":
        charset: str | None = default_charset
    elif any(0x80 <= c <= 0x9F for c in data):
        charset = items.codepage
    else:
        charset = items.openi18n
    return charset or items.iana