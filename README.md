# leafcore

The non-graphical core of a small plain-text editor, as a Python library.
It depends only on the standard library.

## Modules

### `leafcore.encoding`

- `detect_line_ending(data)` returns a `LineEnding` (`LF`, `CR` or `CRLF`).
  It looks at the first line break after the first byte of `data`.
- `convert_line_ending_to_lf(data)` turns CR LF pairs and lone CRs into LF.
- `convert_line_ending(text, line_ending)` turns LF back into CR or CR LF.
  Both conversion functions accept `str` or `bytes`.
- `get_encoding_code(environ=None)` picks a `Region` from `LC_ALL`, or from
  `LANG` when `LC_ALL` is unset. It falls back to `Region.LATIN1`.
- `get_encoding_items(code)` returns the region's `EncodingItems`: its
  `iana`, `openi18n` and `codepage` encoding names.
- `get_default_charset()` returns the character set of the current locale.
- `detect_charset(data, region=None, default_charset=None)` guesses the
  charset of raw bytes. Valid UTF-8 is reported as `UTF-8`, as an
  ISO-2022 variant when escape sequences show one, or as the default
  charset. Other bytes are judged by rules for the region: Cyrillic,
  Chinese, Japanese and Korean each have their own, and the remaining
  regions use their listed encodings.

### `leafcore.search`

- `forward_search(text, start, needle, flags=SearchFlags.NONE, limit=None)`
  and `backward_search(...)` return a `Match(start, end)` or `None`.
  Positions are character offsets into `text`.
- With `SearchFlags.CASE_INSENSITIVE`, both sides are case-folded and
  NFKD-normalised, and a needle may span several lines. For example,
  "Straße" matches "STRASSE".
- With `SearchFlags.TEXT_ONLY`, the object placeholder U+FFFC is skipped.
- The helpers `casefold_find`, `casefold_rfind`, `caseless_match` and
  `split_keep_delimiter` are public as well.

### `leafcore.fileio`

- `FileInfo(filename, charset, charset_flag, lineend)` describes a document.
- `read_text_file(fi)` returns the file's text with LF line endings. It
  sets `fi.lineend` and `fi.charset`.
  - A file that does not exist reads as empty text.
  - Text that cannot be decoded in the chosen charset is read as ISO-8859-1.
- `write_text_file(fi, text)` writes the text back in `fi.charset` and
  `fi.lineend`. When no charset is set, the locale's charset is used.
- `FileError` is raised when an existing file cannot be read, when text
  cannot be encoded, and when a file cannot be opened or written. If
  `fi.filename` is `None`, both functions raise `ValueError`.
- `get_file_basename(filename, bracket=False)` returns the name to show
  for a document:
  - `Untitled` when there is no file name.
  - With `bracket=True`, `(name)` for a missing file and `<name>` for a
    read-only one.
- `parse_file_uri(uri, cwd=None)` turns a `file:` URI or a path into an
  absolute file name. Relative paths are resolved against `cwd`, or
  against the current directory when `cwd` is not given.
- `check_file_writable(filename)` tells whether the file can be opened
  for appending.

### `leafcore.paging`

- `PageLayout.from_text(text, page_height, text_height, wrap_width=None)`
  first strips trailing whitespace from the text. It then wraps lines
  longer than `wrap_width` characters and fits `page_height // text_height`
  lines on a page.
- `n_pages` and `line_count` give the size of the layout.
- `lines_on_page(page_nr)` returns the lines on a page, counting from 0.
- `line_offsets(page_nr)` returns the baseline of each of those lines.
- `page_label(page_nr)` returns labels such as `1 / 3`.

## Usage

```python
from leafcore.encoding import detect_line_ending, convert_line_ending_to_lf
from leafcore.search import SearchFlags, forward_search
from leafcore.fileio import FileInfo, read_text_file, write_text_file
from leafcore.paging import PageLayout

data = b"first line\r\nsecond line\r\n"
ending = detect_line_ending(data)          # LineEnding.CRLF
unix = convert_line_ending_to_lf(data)     # b"first line\nsecond line\n"

text = "Hello\nWORLD and world"
match = forward_search(text, 0, "world", SearchFlags.CASE_INSENSITIVE)
# Match(start=6, end=11)

fi = FileInfo(filename="notes.txt")
content = read_text_file(fi)               # fills in fi.charset and fi.lineend
write_text_file(fi, content + "more\n")    # same charset and line ending

layout = PageLayout.from_text(content, page_height=700, text_height=10)
for page in range(layout.n_pages):
    print(layout.page_label(page), layout.lines_on_page(page))
```

## What it does not do

This is a library only. It has:

- no command to run;
- no editor window, dialogs, menus or clipboard handling;
- no undo history.

`leafcore.paging` works out which lines go on which page. It does not
render or send anything to a printer.

## Running the tests

```
pip install -e ".[test]"
pytest
```