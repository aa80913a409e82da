# tedit/core/Document.py
"""Document Module for tedit
===========================
The text buffer edited by the tedit session: an ordered list of `Row` objects
plus the file it was loaded from.

Key Features:
-------------
- Loading with encoding detection (chardet) and UTF-8 / latin-1 fallbacks.
- Character-level insertion and deletion, including row splitting on newline
  and row joining when deleting at a row end.
- Directional substring search used by the incremental search navigator.
- Per-row syntax highlighting through Pygments, overlaid with the spans of the
  word currently being searched for.
- A dirty flag tracking unsaved modifications.

The document never moves the cursor; keeping the cursor consistent with the
text is the session's job.
"""

import functools
import logging
from typing import Optional

import chardet
from pygments import lex
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.token import Token
from pygments.util import ClassNotFound

from tedit.core.Position import Position, SearchDirection

ENCODING_SAMPLE_SIZE = 1024 * 20
NO_FILETYPE = "No filetype"

# Pygments token classes → semantic style names understood by DrawScreen.
TOKEN_STYLES = {
    Token.Keyword: "keyword",
    Token.Name.Builtin: "keyword",
    Token.Name.Function: "function",
    Token.Name.Class: "type",
    Token.Name.Decorator: "function",
    Token.Keyword.Type: "type",
    Token.Literal.String: "string",
    Token.Literal.String.Doc: "comment",
    Token.Literal.Number: "number",
    Token.Comment: "comment",
}


def _style_for(token_type) -> str:
    # Walk up the token tree: Token.Keyword.Constant falls back to Token.Keyword.
    current = token_type
    while current:
        if current in TOKEN_STYLES:
            return TOKEN_STYLES[current]
        current = current.parent
    return "default"


@functools.lru_cache(maxsize=64)
def _lexer_by_alias(alias: str):
    return get_lexer_by_name(alias, stripnl=False, ensurenl=False)


@functools.lru_cache(maxsize=4096)
def _tokenize(line: str, lexer_alias: Optional[str]) -> tuple[str, ...]:
    """Returns one style name per character of `line`."""
    if not line:
        return ()
    if lexer_alias is None:
        return ("default",) * len(line)
    try:
        styles: list[str] = []
        for token_type, value in lex(line, _lexer_by_alias(lexer_alias)):
            styles.extend([_style_for(token_type)] * len(value))
    except Exception as e:
        logging.error(f"Pygments tokenization error for line '{line[:70]}': {e}")
        return ("default",) * len(line)
    if len(styles) != len(line):
        # Lexer normalised the text (e.g. tabs or carriage returns); do not guess.
        return ("default",) * len(line)
    return tuple(styles)


class Row:
    """One line of document text with its cached highlighting."""

    def __init__(self, text: str = "") -> None:
        self.string = text
        self._styles: tuple[str, ...] = ("default",) * len(text)
        self._highlight_key: Optional[tuple] = None

    def __len__(self) -> int:
        return len(self.string)

    def __repr__(self) -> str:
        return f"Row({self.string!r})"

    def _changed(self) -> None:
        self._styles = ("default",) * len(self.string)
        self._highlight_key = None

    def render(self, start: int, end: int) -> str:
        end = min(end, len(self.string))
        start = min(start, end)
        return self.string[start:end].replace("\t", " ")

    def segments(self, start: int, end: int) -> list[tuple[str, str]]:
        """Visible slice of the row as ``(text, style)`` runs."""
        end = min(end, len(self.string))
        start = min(start, end)
        runs: list[tuple[str, str]] = []
        for index in range(start, end):
            ch = self.string[index]
            ch = " " if ch == "\t" else ch
            style = self._styles[index] if index < len(self._styles) else "default"
            if runs and runs[-1][1] == style:
                runs[-1] = (runs[-1][0] + ch, style)
            else:
                runs.append((ch, style))
        return runs

    def insert(self, at: int, ch: str) -> None:
        if at >= len(self.string):
            self.string += ch
        else:
            self.string = self.string[:at] + ch + self.string[at:]
        self._changed()

    def delete(self, at: int) -> None:
        if at >= len(self.string):
            return
        self.string = self.string[:at] + self.string[at + 1:]
        self._changed()

    def append(self, other: "Row") -> None:
        self.string += other.string
        self._changed()

    def split(self, at: int) -> "Row":
        """Cuts the row at `at`; returns the tail as a new row."""
        tail = Row(self.string[at:])
        self.string = self.string[:at]
        self._changed()
        return tail

    def find(self, query: str, at: int, direction: SearchDirection) -> Optional[int]:
        """Column of `query` searching from `at` in `direction`.

        Forward finds the first match starting at or after `at`; backward finds
        the last match lying entirely before `at`.
        """
        if at > len(self.string) or not query:
            return None
        if direction is SearchDirection.FORWARD:
            index = self.string.find(query, at)
        else:
            index = self.string.rfind(query, 0, at)
        return None if index == -1 else index

    def highlight(self, lexer_alias: Optional[str], word: Optional[str]) -> None:
        key = (self.string, lexer_alias, word)
        if key == self._highlight_key:
            return
        styles = list(_tokenize(self.string, lexer_alias))
        if word:
            start = self.string.find(word)
            while start != -1:
                for index in range(start, start + len(word)):
                    styles[index] = "match"
                start = self.string.find(word, start + len(word))
        self._styles = tuple(styles)
        self._highlight_key = key


class Document:
    """Class Document
    =================
    Ordered rows of text, the file they belong to, and the dirty flag.

    Attributes:
        rows (list[Row]): The document content.
        encoding (str): Encoding used to read and write the file.
    """

    def __init__(self, rows: Optional[list[Row]] = None, file_name: Optional[str] = None) -> None:
        self.rows: list[Row] = rows or []
        self.encoding = "utf-8"
        self.dirty = False
        self._lexer_alias: Optional[str] = None
        self._file_type = NO_FILETYPE
        self._file_name: Optional[str] = None
        self.file_name = file_name

    @classmethod
    def from_lines(cls, lines: list[str], file_name: Optional[str] = None) -> "Document":
        return cls([Row(line) for line in lines], file_name)

    # --- File handling ---
    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @file_name.setter
    def file_name(self, value: Optional[str]) -> None:
        self._file_name = value
        self._detect_file_type()

    def _detect_file_type(self) -> None:
        self._lexer_alias = None
        self._file_type = NO_FILETYPE
        if not self._file_name:
            return
        try:
            lexer = get_lexer_for_filename(self._file_name)
        except ClassNotFound:
            logging.debug(f"Pygments: No lexer for filename '{self._file_name}'.")
            return
        if isinstance(lexer, TextLexer):
            return
        self._file_type = lexer.name
        self._lexer_alias = lexer.aliases[0] if lexer.aliases else None
        logging.debug(f"Pygments: Detected '{lexer.name}' by filename.")

    @classmethod
    def open(cls, file_name: str) -> "Document":
        """Loads `file_name`; raises OSError when it cannot be read."""
        with open(file_name, "rb") as f:
            raw = f.read()

        encodings: list[str] = []
        if raw:
            detected = chardet.detect(raw[:ENCODING_SAMPLE_SIZE])
            guess = detected.get("encoding")
            confidence = detected.get("confidence") or 0.0
            logging.debug(
                f"Chardet detected encoding '{guess}' with confidence {confidence:.2f} for '{file_name}'."
            )
            if guess and confidence >= 0.75:
                # ASCII is widened to its UTF-8 superset.
                encodings.append("utf-8" if guess.lower() == "ascii" else guess)
        encodings.extend(enc for enc in ("utf-8", "latin-1") if enc not in encodings)

        text = ""
        used = "utf-8"
        for encoding in encodings:
            try:
                text = raw.decode(encoding)
                used = encoding
                break
            except (UnicodeDecodeError, LookupError):
                logging.debug(f"Decoding '{file_name}' as {encoding} failed, trying next.")

        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        document = cls.from_lines([line.rstrip("\r") for line in lines], file_name)
        document.encoding = used
        logging.info(f"Opened '{file_name}': {len(document)} lines, encoding {used}.")
        return document

    def save(self) -> None:
        """Writes every row followed by a newline; raises OSError on failure."""
        if not self._file_name:
            raise OSError("document has no file name")
        self.encoding = self.write_encoding()
        with open(self._file_name, "w", encoding=self.encoding, newline="\n") as f:
            for row in self.rows:
                f.write(row.string)
                f.write("\n")
        self.dirty = False
        self._detect_file_type()
        logging.info(f"Saved '{self._file_name}' ({len(self.rows)} lines).")

    def write_encoding(self) -> str:
        """Returns the encoding every row can be written in.

        That is the encoding the file was opened with, or UTF-8 once the text
        holds a character the original encoding cannot represent.
        """
        try:
            for row in self.rows:
                row.string.encode(self.encoding)
        except (UnicodeEncodeError, LookupError):
            logging.warning(
                f"Text of '{self._file_name}' no longer fits {self.encoding}; writing it as utf-8."
            )
            return "utf-8"
        return self.encoding

    # --- Queries ---
    def __len__(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self.dirty

    def file_type(self) -> str:
        return self._file_type

    def lines(self) -> list[str]:
        """Raw row texts, without any highlighting markup."""
        return [row.string for row in self.rows]

    # --- Editing ---
    def insert(self, at: Position, ch: str) -> None:
        if at.y > len(self.rows):
            return
        self.dirty = True
        if ch == "\n":
            self._insert_newline(at)
        elif at.y == len(self.rows):
            self.rows.append(Row(ch))
        else:
            self.rows[at.y].insert(at.x, ch)

    def _insert_newline(self, at: Position) -> None:
        if at.y == len(self.rows):
            self.rows.append(Row())
            return
        tail = self.rows[at.y].split(at.x)
        self.rows.insert(at.y + 1, tail)

    def delete(self, at: Position) -> None:
        if at.y >= len(self.rows):
            return
        self.dirty = True
        row = self.rows[at.y]
        if at.x == len(row) and at.y + 1 < len(self.rows):
            row.append(self.rows.pop(at.y + 1))
        else:
            row.delete(at.x)

    # --- Search and highlighting ---
    def find(self, query: str, at: Position, direction: SearchDirection) -> Optional[Position]:
        """Position of the next match of `query` from `at`, without wrapping around."""
        if at.y >= len(self.rows) or not query:
            return None
        x, y = at.x, at.y
        if direction is SearchDirection.FORWARD:
            rows_to_scan = len(self.rows) - at.y
        else:
            rows_to_scan = at.y + 1
        for _ in range(rows_to_scan):
            row = self.rows[y]
            found = row.find(query, x, direction)
            if found is not None:
                return Position(found, y)
            if direction is SearchDirection.FORWARD:
                y += 1
                x = 0
            else:
                if y == 0:
                    break
                y -= 1
                x = len(self.rows[y])
        return None

    def highlight(self, word: Optional[str], until: Optional[int] = None) -> None:
        """Refreshes syntax and match highlighting for rows before `until`."""
        end = len(self.rows) if until is None else min(until, len(self.rows))
        for row in self.rows[:end]:
            row.highlight(self._lexer_alias, word)
