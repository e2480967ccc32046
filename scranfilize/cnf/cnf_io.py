"""
DIMACS CNF input and output.

The header is parsed character by character and the clause body is scanned
in runs, both keeping a line counter so that every diagnostic can name the
exact line it stopped on. Compressed inputs are decompressed before
the parser sees them; it only ever reads plain DIMACS bytes.
"""
import bz2
import gzip
import io
import lzma
import os
import re
import subprocess
import sys
import zlib
from contextlib import contextmanager
from typing import BinaryIO, Iterable, Iterator, List, Optional, Tuple

from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.errors import AllocationError, ParseError, StorageError
from scranfilize.core.logging import get_logger
from scranfilize.core.serialization import atomic_write_text
from scranfilize.core.types import INT_MAX

logger = get_logger(__name__)

EOF_CHAR = ""
DIGITS = "0123456789"
SPACES = " \t\r\n"
SPACE_RUN = re.compile(r"[ \t\r\n]*")
LITERAL = re.compile(r"(-?)([0-9]*)")


def _is_printable(ch: str) -> bool:
    return " " <= ch <= "~"


class DimacsParser:
    """
    Parses DIMACS CNF text into a CnfDocument.

    Only comment lines may precede the header, which must read exactly
    `p cnf <vars> <clauses>` with single spaces. In the body, comments may
    start wherever a token could. Every error raises ParseError with the
    current line number.
    """

    def __init__(self, text: str, path: str = "<string>"):
        self.text = text
        self.path = path
        self.pos = 0
        self.lineno = 1

    def _next(self) -> str:
        if self.pos >= len(self.text):
            return EOF_CHAR
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.lineno += 1
        return ch

    def _error(self, cause: str, lineno: Optional[int] = None) -> None:
        raise ParseError(self.path, self.lineno if lineno is None else lineno, cause)

    def _unexpected(self, ch: str, suffix: str = "") -> None:
        if _is_printable(ch):
            self._error(f"unexpected character '{ch}'{suffix}")
        self._error(f"unexpected character{suffix} (code '{ord(ch)}')")

    def _parse_unsigned(self, ch: str, what: str) -> Tuple[int, str]:
        """Accumulates decimal digits starting at `ch`, guarding against overflow."""
        res = DIGITS.index(ch)
        while True:
            ch = self._next()
            if ch == EOF_CHAR or ch not in DIGITS:
                return res, ch
            if INT_MAX // 10 < res:
                self._error(f"{what} way too large")
            res *= 10
            digit = DIGITS.index(ch)
            if INT_MAX - digit < res:
                self._error(f"{what} too large")
            res += digit

    def _parse_header(self) -> Tuple[int, int]:
        while True:
            ch = self._next()
            if ch == EOF_CHAR:
                self._error("unexpected end-of-file before header")
            if ch == "p":
                break
            if ch == "c":
                ch = self._next()
                while ch != "\n":
                    if ch == EOF_CHAR:
                        self._error("unexpected end-of-file in header comment")
                    ch = self._next()
                continue
            self._unexpected(ch)

        for expected in " cnf ":
            if self._next() != expected:
                self._error("invalid DIMACS header")

        ch = self._next()
        if ch == EOF_CHAR or ch not in DIGITS:
            self._error("expected digit after 'p cnf '")
        max_var, ch = self._parse_unsigned(ch, "variable number")

        if ch != " ":
            self._error("expected space after variable number")

        ch = self._next()
        if ch == EOF_CHAR or ch not in DIGITS:
            self._error(f"expected digit after 'p cnf {max_var}'")
        specified_clauses, ch = self._parse_unsigned(ch, "clause number")

        logger.info(f"found 'p cnf {max_var} {specified_clauses}' header")

        while ch != "\n":
            if ch == EOF_CHAR or ch not in SPACES:
                self._error("expected white space before new line")
            ch = self._next()

        return max_var, specified_clauses

    def _decimal(self, digits: str, what: str) -> int:
        """Same overflow guard as _parse_unsigned, for an already scanned digit run."""
        res = 0
        for i, ch in enumerate(digits):
            digit = DIGITS.index(ch)
            if i and INT_MAX // 10 < res:
                self._error(f"{what} way too large")
            res *= 10
            if INT_MAX - digit < res:
                self._error(f"{what} too large")
            res += digit
        return res

    def _parse_clauses(self, max_var: int, specified_clauses: int) -> List[List[int]]:
        # Scans whole runs of blanks, comments and digits with regular
        # expressions; self.lineno only advances over blank runs.
        text = self.text
        size = len(text)
        clauses: List[List[int]] = []
        literals: List[int] = []

        while True:
            end = SPACE_RUN.match(text, self.pos).end()
            self.lineno += text.count("\n", self.pos, end)
            self.pos = end

            if end >= size:
                if literals:
                    self._error("terminating zero missing")
                missing = specified_clauses - len(clauses)
                if missing > 0:
                    self._error(f"{missing} clause{'' if missing == 1 else 's'} missing")
                return clauses

            if text[end] == "c":
                newline = text.find("\n", end)
                self.pos = size if newline < 0 else newline
                continue

            start_line = self.lineno
            match = LITERAL.match(text, end)
            sign, digits = match.group(1), match.group(2)
            if not digits:
                self._error("expected digit after '-'" if sign else "expected digit or '-'")
            if sign and digits[0] == "0":
                self._error("expected non-zero digit after '-'")

            idx = int(digits) if len(digits) < 10 else self._decimal(digits, "variable")
            if idx > max_var:
                self._error("maximum variable index exceeded", start_line)

            end = match.end()
            if end < size and text[end] not in SPACES and text[end] != "c":
                self._unexpected(text[end], " after literal")
            if len(clauses) == specified_clauses:
                self._error("too many clauses", start_line)
            self.pos = end

            if idx:
                literals.append(-idx if sign else idx)
            else:
                clauses.append(literals)
                literals = []

    def parse(self) -> CnfDocument:
        try:
            max_var, specified_clauses = self._parse_header()
            clauses = self._parse_clauses(max_var, specified_clauses)
        except MemoryError as e:
            raise AllocationError(f"out-of-memory while parsing '{self.path}'") from e
        # Every literal was range checked while scanning
        return CnfDocument.model_construct(num_vars=max_var, clauses=clauses)


def parse_dimacs_string(content: str, path: str = "<string>") -> CnfDocument:
    """Parses DIMACS text held in memory."""
    return DimacsParser(content, path).parse()


def parse_dimacs_stream(stream: BinaryIO, path: str) -> CnfDocument:
    """Parses a byte stream of (already decompressed) DIMACS."""
    try:
        data = stream.read()
    except (OSError, EOFError, lzma.LZMAError, zlib.error) as e:
        raise StorageError(f"can not read original CNF '{path}': {e}") from e
    # latin-1 maps every byte to one character, keeping diagnostics byte exact
    return DimacsParser(data.decode("latin-1"), path).parse()


def _has_suffix(path: str, suffix: str) -> bool:
    return len(path) > len(suffix) and path.endswith(suffix)


def _run_7z(path: str) -> bytes:
    cmd = ["7z", "x", "-so", path]
    try:
        result = subprocess.run(cmd, capture_output=True)
    except FileNotFoundError as e:
        raise StorageError(f"can not read original CNF '{path}': '7z' executable not found") from e
    if result.returncode != 0:
        raise StorageError(f"can not read original CNF '{path}': '7z' exited with status {result.returncode}")
    return result.stdout


@contextmanager
def open_cnf_source(path: Optional[str] = None) -> Iterator[BinaryIO]:
    """
    Yields a binary stream of DIMACS bytes for `path`.

    `None` means standard input. The compression format is chosen by file
    suffix: `.xz`/`.lzma`, `.bz2`, `.gz` and `.7z` (through the external
    `7z` program).
    """
    if path is None:
        yield sys.stdin.buffer
        return

    path = str(path)
    if not os.path.exists(path):
        raise StorageError(f"file '{path}' does not exist")

    if _has_suffix(path, ".7z"):
        yield io.BytesIO(_run_7z(path))
        return

    if _has_suffix(path, ".xz") or _has_suffix(path, ".lzma"):
        opener = lzma.open
    elif _has_suffix(path, ".bz2"):
        opener = bz2.open
    elif _has_suffix(path, ".gz"):
        opener = gzip.open
    else:
        opener = open

    try:
        stream = opener(path, "rb")
    except OSError as e:
        raise StorageError(f"can not read original CNF '{path}'") from e
    with stream:
        yield stream


def read_dimacs(path: Optional[str] = None) -> CnfDocument:
    """Reads and parses a (possibly compressed) DIMACS file, or stdin for `None`."""
    display = "<stdin>" if path is None else str(path)
    with open_cnf_source(path) as stream:
        logger.info(f"reading original CNF from '{display}'")
        doc = parse_dimacs_stream(stream, display)
    logger.info(f"parsed {doc.num_clauses} clauses over {doc.num_vars} variables")
    return doc


def check_output_path(path: Optional[str], force: bool = False) -> None:
    """Refuses an existing destination unless `force` is set."""
    if path is None or not os.path.exists(path):
        return
    if not force:
        raise StorageError(f"path '{path}' exists (use '--force')")
    logger.info(f"forced to overwrite existing '{path}'")


def write_dimacs(doc: CnfDocument,
                 path: Optional[str] = None,
                 comments: Iterable[str] = (),
                 force: bool = False) -> None:
    """
    Writes `doc` as DIMACS to `path`, or stdout for `None`.

    The whole text is rendered before anything is written and files are
    replaced atomically, so a failure leaves no partial output behind.
    """
    check_output_path(path, force)
    text = doc.to_dimacs(comments)

    if path is None:
        logger.info("writing scrambled CNF to '<stdout>'")
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    logger.info(f"writing scrambled CNF to '{path}'")
    try:
        atomic_write_text(path, text)
    except OSError as e:
        raise StorageError(f"can not write scrambled CNF '{path}'") from e
