# extractor.py
# Single pass over the source lines, pulls the first [token] out of each line
# and tags it with the byte offset of that line and its length in bytes.

from __future__ import annotations
import logging
from typing import IO, AnyStr, Iterable, Iterator, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

OPEN = b"["
CLOSE = b"]"

# lossless: undecodable bytes survive as lone surrogates
DECODE_ERRORS = "surrogateescape"


class TokenRecord(NamedTuple):
    text: str
    offset: int
    line_length: int


def find_token(line: AnyStr) -> Optional[AnyStr]:
    """
    Text between the first '[' and the first ']' after it.
    None when either bracket is missing or nothing sits between them.
    Works on str and bytes alike.
    """
    if isinstance(line, bytes):
        op, cl = OPEN, CLOSE
    else:
        op, cl = "[", "]"
    start = line.find(op)
    if start == -1:
        return None
    end = line.find(cl, start + 1)
    if end == -1 or end <= start + 1:
        return None
    return line[start + 1:end]


def iter_lines(stream: IO[AnyStr]) -> Iterator[AnyStr]:
    """
    Lines of an open stream without their '\\n' terminator.
    Binary streams split on b'\\n' only, so a lone '\\r' stays inside its line.
    """
    for raw in stream:
        nl = b"\n" if isinstance(raw, bytes) else "\n"
        yield raw[:-1] if raw.endswith(nl) else raw


def extract_records(lines: Iterable[Union[bytes, str]], encoding: str = "utf-8") -> Iterator[TokenRecord]:
    """
    Yield one TokenRecord per line that carries a bracket token.
    Offsets and lengths count bytes; str lines are encoded with `encoding` first.
    Every line advances the offset by its length plus one for the newline,
    whether or not it produced a token.
    """
    offset = 0
    for lineno, line in enumerate(lines, 1):
        raw = line if isinstance(line, bytes) else line.encode(encoding, DECODE_ERRORS)
        tok = find_token(raw)
        if tok is not None:
            yield TokenRecord(tok.decode(encoding, DECODE_ERRORS), offset, len(raw))
        elif OPEN in raw:
            logger.debug("line %d: no usable bracket pair, skipped", lineno)
        offset += len(raw) + 1
