"""
Tokenizer for the `{#tag|arg#}` markup used by `langref.html.in`.

The tokenizer never copies text: every token is a `[start, end)` range into
the input buffer. Concatenating the ranges of all tokens up to `EOF`
reproduces the buffer.

Example:
    ```python
    tokenizer = Tokenizer("{#header_open|Foo#}")
    for token in tokenizer:
        print(token.kind, tokenizer.text(token))
    ```
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class TokenKind(Enum):
    INVALID = "Invalid"
    CONTENT = "Content"
    BRACKET_OPEN = "BracketOpen"
    TAG_CONTENT = "TagContent"
    SEPARATOR = "Separator"
    BRACKET_CLOSE = "BracketClose"
    EOF = "Eof"


class _State(Enum):
    START = "start"
    LBRACKET = "lbracket"
    HASH = "hash"
    TAG_NAME = "tag_name"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int


class Tokenizer:
    """
    Splits a langref buffer into directive tokens.

    A lone `{` that is not followed by `#` is plain content. When content is
    already pending and a `{#` is found, the cursor is rewound so the next
    call starts at the bracket.
    """

    def __init__(self, buffer: str):
        self.buffer = buffer
        self.index = 0
        self._state = _State.START

    def text(self, token: Token) -> str:
        """Return the slice of the buffer covered by `token`."""
        return self.buffer[token.start:token.end]

    def next(self) -> Token:
        """
        Produce the next token.

        Returns:
            Token: `EOF` once the buffer is exhausted outside a tag, `INVALID`
            (exactly once) if it ends inside an unterminated tag.
        """
        kind = TokenKind.EOF
        start = self.index
        buffer = self.buffer

        while self.index < len(buffer):
            c = buffer[self.index]
            state = self._state

            if state is _State.START:
                if c == "{":
                    self._state = _State.LBRACKET
                else:
                    kind = TokenKind.CONTENT

            elif state is _State.LBRACKET:
                if c == "#":
                    if kind is not TokenKind.EOF:
                        # emit the pending content first, resume at the `{`
                        self.index -= 1
                        self._state = _State.START
                        break
                    kind = TokenKind.BRACKET_OPEN
                    self.index += 1
                    self._state = _State.TAG_NAME
                    break
                kind = TokenKind.CONTENT
                self._state = _State.START

            elif state is _State.TAG_NAME:
                if c == "|":
                    if kind is not TokenKind.EOF:
                        break
                    kind = TokenKind.SEPARATOR
                    self.index += 1
                    break
                if c == "#":
                    self._state = _State.HASH
                else:
                    kind = TokenKind.TAG_CONTENT

            elif state is _State.HASH:
                if c == "}":
                    if kind is not TokenKind.EOF:
                        self.index -= 1
                        self._state = _State.TAG_NAME
                        break
                    kind = TokenKind.BRACKET_CLOSE
                    self.index += 1
                    self._state = _State.START
                    break
                kind = TokenKind.TAG_CONTENT
                self._state = _State.TAG_NAME

            else:
                raise RuntimeError("tokenizer advanced past end of buffer")

            self.index += 1
        else:
            if self._state in (_State.TAG_NAME, _State.HASH):
                kind = TokenKind.INVALID
            elif self._state is _State.LBRACKET:
                kind = TokenKind.CONTENT
            self._state = _State.EOF

        return Token(kind, start, self.index)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the terminal `EOF`/`INVALID` token."""
        while True:
            token = self.next()
            yield token
            if token.kind in (TokenKind.EOF, TokenKind.INVALID):
                return
