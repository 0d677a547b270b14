"""
Extraction of builtin function documentation from `langref.html.in`.

Parses this section: https://ziglang.org/documentation/master/#Builtin-Functions

Every entry in the section looks like:

    {#header_open|@addrSpaceCast#}
    <pre>{#syntax#}@addrSpaceCast(ptr: anytype) anytype{#endsyntax#}</pre>
    <p>...</p>
    {#header_close#}

The extractor walks the token stream once, collecting the raw signature and
the raw HTML body of every entry, then converts each body to markdown and
derives arguments and a snippet from the signature.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from zls_gen.config import BUILTIN_SECTION_ANCHOR, CODE_LANGUAGE, DEFAULT_DOC_ROOT
from zls_gen.exceptions import DocumentStructureError
from zls_gen.markdown_renderer import render_markdown, write_markdown_code
from zls_gen.signature import split_arguments, to_snippet
from zls_gen.tokenizer import Token, TokenKind, Tokenizer

logger = logging.getLogger(__name__)


@dataclass
class RawBuiltin:
    name: str
    signature: str = ""
    documentation: List[str] = field(default_factory=list)

    def append(self, text: str) -> None:
        self.documentation.append(text)

    @property
    def html(self) -> str:
        return "".join(self.documentation)


@dataclass(frozen=True)
class Builtin:
    name: str
    signature: str
    snippet: str
    documentation: str
    arguments: Tuple[str, ...]


class _State(Enum):
    # looking for {#header_open|Builtin Functions|2col#}
    SEARCHING = "searching"
    # skipping the section introduction
    PREFIX = "prefix"
    # inside a builtin header, before its {#syntax#} signature
    BUILTIN_BEGIN = "builtin_begin"
    # collecting the documentation body
    BUILTIN_CONTENT = "builtin_content"


class BuiltinExtractor:
    """
    Token-driven state machine producing one `RawBuiltin` per entry.

    `depth` counts the `header_open` directives currently open inside the
    builtin section; extraction ends when the section's own `header_close`
    brings it back to zero.
    """

    def __init__(self, langref: str, version: str, doc_root: str = DEFAULT_DOC_ROOT,
                 anchor: str = BUILTIN_SECTION_ANCHOR):
        self.tokenizer = Tokenizer(langref)
        self.version = version
        self.doc_root = doc_root.rstrip("/")
        self.anchor = anchor
        self.state = _State.SEARCHING
        self.depth = 0
        self.builtins: List[RawBuiltin] = []
        self.current: Optional[RawBuiltin] = None

    def extract(self) -> List[RawBuiltin]:
        """
        Run the extraction.

        Returns:
            Raw builtins in document order.

        Raises:
            DocumentStructureError: If the markup deviates from the expected grammar
                or the document ends before the builtin section is closed.
        """
        while True:
            token = self.tokenizer.next()
            if token.kind is TokenKind.CONTENT:
                if self.state is _State.BUILTIN_CONTENT:
                    self.current.append(self.tokenizer.text(token))
            elif token.kind is TokenKind.BRACKET_OPEN:
                if self._handle_directive():
                    break
            else:
                raise self._unexpected(token, "content or a directive")

        logger.info(f"Extracted {len(self.builtins)} builtins")
        return self.builtins

    def _unexpected(self, token: Token, expected: str) -> DocumentStructureError:
        found = token.kind.value
        if token.kind in (TokenKind.CONTENT, TokenKind.TAG_CONTENT):
            found += f" {self.tokenizer.text(token)[:40]!r}"
        return DocumentStructureError(f"expected {expected} at offset {token.start}, found {found}")

    def _expect(self, kind: TokenKind) -> Token:
        token = self.tokenizer.next()
        if token.kind is not kind:
            raise self._unexpected(token, kind.value)
        return token

    def _expect_text(self, kind: TokenKind) -> str:
        return self.tokenizer.text(self._expect(kind))

    def _expect_tag(self, name: str) -> None:
        self._expect(TokenKind.BRACKET_OPEN)
        token = self._expect(TokenKind.TAG_CONTENT)
        if self.tokenizer.text(token) != name:
            raise self._unexpected(token, f"{{#{name}#}}")
        self._expect(TokenKind.BRACKET_CLOSE)

    def _optional_argument(self) -> Optional[str]:
        """Consume `|arg#}` or `#}`, returning `arg` if present."""
        token = self.tokenizer.next()
        if token.kind is TokenKind.BRACKET_CLOSE:
            return None
        if token.kind is not TokenKind.SEPARATOR:
            raise self._unexpected(token, "Separator or BracketClose")
        argument = self._expect_text(TokenKind.TAG_CONTENT)
        self._expect(TokenKind.BRACKET_CLOSE)
        return argument

    def _write(self, markdown: str) -> None:
        # fragments in the section introduction belong to no builtin
        if self.current is not None:
            self.current.append(markdown)

    def _handle_directive(self) -> bool:
        """Process one directive; returns True once the builtin section is closed."""
        tag_name = self._expect_text(TokenKind.TAG_CONTENT)
        searching = self.state is _State.SEARCHING

        if tag_name == "header_open":
            self._header_open()
        elif tag_name == "header_close":
            return self._header_close()
        elif not searching and tag_name == "syntax":
            self._syntax()
        elif not searching and tag_name == "syntax_block":
            self._syntax_block()
        elif not searching and tag_name == "link":
            self._link()
        elif not searching and tag_name == "code_begin":
            self._code_begin()
        else:
            self._skip_directive()
        return False

    def _header_open(self) -> None:
        self._expect(TokenKind.SEPARATOR)
        title = self._expect_text(TokenKind.TAG_CONTENT)

        if self.state is _State.SEARCHING:
            if title == self.anchor:
                logger.debug(f"Found '{self.anchor}' section at offset {self.tokenizer.index}")
                self.state = _State.PREFIX
                self.depth = 0
        elif self.state in (_State.PREFIX, _State.BUILTIN_BEGIN):
            self.state = _State.BUILTIN_BEGIN
            self.current = RawBuiltin(name=title)
            self.builtins.append(self.current)
        else:
            # sub-section inside a builtin body; only depth changes
            logger.debug(f"Nested header '{title}' inside {self.current.name}")

        if self.state is not _State.SEARCHING:
            self.depth += 1

        # remaining header arguments, e.g. `2col`
        while True:
            token = self.tokenizer.next()
            if token.kind is TokenKind.BRACKET_CLOSE:
                break
            if token.kind not in (TokenKind.SEPARATOR, TokenKind.TAG_CONTENT):
                raise self._unexpected(token, "header argument or BracketClose")

    def _header_close(self) -> bool:
        self._expect(TokenKind.BRACKET_CLOSE)

        if self.state is _State.BUILTIN_CONTENT:
            self.state = _State.BUILTIN_BEGIN
        if self.state is not _State.SEARCHING:
            self.depth -= 1
            if self.depth == 0:
                return True
        return False

    def _syntax(self) -> None:
        self._expect(TokenKind.BRACKET_CLOSE)
        content = self._expect_text(TokenKind.CONTENT)
        self._expect_tag("endsyntax")

        if self.state is _State.BUILTIN_BEGIN:
            self.current.signature = content
            self.state = _State.BUILTIN_CONTENT
        elif self.state is _State.BUILTIN_CONTENT:
            self._write(write_markdown_code(content, CODE_LANGUAGE))

    def _syntax_block(self) -> None:
        self._expect(TokenKind.SEPARATOR)
        source_type = self._expect_text(TokenKind.TAG_CONTENT)
        self._optional_argument()

        content = self._expect_text(TokenKind.CONTENT)
        self._write(write_markdown_code(content, source_type))
        self._expect_tag("end_syntax_block")

    def _link(self) -> None:
        self._expect(TokenKind.SEPARATOR)
        name = self._expect_text(TokenKind.TAG_CONTENT)
        url_name = self._optional_argument() or name

        anchor = url_name.replace(" ", "-").lstrip("@")
        self._write(f"[{name}]({self.doc_root}/{self.version}/#{anchor})")

    def _code_begin(self) -> None:
        self._expect(TokenKind.SEPARATOR)
        self._expect(TokenKind.TAG_CONTENT)
        self._optional_argument()

        # directives such as {#link_libc#} may precede the code;
        # the code is the content right before {#code_end#}
        while True:
            code = self._expect_text(TokenKind.CONTENT)
            self._expect(TokenKind.BRACKET_OPEN)
            end_tag = self._expect_text(TokenKind.TAG_CONTENT)
            self._skip_directive()
            if end_tag == "code_end":
                self._write(write_markdown_code(code, CODE_LANGUAGE))
                return

    def _skip_directive(self) -> None:
        while True:
            token = self.tokenizer.next()
            if token.kind is TokenKind.BRACKET_CLOSE:
                return
            if token.kind in (TokenKind.EOF, TokenKind.INVALID):
                raise self._unexpected(token, "BracketClose")


def finalize_builtin(raw: RawBuiltin) -> Builtin:
    """
    Convert a raw builtin into its final form.

    The documentation body starts right after the `</pre>` that closes the
    signature block; that leftover tag is dropped before rendering.

    Raises:
        MalformedSignatureError: If the signature has no parameter list.
    """
    signature = raw.signature.replace("\n", "")

    html = raw.html
    if html.startswith("</pre>"):
        html = html[len("</pre>"):]
    markdown = render_markdown(html, CODE_LANGUAGE)
    documentation = "\n".join(line.rstrip(" ") for line in markdown.strip("\n").split("\n"))

    snippet = to_snippet(signature)
    arguments = split_arguments(signature[signature.index("(") + 1:])

    return Builtin(
        name=raw.name,
        signature=signature,
        snippet=snippet,
        documentation=documentation,
        arguments=tuple(arguments),
    )


def collect_builtin_data(langref: str, version: str, doc_root: str = DEFAULT_DOC_ROOT) -> List[Builtin]:
    """
    Extract every builtin documented in a `langref.html.in` buffer.

    Args:
        langref: Full document text.
        version: Version label used when generating links (`master`, `0.10.1`, ...).
        doc_root: Root URL of the online language reference.

    Returns:
        Finished builtin records in document order.
    """
    raw_builtins = BuiltinExtractor(langref, version, doc_root).extract()
    return [finalize_builtin(raw) for raw in raw_builtins]
