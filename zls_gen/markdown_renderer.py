"""
Converts the HTML used in builtin documentation into markdown.

Only the tags the langref actually uses are supported:
- `<p>`
- `<pre>`
- `<em>`
- `<ul>` and `<li>`
- `<a>`
- `<code>`

This is a small hand-written scanner rather than an HTML parser: a closing
tag is located by searching forward, tolerating one nested element with the
same name (enough for a `<ul>` inside a `<ul>`).
"""
from typing import List

from zls_gen.config import CODE_LANGUAGE
from zls_gen.exceptions import InvalidTagError, MissingEndTagError, UnsupportedTagError

SUPPORTED_TAGS = ("pre", "p", "em", "ul", "li", "a", "code")

WHITESPACE = " \t\n\r\x0b\x0c"


def write_markdown_code(content: str, source_type: str = CODE_LANGUAGE) -> str:
    """
    Format a code fragment as markdown.

    single line: `` `{content}` ``

    multi line:
        \\`\\`\\`{source_type}
        {content}
        \\`\\`\\`
    """
    trimmed = content.strip(" \n")
    if "\n" not in trimmed:
        return f"`{trimmed}`"

    # empty lines are dropped
    lines = "".join(f"\n{line}" for line in trimmed.split("\n") if line)
    return f"\n```{source_type}{lines}\n```"


class MarkdownRenderer:
    """
    Recursive renderer for the supported HTML subset.

    Block mode keeps the text's own line breaks; single-line mode (used for
    paragraphs and list items) folds wrapped lines into one, separated by
    single spaces.
    """

    def __init__(self, code_language: str = CODE_LANGUAGE):
        self.code_language = code_language
        self._out: List[str] = []

    def render(self, html: str) -> str:
        """
        Render an HTML fragment in block mode.

        Raises:
            UnsupportedTagError: For a tag outside `SUPPORTED_TAGS`.
            InvalidTagError: For a tag without `>` or an `<a>` without `href`.
            MissingEndTagError: When a closing tag cannot be found.
        """
        self._out = []
        self._render(html, single_line=False, depth=0)
        return "".join(self._out)

    def _write(self, text: str) -> None:
        if text:
            self._out.append(text)

    def _ends_with(self, suffix: str) -> bool:
        tail = "".join(self._out[-len(suffix):])
        return tail.endswith(suffix)

    def _ensure_newline(self) -> None:
        if self._out and not self._ends_with("\n"):
            self._out.append("\n")

    def _write_line(self, text: str, single_line: bool) -> None:
        trimmed = text.strip(WHITESPACE)
        if not trimmed:
            return

        if single_line:
            for line in trimmed.split("\n"):
                self._write(f"{line.strip(WHITESPACE)} ")
        else:
            self._write(trimmed)
            self._write("\n")

    def _render(self, html: str, single_line: bool, depth: int) -> None:
        index = 0
        search = 0
        while True:
            tag_start = html.find("<", search)
            if tag_start == -1:
                break

            name_end = tag_start + 1
            while name_end < len(html) and html[name_end].isalnum():
                name_end += 1
            tag_name = html[tag_start + 1:name_end]

            if not tag_name or not tag_name[0].isalpha():
                # closing tag or a literal `<`
                search = tag_start + 1
                continue
            if tag_name not in SUPPORTED_TAGS:
                raise UnsupportedTagError(f"unsupported tag <{tag_name}> at offset {tag_start}")

            self._write_line(html[index:tag_start], single_line)

            opening_tag = f"<{tag_name}>"
            closing_tag = f"</{tag_name}>"

            tag_close = html.find(">", name_end)
            if tag_close == -1:
                raise InvalidTagError(f"<{tag_name} at offset {tag_start} is missing '>'")
            content_start = tag_close + 1
            content_end = self._find_end_tag(html, content_start, opening_tag, closing_tag)

            content = html[content_start:content_end]
            index = min(len(html), content_end + len(closing_tag))
            search = index

            self._render_tag(tag_name, html[name_end:tag_close], content, depth)

        self._write_line(html[index:], single_line)

    @staticmethod
    def _find_end_tag(html: str, content_start: int, opening_tag: str, closing_tag: str) -> int:
        index = content_start
        while True:
            end = html.find("<", index)
            if end == -1:
                raise MissingEndTagError(f"missing {closing_tag} for tag opened before offset {content_start}")
            if html.startswith(closing_tag, end):
                return end
            if html.startswith(opening_tag, end):
                nested_end = html.find(closing_tag, end + len(opening_tag))
                if nested_end == -1:
                    raise MissingEndTagError(f"missing {closing_tag} for nested tag at offset {end}")
                index = nested_end + len(closing_tag)
                continue
            index = end + 1

    def _render_tag(self, tag_name: str, attributes: str, content: str, depth: int) -> None:
        if tag_name == "p":
            if self._out and not self._ends_with("\n\n"):
                self._ensure_newline()
                self._write("\n")
            self._render(content, single_line=True, depth=depth)
            self._ensure_newline()
        elif tag_name == "pre":
            self._render(content, single_line=False, depth=depth)
        elif tag_name == "em":
            self._write(f"**{content}** ")
        elif tag_name == "ul":
            self._ensure_newline()
            self._render(content, single_line=False, depth=depth + 1)
        elif tag_name == "li":
            self._ensure_newline()
            self._write(" " * (1 + max(depth - 1, 0) * 2))
            self._write("- ")
            self._render(content, single_line=True, depth=depth)
            self._ensure_newline()
        elif tag_name == "a":
            href = attributes.lstrip(" ")
            if not (href.startswith('href="') and href.endswith('"') and len(href) > len('href="')):
                raise InvalidTagError(f"<a> tag without href attribute: {attributes!r}")
            url = href[len('href="'):-1]
            self._write(f"[{content}]({url.lstrip('@')})")
        elif tag_name == "code":
            self._write(write_markdown_code(content, self.code_language))


def render_markdown(html: str, code_language: str = CODE_LANGUAGE) -> str:
    """Convert an HTML fragment to markdown (block mode)."""
    return MarkdownRenderer(code_language).render(html)
