"""Unit tests for builtin extraction from langref documents."""

import dataclasses

import pytest

from zls_gen.exceptions import DocumentStructureError
from zls_gen.extractor import Builtin, BuiltinExtractor, RawBuiltin, collect_builtin_data, finalize_builtin

SECTION_OPEN = "{#header_open|Builtin Functions|2col#}\n"


def builtin_entry(name, signature, body):
    return (
        f"{{#header_open|{name}#}}\n"
        f"<pre>{{#syntax#}}{signature}{{#endsyntax#}}</pre>\n"
        f"{body}\n"
        "{#header_close#}\n"
    )


def section(*entries):
    return SECTION_OPEN + "".join(entries) + "{#header_close#}\n"


class TestSampleDocument:
    """Test extraction over a trimmed-down langref."""

    @pytest.fixture
    def builtins(self, langref_sample):
        return {builtin.name: builtin for builtin in collect_builtin_data(langref_sample, "master")}

    def test_finds_every_builtin_in_order(self, langref_sample):
        """Should return the builtins of the section only, in document order"""
        names = [builtin.name for builtin in collect_builtin_data(langref_sample, "master")]
        assert names == ["@addWithOverflow", "@as", "@call", "@cImport"]

    def test_signature_and_arguments(self, builtins):
        """Signature is kept verbatim and split into arguments"""
        builtin = builtins["@addWithOverflow"]
        assert builtin.signature == "@addWithOverflow(comptime T: type, a: T, b: T, result: *T) bool"
        assert builtin.arguments == ("comptime T: type", "a: T", "b: T", "result: *T")
        assert builtin.snippet == (
            "@addWithOverflow(${1:comptime T: type}, ${2:a: T}, ${3:b: T}, ${4:result: *T})"
        )

    def test_inline_syntax_in_documentation(self, builtins):
        """Inline syntax fragments become code spans and the paragraph is folded"""
        assert builtins["@addWithOverflow"].documentation == (
            "Performs `result.* = a + b`. If overflow or underflow occurs, "
            "stores the overflowed bits in `result` and returns `true`."
        )

    def test_see_also_is_skipped(self, builtins):
        """Directives without a handler leave no trace"""
        builtin = builtins["@as"]
        assert builtin.documentation == (
            "Performs **Type Coercion** . This cast is allowed when the conversion is unambiguous and safe."
        )
        assert builtin.arguments == ("comptime T: type", "expression")

    def test_code_block_link_and_list(self, builtins):
        """Code samples are fenced, links resolved and list items bulleted"""
        documentation = builtins["@call"].documentation
        assert "```zig\nconst expect = @import(\"std\").testing.expect;\ntest" in documentation
        assert "[CallOptions](https://ziglang.org/documentation/master/#call)" in documentation
        assert " - `.auto` - Equivalent to a normal function call." in documentation
        assert " - `.never_inline` - Prevents the call from being inlined." in documentation
        assert len(builtins["@call"].arguments) == 3

    def test_syntax_block(self, builtins):
        """syntax_block content is fenced with its language"""
        builtin = builtins["@cImport"]
        assert builtin.arguments == ("expression",)
        assert '    @cInclude("stdio.h");' in builtin.documentation
        assert "```zig" in builtin.documentation

    def test_no_trailing_whitespace(self, builtins):
        """Documentation lines carry no trailing spaces and no outer blank lines"""
        for builtin in builtins.values():
            assert not builtin.documentation.startswith("\n")
            assert not builtin.documentation.endswith("\n")
            for line in builtin.documentation.split("\n"):
                assert line == line.rstrip(" ")

    def test_arguments_match_snippet_placeholders(self, builtins):
        """Every argument has exactly one snippet placeholder"""
        for builtin in builtins.values():
            assert builtin.snippet.count("${") == len(builtin.arguments)
            for i, argument in enumerate(builtin.arguments, start=1):
                assert f"${{{i}:{argument}}}" in builtin.snippet

    def test_version_in_links(self, langref_sample):
        """Links point at the requested version and documentation root"""
        builtins = collect_builtin_data(langref_sample, "0.10.1", "https://docs.example.org/")
        call = next(builtin for builtin in builtins if builtin.name == "@call")
        assert "[CallOptions](https://docs.example.org/0.10.1/#call)" in call.documentation


class TestTermination:
    """Test where extraction starts and stops."""

    def test_single_entry(self, minimal_langref):
        """One nested entry yields exactly one record"""
        builtins = collect_builtin_data(minimal_langref, "master")
        assert builtins == [
            Builtin(
                name="@foo",
                signature="@foo(a: u8) void",
                snippet="@foo(${1:a: u8})",
                documentation="Does foo.",
                arguments=("a: u8",),
            )
        ]

    def test_stops_after_section_close(self, minimal_langref):
        """Content after the section is never read"""
        document = minimal_langref + "{#header_open|@bar#}\n{#broken"
        assert [builtin.name for builtin in collect_builtin_data(document, "master")] == ["@foo"]

    def test_empty_section(self):
        """A section without entries yields no records"""
        assert collect_builtin_data(section(), "master") == []

    def test_intro_link_discarded(self):
        """Fragments in the section introduction belong to no builtin"""
        document = section(
            "<p>See {#link|Comptime#}.</p>\n",
            builtin_entry("@foo", "@foo() void", "<p>Foo.</p>"),
        )
        assert collect_builtin_data(document, "master")[0].documentation == "Foo."

    def test_headers_before_section_ignored(self):
        """Headers before the builtin section do not count towards depth"""
        document = "{#header_open|Intro#}\n{#header_close#}\n" + section(
            builtin_entry("@foo", "@foo() void", "<p>Foo.</p>")
        )
        assert [builtin.name for builtin in collect_builtin_data(document, "master")] == ["@foo"]

    def test_sub_section_inside_builtin(self):
        """A header inside a builtin body only nests, it does not start a record"""
        body = "<p>Foo.</p>\n{#header_open|Sub#}\n<p>Sub.</p>\n{#header_close#}"
        document = section(
            builtin_entry("@foo", "@foo() void", body),
            builtin_entry("@bar", "@bar() void", "<p>Bar.</p>"),
        )
        builtins = collect_builtin_data(document, "master")
        assert [builtin.name for builtin in builtins] == ["@foo", "@bar"]
        assert builtins[0].documentation == "Foo.\n\nSub."
        assert builtins[1].documentation == "Bar."

    def test_custom_anchor(self):
        """The section title to look for is configurable"""
        document = "{#header_open|Other#}\n" + builtin_entry("@foo", "@foo() void", "<p>Foo.</p>") + "{#header_close#}\n"
        raw = BuiltinExtractor(document, "master", anchor="Other").extract()
        assert [builtin.name for builtin in raw] == ["@foo"]


class TestDirectives:
    """Test individual directive handling."""

    def test_link_anchor_uses_hyphens(self):
        """Spaces in link targets become hyphens"""
        document = section(builtin_entry("@foo", "@foo() void", "<p>See {#link|Type Coercion#}.</p>"))
        builtin = collect_builtin_data(document, "master")[0]
        assert builtin.documentation == "See [Type Coercion](https://ziglang.org/documentation/master/#Type-Coercion)."

    def test_link_with_explicit_target(self):
        """The optional second argument is the link target"""
        document = section(builtin_entry("@foo", "@foo() void", "<p>{#link|here|@This#}</p>"))
        builtin = collect_builtin_data(document, "master")[0]
        assert builtin.documentation == "[here](https://ziglang.org/documentation/master/#This)"

    def test_code_begin_with_leading_directive(self):
        """Directives before the code are skipped, the code before code_end is kept"""
        body = "{#code_begin|exe|hello#}\n{#link_libc#}\nconst x = 1;\nconst y = 2;\n{#code_end#}"
        builtin = collect_builtin_data(section(builtin_entry("@foo", "@foo() void", body)), "master")[0]
        assert builtin.documentation == "```zig\nconst x = 1;\nconst y = 2;\n```"

    def test_code_begin_without_name(self):
        """code_begin accepts a missing second argument"""
        body = "{#code_begin|syntax#}\nx\n{#code_end#}"
        builtin = collect_builtin_data(section(builtin_entry("@foo", "@foo() void", body)), "master")[0]
        assert builtin.documentation == "`x`"

    def test_multiline_signature(self):
        """Line breaks are removed from signatures"""
        document = section(builtin_entry("@foo", "@foo(\n    a: u8,\n    b: u8,\n) void", "<p>Foo.</p>"))
        builtin = collect_builtin_data(document, "master")[0]
        assert "\n" not in builtin.signature
        assert builtin.arguments == ("a: u8", "b: u8")
        assert builtin.snippet == "@foo(${1:a: u8}, ${2:b: u8})"


class TestRawBuiltins:
    """Test the intermediate records."""

    def test_raw_documentation_starts_after_signature(self, minimal_langref):
        """The raw body starts with the `</pre>` closing the signature"""
        raw = BuiltinExtractor(minimal_langref, "master").extract()
        assert len(raw) == 1
        assert raw[0].name == "@foo"
        assert raw[0].signature == "@foo(a: u8) void"
        assert raw[0].html.startswith("</pre>")

    def test_finalize_without_pre(self):
        """finalize_builtin renders bodies that do not start with `</pre>`"""
        raw = RawBuiltin(name="@foo", signature="@foo(a: u8) void", documentation=["<p>Foo</p>"])
        assert finalize_builtin(raw).documentation == "Foo"

    def test_finalize_call_like_first_argument(self):
        """Arguments are split from the text after the callee's parenthesis"""
        raw = RawBuiltin(name="@foo", signature="@foo(f(u8) void, x: u8) void", documentation=["<p>Foo</p>"])
        builtin = finalize_builtin(raw)
        assert builtin.arguments == ("f(u8) void", "x: u8")
        assert builtin.snippet == "@foo(${1:f(u8) void}, ${2:x: u8})"

    def test_builtin_is_frozen(self, minimal_langref):
        """Final records are immutable"""
        builtin = collect_builtin_data(minimal_langref, "master")[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            builtin.name = "@bar"


class TestMalformedDocuments:
    """Test documents that break the directive grammar."""

    def test_wrong_end_syntax(self):
        """A syntax fragment must be closed by endsyntax"""
        document = SECTION_OPEN + "{#header_open|@foo#}\n<pre>{#syntax#}@foo() void{#end#}</pre>\n"
        with pytest.raises(DocumentStructureError):
            collect_builtin_data(document, "master")

    def test_missing_section(self):
        """A document without the builtin section is rejected"""
        with pytest.raises(DocumentStructureError):
            collect_builtin_data("{#header_open|Intro#}\n<p>x</p>\n{#header_close#}\n", "master")

    def test_unclosed_section(self, minimal_langref):
        """A section that is never closed is rejected"""
        document = minimal_langref[:minimal_langref.rindex("{#header_close#}")]
        with pytest.raises(DocumentStructureError):
            collect_builtin_data(document, "master")

    def test_truncated_directive(self):
        """A document ending inside a directive is rejected"""
        with pytest.raises(DocumentStructureError):
            collect_builtin_data(SECTION_OPEN + "{#see_also|x", "master")
