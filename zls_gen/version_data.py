"""
Generates version data files (e.g. `src/data/master.zig`) from the Zig
language reference.
"""
import logging
from typing import Iterable, List, Optional

from zls_gen.config import get_config
from zls_gen.extractor import Builtin, collect_builtin_data
from zls_gen.fetcher import fetch_langref
from zls_gen.file_utils import save_file

logger = logging.getLogger(__name__)

_ESCAPES = {
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
    ord("\\"): "\\\\",
    ord('"'): '\\"',
    ord("'"): "\\'",
}


def zig_escape(text: str) -> str:
    """Escape `text` for use inside a Zig string literal, byte by byte."""
    parts: List[str] = []
    for byte in text.encode("utf-8"):
        if byte in _ESCAPES:
            parts.append(_ESCAPES[byte])
        elif 0x20 <= byte <= 0x7E:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02x}")
    return "".join(parts)


def _render_builtin(builtin: Builtin) -> str:
    lines = [
        "    .{",
        f'        .name = "{zig_escape(builtin.name)}",',
        f'        .signature = "{zig_escape(builtin.signature)}",',
        f'        .snippet = "{zig_escape(builtin.snippet)}",',
        "        .documentation =",
    ]
    for line in builtin.documentation.split("\n"):
        lines.append(f"        \\\\{line.rstrip(' ')}")
    lines.append("        ,")

    if builtin.arguments:
        lines.append("        .arguments = &.{")
        for argument in builtin.arguments:
            lines.append(f'            "{zig_escape(argument)}",')
        lines.append("        },")
    else:
        lines.append("        .arguments = &.{},")

    lines.append("    },")
    return "\n".join(lines) + "\n"


def render_version_data(builtins: Iterable[Builtin], version: str) -> str:
    """
    Render builtin records as a Zig source file.

    Args:
        builtins: Finished builtin records.
        version: The version label the data was generated for.

    Returns:
        str: Zig source declaring `pub const builtins`.
    """
    header = (
        "//! DO NOT EDIT\n"
        "//! If you want to update this file run:\n"
        f"//! `zig build gen -- --generate-version-data {version}` (requires an internet connection)\n"
        "//! GENERATED BY zls_gen\n"
        "\n"
        "const Builtin = struct {\n"
        "    name: []const u8,\n"
        "    signature: []const u8,\n"
        "    snippet: []const u8,\n"
        "    documentation: []const u8,\n"
        "    arguments: []const []const u8,\n"
        "};\n"
        "\n"
        "pub const builtins = [_]Builtin{\n"
    )
    body = "".join(_render_builtin(builtin) for builtin in builtins)
    footer = "};\n\n// DO NOT EDIT\n"
    return header + body + footer


def generate_version_data_file(version: str, path: str, langref: Optional[str] = None) -> List[Builtin]:
    """
    Extract builtins for `version` and write the data file to `path`.

    Args:
        version: Zig version label.
        path: Output file path.
        langref: Document text; downloaded when not given.

    Returns:
        The builtins that were written.
    """
    if langref is None:
        langref = fetch_langref(version)

    builtins = collect_builtin_data(langref, version, get_config().doc_root)
    save_file(path, render_version_data(builtins, version))
    logger.info(f"📝 Wrote {len(builtins)} builtins for {version} to {path}")
    return builtins
