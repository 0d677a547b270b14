"""
Generation of configuration artifacts from the option catalogue (`config.json`).

From one list of options this module renders:
1. `Config.zig`, the Zig struct holding every option with its default
2. `schema.json`, a JSON schema for editor validation
3. the options table inside `README.md`
4. the `configuration` properties for the VS Code extension
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from zls_gen.config import README_END_INDICATOR, README_START_INDICATOR
from zls_gen.exceptions import UnsupportedTypeError
from zls_gen.file_utils import replace_section, save_file

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\n\r\x0b\x0c"


@dataclass
class ConfigOption:
    # Name of config option
    name: str
    # used in doc comments & schema.json
    description: str
    # zig type in string form, e.g. "u32", "[]const u8", "?usize"
    type: str
    # used in Config.zig as the default initializer
    default: str


def load_config_options(path: str) -> List[ConfigOption]:
    """
    Load the option catalogue.

    Args:
        path: Path to a JSON file of the form `{"options": [{...}, ...]}`.

    Returns:
        List of ConfigOption in file order.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    options = [
        ConfigOption(
            name=entry["name"],
            description=entry["description"],
            type=entry["type"],
            default=entry["default"],
        )
        for entry in data["options"]
    ]
    logger.info(f"Loaded {len(options)} config options from {path}")
    return options


def zig_type_to_json_type(zig_type: str) -> str:
    """Map a Zig option type to its JSON schema type."""
    if zig_type == "?[]const u8":
        return "string"
    if zig_type == "bool":
        return "boolean"
    if zig_type == "usize":
        return "integer"
    raise UnsupportedTypeError(f"no JSON type for zig type {zig_type!r}")


def render_config_file(options: List[ConfigOption]) -> str:
    parts = [
        "//! DO NOT EDIT\n"
        "//! Configuration options for zls.\n"
        "//! If you want to add a config option edit\n"
        "//! src/config_gen/config.json and run `zig build gen`\n"
        "//! GENERATED BY zls_gen\n"
    ]
    for option in options:
        parts.append(
            f"\n/// {option.description.strip(_WHITESPACE)}\n"
            f"{option.name.strip(_WHITESPACE)}: {option.type.strip(_WHITESPACE)} = {option.default.strip(_WHITESPACE)},\n"
        )
    parts.append("\n// DO NOT EDIT\n")
    return "".join(parts)


def render_schema_file(options: List[ConfigOption]) -> str:
    properties = {
        option.name: {
            "description": option.description,
            "type": zig_type_to_json_type(option.type),
            "default": option.default,
        }
        for option in options
    }
    schema = {
        "$schema": "http://json-schema.org/schema",
        "title": "ZLS Config",
        "description": "Configuration file for the zig language server (ZLS)",
        "type": "object",
        "properties": properties,
    }
    return json.dumps(schema, indent=4) + "\n"


def render_readme_table(options: List[ConfigOption]) -> str:
    rows = [
        "\n| Option | Type | Default value | What it Does |\n",
        "| --- | --- | --- | --- |\n",
    ]
    for option in options:
        rows.append(
            f"| `{option.name.strip(_WHITESPACE)}` | `{option.type.strip(_WHITESPACE)}` "
            f"| `{option.default.strip(_WHITESPACE)}` | {option.description.strip(_WHITESPACE)} |\n"
        )
    return "".join(rows)


def update_readme(readme: str, options: List[ConfigOption]) -> str:
    """
    Replace the auto-generated options table in a README.

    Raises:
        ReadmeSectionNotFoundError: If the section markers are missing.
    """
    return replace_section(readme, README_START_INDICATOR, README_END_INDICATOR, render_readme_table(options))


def render_vscode_config(options: List[ConfigOption]) -> str:
    """
    Render the `configuration.properties` object for the VS Code extension.

    Optional fields (`enum`, `format`, `default`) are only emitted when set.
    """
    configuration: Dict[str, Dict[str, Any]] = {
        "trace.server": {
            "scope": "window",
            "type": "string",
            "description": "Traces the communication between VS Code and the language server.",
            "enum": ["off", "message", "verbose"],
            "default": "off",
        },
        "check_for_update": {
            "scope": "resource",
            "type": "boolean",
            "description": "Whether to automatically check for new updates",
            "default": True,
        },
        "path": {
            "scope": "resource",
            "type": "string",
            "description": "Path to `zls` executable. Example: `C:/zls/zig-cache/bin/zls.exe`.",
            "format": "path",
        },
    }

    for option in options:
        entry: Dict[str, Any] = {
            "scope": "resource",
            "type": zig_type_to_json_type(option.type),
            "description": option.description,
        }
        if "path" in option.name:
            entry["format"] = "path"
        default = json.loads(option.default)
        if default is not None:
            entry["default"] = default
        configuration[f"zls.{option.name}"] = entry

    return json.dumps(configuration, indent=4)


def generate_config_file(options: List[ConfigOption], path: str) -> None:
    save_file(path, render_config_file(options))
    logger.info(f"📝 Wrote {path}")


def generate_schema_file(options: List[ConfigOption], path: str) -> None:
    save_file(path, render_schema_file(options))
    logger.info(f"📝 Wrote {path}")


def update_readme_file(options: List[ConfigOption], path: str) -> None:
    with open(path, "r", encoding="utf-8") as f:
        readme = f.read()
    save_file(path, update_readme(readme, options))
    logger.info(f"📝 Updated options table in {path}")


def generate_vscode_config_file(options: List[ConfigOption], path: str) -> None:
    save_file(path, render_vscode_config(options))
    logger.info(f"📝 Wrote {path}")
