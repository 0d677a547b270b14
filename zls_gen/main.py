"""
Main entry point for the ZLS data generator.

Regenerates `Config.zig`, `schema.json` and the README options table from the
option catalogue, and optionally the VS Code configuration and a version data
file extracted from the Zig language reference.
"""
import argparse
import logging
import os
import platform
import re
import sys

from zls_gen.config import DEFAULT_CONFIG_OPTIONS_PATH, get_config, reset_config
from zls_gen.config_options import (
    generate_config_file,
    generate_schema_file,
    generate_vscode_config_file,
    load_config_options,
    update_readme_file,
)
from zls_gen.exceptions import ZlsGenError
from zls_gen.fetcher import read_langref
from zls_gen.logger import setup_logging
from zls_gen.version_data import generate_version_data_file

logger = logging.getLogger(__name__)

SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

VSCODE_REMINDER = (
    "Changing configuration options may also require editing the `package.json` from zls-vscode "
    "at https://github.com/zigtools/zls-vscode/blob/master/package.json\n"
    "You can use `--vscode-config-path /path/to/output/file.json` to generate the new configuration "
    "properties which you can then copy into `package.json`\n"
)


def is_valid_version(version):
    """Return True for `master` or a semantic version such as `0.10.1`."""
    return version == "master" or SEMVER_RE.match(version) is not None


def build_parser():
    parser = argparse.ArgumentParser(
        prog="zls-gen",
        description="Generate ZLS configuration files and builtin data from the Zig language reference",
    )
    parser.add_argument("config_path", help="Path to Config.zig")
    parser.add_argument("schema_path", help="Path to schema.json")
    parser.add_argument("readme_path", help="Path to README.md")
    parser.add_argument("data_path", help="Path to the data directory")
    parser.add_argument("--vscode-config-path", help="Output zls-vscode configurations")
    parser.add_argument("--generate-version-data", metavar="VERSION",
                        help="Output version data file (see src/data/master.zig)")
    parser.add_argument("--generate-version-data-path", metavar="PATH",
                        help="Override default data file path (default: DATA_PATH/VERSION.zig)")
    parser.add_argument("--langref-file", help="Read langref.html.in from this file instead of downloading it")
    parser.add_argument("--config-options", default=DEFAULT_CONFIG_OPTIONS_PATH,
                        help="Path to the config option catalogue (config.json)")
    parser.add_argument("--env-file", help="Load environment variables from this file")
    parser.add_argument("--log-level", help="Logging level (default: ZLS_GEN_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def run(args):
    """
    Execute the generation steps selected by `args`.

    Raises:
        ZlsGenError: On the first failing step.
    """
    options = load_config_options(args.config_options)

    generate_config_file(options, args.config_path)
    generate_schema_file(options, args.schema_path)
    update_readme_file(options, args.readme_path)

    if args.vscode_config_path:
        generate_vscode_config_file(options, args.vscode_config_path)

    if args.generate_version_data:
        version = args.generate_version_data
        path = args.generate_version_data_path or os.path.join(args.data_path, f"{version}.zig")
        langref = read_langref(args.langref_file) if args.langref_file else None
        generate_version_data_file(version, path, langref)


def main(argv=None):
    """
    Main entry point.

    Returns:
        int: Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.generate_version_data and not is_valid_version(args.generate_version_data):
        parser.error(f"'{args.generate_version_data}' is not a valid argument after --generate-version-data.")

    if args.env_file:
        reset_config()
    config = get_config(args.env_file)
    setup_logging(args.log_level or config.log_level, args.log_file or config.log_file)

    try:
        run(args)
    except ZlsGenError as e:
        source = args.langref_file or args.generate_version_data or args.config_options
        logger.error(f"❌ Generation failed ({type(e).__name__}, source: {source}): {e}")
        return 1
    except OSError as e:
        logger.error(f"❌ File error: {e}")
        return 1

    if platform.system() == "Windows":
        logger.warning("Running on windows may result in CRLF and LF mismatch")

    sys.stderr.write(VSCODE_REMINDER)
    return 0


if __name__ == "__main__":
    sys.exit(main())
