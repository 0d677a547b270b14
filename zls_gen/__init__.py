"""
ZLS data generator package.

Extracts the builtin function documentation from the Zig language reference
(`langref.html.in`) and turns it into markdown plus editor metadata
(signature, snippet, argument list), and regenerates the configuration files
derived from the option catalogue.
"""

__version__ = "0.1.0"
