"""Thin CLI router — dispatches to commands and the MCP server."""
from __future__ import annotations

import os
import sys

USAGE = """\
stepforge — cucumber-js step definitions from scenario analyses

Usage:
  stepforge init [template]              Create .stepforge/ with config, example analysis and patterns
  stepforge generate <analysis> [-o F]   Validate analysis and write its step definitions (-o - for stdout)
  stepforge check <analysis>             Validate analysis only, report unmatched steps and collisions
  stepforge patterns                     List the pattern registry in match order

Internal (called by MCP clients):
  stepforge mcp-server                   Start MCP Server
"""


def _split_output(args: list[str]) -> tuple[list[str], str | None]:
    """Pull ``-o <file>`` / ``--output <file>`` out of args."""
    rest: list[str] = []
    output = None
    i = 0
    while i < len(args):
        if args[i] in ("-o", "--output"):
            if i + 1 >= len(args):
                print(f"Option {args[i]} requires a value", file=sys.stderr)
                sys.exit(1)
            output = args[i + 1]
            i += 2
            continue
        rest.append(args[i])
        i += 1
    return rest, output


def main():
    args = sys.argv[1:]
    cwd = os.getcwd()
    command = args[0] if args else None

    if command == "init":
        from stepforge.commands.init import main as init_main
        sys.exit(init_main(args[1:]))

    elif command == "generate":
        rest, output = _split_output(args[1:])
        if not rest:
            print("Usage: stepforge generate <analysis> [-o file]", file=sys.stderr)
            sys.exit(1)
        from stepforge.commands.generate import cmd_generate
        cmd_generate(rest[0], cwd, output)

    elif command == "check":
        if len(args) < 2:
            print("Usage: stepforge check <analysis>", file=sys.stderr)
            sys.exit(1)
        from stepforge.commands.check import cmd_check
        cmd_check(args[1], cwd)

    elif command == "patterns":
        from stepforge.commands.patterns import cmd_patterns
        cmd_patterns(cwd)

    elif command == "mcp-server":
        from stepforge.integrations.mcp_server import run_server
        run_server()

    elif command in ("help", "--help", "-h", None):
        print(USAGE)

    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        print(USAGE)
        sys.exit(1)
