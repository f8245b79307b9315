# -*- coding: utf-8 -*-
"""Entry point of the `sdl` command line tool.

Each subcommand is registered under the ``sdl_lib.actions`` entry point group
and receives the remaining command line arguments.
"""

from __future__ import annotations

import argparse
from importlib.metadata import entry_points

import sdl_lib


def main():
    registered_commands = entry_points(group="sdl_lib.actions")

    parser = argparse.ArgumentParser(
        prog="sdl",
        description="Read Autodesk SDF Loader (SDL) files: "
        "inspect them or convert them to GeoJSON.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s version: {sdl_lib.__version__}",
    )
    parser.add_argument(
        "command",
        choices=registered_commands.names,
    )
    parser.add_argument(
        "args",
        help=argparse.SUPPRESS,
        nargs=argparse.REMAINDER,
    )

    args = argparse.Namespace()
    parser.parse_args(namespace=args)

    main_fn = registered_commands[args.command].load()
    return main_fn(args.args)
