"""aihub-cli (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no
provider logic directly.
"""

from __future__ import annotations

from typing import Optional

from .cli_actions import handle_chat, handle_config, handle_registry
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    if args.cmd == "config":
        return handle_config(args)
    if args.cmd == "registry":
        return handle_registry(args)
    return handle_chat(args)


__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
