"""CLI parser construction for aihub-cli.

Wires subparsers only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``config``, ``chat`` and ``registry``.

    No I/O or network calls happen here.
    """
    p = argparse.ArgumentParser(
        prog="aihub-cli", description="Inspect provider configuration and send chat requests (dry-run by default)"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_config = sub.add_parser("config", help="Print the resolved configuration for a provider")
    p_config.add_argument("--provider", default=None, help="provider name (default: configured default driver)")
    p_config.add_argument("--show-secrets", action="store_true", help="print the API key unmasked")

    p_chat = sub.add_parser("chat", help="Plan (or with --execute, send) a single chat request")
    p_chat.add_argument("--provider", default=None)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None, help="optional system message")
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument("--max-tokens", type=int, default=None)
    p_chat.add_argument("--execute", action="store_true", help="perform the HTTP call")

    file_help = "registry path (default: $AI_HUB_REGISTRY or .ai-hub/registry.json)"
    p_reg = sub.add_parser("registry", help="Manage the installed-provider registry file")
    p_reg.add_argument("--file", default=None, help=file_help)
    # --file is accepted after the subcommand too; SUPPRESS keeps an unset
    # sub-level flag from clobbering one given before the subcommand.
    file_opt = argparse.ArgumentParser(add_help=False)
    file_opt.add_argument("--file", default=argparse.SUPPRESS, help=file_help)
    reg_sub = p_reg.add_subparsers(dest="registry_cmd", required=True)
    reg_sub.add_parser("list", parents=[file_opt], help="List registered providers")
    p_add = reg_sub.add_parser("add", parents=[file_opt], help="Register a provider")
    p_add.add_argument("name")
    p_add.add_argument("--path", default="")
    p_rm = reg_sub.add_parser("remove", parents=[file_opt], help="Unregister a provider")
    p_rm.add_argument("name")

    return p
