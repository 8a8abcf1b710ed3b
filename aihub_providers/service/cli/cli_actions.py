"""CLI action handlers.

Each handler takes parsed ``argparse`` args, prints one JSON document to
stdout and returns the process exit code:

- ``0`` success (for ``chat --execute``: a 2xx response),
- ``1`` the request completed unsuccessfully or a registry entry was missing,
- ``2`` invalid input (pydantic validation failure).

Dry-run paths perform no network I/O. API keys are masked unless
``--show-secrets`` is given.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ...base.dto import ChatRequestDTO
from ...base.logging import LogContext, get_logger, log_event
from ...chat import ChatClient
from ...config.resolver import ConfigResolver
from ...registry import Registry, default_registry_path

_logger = get_logger("aihub.cli")


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def handle_config(args: argparse.Namespace, resolver: Optional[ConfigResolver] = None) -> int:
    resolver = resolver or ConfigResolver()
    config = resolver.resolve(args.provider)
    data = config.to_dict(mask_secrets=not args.show_secrets)
    data["empty"] = config.is_empty
    _emit(data)
    return 0


def build_chat_request(args: argparse.Namespace) -> ChatRequestDTO:
    """Validate CLI chat arguments into a :class:`ChatRequestDTO`."""
    messages = []
    if args.system:
        messages.append({"role": "system", "content": args.system})
    messages.append({"role": "user", "content": args.prompt})
    return ChatRequestDTO(
        provider=args.provider,
        messages=messages,
        model=args.model,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
    )


def plan_chat(client: ChatClient, request: ChatRequestDTO) -> Dict[str, Any]:
    """Describe the request ``client.chat`` would send, without sending it."""
    options = request.to_options()
    config = client.config(options)
    payload = client.build_payload(config, request.messages, options)
    headers = client.connector.build_headers(config)
    return {
        "provider": config.name,
        "family": config.family.value,
        "url": client.connector.build_url(config),
        "timeout": config.timeout_seconds,
        "api_key_present": bool(config.api_key),
        "header_names": sorted(headers),
        "payload": payload,
        "configured": not config.is_empty,
    }


def handle_chat(
    args: argparse.Namespace,
    resolver: Optional[ConfigResolver] = None,
    client: Optional[ChatClient] = None,
) -> int:
    try:
        request = build_chat_request(args)
    except ValidationError as exc:
        print(json.dumps({"error": "invalid request", "details": exc.errors(include_url=False)}, default=str), file=sys.stderr)
        return 2
    client = client or ChatClient(request.provider, resolver=resolver)
    if not args.execute:
        _emit({"dry_run": True, **plan_chat(client, request)})
        return 0
    result = client.chat(request.messages, request.to_options())
    log_event(
        _logger,
        "cli.chat",
        LogContext(provider=client.name, model=request.model),
        status=result.status,
        error_code=result.error_code.value if result.error_code else None,
    )
    _emit({"provider": client.name, **result.to_dict()})
    return 0 if result.ok else 1


def handle_registry(args: argparse.Namespace) -> int:
    registry = Registry(args.file or default_registry_path())
    if args.registry_cmd == "add":
        entry = registry.add_provider(args.name, args.path)
        _emit({"added": args.name, **entry})
        return 0
    if args.registry_cmd == "remove":
        removed = registry.remove_provider(args.name)
        _emit({"removed": args.name if removed else None})
        return 0 if removed else 1
    _emit({"path": str(registry.path), "providers": registry.providers()})
    return 0


__all__ = ["handle_config", "handle_chat", "handle_registry", "build_chat_request", "plan_chat"]
