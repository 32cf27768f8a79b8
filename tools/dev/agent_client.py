#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Voice Agent — Dev HTTP client
-----------------------------
Console tool for poking a running server without the browser page.

Examples:

    python tools/dev/agent_client.py health
    python tools/dev/agent_client.py session
    python tools/dev/agent_client.py get --user sam
    python tools/dev/agent_client.py set --user sam --name Sam --kids "Ada, Leo"
    python tools/dev/agent_client.py note --user sam "likes dinosaurs"
    python tools/dev/agent_client.py patch --user sam --deep '{"prefs": {"music": "jazz"}}'
    python tools/dev/agent_client.py clear --user sam
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

import requests

DEFAULT_SERVER = "http://127.0.0.1:3000"


# ---------------------------------------------------------------------------
# CLI argument parsing
# ---------------------------------------------------------------------------


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Voice Agent dev client")
    parser.add_argument(
        "--server",
        default=DEFAULT_SERVER,
        help=f"Server base URL (default: {DEFAULT_SERVER})",
    )
    parser.add_argument("--timeout", type=float, default=20.0)

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("health", help="GET /health")
    sub.add_parser("session", help="POST /session (prints a masked secret)")

    p_get = sub.add_parser("get", help="GET /memory/get")
    p_get.add_argument("--user", required=True)

    p_set = sub.add_parser("set", help="GET /memory/set")
    p_set.add_argument("--user", required=True)
    for field in ("name", "kids", "tone", "persona", "note"):
        p_set.add_argument(f"--{field}")

    p_note = sub.add_parser("note", help="POST /memory/note")
    p_note.add_argument("--user", required=True)
    p_note.add_argument("text")

    p_patch = sub.add_parser("patch", help="POST /memory/patch")
    p_patch.add_argument("--user", required=True)
    p_patch.add_argument("--deep", action="store_true")
    p_patch.add_argument("json_patch", help="JSON object to merge")

    p_clear = sub.add_parser("clear", help="DELETE /memory")
    p_clear.add_argument("--user", required=True)

    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _mask_secret(data: Dict[str, Any]) -> Dict[str, Any]:
    secret = data.get("client_secret")
    if isinstance(secret, dict) and isinstance(secret.get("value"), str):
        value = secret["value"]
        masked = dict(data)
        masked["client_secret"] = dict(secret, value=value[:6] + "…")
        return masked
    return data


def run(args: argparse.Namespace) -> requests.Response:
    base = args.server.rstrip("/")
    timeout = args.timeout

    if args.command == "health":
        return requests.get(f"{base}/health", timeout=timeout)
    if args.command == "session":
        return requests.post(f"{base}/session", timeout=timeout)
    if args.command == "get":
        return requests.get(f"{base}/memory/get", params={"userId": args.user}, timeout=timeout)
    if args.command == "set":
        params = {"userId": args.user}
        for field in ("name", "kids", "tone", "persona", "note"):
            value = getattr(args, field)
            if value:
                params[field] = value
        return requests.get(f"{base}/memory/set", params=params, timeout=timeout)
    if args.command == "note":
        return requests.post(
            f"{base}/memory/note",
            json={"userId": args.user, "note": args.text},
            timeout=timeout,
        )
    if args.command == "patch":
        patch = json.loads(args.json_patch)
        return requests.post(
            f"{base}/memory/patch",
            json={"userId": args.user, "patch": patch, "deep": args.deep},
            timeout=timeout,
        )
    if args.command == "clear":
        return requests.delete(f"{base}/memory", params={"userId": args.user}, timeout=timeout)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    try:
        resp = run(args)
    except requests.RequestException as exc:
        print(f"[ERROR] Request failed: {exc}", file=sys.stderr)
        return 2
    except json.JSONDecodeError as exc:
        print(f"[ERROR] Invalid JSON patch: {exc}", file=sys.stderr)
        return 2

    try:
        body: Any = resp.json()
    except ValueError:
        print(f"HTTP {resp.status_code}\n{resp.text}")
        return 0 if resp.ok else 1

    if args.command == "session" and isinstance(body, dict):
        body = _mask_secret(body)

    print(f"HTTP {resp.status_code}")
    print(json.dumps(body, indent=2, ensure_ascii=False))
    return 0 if resp.ok else 1


if __name__ == "__main__":
    sys.exit(main())
