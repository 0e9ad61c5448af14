from __future__ import annotations

import io
import json
import sys
from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from typing import Any

from declmeta.utils.errors import ReflectionError

PING_FLAGS = frozenset({"--ping", "ping", "--health"})

EXIT_OK = 0
EXIT_INTERNAL = 1
EXIT_PAYLOAD = 2
EXIT_REFLECTION = 3


@dataclass(frozen=True)
class BridgeReply:
    """One JSON reply and the exit code that goes with it.

    Attributes:
        code (int): Process exit code.
        body (dict[str, Any]): JSON object printed on stdout.
    """

    code: int
    body: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, result: Any) -> BridgeReply:
        return cls(EXIT_OK, {"ok": True, "result": result})

    @classmethod
    def failure(cls, code: int, error_type: str, message: str) -> BridgeReply:
        return cls(
            code,
            {"ok": False, "error": {"type": error_type, "message": message}},
        )

    def emit(self) -> int:
        print(json.dumps(self.body, ensure_ascii=False), file=sys.stdout)
        return self.code


def _payload_error(message: str) -> BridgeReply:
    return BridgeReply.failure(EXIT_PAYLOAD, "payload_error", message)


def handle_request(raw: str) -> BridgeReply:
    """Decode one JSON request and run the operation it names.

    Errors from the reflection error tree reply with the exception class name
    as the error type, so callers can tell an invalid target from a bad
    parameter or an unknown operation.

    Args:
        raw (str): Request text, `{"operation": str, "params": {...}}`.

    Returns:
        BridgeReply: Reply to print, with its exit code.
    """

    text = raw.strip()
    if not text:
        return _payload_error("Missing JSON input payload on stdin.")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        return BridgeReply.failure(EXIT_PAYLOAD, "json_decode_error", str(exc))
    if not isinstance(payload, dict):
        return _payload_error("JSON payload must be an object.")

    operation = payload.get("operation")
    params = payload.get("params", {})
    if not isinstance(operation, str) or not operation.strip():
        return _payload_error("`operation` must be a non-empty string.")
    if not isinstance(params, dict):
        return _payload_error("`params` must be an object.")

    from declmeta.bridge.operations import execute_operation

    try:
        # Autoloaded modules may print on import; stdout is kept for the reply.
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            result = execute_operation(operation.strip(), params)
    except ReflectionError as exc:
        return BridgeReply.failure(EXIT_REFLECTION, type(exc).__name__, str(exc))
    except Exception as exc:
        return BridgeReply.failure(EXIT_INTERNAL, "internal_error", str(exc))
    return BridgeReply.success(result)


def main(argv: list[str] | None = None) -> int:
    """Run one bridge operation read from stdin and print a JSON reply."""

    args = sys.argv if argv is None else argv
    if len(args) > 1 and args[1].strip().lower() in PING_FLAGS:
        return BridgeReply.success(
            {"bridge": "declmeta-bridge", "status": "ok"}
        ).emit()
    return handle_request(sys.stdin.read()).emit()


if __name__ == "__main__":
    raise SystemExit(main())
