from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from .config import config_sha256, load_config
from .config_schema import TransformConfig
from .errors import ConfigError, PostShapeError
from .post import post_to_dict
from .run_log import RunLogger
from .transform import transform_post


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xtract")

    subparsers = parser.add_subparsers(dest="command", required=True)

    tr = subparsers.add_parser(
        "transform",
        help="Normalize a saved raw post JSON file and print it as JSON.",
    )
    tr.add_argument(
        "--input",
        required=True,
        help="Path to a raw post JSON file (bare post or API response envelope).",
    )
    tr.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file (defaults apply when omitted).",
    )
    tr.add_argument(
        "--log",
        default="xtract.log",
        help="Path of the JSONL run log.",
    )
    tr.set_defaults(_handler=_cmd_transform)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _unwrap_envelope(data: Any) -> Any:
    if not isinstance(data, dict) or not isinstance(data.get("data"), dict):
        return data
    envelope = data["data"].get("tweetResult")
    if isinstance(envelope, dict) and envelope.get("result") is not None:
        return envelope["result"]
    return data


def _read_post(path: str | Path) -> Any:
    p = Path(path)
    try:
        raw_text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise PostShapeError(f"Failed to read post file: {p}") from e

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise PostShapeError(f"Failed to parse JSON in {p}: {e}") from e

    return _unwrap_envelope(data)


def _cmd_transform(args: argparse.Namespace) -> int:
    with RunLogger.open(args.log, overwrite=True) as log:
        log.info(
            "transform_command_started",
            input_path=str(args.input),
            config_path=str(args.config) if args.config else None,
        )

        try:
            cfg = load_config(args.config) if args.config else TransformConfig()
            raw = _read_post(args.input)
            post = transform_post(raw, config=cfg, logger=log)

            log.info(
                "transform_completed",
                post_id=post.id,
                kind=post.kind,
                config_sha256=config_sha256(cfg),
                images=len(post.images),
                videos=len(post.videos),
                has_quoted_post=post.quoted_post is not None,
            )
        except Exception as e:
            log.exception("transform_command_failed", exc=e)
            raise

    print(json.dumps(post_to_dict(post), indent=2, ensure_ascii=False))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except PostShapeError as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
