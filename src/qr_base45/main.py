import argparse
import sys
from pathlib import Path
from typing import List, Optional, Union

from . import __version__
from .alphabet import BASE45_ALPHABET
from .codec import decode, encode
from .config import (
    ConfigError,
    Settings,
    config_path,
    load_settings,
    read_settings_file,
    save_settings,
    update_setting,
)
from .errors import Base45Error, describe
from .history import clear_history, log_event, read_events
from .utils import parse_hex, render_decoded, strip_line_ending

Output = Union[str, bytes]


class CheckFailed(Exception):
    """Signals a `check` run whose input did not validate."""


def _settings(args: argparse.Namespace) -> Settings:
    # `config` must stay usable to repair a file holding bad values
    settings = load_settings(config_path(args.config), strict=args.command != "config")
    if args.encoding:
        settings.encoding = args.encoding
    return settings


def _require_input(args: argparse.Namespace) -> None:
    if not args.in_file and args.text is None:
        raise argparse.ArgumentTypeError("需要提供 TEXT 或 --in-file")


def _load_raw(args: argparse.Namespace, settings: Settings) -> bytes:
    _require_input(args)
    if args.in_file:
        with open(args.in_file, "rb") as fh:
            content = fh.read()
        if getattr(args, "hex_input", False):
            return parse_hex(content.decode("ascii"))
        return content
    if getattr(args, "hex_input", False):
        return parse_hex(args.text)
    return args.text.encode(settings.encoding)


def _load_encoded(args: argparse.Namespace) -> str:
    _require_input(args)
    if args.in_file:
        with open(args.in_file, "rb") as fh:
            # latin-1 keeps one character per input byte
            return strip_line_ending(fh.read().decode("latin-1"))
    return args.text


def _run_encode(args: argparse.Namespace, settings: Settings) -> str:
    data = _load_raw(args, settings)
    args.input_len = len(data)
    return encode(data)


def _run_decode(args: argparse.Namespace, settings: Settings) -> Output:
    text = _load_encoded(args)
    args.input_len = len(text)
    data = decode(text)
    if args.binary:
        return data
    if args.to_hex or settings.output == "hex":
        return data.hex()
    return render_decoded(data, settings.encoding)


def _run_check(args: argparse.Namespace, settings: Settings) -> str:
    text = _load_encoded(args)
    args.input_len = len(text)
    try:
        decode(text)
    except Base45Error as err:
        raise CheckFailed(f"invalid: {describe(err)} ({err})") from err
    return describe(None)


def _run_alphabet(args: argparse.Namespace, settings: Settings) -> str:
    lines = [f"{idx:2d}  {ch!r}" for idx, ch in enumerate(BASE45_ALPHABET)]
    return "\n".join(lines)


def _run_config(args: argparse.Namespace, settings: Settings) -> str:
    path = config_path(args.config)
    if args.action == "path":
        return str(path)
    if args.action == "set":
        try:
            stored = read_settings_file(path)
        except ConfigError:
            # unparseable file: rewrite it from defaults
            stored = Settings()
        update_setting(stored, args.key, args.value)
        save_settings(stored, path)
        return f"{args.key} = {getattr(stored, args.key)}"
    return "\n".join(f"{key} = {value}" for key, value in settings.to_dict().items())


def _run_history(args: argparse.Namespace, settings: Settings) -> str:
    path = settings.resolved_history_path()
    if args.clear:
        clear_history(path)
        return "history cleared"
    events = read_events(path, limit=args.limit)
    return "\n".join(
        " ".join(f"{key}={value}" for key, value in event.items()) for event in events
    )


def _write_output(args: argparse.Namespace, output: Output) -> None:
    out_file = getattr(args, "out_file", None)
    if out_file:
        if isinstance(output, bytes):
            Path(out_file).write_bytes(output)
        else:
            Path(out_file).write_text(output, encoding="utf-8")
        return
    if isinstance(output, bytes):
        sys.stdout.buffer.write(output)
        sys.stdout.flush()
        return
    if output:
        print(output)


def _add_io_args(p: argparse.ArgumentParser, with_output: bool = True) -> None:
    p.add_argument("text", nargs="?", help="Input text (ignored if --in-file).")
    p.add_argument("--in-file", help="Read input from file.")
    if with_output:
        p.add_argument("--out-file", help="Write the result to a file instead of stdout.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qr-base45", description="Base45 (RFC 9285) encoder/decoder."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record the operation in history."
    )
    parser.add_argument(
        "--encoding",
        help="TEXT 输入与解码输出使用的文本编码（默认取配置，utf-8）。",
    )
    parser.add_argument("--config", help="Settings file (default ~/.qr_base45.json).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Bytes/text -> Base45")
    _add_io_args(encode_parser)
    encode_parser.add_argument(
        "--hex-input", action="store_true", help="Treat the input as hex-encoded bytes."
    )
    encode_parser.set_defaults(func=_run_encode)

    decode_parser = subparsers.add_parser("decode", help="Base45 -> bytes/text")
    _add_io_args(decode_parser)
    decode_parser.add_argument("--to-hex", action="store_true", help="解码后输出 Hex。")
    decode_parser.add_argument(
        "--binary", action="store_true", help="Emit raw bytes (best used with --out-file)."
    )
    decode_parser.set_defaults(func=_run_decode)

    check_parser = subparsers.add_parser("check", help="Validate Base45 text")
    _add_io_args(check_parser, with_output=False)
    check_parser.set_defaults(func=_run_check)

    alphabet_parser = subparsers.add_parser("alphabet", help="Print the 45-symbol alphabet")
    alphabet_parser.set_defaults(func=_run_alphabet)

    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_sub = config_parser.add_subparsers(dest="action", required=True)
    config_sub.add_parser("show", help="Print effective settings")
    config_sub.add_parser("path", help="Print the settings file path")
    config_set = config_sub.add_parser("set", help="Persist a setting")
    config_set.add_argument("key", choices=list(Settings().to_dict().keys()))
    config_set.add_argument("value")
    config_parser.set_defaults(func=_run_config)

    history_parser = subparsers.add_parser("history", help="Show recorded operations")
    history_parser.add_argument("--limit", type=int, default=20, help="Show at most N entries.")
    history_parser.add_argument("--clear", action="store_true", help="Delete the history file.")
    history_parser.set_defaults(func=_run_history)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _settings(args)
    except ConfigError as exc:
        if args.command != "config" or args.action == "show":
            print(f"error: {exc}", file=sys.stderr)
            return 1
        settings = Settings()

    status = 0
    output: Output = ""
    try:
        output = args.func(args, settings)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    except CheckFailed as exc:
        print(str(exc))
        status = 1
    except (ValueError, LookupError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        status = 1
    else:
        _write_output(args, output)

    if settings.history and not args.no_history and args.command in ("encode", "decode", "check"):
        log_event(
            action=args.command,
            payload={
                "ok": status == 0,
                "input_len": getattr(args, "input_len", None),
                "output_len": len(output),
                "in_file": getattr(args, "in_file", None),
                "out_file": getattr(args, "out_file", None),
            },
            path=settings.resolved_history_path(),
        )
    return status


if __name__ == "__main__":
    sys.exit(main())
