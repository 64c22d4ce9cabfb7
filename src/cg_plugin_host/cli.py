from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .config import PRIVATE_KEY_ENV, PUBLIC_KEY_ENV, load_config
from .crypto.keyformat import ensure_pem_format
from .errors import HostLibError
from .host import CgPluginLibHost


def _read_json(path: str):
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    return json.loads(text)


async def _host_from_args(args: argparse.Namespace) -> CgPluginLibHost:
    cfg = load_config()
    private_key = args.private_key or cfg.private_key
    public_key = args.public_key or cfg.public_key
    if private_key and public_key:
        return await CgPluginLibHost.initialize(private_key, public_key)
    return await CgPluginLibHost.from_env()


def cmd_generate(args: argparse.Namespace) -> int:
    pair = asyncio.run(CgPluginLibHost.generate_key_pair())
    private_key, public_key = pair["privateKey"], pair["publicKey"]
    if args.pem:
        private_key = json.dumps(ensure_pem_format(private_key, "PRIVATE KEY"))
        public_key = json.dumps(ensure_pem_format(public_key, "PUBLIC KEY"))
    print(f"{PRIVATE_KEY_ENV}={private_key}")
    print(f"{PUBLIC_KEY_ENV}={public_key}")
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    data = _read_json(args.input)

    async def run():
        host = await _host_from_args(args)
        return await host.sign_request(data)

    print(json.dumps(asyncio.run(run()), ensure_ascii=False))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    data = _read_json(args.input)

    async def run():
        host = await _host_from_args(args)
        return await host.verify_signature(data, args.signature)

    valid = asyncio.run(run())
    print(json.dumps({"valid": valid}))
    return 0 if valid else 1


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser("cg-plugin-host")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate-keypair", help="print a fresh ECDSA P-256 key pair as env lines")
    p_gen.add_argument("--pem", action="store_true", help="emit PEM blocks instead of raw base64")
    p_gen.set_defaults(func=cmd_generate)

    def key_args(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--private-key", dest="private_key", help=f"defaults to ${PRIVATE_KEY_ENV}")
        sp.add_argument("--public-key", dest="public_key", help=f"defaults to ${PUBLIC_KEY_ENV}")

    p_sign = sub.add_parser("sign", help="sign a JSON request")
    p_sign.add_argument("--input", required=True, help="JSON file, or - for stdin")
    key_args(p_sign)
    p_sign.set_defaults(func=cmd_sign)

    p_ver = sub.add_parser("verify", help="verify a signature over a JSON request")
    p_ver.add_argument("--input", required=True, help="JSON file, or - for stdin")
    p_ver.add_argument("--signature", required=True)
    key_args(p_ver)
    p_ver.set_defaults(func=cmd_verify)

    args = p.parse_args(argv)
    try:
        return args.func(args)
    except HostLibError as e:
        print(str(e), file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as e:
        print(f"cannot read JSON input: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
