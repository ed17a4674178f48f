#!/usr/bin/env python3
"""
suiwallet key tool: derives Sui account key pairs from a mnemonic.

Usage:
    echo "$MNEMONIC" | python run_keygen.py --mnemonic-file - --account 0 --count 3
    SUIWALLET_MNEMONIC="..." python run_keygen.py --json --show-private
    python run_keygen.py --mnemonic-file words.txt --sign-message "hello"

The passphrase is never taken from the command line; it is read from the
environment variable named by ``[derivation] passphrase_env`` in the
config (default ``SUIWALLET_PASSPHRASE``).

Environment variables:
    SUIWALLET_MNEMONIC, SUIWALLET_PASSPHRASE, SUIWALLET_ACCOUNT_INDEX,
    SUIWALLET_ACCOUNT_COUNT, SUIWALLET_OUTPUT, SUIWALLET_LOG_LEVEL
"""

from __future__ import annotations

import argparse
import base64
import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is in sys.path so imports work before pip install
# ---------------------------------------------------------------------------
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from suiwallet_core.config import load_config  # noqa: E402
from suiwallet_core.errors import ArgumentError, KeyDerivationError  # noqa: E402
from suiwallet_core.hd import account_path  # noqa: E402
from suiwallet_core.keypair import keypair_from_seed  # noqa: E402
from suiwallet_core.logging_config import setup_logging  # noqa: E402
from suiwallet_core.mnemonic import mnemonic_to_seed  # noqa: E402

logger = logging.getLogger("suiwallet.keygen")

EXIT_OK = 0
EXIT_USAGE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Derive Sui Ed25519 account keys from a mnemonic")
    p.add_argument("--config", default=None, help="Path to suiwallet.toml config file")
    p.add_argument("--mnemonic-file", default=None,
                   help="File holding the mnemonic ('-' for stdin); "
                        "defaults to $SUIWALLET_MNEMONIC")
    p.add_argument("--account", type=int, default=None, help="First account index")
    p.add_argument("--count", type=int, default=None, help="Number of accounts to derive")
    p.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    p.add_argument("--show-private", action="store_true",
                   help="Include base64 private keys in the output")
    p.add_argument("--sign-message", default=None,
                   help="Sign this UTF-8 message with the first derived account")
    return p.parse_args(argv)


def read_mnemonic(source: str | None) -> str:
    if source == "-":
        return sys.stdin.read().strip()
    if source:
        with open(source, encoding="utf-8") as f:
            return f.read().strip()
    return os.environ.get("SUIWALLET_MNEMONIC", "").strip()


def derive_accounts(
    seed: bytes, first: int, count: int, show_private: bool,
) -> list[dict]:
    """Derive *count* consecutive accounts from one mnemonic seed."""
    if count <= 0:
        raise ArgumentError("count must be positive")
    accounts = []
    for index in range(first, first + count):
        pair = keypair_from_seed(seed, index)
        row = {
            "account": index,
            "path": account_path(index),
            "address": pair.address,
            "public_key": pair.public_key_base64,
        }
        if show_private:
            row["private_key"] = pair.private_key_base64
        accounts.append(row)
        logger.info("derived account", extra={"account_index": index, "address": pair.address})
    return accounts


def render_text(accounts: list[dict], signature: dict | None) -> str:
    lines = []
    for row in accounts:
        lines.append(f"[{row['account']}] {row['path']}")
        lines.append(f"    address:     {row['address']}")
        lines.append(f"    public key:  {row['public_key']}")
        if "private_key" in row:
            lines.append(f"    private key: {row['private_key']}")
    if signature:
        lines.append(f"signature ({signature['address']}): {signature['signature']}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    # Load config (TOML + env overrides)
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        setup_logging()
        logger.error("Could not load config: %s", e)
        return EXIT_USAGE

    # CLI flags override config
    if args.account is not None:
        cfg.derivation.account_index = args.account
    if args.count is not None:
        cfg.derivation.count = args.count
    if args.json:
        cfg.output.format = "json"
    if args.show_private:
        cfg.output.show_private = True

    setup_logging(cfg.logging.level, cfg.logging.format, cfg.logging.file)

    try:
        mnemonic = read_mnemonic(args.mnemonic_file)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read mnemonic: %s", e)
        return EXIT_USAGE
    if not mnemonic:
        logger.error("No mnemonic given (use --mnemonic-file or SUIWALLET_MNEMONIC)")
        return EXIT_USAGE
    passphrase = os.environ.get(cfg.derivation.passphrase_env, "")

    try:
        seed = mnemonic_to_seed(mnemonic, passphrase)
        accounts = derive_accounts(
            seed,
            cfg.derivation.account_index,
            cfg.derivation.count,
            cfg.output.show_private,
        )
        signature = None
        if args.sign_message is not None:
            pair = keypair_from_seed(seed, cfg.derivation.account_index)
            signature = {
                "address": pair.address,
                "message": args.sign_message,
                "signature": base64.b64encode(
                    pair.sign(args.sign_message.encode("utf-8"))
                ).decode("ascii"),
            }
    except KeyDerivationError as e:
        logger.error("Key derivation failed: %s", e)
        return EXIT_USAGE

    if cfg.output.format == "json":
        out: dict = {"accounts": accounts}
        if signature:
            out["signature"] = signature
        print(json.dumps(out, indent=2))
    else:
        print(render_text(accounts, signature))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
