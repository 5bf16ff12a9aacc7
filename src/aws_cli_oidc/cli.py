"""Command line entrypoint for inspecting and maintaining the credential cache."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from aws_cli_oidc import __version__
from aws_cli_oidc.aws_credentials import AWSCredentials, CredentialCache, new_credential_cache
from aws_cli_oidc.config import ConfigurationError, load_settings
from aws_cli_oidc.errors import CredentialCacheError, FatalCacheError
from aws_cli_oidc.logging_utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aws-cli-oidc-cache",
        description="Manage AWS credentials cached in the OS secret store.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-p", "--provider", required=True, help="OIDC provider name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="List cached role ARNs")
    get_cmd = sub.add_parser("get", help="Print a cached credential as credential_process JSON")
    get_cmd.add_argument("role_arn")
    save_cmd = sub.add_parser("save", help="Cache a credential JSON document read from stdin")
    save_cmd.add_argument("role_arn")
    sub.add_parser("clear", help="Delete all cached credentials for the provider")
    return parser


def _show(cache: CredentialCache, out: TextIO, refresh_buffer_seconds: int) -> int:
    cache.load()
    for role_arn in cache.role_arns():
        try:
            creds = cache.get(role_arn)
        except CredentialCacheError as exc:
            out.write(f"{role_arn}\t<unreadable: {exc.code}>\n")
            continue
        expires = creds.expiration.isoformat() if creds.expiration else "-"
        status = "expiring" if creds.is_expiring_soon(refresh_buffer_seconds) else "valid"
        out.write(f"{role_arn}\t{expires}\t{status}\n")
    return EXIT_OK


def _get(cache: CredentialCache, role_arn: str, out: TextIO) -> int:
    cache.load()
    creds = cache.get(role_arn)
    out.write(creds.to_json() + "\n")
    return EXIT_OK


def _save(cache: CredentialCache, role_arn: str, stdin: TextIO) -> int:
    raw = stdin.read().strip()
    try:
        creds = AWSCredentials.model_validate_json(raw)
    except ValidationError as exc:
        raise CredentialCacheError(
            f"invalid credential JSON on stdin: {exc}", code="invalid_input"
        ) from exc
    cache.save(role_arn, creds.to_json())
    return EXIT_OK


def main(
    argv: list[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        configure_logging("DEBUG" if args.verbose else None)
        settings = load_settings()
        cache = new_credential_cache(args.provider, settings=settings)
        if args.command == "show":
            return _show(cache, stdout, settings.cache.refresh_buffer_seconds)
        if args.command == "get":
            return _get(cache, args.role_arn, stdout)
        if args.command == "save":
            return _save(cache, args.role_arn, stdin)
        cache.clear()
        return EXIT_OK
    except FatalCacheError as exc:
        logger.error("Fatal: %s", exc)
        return EXIT_FATAL
    except CredentialCacheError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR
    except (ConfigurationError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_ERROR


def run_entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run_entrypoint()
