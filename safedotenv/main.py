"""
safedotenv - Main Entry Point

Securely store .env files using AES encryption on GitHub repositories.

    safedotenv -e            encrypt every .env under the current directory
    safedotenv               decrypt every .env-encrypted back to .env
    safedotenv -d path/to    scan another directory
"""

import argparse
import getpass
import logging
import sys
from typing import List, Optional

from .core_crypto.errors import KeyDerivationFailure, ScanError
from .core_crypto.kdf import derive_key
from .files.file_crypto import Mode
from .files.scanner import scan
from .integration import batch


logger = logging.getLogger("safedotenv")

EXIT_OK = 0
EXIT_FILE_ERRORS = 1
EXIT_FATAL = 2

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safedotenv",
        description="Securely store .env files using AES encryption on GitHub repositories for convenience.",
    )
    parser.add_argument(
        "-e", "--encrypt", action="store_true",
        help="Encrypt .env to .env-encrypted instead of decrypting .env-encrypted to .env",
    )
    parser.add_argument(
        "-d", "--directory", default=".",
        help="Directory to scan for files to encrypt/decrypt (default: .)",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=None,
        help="Maximum number of files processed at once (default: one per file)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


def read_passphrase() -> str:
    """Prompt for the passphrase without echoing it."""
    return getpass.getpass("Enter passphrase: ")


def run(directory: str, mode: Mode, passphrase: str,
        workers: Optional[int] = None) -> batch.BatchResult:
    """Derive the key, scan DIRECTORY and process every marker file found."""
    key = derive_key(passphrase)
    paths = scan(directory, mode)
    logger.info("Found %d file(s) to %s", len(paths), mode.value)
    return batch.process(paths, mode, key, workers=workers)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for safedotenv."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    mode = Mode.ENCRYPT if args.encrypt else Mode.DECRYPT

    try:
        passphrase = read_passphrase()
    except (EOFError, KeyboardInterrupt):
        logger.error("Error reading passphrase")
        return EXIT_FATAL

    try:
        result = run(args.directory, mode, passphrase, workers=args.workers)
    except (KeyDerivationFailure, ScanError) as e:
        logger.error("%s", e)
        return EXIT_FATAL

    batch.report(result)
    logger.info("Done.")
    return EXIT_OK if result.ok else EXIT_FILE_ERRORS


if __name__ == "__main__":
    sys.exit(main())
