"""
Command-line interface for the keyflip tool.

This module orchestrates all other components and provides
the user-facing CLI commands:
- run
- verify
- challenges
- hash
- help
"""

from __future__ import annotations

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_KEY,
    DEFAULT_MANIFEST,
    TOOL_VERSION,
    get_execution_mode,
    get_flag_prefix,
)
from .exceptions import KeyflipError
from .flag import expected_flag, flag_hash, format_flag, validate_flag
from .manifest import Manifest
from .transformer import KeyBuffer, process_key


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    """Print success message."""
    print(colored(f"✓ {msg}", Colors.GREEN))


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(colored(f"⚠ Warning: {msg}", Colors.YELLOW))


def print_info(msg: str) -> None:
    """Print info message."""
    print(colored(f"ℹ {msg}", Colors.CYAN))


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(
        self,
        manifest_path: str,
        prefix: Optional[str],
        verbose: bool,
        quiet: bool,
    ):
        self.manifest_path = Path(manifest_path)
        self.verbose = verbose
        self.quiet = quiet
        self.prefix_override = prefix

        # Lazy-loaded
        self._manifest: Optional[Manifest] = None

    @property
    def manifest(self) -> Manifest:
        """Load manifest lazily."""
        if self._manifest is None:
            self._manifest = Manifest.load(self.manifest_path)
        return self._manifest

    @property
    def prefix(self) -> str:
        """Flag prefix from --prefix, else the environment, else the default."""
        return self.prefix_override or get_flag_prefix()

    def log(self, msg: str) -> None:
        """Log message if not quiet."""
        if not self.quiet:
            print(msg)

    def log_verbose(self, msg: str) -> None:
        """Log message if verbose."""
        if self.verbose:
            print(colored(f"  → {msg}", Colors.BLUE))


# ---------------------------------------------------------------------------
# Command implementations
# ---------------------------------------------------------------------------


def cmd_run(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Transform a key and print the resulting flag.
    """
    key = KeyBuffer.from_string(args.key)
    initial = str(key)

    if not args.json:
        print(f"Initial Key: {initial}")

    ctx.log_verbose(f"First half:  {key.first_half}")
    ctx.log_verbose(f"Second half: {key.second_half}")

    process_key(key)
    flag = format_flag(str(key), ctx.prefix)

    if args.json:
        output = {
            "initial_key": initial,
            "final_key": str(key),
            "flag": flag,
            "flag_hash": flag_hash(flag),
        }
        print(json.dumps(output, indent=2))
        return 0

    print(f"Final Key: {flag}")
    return 0


def cmd_verify(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Check a submitted flag against a manifest challenge or a raw key.
    """
    if args.challenge:
        challenge = ctx.manifest.get_challenge(args.challenge)
        prefix = ctx.prefix_override or challenge.prefix
        expected_hash = challenge.hash_for(prefix)
        feedback = challenge.feedback_for(prefix)
        ctx.log_verbose(f"Challenge: {challenge.id} ({challenge.title or 'untitled'})")
    else:
        prefix = ctx.prefix
        expected_hash = flag_hash(expected_flag(args.key, prefix))
        feedback = None
        ctx.log_verbose(f"Key: {args.key}")

    ctx.log_verbose(f"Expected hash: {expected_hash}")

    verdict = validate_flag(args.flag, expected_hash, prefix, feedback)

    if args.json:
        output = {
            "status": verdict.status,
            "feedback": verdict.feedback,
            "is_correct": verdict.is_correct,
        }
        if args.challenge:
            output["challenge_id"] = args.challenge
        print(json.dumps(output, indent=2))
    elif verdict.is_correct:
        print_success(verdict.feedback)
    elif verdict.status == "format_error":
        print_warning(verdict.feedback)
    else:
        print_error(verdict.feedback)

    return 0 if verdict.is_correct else 1


def cmd_challenges(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    List the challenges defined in the manifest.
    """
    manifest = ctx.manifest

    ctx.log(colored(f"Challenges in {ctx.manifest_path}", Colors.BOLD))
    ctx.log(f"  Manifest version: {manifest.version}")
    ctx.log(f"  Flag prefix:      {manifest.flag_prefix}")
    ctx.log("")

    for cid, challenge in manifest.challenges.items():
        ctx.log(colored(f"{cid}:", Colors.CYAN))
        ctx.log(f"  Title:     {challenge.title or '-'}")
        ctx.log(f"  Flag hash: {challenge.expected_hash}")
        if not challenge.flag_hash:
            ctx.log_verbose("hash derived from key")
        if ctx.verbose and challenge.hints:
            for idx, hint in enumerate(challenge.hints, start=1):
                ctx.log(f"  Hint {idx}:    {hint}")
        ctx.log("")

    if not ctx.quiet:
        print_info(f"{len(manifest.challenges)} challenge(s)")

    return 0


def cmd_hash(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Print the SHA-256 of a flag, for writing manifests.
    """
    print(flag_hash(args.flag))
    return 0


def cmd_help(ctx: Optional[CLIContext], args: argparse.Namespace) -> int:
    """
    Show help message.
    """
    help_text = f"""
{colored('keyflip', Colors.BOLD)} - derive and check flags from 10-character keys

{colored('USAGE:', Colors.CYAN)}
  keyflip [options] <command> [args...]

{colored('DESCRIPTION:', Colors.CYAN)}
  keyflip swaps the two 5-character halves of a key and reverses the
  half that moved to the front. The result is wrapped as PREFIX{{KEY}}.

{colored('COMMANDS:', Colors.CYAN)}
  run [KEY]       Transform a key and print the flag
                  (default key: {DEFAULT_KEY})
  verify FLAG     Check a flag (--challenge ID or --key KEY)
  challenges      List challenges defined in the manifest
  hash FLAG       Print the SHA-256 of a flag
  help            Show this help message

{colored('GLOBAL OPTIONS:', Colors.CYAN)}
  -m, --manifest PATH       Path to challenge manifest
                            (default: {DEFAULT_MANIFEST})
  --prefix PREFIX           Flag prefix (default: FLAG)
  -v, --verbose             Enable verbose output
  -q, --quiet               Suppress non-error output
  -h, --help                Show this help message and exit

{colored('ENVIRONMENT:', Colors.CYAN)}
  KEYFLIP_FLAG_PREFIX       Flag prefix when --prefix is not given
  KEYFLIP_MODE              Optional execution mode (e.g. dev, prod)

{colored('EXAMPLES:', Colors.CYAN)}
  keyflip run
  keyflip run 0123456789 --json
  keyflip verify 'FLAG{{5E4D3A1B2C}}' --key A1B2C3D4E5
  keyflip -m challenges.yml verify 'FLAG{{5E4D3A1B2C}}' --challenge q3

{colored('VERSION:', Colors.CYAN)}
  {TOOL_VERSION}
"""
    print(help_text)
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="keyflip",
        description="Derive and check flags from 10-character keys",
        add_help=False,
    )

    # Global options
    parser.add_argument(
        "-m", "--manifest",
        default=DEFAULT_MANIFEST,
        help="Path to challenge manifest",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Flag prefix",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show help message",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # run command
    run_parser = subparsers.add_parser("run", help="Transform a key and print the flag")
    run_parser.add_argument("key", nargs="?", default=DEFAULT_KEY, help="10-character key")
    run_parser.add_argument("--json", action="store_true", help="Output result as JSON")

    # verify command
    verify_parser = subparsers.add_parser("verify", help="Check a submitted flag")
    verify_parser.add_argument("flag", help="Submitted flag")
    target = verify_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--challenge", help="Challenge id from the manifest")
    target.add_argument("--key", help="Initial key the flag was derived from")
    verify_parser.add_argument("--json", action="store_true", help="Output verdict as JSON")

    # challenges command
    subparsers.add_parser("challenges", help="List manifest challenges")

    # hash command
    hash_parser = subparsers.add_parser("hash", help="Print the SHA-256 of a flag")
    hash_parser.add_argument("flag", help="Flag to hash")

    # help command
    subparsers.add_parser("help", help="Show help message")

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Show help if requested or no command
    if args.help or not args.command:
        return cmd_help(None, args)

    # Build context
    ctx = CLIContext(
        manifest_path=args.manifest,
        prefix=args.prefix,
        verbose=args.verbose,
        quiet=args.quiet,
    )

    # Dispatch to command
    commands = {
        "run": cmd_run,
        "verify": cmd_verify,
        "challenges": cmd_challenges,
        "hash": cmd_hash,
        "help": cmd_help,
    }

    cmd_func = commands.get(args.command)
    if not cmd_func:
        print_error(f"Unknown command: {args.command}")
        return 1

    try:
        return cmd_func(ctx, args)
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130
    except KeyflipError as e:
        print_error(str(e))
        return 1
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if args.verbose or get_execution_mode() == "dev":
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
