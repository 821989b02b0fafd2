"""
Command-line adapter for dreamclient.

Architectural role:
- Exposes `complete` and `image` subcommands over `DreamClient`.
- Resolves the API key from environment or key file via `load_key`.
- Delegates all request work to the blocking client variants.

Request lifecycle:
1. Parse arguments.
2. Resolve API key; abort with exit code 1 when missing.
3. Dispatch to `complete_sync` or `images_sync`.
4. Print text or one URL per line.

Error handling strategy:
- Missing key and failed requests print a short message to stderr and
  return exit code 1.
- Failure details are logged by the client layers.

Side effects:
- Loads environment variables via `load_dotenv()` (in `provider_config`).
- Configures root logging.
"""

import argparse
import logging
import sys

from dreamclient.core.engine import DreamClient
from dreamclient.llm.provider_config import (
    DEFAULT_KEY_FILE,
    DEFAULT_PROMPT_ROLE,
    MODEL_NAME,
    PROMPT_ROLES,
    REQUEST_TIMEOUT,
    load_key,
)


def build_parser():
    """Return the argument parser for both subcommands."""
    parser = argparse.ArgumentParser(prog="dreamclient", description="Completions and images from the command line")
    parser.add_argument("--model", default=MODEL_NAME, help="Model identifier")
    parser.add_argument("--key-file", default=DEFAULT_KEY_FILE, help="API key file (OPENAI_API_KEY overrides)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    complete = subparsers.add_parser("complete", help="Generate a text completion")
    complete.add_argument("prompt")
    complete.add_argument("--context", action="append", default=[], help="Training context line (repeatable)")
    complete.add_argument("--role", choices=PROMPT_ROLES, default=DEFAULT_PROMPT_ROLE, help="Role of the prompt turn")
    complete.add_argument("--temperature", type=float, default=None)
    complete.add_argument("--top-p", type=float, default=None)
    complete.add_argument("--frequency-penalty", type=float, default=None)
    complete.add_argument("--presence-penalty", type=float, default=None)

    image = subparsers.add_parser("image", help="Generate one or more images")
    image.add_argument("prompt")
    image.add_argument("--width", type=int, default=512)
    image.add_argument("--height", type=int, default=512)
    image.add_argument("--count", type=int, default=1)

    return parser


def main(argv=None):
    """Run the CLI and return a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    api_key = load_key(args.key_file)
    if not api_key:
        print("API key not found. Set OPENAI_API_KEY or provide a key file.", file=sys.stderr)
        return 1

    if args.command == "complete":
        options = {
            "temperature": args.temperature,
            "top_p": args.top_p,
            "frequency_penalty": args.frequency_penalty,
            "presence_penalty": args.presence_penalty,
        }
        client = DreamClient(api_key, args.model, options, prompt_role=args.role, timeout=REQUEST_TIMEOUT)
        result = client.complete_sync(args.prompt, args.context)
    else:
        client = DreamClient(api_key, args.model, timeout=REQUEST_TIMEOUT)
        result = client.images_sync(args.prompt, args.width, args.height, args.count)

    if not result.ok:
        print(f"Request failed: {result.error.message}", file=sys.stderr)
        return 1

    if isinstance(result.value, list):
        for url in result.value:
            print(url)
    else:
        print(result.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
