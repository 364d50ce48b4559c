"""Command-line entry point: send one prompt through the configured backend."""
import argparse
import asyncio
import logging
import sys
import uuid
from typing import List, Optional

import httpx

from contentgen.config import (
    AuthType,
    SessionConfig,
    create_content_generator_config,
    load_environment,
)
from contentgen.errors import ContentGeneratorError
from contentgen.factory import create_content_generator
from contentgen.models import CountTokensRequest, GenerateRequest, response_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contentgen",
        description="Generate content with any configured model backend.",
    )
    parser.add_argument(
        "--auth-type",
        required=True,
        choices=[a.value for a in AuthType],
        help="How to reach the backend",
    )
    parser.add_argument("--model", help="Model name (defaults to the backend default)")
    parser.add_argument("--proxy", help="HTTP proxy URL")
    parser.add_argument("--env-file", help="Path to a .env file (default: ./.env)")
    parser.add_argument("--stream", action="store_true", help="Print chunks as they arrive")
    parser.add_argument("--count-tokens", action="store_true", help="Count prompt tokens only")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("prompt", help="Prompt text")
    return parser


async def run(args: argparse.Namespace) -> int:
    """Resolve configuration, build the generator and run one request."""
    session = SessionConfig(model=args.model, proxy=args.proxy, session_id=str(uuid.uuid4()))
    config = create_content_generator_config(session, AuthType(args.auth_type))
    generator = await create_content_generator(config, session, session_id=session.session_id)
    prompt_id = f"{session.session_id}#0"

    try:
        if args.count_tokens:
            result = await generator.count_tokens(CountTokensRequest(contents=args.prompt))
            print(result.total_tokens)
        elif args.stream:
            stream = await generator.generate_content_stream(
                GenerateRequest(contents=args.prompt), prompt_id,
            )
            async for chunk in stream:
                print(response_text(chunk), end="", flush=True)
            print()
        else:
            response = await generator.generate_content(
                GenerateRequest(contents=args.prompt), prompt_id,
            )
            print(response_text(response))
    finally:
        await generator.aclose()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    load_environment(args.env_file)

    try:
        return asyncio.run(run(args))
    except ContentGeneratorError as e:
        logger.error("%s", e)
        return 1
    except httpx.HTTPError as e:
        logger.error("Request failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
