"""
CLI subcommand implementations for the ai-engine SDK.

Subcommands::

    ai-engine chat            [--objective TEXT] [--function-group NAME|UUID] [--model M]
    ai-engine function-groups
    ai-engine credits
    ai-engine models
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from ai_engine import AVAILABLE_MODELS, DEFAULT_MODEL, AiEngine, EngineError, FunctionGroup

from .interface import print_credits, print_function_groups, print_models
from .session_loop import DEFAULT_MAX_EMPTY_POLLS, DEFAULT_POLL_INTERVAL_SECONDS, run_conversation

DEFAULT_FUNCTION_GROUP = "Fetch Verified"


def find_function_group(groups: list[FunctionGroup], name_or_uuid: str) -> FunctionGroup | None:
    """Match a function group by uuid first, then by case-insensitive name."""
    for g in groups:
        if g.uuid == name_or_uuid:
            return g
    wanted = name_or_uuid.strip().lower()
    for g in groups:
        if g.name.lower() == wanted:
            return g
    return None


def create_engine(args) -> AiEngine:
    return AiEngine(args.api_key, api_base_url=args.base_url)


# ---------------------------------------------------------------------------
# Subcommand: chat
# ---------------------------------------------------------------------------

async def cmd_chat(args):
    """Run an interactive conversation."""
    engine = create_engine(args)

    groups = await engine.get_function_groups()
    group = find_function_group(groups, args.function_group)
    if group is None:
        print(f"Error: Could not find function group {args.function_group!r}.")
        sys.exit(1)

    objective = args.objective or input("What is your objective: ")

    session = await engine.create_session(group.uuid, email=args.email, model=args.model)
    print(f"  [Session {session.session_id} created in {group.name!r}]")

    await run_conversation(
        session,
        objective,
        context=args.context or "",
        poll_interval=args.poll_interval,
        max_empty_polls=args.max_empty_polls,
    )


# ---------------------------------------------------------------------------
# Subcommands: account reads
# ---------------------------------------------------------------------------

async def cmd_function_groups(args):
    engine = create_engine(args)
    print_function_groups(await engine.get_function_groups())


async def cmd_credits(args):
    engine = create_engine(args)
    print_credits(await engine.get_credits())


async def cmd_models(args):
    engine = create_engine(args)
    print_models(await engine.get_models())


COMMANDS = {
    "chat": cmd_chat,
    "function-groups": cmd_function_groups,
    "credits": cmd_credits,
    "models": cmd_models,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="ai-engine",
        description="Talk to the AI Engine from the command line",
    )
    parser.add_argument("--api-key", help="API key (or set AV_API_KEY)")
    parser.add_argument("--base-url", help="API base URL (or set AI_ENGINE_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- chat ---
    p_chat = subparsers.add_parser("chat", help="Start an interactive conversation")
    p_chat.add_argument("--objective", help="Objective text (prompted if omitted)")
    p_chat.add_argument("--context", help="Additional context for the objective")
    p_chat.add_argument(
        "--function-group", default=DEFAULT_FUNCTION_GROUP,
        help=f"Function group name or uuid (default: {DEFAULT_FUNCTION_GROUP})",
    )
    p_chat.add_argument("--email", help="Email to associate with the session")
    p_chat.add_argument(
        "--model", choices=list(AVAILABLE_MODELS.keys()),
        default=DEFAULT_MODEL, help=f"Model (default: {DEFAULT_MODEL})",
    )
    p_chat.add_argument(
        "--poll-interval", type=float, default=DEFAULT_POLL_INTERVAL_SECONDS,
        help=f"Seconds between polls (default: {DEFAULT_POLL_INTERVAL_SECONDS})",
    )
    p_chat.add_argument(
        "--max-empty-polls", type=int, default=DEFAULT_MAX_EMPTY_POLLS,
        help=f"Give up after this many empty polls in a row (default: {DEFAULT_MAX_EMPTY_POLLS})",
    )

    # --- account reads ---
    subparsers.add_parser("function-groups", help="List available function groups")
    subparsers.add_parser("credits", help="Show credit balance")
    subparsers.add_parser("models", help="List models with remaining credits")

    return parser


async def main(argv=None):
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        await COMMANDS[args.command](args)
    except (EngineError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        print("\n\nAborted.")
        sys.exit(130)


def run():
    """Console-script entry point."""
    asyncio.run(main())
