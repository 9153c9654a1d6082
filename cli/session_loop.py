"""
Interactive conversation loop for the ai-engine CLI.

Polls the session, prints each new message and prompts for the reply its
type calls for. Gives up after a run of empty polls; the session is always
deleted on the way out.
"""

import asyncio
from typing import Awaitable, Callable

from ai_engine import (
    AgentMessage,
    AiEngineMessage,
    ConfirmationMessage,
    Session,
    StopMessage,
    TaskSelectionMessage,
)

from .interface import print_agent_message, print_confirmation, print_engine_info, print_task_options

DEFAULT_POLL_INTERVAL_SECONDS = 1.2
DEFAULT_MAX_EMPTY_POLLS = 12

EXIT_COMMANDS = {"exit", "quit"}


async def run_conversation(
    session: Session,
    objective: str,
    *,
    context: str = "",
    ask: Callable[[str], str] = input,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    max_empty_polls: int = DEFAULT_MAX_EMPTY_POLLS,
) -> bool:
    """Drive one conversation to completion.

    Returns True when the engine sent a stop message, False when the loop
    gave up or the user exited.
    """
    async with session:
        await session.start(objective, context)

        empty_polls = 0
        while empty_polls < max_empty_polls:
            messages = await session.poll()
            empty_polls = empty_polls + 1 if not messages else 0

            for message in messages:
                if isinstance(message, TaskSelectionMessage):
                    print_task_options(message)
                    while True:
                        raw = ask("\nEnter task number: ").strip()
                        try:
                            index = int(raw)
                        except ValueError:
                            print("Please enter a number.")
                            continue
                        if 0 <= index < len(message.options):
                            break
                        print("Invalid task number.")
                    await session.submit_task_selection(message, [index])

                elif isinstance(message, AgentMessage):
                    print_agent_message(message)
                    response = ask("User (enter to skip): ")
                    if response.strip().lower() in EXIT_COMMANDS:
                        return False
                    if response:
                        await session.submit_response(message, response)

                elif isinstance(message, AiEngineMessage):
                    print_engine_info(message)

                elif isinstance(message, ConfirmationMessage):
                    print_confirmation(message)
                    response = ask("\nPress enter to confirm, otherwise explain issue:\n")
                    if response == "":
                        print("Sending confirmation...")
                        await session.submit_confirmation(message)
                    else:
                        await session.reject_confirmation(message, response)

                elif isinstance(message, StopMessage):
                    print("\nSession has ended")
                    return True

            await sleep(poll_interval)

        print(f"\nNo new messages after {max_empty_polls} polls; giving up.")
        return False
