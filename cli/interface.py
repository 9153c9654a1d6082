"""
Console rendering helpers for the ai-engine CLI.
"""

import json

from ai_engine import (
    AgentMessage,
    AiEngineMessage,
    ConfirmationMessage,
    CreditBalance,
    FunctionGroup,
    Model,
    TaskSelectionMessage,
)


def print_task_options(message: TaskSelectionMessage):
    """Print a task selection as a numbered list (numbers are indexes)."""
    if message.text:
        print(f"\n{message.text}")
    print("Please select a task from the list below:")
    print("")
    for i, option in enumerate(message.options):
        print(f"  {i}: {option.title}")


def print_agent_message(message: AgentMessage):
    print(f"Agent: {message.text}")


def print_engine_info(message: AiEngineMessage):
    print(f"Engine: {message.text}")


def print_confirmation(message: ConfirmationMessage):
    if message.text:
        print(f"\n{message.text}")
    print("Confirm:")
    print(json.dumps(message.payload, indent=2, sort_keys=True, default=str))


def print_function_groups(groups: list[FunctionGroup]):
    if not groups:
        print("No function groups found.")
        return
    print(f"\n{'UUID':<38}  {'Scope':<7}  {'Name'}")
    print("-" * 70)
    for g in groups:
        scope = "private" if g.is_private else "public"
        print(f"{g.uuid:<38}  {scope:<7}  {g.name}")


def print_credits(balance: CreditBalance):
    print(f"  Total:     {balance.total_credits}")
    print(f"  Used:      {balance.used_credits}")
    print(f"  Available: {balance.available_credits}")


def print_models(models: list[Model]):
    print(f"\n{'ID':<20}  {'Name':<18}  {'Credits':>10}")
    print("-" * 52)
    for m in models:
        print(f"{m.id:<20}  {m.name:<18}  {m.credits:>10}")
