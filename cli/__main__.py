"""
Entry point for running the ai-engine CLI as a module.

Usage:
    python -m cli chat --objective "Book a table for two"
    python -m cli function-groups
    python -m cli credits
    python -m cli models
"""

import asyncio
from .commands import main

if __name__ == "__main__":
    asyncio.run(main())
