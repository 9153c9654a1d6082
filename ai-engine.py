#!/usr/bin/env python3
"""
ai-engine: command-line driver for the AI Engine SDK

Runs a task-oriented conversation with the AI Engine: states an objective,
then answers task selections, agent questions and confirmations until the
engine stops the session.

Usage:
    python ai-engine.py chat --objective "Find me a flight to Berlin"

Requires an API key in AV_API_KEY (a .env file is honoured) or --api-key.

This file is a thin wrapper around the ai_engine package.
For the implementation, see the ai_engine/ and cli/ directories.
"""

import asyncio
from cli.commands import main

if __name__ == "__main__":
    asyncio.run(main())
