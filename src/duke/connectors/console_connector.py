# src/duke/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..core.results import Failure, render_result
from ..core.state import AppState

logger = logging.getLogger(__name__)

BANNER = "Hello I'm Duke!\nWhat can I do for you?"


def run_console_loop(state: AppState) -> None:
    """
    Blocking REPL: one line is fully handled (and persisted) before the next
    is read. Returns on an exit command, EOF or Ctrl+C.
    """
    prompt = str(getattr(getattr(state, "settings", None), "prompt", "$ "))
    logger.info("Console connector started (tasks=%d).", state.tasks.size())
    print(BANNER)

    while True:
        try:
            user_input = input(prompt)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        # handle() never raises; handler crashes come back as a Failure.
        result = command_registry.handle(state, user_input)
        print(render_result(result))

        if not isinstance(result, Failure) and result.exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")
