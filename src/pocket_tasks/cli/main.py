# src/pocket_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the stored tasks, then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..storage.kv_store import StorageError
from ..tasks.task_store import CorruptTaskDataError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s (storage=%s)...", settings.app_name, settings.storage_backend)

    state = create_initial_state(settings=settings)

    # A failed read must not turn into an empty list that the next save would
    # write over the real data.
    try:
        state.task_store.load()
    except CorruptTaskDataError:
        logger.exception("Stored tasks are corrupt (key=%s).", settings.storage_key)
        print("Stored tasks could not be parsed; refusing to start. See the log for details.")
        return 1
    except StorageError:
        logger.exception("Could not read stored tasks.")
        print("Could not read stored tasks; refusing to start. See the log for details.")
        return 1

    try:
        run_console_loop(state)
    finally:
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
