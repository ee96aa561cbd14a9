"""
Verbosity-gated logging for the conversion pipeline, on top of loguru.

The ProgramState of the running conversion is kept in a context variable,
so the classifier, renderer, slide compiler and resolver can log without
carrying the state around. Messages go to stderr; the outputs themselves
are files, never stdout.

Usage:
    from mapdown.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)            # once, in main()

    LOG("Reading file: talk.xmind", level=1)
    LOG("Found 3 unique PubMed PMID reference(s)", level=2)
    LOG("  regular: 'Point A'", level=3)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

# State of the conversion running in this context
_current_state: ContextVar[Optional[Any]] = ContextVar('mapdown_state', default=None)

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module}.{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make a ProgramState the verbosity source of LOG() in this context.

    Args:
        state: Object with a ``verbosity`` attribute (a ProgramState)
    """
    _current_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit a message when the connected state is verbose enough.

    Nothing is logged until state_connectToLogger() has been called.

    Args:
        message: Text to log
        level: Verbosity the message needs
               1 progress, 2 details (-v), 3 per-topic traces (-vv)
        **kwargs: Formatting arguments passed on to loguru
    """
    state = _current_state.get()
    if state is None or getattr(state, 'verbosity', 0) < level:
        return
    logger.opt(depth=1).debug(message, **kwargs)
