"""Executor selection for reading many splits at once."""

import os
import sys
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import TypeAlias

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

# Environment variable to override executor selection.
SLR_EXECUTOR_ENV = "SLR_EXECUTOR"

# None means every split is read in the calling thread.
EXECUTOR_MODES: dict[str, ExecutorClass] = {
    "serial": None,
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
}


def is_gil_enabled() -> bool:
    """Check if GIL is enabled."""
    try:
        return sys._is_gil_enabled()
    except AttributeError:
        return True


def get_executor_class(mode: str | None = None) -> ExecutorClass:
    """
    Select the executor class used to run split readers.

    Priority:
    1. mode argument ("threads", "processes" or "serial")
    2. SLR_EXECUTOR env var, same values
    3. Auto-select on GIL status (disabled -> threads, enabled -> processes)
    """
    mode = (mode or os.environ.get(SLR_EXECUTOR_ENV, "")).lower()
    if mode:
        if mode not in EXECUTOR_MODES:
            raise ValueError(f"unknown executor {mode!r}, expected one of {sorted(EXECUTOR_MODES)}")
        return EXECUTOR_MODES[mode]

    if is_gil_enabled():
        return ProcessPoolExecutor
    return ThreadPoolExecutor


def describe_executor(executor_class: ExecutorClass) -> str:
    """Convert an executor class into its mode name."""
    for name, candidate in EXECUTOR_MODES.items():
        if candidate is executor_class:
            return name
    return executor_class.__name__
