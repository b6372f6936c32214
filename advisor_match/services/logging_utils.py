import sys
from typing import Callable, Optional, TextIO

LogFn = Callable[[str], None]


def print_with_prefix(
    prefix: str,
    message: Optional[str],
    enabled: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    # stderr by default: the batch runner may be writing JSON to stdout
    if not enabled:
        return
    out = stream or sys.stderr
    text = "" if message is None else str(message)
    lines = text.splitlines() or [""]
    for line in lines:
        if line:
            print(f"{prefix} {line}", file=out)
        else:
            print(prefix, file=out)


def prefixed_logger(prefix: str, enabled: bool = True) -> LogFn:
    """Log function bound to a component prefix, e.g. "[MatchingEngine]"."""
    def _log(message: str) -> None:
        print_with_prefix(prefix, message, enabled=enabled)
    return _log


def log_section(
    log_fn: LogFn,
    title: str,
    width: int = 70,
    char: str = "=",
) -> None:
    line = char * width
    log_fn(line)
    log_fn(title)
    log_fn(line)
