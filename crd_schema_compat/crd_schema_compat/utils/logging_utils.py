import logging
import sys
from typing import List, Optional, Union

LevelLike = Union[int, str, None]


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int) -> None:
        super().__init__()
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self._max_level


class _SplitStreamHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_split_stream_logging`."""


def resolve_level(level: LevelLike, default: int = logging.INFO) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), default)


def configure_split_stream_logging(
    *,
    level: LevelLike = logging.INFO,
    stderr_level: LevelLike = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> List[logging.Handler]:
    """Route root logging for a verification run.

    Per-kind progress (DEBUG/INFO) goes to stdout, failures (``stderr_level``
    and above) go to stderr, so ``--format json`` piped into a file still
    surfaces failing kinds on the terminal. Levels may be names taken straight
    from the ``CRD_SCHEMA_COMPAT_*`` environment.

    Calling it again replaces only the handlers it installed before; handlers
    added by the embedding application are left alone.

    Returns:
        The stdout and stderr handlers now attached to the root logger
    """
    level = resolve_level(level, logging.INFO)
    stderr_level = max(resolve_level(stderr_level, logging.WARNING), logging.DEBUG)
    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _SplitStreamHandler)]:
        root.removeHandler(handler)
    root.setLevel(level)

    stdout_handler = _SplitStreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(_MaxLevelFilter(stderr_level - 1))

    stderr_handler = _SplitStreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(stderr_level)

    handlers: List[logging.Handler] = [stdout_handler, stderr_handler]
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return handlers
