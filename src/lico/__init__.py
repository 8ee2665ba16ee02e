from importlib.metadata import PackageNotFoundError, version

try:
    dist_name = "lico"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from .cursor import (
    Cursor,
    EmptyCursor,
    FilterCursor,
    ProjectCursor,
    ChainCursor,
    RepeatCursor,
    IntersectCursor,
    open_cursor,
    empty,
    repeat,
    chain,
    intersect,
)
from .extensions import (
    single,
    single_or,
    single_or_else,
    single_or_default,
    first,
    first_or,
    first_or_else,
    first_or_default,
    last,
    last_or,
    last_or_else,
    last_or_default,
    count,
    any_of,
    all_of,
)
from .view import View
