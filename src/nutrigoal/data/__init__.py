"""Input file loading."""

from nutrigoal.data.loaders import (
    LoaderError,
    dump_score_history,
    load_day,
    load_profile,
    load_score_history,
)

__all__ = [
    "LoaderError",
    "dump_score_history",
    "load_day",
    "load_profile",
    "load_score_history",
]
