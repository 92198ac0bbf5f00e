"""Explicit success/failure values for gateway calls.

Callers branch with structural pattern matching::

    match await gateway.fetch_live_feed(game_pk):
        case Ok(feed):
            ...
        case Err(error):
            logger.error("feed failed: %s", error.message)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
