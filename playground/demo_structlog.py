"""Demo: structlog integration.

Run this to see classified user functions rendered in structlog output.
Note: requires `structlog` to be installed (pip install structlog).
"""

from __future__ import annotations

from collections.abc import Callable

from userfn import Context, EventTime, Ref, UserFnError, describe, dofn
from userfn.contrib.structlog import userfn_processor

try:
    import structlog
except ImportError:
    print("This demo requires structlog: pip install structlog")
    raise SystemExit(1) from None

structlog.configure(
    processors=[
        userfn_processor,
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.BoundLogger,
    logger_factory=structlog.PrintLoggerFactory(),
)

log = structlog.get_logger()


@dofn
def split_words(ctx: Context, line: str, emit: Callable[[str], None]) -> None:
    for word in line.split():
        emit(word)


@dofn
def count(
    ts: EventTime, word: str, ones: Callable[[Ref[int]], bool]
) -> tuple[str, int, Exception | None]:
    n, one = 0, Ref[int]()
    while ones(one):
        n += one.value
    return word, n, None


if __name__ == "__main__":
    log.info("registered", fn=describe(split_words))
    log.info("registered", fn=describe(count))

    try:
        describe(lambda line: line)
    except UserFnError as exc:
        log.warning("rejected", error=str(exc))
