import sys
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional

from kshuffle.errors import InvalidConfigurationError
from kshuffle.reads import Read
from kshuffle.shuffle import ShuffleEngine


def _checkPositive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidConfigurationError(
            f"Invalid {name} value ({value!r}). Must be a number larger than zero."
        )
    return value


class FixedCount:
    """
    Emit exactly C{n} permutations per sequence, with no check that they
    differ from the original (or from each other). Useful for debugging.

    @param n: The C{int} number of permutations.
    @raise InvalidConfigurationError: If C{n} is not a positive C{int}.
    """

    def __init__(self, n: int):
        self.n = _checkPositive("permutation count", n)

    def __eq__(self, other):
        return isinstance(other, FixedCount) and self.n == other.n

    def __repr__(self):
        return f"FixedCount({self.n})"


class RetryUntilDistinct:
    """
    Emit one permutation per sequence, trying up to C{maxRetries} times to
    find one that differs from the original.

    @param maxRetries: The C{int} maximum number of attempts.
    @raise InvalidConfigurationError: If C{maxRetries} is not a positive
        C{int}.
    """

    def __init__(self, maxRetries: int):
        self.maxRetries = _checkPositive("retry count", maxRetries)

    def __eq__(self, other):
        return (
            isinstance(other, RetryUntilDistinct)
            and self.maxRetries == other.maxRetries
        )

    def __repr__(self):
        return f"RetryUntilDistinct({self.maxRetries})"


def _printWarning(message: str) -> None:
    print(message, file=sys.stderr)


@contextmanager
def shuffleSession(engine: ShuffleEngine, sequence: str, k: int):
    """
    A context manager for shuffling one sequence. The engine is always
    released on exit, including when an exception is raised.

    @param engine: A L{kshuffle.shuffle.ShuffleEngine} instance.
    @param sequence: The C{str} sequence to shuffle.
    @param k: The C{int} let size.
    @return: A generator that yields C{engine}, initialized for C{sequence}.
    """
    engine.init(sequence, k)
    try:
        yield engine
    finally:
        engine.release()


def permuteRead(
    read: Read,
    k: int,
    mode,
    engine: ShuffleEngine,
    warn: Optional[Callable[[str], None]] = None,
) -> list[Read]:
    """
    Make shuffled versions of a read.

    @param read: A L{kshuffle.reads.Read} instance.
    @param k: The C{int} let size. Lets of this size have their counts
        preserved. This is passed to the engine even if it is larger than
        the read.
    @param mode: A L{FixedCount} or L{RetryUntilDistinct} instance.
    @param engine: A L{kshuffle.shuffle.ShuffleEngine} instance.
    @param warn: A function to call with a C{str} warning if no permutation
        different from the original could be found. If C{None}, warnings are
        printed to standard error.
    @raise InvalidConfigurationError: If C{k} is not a positive C{int} or
        C{mode} is of an unknown type.
    @return: A C{list} of L{kshuffle.reads.Read} instances.
    """
    _checkPositive("let size", k)
    warn = warn or _printWarning
    sequence = read.sequence

    with shuffleSession(engine, sequence, k):
        if isinstance(mode, FixedCount):
            return [
                Read(f"{read.id}-perm{count}", engine.next())
                for count in range(1, mode.n + 1)
            ]

        elif isinstance(mode, RetryUntilDistinct):
            for _ in range(mode.maxRetries):
                permutation = engine.next()
                if permutation != sequence:
                    return [Read(read.id, permutation)]

            warn(
                f'WARNING: failed to find new shuffle for sequence "{sequence}" '
                f"(>{read.id}) after {mode.maxRetries} retries"
            )
            return [Read(read.id, permutation)]

        else:
            raise InvalidConfigurationError(f"Unknown shuffle mode {mode!r}.")


def permuteReads(
    reads: Iterable[Read],
    k: int,
    mode,
    engine: ShuffleEngine,
    printOriginal: bool = False,
    warn: Optional[Callable[[str], None]] = None,
) -> Iterator[Read]:
    """
    Shuffle a collection of reads, one at a time and in order.

    @param reads: An iterable of L{kshuffle.reads.Read} instances.
    @param k: The C{int} let size.
    @param mode: A L{FixedCount} or L{RetryUntilDistinct} instance.
    @param engine: A L{kshuffle.shuffle.ShuffleEngine} instance.
    @param printOriginal: If C{True}, each read is first yielded unchanged,
        with '-unshuffled' appended to its id.
    @param warn: A warning function, as for L{permuteRead}.
    @return: A generator of L{kshuffle.reads.Read} instances.
    """
    for read in reads:
        if printOriginal:
            yield Read(f"{read.id}-unshuffled", read.sequence)

        yield from permuteRead(read, k, mode, engine, warn)
