import argparse
import sys
from time import time

from numpy.random import default_rng

from kshuffle import __version__
from kshuffle.errors import FastaParseError, InvalidConfigurationError
from kshuffle.fasta import (
    MAX_ID_LENGTH,
    MAX_SEQUENCE_LENGTH,
    ON_ERROR_CHOICES,
    SingleLineFastaReads,
)
from kshuffle.permute import FixedCount, RetryUntilDistinct, permuteReads
from kshuffle.shuffle import EulerShuffleEngine, UShuffleEngine

EPILOG = """\
Nucleotide sequences in the input FASTA file must be in a single line.
This is a valid input file:
  >dummy1
  AGTAGTAGTAGTAGTAGTAGTAGTAGTAGTAGAGTG
  >dummy2
  CTGAGAGTCACACATGATTTTACAACAACCATGAAG

This is not a valid input file:
  >dummy1
  AGTAGTAGTAGTAGTAGTAGTAGTAG
  TAGTAGAGTG
  >dummy2
  CTGAGAGTCACACATGATTTTACAAC
  AACCATGAAG

Use a FASTA formatter to convert a multi-line FASTA file first.
"""


def getArgs(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            "Given single-line FASTA on standard input, write shuffled "
            "sequences that preserve their k-let counts to standard output."
        ),
        epilog=EPILOG,
    )

    parser.add_argument(
        "-o",
        "--printOriginal",
        action="store_true",
        help="Also print each original (unshuffled) sequence.",
    )

    parser.add_argument(
        "-k",
        "--letSize",
        type=int,
        default=2,
        metavar="N",
        help="The let size. Counts of all lets of this length are preserved.",
    )

    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        metavar="N",
        help=(
            "The seed for the random number generator. If not given, the "
            "current time (in seconds) is used."
        ),
    )

    parser.add_argument(
        "-n",
        "--permutations",
        type=int,
        default=1,
        metavar="N",
        help=(
            "For each input sequence, print N permutations (default 1). "
            "Permutations are not checked to differ from the original. Use "
            "this only for debugging."
        ),
    )

    parser.add_argument(
        "-r",
        "--retries",
        type=int,
        default=10,
        metavar="N",
        help=(
            "Retry N times to find a shuffle that differs from the original "
            "(default 10). After N retries a warning is printed and the last "
            "(possibly unshuffled) sequence is written."
        ),
    )

    parser.add_argument(
        "--fastaFile",
        metavar="FILENAME",
        help=(
            "The name of the FASTA input file (which may be compressed with "
            "gzip or bzip2). Standard input will be read if no file name is "
            "given."
        ),
    )

    parser.add_argument(
        "--maxIdLength",
        type=int,
        default=MAX_ID_LENGTH,
        metavar="N",
        help=(
            f"The maximum identifier line length, including the line "
            f"terminator (default {MAX_ID_LENGTH})."
        ),
    )

    parser.add_argument(
        "--maxSequenceLength",
        type=int,
        default=MAX_SEQUENCE_LENGTH,
        metavar="N",
        help=(
            f"The maximum sequence line length, including the line "
            f"terminator (default {MAX_SEQUENCE_LENGTH})."
        ),
    )

    parser.add_argument(
        "--onError",
        default="abort",
        choices=ON_ERROR_CHOICES,
        help=(
            "What to do with an invalid input record. With 'abort' (the "
            "default), stop at the first one. With 'collect', skip invalid "
            "records, report them all at the end, and exit with status 1."
        ),
    )

    parser.add_argument(
        "--engine",
        default="euler",
        choices=("euler", "ushuffle"),
        help=(
            "The shuffling engine. 'euler' (the default) is pure Python and "
            "honors --seed. 'ushuffle' needs the ushuffle package and uses "
            "its own random state."
        ),
    )

    parser.add_argument(
        "--quiet",
        dest="verbose",
        action="store_false",
        help="Do not print a warning when no new shuffle can be found.",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def _checkOptions(args: argparse.Namespace) -> None:
    """
    Check numeric options for values the argument parser cannot rule out.

    @param args: An argparse namespace, as returned by C{getArgs}.
    @raise InvalidConfigurationError: If an option has an invalid value.
    """
    for option, value in (
        ("-k", args.letSize),
        ("-n", args.permutations),
        ("-r", args.retries),
    ):
        if value <= 0:
            raise InvalidConfigurationError(
                f"invalid {option} value ({value}). Must be a number "
                f"larger than zero."
            )

    if args.seed is not None and args.seed < 0:
        raise InvalidConfigurationError(
            f"invalid -s value ({args.seed}). Must not be negative."
        )


def main(argv=None, stdin=None, stdout=None, stderr=None) -> int:
    """
    Shuffle FASTA records.

    @param argv: A C{list} of C{str} command-line arguments, or C{None} to
        use C{sys.argv}.
    @param stdin: The input file handle, used when no --fastaFile is given.
        If C{None}, C{sys.stdin} is used.
    @param stdout: The output file handle. If C{None}, C{sys.stdout}.
    @param stderr: The diagnostic file handle. If C{None}, C{sys.stderr}.
    @return: The C{int} exit status.
    """
    stdin = sys.stdin if stdin is None else stdin
    # Read bytes, so input decoding does not depend on the locale.
    stdin = getattr(stdin, "buffer", stdin)
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    args = getArgs(argv)

    def warn(message):
        if args.verbose:
            print(message, file=stderr)

    try:
        _checkOptions(args)

        reads = SingleLineFastaReads(
            stdin if args.fastaFile is None else args.fastaFile,
            maxIdLength=args.maxIdLength,
            maxSequenceLength=args.maxSequenceLength,
            onError=args.onError,
        )

        if args.engine == "euler":
            seed = int(time()) if args.seed is None else args.seed
            engine = EulerShuffleEngine(default_rng(seed))
        else:
            try:
                engine = UShuffleEngine()
            except ImportError:
                print(
                    "Error: the ushuffle engine needs the ushuffle package "
                    "(pip install kshuffle[ushuffle]).",
                    file=stderr,
                )
                return 1

        mode = (
            FixedCount(args.permutations)
            if args.permutations > 1
            else RetryUntilDistinct(args.retries)
        )

        for read in permuteReads(
            reads, args.letSize, mode, engine, args.printOriginal, warn
        ):
            print(read.toString("fasta"), end="", file=stdout)

    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=stderr)
        return 1
    except FastaParseError as e:
        print(e, file=stderr)
        return 1
    except MemoryError:
        print("Error: memory allocation failed.", file=stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=stderr)
        return 1

    if reads.errors:
        for error in reads.errors:
            print(error, file=stderr)
        print(
            f"Found {len(reads.errors)} invalid input "
            f"record{'' if len(reads.errors) == 1 else 's'}.",
            file=stderr,
        )
        return 1

    return 0
