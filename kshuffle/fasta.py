from typing import Iterator, Optional

from kshuffle.dna import isValidNucleotide
from kshuffle.errors import (
    FastaParseError,
    InvalidConfigurationError,
    InvalidSequenceError,
    LineTooLongError,
    MalformedIdentifierError,
    MissingSequenceLineError,
)
from kshuffle.reads import Read
from kshuffle.utils import asHandle, chomp

# These limits are generous for short reads. Each counts the line terminator.
MAX_ID_LENGTH = 32678
MAX_SEQUENCE_LENGTH = 1000000

# Reader states.
AWAITING_IDENTIFIER = "awaiting identifier"
AWAITING_SEQUENCE = "awaiting sequence"
FAILED = "failed"

ON_ERROR_CHOICES = ("abort", "collect")


class SingleLineFastaReads:
    """
    Read FASTA in which every record is exactly two lines: an identifier line
    starting with '>' followed by a single line of IUPAC nucleotides.

    Input is validated as it is read. Lines are never silently truncated: a
    line that reaches its length ceiling is an error, so memory use is
    bounded by the ceilings.

    @param _file: Either a C{str} or C{Path} file name (which may end in
        '.gz' or '.bz2') or an open text or binary file handle.
    @param maxIdLength: The C{int} identifier line ceiling. A line of
        C{maxIdLength - 1} characters or more (counting its terminator)
        results in a L{LineTooLongError}.
    @param maxSequenceLength: The C{int} sequence line ceiling, used in the
        same way as C{maxIdLength}.
    @param onError: Either 'abort' (raise the first error) or 'collect'
        (store errors in C{self.errors}, skip the bad record, and continue).
    @raise InvalidConfigurationError: If a ceiling is less than 2 or
        C{onError} is not a known strategy.
    """

    def __init__(
        self,
        _file,
        maxIdLength: int = MAX_ID_LENGTH,
        maxSequenceLength: int = MAX_SEQUENCE_LENGTH,
        onError: str = "abort",
    ):
        for name, value in (
            ("maxIdLength", maxIdLength),
            ("maxSequenceLength", maxSequenceLength),
        ):
            if not isinstance(value, int) or value < 2:
                raise InvalidConfigurationError(
                    f"Invalid {name} value ({value!r}). Must be a number "
                    f"larger than one."
                )

        if onError not in ON_ERROR_CHOICES:
            raise InvalidConfigurationError(
                f"Invalid onError value ({onError!r}). Must be one of "
                f"{', '.join(ON_ERROR_CHOICES)}."
            )

        self._file = _file
        self.maxIdLength = maxIdLength
        self.maxSequenceLength = maxSequenceLength
        self.onError = onError
        self.lineNumber = 1
        self.state = AWAITING_IDENTIFIER
        self.errors = []
        self._error = None
        self._failedState = None
        self._lastLineComplete = True

    def __iter__(self):
        return self.iter()

    def iter(self) -> Iterator[Read]:
        """
        Iterate over the records in our file, in input order.

        @raise FastaParseError: (a subclass of) if the input is invalid and
            our error strategy is 'abort'.
        @return: A generator of L{kshuffle.reads.Read} instances.
        """
        with asHandle(self._file) as fp:
            while True:
                try:
                    read = self.nextRecord(fp)
                except FastaParseError as e:
                    if self.onError == "abort":
                        raise
                    self.errors.append(e)
                    if isinstance(e, MissingSequenceLineError):
                        return
                    self._skipFailedRecord(fp, e)
                    continue

                if read is None:
                    return

                yield read

    def nextRecord(self, fp) -> Optional[Read]:
        """
        Read the next record.

        @param fp: An open text or binary file handle.
        @raise FastaParseError: (a subclass of) if the record is invalid. The
            reader is then in the C{FAILED} state and any further call raises
            the same error.
        @return: A L{kshuffle.reads.Read} or C{None} at the end of the input.
        """
        if self.state == FAILED:
            raise self._error

        try:
            read = self._nextRecord(fp)
        except FastaParseError as e:
            self._failedState = self.state
            self.state = FAILED
            self._error = e
            self.lineNumber += 2
            raise

        if read is not None:
            self.lineNumber += 2

        return read

    def _nextRecord(self, fp) -> Optional[Read]:
        self.state = AWAITING_IDENTIFIER
        lineNumber = self.lineNumber

        raw = self._readLine(fp, self.maxIdLength)
        if not raw:
            # End of input. This is not an error.
            return None

        if len(raw) >= self.maxIdLength - 1:
            raise LineTooLongError(
                f"Internal error: got a too-long input line (line {lineNumber}). "
                f"Please increase the maximum identifier line length "
                f"(currently {self.maxIdLength}).",
                lineNumber,
                self.maxIdLength,
            )

        identifier = chomp(raw)

        if len(identifier) < 2:
            raise MalformedIdentifierError(
                f"Input error: got too-short ID line (line {lineNumber}).",
                lineNumber,
            )

        if identifier[0] != ">":
            if isValidNucleotide(identifier):
                raise MalformedIdentifierError(
                    f"Input error: input looks like a multi-line FASTA file "
                    f"(line {lineNumber} should start with '>' but contains "
                    f"nucleotide sequence). This program requires a "
                    f"single-line FASTA file.",
                    lineNumber,
                    looksLikeSequence=True,
                )
            raise MalformedIdentifierError(
                f"Input error: Invalid FASTA identifier on line {lineNumber} "
                f"(expecting line with '>').",
                lineNumber,
            )

        self.state = AWAITING_SEQUENCE
        lineNumber += 1

        raw = self._readLine(fp, self.maxSequenceLength)
        if not raw:
            raise MissingSequenceLineError(
                f"Input error: Missing nucleotide sequence line in input FASTA "
                f"file (line {lineNumber}).",
                lineNumber,
            )

        if len(raw) >= self.maxSequenceLength - 1:
            raise LineTooLongError(
                f"Internal error: got a too-long input line (line {lineNumber}). "
                f"Please increase the maximum sequence line length "
                f"(currently {self.maxSequenceLength}).",
                lineNumber,
                self.maxSequenceLength,
            )

        sequence = chomp(raw)

        if not isValidNucleotide(sequence):
            raise InvalidSequenceError(
                f"Input error: Invalid input file, expecting nucleotide "
                f"sequence line on line {lineNumber}.",
                lineNumber,
            )

        self.state = AWAITING_IDENTIFIER
        return Read(identifier[1:], sequence)

    def _readLine(self, fp, maxLength: int) -> str:
        """
        Read at most C{maxLength - 1} characters of one line.

        @param fp: An open text or binary file handle.
        @param maxLength: The C{int} line length ceiling.
        @return: The C{str} line, including its terminator (if any), or the
            empty string at the end of the input.
        """
        line = fp.readline(maxLength - 1)
        if isinstance(line, bytes):
            line = line.decode("latin-1")
        self._lastLineComplete = line.endswith("\n")
        return line

    def _drainLine(self, fp, maxLength: int) -> bool:
        """
        Read (and discard) the remainder of an overlong line.

        @return: C{True} if the end of the input was reached.
        """
        while True:
            chunk = self._readLine(fp, maxLength)
            if not chunk:
                return True
            if chunk.endswith("\n"):
                return False

    def _skipFailedRecord(self, fp, error: FastaParseError) -> None:
        """
        Skip the remainder of a record that failed to parse, so that reading
        can resume with the following identifier line.

        @param fp: An open text or binary file handle.
        @param error: The L{FastaParseError} the record failed with.
        """
        self.state = AWAITING_IDENTIFIER

        if isinstance(error, LineTooLongError) and not self._lastLineComplete:
            if self._drainLine(fp, error.maxLength):
                return

        if self._failedState == AWAITING_IDENTIFIER:
            # Consume the sequence line that belongs to the bad identifier.
            if not self._readLine(fp, self.maxSequenceLength).endswith("\n"):
                self._drainLine(fp, self.maxSequenceLength)
