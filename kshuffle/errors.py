class KShuffleError(Exception):
    """Base class for all kshuffle errors."""


class FastaParseError(KShuffleError):
    """
    The input is not valid single-line FASTA.

    @param message: A C{str} description of the problem.
    @param lineNumber: The 1-based C{int} number of the offending input line.
    """

    def __init__(self, message, lineNumber):
        super().__init__(message)
        self.lineNumber = lineNumber


class MalformedIdentifierError(FastaParseError):
    """
    An identifier line is too short or does not start with '>'.

    @param looksLikeSequence: If C{True}, the offending line is itself a
        valid nucleotide sequence, which usually means the input is
        multi-line FASTA.
    """

    def __init__(self, message, lineNumber, looksLikeSequence=False):
        super().__init__(message, lineNumber)
        self.looksLikeSequence = looksLikeSequence


class MissingSequenceLineError(FastaParseError):
    """The input ended right after an identifier line."""


class InvalidSequenceError(FastaParseError):
    """A sequence line is empty or holds a non-IUPAC nucleotide character."""


class LineTooLongError(FastaParseError):
    """
    An input line reached the configured line length ceiling.

    @param maxLength: The C{int} ceiling that was reached.
    """

    def __init__(self, message, lineNumber, maxLength):
        super().__init__(message, lineNumber)
        self.maxLength = maxLength


class InvalidConfigurationError(KShuffleError):
    """A numeric or named option has an unusable value."""


class ShuffleEngineError(KShuffleError):
    """A shuffle engine was used out of its init/next/release order."""
