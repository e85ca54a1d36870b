from functools import total_ordering


@total_ordering
class Read:
    """
    Hold information about a single FASTA record.

    @param id: A C{str} describing the read (without the leading '>').
    @param sequence: A C{str} of nucleotides.
    """

    def __init__(self, id: str, sequence: str):
        self.id = id
        self.sequence = sequence

    def __eq__(self, other):
        return self.id == other.id and self.sequence == other.sequence

    def __lt__(self, other):
        return (self.id, self.sequence) < (other.id, other.sequence)

    def __len__(self):
        return len(self.sequence)

    def __hash__(self):
        return hash((self.id, self.sequence))

    def __repr__(self):
        return f"Read({self.id!r}, {self.sequence!r})"

    def toString(self, format_="fasta"):
        """
        Convert the read to a string format.

        @param format_: Must be 'fasta'.
        @raise ValueError: If an unknown format is requested.
        @return: A C{str} representing the read in the requested format.
        """
        if format_ == "fasta":
            return f">{self.id}\n{self.sequence}\n"
        else:
            raise ValueError(f"Format must be 'fasta' (not {format_!r}).")
