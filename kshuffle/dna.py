from Bio.Data.IUPACData import ambiguous_dna_letters

# The 15 IUPAC nucleotide codes: the four bases plus the ambiguity codes.
# See https://en.wikipedia.org/wiki/Nucleic_acid_notation
IUPAC_NUCLEOTIDES = frozenset(
    ambiguous_dna_letters.upper() + ambiguous_dna_letters.lower()
)


def isValidNucleotide(s: str) -> bool:
    """
    Is a string made up solely of IUPAC nucleotide codes?

    @param s: A C{str} sequence. Upper and lower case are both accepted.
    @return: C{True} if C{s} is non-empty and every character in it is one of
        the 15 IUPAC nucleotide codes, else C{False}.
    """
    return bool(s) and IUPAC_NUCLEOTIDES.issuperset(s)
