import bz2
import gzip
from io import StringIO
from os.path import join
from tempfile import TemporaryDirectory
from unittest import TestCase

from kshuffle.utils import asHandle, chomp


class TestChomp(TestCase):
    """
    Tests for the chomp function.
    """

    def testEmpty(self):
        """
        The empty string is returned unchanged.
        """
        self.assertEqual("", chomp(""))

    def testNoTerminator(self):
        """
        A line with no terminator is returned unchanged.
        """
        self.assertEqual("ACGT", chomp("ACGT"))

    def testNewline(self):
        """
        A trailing newline is removed.
        """
        self.assertEqual("ACGT", chomp("ACGT\n"))

    def testCarriageReturnNewline(self):
        """
        A trailing CRLF is removed.
        """
        self.assertEqual("ACGT", chomp("ACGT\r\n"))

    def testOnlyOneTerminatorIsRemoved(self):
        """
        Only a single trailing newline is removed.
        """
        self.assertEqual("ACGT\n", chomp("ACGT\n\n"))

    def testLoneCarriageReturnIsKept(self):
        """
        A carriage return that is not followed by a newline is kept.
        """
        self.assertEqual("ACGT\r", chomp("ACGT\r"))


class TestAsHandle(TestCase):
    """
    Tests for the asHandle function.
    """

    def testOpenFile(self):
        """
        When an open file handle is passed, it must be yielded unchanged.
        """
        fp = StringIO(">id\nACGT\n")
        with asHandle(fp) as handle:
            self.assertIs(fp, handle)

    def testPlainFile(self):
        """
        A plain file name must be opened for reading.
        """
        with TemporaryDirectory() as dirname:
            filename = join(dirname, "file.fasta")
            with open(filename, "w") as fp:
                fp.write(">id\nACGT\n")
            with asHandle(filename) as fp:
                self.assertEqual(">id\nACGT\n", fp.read())

    def testGzipFile(self):
        """
        A file name ending in .gz must be decompressed.
        """
        with TemporaryDirectory() as dirname:
            filename = join(dirname, "file.fasta.gz")
            with gzip.open(filename, "wt") as fp:
                fp.write(">id\nACGT\n")
            with asHandle(filename) as fp:
                self.assertEqual(">id\nACGT\n", fp.read())

    def testBz2File(self):
        """
        A file name ending in .bz2 must be decompressed.
        """
        with TemporaryDirectory() as dirname:
            filename = join(dirname, "file.fasta.bz2")
            with bz2.open(filename, "wt") as fp:
                fp.write(">id\nACGT\n")
            with asHandle(filename) as fp:
                self.assertEqual(">id\nACGT\n", fp.read())
