"""
Shuffle engines: generate random permutations of a sequence that preserve
the counts of all of its k-lets (substrings of length k).

An engine is used in three steps. C{init(sequence, k)} prepares it for one
sequence, C{next()} may then be called any number of times to get a new
permutation, and C{release()} discards the per-sequence state so the engine
can be given another sequence.
"""

from kshuffle.errors import InvalidConfigurationError, ShuffleEngineError


class ShuffleEngine:
    """
    The interface to a k-let preserving shuffler.
    """

    def __init__(self):
        self._sequence = None
        self._k = None

    @property
    def active(self) -> bool:
        """
        Has C{init} been called without a matching C{release}?
        """
        return self._sequence is not None

    def init(self, sequence: str, k: int) -> None:
        """
        Prepare to shuffle a sequence.

        @param sequence: The C{str} sequence to shuffle.
        @param k: The C{int} size of the lets whose counts must be preserved.
        @raise ShuffleEngineError: If the engine is already initialized.
        @raise InvalidConfigurationError: If C{k} is less than one.
        @raise Exception: Whatever the engine raises if it cannot be prepared
            for C{sequence}. Any partial state is released first.
        """
        if self.active:
            raise ShuffleEngineError(
                "Shuffle engine initialized twice without a release."
            )
        if k < 1:
            raise InvalidConfigurationError(
                f"Invalid let size ({k}). Must be a number larger than zero."
            )
        try:
            self._init(sequence, k)
        except Exception:
            self._release()
            raise
        self._sequence = sequence
        self._k = k

    def next(self) -> str:
        """
        Get a new permutation.

        @raise ShuffleEngineError: If C{init} has not been called.
        @return: A C{str} permutation of the sequence passed to C{init}, with
            the same k-let counts.
        """
        if not self.active:
            raise ShuffleEngineError("Shuffle engine used before init.")
        return self._next()

    def release(self) -> None:
        """
        Discard all state for the current sequence.
        """
        self._release()
        self._sequence = self._k = None

    def _init(self, sequence, k):
        raise NotImplementedError("_init must be implemented by a subclass")

    def _next(self):
        raise NotImplementedError("_next must be implemented by a subclass")

    def _release(self):
        pass


class EulerShuffleEngine(ShuffleEngine):
    """
    Shuffle by generating a random Eulerian walk through the multigraph whose
    vertices are the (k-1)-lets of the sequence and whose edges are its
    k-lets (Altschul & Erickson, Mol. Biol. Evol. 1985; Jiang et al., BMC
    Bioinformatics 2008).

    @param rng: A C{numpy.random.Generator} that supplies all randomness.
    """

    def __init__(self, rng):
        super().__init__()
        self._rng = rng
        self._release()

    def _init(self, sequence, k):
        length = len(sequence)
        if k == 1 or k >= length:
            return

        vertexIndex = {}
        vertices = []
        for offset in range(length - k + 2):
            let = sequence[offset : offset + k - 1]
            if let not in vertexIndex:
                vertexIndex[let] = len(vertices)
                vertices.append(let)

        edges = [[] for _ in vertices]
        for offset in range(length - k + 1):
            source = vertexIndex[sequence[offset : offset + k - 1]]
            target = vertexIndex[sequence[offset + 1 : offset + k]]
            edges[source].append(target)

        self._vertices = vertices
        self._edges = edges
        self._start = vertexIndex[sequence[: k - 1]]
        self._root = vertexIndex[sequence[length - k + 1 :]]

    def _next(self):
        sequence, k = self._sequence, self._k

        if k >= len(sequence):
            return sequence

        if k == 1:
            letters = list(sequence)
            self._rng.shuffle(letters)
            return "".join(letters)

        rng = self._rng
        edges = self._edges
        root = self._root
        nVertices = len(edges)

        # Pick a random last-exit edge for every vertex other than the root
        # such that the chosen edges form a tree directed towards the root
        # (Wilson's loop-erased random walk).
        inTree = [False] * nVertices
        inTree[root] = True
        lastExit = [-1] * nVertices
        for vertex in range(nVertices):
            current = vertex
            while not inTree[current]:
                lastExit[current] = int(rng.integers(len(edges[current])))
                current = edges[current][lastExit[current]]
            current = vertex
            while not inTree[current]:
                inTree[current] = True
                current = edges[current][lastExit[current]]

        # Order each vertex's outgoing edges randomly, with the tree edge (if
        # any) used last.
        ordered = []
        for vertex, targets in enumerate(edges):
            targets = list(targets)
            if vertex != root:
                last = targets.pop(lastExit[vertex])
            if len(targets) > 1:
                rng.shuffle(targets)
            if vertex != root:
                targets.append(last)
            ordered.append(targets)

        vertices = self._vertices
        used = [0] * nVertices
        result = [vertices[self._start]]
        current = self._start
        for _ in range(len(sequence) - k + 1):
            target = ordered[current][used[current]]
            used[current] += 1
            result.append(vertices[target][-1])
            current = target

        return "".join(result)

    def _release(self):
        self._vertices = None
        self._edges = None
        self._start = self._root = None


class UShuffleEngine(ShuffleEngine):
    """
    Shuffle using the uShuffle C library, via the C{ushuffle} package.

    Note that the random state of this engine lives inside the C library and
    is not controlled by a C{numpy} generator.

    @raise ImportError: If the C{ushuffle} package is not installed.
    """

    def __init__(self):
        from ushuffle import Shuffler

        super().__init__()
        self._shufflerClass = Shuffler
        self._shuffler = None

    def _init(self, sequence, k):
        self._shuffler = self._shufflerClass(sequence.encode("latin-1"), k)

    def _next(self):
        return self._shuffler.shuffle().decode("latin-1")

    def _release(self):
        self._shuffler = None
