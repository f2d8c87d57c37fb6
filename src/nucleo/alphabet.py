"""
Module to handle biological sequence alphabets, base-pairing and the genetic code.
"""
from types import MappingProxyType


# Constants ------------------------------------------------------------------------------------------------------------
STOP = '*'  # Marks a stop codon in the codon table and in read-through translations


# Classes --------------------------------------------------------------------------------------------------------------
class AlphabetError(Exception):
    pass


class Alphabet:
    """
    The fixed set of symbols a sequence type may hold. Strands are checked against it on demand, so
    membership and ``invalid_symbols`` are the main entry points.

    :param symbols: The symbols, in their conventional order
    """
    def __init__(self, symbols: str):
        self._symbols = symbols
        self._set: frozenset[str] = frozenset(symbols)
        if len(self._set) < len(self._symbols):
            raise AlphabetError(f'Alphabet symbols "{symbols}" are not unique')

    def __len__(self):
        return len(self._symbols)

    def __repr__(self):
        return f"{type(self).__name__.lstrip('_')}({self._symbols})"

    def __str__(self):
        return self._symbols

    def __hash__(self):
        return hash(self._set)

    def __eq__(self, other):
        if isinstance(other, Alphabet):
            return self._symbols == other._symbols
        return False

    def __contains__(self, item: str):
        return set(item) <= self._set

    def __iter__(self):
        return iter(self._symbols)

    def __getitem__(self, item):
        return self._symbols[item]

    def invalid_symbols(self, sequence: str) -> list[str]:
        """
        Returns the distinct symbols of a sequence that are not in the alphabet, in order of first appearance.

        :param sequence: Sequence string to check
        """
        return list(dict.fromkeys(i for i in sequence if i not in self._set))


class _Amino(Alphabet):
    def __init__(self):
        super().__init__('ACDEFGHIKLMNPQRSTVWY' + STOP)


class _DNA(Alphabet):
    def __init__(self):
        super().__init__('ACGT')
        self.complement = MappingProxyType({'A': 'T', 'T': 'A', 'G': 'C', 'C': 'G'})


class _RNA(Alphabet):
    def __init__(self):
        super().__init__('ACGU')
        self.codons = MappingProxyType(dict(
            zip([a + b + c for a in 'UCAG' for b in 'UCAG' for c in 'UCAG'],  # Standard genetic code (table 1)
                'FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG')))


# Constants ------------------------------------------------------------------------------------------------------------
DNA = _DNA()
RNA = _RNA()
Amino = _Amino()
