"""
Copyright 2025 Tom Stanton (tomdstanton@gmail.com)

This file is part of nucleo. nucleo is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by the Free Software Foundation,
either version 3 of the License, or (at your option) any later version. nucleo is distributed
in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License for more
details. You should have received a copy of the GNU General Public License along with nucleo.
If not, see <https://www.gnu.org/licenses/>.
"""
from typing import Literal, Iterator, Union, NamedTuple, TypeVar
from random import Random
from warnings import warn
from dataclasses import dataclass

from nucleo import NucleoWarning, RESOURCES
from nucleo.alphabet import Alphabet, STOP, DNA as DNA_ALPHABET, RNA as RNA_ALPHABET, Amino
from nucleo.utils import Config

# Constants ------------------------------------------------------------------------------------------------------------
_S = TypeVar('_S', bound='Seq')
_GC = frozenset('GC')


# Classes --------------------------------------------------------------------------------------------------------------
class StrandError(Exception):
    pass


class ValidationError(StrandError):
    pass


class DomainError(StrandError):
    pass


class LengthMismatchError(StrandError):
    pass


class TranslationError(StrandError):
    pass


class StrandWarning(NucleoWarning):
    pass


@dataclass
class TranslationConfig(Config):
    frame: Literal[0, 1, 2] = 0
    to_stop: bool = True
    stop_symbol: str = STOP


class Composition(NamedTuple):
    """Raw symbol tally of a strand; ``other`` holds everything that is not A, C or G"""
    a: int
    c: int
    g: int
    other: int


class Seq:
    """
    Immutable sequence of one-character symbols over an alphabet.
    Subclasses set the ``alphabet`` class attribute; symbols are stored exactly as given.

    :param seq: Sequence string
    """
    __slots__ = ('_seq',)
    alphabet: Alphabet = None

    def __init__(self, seq: Union[str, 'Seq'] = ''):
        if self.alphabet is None:
            raise TypeError(f'{type(self).__name__} has no alphabet, use DNA, RNA or Protein')
        if isinstance(seq, Seq) and type(seq) is not type(self):  # No implicit DNA <-> RNA coercion
            raise TypeError(f'Cannot build {type(self).__name__} from {type(seq).__name__}, use an explicit conversion')
        if not isinstance(seq, (str, Seq)):
            raise TypeError(f'{type(self).__name__} must be built from a string, not {type(seq)}')
        object.__setattr__(self, '_seq', str(seq))

    def __reduce__(self):
        return type(self), (self._seq,)

    def __setattr__(self, name, value):
        raise AttributeError(f'{type(self).__name__} is immutable, cannot set {name!r}')

    def __delattr__(self, name):
        raise AttributeError(f'{type(self).__name__} is immutable, cannot delete {name!r}')

    def __repr__(self):
        name = type(self).__name__
        return f"{name}({self._seq})" if len(self._seq) < 13 else f"{name}({self._seq[:5]}...{self._seq[-5:]})"

    def __len__(self):
        return len(self._seq)

    def __hash__(self) -> int:
        return hash((type(self), self._seq))

    def __eq__(self, other):
        if type(other) is type(self):
            return self._seq == other._seq
        return False

    def __str__(self):
        return self._seq

    def __bytes__(self):
        return self._seq.encode()

    def __iter__(self) -> Iterator[str]:
        return iter(self._seq)

    def __contains__(self, item: str):
        return item in self._seq

    def __reversed__(self):
        return reversed(self._seq)

    def __getitem__(self: _S, item: Union[slice, int]) -> _S:
        if isinstance(item, (slice, int)):
            return type(self)(self._seq[item])
        raise TypeError(item)

    def is_valid(self) -> bool:
        """Returns True if every symbol belongs to the alphabet, never raises"""
        return self._seq in self.alphabet

    def validate(self: _S) -> _S:
        """
        Returns the sequence itself if every symbol belongs to the alphabet.

        :raises ValidationError: If any symbol is outside the alphabet
        """
        if invalid := self.alphabet.invalid_symbols(self._seq):
            raise ValidationError(
                f"{self!r} has symbol(s) outside the {type(self).__name__} alphabet {self.alphabet}: "
                f"{', '.join(map(repr, invalid))}"
            )
        return self


class Strand(Seq):
    """
    A nucleic-acid strand read 5' to 3', with composition and distance metrics.
    """
    __slots__ = ()

    @classmethod
    def random(cls, rng: Random = None, gc: float = 0.5, length: int = None, min_len: int = 10,
               max_len: int = 1000):
        """
        Generates a valid random strand for testing purposes.

        :param rng: Random number generator, defaults to the package-wide generator
        :param gc: Expected GC fraction of the strand
        :param length: Length of the strand. If not provided, a random length will be generated.
        :param min_len: Minimum length of the strand if length is not specified.
        :param max_len: Maximum length of the strand if length is not specified.
        """
        if cls.alphabet is None:
            raise TypeError(f'{cls.__name__} has no alphabet, use DNA.random or RNA.random')
        if not 0 <= gc <= 1:
            raise ValueError(f'{gc=} must be a fraction between 0 and 1')
        rng = rng or RESOURCES.rng
        at = (1 - gc) / 2
        gc /= 2
        weights = [at if i in {'A', 'T', 'U'} else gc for i in cls.alphabet]
        if length is None:
            length = rng.randint(min_len, max_len)
        return cls(''.join(rng.choices(cls.alphabet, weights=weights, k=length)))

    def count(self) -> Composition:
        """
        Returns the number of A, C, G and other symbols, in that order.
        """
        a = c = g = other = 0
        for i in self._seq:
            if i == 'A':
                a += 1
            elif i == 'C':
                c += 1
            elif i == 'G':
                g += 1
            else:
                other += 1
        return Composition(a, c, g, other)

    def gc_content(self) -> float:
        """
        Returns the GC content of the strand as a fraction

        :raises DomainError: If the strand is empty
        """
        if not self._seq:
            raise DomainError(f'GC content is undefined for an empty {type(self).__name__}')
        return sum(1 for i in self._seq if i in _GC) / len(self._seq)

    def distance(self, other: Union[str, Seq], strict: bool = False) -> int:
        """
        Returns the number of mismatched positions between this strand and another.
        Only the shared prefix is compared; if the lengths differ a ``StrandWarning`` is emitted,
        or a ``LengthMismatchError`` is raised when ``strict`` is True.

        :param other: Strand or string to compare against
        :param strict: Raise instead of warn when the lengths differ
        """
        if len(self) != len(other):
            message = f'Comparing {self!r} and {other!r} of different lengths ({len(self)} != {len(other)})'
            if strict:
                raise LengthMismatchError(message)
            warn(f'{message}, only the first {min(len(self), len(other))} positions are compared', StrandWarning)
        return sum(1 for i, j in zip(self._seq, str(other)) if i != j)


class DNA(Strand):
    """
    DNA strand over the alphabet ACGT.
    """
    __slots__ = ()
    alphabet = DNA_ALPHABET

    @classmethod
    def from_rna(cls, rna: 'RNA') -> 'DNA':
        """Substitutes U for T; all other symbols are copied unchanged"""
        if not isinstance(rna, RNA):
            raise TypeError(f'Expected RNA, not {type(rna)}')
        return cls(str(rna).replace('U', 'T'))

    @classmethod
    def from_record(cls, record: 'FastaRecord') -> 'DNA':
        return cls(record.seq)

    def transcribe(self) -> 'RNA':
        return RNA.from_dna(self)

    def reverse_complement(self) -> 'DNA':
        """
        Returns the reverse complement of the strand.

        :raises DomainError: If a symbol outside ACGT is encountered
        """
        complement = self.alphabet.complement
        try:
            return DNA(''.join(complement[i] for i in reversed(self._seq)))
        except KeyError as e:
            raise DomainError(f'Cannot complement symbol {e.args[0]!r} in {self!r}') from e

    def translate(self, frame: Literal[0, 1, 2] = 0, to_stop: bool = True, stop_symbol: str = STOP) -> 'Protein':
        """Transcribes the strand and translates the transcript, see :func:`translate`"""
        return translate(self.transcribe(), frame, to_stop, stop_symbol)


class RNA(Strand):
    """
    RNA strand over the alphabet ACGU.
    """
    __slots__ = ()
    alphabet = RNA_ALPHABET

    @classmethod
    def from_dna(cls, dna: DNA) -> 'RNA':
        """Substitutes T for U; all other symbols are copied unchanged"""
        if not isinstance(dna, DNA):
            raise TypeError(f'Expected DNA, not {type(dna)}')
        return cls(str(dna).replace('T', 'U'))

    @classmethod
    def from_record(cls, record: 'FastaRecord') -> 'RNA':
        return cls(record.seq)

    def reverse_transcribe(self) -> DNA:
        return DNA.from_rna(self)

    def codons(self, frame: Literal[0, 1, 2] = 0) -> Iterator[str]:
        """Yields the complete, non-overlapping codons from the given frame"""
        if frame not in {0, 1, 2}:
            raise ValueError(f'Invalid {frame=}, must be one of 0, 1 or 2')
        for i in range(frame, len(self._seq) - 2, 3):
            yield self._seq[i:i + 3]

    def translate(self, frame: Literal[0, 1, 2] = 0, to_stop: bool = True, stop_symbol: str = STOP) -> 'Protein':
        """See :func:`translate`"""
        return translate(self, frame, to_stop, stop_symbol)


class Protein(Seq):
    """
    Amino acid sequence using one-letter codes, possibly with stop symbols from a read-through translation.
    """
    __slots__ = ()
    alphabet = Amino

    @classmethod
    def from_rna(cls, rna: RNA, frame: Literal[0, 1, 2] = 0, to_stop: bool = True) -> 'Protein':
        return translate(rna, frame, to_stop)


# Functions ------------------------------------------------------------------------------------------------------------
def transcribe(dna: DNA) -> RNA:
    """Returns the RNA transcript of a DNA strand"""
    return RNA.from_dna(dna)


def reverse_transcribe(rna: RNA) -> DNA:
    """Returns the DNA strand an RNA strand was transcribed from"""
    return DNA.from_rna(rna)


def translate(rna: RNA, frame: Literal[0, 1, 2] = 0, to_stop: bool = True, stop_symbol: str = STOP) -> Protein:
    """
    Translates an RNA strand to protein using the standard genetic code.
    A trailing partial codon is not translated, but every symbol of the strand must still be in ACGU.

    :param rna: RNA strand to translate
    :param frame: Zero-based frame to begin translation from, must be one of 0, 1 or 2
    :param to_stop: Stop translating at the first stop codon; otherwise stops are written as ``stop_symbol``
    :param stop_symbol: Character to resemble the stop codon when reading through
    :raises TranslationError: If a symbol outside ACGU is found anywhere in the strand
    """
    if not isinstance(rna, RNA):
        raise TypeError(f'Can only translate RNA, not {type(rna).__name__}')
    protein = []
    for n, codon in enumerate(rna.codons(frame)):
        if (residue := RNA_ALPHABET.codons.get(codon)) is None:
            raise TranslationError(f'Invalid codon {codon!r} at position {frame + n * 3} of {rna!r}')
        if residue == STOP:
            if to_stop:
                break
            residue = stop_symbol
        protein.append(residue)
    if invalid := RNA_ALPHABET.invalid_symbols(rna._seq):  # Outside the frame, after a stop or in a partial codon
        raise TranslationError(f"{rna!r} has symbol(s) outside ACGU: {', '.join(map(repr, invalid))}")
    return Protein(''.join(protein))
