"""
Module for parsing single FASTA records from text, streams and (possibly compressed) files.
"""
from io import StringIO
from pathlib import Path
from typing import Union, TextIO, Literal, NamedTuple, Optional
from warnings import warn

from nucleo import NucleoWarning
from nucleo.utils import xopen

# Constants ------------------------------------------------------------------------------------------------------------
_MARKER = '>'
_LINE_ENDINGS = '\r\n'


# Classes --------------------------------------------------------------------------------------------------------------
class ParserWarning(NucleoWarning):
    pass


class FormatError(Exception):
    pass


class FastaRecord:
    """
    A single FASTA record: the header line without its marker and the concatenated body lines.

    Attributes:
        id: The full header line, without the leading '>'
        seq: The raw sequence string, line breaks removed
    """
    __slots__ = ('_id', '_seq')

    def __init__(self, id_: str, seq: str):
        self._id = id_
        self._seq = seq

    @property
    def id(self) -> str:
        return self._id

    @property
    def seq(self) -> str:
        return self._seq

    @property
    def name(self) -> str:
        """The identifier up to the first whitespace"""
        return self._id.split(maxsplit=1)[0] if self._id.strip() else ''

    @property
    def desc(self) -> str:
        """Anything in the identifier after the first whitespace"""
        parts = self._id.split(maxsplit=1)
        return parts[1] if len(parts) > 1 else ''

    def __repr__(self) -> str:
        return f"FastaRecord({self._id}, {len(self._seq)})"

    def __str__(self) -> str:
        return self._id

    def __len__(self) -> int:
        return len(self._seq)

    def __eq__(self, other) -> bool:
        if isinstance(other, FastaRecord):
            return self._id == other._id and self._seq == other._seq
        return False

    def __hash__(self) -> int:
        return hash((self._id, self._seq))

    def __format__(self, __format_spec: Literal['fasta', 'fa', 'fna'] = '') -> str:
        if __format_spec == '':
            return self.__str__()
        elif __format_spec in {'fasta', 'fa', 'fna'}:
            return f"{_MARKER}{self._id}\n{self._seq}\n"
        else:
            raise NotImplementedError(f'Invalid format: {__format_spec}')

    @classmethod
    def read(cls, handle: TextIO) -> 'FastaRecord':
        """
        Reads one record from a text handle. Reading stops at the end of the input or just before the next
        record marker, which is left unconsumed so the handle can be read again.

        :param handle: A text-mode handle; one that cannot seek, such as a pipe or a zstd stream, is read to the
                       end and the parse continues from an in-memory copy
        :raises FormatError: If the handle is not positioned at a record marker
        """
        if not handle.seekable():  # The lookahead for the next marker needs tell and seek
            handle = StringIO(handle.read())
        if handle.read(1) != _MARKER:
            raise FormatError('Not FASTA format')
        id_ = handle.readline().rstrip(_LINE_ENDINGS)
        seq = []
        while True:
            position = handle.tell()
            if not (line := handle.readline()):
                break  # End of input
            if line.startswith(_MARKER):
                handle.seek(position)  # Leave the next record for the caller
                break
            seq.append(line.rstrip(_LINE_ENDINGS))
        if not (seq := ''.join(seq)):
            warn(f'Record "{id_}" has no sequence', ParserWarning)
        return cls(id_, seq)

    @classmethod
    def from_string(cls, text: str) -> 'FastaRecord':
        """
        Parses the first record of a FASTA string.

        :raises FormatError: If the text does not start with a record marker
        """
        return cls.read(StringIO(text))


class FastaResult(NamedTuple):
    """
    Outcome of :func:`parse_fasta`, holding either a record or the error that prevented parsing.
    """
    record: Optional[FastaRecord] = None
    error: Optional[FormatError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> FastaRecord:
        """Returns the record, or raises the error if parsing failed"""
        if self.error is not None:
            raise self.error
        return self.record


# Functions ------------------------------------------------------------------------------------------------------------
def parse_fasta(source: Union[str, TextIO]) -> FastaResult:
    """
    Parses the first FASTA record from a string or text handle without raising on malformed input.

    :param source: FASTA text or a text-mode handle
    :returns: A FastaResult carrying the record, or the FormatError
    """
    handle = StringIO(source) if isinstance(source, str) else source
    try:
        return FastaResult(record=FastaRecord.read(handle))
    except FormatError as e:
        return FastaResult(error=e)


def read_fasta(file: Union[str, Path], **open_args) -> FastaRecord:
    """
    Reads the first record of a FASTA file, which may be compressed.

    :param file: Path to the file as a string or Path object
    :param open_args: Additional keyword arguments passed to :func:`~nucleo.utils.xopen`
    :raises FormatError: If the file does not start with a record marker
    """
    with xopen(file, mode='rt', **open_args) as handle:
        try:
            return FastaRecord.read(handle)
        except FormatError as e:
            raise FormatError(f'{file}: {e}') from e
