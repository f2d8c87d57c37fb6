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
from dataclasses import dataclass, fields
from pathlib import Path
from sys import stdout
from typing import IO, Union, Literal
from io import IOBase
from argparse import Namespace
from gzip import open as gz_open
from bz2 import open as bz2_open
from lzma import open as xz_open

from nucleo import RESOURCES

# Constants ------------------------------------------------------------------------------------------------------------
_MAGIC_BYTES = {b'\x1f\x8b': 'gz', b'\x42\x5a': 'bz2', b'\xfd7zXZ\x00': 'xz'}
_OPEN = {'gz': gz_open, 'bz2': bz2_open, 'xz': xz_open}
_SUFFIXES = {'.gz': 'gz', '.bz2': 'bz2', '.xz': 'xz', '.zst': 'zst'}
_MIN_N_BYTES = max(len(i) for i in _MAGIC_BYTES)  # Minimum number of bytes to read in a file to guess the compression
if 'zstandard' in RESOURCES.optional_packages:
    from zstandard import open as zst_open
    _MAGIC_BYTES[b'\x28\xb5\x2f\xfd'] = 'zst'
    _OPEN['zst'] = zst_open


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass
class Config:
    """
    Config parent class that can conveniently set attributes from CLI args
    """

    @classmethod
    def from_args(cls, args: Namespace):
        """
        Sets attributes of the class from a Namespace object (e.g. from argparse)

        Parameters
        ----------
        args : :class:`argparse.Namespace`
            :class:`argparse.Namespace` object containing attributes to set

        Returns
        -------
        cls
            Class instance with attributes set from args

        """
        return cls(**{f.name: getattr(args, f.name) for f in fields(cls) if hasattr(args, f.name)})


# Functions ------------------------------------------------------------------------------------------------------------
def xopen(
        file: Union[str, Path],
        method: Literal['magic', 'guess', 'uncompressed', 'gz', 'bz2', 'xz', 'zst'] = 'magic',
        **open_args
) -> IO:
    """
    Opens a sequence file that may be compressed, so FASTA and plain-text inputs can be read the same way.
    zstd streams cannot seek; :meth:`~nucleo.io.FastaRecord.read` buffers them.

    :param file: Path to the sequence file
    :param method: ``magic`` sniffs the leading bytes, ``guess`` goes by the suffix, and ``uncompressed``, ``gz``,
                   ``bz2``, ``xz`` or ``zst`` (needs the ``zst`` extra) force a codec
    :param open_args: Passed to the codec's open function, e.g. ``mode='rt'``
    :return: A text or binary handle, following ``open_args``
    """
    if method not in {'magic', 'guess', 'uncompressed', 'gz', 'bz2', 'xz', 'zst'}:
        raise ValueError(f'Invalid {method=}')

    if method == 'magic':  # Use the empirical method using magic bytes
        with open(file, 'rb') as f:  # Open the file to read bytes
            first_bytes = f.read(_MIN_N_BYTES)  # Get the bytes necessary to guess the compression type
        method = next((v for k, v in _MAGIC_BYTES.items() if first_bytes.startswith(k)), 'uncompressed')

    elif method == 'guess':
        method = _SUFFIXES.get(Path(file).suffix, 'uncompressed')

    if method == 'zst' and 'zstandard' not in RESOURCES.optional_packages:
        raise ImportError(f'Package to deal with {method=} not imported, is it installed?')
    return _OPEN.get(method, open)(file, **open_args)


def write_to_file(path: Union[str, Path, IO], mode: str = 'wt') -> IO:
    """
    Opens a path for writing, to be used as an argparse type.
    If the path is '-' or 'stdout', it returns stdout.

    :param path: The path to the file.
    :param mode: The mode to open the file in.
    :return: A file handle
    """
    if isinstance(path, IOBase):
        return path
    if path in {'-', 'stdout'}:
        return stdout
    if not isinstance(path, Path):
        path = Path(path)
    path.parent.mkdir(exist_ok=True, parents=True)
    return open(path, mode)


def rabbits(n: int, k: int = 1) -> int:
    """
    Returns the number of rabbit pairs after ``n`` months when every mature pair produces ``k`` pairs per month,
    i.e. f(m) = f(m-1) + k * f(m-2) with f(1) = f(2) = 1. With ``k=1`` this is the Fibonacci sequence.
    Python integers do not overflow, so any ``n`` is exact.

    :param n: Number of months, at least 1
    :param k: Litter size in pairs, at least 0
    :return: Total number of rabbit pairs in month ``n``
    """
    if n < 1:
        raise ValueError(f'{n=} must be at least 1')
    if k < 0:
        raise ValueError(f'{k=} must not be negative')
    previous, current = 1, 1
    for _ in range(n - 2):
        previous, current = current, current + k * previous
    return current


def bold(text: str):
    """
    Makes text bold in the terminal.

    :param text: Text to make bold.
    :return: Bold text.
    """
    return f"\033[1m{text}\033[0m"


def get_logo(message: str, width: int = 58) -> str:
    """
    Returns the nucleo logo with a message centered below it.

    :param message: Message to display below the logo.
    :param width: Width of the logo.
    :return: Formatted logo string.
    """
    return f"\033[1;35m=======================|> nucleo |>=======================\n{message.center(width)}\033[0m"
