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
from argparse import RawTextHelpFormatter, RawDescriptionHelpFormatter, ArgumentParser, Namespace
from dataclasses import asdict
from sys import stdout, stdin
from typing import Callable, Sequence

from nucleo import RESOURCES
from nucleo.io import FastaRecord, FormatError, parse_fasta
from nucleo.seq import DNA, RNA, StrandError, TranslationConfig
from nucleo.utils import bold, get_logo, write_to_file, xopen, rabbits

# Constants ------------------------------------------------------------------------------------------------------------
_EPILOG = 'For more help, visit: ' + bold(f'{RESOURCES.package}.readthedocs.io')


# Functions ------------------------------------------------------------------------------------------------------------
def read_input(file: str) -> str:
    """Reads the whole of an input file, which may be compressed, or stdin if ``file`` is '-'"""
    if file == '-':
        return stdin.read()
    with xopen(file, mode='rt') as handle:
        return handle.read()


def read_sequence(file: str) -> str:
    """Reads a raw sequence from a FASTA record or from plain text with line breaks removed"""
    text = read_input(file)
    if (result := parse_fasta(text)).ok:
        return result.record.seq
    return ''.join(text.split())


def read_record(file: str) -> FastaRecord:
    return FastaRecord.from_string(read_input(file))


def _count(args: Namespace) -> str:
    a, c, g, t = DNA(read_sequence(args.input)).validate().count()
    return f'{a} {c} {g} {t}'


def _transcribe(args: Namespace) -> str:
    return str(DNA(read_sequence(args.input)).validate().transcribe())


def _reverse_complement(args: Namespace) -> str:
    return str(DNA(read_sequence(args.input)).reverse_complement())


def _gc(args: Namespace) -> str:
    record = read_record(args.input)
    return f'{record.id}\n{100 * DNA.from_record(record).gc_content():.6f}'


def _hamming(args: Namespace) -> str:
    if len(lines := read_input(args.input).split()) != 2:
        raise FormatError(f'Expected 2 sequences in {args.input}, found {len(lines)}')
    return str(DNA(lines[0]).distance(DNA(lines[1]), strict=args.strict))


def _translate(args: Namespace) -> str:
    return str(RNA(read_sequence(args.input)).translate(**asdict(TranslationConfig.from_args(args))))


def _fib(args: Namespace) -> str:
    return str(rabbits(args.n, args.k))


def _add_command(subparsers, name: str, desc: str, func: Callable[[Namespace], str], input_help: str = None
                 ) -> ArgumentParser:
    parser = subparsers.add_parser(
        name, description=get_logo(desc), prog=f'{RESOURCES.package} {name}', epilog=_EPILOG,
        formatter_class=RawTextHelpFormatter, help=desc, add_help=False
    )
    parser.set_defaults(func=func)
    if input_help:
        inputs = parser.add_argument_group(bold('Inputs'), '\nNote, input file(s) may be compressed.')
        inputs.add_argument('input', nargs='?', default='-', metavar='<input>', help=input_help)
    outputs = parser.add_argument_group(bold('Outputs'), '\nNote, outputs accept "-" or "stdout" for stdout')
    outputs.add_argument('-o', '--output', metavar='', default=stdout, type=write_to_file,
                         help='Path to write the result (default: stdout)')
    return parser


def _add_other_options(parser: ArgumentParser):
    opts = parser.add_argument_group(bold('Other options'), '')
    opts.add_argument('-v', '--version', help='Show version number and exit', action='version',
                      version=f'%(prog)s {RESOURCES.version}')
    opts.add_argument('-h', '--help', help='Show this help message and exit', action='help')


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description=get_logo('A minimal DNA, RNA and protein toolkit'), epilog=_EPILOG,
        usage="%(prog)s <command>", add_help=False, prog=RESOURCES.package, formatter_class=RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        title=bold('Command'), dest='command', metavar='<command>', required=True, help=None,
    )
    sequence_help = 'DNA sequence as plain text or a FASTA record; reads from stdin by default'
    commands = [
        _add_command(subparsers, 'count', 'Count the A, C, G and T in a DNA strand', _count, sequence_help),
        _add_command(subparsers, 'transcribe', 'Transcribe a DNA strand to RNA', _transcribe, sequence_help),
        _add_command(subparsers, 'revc', 'Reverse complement a DNA strand', _reverse_complement, sequence_help),
        _add_command(subparsers, 'gc', 'GC percentage of a FASTA record', _gc,
                     'DNA sequence as a FASTA record; reads from stdin by default'),
    ]
    hamm = _add_command(subparsers, 'hamm', 'Count point mutations between two DNA strands', _hamming,
                        'Two DNA sequences, one per line; reads from stdin by default')
    hamm.add_argument('--strict', action='store_true', help='Fail if the strands differ in length')
    prot = _add_command(subparsers, 'prot', 'Translate an RNA strand to protein', _translate,
                        'RNA sequence as plain text or a FASTA record; reads from stdin by default')
    prot.add_argument('--frame', type=int, choices=(0, 1, 2), default=0, help='Zero-based reading frame (default: 0)')
    prot.add_argument('--read-through', dest='to_stop', action='store_false',
                      help='Keep translating past stop codons, writing them as "*"')
    fib = _add_command(subparsers, 'fib', 'Count rabbit pairs after n months with k pairs per litter', _fib)
    fib.add_argument('n', type=int, metavar='<n>', help='Number of months')
    fib.add_argument('k', type=int, metavar='<k>', help='Pairs per litter')
    for command in commands + [hamm, prot, fib]:
        _add_other_options(command)
    _add_other_options(parser)
    return parser


# Main CLI Entry Point -------------------------------------------------------------------------------------------------
def main(argv: Sequence[str] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.output.write(f'{args.func(args)}\n')
    except (StrandError, FormatError, ValueError, OSError) as e:
        parser.exit(1, f'{RESOURCES.package}: error: {e}\n')
    finally:
        if args.output is not stdout:  # stdout cannot be closed
            args.output.close()
