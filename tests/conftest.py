# tests/conftest.py
"""Shared test fixtures for nucleo tests."""

from pathlib import Path
from random import Random

import pytest


@pytest.fixture
def rng() -> Random:
    """Seeded generator so random strands are reproducible."""
    return Random(42)


@pytest.fixture
def protein_rna() -> str:
    """mRNA whose first in-frame stop is the final codon."""
    return "AUGGCCAUGGCGCCCAGAACUGAGAUCAAUAGUACCCGUAUUAACGGGUGA"


@pytest.fixture
def gc_fasta(tmp_path: Path) -> Path:
    """Single-record FASTA with a body wrapped over two lines."""
    path = tmp_path / "gc.fasta"
    path.write_text(
        ">Rosalind_0808\n"
        "CCACCCTCGTGGTATGGCTAGGCATTCAGGAACCGGAGAACGCTTCAGACC\n"
        "AGCCCGGACTGGGAACCTGCGGGCAGTAGGTGGAAT\n"
    )
    return path
