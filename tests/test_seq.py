"""Tests for strands, conversions and translation."""

from random import Random
import warnings

import pytest

from nucleo.seq import (
    DNA, RNA, Protein, Seq, Strand, Composition, DomainError, LengthMismatchError, StrandWarning, TranslationError,
    ValidationError, TranslationConfig, reverse_transcribe, transcribe, translate,
)


class TestStrandValue:
    def test_construction_keeps_symbols_as_given(self) -> None:
        assert str(DNA(" acgt\n")) == " acgt\n"
        assert len(DNA("")) == 0

    def test_equality_requires_same_type(self) -> None:
        assert DNA("ACGA") == DNA("ACGA")
        assert DNA("ACGA") != RNA("ACGA")
        assert DNA("ACGA") != "ACGA"
        assert len({DNA("ACGA"), DNA("ACGA"), RNA("ACGA")}) == 2

    def test_no_implicit_coercion(self) -> None:
        with pytest.raises(TypeError):
            RNA(DNA("ACGT"))
        with pytest.raises(TypeError):
            DNA(42)

    def test_slicing_returns_same_type(self) -> None:
        assert DNA("ACGTAC")[1:4] == DNA("CGT")
        assert RNA("ACGU")[0] == RNA("A")

    def test_immutable(self) -> None:
        strand = DNA("ACGT")
        with pytest.raises(AttributeError):
            strand.extra = 1
        with pytest.raises(AttributeError):
            strand._seq = "XXXX"
        with pytest.raises(AttributeError):
            del strand._seq
        strand.reverse_complement()
        strand.transcribe()
        assert str(strand) == "ACGT"

    def test_bases_need_an_alphabet(self) -> None:
        with pytest.raises(TypeError, match="no alphabet"):
            Seq("A")
        with pytest.raises(TypeError, match="no alphabet"):
            Strand("A")
        with pytest.raises(TypeError, match="no alphabet"):
            Strand.random()

    def test_repr_truncates_long_strands(self) -> None:
        assert repr(DNA("ACGT")) == "DNA(ACGT)"
        assert repr(DNA("AAAAACCCCCGGGGGTTTTT")) == "DNA(AAAAA...TTTTT)"


class TestCount:
    def test_fixed_order(self) -> None:
        strand = DNA("AGCTTTTCATTCTGACTGCAACGGGCAATATGTCTCTGTGTGGATTAAAAAAAGAGTGTCTGATAGCAGC")
        assert strand.count() == Composition(20, 12, 17, 21)
        assert strand.count() == (20, 12, 17, 21)

    def test_other_absorbs_u_and_invalid_symbols(self) -> None:
        assert DNA("ACGUXa").count() == Composition(a=1, c=1, g=1, other=3)
        assert RNA("AACU").count().other == 1

    def test_sum_equals_length(self, rng: Random) -> None:
        for _ in range(20):
            strand = DNA(str(DNA.random(rng, length=rng.randint(0, 200))) + "NNx")
            assert sum(strand.count()) == len(strand)


class TestGCContent:
    def test_fraction(self) -> None:
        assert DNA("AGCTATAG").gc_content() == pytest.approx(0.375)
        assert RNA("GGCC").gc_content() == 1.0

    def test_empty_strand_raises(self) -> None:
        with pytest.raises(DomainError):
            DNA("").gc_content()


class TestDistance:
    def test_hamming(self) -> None:
        assert DNA("GAGCCTACTAACGGGAT").distance(DNA("CATCGTAATGACGGCCT")) == 7

    def test_accepts_strings(self) -> None:
        assert DNA("ACGT").distance("ACGA") == 1

    def test_identical(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert DNA("ACGT").distance(DNA("ACGT")) == 0

    def test_length_mismatch_compares_shared_prefix_and_warns(self) -> None:
        with pytest.warns(StrandWarning, match="different lengths"):
            assert DNA("ACGTAA").distance(DNA("ACCT")) == 1
        with pytest.warns(StrandWarning):
            assert DNA("ACCT").distance(DNA("ACGTAA")) == 1
        with pytest.warns(StrandWarning):
            assert DNA("ACGT").distance(DNA("")) == 0

    def test_length_mismatch_strict(self) -> None:
        with pytest.raises(LengthMismatchError):
            DNA("ACGTAA").distance(DNA("ACGT"), strict=True)


class TestValidity:
    @pytest.mark.parametrize("seq", ["ACGU", "acgt", "ACGTN", "AC GT"])
    def test_invalid_dna(self, seq: str) -> None:
        assert not DNA(seq).is_valid()

    def test_invalid_rna(self) -> None:
        assert not RNA("ACGT").is_valid()
        assert RNA("ACGU").is_valid()

    def test_validate_returns_strand(self) -> None:
        strand = DNA("ACGT")
        assert strand.validate() is strand

    def test_validate_names_offending_symbols(self) -> None:
        with pytest.raises(ValidationError, match="'U'"):
            DNA("ACGU").validate()


class TestConversions:
    def test_transcription(self) -> None:
        assert DNA("GATGGAACTTGACTACGTAAATT").transcribe() == RNA("GAUGGAACUUGACUACGUAAAUU")
        assert transcribe(DNA("TTT")) == RNA.from_dna(DNA("TTT"))

    def test_reverse_transcription(self) -> None:
        assert reverse_transcribe(RNA("AUGU")) == DNA("ATGT")
        assert RNA("AUGU").reverse_transcribe() == DNA.from_rna(RNA("AUGU"))

    def test_invalid_symbols_propagate(self) -> None:
        assert RNA.from_dna(DNA("AXTu")) == RNA("AXUu")

    def test_explicit_types_required(self) -> None:
        with pytest.raises(TypeError):
            RNA.from_dna(RNA("ACGU"))
        with pytest.raises(TypeError):
            DNA.from_rna("ACGU")

    def test_round_trip(self, rng: Random) -> None:
        for _ in range(50):
            strand = DNA.random(rng, gc=rng.random(), min_len=0, max_len=300)
            assert DNA.from_rna(RNA.from_dna(strand)) == strand


class TestReverseComplement:
    def test_reverse_complement(self) -> None:
        assert DNA("AAAACCCGGT").reverse_complement() == DNA("ACCGGGTTTT")
        assert DNA("").reverse_complement() == DNA("")

    def test_involution(self, rng: Random) -> None:
        for _ in range(50):
            strand = DNA.random(rng, min_len=0, max_len=300)
            assert strand.reverse_complement().reverse_complement() == strand

    @pytest.mark.parametrize("seq", ["ACGU", "acgt", "ACNT"])
    def test_out_of_alphabet_raises(self, seq: str) -> None:
        with pytest.raises(DomainError):
            DNA(seq).reverse_complement()


class TestRandom:
    def test_random_strands_are_valid(self, rng: Random) -> None:
        assert DNA.random(rng, length=100).is_valid()
        assert RNA.random(rng, length=100).is_valid()
        assert len(DNA.random(rng, min_len=5, max_len=5)) == 5

    def test_gc_extremes(self, rng: Random) -> None:
        assert DNA.random(rng, gc=1.0, length=50).gc_content() == 1.0
        assert RNA.random(rng, gc=0.0, length=50).gc_content() == 0.0

    def test_gc_out_of_range(self, rng: Random) -> None:
        with pytest.raises(ValueError):
            DNA.random(rng, gc=1.5)


class TestTranslation:
    def test_stops_at_first_stop_codon(self, protein_rna: str) -> None:
        assert RNA(protein_rna).translate() == Protein("MAMAPRTEINSTRING")
        assert translate(RNA(protein_rna)) == Protein.from_rna(RNA(protein_rna))

    def test_stop_codon_not_appended(self) -> None:
        assert str(translate(RNA("AUGUAAUUU"))) == "M"
        assert str(translate(RNA("UAG"))) == ""

    def test_runs_to_end_without_stop(self) -> None:
        assert str(translate(RNA("AUGUUUGGG"))) == "MFG"

    def test_trailing_partial_codon_dropped(self) -> None:
        assert str(translate(RNA("AUGUUUGG"))) == "MF"
        assert str(translate(RNA("AU"))) == ""

    def test_read_through(self) -> None:
        assert str(translate(RNA("AUGUAAUUU"), to_stop=False)) == "M*F"
        assert str(translate(RNA("AUGUAAUUU"), to_stop=False, stop_symbol="X")) == "MXF"

    def test_frames(self) -> None:
        assert str(translate(RNA("CAUGUUU"), frame=1)) == "MF"
        with pytest.raises(ValueError):
            translate(RNA("AUG"), frame=3)

    def test_invalid_codon_raises(self) -> None:
        with pytest.raises(TranslationError, match="position 3"):
            translate(RNA("AUGATG"))
        with pytest.raises(TranslationError):
            translate(RNA("aug"))

    @pytest.mark.parametrize("seq", ["AUGGCCXY", "AUGUAAXXX", "AUGUAAUUUG\n"])
    def test_invalid_symbols_outside_codons_raise(self, seq: str) -> None:
        with pytest.raises(TranslationError, match="outside ACGU"):
            translate(RNA(seq))

    def test_invalid_symbol_before_frame_raises(self) -> None:
        with pytest.raises(TranslationError, match="'X'"):
            translate(RNA("XAUGUUU"), frame=1)
        with pytest.raises(TranslationError):
            translate(RNA("AUGUAAXXX"), to_stop=False)

    def test_only_rna(self) -> None:
        with pytest.raises(TypeError):
            translate(DNA("ATG"))

    def test_dna_translation_transcribes_first(self) -> None:
        assert DNA("ATGGCCTGA").translate() == Protein("MA")

    def test_protein_validity(self, protein_rna: str) -> None:
        assert RNA(protein_rna).translate().is_valid()
        assert not Protein("MAB").is_valid()

    def test_config(self) -> None:
        config = TranslationConfig(frame=1, to_stop=False)
        assert str(RNA("AAUGUAA").translate(**vars(config))) == "M*"
