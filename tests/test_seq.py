import numpy as np
import pytest
from msascore.core.alphabet import Alphabet
from msascore.core.symbols import Symbol
from msascore.containers.seq import Seq


class TestSeq:
    def test_direct_construction_is_rejected(self):
        with pytest.raises(PermissionError):
            Seq(np.zeros(3, dtype=np.uint8), Alphabet.DNA)

    def test_length(self):
        assert len(Alphabet.DNA.seq_from('ACGTA')) == 5
        assert not Alphabet.DNA.seq_from('')

    def test_one_based_lookup(self):
        seq = Alphabet.DNA.seq_from('ACGT')
        assert seq.at(1) is Symbol.A
        assert seq.at(4) is Symbol.T

    @pytest.mark.parametrize('position', [0, 5, -1])
    def test_one_based_lookup_out_of_range(self, position):
        seq = Alphabet.DNA.seq_from('ACGT')
        with pytest.raises(IndexError):
            seq.at(position)

    def test_zero_based_storage(self):
        seq = Alphabet.DNA.seq_from('ACGT')
        assert seq[0] is Symbol.A
        assert seq[-1] is Symbol.T
        assert str(seq[1:3]) == 'CG'

    def test_immutable(self):
        seq = Alphabet.DNA.seq_from('ACGT')
        with pytest.raises(ValueError):
            seq.encoded[0] = 3

    def test_equality_and_hash(self):
        a = Alphabet.DNA.seq_from('ACGN')
        b = Alphabet.DNA.seq_from('ACG-')
        assert a == b
        assert hash(a) == hash(b)
        assert a != Alphabet.DNA.seq_from('ACGT')
        assert len({a, b}) == 1

    def test_concatenation(self):
        seq = Alphabet.DNA.seq_from('AC') + Alphabet.DNA.seq_from('GT')
        assert str(seq) == 'ACGT'

    def test_repr_truncates(self):
        seq = Alphabet.DNA.seq_from('A' * 10 + 'C' * 10)
        assert repr(seq) == 'AAAAAAA...CCCCCCC'
