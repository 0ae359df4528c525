import numpy as np
import pytest
from msascore.lib import resources
from msascore.lib.resources import Resources, RESOURCES, jit


class TestResources:
    def test_state_is_only_the_lazy_rng(self):
        res = Resources()
        assert vars(res) == {}
        rng = res.rng
        assert isinstance(rng, np.random.Generator)
        assert res.rng is rng
        assert set(vars(res)) == {'rng'}

    def test_has_module(self):
        assert RESOURCES.has_module('numpy')
        assert not RESOURCES.has_module('not_a_real_module_xyz')

    def test_default_rng_drives_random_seq(self):
        from msascore.core.alphabet import Alphabet
        assert len(Alphabet.DNA.random_seq(length=8)) == 8


class TestJit:
    @pytest.fixture
    def no_numba(self, monkeypatch):
        monkeypatch.setattr(resources.RESOURCES, 'has_module', lambda name: False)

    def test_bare_passthrough(self, no_numba):
        def func(x): return x + 1
        assert jit(func) is func

    def test_configured_passthrough(self, no_numba):
        def func(x): return x + 1
        assert jit(nopython=True, cache=True)(func) is func
