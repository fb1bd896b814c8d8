from collections import Counter

import numpy as np
import pytest

from lsys_errors import ExpansionLimitError, InvalidParameterError, MalformedRuleError
from lsys_rewrite import (Strategy, rewrite, rewrite_contextual,
                          rewrite_deterministic, rewrite_stochastic)
from lsys_rules import RuleTable

DRAGON = RuleTable.parse('X=X+YF+ Y=-FX-Y')


class CountingTable(RuleTable):
    calls = 0

    def lookup(self, symbol):
        self.calls += 1
        return super().lookup(symbol)

    def weighted_lookup(self, symbol, rng):
        self.calls += 1
        return super().weighted_lookup(symbol, rng)


class TestDeterministic:
    def test_zero_iterations(self):
        assert rewrite_deterministic('X Y', DRAGON, 0) == 'X Y'

    def test_one_iteration(self):
        assert rewrite_deterministic('X', DRAGON, 1) == 'X+YF+'

    def test_two_iterations(self):
        assert rewrite_deterministic('X', DRAGON, 2) == 'X+YF++-FX-YF+'

    def test_unruled_symbols_pass_through(self):
        table = RuleTable.parse('A=AB')
        assert rewrite_deterministic('Q', table, 7) == 'Q'
        assert rewrite_deterministic('A+Q', table, 2) == 'ABB+Q'

    def test_spaces_pass_through(self):
        assert rewrite_deterministic('X Y', DRAGON, 1) == 'X+YF+ -FX-Y'

    def test_algae(self):
        table = RuleTable.parse('A=AB B=A')
        results = [rewrite_deterministic('A', table, n) for n in range(5)]
        assert results == ['A', 'AB', 'ABA', 'ABAAB', 'ABAABABA']

    def test_empty_production_deletes(self):
        table = RuleTable.parse('X= F=FF')
        assert rewrite_deterministic('FXF', table, 1) == 'FFFF'

    def test_last_rule_wins(self):
        table = RuleTable.parse('X=ABC X=DEF')
        assert rewrite_deterministic('X', table, 1) == 'DEF'

    def test_negative_iterations(self):
        with pytest.raises(InvalidParameterError):
            rewrite_deterministic('X', DRAGON, -1)

    def test_non_integer_iterations(self):
        with pytest.raises(InvalidParameterError):
            rewrite_deterministic('X', DRAGON, 1.5)
        with pytest.raises(InvalidParameterError):
            rewrite_deterministic('X', DRAGON, True)

    def test_expansion_limit(self):
        table = RuleTable.parse('F=FF')
        with pytest.raises(ExpansionLimitError):
            rewrite_deterministic('F', table, 10, max_symbols=100)
        assert len(rewrite_deterministic('F', table, 10, max_symbols=None)) == 1024

    def test_limit_stops_mid_pass(self):
        table = CountingTable.parse('F=FFFFFFFFFF')
        with pytest.raises(ExpansionLimitError):
            rewrite_deterministic('F' * 100, table, 1, max_symbols=25)
        assert table.calls == 3


class TestStochastic:
    RULES = RuleTable.parse('F=F[+F]F F=F[-F]F')

    def test_zero_iterations_strips_whitespace(self):
        assert rewrite_stochastic(' F  X ', self.RULES, 0, rng=1) == 'FX'

    def test_single_rule_is_deterministic(self):
        table = RuleTable.parse('F=FF')
        assert rewrite_stochastic('F F', table, 3, rng=0) == 'F' * 16

    def test_seed_is_reproducible(self):
        table = RuleTable.parse('F=F[+F]F[-F]F F=F[+F]F F=F[-F]F')
        a = rewrite_stochastic('F', table, 3, rng=42)
        b = rewrite_stochastic('F', table, 3, rng=42)
        assert a == b

    def test_shared_generator_advances(self):
        rng = np.random.default_rng(3)
        results = {rewrite_stochastic('FFFFFFFF', self.RULES, 1, rng=rng)
                   for _ in range(20)}
        assert len(results) > 1

    def test_candidates_split_evenly(self):
        rng = np.random.default_rng(2024)
        counts = Counter(rewrite_stochastic('F', self.RULES, 1, rng=rng)
                         for _ in range(10000))
        assert set(counts) == {'F[+F]F', 'F[-F]F'}
        assert abs(counts['F[+F]F'] / 10000 - 0.5) < 0.03

    def test_unruled_symbol_vanishes(self):
        table = RuleTable.parse('F=FF')
        stochastic = rewrite_stochastic('F+X', table, 1, rng=0)
        deterministic = rewrite_deterministic('F+X', table, 1)
        assert stochastic == 'FF'
        assert deterministic == 'FF+X'
        assert len(stochastic) < len(deterministic)

    def test_every_symbol_rewritten_each_iteration(self):
        # brackets and turns have no rule, so they drop out on the
        # second pass
        table = RuleTable.parse('F=F[+F]F')
        assert rewrite_stochastic('F', table, 1, rng=0) == 'F[+F]F'
        assert rewrite_stochastic('F', table, 2, rng=0) == 'F[+F]F' * 3

    def test_no_rules_gives_empty_string(self):
        assert rewrite_stochastic('ABC', RuleTable(), 1, rng=0) == ''

    def test_expansion_limit(self):
        with pytest.raises(ExpansionLimitError):
            rewrite_stochastic('F', self.RULES, 8, rng=0, max_symbols=1000)

    def test_limit_stops_mid_pass(self):
        table = CountingTable.parse('F=FFFFFFFFFF F=FFFFFFFFFF')
        with pytest.raises(ExpansionLimitError):
            rewrite_stochastic('F' * 100, table, 1, rng=0, max_symbols=25)
        assert table.calls == 3


class TestContextual:
    PAIRS = [('X', 'F-[[X]+X]+F[+FX]-X'), ('F', 'FF')]

    def test_zero_iterations(self):
        assert rewrite_contextual('F X', self.PAIRS, 0) == 'F X'

    def test_one_iteration(self):
        assert rewrite_contextual('F X', self.PAIRS, 1) == 'FF F-[[X]+X]+F[+FX]-X'

    def test_matches_deterministic(self):
        table = RuleTable.parse('X=F-[[X]+X]+F[+FX]-X F=FF')
        for n in range(4):
            assert rewrite_contextual('F X', self.PAIRS, n) == \
                rewrite_deterministic('F X', table, n)

    def test_neighbors_are_not_consulted(self):
        pairs = [('A', 'B')]
        assert rewrite_contextual('CAC', pairs, 1) == 'CBC'
        assert rewrite_contextual('AAA', pairs, 1) == 'BBB'

    def test_duplicate_key_last_wins(self):
        pairs = [('X', 'ABC'), ('X', 'DEF')]
        assert rewrite_contextual('X', pairs, 1) == 'DEF'

    def test_bad_key(self):
        with pytest.raises(MalformedRuleError):
            rewrite_contextual('X', [('XX', 'A')], 1)


class TestDispatch:
    def test_by_enum(self):
        assert rewrite(Strategy.DETERMINISTIC, 'X', 'X=X+YF+ Y=-FX-Y', 1) == 'X+YF+'

    def test_by_value(self):
        assert rewrite('contextual', 'X', [('X', 'XX')], 2) == 'XXXX'

    def test_stochastic(self):
        assert rewrite('stochastic', 'F', 'F=FF', 2, rng=0) == 'FFFF'

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            rewrite('context-sensitive', 'X', '', 1)

    def test_contextual_rejects_rule_text(self):
        with pytest.raises(MalformedRuleError):
            rewrite('contextual', 'X', 'X=XX', 1)
