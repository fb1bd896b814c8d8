######################################################################
#
# lsys_rules.py
#
# Rule tables for L-Systems. Rules are written as whitespace-separated
# tokens like
#
#   X=X+YF+ Y=-FX-Y
#
# where the first character of a token is the symbol being replaced
# and everything after the '=' is its production.
#
######################################################################

from collections import namedtuple

from lsys_errors import MalformedRuleError

Rule = namedtuple('Rule', 'symbol, production')

######################################################################
# split a single token into a Rule

def parse_rule(token):

    if len(token) < 2 or token[1] != '=':
        raise MalformedRuleError(
            'rule {!r} must look like <symbol>=<production>'.format(token))

    return Rule(token[0], token[2:])

######################################################################

class RuleTable:

    """An ordered, immutable collection of rules.

    Deterministic and contextual rewriting see the table as a mapping
    where the last rule for a symbol wins. Stochastic rewriting sees
    every rule, so a production listed twice is picked twice as often.
    """

    def __init__(self, rules=()):

        self._rules = tuple(Rule(*r) for r in rules)

        # last one parsed wins
        self._lookup = dict()

        # every candidate, duplicates kept
        self._candidates = dict()

        for symbol, production in self._rules:
            self._lookup[symbol] = production
            self._candidates.setdefault(symbol, []).append(production)

    @classmethod
    def parse(cls, rule_text):
        return cls(parse_rule(token) for token in rule_text.split())

    @classmethod
    def from_pairs(cls, pairs):

        if isinstance(pairs, str):
            raise MalformedRuleError(
                'expected (symbol, production) pairs, got rule text {!r}'.format(pairs))

        rules = []

        for pair in pairs:

            if not isinstance(pair, (tuple, list)) or len(pair) != 2:
                raise MalformedRuleError(
                    'rule {!r} must be a (symbol, production) pair'.format(pair))

            key, production = pair

            if not isinstance(key, str) or not isinstance(production, str):
                raise MalformedRuleError(
                    'rule {!r} must pair two strings'.format(pair))

            if len(key) != 1:
                raise MalformedRuleError(
                    'rule key {!r} must be a single symbol'.format(key))

            rules.append(Rule(key, production))

        return cls(rules)

    def __len__(self):
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __contains__(self, symbol):
        return symbol in self._lookup

    def __repr__(self):
        return 'RuleTable({!r})'.format(
            ' '.join('{}={}'.format(*r) for r in self._rules))

    def symbols(self):
        return list(self._lookup)

    def productions(self, symbol):
        return list(self._candidates.get(symbol, ()))

    def as_dict(self):
        return dict(self._lookup)

    # identity if the symbol has no rule
    def lookup(self, symbol):
        return self._lookup.get(symbol, symbol)

    def weighted_lookup(self, symbol, rng):

        """Pick one production for symbol uniformly among its rules.

        rng is a numpy Generator. A symbol without any rule yields the
        empty string, so it disappears from the output.
        """

        candidates = self._candidates.get(symbol)

        if not candidates:
            return ''

        if len(candidates) == 1:
            return candidates[0]

        return candidates[int(rng.integers(len(candidates)))]
