######################################################################
#
# lsys_rewrite.py
#
# The three ways an axiom gets rewritten into its final string:
#
#   - deterministic: each symbol is replaced by its (last) rule
#   - stochastic: each symbol is replaced by a randomly chosen rule
#   - contextual: like deterministic, but rules are given as
#     (symbol, production) pairs instead of rule text
#
# All three scan the current string left to right and never look at
# a symbol's neighbors.
#
######################################################################

import enum
import logging

import numpy as np

from lsys_errors import ExpansionLimitError, InvalidParameterError
from lsys_rules import RuleTable

logger = logging.getLogger(__name__)

# default bound on the length of any intermediate string
MAX_SYMBOLS = 5000000


class Strategy(enum.Enum):
    DETERMINISTIC = 'deterministic'
    STOCHASTIC = 'stochastic'
    CONTEXTUAL = 'contextual'

######################################################################

def _check_iterations(iterations):

    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)):
        raise InvalidParameterError(
            'iterations must be an integer, got {!r}'.format(iterations))

    if iterations < 0:
        raise InvalidParameterError(
            'iterations must be >= 0, got {}'.format(iterations))

######################################################################
# one pass over the whole string, appending lookup(symbol) for every
# symbol; the running length is bounded by max_symbols so a single
# pass never builds more than the caller allows

def _substitute(lstring, lookup, iteration, max_symbols):

    output = []
    total = 0

    for symbol in lstring:

        production = lookup(symbol)
        total += len(production)

        if max_symbols is not None and total > max_symbols:
            raise ExpansionLimitError(
                'iteration {} exceeded {} symbols'.format(
                    iteration + 1, max_symbols))

        output.append(production)

    return ''.join(output)

######################################################################
# symbols without a rule are copied through unchanged

def rewrite_deterministic(axiom, table, iterations, max_symbols=MAX_SYMBOLS):

    _check_iterations(iterations)

    lstring = axiom

    for i in range(iterations):
        lstring = _substitute(lstring, table.lookup, i, max_symbols)
        logger.debug('iteration %d: %d symbols', i + 1, len(lstring))

    return lstring

######################################################################
# rng may be a numpy Generator, an integer seed or None for fresh
# entropy; a Generator is used as-is so the caller can share a stream
# across calls

def rewrite_stochastic(axiom, table, iterations, rng=None,
                       max_symbols=MAX_SYMBOLS):

    _check_iterations(iterations)

    rng = np.random.default_rng(rng)

    def pick(symbol):
        return table.weighted_lookup(symbol, rng)

    # whitespace between axiom symbols is not part of the word
    lstring = ''.join(axiom.split())

    for i in range(iterations):
        lstring = _substitute(lstring, pick, i, max_symbols)
        logger.debug('iteration %d: %d symbols', i + 1, len(lstring))

    return lstring

######################################################################
# pairs is an ordered sequence of (symbol, production); a repeated
# symbol keeps its first position but takes the later production

def rewrite_contextual(axiom, pairs, iterations, max_symbols=MAX_SYMBOLS):

    if not isinstance(pairs, RuleTable):
        pairs = RuleTable.from_pairs(pairs)

    return rewrite_deterministic(axiom, pairs, iterations, max_symbols)

######################################################################
# dispatch on the strategy; rules is rule text for the deterministic
# and stochastic strategies and a pair list for the contextual one

def rewrite(strategy, axiom, rules, iterations, rng=None,
            max_symbols=MAX_SYMBOLS):

    strategy = Strategy(strategy)

    if strategy is Strategy.DETERMINISTIC:
        if not isinstance(rules, RuleTable):
            rules = RuleTable.parse(rules)
        return rewrite_deterministic(axiom, rules, iterations, max_symbols)

    elif strategy is Strategy.STOCHASTIC:
        if not isinstance(rules, RuleTable):
            rules = RuleTable.parse(rules)
        return rewrite_stochastic(axiom, rules, iterations, rng, max_symbols)

    else:
        return rewrite_contextual(axiom, rules, iterations, max_symbols)
