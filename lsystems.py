######################################################################
#
# lsystems.py
#
# L-System descriptors, the systems built on them, a few preset
# systems, and the pipeline that turns a system into a drawing.
#
######################################################################
#
# Based on documentation in https://en.wikipedia.org/wiki/L-system and
# http://paulbourke.net/fractals/lsys/
#
# A system is rewritten once per request and then handed to the
# turtle: build a descriptor, pick a strategy, build the final string,
# interpret it as segments.

import abc
import logging
import math
import numbers
from datetime import datetime
from collections import namedtuple

from lsys_errors import InvalidParameterError
from lsys_rewrite import (MAX_SYMBOLS, Strategy, rewrite_contextual,
                          rewrite_deterministic, rewrite_stochastic)
from lsys_rules import RuleTable
from lsys_turtle import segments_from_string

logger = logging.getLogger(__name__)

LSystem = namedtuple('LSystem', 'axiom, rules, angle_deg, iterations, step')

Drawing = namedtuple('Drawing', 'segments, color')

# colors offered to the user, as RGB in [0, 1]
PALETTE = {
    'brown': (165 / 255, 42 / 255, 42 / 255),
    'green': (0., 128 / 255, 0.),
    'blue': (0., 0., 1.),
    'red': (1., 0., 0.),
    'black': (0., 0., 0.),
}

DEFAULT_COLOR = PALETTE['brown']

######################################################################
# get a palette color by name, falling back to black

def palette_color(name):
    return PALETTE.get(name.lower(), PALETTE['black'])

######################################################################
# validate parameters and build a descriptor

def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool) \
        and math.isfinite(value)


def make_lsystem(axiom, rules, angle_deg, iterations, step):

    if not isinstance(axiom, str):
        raise InvalidParameterError('axiom must be a string')

    if not _is_number(angle_deg) or angle_deg <= 0:
        raise InvalidParameterError(
            'angle must be a finite number > 0, got {!r}'.format(angle_deg))

    if not isinstance(iterations, numbers.Integral) or isinstance(iterations, bool) \
       or iterations < 0:
        raise InvalidParameterError(
            'iterations must be an integer >= 0, got {!r}'.format(iterations))

    if not _is_number(step) or step <= 0:
        raise InvalidParameterError(
            'step must be a finite number > 0, got {!r}'.format(step))

    return LSystem(axiom=axiom,
                   rules=rules,
                   angle_deg=float(angle_deg),
                   iterations=int(iterations),
                   step=step)

######################################################################
# the three kinds of system; each owns one descriptor and knows how to
# build its final string

class _System(abc.ABC):

    strategy = None

    def __init__(self, lsys, max_symbols=MAX_SYMBOLS):
        self.lsys = lsys
        self.max_symbols = max_symbols

    @property
    def axiom(self):
        return self.lsys.axiom

    @property
    def rules(self):
        return self.lsys.rules

    @property
    def angle_deg(self):
        return self.lsys.angle_deg

    @property
    def iterations(self):
        return self.lsys.iterations

    @property
    def step(self):
        return self.lsys.step

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self.lsys)

    @abc.abstractmethod
    def build_string(self):
        pass


class DeterministicSystem(_System):

    strategy = Strategy.DETERMINISTIC

    def __init__(self, lsys, max_symbols=MAX_SYMBOLS):
        super().__init__(lsys, max_symbols)
        self.table = RuleTable.parse(lsys.rules)

    def build_string(self):
        return rewrite_deterministic(self.axiom, self.table,
                                     self.iterations, self.max_symbols)


class StochasticSystem(_System):

    """Each build draws fresh productions from rng.

    rng is a numpy Generator, a seed, or None. A seed is turned into a
    new Generator on every build, so repeated builds of a seeded system
    give the same string.
    """

    strategy = Strategy.STOCHASTIC

    def __init__(self, lsys, rng=None, max_symbols=MAX_SYMBOLS):
        super().__init__(lsys, max_symbols)
        self.table = RuleTable.parse(lsys.rules)
        self.rng = rng

    def build_string(self):
        return rewrite_stochastic(self.axiom, self.table, self.iterations,
                                  self.rng, self.max_symbols)


# the rules of a contextual system are (symbol, production) pairs
class ContextualSystem(_System):

    strategy = Strategy.CONTEXTUAL

    def __init__(self, lsys, max_symbols=MAX_SYMBOLS):
        super().__init__(lsys, max_symbols)
        self.table = RuleTable.from_pairs(lsys.rules)

    def build_string(self):
        return rewrite_contextual(self.axiom, self.table,
                                  self.iterations, self.max_symbols)


SYSTEM_TYPES = {
    Strategy.DETERMINISTIC: DeterministicSystem,
    Strategy.STOCHASTIC: StochasticSystem,
    Strategy.CONTEXTUAL: ContextualSystem,
}

######################################################################

def make_system(strategy, axiom, rules, angle_deg, iterations, step,
                rng=None, max_symbols=MAX_SYMBOLS):

    strategy = Strategy(strategy)
    lsys = make_lsystem(axiom, rules, angle_deg, iterations, step)

    if strategy is Strategy.STOCHASTIC:
        return StochasticSystem(lsys, rng, max_symbols)

    return SYSTEM_TYPES[strategy](lsys, max_symbols)


# a user-entered system is always rewritten deterministically
def custom_system(axiom, rule_text, angle_deg, iterations, step,
                  max_symbols=MAX_SYMBOLS):
    return make_system(Strategy.DETERMINISTIC, axiom, rule_text,
                       angle_deg, iterations, step, max_symbols=max_symbols)

######################################################################
# the preconfigured systems

KNOWN_LSYSTEMS = {

    'deterministic': (Strategy.DETERMINISTIC, LSystem(
        axiom = 'X Y',
        rules = 'X=X+YF+ Y=-FX-Y',
        angle_deg = 90.,
        iterations = 10,
        step = 6
    )),

    'stochastic': (Strategy.STOCHASTIC, LSystem(
        axiom = 'F',
        rules = 'F=F[+F]F[-F]F F=F[+F]F F=F[-F]F',
        angle_deg = 25.7,
        iterations = 5,
        step = 7
    )),

    'contextual': (Strategy.CONTEXTUAL, LSystem(
        axiom = 'F X',
        rules = (('X', 'F-[[X]+X]+F[+FX]-X'), ('F', 'FF')),
        angle_deg = 25.,
        iterations = 5,
        step = 7
    )),

}


def preset_system(name, rng=None, max_symbols=MAX_SYMBOLS):

    strategy, lsys = KNOWN_LSYSTEMS[name]

    return make_system(strategy, *lsys, rng=rng, max_symbols=max_symbols)

######################################################################
# rewrite a system and interpret the result; start relocates the
# turtle before the first symbol, None keeps the default origin

def generate(system, color=DEFAULT_COLOR, start=None):

    # time segment generation
    t0 = datetime.now()

    lstring = system.build_string()

    segments = segments_from_string(lstring, system.angle_deg,
                                    system.step, start)

    elapsed = (datetime.now() - t0).total_seconds()

    logger.info('generated %d segments from %d symbols in %.6f seconds',
                len(segments), len(lstring), elapsed)

    return Drawing(segments, color)
