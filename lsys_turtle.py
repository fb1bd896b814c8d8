######################################################################
#
# lsys_turtle.py
#
# Turtle interpreter: turns an L-System string into line segments.
#
#   F   move forward one step, drawing a segment
#   f   move forward one step without drawing
#   +   turn by -angle
#   -   turn by +angle
#   [   save position and heading
#   ]   restore the last saved position and heading
#
# Every other symbol is ignored. Coordinates are y-down, so the
# default heading of -90 degrees points up the screen.
#
######################################################################

from collections import namedtuple

import numpy as np

from lsys_errors import InvalidParameterError, UnbalancedScopeError

TurtleState = namedtuple('TurtleState', 'x, y, heading')
TurtleRun = namedtuple('TurtleRun', 'segments, final_state, depth')

DEFAULT_ORIGIN = (500., 700.)
DEFAULT_HEADING = -np.pi / 2

DEFAULT_START = TurtleState(DEFAULT_ORIGIN[0], DEFAULT_ORIGIN[1],
                            DEFAULT_HEADING)

######################################################################
# walk the string counting open scopes; raises if a ']' closes a
# scope that was never opened

def check_balanced(lstring):

    depth = 0

    for i, symbol in enumerate(lstring):
        if symbol == '[':
            depth += 1
        elif symbol == ']':
            if depth == 0:
                raise UnbalancedScopeError(
                    "unmatched ']' at position {}".format(i))
            depth -= 1

    return depth

######################################################################
# "draw" a single symbol
#
# stack is read-write
# segments is for appending
# cur_state is read and returned

def _execute_symbol(symbol, cur_state, step, delta, stack, segments):

    x, y, heading = cur_state

    if symbol == 'F' or symbol == 'f':

        new_x = x + step * np.cos(heading)
        new_y = y + step * np.sin(heading)

        if symbol == 'F':
            segments.append([(x, y), (new_x, new_y)])

        return TurtleState(new_x, new_y, heading)

    elif symbol == '+':

        return TurtleState(x, y, heading - delta)

    elif symbol == '-':

        return TurtleState(x, y, heading + delta)

    elif symbol == '[':

        stack.append(cur_state)

    elif symbol == ']':

        if not stack:
            raise UnbalancedScopeError("']' with no matching '['")

        return stack.pop()

    return cur_state

######################################################################
# run the turtle over a string, returning the segments along with the
# final turtle state and the number of scopes still open; segments
# come back as an n-by-2-by-2 array where each segment is represented
# as [(x0, y0), (x1, y1)]
#
# angle is provided in degrees; start defaults to DEFAULT_START

def run_turtle(lstring, angle_deg, step, start=None):

    if not np.isfinite(step) or step <= 0:
        raise InvalidParameterError(
            'step must be a finite number > 0, got {}'.format(step))

    if not np.isfinite(angle_deg):
        raise InvalidParameterError(
            'angle must be finite, got {}'.format(angle_deg))

    if start is None:
        start = DEFAULT_START

    cur_state = TurtleState(*start)
    delta = np.radians(angle_deg)

    # stack of saved turtle states
    stack = []

    segments = []

    for symbol in lstring:
        cur_state = _execute_symbol(symbol, cur_state, step, delta,
                                    stack, segments)

    segments = np.array(segments, dtype=float).reshape(-1, 2, 2)

    return TurtleRun(segments, cur_state, len(stack))


def segments_from_string(lstring, angle_deg, step, start=None):
    return run_turtle(lstring, angle_deg, step, start).segments
