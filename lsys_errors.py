######################################################################
#
# lsys_errors.py
#
# Exceptions raised while parsing rules, validating parameters,
# rewriting and interpreting L-Systems.
#
######################################################################


class LSystemError(ValueError):
    pass


# rule token that is not of the form <symbol>=<production>
class MalformedRuleError(LSystemError):
    pass


# bad iteration count, angle or step length
class InvalidParameterError(LSystemError):
    pass


# ']' seen while the scope stack is empty
class UnbalancedScopeError(LSystemError):
    pass


# rewriting produced more symbols than the caller allows
class ExpansionLimitError(LSystemError):
    pass
