"""
VALID8: Propositional Argument Validator

Checks whether a short argument written as PREMISE/THEREFORE statements
is logically valid.

PIPELINE:
---------
    source text → tokens (lexer)
                → statement tree (parser)
                → environment + truth table (evaluator)
                → verdict

Every stage depends only on the stage before it.
The caller owns the Environment and clears it between arguments.
"""

__version__ = "0.1.0"
