"""
Every bundled example must evaluate to its documented verdict.
"""

import pytest
from valid8.environment import Environment
from valid8.examples import EXAMPLES, get_example
from valid8.pipeline import check_argument


@pytest.mark.parametrize("name", sorted(EXAMPLES))
def test_example_verdict(name):
    example = EXAMPLES[name]
    result = check_argument(example.source, Environment())
    assert result.valid is example.valid


def test_unknown_example():
    with pytest.raises(KeyError, match="modus-ponens") as excinfo:
        get_example("no-such-argument")
    assert excinfo.value.__suppress_context__
