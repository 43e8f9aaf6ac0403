import sys, os

import pytest

# Ensure src and the shared test helpers are importable
TESTS = os.path.dirname(__file__)
ROOT = os.path.dirname(TESTS)
SRC = os.path.join(ROOT, 'src')
for path in (SRC, TESTS):
    if path not in sys.path:
        sys.path.insert(0, path)

from board_helpers import build_game


@pytest.fixture
def game():
    return build_game()
