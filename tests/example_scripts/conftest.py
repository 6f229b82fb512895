"""
Conftest for example tests.

Adds the examples directory to Python path so tests can import from it.
"""

import sys
from pathlib import Path

examples_root = Path(__file__).parent.parent.parent / "examples"
sys.path.insert(0, str(examples_root))
