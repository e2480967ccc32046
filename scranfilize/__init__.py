"""
scranfilize: a reproducible CNF scrambler for stress-testing SAT solvers.
"""
from scranfilize.version import __version__

from scranfilize.cnf import CnfDocument, read_dimacs, write_dimacs, parse_dimacs_string
from scranfilize.scramble import ScrambleConfig, Scrambler, ScrambleResult, run

__all__ = [
    "__version__",
    "CnfDocument", "read_dimacs", "write_dimacs", "parse_dimacs_string",
    "ScrambleConfig", "Scrambler", "ScrambleResult", "run"
]
