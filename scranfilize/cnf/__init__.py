from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.cnf.cnf_io import (
    DimacsParser, parse_dimacs_string, parse_dimacs_stream,
    open_cnf_source, read_dimacs, write_dimacs
)

__all__ = [
    "CnfDocument",
    "DimacsParser", "parse_dimacs_string", "parse_dimacs_stream",
    "open_cnf_source", "read_dimacs", "write_dimacs"
]
