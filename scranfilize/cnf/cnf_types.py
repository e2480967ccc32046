from typing import Iterable, List
from pydantic import BaseModel, Field, field_validator
from pysat.formula import CNF
from scranfilize.core.types import Clause

class CnfDocument(BaseModel):
    """
    An in-memory DIMACS CNF formula.

    `num_vars` is the declared variable count, `clauses` keeps the input
    order of clauses and of literals within each clause. Empty clauses are
    allowed since a bare `0` is valid DIMACS.
    """
    num_vars: int = Field(ge=0)
    clauses: List[Clause]

    @field_validator('clauses')
    @classmethod
    def validate_clauses(cls, v: List[List[int]], info) -> List[List[int]]:
        num_vars = info.data.get('num_vars')
        for i, clause in enumerate(v):
            for lit in clause:
                if num_vars is not None and abs(lit) > num_vars:
                    raise ValueError(f"Literal {lit} exceeds num_vars {num_vars} in clause {i}")
        return v

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    def to_pysat(self) -> CNF:
        """Converts to a PySAT CNF formula."""
        formula = CNF()
        formula.nv = self.num_vars
        formula.clauses = [list(c) for c in self.clauses]
        return formula

    @classmethod
    def from_pysat(cls, formula: CNF) -> 'CnfDocument':
        """Creates a CnfDocument from a PySAT CNF formula."""
        return cls(num_vars=formula.nv, clauses=[list(c) for c in formula.clauses])

    def to_dimacs(self, comments: Iterable[str] = ()) -> str:
        """Renders DIMACS text, comment lines first, then header and clauses."""
        lines = [f"c {comment}" for comment in comments]
        lines.append(f"p cnf {self.num_vars} {self.num_clauses}")
        for clause in self.clauses:
            lines.append("".join(f"{lit} " for lit in clause) + "0")
        return "\n".join(lines) + "\n"
