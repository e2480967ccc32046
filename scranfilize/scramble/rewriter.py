from typing import Iterable, List, Sequence

from scranfilize.cnf.cnf_types import CnfDocument


def literal_mapping(num_vars: int,
                    variable_map: Sequence[int],
                    flipped: Sequence[bool],
                    reverse_variables: bool = False) -> List[int]:
    """
    Returns `targets` where the positive literal `idx` becomes `targets[idx]`.

    Reversal is applied first, then the permutation lookup; the flip
    decision is taken for the index after reversal. `targets[0]` is unused.
    """
    if len(variable_map) != num_vars or len(flipped) != num_vars:
        raise ValueError(f"variable map and flip vector must have {num_vars} entries")
    vmap = [int(v) for v in variable_map]
    flips = [bool(f) for f in flipped]

    targets = [0] * (num_vars + 1)
    for idx in range(1, num_vars + 1):
        src = num_vars + 1 - idx if reverse_variables else idx
        dst = vmap[src - 1] + 1
        targets[idx] = -dst if flips[src - 1] else dst
    return targets


def rewrite(doc: CnfDocument,
            variable_map: Sequence[int],
            clause_map: Sequence[int],
            flipped: Sequence[bool],
            reverse_variables: bool = False,
            reverse_clauses: bool = False) -> CnfDocument:
    """
    Applies the scrambling maps to `doc`.

    Output clause `i` is the original clause `clause_map[i]` (mirrored to
    `C-1-clause_map[i]` when reversing clauses) with every literal renamed
    through literal_mapping. Counts never change.
    """
    num_clauses = doc.num_clauses
    if len(clause_map) != num_clauses:
        raise ValueError(f"clause map must have {num_clauses} entries")

    targets = literal_mapping(doc.num_vars, variable_map, flipped, reverse_variables)

    clauses = []
    for j in clause_map:
        j = int(j)
        if reverse_clauses:
            j = num_clauses - 1 - j
        clauses.append([targets[lit] if lit > 0 else -targets[-lit] for lit in doc.clauses[j]])

    return CnfDocument(num_vars=doc.num_vars, clauses=clauses)


def map_assignment(assignment: Iterable[int],
                   num_vars: int,
                   variable_map: Sequence[int],
                   flipped: Sequence[bool],
                   reverse_variables: bool = False) -> List[int]:
    """
    Translates a model of the original formula (signed literals, as PySAT
    returns them) into the corresponding model of the scrambled formula.
    """
    targets = literal_mapping(num_vars, variable_map, flipped, reverse_variables)
    return [targets[lit] if lit > 0 else -targets[-lit] for lit in assignment]
