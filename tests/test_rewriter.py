import pytest
from scranfilize.cnf import CnfDocument, parse_dimacs_string
from scranfilize.scramble.rewriter import literal_mapping, map_assignment, rewrite

def identity(n):
    return list(range(n))

def test_identity_maps_keep_formula():
    doc = parse_dimacs_string("p cnf 2 1\n1 -2 0\n")
    out = rewrite(doc, identity(2), identity(1), [False, False])
    assert out.clauses == [[1, -2]]
    assert out.to_dimacs() == "p cnf 2 1\n1 -2 0\n"

def test_reverse_variables():
    doc = CnfDocument(num_vars=3, clauses=[[1], [-2, 3]])
    out = rewrite(doc, identity(3), identity(2), [False] * 3, reverse_variables=True)
    assert out.clauses == [[3], [-2, 1]]

def test_reverse_clauses():
    doc = CnfDocument(num_vars=3, clauses=[[1], [2], [3]])
    out = rewrite(doc, identity(3), identity(3), [False] * 3, reverse_clauses=True)
    assert out.clauses == [[3], [2], [1]]

def test_permutations_are_applied():
    doc = CnfDocument(num_vars=3, clauses=[[1, -2], [3]])
    # variable 1 -> 3, 2 -> 1, 3 -> 2; output clause 0 is original clause 1
    out = rewrite(doc, [2, 0, 1], [1, 0], [False] * 3)
    assert out.clauses == [[2], [3, -1]]

def test_flips_negate_every_occurrence():
    doc = CnfDocument(num_vars=2, clauses=[[1, 2], [-1, -2]])
    out = rewrite(doc, identity(2), identity(2), [True, False])
    assert out.clauses == [[-1, 2], [1, -2]]

def test_flip_is_taken_after_reversal():
    doc = CnfDocument(num_vars=2, clauses=[[1]])
    # 1 reverses to 2, which is the flipped one
    out = rewrite(doc, identity(2), identity(1), [False, True], reverse_variables=True)
    assert out.clauses == [[-2]]

def test_reverse_variables_with_clause_permutation():
    doc = CnfDocument(num_vars=3, clauses=[[1, 2], [3]])
    out = rewrite(doc, identity(3), [1, 0], [False] * 3, reverse_variables=True)
    assert out.clauses == [[1], [3, 2]]

def test_literal_mapping_is_a_signed_bijection():
    targets = literal_mapping(4, [3, 1, 0, 2], [True, False, False, True], reverse_variables=True)
    assert sorted(abs(t) for t in targets[1:]) == [1, 2, 3, 4]

def test_map_assignment():
    assignment = [1, -2, 3]
    mapped = map_assignment(assignment, 3, [1, 2, 0], [False, True, False])
    assert mapped == [2, 3, 1]

def test_map_sizes_are_checked():
    doc = CnfDocument(num_vars=2, clauses=[[1]])
    with pytest.raises(ValueError):
        rewrite(doc, identity(1), identity(1), [False])
    with pytest.raises(ValueError):
        rewrite(doc, identity(2), identity(2), [False, False])
