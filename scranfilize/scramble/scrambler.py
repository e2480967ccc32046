from dataclasses import dataclass
from typing import Optional

import numpy as np

from scranfilize.cnf.cnf_io import check_output_path, read_dimacs, write_dimacs
from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.logging import get_logger
from scranfilize.scramble.config import ScrambleConfig
from scranfilize.scramble.flip import flip_vector
from scranfilize.scramble.permutation import PermutationMode, generate_permutation, make_rng
from scranfilize.scramble.rewriter import rewrite
from scranfilize.version import __version__

logger = get_logger(__name__)


@dataclass
class ScrambleResult:
    document: CnfDocument
    variable_map: np.ndarray
    clause_map: np.ndarray
    flipped: np.ndarray


class Scrambler:
    """
    Produces a scrambled but equisatisfiable copy of a CNF document.

    The variable map, the clause map and the flip vector each come from
    a generator freshly seeded with `config.seed`, so the same seed and
    options always give the same output.
    """
    def __init__(self, config: ScrambleConfig):
        self.config = config

    def variable_map(self, num_vars: int) -> np.ndarray:
        mode = PermutationMode.FULL_PERMUTE if self.config.permute_variables else PermutationMode.WINDOWED_JITTER
        return generate_permutation(num_vars, mode, self.config.variable_move_window,
                                    self.config.absolute_windows, make_rng(self.config.seed))

    def clause_map(self, num_clauses: int) -> np.ndarray:
        mode = PermutationMode.FULL_PERMUTE if self.config.permute_clauses else PermutationMode.WINDOWED_JITTER
        return generate_permutation(num_clauses, mode, self.config.clause_move_window,
                                    self.config.absolute_windows, make_rng(self.config.seed))

    def flipped(self, num_vars: int) -> np.ndarray:
        return flip_vector(num_vars, self.config.literal_flip_probability, make_rng(self.config.seed))

    def scramble(self, doc: CnfDocument) -> ScrambleResult:
        variable_map = self.variable_map(doc.num_vars)
        clause_map = self.clause_map(doc.num_clauses)
        flipped = self.flipped(doc.num_vars)
        logger.debug(f"flipping {int(flipped.sum())} of {doc.num_vars} variables")

        scrambled = rewrite(doc, variable_map, clause_map, flipped,
                            reverse_variables=self.config.reverse_variables,
                            reverse_clauses=self.config.reverse_clauses)
        return ScrambleResult(document=scrambled, variable_map=variable_map,
                              clause_map=clause_map, flipped=flipped)


def run(input_path: Optional[str], output_path: Optional[str], config: ScrambleConfig) -> ScrambleResult:
    """
    Reads the original CNF, scrambles it and writes the result.

    `None` paths mean stdin and stdout. Any failure raises before the
    destination is touched.
    """
    if not config.force:
        check_output_path(output_path)

    banner = config.banner_lines(__version__)
    for line in banner:
        logger.info(line)

    doc = read_dimacs(input_path)
    result = Scrambler(config).scramble(doc)
    write_dimacs(result.document, output_path, comments=banner, force=config.force)
    return result
