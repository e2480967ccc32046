from scranfilize.scramble.config import ScrambleConfig, default_seed
from scranfilize.scramble.permutation import PermutationMode, generate_permutation, is_permutation, make_rng
from scranfilize.scramble.flip import flip_vector
from scranfilize.scramble.rewriter import literal_mapping, rewrite, map_assignment
from scranfilize.scramble.scrambler import Scrambler, ScrambleResult, run

__all__ = [
    "ScrambleConfig", "default_seed",
    "PermutationMode", "generate_permutation", "is_permutation", "make_rng",
    "flip_vector",
    "literal_mapping", "rewrite", "map_assignment",
    "Scrambler", "ScrambleResult", "run"
]
