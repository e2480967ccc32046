import math
import os
import time
from typing import List, Optional
from pydantic import BaseModel, ValidationError, model_validator

from scranfilize.core.errors import ConfigError

DEFAULT_FLIP_PROBABILITY = 0.01
DEFAULT_RELATIVE_WINDOW = 0.01
DEFAULT_ABSOLUTE_WINDOW = 1.0


def default_seed() -> int:
    """Hashes clock ticks and process id into a 32 bit seed."""
    ticks = time.monotonic_ns() // 10_000_000
    tmp = (8526563 * ticks + 3944621 * os.getpid()) % 2**64
    return (tmp & 0xffffffff) ^ (tmp >> 32)


def is_valid_real(f: float) -> bool:
    """Rejects NaN and reals whose magnitude is absurdly large or tiny (zero is fine)."""
    if math.isnan(f):
        return False
    if f < 0 and (f < -1e150 or f > -1e-150):
        return False
    if f > 0 and (f > 1e150 or f < 1e-150):
        return False
    return True


class ScrambleConfig(BaseModel):
    """
    Validated scrambling options.

    Options left as None are filled with defaults after validation, so
    "explicitly given" and "defaulted" stay distinguishable while checking
    conflicts (e.g. a window together with full permutation).
    """
    seed: Optional[int] = None
    permute_variables: bool = False
    permute_clauses: bool = False
    reverse_variables: bool = False
    reverse_clauses: bool = False
    literal_flip_probability: Optional[float] = None
    variable_move_window: Optional[float] = None
    clause_move_window: Optional[float] = None
    absolute_windows: bool = False
    force: bool = False

    @model_validator(mode='after')
    def check_and_fill(self) -> 'ScrambleConfig':
        if self.permute_variables:
            if self.reverse_variables:
                raise ValueError("can not combine '-p' and '-r'")
            if self.variable_move_window is not None:
                raise ValueError("can not combine '-p' and '-v'")
            if self.absolute_windows:
                raise ValueError("can not combine '-p' and '-a'")

        if self.permute_clauses:
            if self.reverse_clauses:
                raise ValueError("can not combine '-P' and '-R'")
            if self.clause_move_window is not None:
                raise ValueError("can not combine '-P' and '-c'")
            if self.absolute_windows:
                raise ValueError("can not combine '-P' and '-a'")

        if self.seed is not None and self.seed < 0:
            raise ValueError("invalid negative seed")

        p = self.literal_flip_probability
        if p is not None and (not is_valid_real(p) or p < 0 or p > 1.0):
            raise ValueError(f"invalid literal flip probability '{p}'")

        for name in ("variable_move_window", "clause_move_window"):
            w = getattr(self, name)
            if w is not None and (not is_valid_real(w) or w < 0):
                raise ValueError(f"invalid {name.replace('_', ' ')} '{w}'")

        if self.seed is None:
            self.seed = default_seed()
        if self.literal_flip_probability is None:
            self.literal_flip_probability = DEFAULT_FLIP_PROBABILITY
        default_window = DEFAULT_ABSOLUTE_WINDOW if self.absolute_windows else DEFAULT_RELATIVE_WINDOW
        if self.variable_move_window is None:
            self.variable_move_window = default_window
        if self.clause_move_window is None:
            self.clause_move_window = default_window
        return self

    @classmethod
    def create(cls, **options) -> 'ScrambleConfig':
        """Builds a config, reporting invalid options as ConfigError."""
        try:
            return cls(**options)
        except ValidationError as e:
            causes = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
            raise ConfigError(causes) from e

    def banner_lines(self, version: str) -> List[str]:
        """The settings summary written as comments before the scrambled header."""
        scope = "absolute" if self.absolute_windows else "relative"
        p = self.literal_flip_probability
        lines = [
            "Scranfilize CNF Scrambler",
            f"Version {version}",
            f"random seed '{self.seed}'",
        ]
        if self.reverse_variables:
            lines.append("reverse all variables ('-r')")
        if self.reverse_clauses:
            lines.append("reverse all clauses ('-R')")
        lines.append(f"literal flip probability {p:g} ('-f {p:g}')")
        if self.permute_variables:
            lines.append("randomly permuting variables")
        else:
            w = self.variable_move_window
            lines.append(f"{scope} variable move window {w:g} ('-v {w:g}')")
        if self.permute_clauses:
            lines.append("randomly permuting clauses")
        else:
            w = self.clause_move_window
            lines.append(f"{scope} clause move window {w:g} ('-c {w:g}')")
        return lines
