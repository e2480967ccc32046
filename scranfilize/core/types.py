from typing import Annotated, List
from pydantic import AfterValidator

# Largest value a header count or a variable index may take
INT_MAX = 2**31 - 1

def check_nonzero(v: int) -> int:
    if v == 0:
        raise ValueError("Literal cannot be zero")
    return v

Lit = Annotated[int, AfterValidator(check_nonzero)]
Clause = List[Lit]
