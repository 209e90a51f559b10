from dataclasses import dataclass
from typing import Callable, List
from fractions import Fraction


@dataclass(frozen=True)
class BuiltinFunction:
    name: str
    arity: int
    fn: Callable[[List[Fraction]], Fraction]

    def __call__(self, args: List[Fraction]) -> Fraction:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"<builtin {self.name}/{self.arity}>"
