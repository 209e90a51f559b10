from fractions import Fraction
from typing import Dict, Optional

from .errors import EvalError


class Environment:
    """A frame of variable bindings, optionally chained to its caller's frame.

    Lookups walk outwards through the chain. Assignments always bind in
    this frame, so a function call can read the caller's variables but
    its own bindings disappear with the frame when the call returns.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Fraction] = {}

    def get(self, name: str, line: Optional[int] = None) -> Fraction:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise EvalError(f"undefined variable {name}", line)

    def set(self, name: str, value: Fraction):
        self.values[name] = value

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def __contains__(self, name: str) -> bool:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False
