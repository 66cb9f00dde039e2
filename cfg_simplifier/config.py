import os
from dataclasses import dataclass

# Defaults keep enumeration small: generation cost grows exponentially with
# the maximum length.
DEFAULT_MIN_LEN = 0
DEFAULT_MAX_LEN = 8
DEFAULT_LEFTMOST = True

ENV_MIN_LEN = "CFG_MIN_LEN"
ENV_MAX_LEN = "CFG_MAX_LEN"
ENV_DIRECTION = "CFG_DIRECTION"

DIRECTIONS = {"left": True, "right": False}


@dataclass(frozen=True)
class GeneratorConfig:
    min_len: int = DEFAULT_MIN_LEN
    max_len: int = DEFAULT_MAX_LEN
    leftmost: bool = DEFAULT_LEFTMOST

    def validate(self):
        if self.min_len < 0 or self.max_len < 0:
            raise ValueError(f"lengths must be non-negative, got [{self.min_len}, {self.max_len}]")
        if self.min_len > self.max_len:
            raise ValueError(f"min length {self.min_len} exceeds max length {self.max_len}")
        return self

    @classmethod
    def from_env(cls, environ=None):
        """
        Read CFG_MIN_LEN, CFG_MAX_LEN and CFG_DIRECTION ("left" or "right"),
        falling back to the module defaults for anything unset.
        """
        environ = os.environ if environ is None else environ
        direction = environ.get(ENV_DIRECTION, "left" if DEFAULT_LEFTMOST else "right")
        if direction.strip().lower() not in DIRECTIONS:
            raise ValueError(f"{ENV_DIRECTION} must be 'left' or 'right', got {direction!r}")
        return cls(
            min_len=int(environ.get(ENV_MIN_LEN, DEFAULT_MIN_LEN)),
            max_len=int(environ.get(ENV_MAX_LEN, DEFAULT_MAX_LEN)),
            leftmost=DIRECTIONS[direction.strip().lower()],
        ).validate()
