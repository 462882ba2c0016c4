from enum import Enum


class CollapsePolicy(str, Enum):
    # Every multi-line range is shortened to its first line.
    ALWAYS = "always"
    # Only contract and function declarations are shortened.
    DECLARATIONS = "declarations"
