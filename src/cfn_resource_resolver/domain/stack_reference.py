from dataclasses import dataclass


@dataclass(frozen=True)
class StackReference:
    name: str
