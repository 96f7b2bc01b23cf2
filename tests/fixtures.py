"""Module-level targets: Value targets must be picklable by reference."""

from collections import namedtuple
from dataclasses import dataclass, field
from typing import List


class Ranged:
    def __init__(self):
        self.range = list(range(1, 11))

    def get_range(self):
        return self.range


@dataclass
class Order:
    id: int
    customer: str
    lines: List[int] = field(default_factory=list)

    def total(self):
        return sum(self.lines)

    def is_empty(self):
        return not self.lines


class Slotted:
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def norm(self):
        return (self.x ** 2 + self.y ** 2) ** 0.5


class SelfDescribing:
    def __init__(self):
        self.payload = {"a": 1}

    def field_count(self):
        return 7

    def method_count(self):
        return 3


class BrokenValue(Exception):
    pass


class Unpicklable:
    def __reduce__(self):
        raise BrokenValue("cannot serialize")


class WorkFailed(Exception):
    pass


Point = namedtuple("Point", ["x", "y"])

PAYLOAD = list(range(100))


def build_squares():
    return [i * i for i in range(50_000)]


def fail():
    raise WorkFailed("boom")
