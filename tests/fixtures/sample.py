"""Declarations with attached metadata shared by the test suite."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from declmeta import annotate, trait


@dataclass(frozen=True)
class Tag:
    value: str


@dataclass(frozen=True)
class SpecialTag(Tag):
    pass


@dataclass(frozen=True)
class Level:
    name: str


@dataclass(frozen=True)
class Route:
    path: str
    methods: tuple[str, ...] = ("GET",)


class Exploding:
    def __init__(self, reason: str) -> None:
        raise RuntimeError(reason)


class Comparable(ABC):
    @abstractmethod
    def compare_to(self, other: object) -> int: ...


@trait
class Timestamps:
    pass


@trait
class Auditable(Timestamps):
    pass


@trait
class SoftDeletes:
    pass


@annotate(Tag, "a")
@annotate(Level, "base")
class Base(SoftDeletes):
    pass


@annotate(Tag, "b")
@annotate(Level, "child")
class Child(Base, Auditable):
    pass


@annotate(Level, "grandchild")
@annotate(SpecialTag, "special")
@annotate(Tag, "c")
class GrandChild(Child, Auditable):
    pass


class Undecorated:
    pass


@annotate(Tag, "ok")
@annotate(Exploding, "boom")
class Fragile:
    pass


@annotate(Tag, "empty")
class Empty:
    def __len__(self) -> int:
        return 0


class Controller:
    @annotate(Route, "/index")
    def index(self) -> str:
        return "index"

    @annotate(Route, "/health", methods=("GET", "HEAD"))
    @staticmethod
    def health() -> str:
        return "ok"

    @classmethod
    @annotate(Route, "/build")
    def build(cls) -> Controller:
        return cls()

    @annotate(Tag, "first")
    @annotate(Tag, "second")
    def tagged(self) -> None:
        pass

    @property
    def label(self) -> str:
        return "controller"


class SubController(Controller):
    pass


@annotate(Route, "/standalone")
def standalone() -> str:
    return "standalone"


def plain_function() -> None:
    pass


class Version(Comparable):
    def compare_to(self, other: object) -> int:
        return 0


class LegacyVersion:
    def compare_to(self, other: object) -> int:
        return 0


Comparable.register(LegacyVersion)


class Bag:
    def __len__(self) -> int:
        return 3


@trait
class Deep:
    pass


@trait
class Middle(Deep):
    pass


@trait
class Top(Middle):
    pass


class UsesTop(Top):
    pass
