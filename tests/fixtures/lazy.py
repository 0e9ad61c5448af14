"""Module imported only through dotted-name autoloading."""

from declmeta import annotate

from .sample import Tag


@annotate(Tag, "lazy")
class LazyWidget:
    pass


def lazy_function() -> str:
    return "lazy"
