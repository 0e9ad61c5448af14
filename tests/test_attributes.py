import pytest

from declmeta import (
    ClassHandle,
    InputValidationError,
    InstantiationError,
    MatchMode,
    TargetKind,
    annotate,
    get_attribute,
    get_attributes,
    get_decorator,
    get_decorators,
)
from tests.fixtures.sample import (
    Controller,
    Exploding,
    Fragile,
    GrandChild,
    Level,
    Route,
    SpecialTag,
    SubController,
    Tag,
    Undecorated,
    standalone,
)


def test_get_attributes_returns_descriptors_in_declaration_order():
    descriptors = get_attributes(GrandChild)
    assert [d.metadata_type for d in descriptors] == [Level, SpecialTag, Tag]
    assert all(d.target_kind is TargetKind.CLASS for d in descriptors)


def test_get_attributes_reads_only_the_target_level():
    assert [d.arguments for d in get_attributes(GrandChild, Level)] == [("grandchild",)]
    assert get_attributes(Undecorated) == []


def test_instance_of_mode_includes_subtypes():
    decorators = get_decorators(GrandChild, Tag, MatchMode.INSTANCE_OF)
    assert decorators == [SpecialTag("special"), Tag("c")]


def test_exact_mode_excludes_subtypes():
    assert get_decorators(GrandChild, Tag, MatchMode.EXACT) == [Tag("c")]


def test_default_match_mode_is_instance_of():
    assert get_decorators(GrandChild, Tag) == [SpecialTag("special"), Tag("c")]


def test_metadata_type_by_dotted_name(dotted):
    assert get_decorators(dotted("GrandChild"), dotted("Level")) == [Level("grandchild")]


def test_unknown_metadata_type_name_is_rejected():
    with pytest.raises(InputValidationError):
        get_attributes(GrandChild, "no.such.Metadata")


def test_method_metadata():
    assert get_decorators((Controller, "index"), Route) == [Route("/index")]
    assert get_decorators((Controller, "health"), Route) == [
        Route("/health", methods=("GET", "HEAD"))
    ]
    assert get_decorators(Controller.build, Route) == [Route("/build")]
    (descriptor,) = get_attributes((Controller, "index"), Route)
    assert descriptor.target_kind is TargetKind.METHOD


def test_inherited_method_metadata():
    assert get_decorators((SubController, "index"), Route) == [Route("/index")]


def test_repeated_method_metadata():
    descriptors = get_attributes((Controller, "tagged"), Tag)
    assert [d.arguments for d in descriptors] == [("first",), ("second",)]
    assert all(d.is_repeated for d in descriptors)


def test_function_metadata(dotted):
    assert get_decorators(standalone, Route) == [Route("/standalone")]
    (descriptor,) = get_attributes(dotted("standalone"), Route)
    assert descriptor.target_kind is TargetKind.FUNCTION
    assert descriptor.keywords == {}


def test_decorators_are_instantiated_on_every_call():
    first = get_decorators(GrandChild, Level)
    second = get_decorators(GrandChild, Level)
    assert first == second
    assert first[0] is not second[0]


def test_one_failing_constructor_fails_the_batch():
    with pytest.raises(InstantiationError):
        get_decorators(Fragile)
    assert get_decorators(Fragile, Tag) == [Tag("ok")]


def test_get_attribute_by_index():
    assert get_attribute(GrandChild, Tag).arguments == ("special",)
    assert get_attribute(GrandChild, Tag, index=1).arguments == ("c",)


@pytest.mark.parametrize("index", [2, 5, -1])
def test_get_attribute_out_of_range_is_none(index):
    assert get_attribute(GrandChild, Tag, index=index) is None


def test_get_decorator():
    assert get_decorator(GrandChild, Tag) == SpecialTag("special")
    assert get_decorator(GrandChild, Tag, MatchMode.EXACT) == Tag("c")
    assert get_decorator(GrandChild, Tag, index=5) is None
    assert get_decorator(Undecorated, Tag) is None


def test_get_decorator_only_instantiates_the_selected_descriptor():
    assert get_decorator(Fragile, index=0) == Tag("ok")
    with pytest.raises(InstantiationError):
        get_decorator(Fragile, Exploding)


def test_custom_registry(registry):
    @annotate(Tag, "isolated", registry=registry)
    class Isolated:
        pass

    assert get_decorators(Isolated, Tag, registry=registry) == [Tag("isolated")]
    assert get_decorators(Isolated, Tag) == []
    assert get_decorators(ClassHandle(Isolated, registry=registry), Tag) == [
        Tag("isolated")
    ]
