from declmeta import class_implements, class_interfaces
from tests.fixtures.sample import Bag, Child, LegacyVersion, Version


def test_interface_by_qualname_and_full_name(dotted):
    assert class_implements(Version, "Comparable")
    assert class_implements(Version(), dotted("Comparable"))
    assert class_implements(dotted("Version"), "Comparable")


def test_missing_interface():
    assert not class_implements(Child, "Comparable")
    assert not class_implements(Child(), "Hashable")


def test_unresolvable_class_is_false_not_an_error():
    assert not class_implements("no.such.module.Thing", "Comparable")
    assert not class_implements("NoSuchClassAnywhere", "Comparable")


def test_virtual_subclasses_need_a_dotted_interface_name(dotted):
    assert class_implements(LegacyVersion, dotted("Comparable"))
    assert not class_implements(LegacyVersion, "Comparable")
    assert class_implements(Bag(), "collections.abc.Sized")


def test_class_is_not_its_own_interface(dotted):
    assert not class_implements(dotted("Comparable"), dotted("Comparable"))


def test_class_interfaces_lists_abstract_bases(dotted):
    interfaces = class_interfaces(Version)
    assert dotted("Comparable") in interfaces
    assert "abc.ABC" in interfaces
    assert dotted("Version") not in interfaces
    assert class_interfaces("no.such.Thing") == []
