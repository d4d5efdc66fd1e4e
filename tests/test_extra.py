from typing import List

from pytest import raises

from skiff.core.api import ExtraProperties, Supplier, UnknownPropertyError


def test_extra_properties_last_write_wins() -> None:
    bag = ExtraProperties("task ':myTask'")
    bag["myProperty"] = "myValue"
    bag["myProperty"] = "otherValue"
    assert bag["myProperty"] == "otherValue"
    assert len(bag) == 1


def test_extra_properties_distinguish_null_from_absent() -> None:
    bag = ExtraProperties("source set 'main'")
    bag.set("purpose", None)
    assert bag.has("purpose")
    assert bag["purpose"] is None
    assert not bag.has("other")
    assert bag.get("other") is None


def test_extra_properties_missing_key_raises_error_naming_owner() -> None:
    bag = ExtraProperties("task ':myTask'")
    with raises(UnknownPropertyError) as excinfo:
        bag["nope"]
    assert isinstance(excinfo.value, KeyError)
    assert str(excinfo.value) == "cannot get extra property 'nope' as it does not exist on task ':myTask'"


def test_extra_properties_reject_non_string_keys() -> None:
    bag = ExtraProperties("project ':'")
    with raises(TypeError):
        bag[42] = "value"  # type: ignore[index]


def test_define_with_literal_value_does_not_invoke_anything() -> None:
    bag = ExtraProperties("project ':'")
    prop = bag.define("springVersion", "3.1.0.RELEASE")
    assert prop.name == "springVersion"
    assert prop.get() == "3.1.0.RELEASE"
    assert str(prop) == "3.1.0.RELEASE"
    assert bag["springVersion"] == "3.1.0.RELEASE"


def test_define_with_supplier_invokes_it_once_on_first_access() -> None:
    calls: List[int] = []

    def compute() -> str:
        calls.append(1)
        return "build@master.org"

    bag = ExtraProperties("project ':'")
    prop = bag.define("emailNotification", Supplier.of_callable(compute))
    assert calls == []
    assert prop.is_present()

    assert prop.get() == "build@master.org"
    assert prop.get() == "build@master.org"
    assert bag["emailNotification"] == "build@master.org"
    assert bag.properties() == {"emailNotification": "build@master.org"}
    assert len(calls) == 1


def test_lazy_value_overwritten_before_access_is_never_computed() -> None:
    calls: List[int] = []
    bag = ExtraProperties("project ':'")
    prop = bag.lazy("value", lambda: calls.append(1) or "computed")
    prop.set("assigned")
    assert prop.get() == "assigned"
    assert calls == []


def test_extra_property_handle_observes_later_writes() -> None:
    bag = ExtraProperties("project ':'")
    prop = bag.define("springVersion", "3.1.0.RELEASE")
    bag["springVersion"] = "4.0.0.RELEASE"
    assert prop.get() == "4.0.0.RELEASE"

    del bag["springVersion"]
    assert not prop.is_present()
    with raises(UnknownPropertyError):
        prop.get()


def test_supplier_redefining_its_own_key_keeps_the_later_definition() -> None:
    bag = ExtraProperties("project ':'")

    def compute() -> str:
        bag.define("key", "second")
        return "first"

    prop = bag.lazy("key", compute)
    assert prop.get() == "first"
    assert prop.get() == "second"
    assert bag["key"] == "second"


def test_supplier_assigned_directly_is_resolved_on_read() -> None:
    bag = ExtraProperties("task ':myTask'")
    bag["myProperty"] = Supplier.of("myValue")
    assert bag["myProperty"] == "myValue"
    assert bag.properties() == {"myProperty": "myValue"}
