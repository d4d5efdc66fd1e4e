from typing import List

from pytest import raises

from skiff.core.api import Project, Purpose, SourceSet, UnknownObjectError


def test_source_sets_iterate_in_name_order(skiff_project: Project) -> None:
    for name in ("test", "plugin", "main"):
        skiff_project.source_sets.create(name)
    assert [s.name for s in skiff_project.source_sets] == ["main", "plugin", "test"]
    assert skiff_project.source_sets.names() == ["main", "plugin", "test"]


def test_all_applies_to_existing_and_future_objects(skiff_project: Project) -> None:
    seen: List[str] = []
    skiff_project.source_sets.create("main")
    skiff_project.source_sets.all(lambda s: seen.append(s.name))
    skiff_project.source_sets.create("plugin")
    assert seen == ["main", "plugin"]


def test_create_rejects_duplicate_names(skiff_project: Project) -> None:
    skiff_project.source_sets.create("main")
    with raises(ValueError):
        skiff_project.source_sets.create("main")
    assert skiff_project.source_sets.maybe_create("main") is skiff_project.source_sets["main"]


def test_unknown_name_raises_key_error(skiff_project: Project) -> None:
    with raises(UnknownObjectError) as excinfo:
        skiff_project.source_sets["missing"]
    assert isinstance(excinfo.value, KeyError)
    assert skiff_project.source_sets.get("missing") is None


def test_matching_is_a_live_view(skiff_project: Project) -> None:
    def is_production(source_set: SourceSet) -> bool:
        return source_set.extra.get("purpose") == "production"

    production = skiff_project.source_sets.matching(is_production)
    skiff_project.source_sets.create("main", lambda s: s.extra.set("purpose", Purpose.PRODUCTION))
    skiff_project.source_sets.create("test", lambda s: s.extra.set("purpose", Purpose.TEST))
    assert production.names() == ["main"]

    skiff_project.source_sets.create("plugin", lambda s: s.extra.set("purpose", "production"))
    assert production.names() == ["main", "plugin"]
    assert len(production) == 2
    assert production.matching(lambda s: s.name != "main").names() == ["plugin"]


def test_source_set_default_directories(skiff_project: Project) -> None:
    main = skiff_project.source_sets.create("main")
    assert main.java_dirs == [skiff_project.directory / "src" / "main" / "java"]
    assert main.resources_dirs == [skiff_project.directory / "src" / "main" / "resources"]
    assert main.source_files() == []

    (skiff_project.directory / "src" / "main" / "java" / "org").mkdir(parents=True)
    (skiff_project.directory / "src" / "main" / "java" / "org" / "App.java").write_text("class App {}")
    assert main.source_files() == [skiff_project.directory / "src" / "main" / "java" / "org" / "App.java"]


def test_purpose_compares_equal_to_literal() -> None:
    assert Purpose.PRODUCTION == "production"
    assert str(Purpose.TEST) == "test"


def test_configure_existing_object(skiff_project: Project) -> None:
    skiff_project.apply_plugin("java")
    main = skiff_project.source_sets.configure("main", lambda s: s.extra.set("purpose", Purpose.PRODUCTION))
    assert main.extra["purpose"] == "production"
    with raises(UnknownObjectError):
        skiff_project.source_sets.configure("plugin", lambda s: None)
