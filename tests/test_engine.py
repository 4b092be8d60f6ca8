"""Tests for batch resolution and dependency closure."""

import pytest

from common.errors import InvalidDependencyError, LibrarianIOError, LibraryNotFoundError
from resolution.engine import ResolutionEngine, group_by_name, resolve_closure
from resolution.variables import get_variables
from versioning.models import Registry, Requirement, ResolvedFile
from versioning.parser import parse_requirement


def reqs(*tokens):
    return [parse_requirement(t) for t in tokens]


@pytest.fixture
def scenario(memory_fs):
    """foo in /a depends on bar, which only /b provides."""
    return memory_fs({
        "/a": {"foo=1.0.0": "deps bar\nCFLAGS -Ifoo\n"},
        "/b": {"bar=2.1": "LIBS -lbar\n"},
    })


def test_group_by_name_keeps_first_appearance_order():
    groups = group_by_name(reqs("b", "a>=1", "b<2", "a<3"))
    assert list(groups) == ["b", "a"]
    assert groups["a"] == reqs("a>=1", "a<3")


class TestResolutionEngine:
    """Tests for ResolutionEngine.resolve_all."""

    @pytest.fixture
    def fs(self, memory_fs):
        return memory_fs({"/lib": {"foo=0.5": "", "foo=1.5": "", "foo=2.5": "", "bar=1": ""}})

    def test_requirements_on_one_name_pick_one_file(self, fs):
        engine = ResolutionEngine(["/lib"], fs=fs)
        newly = engine.resolve_all(reqs("foo>=1.0", "foo<2.0"))
        assert newly == [ResolvedFile("foo", "1.5", "/lib/foo=1.5")]
        assert len(engine.registry) == 1

    def test_encounter_order(self, fs):
        engine = ResolutionEngine(["/lib"], fs=fs)
        newly = engine.resolve_all(reqs("foo", "bar"))
        assert [f.library_name for f in newly] == ["foo", "bar"]
        assert engine.registry.paths() == ["/lib/foo=2.5", "/lib/bar=1"]

    def test_oldest(self, fs):
        engine = ResolutionEngine("/lib", oldest=True, fs=fs)
        assert engine.resolve_all(reqs("foo"))[0].version == "0.5"

    def test_conflicting_requirements_report_the_one_that_fails(self, fs):
        engine = ResolutionEngine(["/lib"], fs=fs)
        with pytest.raises(LibraryNotFoundError) as excinfo:
            engine.resolve_all(reqs("foo>=2.0", "foo<1.0"))
        assert str(excinfo.value.requirement) == "foo<1.0"
        assert len(engine.registry) == 0

    def test_first_unsatisfiable_requirement_reported(self, fs):
        engine = ResolutionEngine(["/lib"], fs=fs)
        with pytest.raises(LibraryNotFoundError) as excinfo:
            engine.resolve_all(reqs("foo>=9", "foo<1.0"))
        assert str(excinfo.value.requirement) == "foo>=9"

    def test_already_resolved_is_checked_not_searched(self, fs):
        registry = Registry()
        registry.add(ResolvedFile("foo", "1.5", "/elsewhere/foo=1.5"))
        engine = ResolutionEngine(["/lib"], fs=fs, registry=registry)

        assert engine.resolve_all(reqs("foo<2")) == []
        assert fs.listed == []

        with pytest.raises(LibraryNotFoundError) as excinfo:
            engine.resolve_all(reqs("foo<2", "foo>=2"))
        assert str(excinfo.value.requirement) == "foo>=2"

    def test_not_found_message(self, fs):
        engine = ResolutionEngine(["/lib"], fs=fs)
        with pytest.raises(LibraryNotFoundError) as excinfo:
            engine.resolve_all(reqs("baz>=1.0"))
        assert str(excinfo.value) == "cannot find library: baz>=1.0"

    def test_registry_rejects_second_claim(self):
        registry = Registry()
        registry.add(ResolvedFile("foo", "1", "/a/foo=1"))
        with pytest.raises(ValueError):
            registry.add(ResolvedFile("foo", "2", "/a/foo=2"))


class TestResolveClosure:
    """Tests for resolve_closure."""

    def test_end_to_end_variables(self, scenario):
        registry = resolve_closure(reqs("foo"), ["/a", "/b"], expand_deps=True, fs=scenario)
        assert registry.paths() == ["/a/foo=1.0.0", "/b/bar=2.1"]
        assert get_variables(["CFLAGS"], registry.files(), scenario) == "-Ifoo"
        assert get_variables(["CFLAGS", "LIBS"], registry.files(), scenario) == "-Ifoo -lbar"

    def test_without_expansion_only_explicit_libraries(self, scenario):
        registry = resolve_closure(reqs("foo"), "/a:/b", fs=scenario)
        assert registry.paths() == ["/a/foo=1.0.0"]
        assert scenario.read == []

    def test_cycle_terminates(self, memory_fs):
        fs = memory_fs({"/a": {"foo=1": "deps bar\n", "bar=1": "deps foo baz\n", "baz=1": "deps foo bar\n"}})
        registry = resolve_closure(reqs("foo"), ["/a"], expand_deps=True, fs=fs)
        assert [f.library_name for f in registry] == ["foo", "bar", "baz"]

    def test_dependency_on_resolved_library_is_checked(self, memory_fs):
        fs = memory_fs({"/a": {"foo=1": "deps bar\n", "bar=1": "deps foo>=2\n", "foo=3": ""}})
        with pytest.raises(LibraryNotFoundError) as excinfo:
            resolve_closure(reqs("foo<2"), ["/a"], expand_deps=True, fs=fs)
        assert str(excinfo.value.requirement) == "foo>=2"

    def test_unsatisfiable_dependency(self, scenario):
        scenario.tree["/a"]["foo=1.0.0"] = "deps bar>=3\n"
        with pytest.raises(LibraryNotFoundError) as excinfo:
            resolve_closure(reqs("foo"), ["/a", "/b"], expand_deps=True, fs=scenario)
        assert str(excinfo.value) == "cannot find library: bar>=3"

    def test_invalid_dependency_token(self, scenario):
        scenario.tree["/a"]["foo=1.0.0"] = "deps bar >=1\n"
        with pytest.raises(InvalidDependencyError) as excinfo:
            resolve_closure(reqs("foo"), ["/a", "/b"], expand_deps=True, fs=scenario)
        assert excinfo.value.token == ">=1"
        assert excinfo.value.path == "/a/foo=1.0.0"
        assert isinstance(excinfo.value, LibraryNotFoundError)

    def test_dependency_ranges_narrow_later_rounds(self, memory_fs):
        fs = memory_fs({
            "/a": {"app=1": "deps util>=1<2 log\n", "util=1.4": "", "util=2.0": "", "log=0.1": "deps util<=1.4\n"},
        })
        registry = resolve_closure(reqs("app"), ["/a"], expand_deps=True, fs=fs)
        assert registry.paths() == ["/a/app=1", "/a/util=1.4", "/a/log=0.1"]

    def test_unreadable_file_aborts(self, scenario):
        scenario.unreadable.add("/a/foo=1.0.0")
        with pytest.raises(LibrarianIOError):
            resolve_closure(reqs("foo"), ["/a", "/b"], expand_deps=True, fs=scenario)

    def test_empty_request(self, scenario):
        registry = resolve_closure([], ["/a", "/b"], expand_deps=True, fs=scenario)
        assert len(registry) == 0
        assert scenario.listed == []

    def test_shared_registry(self, scenario):
        registry = Registry()
        resolve_closure([Requirement("bar")], ["/b"], fs=scenario, registry=registry)
        result = resolve_closure(reqs("foo"), ["/a"], expand_deps=True, fs=scenario, registry=registry)
        assert result is registry
        assert registry.paths() == ["/b/bar=2.1", "/a/foo=1.0.0"]
