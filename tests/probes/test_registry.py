import pytest

from hostfetch.context import MockSystemContext
from hostfetch.probes import (
    Category,
    ErrorKind,
    OsProbe,
    Platform,
    Probe,
    ProbeOutcome,
    UnknownCategory,
    all_categories,
    create_probe,
    discover_probes,
    parse_category,
)


def test_all_categories_has_fixed_order():
    assert all_categories() == [
        Category.OS,
        Category.HOST,
        Category.KERNEL,
        Category.UPTIME,
        Category.SHELL,
        Category.CPU,
        Category.MEMORY,
    ]
    assert sorted(reversed(all_categories())) == all_categories()


def test_discovery_registers_builtin_probes_in_category_order():
    assert [probe.category for probe in discover_probes()] == all_categories()


@pytest.mark.parametrize("category", list(Category))
def test_category_round_trip(category):
    assert parse_category(category.key) is category
    assert parse_category(category.key.upper()) is category
    assert parse_category(f"  {category.display_name} ") is category


@pytest.mark.parametrize("text", ["gpu", "", "   ", "o s", "memory!"])
def test_unknown_text_is_reported_not_raised(text):
    parsed = parse_category(text)
    assert parsed == UnknownCategory(text)
    assert not isinstance(parsed, Category)


def test_display_names():
    assert [str(category) for category in all_categories()] == [
        "OS",
        "Host",
        "Kernel",
        "Uptime",
        "Shell",
        "CPU",
        "Memory",
    ]


@pytest.mark.parametrize("category", list(Category))
def test_create_probe_returns_fresh_instance(category):
    first = create_probe(category, Platform.LINUX)
    second = create_probe(category, Platform.LINUX)
    assert first is not second
    assert first.category is category
    assert first.platform is Platform.LINUX


@pytest.mark.parametrize("category", list(Category))
def test_unknown_platform_is_unsupported(category):
    outcome = create_probe(category, Platform.UNKNOWN).detect(MockSystemContext())
    assert outcome == ProbeOutcome.failed(ErrorKind.UNSUPPORTED_PLATFORM, "unknown")


def test_duplicate_category_rejected(monkeypatch):
    monkeypatch.setattr(Probe, "_registry", {})

    class FirstProbe(Probe):
        category = Category.OS

    with pytest.raises(ValueError, match="Duplicate probe"):

        class SecondProbe(Probe):
            category = Category.OS


def test_probe_without_category_is_not_registered(monkeypatch):
    monkeypatch.setattr(Probe, "_registry", {})

    class HelperProbe(Probe):
        pass

    assert Probe._registry == {}
    assert discover_probes() == []
    with pytest.raises(LookupError):
        create_probe(Category.OS)


def test_strategy_exceptions_become_error_outcomes():
    class ExplodingContext(MockSystemContext):
        def read_text_file(self, path):
            raise RuntimeError("boom")

    outcome = OsProbe(Platform.LINUX).detect(ExplodingContext())
    assert outcome == ProbeOutcome.failed(ErrorKind.DETECTION_FAILED, "boom")
