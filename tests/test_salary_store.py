import json

import pytest

from budget_dashboard.errors import InvalidAmount
from budget_dashboard.periods import Period
from budget_dashboard.salary_store import (
    InMemorySalaryRepository,
    JsonSalaryRepository,
    SalaryStore,
    SqliteSalaryRepository,
)


class CountingRepository(InMemorySalaryRepository):
    def __init__(self, initial=None):
        super().__init__(initial)
        self.reads = []

    def get(self, period):
        self.reads.append(period)
        return super().get(period)


class RacingRepository(InMemorySalaryRepository):
    """Simulates another session anchoring the period between read and write."""

    def put_if_absent(self, period, value):
        super().put(period, 61000.0)
        return super().put_if_absent(period, value)


def test_set_and_get_round_trip():
    store = SalaryStore(InMemorySalaryRepository())
    store.set((2024, 1), "50000")
    assert store.get(Period(2024, 1)) == 50000.0
    assert store.get("2024-01") == 50000.0


@pytest.mark.parametrize("value", [0, -10, "", "abc", None, float("nan")])
def test_set_rejects_invalid_amounts(value):
    store = SalaryStore(InMemorySalaryRepository())
    with pytest.raises(InvalidAmount):
        store.set((2024, 1), value)
    assert store.get((2024, 1)) is None


def test_resolve_returns_saved_value_unchanged():
    store = SalaryStore(InMemorySalaryRepository({(2024, 2): 42000}))
    result = store.resolve((2024, 2))
    assert result.value == 42000.0
    assert result.was_carried_forward is False


def test_resolve_carries_forward_and_anchors():
    store = SalaryStore(InMemorySalaryRepository({(2024, 1): 50000}))

    result = store.resolve((2024, 2))
    assert result.value == 50000.0
    assert result.was_carried_forward is True
    assert result.source == Period(2024, 1)
    assert store.get((2024, 2)) == 50000.0


def test_resolve_is_idempotent():
    store = SalaryStore(InMemorySalaryRepository({(2024, 1): 50000}))
    first = store.resolve((2024, 2))
    second = store.resolve((2024, 2))
    assert second.value == first.value
    assert second.was_carried_forward is False


def test_resolve_crosses_year_boundary():
    store = SalaryStore(InMemorySalaryRepository({(2023, 11): 40000}))
    result = store.resolve((2024, 1))
    assert result.value == 40000.0
    assert result.source == Period(2023, 11)


def test_resolve_uses_nearest_prior_period():
    store = SalaryStore(InMemorySalaryRepository({(2023, 6): 30000, (2023, 12): 45000}))
    assert store.resolve((2024, 3)).value == 45000.0


def test_resolve_finds_value_exactly_twelve_periods_back():
    store = SalaryStore(InMemorySalaryRepository({(2023, 2): 30000}))
    assert store.resolve((2024, 2)).value == 30000.0


def test_resolve_lookback_is_bounded():
    repo = CountingRepository({(2023, 1): 30000})
    store = SalaryStore(repo)

    result = store.resolve((2024, 2))

    assert result.is_absent
    assert result.was_carried_forward is False
    assert len(repo.reads) == 13  # the period itself plus twelve prior periods
    assert Period(2023, 1) not in repo.reads
    assert store.get((2024, 2)) is None


def test_resolve_never_overwrites_concurrently_saved_value():
    store = SalaryStore(RacingRepository({(2024, 1): 50000}))
    result = store.resolve((2024, 2))
    assert result.value == 61000.0
    assert result.was_carried_forward is False
    assert store.get((2024, 2)) == 61000.0


def test_explicit_save_replaces_carried_forward_value():
    store = SalaryStore(InMemorySalaryRepository({(2024, 1): 50000}))
    store.resolve((2024, 2))
    store.set((2024, 2), 55000)
    assert store.resolve((2024, 2)).value == 55000.0


def test_all_salaries_lists_every_period():
    store = SalaryStore(InMemorySalaryRepository({(2024, 3): 1.0, (2023, 12): 2.0}))
    assert store.list_periods() == [Period(2023, 12), Period(2024, 3)]
    assert store.all_salaries() == {Period(2023, 12): 2.0, Period(2024, 3): 1.0}


def test_json_repository_persists_between_instances(tmp_path):
    path = tmp_path / "salaries.json"
    SalaryStore(JsonSalaryRepository(path)).set((2024, 1), 50000)

    reopened = SalaryStore(JsonSalaryRepository(path))
    assert reopened.get((2024, 1)) == 50000.0
    assert reopened.resolve((2024, 2)).was_carried_forward is True

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["salaries"] == {"2024-01": 50000.0, "2024-02": 50000.0}
    assert data["version"] == 1
    assert data["saved_at"].endswith("+00:00")


def test_json_repository_put_if_absent_keeps_existing(tmp_path):
    repo = JsonSalaryRepository(tmp_path / "salaries.json")
    assert repo.put_if_absent(Period(2024, 1), 100.0) is True
    assert repo.put_if_absent(Period(2024, 1), 200.0) is False
    assert repo.get(Period(2024, 1)) == 100.0


def test_json_repository_treats_corrupt_file_as_empty(tmp_path, caplog):
    path = tmp_path / "salaries.json"
    path.write_text("{not json", encoding="utf-8")
    repo = JsonSalaryRepository(path)

    with caplog.at_level("WARNING"):
        assert repo.list_periods() == []
    assert "Could not read salary file" in caplog.text


def test_json_repository_refuses_to_overwrite_corrupt_file(tmp_path):
    path = tmp_path / "salaries.json"
    content = '{"salaries":{"2023-01":40000,"2023-02":41000}}garbage'
    path.write_text(content, encoding="utf-8")
    store = SalaryStore(JsonSalaryRepository(path))

    with pytest.raises(OSError, match="Refusing to overwrite"):
        store.set((2024, 1), 50000)
    with pytest.raises(OSError):
        store.repository.put_if_absent(Period(2024, 1), 50000)

    assert path.read_text(encoding="utf-8") == content
    assert store.get((2024, 1)) is None


def test_json_repository_refuses_to_overwrite_file_without_salaries(tmp_path):
    path = tmp_path / "salaries.json"
    path.write_text(json.dumps({"other": 1}), encoding="utf-8")
    repo = JsonSalaryRepository(path)

    with pytest.raises(OSError):
        repo.put(Period(2024, 1), 50000)
    assert json.loads(path.read_text(encoding="utf-8")) == {"other": 1}


def test_json_repository_skips_invalid_entries(tmp_path):
    path = tmp_path / "salaries.json"
    path.write_text(
        json.dumps({"salaries": {"2024-01": 100, "2024-13": 5, "bad": 1, "2024-02": -3}}),
        encoding="utf-8",
    )
    assert JsonSalaryRepository(path).list_periods() == [Period(2024, 1)]


def test_missing_json_file_is_empty(tmp_path):
    store = SalaryStore(JsonSalaryRepository(tmp_path / "missing.json"))
    assert store.resolve((2024, 1)).is_absent


def test_sqlite_repository_round_trip(tmp_path):
    repo = SqliteSalaryRepository(tmp_path / "budget.db")
    store = SalaryStore(repo)
    store.set((2024, 1), 50000)
    store.set((2024, 1), 52000)

    assert store.get((2024, 1)) == 52000.0
    assert store.resolve((2024, 2)).value == 52000.0
    assert repo.put_if_absent(Period(2024, 2), 1.0) is False
    assert store.list_periods() == [Period(2024, 1), Period(2024, 2)]
