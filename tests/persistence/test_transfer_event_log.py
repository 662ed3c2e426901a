import gzip
import json
from pathlib import Path

from transfer_planner.persistence.event_log import EventLog, append_event, iter_events
import transfer_planner.persistence.event_log as evlog


def test_append_and_iter_events(tmp_path: Path) -> None:
    log = tmp_path / "events.jsonl"
    append_event(log, 1, "PLAN_CREATED", {"total_moved": 5})
    append_event(log, 2, "PLAN_APPLIED", {"total_moved": 5})
    events = list(iter_events(log))
    assert events == [
        {"seq": 1, "event_type": "PLAN_CREATED", "data": {"total_moved": 5}},
        {"seq": 2, "event_type": "PLAN_APPLIED", "data": {"total_moved": 5}},
    ]


def test_event_log_numbers_events(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "log.jsonl"
    log = EventLog(path)
    assert log.append("start", {}) == 1
    assert log.append("end", {"ok": True}) == 2
    assert list(log) == [
        {"seq": 1, "event_type": "start", "data": {}},
        {"seq": 2, "event_type": "end", "data": {"ok": True}},
    ]


def test_event_log_in_memory() -> None:
    events = []
    log = EventLog(events)
    log.append(evlog.PLAN_FAILED, {"error": "insufficient_source"})
    assert events == [
        {"seq": 1, "event_type": "PLAN_FAILED", "data": {"error": "insufficient_source"}}
    ]
    assert list(log) == events


def test_iter_events_skips_garbage(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text('{"seq": 1, "event_type": "a", "data": {}}\nnot json\n\n', encoding="utf-8")
    assert [e["seq"] for e in iter_events(path)] == [1]


def test_iter_events_missing_file(tmp_path: Path) -> None:
    assert list(iter_events(tmp_path / "missing.jsonl")) == []


def test_log_rotation(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "events.jsonl"
    monkeypatch.setattr(evlog, "_retention_bytes", lambda: 100)
    for i in range(3):
        append_event(path, i, "test", {"n": i})

    gz_files = [p for p in tmp_path.iterdir() if p.suffix == ".gz"]
    assert len(gz_files) == 1
    with gzip.open(gz_files[0], "rt", encoding="utf-8") as fh:
        rotated = [json.loads(l) for l in fh if l.strip()]
    assert [e["seq"] for e in rotated] == [0, 1]
    remaining = list(iter_events(path))
    assert len(remaining) == 1 and remaining[0]["seq"] == 2


def test_rotations_within_one_second_keep_every_archive(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "events.jsonl"
    monkeypatch.setattr(evlog, "_retention_bytes", lambda: 0)
    log = EventLog(path)
    for i in range(3):
        log.append("test", {"n": i})

    archives = sorted(p for p in tmp_path.iterdir() if p.suffix == ".gz")
    assert len(archives) == 2
    seqs = []
    for archive in archives:
        with gzip.open(archive, "rt", encoding="utf-8") as fh:
            seqs += [json.loads(l)["seq"] for l in fh if l.strip()]
    seqs += [e["seq"] for e in iter_events(path)]
    assert sorted(seqs) == [1, 2, 3]


def test_reopened_log_continues_numbering(tmp_path: Path) -> None:
    path = tmp_path / "events.jsonl"
    assert EventLog(path).append("A", {}) == 1
    second = EventLog(path)
    assert second.append("B", {}) == 2
    assert [e["seq"] for e in iter_events(path)] == [1, 2]


def test_in_memory_log_continues_from_existing_events() -> None:
    events = [{"seq": 4, "event_type": "A", "data": {}}]
    assert EventLog(events).append("B", {}) == 5
