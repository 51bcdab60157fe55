import pytest

from rocketevo.utils.trackers import (
    GenericLogger,
    LoguruConfig,
    NullWriter,
    TBConfig,
    init_loguru,
    init_tb,
)

from conftest import RecordingBackend


def test_backend_opened_on_construction(recording_writer, recording_backend):
    assert recording_backend.opened


def test_steps_auto_increment_per_tag(recording_writer, recording_backend):
    recording_writer.scalar("loss", 1.0)
    recording_writer.scalar("loss", 2.0)
    recording_writer.scalar("other", 3.0)
    recording_writer.scalar("loss", 4.0, step=10)
    recording_writer.scalar("loss", 5.0)
    assert recording_backend.events == [
        ("scalar", "loss", 1.0, 0),
        ("scalar", "loss", 2.0, 1),
        ("scalar", "other", 3.0, 0),
        ("scalar", "loss", 4.0, 10),
        ("scalar", "loss", 5.0, 11),
    ]


def test_bound_writer_renders_path_and_labels(recording_writer, recording_backend):
    bound = recording_writer.bind(path=["generation"]).bind(
        path=["stats"], labels={"run": "a b"}
    )
    bound.scalar("best", 0.25, step=3)
    bound.hist("fitness", [0.1, 0.2], step=3)
    bound.text("note", "hello", step=3)
    assert recording_backend.events == [
        ("scalar", "generation/stats/best/run=a_b", 0.25, 3),
        ("hist", "generation/stats/fitness/run=a_b", [0.1, 0.2], 3),
        ("text", "generation/stats/note/run=a_b", "hello", 3),
    ]


def test_close_flushes_and_drops_later_events(recording_writer, recording_backend):
    recording_writer.close()
    recording_writer.close()
    assert recording_backend.closed
    assert recording_backend.flushes == 1

    recording_writer.scalar("late", 1.0)
    assert recording_backend.events == []


def test_backend_failures_are_logged_not_raised(log_messages):
    class Broken(RecordingBackend):
        def write_scalar(self, tag, value, step, wall_time):
            raise RuntimeError("disk full")

    writer = GenericLogger(Broken(), flush_secs=float("inf"))
    writer.scalar("loss", 1.0)
    assert any("dropped 'loss'" in m for m in log_messages)


def test_null_writer_accepts_everything():
    writer = NullWriter()
    bound = writer.bind(path=["x"])
    assert bound is writer
    bound.scalar("a", 1.0, step=0)
    bound.hist("b", [1.0])
    bound.text("c", "d")
    bound.flush()
    bound.close()


def test_loguru_writer_emits_one_line_per_step(log_messages):
    writer = init_loguru(LoguruConfig(prefix="[Gen]"))
    w = writer.bind(path=["generation"])
    w.scalar("best_fitness", 0.5, step=4)
    w.scalar("average_fitness", 0.75, step=4)
    assert not any(m.startswith("[Gen] step=4") for m in log_messages)

    w.flush()
    lines = [m for m in log_messages if m.startswith("[Gen] step=4")]
    assert len(lines) == 1
    assert "generation/best_fitness=0.5" in lines[0]
    assert "generation/average_fitness=0.75" in lines[0]
    writer.close()


def test_tensorboard_writer_creates_event_file(tmp_path):
    logdir = tmp_path / "tb"
    writer = init_tb(TBConfig(logdir=logdir), flush_secs=0.0)
    writer.scalar("best_fitness", 0.5, step=0)
    writer.hist("fitness", [0.1, 0.5, 0.9], step=0)
    writer.close()
    assert any(p.name.startswith("events.out.tfevents") for p in logdir.rglob("*"))
