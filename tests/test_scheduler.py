"""Tests for row scheduling over the worker pool."""

import threading

import pytest

from pathtracer.errors import PoolCreationError, RenderError
from pathtracer.renderer.scheduler import RowQueue, run_rows


class RecordingRenderer:
    """Row renderer that records which rows ran, on which generator."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.rows = []
        self.rngs = {}
        self.lock = threading.Lock()

    def __call__(self, row, rng):
        with self.lock:
            self.rows.append(row)
            self.rngs.setdefault(threading.get_ident(), set()).add(id(rng))
        if row == self.fail_on:
            raise ValueError(f"row {row} exploded")


class TestRowQueue:
    """Tests for RowQueue."""

    def test_claims_each_row_once_in_order(self):
        queue = RowQueue(3)
        assert [queue.claim() for _ in range(5)] == [0, 1, 2, None, None]
        assert queue.claimed == 3

    def test_closed_queue_hands_out_nothing(self):
        queue = RowQueue(10)
        assert queue.claim() == 0
        queue.close()
        assert queue.claim() is None
        assert queue.claimed == 1

    def test_empty_queue(self):
        assert RowQueue(0).claim() is None


class TestRunRows:
    """Tests for run_rows."""

    @pytest.mark.parametrize("workers", [1, 2, 8])
    def test_every_row_rendered_exactly_once(self, workers):
        renderer = RecordingRenderer()
        completed = run_rows(50, workers, renderer)
        assert sorted(renderer.rows) == list(range(50))
        assert len(completed) == workers
        assert sum(completed) == 50

    def test_more_workers_than_rows(self):
        renderer = RecordingRenderer()
        completed = run_rows(3, 8, renderer)
        assert sorted(renderer.rows) == [0, 1, 2]
        assert sum(completed) == 3

    def test_each_worker_keeps_one_generator(self):
        renderer = RecordingRenderer()
        run_rows(40, 4, renderer)
        for rng_ids in renderer.rngs.values():
            assert len(rng_ids) == 1

    def test_single_worker_renders_rows_in_order(self):
        renderer = RecordingRenderer()
        run_rows(10, 1, renderer)
        assert renderer.rows == list(range(10))

    def test_zero_workers_rejected(self):
        with pytest.raises(PoolCreationError) as excinfo:
            run_rows(10, 0, RecordingRenderer())
        assert excinfo.value.workers == 0

    def test_failure_raises_render_error(self):
        renderer = RecordingRenderer(fail_on=7)
        with pytest.raises(RenderError) as excinfo:
            run_rows(20, 4, renderer)
        assert excinfo.value.row == 7
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert "row 7 exploded" in str(excinfo.value)

    def test_failure_stops_handing_out_rows(self):
        renderer = RecordingRenderer(fail_on=0)
        with pytest.raises(RenderError):
            run_rows(20, 1, renderer)
        assert renderer.rows == [0]
