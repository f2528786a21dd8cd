"""Tests for phase-transition events and the dispatcher."""

from breakbank.timer.engine import Phase, TimerState
from breakbank.timer.events import PhaseTransition, TransitionDispatcher

from helpers import StateRecorder, finish_phase


def _dispatch_into(engine):
    rec = StateRecorder()
    engine.subscribe(TransitionDispatcher(rec))
    return rec


class TestPhaseTransition:

    def test_source_and_target(self):
        t = PhaseTransition(
            previous=TimerState(Phase.WORK, 1, 0, 0),
            current=TimerState(Phase.ROLLOVER, 60, 300, 1),
        )
        assert t.source == Phase.WORK
        assert t.target == Phase.ROLLOVER
        assert t.earned_break == 300
        assert t.is_work_completed

    def test_break_spending_earns_nothing(self):
        t = PhaseTransition(
            previous=TimerState(Phase.ROLLOVER, 40, 300, 1),
            current=TimerState(Phase.BREAK, 100, 200, 1),
        )
        assert t.earned_break == 0
        assert not t.is_work_completed


class TestTransitionDispatcher:

    def test_subscribe_only_primes(self, engine):
        rec = _dispatch_into(engine)
        assert len(rec) == 0

    def test_ticks_within_phase_are_ignored(self, engine, scheduler):
        rec = _dispatch_into(engine)
        engine.start()
        scheduler.advance(30)
        assert [(t.source, t.target) for t in rec] == [(Phase.IDLE, Phase.WORK)]

    def test_full_cycle(self, short_engine, scheduler):
        rec = _dispatch_into(short_engine)
        short_engine.start()
        finish_phase(short_engine, scheduler)
        short_engine.take_break()
        finish_phase(short_engine, scheduler)
        assert [(t.source, t.target) for t in rec] == [
            (Phase.IDLE, Phase.WORK),
            (Phase.WORK, Phase.ROLLOVER),
            (Phase.ROLLOVER, Phase.BREAK),
            (Phase.BREAK, Phase.IDLE),
        ]
        assert rec[1].earned_break == 2
        assert rec[1].current.remaining_seconds == 3

    def test_pause_is_not_a_phase_change(self, engine):
        rec = _dispatch_into(engine)
        engine.start()
        engine.pause()
        engine.resume()
        assert len(rec) == 1

    def test_sinks_called_in_order(self, engine):
        calls = []
        dispatcher = TransitionDispatcher(lambda t: calls.append("first"))
        dispatcher.add_sink(lambda t: calls.append("second"))
        engine.subscribe(dispatcher)
        engine.start()
        assert calls == ["first", "second"]
