"""Tests for the pure interval-timer state machine.

Covers: the transition table, the tick contract (last second shown is 1),
command no-ops, segment counting across rounds and sets, determinism,
and handling of degenerate configs.
"""

import pytest
from dataclasses import replace

from aerialtimer.config import TimerConfig
from aerialtimer.timer import engine
from aerialtimer.timer.engine import (
    Phase, TimerState, initial_state, advance_phase, tick, tick_many,
    segment_count, total_duration,
)


def running(state: TimerState) -> TimerState:
    return engine.start(state)


def run_phases(config: TimerConfig) -> list[Phase]:
    """Tick from a fresh start to FINISHED, recording each new phase."""
    state = running(initial_state(config))
    phases = [state.phase]
    for _ in range(100_000):
        if state.is_finished:
            break
        state = tick(state, config)
        if state.phase is not phases[-1]:
            phases.append(state.phase)
    return phases


# ═══════════════════════════════════════════════════════════════════════════
#  INITIAL STATE
# ═══════════════════════════════════════════════════════════════════════════


class TestInitialState:

    def test_starts_in_prepare(self):
        cfg = TimerConfig(prepare_time=7)
        s = initial_state(cfg)
        assert s == TimerState(
            phase=Phase.PREPARE,
            current_round=0,
            current_set=1,
            time_remaining=7,
            is_running=False,
            is_paused=False,
        )

    def test_phase_values_match_wire_names(self):
        assert [p.value for p in Phase] == [
            "prepare", "work", "rest", "set-rest", "finished",
        ]


# ═══════════════════════════════════════════════════════════════════════════
#  TRANSITION TABLE
# ═══════════════════════════════════════════════════════════════════════════


class TestAdvancePhase:

    cfg = TimerConfig(
        work_duration=30, rest_duration=10, rounds=3, sets=2,
        rest_between_sets=60, prepare_time=5,
    )

    def test_prepare_to_work(self):
        s = advance_phase(running(initial_state(self.cfg)), self.cfg)
        assert s.phase is Phase.WORK
        assert s.current_round == 1
        assert s.time_remaining == 30

    def test_work_to_rest_increments_round(self):
        s = TimerState(phase=Phase.WORK, current_round=1, current_set=1,
                       time_remaining=1, is_running=True)
        s = advance_phase(s, self.cfg)
        assert s.phase is Phase.REST
        assert s.current_round == 2
        assert s.time_remaining == 10

    def test_last_round_goes_to_set_rest(self):
        s = TimerState(phase=Phase.WORK, current_round=3, current_set=1,
                       time_remaining=1, is_running=True)
        s = advance_phase(s, self.cfg)
        assert s.phase is Phase.SET_REST
        assert s.current_round == 1
        assert s.current_set == 2
        assert s.time_remaining == 60

    def test_last_round_of_last_set_finishes(self):
        s = TimerState(phase=Phase.WORK, current_round=3, current_set=2,
                       time_remaining=4, is_running=True)
        s = advance_phase(s, self.cfg)
        assert s.phase is Phase.FINISHED
        assert s.time_remaining == 0
        assert s.is_running is False

    @pytest.mark.parametrize("phase", [Phase.REST, Phase.SET_REST])
    def test_rests_go_back_to_work(self, phase):
        s = TimerState(phase=phase, current_round=2, current_set=1,
                       time_remaining=1, is_running=True)
        s = advance_phase(s, self.cfg)
        assert s.phase is Phase.WORK
        assert s.time_remaining == 30
        assert s.current_round == 2

    def test_finished_is_absorbing(self):
        s = TimerState(phase=Phase.FINISHED, current_round=3, current_set=2)
        assert advance_phase(s, self.cfg) is s

    def test_does_not_mutate_input(self):
        s = running(initial_state(self.cfg))
        before = replace(s)
        advance_phase(s, self.cfg)
        assert s == before


# ═══════════════════════════════════════════════════════════════════════════
#  TICK CONTRACT
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_no_tick_when_not_running(self):
        cfg = TimerConfig()
        s = initial_state(cfg)
        assert tick(s, cfg) == s

    def test_no_tick_when_paused(self):
        cfg = TimerConfig()
        s = engine.pause(running(initial_state(cfg)))
        assert tick(s, cfg) == s

    def test_decrements_by_one(self):
        cfg = TimerConfig(prepare_time=10)
        s = tick(running(initial_state(cfg)), cfg)
        assert s.time_remaining == 9
        assert s.phase is Phase.PREPARE

    def test_last_displayed_second_is_one(self):
        cfg = TimerConfig(prepare_time=3, work_duration=5)
        s = running(initial_state(cfg))
        seen = []
        while s.phase is Phase.PREPARE:
            seen.append(s.time_remaining)
            s = tick(s, cfg)
        assert seen == [3, 2, 1]
        assert s.phase is Phase.WORK
        assert s.time_remaining == 5

    def test_zero_length_phase_lasts_one_tick(self):
        cfg = TimerConfig(prepare_time=0, work_duration=5)
        s = running(initial_state(cfg))
        assert s.time_remaining == 0
        s = tick(s, cfg)
        assert s.phase is Phase.WORK

    def test_tick_many_equals_repeated_ticks(self):
        cfg = TimerConfig(work_duration=4, rest_duration=2, rounds=3, prepare_time=2)
        a = running(initial_state(cfg))
        b = a
        for _ in range(9):
            a = tick(a, cfg)
        b = tick_many(b, cfg, 9)
        assert a == b

    def test_time_never_negative(self):
        cfg = TimerConfig(work_duration=2, rest_duration=0, rounds=3, sets=2,
                          rest_between_sets=1, prepare_time=1)
        s = running(initial_state(cfg))
        for _ in range(200):
            s = tick(s, cfg)
            assert s.time_remaining >= 0


# ═══════════════════════════════════════════════════════════════════════════
#  COMMANDS
# ═══════════════════════════════════════════════════════════════════════════


class TestCommands:

    cfg = TimerConfig()

    def test_start_sets_running(self):
        s = engine.start(initial_state(self.cfg))
        assert s.is_running and not s.is_paused

    def test_start_on_finished_is_noop(self):
        s = TimerState(phase=Phase.FINISHED)
        assert engine.start(s) is s

    def test_start_keeps_counters(self):
        s = tick_many(running(initial_state(self.cfg)), self.cfg, 15)
        assert engine.start(s) == s

    def test_pause_twice_same_as_once(self):
        s = running(initial_state(self.cfg))
        once = engine.pause(s)
        assert engine.pause(once) == once
        assert once.is_paused

    def test_pause_when_idle_is_noop(self):
        s = initial_state(self.cfg)
        assert engine.pause(s) is s

    def test_resume_when_not_paused_is_noop(self):
        s = running(initial_state(self.cfg))
        assert engine.resume(s) is s
        idle = initial_state(self.cfg)
        assert engine.resume(idle) is idle

    def test_resume_keeps_remaining(self):
        s = tick_many(running(initial_state(self.cfg)), self.cfg, 4)
        r = engine.resume(engine.pause(s))
        assert r.time_remaining == s.time_remaining
        assert r.is_active

    def test_skip_on_finished_is_noop(self):
        s = TimerState(phase=Phase.FINISHED)
        assert engine.skip(s, self.cfg) is s

    def test_two_skips_finish_single_round(self):
        cfg = TimerConfig(rounds=1, sets=1)
        s = initial_state(cfg)
        s = engine.skip(s, cfg)
        assert s.phase is Phase.WORK
        s = engine.skip(s, cfg)
        assert s.phase is Phase.FINISHED


# ═══════════════════════════════════════════════════════════════════════════
#  WHOLE SESSIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestSessions:

    @pytest.mark.parametrize("rounds,sets", [(1, 1), (3, 1), (1, 2), (4, 3), (8, 1)])
    def test_segment_count(self, rounds, sets):
        cfg = TimerConfig(work_duration=3, rest_duration=2, rounds=rounds,
                          sets=sets, rest_between_sets=4, prepare_time=2)
        phases = run_phases(cfg)
        assert phases[-1] is Phase.FINISHED
        visited = len(phases) - 1
        assert visited == 1 + sets * (rounds + rounds - 1) + (sets - 1)
        assert visited == segment_count(cfg)

    def test_ends_stopped_at_zero(self):
        cfg = TimerConfig(work_duration=2, rest_duration=1, rounds=2, prepare_time=1)
        s = tick_many(running(initial_state(cfg)), cfg, total_duration(cfg))
        assert s.is_finished
        assert s.time_remaining == 0
        assert s.is_running is False

    def test_total_duration_is_exact(self):
        cfg = TimerConfig(work_duration=5, rest_duration=0, rounds=3, sets=2,
                          rest_between_sets=4, prepare_time=2)
        s = running(initial_state(cfg))
        s = tick_many(s, cfg, total_duration(cfg) - 1)
        assert not s.is_finished
        s = tick(s, cfg)
        assert s.is_finished

    def test_no_trailing_rest(self):
        cfg = TimerConfig(rounds=2, sets=1)
        phases = run_phases(cfg)
        assert phases[-2:] == [Phase.WORK, Phase.FINISHED]

    def test_deterministic(self):
        cfg = TimerConfig(work_duration=3, rest_duration=2, rounds=2, sets=2,
                          rest_between_sets=3, prepare_time=2)

        def trace():
            s = running(initial_state(cfg))
            out = []
            for i in range(40):
                s = tick(s, cfg)
                if i == 5:
                    s = engine.pause(s)
                if i == 7:
                    s = engine.resume(s)
                if i == 9:
                    s = engine.skip(s, cfg)
                out.append(s)
            return out

        assert trace() == trace()


# ═══════════════════════════════════════════════════════════════════════════
#  DEGENERATE CONFIGS
# ═══════════════════════════════════════════════════════════════════════════


class TestDefensive:

    def test_zero_rounds_treated_as_one(self):
        cfg = TimerConfig(rounds=0, sets=0, work_duration=1, prepare_time=1)
        phases = run_phases(cfg)
        assert phases == [Phase.PREPARE, Phase.WORK, Phase.FINISHED]

    def test_negative_durations_clamped(self):
        cfg = TimerConfig(prepare_time=-5, work_duration=-3, rounds=1)
        s = running(initial_state(cfg))
        assert s.time_remaining == 0
        s = tick(s, cfg)
        assert s.phase is Phase.WORK
        assert s.time_remaining == 0
        s = tick(s, cfg)
        assert s.is_finished
