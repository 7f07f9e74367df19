"""Range session state machine: transitions, scoring, completion, reset."""

import json
import logging

import numpy as np

from cannonrange.models import RangeFrame
from cannonrange.session.controller import SessionStatus
from cannonrange.session.target import ShotOutcome, Target
from conftest import landing_point


def _fly(ctrl) -> list[dict]:
    events = []
    while ctrl.session.status is SessionStatus.FIRING:
        events.extend(ctrl.advance())
    return events


def _shoot(ctrl, angle=45.0, power=20.0) -> list[dict]:
    events = ctrl.request_launch(angle, power)
    events.extend(_fly(ctrl))
    events.extend(ctrl.acknowledge_result())
    return events


class TestInitialState:
    def test_fresh_controller_is_ready(self, make_controller):
        ctrl = make_controller()
        s = ctrl.session
        assert s.status is SessionStatus.READY
        assert s.hits == 0
        assert s.attempts == 0
        assert s.last_outcome is ShotOutcome.NONE
        assert s.ghost_trail == ()
        assert not ctrl.projectile.active
        assert 550.0 <= ctrl.target.x <= 650.0
        assert ctrl.target.y == 280.0


class TestTransitions:
    def test_launch_moves_to_firing(self, make_controller):
        ctrl = make_controller()
        events = ctrl.request_launch(40.0, 12.0)
        assert [e["type"] for e in events] == ["launch"]
        assert ctrl.session.status is SessionStatus.FIRING
        assert ctrl.session.attempts == 1
        assert ctrl.projectile.active

    def test_launch_while_firing_is_ignored(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(40.0, 12.0)
        held = ctrl.projectile
        assert ctrl.request_launch(60.0, 20.0) == []
        assert ctrl.session.attempts == 1
        assert ctrl.projectile is held

    def test_advance_and_acknowledge_ignored_when_ready(self, make_controller):
        ctrl = make_controller()
        assert ctrl.advance() == []
        assert ctrl.acknowledge_result() == []
        assert ctrl.session.status is SessionStatus.READY
        assert ctrl.tick == 0

    def test_acknowledge_ignored_while_firing(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(40.0, 12.0)
        assert ctrl.acknowledge_result() == []
        assert ctrl.session.status is SessionStatus.FIRING

    def test_ignored_launch_is_logged(self, make_controller, caplog):
        ctrl = make_controller()
        ctrl.request_launch(40.0, 12.0)
        with caplog.at_level(logging.WARNING, logger="cannonrange"):
            ctrl.request_launch(40.0, 12.0)
        assert "Launch ignored" in caplog.text

    def test_stays_firing_until_projectile_retires(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(45.0, 20.0)
        for _ in range(50):
            assert ctrl.advance() == []
            assert ctrl.session.status is SessionStatus.FIRING
        events = ctrl.advance()
        assert [e["type"] for e in events] == ["resolve"]
        assert events[0]["ticks"] == 51
        assert ctrl.session.status is SessionStatus.RESULT


class TestOutcomes:
    def test_hit_scenario(self, reachable_controller):
        ctrl = reachable_controller()
        ctrl.request_launch(45.0, 20.0)
        events = _fly(ctrl)

        assert events[-1]["outcome"] == "hit"
        assert ctrl.session.last_outcome is ShotOutcome.HIT
        assert ctrl.session.ghost_trail == ctrl.projectile.trail
        # Hits are credited on acknowledgement, not on resolution.
        assert ctrl.session.hits == 0

        ack = ctrl.acknowledge_result()
        assert ack[0] == {"type": "acknowledge", "scored": True, "hits": 1}
        assert ctrl.session.hits == 1
        assert ctrl.session.status is SessionStatus.READY
        assert ctrl.session.last_outcome is ShotOutcome.NONE
        assert not ctrl.projectile.active
        assert ctrl.projectile.trail == ()
        np.testing.assert_array_equal(ctrl.projectile.vel, [0.0, 0.0])
        np.testing.assert_array_equal(ctrl.projectile.pos, [60.0, 320.0])

    def test_miss_scenario_out_of_reach(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(15.0, 5.0)
        events = _fly(ctrl)

        resolved = events[-1]
        assert resolved["outcome"] == "miss"
        assert resolved["miss_margin"] > 0
        assert ctrl.session.ghost_trail == ()
        ctrl.acknowledge_result()
        assert ctrl.session.hits == 0
        assert ctrl.session.attempts == 1

    def test_exact_hit_radius_is_miss(self, make_controller):
        ctrl = make_controller()
        fx, fy = landing_point(45.0, 20.0)
        tx = fx + 40.0
        ctrl.target = Target(x=tx, y=fy, visual_radius=20.0, hit_radius=abs(fx - tx))

        ctrl.request_launch(45.0, 20.0)
        events = _fly(ctrl)
        assert events[-1]["distance"] == ctrl.target.hit_radius
        assert events[-1]["outcome"] == "miss"

    def test_miss_keeps_previous_ghost_trail(self, reachable_controller):
        ctrl = reachable_controller()
        _shoot(ctrl)
        ghost = ctrl.session.ghost_trail
        assert ghost

        _shoot(ctrl, angle=15.0, power=5.0)
        assert ctrl.session.ghost_trail == ghost

    def test_hit_precision_does_not_matter(self, make_controller):
        fx, fy = landing_point(45.0, 20.0)
        dead_center = make_controller(target_at=(fx, fy))
        near_edge = make_controller(target_at=(fx + 39.0, fy))
        _shoot(dead_center)
        _shoot(near_edge)
        assert dead_center.session.hits == near_edge.session.hits == 1

    def test_shot_log(self, reachable_controller):
        ctrl = reachable_controller()
        _shoot(ctrl)
        _shoot(ctrl, angle=15.0, power=5.0)
        assert [s.attempt for s in ctrl.shots] == [1, 2]
        assert [s.outcome for s in ctrl.shots] == [ShotOutcome.HIT, ShotOutcome.MISS]
        assert ctrl.shots[0].ticks == 51
        d = ctrl.shots[1].to_dict()
        assert d["outcome"] == "miss"
        assert d["angle_deg"] == 15.0


class TestCompletion:
    def test_three_hits_complete_once(self, reachable_controller):
        completions = []
        ctrl = reachable_controller(on_complete=completions.append)

        all_events = []
        for _ in range(3):
            all_events.extend(_shoot(ctrl))

        assert ctrl.session.hits == 3
        assert ctrl.complete
        assert len(completions) == 1
        assert completions[0].hits == 3
        assert [e["type"] for e in all_events].count("session_complete") == 1
        assert ctrl.session.status is SessionStatus.READY

        # Further launches are refused until a new session starts.
        assert ctrl.request_launch(45.0, 20.0) == []
        assert ctrl.session.attempts == 3
        assert ctrl.session.hits == 3
        assert len(completions) == 1

    def test_completion_fires_on_last_hit_only(self, reachable_controller):
        completions = []
        ctrl = reachable_controller(on_complete=completions.append)
        _shoot(ctrl)
        _shoot(ctrl, angle=15.0, power=5.0)
        _shoot(ctrl)
        assert completions == []
        _shoot(ctrl)
        assert len(completions) == 1
        assert ctrl.session.attempts == 4

    def test_hook_can_start_a_new_session(self, reachable_controller):
        ctrl = None

        def replay(_record):
            ctrl.new_session()

        ctrl = reachable_controller(on_complete=replay)
        for _ in range(3):
            _shoot(ctrl)
        assert ctrl.session.hits == 0
        assert ctrl.session.status is SessionStatus.READY
        assert ctrl.request_launch(45.0, 20.0)


class TestNewSession:
    def test_resets_bookkeeping(self, reachable_controller):
        ctrl = reachable_controller()
        for _ in range(3):
            _shoot(ctrl)

        events = ctrl.new_session()
        assert [e["type"] for e in events] == ["new_session"]
        s = ctrl.session
        assert (s.hits, s.attempts, s.ghost_trail) == (0, 0, ())
        assert s.status is SessionStatus.READY
        assert ctrl.shots == []
        assert ctrl.request_launch(45.0, 20.0)

    def test_regenerates_target_in_band(self, make_controller):
        ctrl = make_controller(seed=11)
        seen = set()
        for _ in range(20):
            ctrl.new_session()
            assert 550.0 <= ctrl.target.x <= 650.0
            assert ctrl.target.y == 280.0
            seen.add(ctrl.target.x)
        assert len(seen) > 1

    def test_abandons_flight_in_progress(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(45.0, 20.0)
        ctrl.advance()
        ctrl.new_session()
        assert ctrl.session.status is SessionStatus.READY
        assert not ctrl.projectile.active
        assert ctrl.advance() == []


class TestViews:
    def test_snapshot_reflects_state(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(45.0, 20.0)
        ctrl.advance()
        frame = ctrl.snapshot()
        assert isinstance(frame, RangeFrame)
        assert frame.tick == 1
        assert frame.projectile.active
        assert len(frame.projectile.trail) == 2
        assert frame.session.status == "firing"
        assert frame.session.attempts == 1
        assert frame.session.miss_margin is None
        assert frame.target.center == (ctrl.target.x, ctrl.target.y)

    def test_snapshot_miss_margin_after_miss(self, make_controller):
        ctrl = make_controller()
        ctrl.request_launch(15.0, 5.0)
        events = _fly(ctrl)
        frame = ctrl.snapshot()
        assert frame.session.last_outcome == "miss"
        assert frame.session.miss_margin == events[-1]["miss_margin"]

    def test_no_replay_unless_recording(self, make_controller):
        assert make_controller().get_replay() is None

    def test_replay_frames(self, reachable_controller):
        ctrl = reachable_controller(record_replay=True)
        _shoot(ctrl)
        replay = ctrl.get_replay()
        frames = replay["frames"]
        # new_session + launch + 51 ticks + acknowledge
        assert len(frames) == 54
        assert frames[0]["events"][0]["type"] == "new_session"
        assert frames[1]["events"][0]["type"] == "launch"
        assert frames[-2]["events"][0]["type"] == "resolve"
        assert frames[-1]["session"]["hits"] == 1
        assert replay["config"]["max_hits"] == 3
        json.dumps(replay)
