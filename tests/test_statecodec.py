import base64
import json

import pytest
from pygame.math import Vector2 as Vec2

from notedrop.segment import Segment
from notedrop.statecodec import decode_token, deserialize, encode_token, serialize
from notedrop.vec import vec

from conftest import HEIGHT, WIDTH, step

SERIALISED = {
    "dropperTimeout": 500,
    "droppers": [{"pos": {"x": 10, "y": 10}, "timeout": 0}],
    "gravity": 1.2,
    "instrument": "guitar",
    "lines": [{"from": {"x": 0, "y": 10}, "to": {"x": 30, "y": 10}}],
    "root": "C",
    "scaleType": "major",
    "size": {"x": WIDTH, "y": HEIGHT},
}


def b64(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def geometry(sim):
    return (
        [l.to_dict() for l in sim.board.lines],
        [d.to_dict() for d in sim.board.droppers],
    )


def test_serialize(sim):
    sim.board.lines.append(Segment(vec(0, 10), vec(30, 10)))
    sim.add_dropper(vec(10, 10))

    assert serialize(sim.board, sim.size()) == {
        "dropperTimeout": 800,
        "droppers": [{"pos": {"x": 10, "y": 10}, "timeout": 0}],
        "gravity": 1,
        "instrument": "marimba",
        "lines": [{"from": {"x": 0, "y": 10}, "to": {"x": 30, "y": 10}}],
        "root": "C",
        "scaleType": "major",
        "size": {"x": WIDTH, "y": HEIGHT},
    }


def test_deserialize(sim):
    assert deserialize(sim.board, SERIALISED, sim.size())

    b = sim.board
    assert b.params.dropper_timeout == 500
    assert b.params.gravity == 1.2
    assert (b.audio.root, b.audio.scale_type, b.audio.instrument) == ("C", "major", "guitar")
    assert b.lines == [Segment(vec(0, 10), vec(30, 10))]
    assert [(d.pos, d.timeout_ms) for d in b.droppers] == [(Vec2(10, 10), 0)]


def test_token_round_trip(sim):
    sim.add_line(vec(0.25, 10.5), vec(30.125, 17))
    sim.add_dropper(vec(10, 10))
    sim.board.params.dropper_timeout = 0
    step(sim, 3)
    sim.board.params.gravity = 2.2
    sim.board.params.dropper_timeout = 350
    sim.board.audio.root = "F#"
    sim.board.audio.scale_type = "pentatonic_minor"
    sim.board.audio.instrument = "guitar"
    token = sim.save_token()
    expected = geometry(sim)

    sim.clear_board()
    sim.reset_params()
    sim.board.audio.root = "C"
    assert sim.load_token(token)

    assert geometry(sim) == expected
    assert sim.board.params.gravity == 2.2
    assert sim.board.params.dropper_timeout == 350
    assert sim.board.audio.root == "F#"
    assert sim.board.audio.scale_type == "pentatonic_minor"
    assert sim.board.audio.instrument == "guitar"


def test_token_is_base64_json():
    token = encode_token({"gravity": 1})
    assert json.loads(base64.b64decode(token)) == {"gravity": 1}
    assert decode_token(token) == {"gravity": 1}


def test_narrower_board_is_recentred(sim):
    data = dict(SERIALISED, size={"x": WIDTH - 100, "y": 300})
    assert deserialize(sim.board, data, sim.size())

    assert sim.board.lines == [Segment(vec(50, 10), vec(80, 10))]
    assert sim.board.droppers[0].pos == Vec2(60, 10)


def test_recentring_does_not_touch_input(sim):
    data = json.loads(json.dumps(dict(SERIALISED, size={"x": 200, "y": 300})))
    deserialize(sim.board, data, sim.size())
    assert data["lines"][0]["from"]["x"] == 0


@pytest.mark.parametrize("token", [
    "",
    "not base64!!",
    b64("not json"),
    b64("[1, 2, 3]"),
    b64(json.dumps({"gravity": 1})),
    b64(json.dumps(dict(SERIALISED, lines=[{"from": {"x": 1}}]))),
    b64(json.dumps(dict(SERIALISED, gravity="heavy"))),
    b64(json.dumps(dict(SERIALISED, droppers=7))),
    b64(json.dumps(dict(SERIALISED, root="H"))),
    b64(json.dumps(dict(SERIALISED, scaleType="lydian"))),
    b64(json.dumps(dict(SERIALISED, instrument="kazoo"))),
    b64('{"gravity": 1' + "0" * 400 + "}"),
    b64(json.dumps(SERIALISED).replace('"gravity": 1.2', '"gravity": 1' + "0" * 400)),
    b64(json.dumps(dict(SERIALISED, gravity=float("nan")))),
    b64(json.dumps(dict(SERIALISED, dropperTimeout=float("inf")))),
    b64(json.dumps(dict(SERIALISED, size={"x": float("-inf"), "y": HEIGHT}))),
    b64(json.dumps(SERIALISED).replace('"pos": {"x": 10', '"pos": {"x": 1e400')),
])
def test_bad_tokens_leave_board_unchanged(sim, token):
    sim.add_line(vec(0, 10), vec(30, 10))
    sim.add_dropper(vec(10, 10))
    before = geometry(sim)

    assert not sim.load_token(token)
    assert geometry(sim) == before
    assert sim.board.params.gravity == 1
    assert sim.board.audio.instrument == "marimba"


def test_requested_load_waits_for_end_of_update(sim):
    token = encode_token(SERIALISED)
    sim.request_load(token)
    assert sim.board.lines == []

    sim.update(1)
    assert sim.board.lines == [Segment(vec(0, 10), vec(30, 10))]
    assert sim.board.audio.instrument == "guitar"


def test_requested_load_of_garbage_is_ignored(sim):
    sim.add_line(vec(0, 10), vec(30, 10))
    sim.request_load("%%%")
    sim.update(1)
    assert len(sim.board.lines) == 1


def test_requested_load_of_oversized_number_is_ignored(sim):
    sim.add_line(vec(0, 10), vec(30, 10))
    sim.request_load(b64(json.dumps(SERIALISED).replace('"gravity": 1.2', '"gravity": 1' + "0" * 400)))
    sim.update(1)
    assert len(sim.board.lines) == 1
    assert sim.board.params.gravity == 1


def test_non_finite_gravity_never_reaches_the_board(sim):
    assert not sim.load_token(b64(json.dumps(dict(SERIALISED, gravity=float("nan")))))
    sim.add_dropper(vec(100, 100))
    sim.board.params.dropper_timeout = 0
    step(sim, 50)
    assert sim.board.balls
    assert all(b.pos.y == b.pos.y for b in sim.board.balls)


def test_deeply_nested_token_is_rejected(sim):
    sim.add_line(vec(0, 10), vec(30, 10))
    token = b64("[" * 100000 + "]" * 100000)

    assert decode_token(token) is None
    assert not sim.load_token(token)
    sim.request_load(token)
    sim.update(1)
    assert len(sim.board.lines) == 1
