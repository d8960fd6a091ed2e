import math

import pytest

from spacegame.player import (
    CAMERA_SCALE,
    MOVE_SPEED,
    Camera,
    Direction,
    Player,
    movement_vector,
)


def test_movement_vector_empty():
    assert movement_vector([]) == (0.0, 0.0)


def test_movement_vector_opposites_cancel():
    assert movement_vector([Direction.LEFT, Direction.RIGHT]) == (0.0, 0.0)


def test_movement_vector_ignores_duplicates():
    assert movement_vector([Direction.UP, Direction.UP]) == Direction.UP.value


def test_move_right_one_second():
    player = Player()
    player.move([Direction.RIGHT], 1.0)
    assert player.x == pytest.approx(MOVE_SPEED)
    assert player.y == pytest.approx(0.0)
    assert player.rotation == pytest.approx(-math.pi / 2)


def test_move_up_faces_forward():
    player = Player()
    player.move([Direction.UP], 0.5)
    assert player.y == pytest.approx(MOVE_SPEED * 0.5)
    assert player.rotation == pytest.approx(0.0)


def test_diagonal_speed_is_normalised():
    player = Player()
    player.move([Direction.UP, Direction.LEFT], 1.0)
    assert math.hypot(player.x, player.y) == pytest.approx(MOVE_SPEED)
    assert player.x < 0 < player.y


def test_no_input_keeps_state():
    player = Player(x=3.0, y=4.0, rotation=1.0)
    player.move([Direction.DOWN, Direction.UP], 1.0)
    assert (player.x, player.y, player.rotation) == (3.0, 4.0, 1.0)


def test_player_depth_unchanged():
    player = Player()
    player.move([Direction.DOWN], 1.0)
    assert player.z == 1.0


def test_camera_default_scale():
    assert Camera().scale == CAMERA_SCALE


def test_camera_follow_halfway():
    camera = Camera(z=10.0)
    player = Player(x=100.0, y=-50.0)
    camera.follow(player, 0.25)
    assert camera.x == pytest.approx(player.x / 2)
    assert camera.y == pytest.approx(player.y / 2)
    assert camera.z == 10.0


def test_camera_follow_reaches_player():
    camera = Camera()
    player = Player(x=7.0, y=9.0)
    camera.follow(player, 0.5)
    assert (camera.x, camera.y) == pytest.approx((player.x, player.y))