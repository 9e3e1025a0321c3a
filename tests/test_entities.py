import pytest

from skybird.config import CLOUD_SPEED_FACTOR, SCROLL_SPEED, TREE_FOOTPRINT, TREE_SPEED_FACTOR
from skybird.entities import Bird, Cloud, Pipe, Tree


def make_bird(y: float = 200.0) -> Bird:
    return Bird(50, y, size=30, gravity=0.4, jump_impulse=-7.0, max_fall_speed=10.0)


def test_gravity_accumulates_then_clamps_fall_speed() -> None:
    bird = make_bird()
    bird.apply_gravity()
    assert bird.velocity_y == pytest.approx(0.4)
    assert bird.y == pytest.approx(200.4)
    for _ in range(40):
        bird.apply_gravity()
        assert bird.velocity_y <= 10.0
    assert bird.velocity_y == 10.0


def test_jump_overrides_velocity_even_when_climbing() -> None:
    bird = make_bird()
    bird.velocity_y = 9.0
    bird.jump()
    assert bird.velocity_y == -7.0
    bird.velocity_y = -12.0
    bird.jump()
    assert bird.velocity_y == -7.0


def test_climb_is_not_clamped() -> None:
    bird = make_bird()
    bird.velocity_y = -50.0
    bird.apply_gravity()
    assert bird.velocity_y == pytest.approx(-49.6)


def test_out_of_bounds() -> None:
    bird = make_bird()
    assert not bird.out_of_bounds(400)
    bird.y = -0.1
    assert bird.out_of_bounds(400)
    bird.y = 370
    assert not bird.out_of_bounds(400)
    bird.y = 370.1
    assert bird.out_of_bounds(400)


def test_reset_restores_start() -> None:
    bird = make_bird(12)
    bird.velocity_y = 4.0
    bird.reset(200)
    assert (bird.y, bird.velocity_y) == (200, 0.0)


def test_pipe_bottom_follows_top_and_gap() -> None:
    pipe = Pipe(400, 50, gap=150)
    assert pipe.bottom_y == 200
    pipe.advance()
    assert pipe.x == 400 - SCROLL_SPEED
    assert pipe.bottom_y == 200


def test_pipe_collision_requires_horizontal_overlap() -> None:
    bird = make_bird(0)
    pipe = Pipe(80, 100, gap=150, width=50)
    # bird spans 50..80, pipe starts at 80: touching only
    assert not pipe.collides_with(bird)
    pipe.x = 79
    assert pipe.collides_with(bird)
    pipe.x = 10
    assert pipe.collides_with(bird)
    # pipe spans 0..50, right edge touching the bird at x=50
    pipe.x = 0
    assert not pipe.collides_with(bird)
    pipe.x = -0.5  # right edge 49.5, clear of the bird
    assert not pipe.collides_with(bird)


def _box_hit(bird: Bird, pipe: Pipe, field_height: float) -> bool:
    def overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
        return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah

    b = (bird.x, bird.y, bird.size, bird.size)
    top = (pipe.x, 0, pipe.width, pipe.top_height)
    bottom = (pipe.x, pipe.bottom_y, pipe.width, field_height - pipe.bottom_y)
    return overlap(*b, *top) or overlap(*b, *bottom)


def test_pipe_collision_matches_box_intersection() -> None:
    field_height = 400
    pipe = Pipe(0, 120, gap=150, width=50)
    for px in range(-40, 120, 7):
        pipe.x = px
        for y in range(0, 371, 5):
            bird = make_bird(y)
            assert pipe.collides_with(bird) == _box_hit(bird, pipe, field_height), (px, y)


def test_pipe_scores_once() -> None:
    bird = make_bird()
    pipe = Pipe(1, 100)
    assert not pipe.maybe_score(bird)  # right edge 51 is not behind x=50
    pipe.x = -0.5
    assert pipe.maybe_score(bird)
    assert pipe.counted
    pipe.advance()
    assert not pipe.maybe_score(bird)


def test_pipe_offscreen_once_right_edge_leaves() -> None:
    pipe = Pipe(-50, 100, width=50)
    assert not pipe.offscreen()
    pipe.advance()
    assert pipe.offscreen()


def test_parallax_speeds() -> None:
    cloud = Cloud(480, 40, 80)
    tree = Tree(480, 640, 70)
    assert cloud.speed == SCROLL_SPEED * CLOUD_SPEED_FACTOR
    assert tree.speed == SCROLL_SPEED * TREE_SPEED_FACTOR
    assert cloud.speed < tree.speed < SCROLL_SPEED
    assert cloud.height == pytest.approx(48)


def test_cloud_and_tree_offscreen() -> None:
    cloud = Cloud(-79, 40, 80)
    assert not cloud.offscreen()
    cloud.advance()
    assert cloud.offscreen()
    tree = Tree(-TREE_FOOTPRINT, 640, 70)
    assert not tree.offscreen()
    tree.advance()
    assert tree.offscreen()
    view = tree.view()
    assert view.height == 70 and view.y == 640
