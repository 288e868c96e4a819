from dino_dash.policy import policy


def test_noop_without_obstacles(quiet_controller):
    assert policy(quiet_controller) == [0, 0, 0]


def test_jumps_when_obstacle_is_close(quiet_controller):
    obstacle = quiet_controller.spawn_obstacle()
    player = quiet_controller.player.body
    obstacle.body.x = player.left + player.width + 20 + obstacle.body.width / 2
    assert policy(quiet_controller) == [0, 1, 0]


def test_waits_while_obstacle_is_far(quiet_controller):
    quiet_controller.spawn_obstacle()
    assert policy(quiet_controller) == [0, 0, 0]


def test_ignores_obstacles_already_passed(quiet_controller):
    obstacle = quiet_controller.spawn_obstacle()
    obstacle.body.x = quiet_controller.player.body.left - obstacle.body.width
    assert policy(quiet_controller) == [0, 0, 0]


def test_autopilot_clears_a_single_obstacle(quiet_controller):
    c = quiet_controller
    obstacle = c.spawn_obstacle()
    c.obstacle_timer.cancel()
    for _ in range(300):
        action = policy(c)
        if action[1] == 1:
            c.jump()
        c.tick()
        if obstacle.destroyed:
            break
    assert not c.game_over
    assert obstacle.destroyed
