"""Tests for random parameter generation."""

import numpy as np

from poseforge.body.randomizer import random_parameters


def test_samples_stay_in_bounds():
    rng = np.random.default_rng(1234)
    for _ in range(1000):
        p = random_parameters(rng)
        assert all(-2.0 <= v <= 2.0 for v in p.betas)
        assert all(-0.3 <= v <= 0.3 for v in p.body_pose)
        assert all(-0.4 <= v <= 0.4 for v in p.left_hand_pose + p.right_hand_pose)
        assert all(-1.0 <= v <= 1.0 for v in p.expression)
        assert 0.0 <= p.jaw_pose[0] <= 0.2
        assert p.jaw_pose[1:] == (0.0, 0.0)
        assert p.leye_pose == p.reye_pose == (0.0, 0.0, 0.0)
        assert p.transl == (0.0, 0.0, 0.0)


def test_field_lengths():
    p = random_parameters(np.random.default_rng(0))
    assert len(p.body_pose) == 66
    assert len(p.left_hand_pose) == 45
    assert len(p.betas) == 10


def test_seeded_generators_reproduce():
    a = random_parameters(np.random.default_rng(7))
    b = random_parameters(np.random.default_rng(7))
    assert a == b
    assert a != random_parameters(np.random.default_rng(8))
