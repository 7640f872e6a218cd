"""Random SMPL-X parameter generation within visually plausible bounds."""

from typing import Optional

import numpy as np

from poseforge.constants import (
    BODY_POSE_SIZE, HAND_POSE_SIZE, NUM_BETAS, NUM_EXPRESSION,
    RANDOM_BETAS_RANGE, RANDOM_BODY_POSE_RANGE, RANDOM_HAND_POSE_RANGE,
    RANDOM_EXPRESSION_RANGE, RANDOM_JAW_OPEN_RANGE,
)
from poseforge.core.state import PoseParameters


def _uniform(rng: np.random.Generator, bounds: tuple[float, float], n: int) -> tuple[float, ...]:
    lo, hi = bounds
    return tuple(float(v) for v in rng.uniform(lo, hi, size=n))


def random_parameters(rng: Optional[np.random.Generator] = None) -> PoseParameters:
    """Draw a full parameter set.

    Pass a seeded ``numpy.random.Generator`` for reproducible output. The
    jaw only opens (first component in [0, 0.2]); eyes and translation stay
    at rest.
    """
    if rng is None:
        rng = np.random.default_rng()
    jaw_open = _uniform(rng, RANDOM_JAW_OPEN_RANGE, 1)[0]
    return PoseParameters(
        betas=_uniform(rng, RANDOM_BETAS_RANGE, NUM_BETAS),
        body_pose=_uniform(rng, RANDOM_BODY_POSE_RANGE, BODY_POSE_SIZE),
        jaw_pose=(jaw_open, 0.0, 0.0),
        leye_pose=(0.0, 0.0, 0.0),
        reye_pose=(0.0, 0.0, 0.0),
        left_hand_pose=_uniform(rng, RANDOM_HAND_POSE_RANGE, HAND_POSE_SIZE),
        right_hand_pose=_uniform(rng, RANDOM_HAND_POSE_RANGE, HAND_POSE_SIZE),
        expression=_uniform(rng, RANDOM_EXPRESSION_RANGE, NUM_EXPRESSION),
        transl=(0.0, 0.0, 0.0),
    )
