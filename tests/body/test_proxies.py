"""Tests for joint proxy selection and geometry."""

import numpy as np
import pytest

from poseforge.body.joint_table import JOINT_NAMES
from poseforge.body.proxies import (
    ProxyKind, make_bone_material, make_marker_material, make_proxy_geometry, select_proxy,
)


@pytest.mark.parametrize("name, kind", [
    ("Head", ProxyKind.HEAD),
    ("Pelvis", ProxyKind.TORSO),
    ("Spine2", ProxyKind.TORSO),
    ("L_Hip", ProxyKind.LEG),
    ("R_Ankle", ProxyKind.LEG),
    ("L_Collar", ProxyKind.ARM),
    ("R_Wrist", ProxyKind.ARM),
    ("Neck", None),
    ("L_Foot", None),
    ("Tail", None),
])
def test_select_proxy(name, kind):
    assert select_proxy(name) is kind


def test_proxy_count_for_body():
    assert sum(select_proxy(n) is not None for n in JOINT_NAMES) == 19


def test_leg_hangs_below_joint():
    lo, hi = make_proxy_geometry(ProxyKind.LEG, "L_Knee").get_bounds()
    assert hi[1] == pytest.approx(0.0, abs=1e-6)
    assert lo[1] == pytest.approx(-0.35, abs=1e-6)


def test_arm_extends_sideways_by_side():
    lo, hi = make_proxy_geometry(ProxyKind.ARM, "L_Elbow").get_bounds()
    assert lo[0] == pytest.approx(0.0, abs=1e-6)
    assert hi[0] == pytest.approx(0.25, abs=1e-6)
    lo, hi = make_proxy_geometry(ProxyKind.ARM, "R_Elbow").get_bounds()
    assert lo[0] == pytest.approx(-0.25, abs=1e-6)
    assert hi[0] == pytest.approx(0.0, abs=1e-6)


def test_torso_is_lifted():
    lo, hi = make_proxy_geometry(ProxyKind.TORSO, "Spine1").get_bounds()
    np.testing.assert_array_almost_equal(lo, [-0.11, -0.01, -0.09])
    np.testing.assert_array_almost_equal(hi, [0.11, 0.11, 0.09])


def test_materials():
    bone = make_bone_material()
    assert bone.transparent
    assert bone.opacity == pytest.approx(0.85)
    marker = make_marker_material()
    assert marker.emissive == (1.0, 1.0, 1.0)
    assert not marker.transparent
