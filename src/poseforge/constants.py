"""Shared constants and defaults for PoseForge."""

from pathlib import Path

# Project paths
PACKAGE_DIR = Path(__file__).parent
SHADER_DIR = PACKAGE_DIR / "rendering" / "shaders"

# Parameter vector sizes (SMPL-X layout)
NUM_BETAS = 10
NUM_BODY_JOINTS = 22
NUM_HAND_JOINTS = 15
NUM_EXPRESSION = 10
BODY_POSE_SIZE = NUM_BODY_JOINTS * 3   # 66
HAND_POSE_SIZE = NUM_HAND_JOINTS * 3   # 45

# Pose application
ROTATION_EPSILON = 1e-4     # rotation vectors at or below this magnitude snap to identity
STATURE_COEFF = 0.05        # vertical offset scale per betas[0]
WIDTH_COEFF = 0.1           # lateral offset scale per betas[1]

# Randomizer ranges
RANDOM_BETAS_RANGE = (-2.0, 2.0)
RANDOM_BODY_POSE_RANGE = (-0.3, 0.3)
RANDOM_HAND_POSE_RANGE = (-0.4, 0.4)
RANDOM_EXPRESSION_RANGE = (-1.0, 1.0)
RANDOM_JAW_OPEN_RANGE = (0.0, 0.2)

# Slider ranges
POSE_SLIDER_RANGE = (-1.5, 1.5)
BETA_SLIDER_RANGE = (-3.0, 3.0)
FOV_SLIDER_RANGE = (20.0, 100.0)

# Camera defaults
DEFAULT_CAMERA_POS = (0.0, 1.5, 4.0)
DEFAULT_CAMERA_TARGET = (0.0, 1.0, 0.0)
DEFAULT_FOV = 45.0
FOV_MIN = 1.0
FOV_MAX = 179.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0

# Frame timing
TARGET_FPS = 60
FRAME_INTERVAL_MS = 16

# AI pose synthesis
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_REQUEST_TIMEOUT_S = 60.0
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
MODEL_ENV_VAR = "POSEFORGE_MODEL"
TIMEOUT_ENV_VAR = "POSEFORGE_REQUEST_TIMEOUT"

# Parameter files
SUPPORTED_IMPORT_SUFFIXES = (".json", ".npz")
REJECTED_IMPORT_SUFFIXES = (".pkl",)
