"""PySide6 QOpenGLWidget subclass bridging Qt and OpenGL rendering."""

import logging
import traceback

from PySide6.QtCore import QTimer, Qt, Signal
from PySide6.QtGui import QMouseEvent, QSurfaceFormat, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from poseforge.body.skeleton import Skeleton
from poseforge.body.skeleton_rig import SkeletonRig
from poseforge.constants import FRAME_INTERVAL_MS
from poseforge.core.material import Material
from poseforge.core.mesh import MeshInstance
from poseforge.core.scene_graph import Scene, SceneNode
from poseforge.core.state import CameraConfig, PoseParameters
from poseforge.rendering.camera import Camera
from poseforge.rendering.lights import LightSetup
from poseforge.rendering.orbit_controls import BUTTON_LEFT, BUTTON_MIDDLE, OrbitControls
from poseforge.rendering.renderer import GLRenderer
from poseforge.scene.procedural_geometry import make_grid

logger = logging.getLogger(__name__)

GRID_SIZE = 20.0
GRID_DIVISIONS = 40

_ORBIT_BUTTONS = {
    Qt.MouseButton.LeftButton: BUTTON_LEFT,
    Qt.MouseButton.MiddleButton: BUTTON_MIDDLE,
}


def create_gl_format() -> QSurfaceFormat:
    """Create an OpenGL 3.3 core-profile surface format with multisampling."""
    fmt = QSurfaceFormat()
    fmt.setVersion(3, 3)
    fmt.setProfile(QSurfaceFormat.OpenGLContextProfile.CoreProfile)
    fmt.setSamples(4)
    fmt.setDepthBufferSize(24)
    fmt.setSwapBehavior(QSurfaceFormat.SwapBehavior.DoubleBuffer)
    return fmt


def _make_floor() -> SceneNode:
    node = SceneNode(name="floor_grid")
    node.mesh = MeshInstance(
        "floor_grid",
        make_grid(GRID_SIZE, GRID_DIVISIONS),
        Material.from_hex(0x222222, emissive=0x111111,
                          shininess=1.0, double_sided=True),
    )
    return node


class GLViewport(QOpenGLWidget):
    """OpenGL viewport that renders the posed skeleton over a floor grid.

    The widget owns the scene and the :class:`SkeletonRig`; callers feed it
    parameter snapshots through :meth:`apply_params` and camera settings
    through :meth:`set_camera_config`. Repaints run at ~60 fps from a QTimer
    started once the GL context exists.

    Signals
    -------
    camera_moved(tuple)
        New camera position after the user orbits or zooms.
    frame_rendered()
        Emitted after every painted frame.
    """

    camera_moved = Signal(tuple)
    frame_rendered = Signal()

    def __init__(self, skeleton: Skeleton, parent=None) -> None:
        super().__init__(parent)
        self.setFormat(create_gl_format())

        self.renderer: GLRenderer = GLRenderer()
        self.camera: Camera = Camera()
        self.orbit_controls: OrbitControls = OrbitControls(self.camera)
        self.lights: LightSetup = LightSetup()

        self.scene = Scene()
        self.scene.add(_make_floor())
        self.rig = SkeletonRig(skeleton)
        self.rig.attach(self.scene)

        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self.update)

        self._cleaned_up = False
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # ------------------------------------------------------------------
    # State inputs
    # ------------------------------------------------------------------

    def apply_params(self, params: PoseParameters) -> None:
        """Pose the rig; a failed pose leaves the previous frame's state."""
        self.rig.apply(params)
        self.update()

    def set_camera_config(self, config: CameraConfig) -> None:
        self.camera.apply_config(config)
        self.orbit_controls.sync_from_camera()
        self.update()

    def save_snapshot(self, path: str) -> bool:
        """Write the current framebuffer to an image file."""
        image = self.grabFramebuffer()
        ok = image.save(path)
        if ok:
            logger.info("Snapshot saved to %s", path)
        else:
            logger.warning("Could not save snapshot to %s", path)
        return ok

    # ------------------------------------------------------------------
    # QOpenGLWidget overrides
    # ------------------------------------------------------------------

    def initializeGL(self) -> None:
        try:
            logger.info("GLViewport: initialising OpenGL.")
            self.renderer.init_gl()
            self._timer.start()
        except Exception:
            logger.error("initializeGL failed:\n%s", traceback.format_exc())

    def resizeGL(self, w: int, h: int) -> None:
        """Qt passes logical dimensions; the framebuffer is scaled by the
        device pixel ratio on HiDPI displays."""
        dpr = self.devicePixelRatio()
        self.camera.set_aspect(w, h)
        self.renderer.resize(int(w * dpr), int(h * dpr))

    def paintGL(self) -> None:
        try:
            self.renderer.render(self.scene, self.camera, self.lights)
        except Exception:
            logger.error("paintGL failed:\n%s", traceback.format_exc())
        self.frame_rendered.emit()

    # ------------------------------------------------------------------
    # Mouse events -> orbit controls
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = _ORBIT_BUTTONS.get(event.button())
        pos = event.position()
        if button is not None:
            self.orbit_controls.on_mouse_press(pos.x(), pos.y(), button)
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        if self.orbit_controls.on_mouse_move(pos.x(), pos.y()):
            self.update()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self.orbit_controls.on_mouse_release()
        self._emit_camera_moved()
        event.accept()

    def wheelEvent(self, event: QWheelEvent) -> None:
        # angleDelta().y() is typically +/-120 per notch
        self.orbit_controls.on_scroll(event.angleDelta().y() / 120.0)
        self._emit_camera_moved()
        self.update()
        event.accept()

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Stop rendering and release every GL resource. Idempotent."""
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self._timer.stop()
        self.makeCurrent()
        try:
            self.rig.detach(release=self.renderer.remove_mesh)
            self.renderer.destroy()
        finally:
            self.doneCurrent()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _emit_camera_moved(self) -> None:
        self.camera_moved.emit(tuple(float(v) for v in self.camera.position))
