"""PoseForge application entry point.

Wires together state, events, the skeleton viewport, the AI worker and the UI.
"""

# Disable PyOpenGL's per-call error checking BEFORE any GL imports.
# macOS Metal translation layer leaves stale GL errors that cause
# PyOpenGL's automatic error checker to raise on every GL call.
import OpenGL
OpenGL.ERROR_CHECKING = False

import argparse
import logging
import sys
from dataclasses import replace

from PySide6.QtGui import QSurfaceFormat
from PySide6.QtWidgets import QApplication

from poseforge.ai.pose_service import PoseSynthesizer, RequestTracker, result_to_partial
from poseforge.ai.pose_worker import PoseSynthesisWorker, stop_workers
from poseforge.body.randomizer import random_parameters
from poseforge.body.skeleton import build_skeleton
from poseforge.core.config import AppConfig
from poseforge.core.errors import ParameterFileError
from poseforge.core.events import EventBus, EventType
from poseforge.core.state import CameraConfig, StateManager
from poseforge.loaders.parameter_files import load_parameter_file, save_parameter_file
from poseforge.rendering.gl_widget import GLViewport, create_gl_format

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="poseforge",
        description="Interactive SMPL-X body pose viewer and editor.",
    )
    parser.add_argument("--model", help="Gemini model id for AI pose synthesis")
    parser.add_argument("--params", metavar="FILE", help="Parameter file (.json/.npz) to load at startup")
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Launch the PoseForge application."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(name)s: %(message)s")

    config = AppConfig.from_env().with_overrides(model=args.model)
    if not config.ai_enabled:
        logger.info("No API key in environment; AI pose synthesis disabled")

    # Set OpenGL format before creating QApplication
    QSurfaceFormat.setDefaultFormat(create_gl_format())
    app = QApplication(sys.argv[:1])

    # Core systems
    event_bus = EventBus()
    state = StateManager(event_bus)
    skeleton = build_skeleton()

    gl_widget = GLViewport(skeleton)

    # Imported here to keep Qt widget construction after QApplication
    from poseforge.ui.main_window import MainWindow
    window = MainWindow(event_bus, state, gl_widget, ai_enabled=config.ai_enabled)

    def notify(message: str, error: bool = False) -> None:
        event_bus.publish(EventType.NOTIFY, message=message, error=error)

    # ── State -> viewport ──
    event_bus.subscribe(EventType.PARAMS_CHANGED, lambda params, **kw: gl_widget.apply_params(params))
    event_bus.subscribe(EventType.CAMERA_CHANGED, lambda camera, **kw: gl_widget.set_camera_config(camera))

    # ── Parameter edits ──
    def on_component_set(field: str, index: int, value: float, **kw):
        state.set_params(state.params.replace_value(field, index, value))

    def on_randomize(**kw):
        state.set_params(random_parameters())

    def on_reset(**kw):
        state.reset()

    event_bus.subscribe(EventType.POSE_COMPONENT_SET, on_component_set)
    event_bus.subscribe(EventType.PARAMS_RANDOMIZE, on_randomize)
    event_bus.subscribe(EventType.PARAMS_RESET, on_reset)

    # ── Camera edits ──
    event_bus.subscribe(
        EventType.CAMERA_FOV_SET,
        lambda fov, **kw: state.set_camera(state.camera.with_fov(fov)),
    )
    event_bus.subscribe(
        EventType.CAMERA_POSITION_SET,
        lambda axis, value, **kw: state.set_camera(state.camera.with_position_axis(axis, value)),
    )
    event_bus.subscribe(EventType.CAMERA_RESET, lambda **kw: state.set_camera(CameraConfig()))
    gl_widget.camera_moved.connect(
        lambda pos: state.set_camera(replace(state.camera, position=pos))
    )

    def count_frame():
        state.frame_count += 1

    gl_widget.frame_rendered.connect(count_frame)

    # ── Files ──
    def on_import(path: str, **kw):
        try:
            partial = load_parameter_file(path)
            state.merge_params(partial)
        except ParameterFileError as e:
            logger.warning("Import failed: %s", e)
            notify(f"Import failed: {e}", error=True)
            return
        notify(f"Loaded {path}")

    def on_export(path: str, **kw):
        try:
            save_parameter_file(state.params, path)
        except OSError as e:
            logger.warning("Export failed: %s", e)
            notify(f"Export failed: {e}", error=True)
            return
        notify(f"Exported parameters to {path}")

    def on_snapshot(path: str, **kw):
        if gl_widget.save_snapshot(path):
            notify(f"Snapshot saved to {path}")
        else:
            notify(f"Could not save snapshot to {path}", error=True)

    event_bus.subscribe(EventType.FILE_IMPORT_REQUESTED, on_import)
    event_bus.subscribe(EventType.FILE_EXPORT_REQUESTED, on_export)
    event_bus.subscribe(EventType.SNAPSHOT_REQUESTED, on_snapshot)

    # ── AI pose synthesis ──
    synthesizer = PoseSynthesizer(config)
    tracker = RequestTracker()
    workers: set[PoseSynthesisWorker] = set()

    def set_busy(busy: bool) -> None:
        state.ai_busy = busy
        event_bus.publish(EventType.AI_BUSY_CHANGED, busy=busy)

    def on_pose_ready(seq: int, result: dict):
        if not tracker.is_current(seq):
            logger.info("Dropping stale AI response %d (latest is %d)", seq, tracker.latest)
            return
        set_busy(False)
        try:
            state.merge_params(result_to_partial(result))
        except ParameterFileError as e:
            logger.warning("AI result could not be applied: %s", e)
            notify(f"AI result could not be applied: {e}", error=True)
            return
        notify("AI pose applied")

    def on_worker_done(worker: PoseSynthesisWorker):
        workers.discard(worker)
        worker.deleteLater()

    def on_ai_requested(prompt: str, **kw):
        prompt = prompt.strip()
        if not prompt:
            return
        seq = tracker.issue()
        worker = PoseSynthesisWorker(synthesizer, prompt, seq)
        worker.pose_ready.connect(on_pose_ready)
        worker.finished.connect(lambda w=worker: on_worker_done(w))
        workers.add(worker)
        set_busy(True)
        logger.info("AI request %d issued", seq)
        worker.start()

    event_bus.subscribe(EventType.AI_POSE_REQUESTED, on_ai_requested)

    # ── Shutdown ──
    def on_quit():
        stop_workers(workers, int(config.request_timeout_s * 1000))
        gl_widget.cleanup()

    app.aboutToQuit.connect(on_quit)

    # Initial state
    gl_widget.apply_params(state.params)
    gl_widget.set_camera_config(state.camera)
    if args.params:
        on_import(args.params)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
