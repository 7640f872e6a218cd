"""OpenGL 3.3 core-profile viewport for the proxy skeleton.

Only :mod:`~poseforge.rendering.gl_widget` and the modules it draws with
need a GL context. :mod:`~poseforge.rendering.camera` and
:mod:`~poseforge.rendering.orbit_controls` are plain numpy and import
without one.
"""
