"""Import and export of SMPL-X parameter files.

Supported imports:

- ``.json``: an object with any subset of the parameter fields.
- ``.npz``: a NumPy archive as written by common SMPL-X fitting tools.
  Arrays with a leading frame axis contribute their first frame.

Pickled ``.pkl`` files are refused, since loading them can execute
arbitrary code.
"""

import json
import logging
import zipfile
from pathlib import Path
from typing import Any, Union

import numpy as np

from poseforge.constants import BODY_POSE_SIZE, REJECTED_IMPORT_SUFFIXES, SUPPORTED_IMPORT_SUFFIXES
from poseforge.core.errors import ParameterFileError, UnsupportedFormatError
from poseforge.core.state import PARAM_SIZES, PoseParameters

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_parameter_file(path: PathLike) -> dict[str, Any]:
    """Read a parameter file and return the partial parameter dict it holds.

    Raises
    ------
    UnsupportedFormatError
        For ``.pkl`` and any other unrecognised extension.
    ParameterFileError
        When the file cannot be read or its contents are not usable.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in REJECTED_IMPORT_SUFFIXES:
        raise UnsupportedFormatError(
            f"{path.name}: pickle files are not supported; convert to .npz or .json"
        )
    if suffix not in SUPPORTED_IMPORT_SUFFIXES:
        raise UnsupportedFormatError(f"{path.name}: unsupported file type '{suffix}'")

    if suffix == ".json":
        data = _load_json(path)
    else:
        data = _load_npz(path)
    logger.info("Loaded %s (%s)", path.name, ", ".join(sorted(data)) or "no fields")
    return data


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ParameterFileError(f"{path.name}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParameterFileError(f"{path.name}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParameterFileError(
            f"{path.name}: expected a JSON object, got {type(data).__name__}"
        )
    return data


def _first_frame(arr: np.ndarray, size: int) -> np.ndarray:
    """Strip leading frame axes until the array fits one parameter vector."""
    while arr.ndim >= 2 and arr.size > size:
        arr = arr[0]
    return arr.ravel()


def _load_npz(path: Path) -> dict[str, Any]:
    try:
        archive = np.load(path, allow_pickle=False)
    except (OSError, EOFError, ValueError, zipfile.BadZipFile) as e:
        raise ParameterFileError(f"{path.name}: could not read archive: {e}") from e
    if not isinstance(archive, np.lib.npyio.NpzFile):
        raise ParameterFileError(f"{path.name}: not an .npz archive")

    data: dict[str, Any] = {}
    with archive:
        keys = set(archive.files)
        try:
            for name, size in PARAM_SIZES.items():
                if name not in keys:
                    continue
                arr = archive[name]
                if arr.dtype.kind not in "biuf":
                    raise ParameterFileError(f"{path.name}: '{name}' is not numeric")
                data[name] = _first_frame(arr, size).astype(np.float64).tolist()

            body_pose = data.get("body_pose")
            if (
                "global_orient" in keys
                and body_pose is not None
                and len(body_pose) == BODY_POSE_SIZE - 3
            ):
                orient = _first_frame(archive["global_orient"], 3).astype(np.float64)
                data["body_pose"] = orient[:3].tolist() + body_pose
        except ParameterFileError:
            raise
        except (OSError, EOFError, ValueError, zipfile.BadZipFile) as e:
            raise ParameterFileError(f"{path.name}: corrupt archive member: {e}") from e

    if not data:
        raise ParameterFileError(
            f"{path.name}: archive has no SMPL-X parameter arrays "
            f"(found: {', '.join(sorted(keys)) or 'nothing'})"
        )
    return data


def save_parameter_file(params: PoseParameters, path: PathLike) -> None:
    """Write *params* as indented JSON that :func:`load_parameter_file` reads back."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(params.to_dict(), f, indent=2)
        f.write("\n")
    logger.info("Saved parameters to %s", path)
