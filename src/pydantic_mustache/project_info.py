"""Project information utilities."""

from pathlib import Path
import tomllib

from pydantic import BaseModel

_UNAVAILABLE = "Version not available"


class ProjectInfo(BaseModel):
    """Project metadata read from pyproject.toml."""

    name: str
    description: str
    version: str


def get_project_info(pyproject_path: Path | None = None) -> ProjectInfo:
    """Get project information from a pyproject.toml file.

    Args:
        pyproject_path: File to read (default: the project root's pyproject.toml)

    Returns:
        ProjectInfo: Name, description and version, with placeholders when
        the file is absent or unreadable.

    """
    if pyproject_path is None:
        # src/pydantic_mustache/project_info.py -> project root
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        return ProjectInfo(
            name="pydantic-mustache",
            description="Project description not available",
            version=_UNAVAILABLE,
        )

    try:
        with pyproject_path.open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError) as e:
        return ProjectInfo(
            name="pydantic-mustache",
            description=f"Error reading project info: {e}",
            version=_UNAVAILABLE,
        )

    return ProjectInfo(
        name=project.get("name", "pydantic-mustache"),
        description=project.get("description", "Project description not available"),
        version=project.get("version", _UNAVAILABLE),
    )
