import toml

from response_service.core.paths import get_project_root_dir


def get_project_version() -> str:
    root_dir = get_project_root_dir()
    with open(root_dir / "pyproject.toml") as f:
        data = toml.load(f)

    version = data.get("project", {}).get("version")

    if not version:
        raise ValueError("Version not found in pyproject.toml")

    assert isinstance(version, str)
    return version
