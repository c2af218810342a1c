"""User-facing diagnostics for a blocked activation."""

from labgit.settings import DEFAULT_LIST_COMMAND, DEFAULT_UPGRADE_COMMAND

BLOCKED_TITLE = "Failed to load the jupyterlab-git server extension"


def extension_unavailable_message(
    upgrade_command: str = DEFAULT_UPGRADE_COMMAND,
    list_command: str = DEFAULT_LIST_COMMAND,
) -> str:
    return (
        "Git server extension is unavailable. Please ensure you have installed the "
        f"JupyterLab Git server extension by running: {upgrade_command}. "
        f"To confirm that the server extension is installed, run: {list_command}."
    )


def tool_not_found_message(floor: int) -> str:
    return f"git command not found - please ensure you have Git > {floor} installed"


def tool_version_too_low_message(floor: int, tool_version: str) -> str:
    return f"git command version must be > {floor}; got {tool_version}."


def version_mismatch_message(
    declared_client_version: str,
    server_package_version: str,
    upgrade_command: str = DEFAULT_UPGRADE_COMMAND,
) -> str:
    return (
        "The versions of the JupyterLab Git server frontend and backend do not match. "
        f"The @jupyterlab/git frontend extension has version: {declared_client_version} "
        f"while the python package has version {server_package_version}. "
        "Please install identical version of jupyterlab-git Python package and the "
        f"@jupyterlab/git extension. Try running: {upgrade_command}"
    )
