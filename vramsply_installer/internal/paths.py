from pathlib import Path


# ---------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------

def get_app_data_dir() -> Path:
    """
    Returns the agent's data directory (~/.vram-supply).

    Shared with the installed agent, which keeps its models here too.
    """
    return Path.home() / ".vram-supply"


def get_default_install_dir() -> Path:
    """
    User-local binary directory the agent is installed into.

    Not created here: the installer creates it only after verification.
    """
    return Path.home() / ".local" / "bin"


# ---------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------

def get_log_dir() -> Path:
    return get_app_data_dir() / "logs"


def get_installer_log_file() -> Path:
    """
    JSON log file for installer runs. Its directory is created by
    setup_logging.
    """
    return get_log_dir() / "installer.log.json"


# ---------------------------------------------------------------------
# Debug
# ---------------------------------------------------------------------

if __name__ == "__main__":
    print("App Data Dir:", get_app_data_dir())
    print("Install Dir:", get_default_install_dir())
    print("Installer Log File:", get_installer_log_file())
