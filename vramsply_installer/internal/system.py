# Host detection, kept separate so tests can swap in any OS/arch pair.
import platform


def get_os_info() -> str:
    return platform.system()


def get_cpu_arch() -> str:
    return platform.machine()


if __name__ == "__main__":
    print(f"OS: {get_os_info()}")
    print(f"Architecture: {get_cpu_arch()}")
