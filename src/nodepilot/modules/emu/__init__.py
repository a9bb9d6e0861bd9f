from .adb import Adb, AdbError, escape_input_text
from .host import AdbHost, PRESS_AS_SWIPE_MS
from .root import AdbNode, AdbRootProvider

__all__ = [
    "Adb",
    "AdbError",
    "escape_input_text",
    "AdbHost",
    "PRESS_AS_SWIPE_MS",
    "AdbNode",
    "AdbRootProvider",
]
