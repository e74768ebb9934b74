"""adb server lifecycle helpers."""
