"""Wire protocol spoken with the adb server."""
