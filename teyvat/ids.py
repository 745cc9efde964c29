"""Conversion between database player ids and the user ids shown to players."""

UID_PID_DIFF = 100000000


def pid_to_uid(pid: int) -> int:
    """Return the user id for a database player id."""
    return pid + UID_PID_DIFF


def uid_to_pid(uid: int) -> int:
    """Return the database player id for a user id."""
    return uid - UID_PID_DIFF