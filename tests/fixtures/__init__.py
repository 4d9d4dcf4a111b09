"""Test fixtures for temploc.

Constants shared by the unit and integration tests.
"""

# Fixed modification time given to template sources written by tests
BASE_MTIME = 1_700_000_000
