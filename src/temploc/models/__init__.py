"""temploc data models.

- ResolvedResource: a located template source with its open byte stream
"""

from temploc.models.resource import ResolvedResource

__all__ = ["ResolvedResource"]
