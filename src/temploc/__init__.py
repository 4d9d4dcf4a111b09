"""temploc - multi-root template source lookup.

temploc locates template sources across an ordered set of search roots and
tells the host templating engine when a previously loaded source has changed.

Core guarantees:
- Sanitization: template names never escape the logical template namespace
- First match wins: roots are searched in configured order
- Provenance: the root that supplied each name is remembered per loader
- Fail-safe staleness: any doubt about a cached source means "reload"
"""

__version__ = "0.1.0"
__author__ = "temploc Contributors"
