"""
Deuce — Point-by-point tennis match scoring
===========================================
Scores a match under a configurable rule format, tracks service rotation,
break points, match points and changeovers, supports full undo and computes
post-match statistics.
"""

__version__ = "1.0.0"
__app_name__ = "Deuce"
