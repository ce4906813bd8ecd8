"""
Campus Ballot - Vote Admission & Eligibility Engine

Decision and aggregation core for a campus voting platform. For every
vote-cast attempt the engine decides, atomically and exactly once per
(voter, session, category), whether the vote is admitted:

- Session window: only active sessions accept votes
- Eligibility: voter department and level must match the session spec
- Candidate validity: ballots name candidates of the requested category
- Duplication: at most one accepted vote per voter per category
- Location: reported position must lie inside the session geofence

Committed records feed a read-side turnout aggregator.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
