"""
Recipe search engine.

Responsibilities:
- Fetch the recipe corpus from the upstream recipe API (or a local snapshot).
- Normalize query and recipe text so matching ignores case and accents.
- Score and rank matching recipes using additive relevance heuristics.
- Format raw records into recipe summaries ready for API serialisation.
- Cache results per query with a fixed time-to-live.
"""
