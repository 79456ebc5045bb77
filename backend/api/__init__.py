"""
API orchestration boundary for the risk estimator.

Design intent:
- Expose thin, typed endpoints for assessment and reference lookup.
- Keep request validation explicit and failure modes predictable.
"""
