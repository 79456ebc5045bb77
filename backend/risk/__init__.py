"""
Risk scoring boundary for the montelukast risk estimator.

Design intent:
- Convert validated patient/medication inputs into a clamped risk fraction and label.
- Keep reference tables immutable and rules deterministic.
- Avoid diagnosis or treatment recommendation outputs; this is a screening aid.
"""
