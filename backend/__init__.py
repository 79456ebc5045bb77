"""
Montelukast risk estimator backend package.

Design intent:
- Keep the scoring core (risk) free of any hosting concerns.
- Host thin API/CLI surfaces that validate input and render results.
"""
