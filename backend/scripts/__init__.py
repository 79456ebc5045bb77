"""
Command-line hosts for the risk estimator.
"""
