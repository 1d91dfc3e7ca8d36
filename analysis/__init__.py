"""
Analysis package for the Banker's Algorithm Evaluator.
Contains the request log.
"""
