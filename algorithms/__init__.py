"""
Algorithms package for the Banker's Algorithm Evaluator.
Contains Need derivation, the safety algorithm, and request handling.
"""
