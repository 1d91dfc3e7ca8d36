"""
Models package for the Banker's Algorithm Evaluator.
Contains the matrix store and the result types returned to the shell.
"""
