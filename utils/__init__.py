"""
Utilities package for the Banker's Algorithm Evaluator.
Contains the console logger and the scenario loader.
"""
