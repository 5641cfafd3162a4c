"""
forge command-line interface.
"""
