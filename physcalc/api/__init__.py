"""
REST API for the calculator.
"""
