"""
Command-Line Interface Package

Click-based entry point for the finsync tool.
"""
