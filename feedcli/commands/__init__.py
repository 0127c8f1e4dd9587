"""
Command implementations for the feedcodec CLI.
"""
