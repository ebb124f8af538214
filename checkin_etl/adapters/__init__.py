"""
Source and destination adapters.
"""
