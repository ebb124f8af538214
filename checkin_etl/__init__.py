"""
Check-in visit quota reconciler

Reads monthly visitor check-in CSV files, tops visitors up to their
configured visit quota with synthesized check-ins, and writes a sorted,
normalized CSV per input file.
"""

__version__ = "0.3.0"
