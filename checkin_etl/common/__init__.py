"""
Shared configuration, logging, models and exceptions.
"""
