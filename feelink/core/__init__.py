"""
Core
Settings, logging and exceptions
"""
