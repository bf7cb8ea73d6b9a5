"""
Common utilities module
"""
