"""
Shared utilities: exceptions, error handling and logging
"""
