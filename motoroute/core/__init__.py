"""
Core infrastructure: database access, session tokens, exceptions, error
handlers, logging and dependency providers.
"""
